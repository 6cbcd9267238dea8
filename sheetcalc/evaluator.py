"""Sandboxed arithmetic evaluation for bracket contents.

Only decimal literals, the binary operators ``+ - * /``, unary ``+``/``-`` and
parentheses are understood. Anything else (names, calls, attribute access,
exponents, strings) is rejected at tokenization time, so no input can reach
code execution or any state outside this module.

Values are IEEE doubles, which keeps results identical to what a spreadsheet or
browser calculator would show for the same text (``0.1 + 0.2`` is
``0.30000000000000004``).
"""

import math
import re

_TOKEN_RE = re.compile(r"\s*(?:(?P<number>[0-9]+(?:\.[0-9]*)?|\.[0-9]+)|(?P<op>[-+*/()]))")

_BINARY_PRECEDENCE = {"+": 1, "-": 1, "*": 2, "/": 2}
_UNARY_PRECEDENCE = 3


class EvaluationError(ValueError):
    """Raised when bracket text is not a finite arithmetic expression."""


def _tokenize(expr: str) -> list[str]:
    tokens: list[str] = []
    pos = 0
    end = len(expr.rstrip())
    while pos < end:
        match = _TOKEN_RE.match(expr, pos)
        if match is None or match.end() == pos:
            raise EvaluationError(f"unexpected character {expr[pos:pos + 1]!r} at {pos}")
        tokens.append(match.group("number") or match.group("op"))
        pos = match.end()
    if not tokens:
        raise EvaluationError("empty expression")
    return tokens


class _Parser:
    """Precedence-climbing parser that evaluates as it goes."""

    def __init__(self, tokens: list[str]):
        self.tokens = tokens
        self.idx = 0

    def _peek(self) -> str | None:
        return self.tokens[self.idx] if self.idx < len(self.tokens) else None

    def _next(self) -> str:
        tok = self._peek()
        if tok is None:
            raise EvaluationError("unexpected end of expression")
        self.idx += 1
        return tok

    def parse(self) -> float:
        value = self._expression(0)
        if self._peek() is not None:
            raise EvaluationError(f"unexpected token {self._peek()!r}")
        return value

    def _operand(self) -> float:
        tok = self._next()
        if tok in ("+", "-"):
            value = self._expression(_UNARY_PRECEDENCE)
            return value if tok == "+" else -value
        if tok == "(":
            value = self._expression(0)
            if self._next() != ")":
                raise EvaluationError("missing )")
            return value
        if tok in _BINARY_PRECEDENCE or tok == ")":
            raise EvaluationError(f"unexpected operator {tok!r}")
        return float(tok)

    def _expression(self, min_prec: int) -> float:
        left = self._operand()
        while True:
            op = self._peek()
            prec = _BINARY_PRECEDENCE.get(op) if op is not None else None
            if prec is None or prec < min_prec:
                return left
            self.idx += 1
            right = self._expression(prec + 1)
            left = _apply(op, left, right)


def _apply(op: str, left: float, right: float) -> float:
    if op == "+":
        return left + right
    if op == "-":
        return left - right
    if op == "*":
        return left * right
    if right == 0:
        raise EvaluationError("division by zero")
    return left / right


def evaluate(expr: str) -> float:
    """Evaluate an arithmetic expression.

    Args:
        expr: Text captured between brackets, e.g. ``"10 * 5 * 2"``

    Returns:
        The finite numeric value of the expression.

    Raises:
        EvaluationError: If the text is not a well-formed arithmetic expression,
            divides by zero, or produces an infinite/NaN result.
    """
    try:
        value = _Parser(_tokenize(expr)).parse()
    except RecursionError as exc:
        raise EvaluationError("expression nested too deeply") from exc
    if not math.isfinite(value):
        raise EvaluationError("result is not finite")
    return value


def try_evaluate(expr: str) -> float | None:
    """Like evaluate(), but returns None instead of raising."""
    try:
        return evaluate(expr)
    except EvaluationError:
        return None
