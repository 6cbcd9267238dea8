"""Percentage modifiers written in prose ahead of a bracket expression.

A modifier is a signed integer such as ``+10`` or ``-25`` anywhere in plain
text. Modifiers between two bracket spans all apply to the second span and are
folded into one fraction: ``"Bless +10, rage +15 [100]"`` yields ``0.25``.
"""

import re
from typing import Iterator

from sheetcalc.spans import ModifierToken

MODIFIER_RE = re.compile(r"[+-][0-9]+")

DEFAULT_MODIFIER_FLOOR = -0.8


def find_modifiers(text: str, start: int = 0, end: int | None = None) -> Iterator[ModifierToken]:
    """Yield modifier tokens in ``text[start:end]`` with document offsets."""
    if end is None:
        end = len(text)
    for match in MODIFIER_RE.finditer(text, start, end):
        yield ModifierToken(start=match.start(), literal=match.group())


def collect_modifier(
    text: str,
    start: int,
    end: int,
    floor: float = DEFAULT_MODIFIER_FLOOR,
) -> float:
    """Sum every modifier in ``text[start:end]`` into a single signed fraction.

    The sum is floored at ``floor`` (-80% by default) so that a stack of
    penalties never wipes out more than that share of a value. There is no
    upper bound. Returns 0.0 when the range holds no modifiers.

    Raises:
        ValueError: If ``start > end``.
    """
    if start > end:
        raise ValueError(f"modifier range start {start} is after end {end}")
    tokens = list(find_modifiers(text, start, end))
    try:
        fraction = sum(token.value for token in tokens) / 100
    except (OverflowError, ValueError):
        # sum too large for a float or a token past the int digit limit
        fraction = sum(token.fraction for token in tokens)
    if fraction < floor:
        fraction = floor
    return fraction
