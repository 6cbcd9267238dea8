"""Forward-only tokenizer for ``[...]`` expressions in free-form text.

The scanner looks for the next ``[`` and closes the span at the first ``]``
after it. Brackets do not nest: an inner ``[`` is kept as part of the span's
inner text (``"[a [5]"`` is a single span with inner ``"a [5"``). Scanning
resumes right after the closing bracket, so spans never overlap.

Edge cases:
    - ``[]`` is not a span; scanning continues from the character after ``[``.
    - A ``[`` with no ``]`` anywhere after it produces nothing, and since no
      later ``[`` could be closed either, the scan ends there.
"""

from typing import Iterator

from sheetcalc.spans import BracketSpan

OPEN = "["
CLOSE = "]"


class BracketScanner:
    """Iterate over the bracket spans of one document text.

    Every call to ``iter()`` starts a fresh scan from offset 0, so a scanner
    can be iterated any number of times and always yields the same spans.

    Example:
        ```python
        for span in BracketScanner("Attack [2*6] +10 [40]"):
            print(span.start, span.end, span.inner)
        ```
    """

    def __init__(self, text: str):
        self.text = text

    def __iter__(self) -> Iterator[BracketSpan]:
        text = self.text
        pos = 0
        while True:
            start = text.find(OPEN, pos)
            if start == -1:
                return
            close = text.find(CLOSE, start + 1)
            if close == -1:
                return
            if close == start + 1:
                pos = start + 1
                continue
            yield BracketSpan(start=start, end=close + 1, inner=text[start + 1 : close])
            pos = close + 1

    def gaps(self) -> Iterator[tuple[int, int]]:
        """Yield the ``(start, end)`` ranges of plain text between spans."""
        pos = 0
        for span in self:
            if span.start > pos:
                yield pos, span.start
            pos = span.end
        if pos < len(self.text):
            yield pos, len(self.text)


def scan_brackets(text: str) -> Iterator[BracketSpan]:
    """Yield the bracket spans of ``text`` in document order."""
    return iter(BracketScanner(text))
