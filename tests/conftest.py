"""Test fixtures and a minimal in-memory text host.

This module provides:
- FakeTextHost, a TextHostInterface whose text and selection tests mutate directly
- A small character-sheet document exercising modifiers, totals and prose brackets
- Helpers for locating spans by their source text
"""

import pytest

from sheetcalc.config import EngineConfig
from sheetcalc.preview import TextHostInterface
from sheetcalc.spans import Selection

SHEET = (
    "Longsword attack, Bless +10, Rage +15 [40]\n"
    "Off-hand dagger [12 + 4]\n"
    "Round damage [total]\n"
    "Cursed -50 -45 [100]\n"
    "Notes [see page 12]\n"
    "Tail [2*3]\n"
)


class FakeTextHost(TextHostInterface):
    """In-memory stand-in for an editor buffer."""

    def __init__(self, text: str = "", selection: Selection | None = None):
        self.text = text
        self.selection = selection or Selection.caret(0)
        self.text_reads = 0

    def get_text(self) -> str:
        self.text_reads += 1
        return self.text

    def get_selection(self) -> Selection:
        return self.selection

    def type_at_end(self, chunk: str) -> None:
        self.text += chunk
        self.selection = Selection.caret(len(self.text))


def span_offsets(text: str, raw: str) -> tuple[int, int]:
    """Return ``(start, end)`` of the first occurrence of ``raw`` in ``text``."""
    start = text.index(raw)
    return start, start + len(raw)


@pytest.fixture
def sheet_text() -> str:
    return SHEET


@pytest.fixture
def default_config() -> EngineConfig:
    return EngineConfig()


@pytest.fixture
def host(sheet_text) -> FakeTextHost:
    """Host showing the sample sheet with the caret at the very end."""
    return FakeTextHost(sheet_text, Selection.caret(len(sheet_text)))
