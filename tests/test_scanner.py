"""Tests for the bracket scanner.

This module verifies:
- Spans come out in document order with correct half-open offsets
- The first ``]`` closes a span, so brackets never nest
- Empty and unmatched brackets produce no span
- Each iteration is an independent scan
"""

from sheetcalc.scanner import BracketScanner, scan_brackets


def spans_of(text: str) -> list[tuple[int, int, str]]:
    return [(s.start, s.end, s.inner) for s in scan_brackets(text)]


class TestScanBrackets:
    """Test finding bracket spans."""

    def test_no_brackets(self):
        """Test text without brackets."""
        assert spans_of("just some prose +10") == []

    def test_single_span(self):
        """Test a single span."""
        text = "Advantage, Modifier +10 [10*5*2]"
        (span,) = scan_brackets(text)

        assert span.inner == "10*5*2"
        assert text[span.start : span.end] == "[10*5*2]"
        assert span.raw == "[10*5*2]"

    def test_multiple_spans_in_order(self):
        """Test that spans come back in document order."""
        text = "[10] [5] [total]"
        assert spans_of(text) == [(0, 4, "10"), (5, 8, "5"), (9, 16, "total")]

    def test_adjacent_spans(self):
        """Test spans with nothing between them."""
        assert spans_of("[1][2]") == [(0, 3, "1"), (3, 6, "2")]

    def test_spans_cross_lines(self):
        """Test a span containing a newline."""
        assert spans_of("[1 +\n2]") == [(0, 7, "1 +\n2")]

    def test_inner_open_bracket_is_literal(self):
        """No nesting: the first ] closes the span opened by the first [."""
        assert spans_of("[a [5] b]") == [(0, 6, "a [5")]

    def test_stray_close_bracket_ignored(self):
        """Test a close bracket with no opener."""
        assert spans_of("] x [3] ]") == [(4, 7, "3")]

    def test_empty_brackets_are_not_spans(self):
        """Test that [] is not a span."""
        assert spans_of("[] [4]") == [(3, 6, "4")]

    def test_empty_then_close(self):
        """'[]]' holds no span: the second ] has no opener left."""
        assert spans_of("[]]") == []

    def test_open_bracket_as_inner(self):
        """Test an open bracket as the only inner text."""
        assert spans_of("[[]") == [(0, 3, "[")]

    def test_unmatched_open_ends_scan(self):
        """Test an open bracket that is never closed."""
        assert spans_of("[7] then [unclosed") == [(0, 3, "7")]

    def test_unmatched_open_before_span_absorbs_it(self):
        """Test an unclosed bracket swallowing a later span."""
        assert spans_of("[oops [7]") == [(0, 9, "oops [7")]


class TestBracketScanner:
    """Test the BracketScanner iterator."""

    def test_restartable(self):
        """Test iterating a scanner twice."""
        scanner = BracketScanner("[1] and [2]")
        assert list(scanner) == list(scanner)
        assert len(list(scanner)) == 2

    def test_lazy(self):
        """Test that spans are found lazily."""
        spans = iter(BracketScanner("[1] [2] [3]"))
        assert next(spans).inner == "1"
        assert next(spans).inner == "2"

    def test_gaps_cover_plain_text(self):
        """Test the plain text between spans."""
        text = "a [1] b [2]"
        gaps = list(BracketScanner(text).gaps())
        assert gaps == [(0, 2), (5, 8)]
        assert [text[s:e] for s, e in gaps] == ["a ", " b "]

    def test_gaps_without_spans(self):
        """Test gaps in text without spans."""
        assert list(BracketScanner("plain").gaps()) == [(0, 5)]
        assert list(BracketScanner("").gaps()) == []
