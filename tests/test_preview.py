"""Tests for the recompute trigger and the LivePreview host loop."""

import pytest

from sheetcalc.annotation import DisplayMode
from sheetcalc.config import EngineConfig
from sheetcalc.preview import ChangeEvent, ChangeKind, LivePreview, TextHostInterface, needs_recompute
from sheetcalc.spans import Selection

from tests.conftest import FakeTextHost


class TestNeedsRecompute:
    """Test the recompute trigger policy."""

    @pytest.mark.parametrize(
        "kinds, expected",
        [
            ({ChangeKind.TEXT_CHANGED}, True),
            ({ChangeKind.SELECTION_CHANGED}, True),
            ({ChangeKind.TEXT_CHANGED, ChangeKind.SELECTION_CHANGED}, True),
            ({ChangeKind.FOCUS_CHANGED}, False),
            ({ChangeKind.VIEWPORT_CHANGED, ChangeKind.FOCUS_CHANGED}, False),
            (set(), False),
        ],
    )
    def test_policy(self, kinds, expected):
        """Test which change kinds trigger a recompute."""
        assert needs_recompute(ChangeEvent(kinds=frozenset(kinds))) is expected

    def test_event_factory(self):
        """Test building change events."""
        event = ChangeEvent.of(ChangeKind.TEXT_CHANGED, ChangeKind.SELECTION_CHANGED)
        assert event.kinds == {ChangeKind.TEXT_CHANGED, ChangeKind.SELECTION_CHANGED}


class TestLivePreview:
    """Test LivePreview against a fake text host."""

    def test_initial_compute(self, host):
        """Test computing annotations on creation."""
        preview = LivePreview(host)
        assert preview.recompute_count == 1
        assert preview.total == 26
        assert preview.annotations.by_mode(DisplayMode.REPLACE_WITH_TOTAL)[0].content == "66"

    def test_text_change_rebuilds(self):
        """Test rebuilding after a text change."""
        host = FakeTextHost("Damage [10]")
        preview = LivePreview(host)

        host.type_at_end(" +50 [20] [total]")
        assert preview.update(ChangeEvent.of(ChangeKind.TEXT_CHANGED)) is True

        totals = preview.annotations.by_mode(DisplayMode.REPLACE_WITH_TOTAL)
        assert [a.content for a in totals] == ["40"]
        assert preview.recompute_count == 2

    def test_selection_change_reveals_and_restores(self):
        """Test revealing and restoring as the selection moves."""
        text = "Attack [2*6] done"
        host = FakeTextHost(text, Selection.caret(len(text)))
        preview = LivePreview(host)
        assert preview.annotations.annotations[0].mode == DisplayMode.REPLACE_WITH_COMPUTED

        host.selection = Selection.caret(9)
        preview.update(ChangeEvent.of(ChangeKind.SELECTION_CHANGED))
        assert preview.annotations.annotations[0].mode == DisplayMode.REVEAL

        host.selection = Selection.caret(len(text))
        preview.update(ChangeEvent.of(ChangeKind.SELECTION_CHANGED))
        assert preview.annotations.annotations[0].mode == DisplayMode.REPLACE_WITH_COMPUTED

    def test_irrelevant_event_ignored(self, host):
        """Test ignoring events that need no recompute."""
        preview = LivePreview(host)
        before = preview.annotations
        reads = host.text_reads

        assert preview.update(ChangeEvent.of(ChangeKind.FOCUS_CHANGED)) is False
        assert preview.annotations is before
        assert host.text_reads == reads

    def test_recompute_is_idempotent(self, host):
        """Test that recomputing unchanged text gives the same set."""
        preview = LivePreview(host)
        first = preview.annotations
        preview.update(ChangeEvent.of(ChangeKind.SELECTION_CHANGED))
        assert preview.annotations == first

    def test_total_replays_from_start(self):
        """Editing an early value changes a later total; nothing is cached between passes."""
        host = FakeTextHost("[10] [5] [total]")
        preview = LivePreview(host)
        host.text = "[11] [5] [total]"
        preview.update(ChangeEvent.of(ChangeKind.TEXT_CHANGED))
        (total,) = preview.annotations.by_mode(DisplayMode.REPLACE_WITH_TOTAL)
        assert total.content == "16"

    def test_config_passed_through(self):
        """Test that the config reaches the pipeline."""
        host = FakeTextHost("[3] [sum]", Selection.caret(1))
        preview = LivePreview(host, EngineConfig(total_keyword="sum", reveal_on_cursor=False))
        modes = [a.mode for a in preview.annotations.annotations]
        assert modes == [DisplayMode.REPLACE_WITH_COMPUTED, DisplayMode.REPLACE_WITH_TOTAL]

    def test_host_interface_is_abstract(self):
        """Test that the host interface cannot be instantiated."""
        with pytest.raises(TypeError):
            TextHostInterface()
