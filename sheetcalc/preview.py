"""Keep an annotation set in step with a live text-editing host.

The host owns the buffer and the cursor; this module only decides when the
annotations are stale and rebuilds them. Any text or selection change triggers
a full recompute, which is cheap (linear in document length) and always
correct because the running total is replayed from the start of the document.

Typical flow:
    1. The host implements TextHostInterface (get_text / get_selection)
    2. LivePreview(host) computes the initial AnnotationSet
    3. The host forwards every change notification to LivePreview.update()
    4. The host renders LivePreview.annotations
"""

from abc import ABC, abstractmethod
from enum import Enum

from pydantic import BaseModel

from sheetcalc.annotation import AnnotationSet
from sheetcalc.config import EngineConfig
from sheetcalc.logging import get_logger
from sheetcalc.pipeline import compute_annotations
from sheetcalc.spans import Selection

logger = get_logger(__name__)


class ChangeKind(str, Enum):
    """Kinds of notification a host may send."""

    TEXT_CHANGED = "text_changed"
    SELECTION_CHANGED = "selection_changed"
    FOCUS_CHANGED = "focus_changed"
    VIEWPORT_CHANGED = "viewport_changed"


RECOMPUTE_ON = frozenset({ChangeKind.TEXT_CHANGED, ChangeKind.SELECTION_CHANGED})


class ChangeEvent(BaseModel):
    """One host notification; a single edit may change text and selection together."""

    model_config = {"frozen": True}

    kinds: frozenset[ChangeKind]

    @classmethod
    def of(cls, *kinds: ChangeKind) -> "ChangeEvent":
        return cls(kinds=frozenset(kinds))


class TextHostInterface(ABC):
    """The text-editing surface the annotations are drawn on."""

    @abstractmethod
    def get_text(self) -> str:
        """Return the full current document content."""

    @abstractmethod
    def get_selection(self) -> Selection:
        """Return the main selection (collapsed when it is just a caret)."""


def needs_recompute(event: ChangeEvent) -> bool:
    """True when the event can change what the annotations should show."""
    return bool(event.kinds & RECOMPUTE_ON)


class LivePreview:
    """Holds the current annotation set for one host and refreshes it on demand.

    Example:
        ```python
        preview = LivePreview(host)
        ...
        if preview.update(ChangeEvent.of(ChangeKind.SELECTION_CHANGED)):
            host.redraw(preview.annotations)
        ```
    """

    def __init__(self, host: TextHostInterface, config: EngineConfig | None = None):
        self.host = host
        self.config = config or EngineConfig()
        self.recompute_count = 0
        self.annotations = self.recompute()

    @property
    def total(self) -> int:
        """Running total after the last total marker, for a footer."""
        return self.annotations.running_total

    def recompute(self) -> AnnotationSet:
        self.annotations = compute_annotations(
            self.host.get_text(),
            self.host.get_selection(),
            self.config,
        )
        self.recompute_count += 1
        return self.annotations

    def update(self, event: ChangeEvent) -> bool:
        """Rebuild the annotations if ``event`` requires it.

        Returns:
            True if the annotations were rebuilt.
        """
        if not needs_recompute(event):
            logger.debug("Ignoring %s", sorted(k.value for k in event.kinds), pprint=False)
            return False
        self.recompute()
        return True
