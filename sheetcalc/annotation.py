"""Evaluation results and the display annotations handed to the text host.

The pipeline first classifies every bracket span into a ``SpanResult`` and then
flattens those results, together with modifier styling, into an
``AnnotationSet``: an ordered, non-overlapping list of directives over
``[start, end)`` ranges of the document.
"""

from enum import Enum

from pydantic import BaseModel, Field, model_validator

from sheetcalc.spans import BracketSpan


class SpanKind(str, Enum):
    """How a bracket span was resolved in one recompute."""

    REVEALED = "revealed"
    """The selection sits inside the span; raw text is shown."""

    TOTAL = "total"
    """The span is a total marker and shows the running total."""

    COMPUTED = "computed"
    """The span's inner text evaluated to a number."""

    UNPARSED = "unparsed"
    """The span's inner text is not arithmetic; raw text is shown."""


class DisplayMode(str, Enum):
    """What the host should do with an annotated range."""

    REVEAL = "reveal"
    REPLACE_WITH_COMPUTED = "replace_with_computed"
    REPLACE_WITH_TOTAL = "replace_with_total"
    STYLE_MODIFIER_POSITIVE = "style_modifier_positive"
    STYLE_MODIFIER_NEGATIVE = "style_modifier_negative"
    NONE = "none"


class SpanResult(BaseModel):
    """Resolution of one bracket span.

    Attributes:
        span: The scanned span
        kind: Classification of the span
        base: Evaluator output (COMPUTED only)
        modifier_fraction: Clamped modifier applied to ``base`` (COMPUTED only)
        final_value: Rounded result (COMPUTED) or consumed running total (TOTAL)
    """

    model_config = {"frozen": True}

    span: BracketSpan
    kind: SpanKind
    base: float | None = None
    modifier_fraction: float = 0.0
    final_value: int | None = None

    @model_validator(mode="after")
    def values_match_kind(self) -> "SpanResult":
        if self.kind == SpanKind.COMPUTED:
            if self.base is None or self.final_value is None:
                raise ValueError("computed results need base and final_value")
        elif self.kind == SpanKind.TOTAL:
            if self.final_value is None:
                raise ValueError("total results need final_value")
        elif self.final_value is not None or self.base is not None:
            raise ValueError(f"{self.kind.value} results carry no values")
        return self

    @property
    def has_modifier(self) -> bool:
        return self.modifier_fraction != 0


class Annotation(BaseModel):
    """One display directive over ``[start, end)`` of the document.

    ``content`` is the raw source for reveal/none/style annotations and the
    rendered label for replacements. Replacement annotations also carry the
    numbers the label was built from so a host can render its own widget.
    """

    model_config = {"frozen": True}

    start: int = Field(..., ge=0)
    end: int = Field(..., gt=0)
    mode: DisplayMode
    content: str
    base: float | None = None
    final_value: int | None = None
    modifier_fraction: float = 0.0
    tooltip: str | None = None

    @model_validator(mode="after")
    def range_is_ordered(self) -> "Annotation":
        if self.start >= self.end:
            raise ValueError("annotation start must be < end")
        return self

    @property
    def is_replacement(self) -> bool:
        return self.mode in (DisplayMode.REPLACE_WITH_COMPUTED, DisplayMode.REPLACE_WITH_TOTAL)


class AnnotationSet(BaseModel):
    """Everything one recompute produced, in document order."""

    model_config = {"frozen": True}

    annotations: tuple[Annotation, ...] = ()
    running_total: int = Field(
        default=0,
        description="Total accumulated after the last total marker; shown in the footer only.",
    )

    @model_validator(mode="after")
    def non_overlapping(self) -> "AnnotationSet":
        for prev, cur in zip(self.annotations, self.annotations[1:]):
            if cur.start < prev.end:
                raise ValueError(f"annotations overlap at offset {cur.start}")
        return self

    def by_mode(self, *modes: DisplayMode) -> list[Annotation]:
        return [a for a in self.annotations if a.mode in modes]
