"""Scan, evaluate and annotate a whole document in one pass.

Each recompute is a pure function of ``(text, selection, config)``. Spans are
visited left to right with two pieces of pass-local state:

- ``running_total``: sum of computed values since the last total marker
- ``consumed``: offset just past the last visited span; modifiers before it
  have already been applied (or skipped) and never count again

Per span, the first matching rule wins:

1. The selection lies inside the span: REVEALED (raw text, total untouched).
2. The trimmed inner text is the total keyword: TOTAL, emits and resets the total.
3. The inner text does not evaluate: UNPARSED (raw text, total untouched).
4. Otherwise COMPUTED: ``round(base * (1 + modifier))`` joins the running total.

Typical usage:
    ```python
    annotations = compute_annotations("Rage +25 [8*2] [total]", Selection.caret(0))
    for annotation in annotations.annotations:
        print(annotation.start, annotation.end, annotation.mode, annotation.content)
    ```
"""

import math

from sheetcalc.annotation import Annotation, AnnotationSet, DisplayMode, SpanKind, SpanResult
from sheetcalc.config import EngineConfig
from sheetcalc.evaluator import EvaluationError, evaluate
from sheetcalc.logging import get_logger
from sheetcalc.modifiers import collect_modifier, find_modifiers
from sheetcalc.render import render_label, render_tooltip
from sheetcalc.scanner import BracketScanner
from sheetcalc.spans import Selection

logger = get_logger(__name__)

_SPAN_MODES = {
    SpanKind.REVEALED: DisplayMode.REVEAL,
    SpanKind.TOTAL: DisplayMode.REPLACE_WITH_TOTAL,
    SpanKind.COMPUTED: DisplayMode.REPLACE_WITH_COMPUTED,
    SpanKind.UNPARSED: DisplayMode.NONE,
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward +infinity (2.5 -> 3, -2.5 -> -2)."""
    floor = math.floor(value)
    return floor + 1 if value - floor >= 0.5 else floor


def evaluate_spans(
    text: str,
    selection: Selection | None = None,
    config: EngineConfig | None = None,
) -> tuple[list[SpanResult], int]:
    """Classify every bracket span of ``text``.

    Args:
        text: Full document text
        selection: Current selection; None means nothing is revealed
        config: Engine settings; None means defaults

    Returns:
        ``(results, running_total)`` where results are in document order and
        running_total is whatever was accumulated after the last total marker.
    """
    config = config or EngineConfig()
    results: list[SpanResult] = []
    running_total = 0
    consumed = 0

    for span in BracketScanner(text):
        if config.reveal_on_cursor and selection is not None and selection.within(span):
            results.append(SpanResult(span=span, kind=SpanKind.REVEALED))
        elif config.is_total_marker(span.inner):
            results.append(SpanResult(span=span, kind=SpanKind.TOTAL, final_value=running_total))
            running_total = 0
        else:
            fraction = collect_modifier(text, consumed, span.start, floor=config.modifier_floor)
            try:
                base = evaluate(span.inner)
                scaled = base * (1 + fraction)
                if not math.isfinite(scaled):
                    raise EvaluationError("modified value is not finite")
            except EvaluationError as exc:
                logger.debug("Leaving %r unparsed: %s", span.raw, exc, pprint=False)
                results.append(SpanResult(span=span, kind=SpanKind.UNPARSED))
            else:
                final_value = round_half_up(scaled)
                running_total += final_value
                results.append(
                    SpanResult(
                        span=span,
                        kind=SpanKind.COMPUTED,
                        base=base,
                        modifier_fraction=fraction,
                        final_value=final_value,
                    )
                )
        consumed = span.end

    return results, running_total


def _span_annotation(result: SpanResult) -> Annotation:
    mode = _SPAN_MODES[result.kind]
    if mode in (DisplayMode.REVEAL, DisplayMode.NONE):
        content = result.span.raw
    else:
        content = render_label(result)
    return Annotation(
        start=result.span.start,
        end=result.span.end,
        mode=mode,
        content=content,
        base=result.base,
        final_value=result.final_value,
        modifier_fraction=result.modifier_fraction,
        tooltip=render_tooltip(result),
    )


def _modifier_annotations(text: str, start: int, end: int) -> list[Annotation]:
    return [
        Annotation(
            start=token.start,
            end=token.end,
            mode=DisplayMode.STYLE_MODIFIER_POSITIVE if token.is_positive else DisplayMode.STYLE_MODIFIER_NEGATIVE,
            content=token.literal,
        )
        for token in find_modifiers(text, start, end)
    ]


def compute_annotations(
    text: str,
    selection: Selection | None = None,
    config: EngineConfig | None = None,
) -> AnnotationSet:
    """Build the full annotation set for a document and selection.

    Never raises for any document text: spans that are not arithmetic are
    reported with ``DisplayMode.NONE`` and their raw text.
    """
    results, running_total = evaluate_spans(text, selection, config)

    annotations: list[Annotation] = []
    pos = 0
    for result in results:
        annotations.extend(_modifier_annotations(text, pos, result.span.start))
        annotations.append(_span_annotation(result))
        pos = result.span.end
    annotations.extend(_modifier_annotations(text, pos, len(text)))

    annotation_set = AnnotationSet(annotations=tuple(annotations), running_total=running_total)
    logger.debug(
        "Recomputed %d spans into %d annotations (running total %d)",
        len(results),
        len(annotations),
        running_total,
        pprint=False,
    )
    return annotation_set
