"""Stateless text rendering for span results and annotation sets.

These helpers build the strings a host shows: the inline label that replaces a
bracket span, its hover tooltip, a plain-text preview of the whole document,
and the running-total footer.
"""

from sheetcalc.annotation import AnnotationSet, SpanKind, SpanResult

ARROW = "→"
TIMES = "×"


def format_number(value: float | int) -> str:
    """Format a number the way a calculator display would.

    Integral values lose the trailing ``.0``; everything else uses the shortest
    repr that round-trips.
    """
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    return str(value)


def render_label(result: SpanResult) -> str:
    """Text shown between the brackets in place of the source."""
    if result.kind == SpanKind.TOTAL:
        return format_number(result.final_value)
    if result.kind != SpanKind.COMPUTED:
        return result.span.inner
    base = format_number(result.base)
    if not result.has_modifier:
        return base
    return f"{base} {ARROW} {format_number(result.final_value)}"


def render_tooltip(result: SpanResult) -> str | None:
    """Audit string for a computed span, e.g. ``"100 × 1.25 = 125"``."""
    if result.kind != SpanKind.COMPUTED:
        return None
    base = format_number(result.base)
    if not result.has_modifier:
        return base
    multiplier = format_number(1 + result.modifier_fraction)
    return f"{base} {TIMES} {multiplier} = {format_number(result.final_value)}"


def render_text(text: str, annotations: AnnotationSet) -> str:
    """Apply replacement annotations to ``text`` and return the preview."""
    parts: list[str] = []
    pos = 0
    for annotation in annotations.annotations:
        if not annotation.is_replacement:
            continue
        parts.append(text[pos : annotation.start])
        parts.append(f"[{annotation.content}]")
        pos = annotation.end
    parts.append(text[pos:])
    return "".join(parts)


def render_total_footer(annotations: AnnotationSet, label: str = "Total") -> str:
    return f"{label}: {format_number(annotations.running_total)}"
