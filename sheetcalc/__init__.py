"""
sheetcalc - live bracket arithmetic for free-form text.

Scans a document for ``[...]`` expressions, evaluates them, applies the signed
percentage modifiers written before each one (``Rage +25 [8*2]``), keeps a
running total that ``[total]`` markers emit and reset, and returns display
annotations for a text-editing host. The span under the cursor is left raw so
it can be edited.

    from sheetcalc import Selection, compute_annotations

    annotations = compute_annotations("Blessed +10 [40] [total]", Selection.caret(0))
"""

from sheetcalc.annotation import (
    Annotation,
    AnnotationSet,
    DisplayMode,
    SpanKind,
    SpanResult,
)
from sheetcalc.config import EngineConfig, load_config
from sheetcalc.evaluator import EvaluationError, evaluate, try_evaluate
from sheetcalc.modifiers import collect_modifier, find_modifiers
from sheetcalc.pipeline import compute_annotations, evaluate_spans
from sheetcalc.preview import ChangeEvent, ChangeKind, LivePreview, TextHostInterface, needs_recompute
from sheetcalc.scanner import BracketScanner, scan_brackets
from sheetcalc.spans import BracketSpan, ModifierToken, Selection

__all__ = [
    # data model
    "BracketSpan",
    "ModifierToken",
    "Selection",
    "SpanKind",
    "SpanResult",
    "DisplayMode",
    "Annotation",
    "AnnotationSet",
    # engine
    "evaluate",
    "try_evaluate",
    "EvaluationError",
    "find_modifiers",
    "collect_modifier",
    "BracketScanner",
    "scan_brackets",
    "evaluate_spans",
    "compute_annotations",
    # host integration
    "ChangeKind",
    "ChangeEvent",
    "TextHostInterface",
    "needs_recompute",
    "LivePreview",
    # configuration
    "EngineConfig",
    "load_config",
]

__version__ = "0.1.0"
