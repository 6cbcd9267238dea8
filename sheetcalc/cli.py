"""sheetcalc command line: preview bracket math in a text file.

Usage:
  sheetcalc render sheet.md --footer
  sheetcalc render sheet.md --selection 40:40
  sheetcalc annotate sheet.md > annotations.json
  sheetcalc total sheet.md
  cat sheet.md | sheetcalc render -
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from sheetcalc import __version__
from sheetcalc.config import load_config
from sheetcalc.logging import setup_logging
from sheetcalc.pipeline import compute_annotations
from sheetcalc.render import render_text, render_total_footer
from sheetcalc.spans import Selection


def _parse_selection(value: str) -> Selection:
    """Parse ``N`` (a caret) or ``FROM:TO``."""
    try:
        if ":" in value:
            start, end = value.split(":", 1)
            return Selection(from_=int(start), to=int(end))
        return Selection.caret(int(value))
    except (ValueError, ValidationError) as exc:
        raise argparse.ArgumentTypeError(f"invalid selection {value!r}: expected N or FROM:TO") from exc


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sheetcalc",
        description="Evaluate [bracket] arithmetic in free-form text.",
    )
    parser.add_argument("--version", action="version", version=f"sheetcalc {__version__}")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a sheetcalc.toml (default: $SHEETCALC_CONFIG, then ./sheetcalc.toml)",
    )

    subparsers = parser.add_subparsers(title="commands", metavar="<command>", dest="command")
    subparsers.required = True

    def add_input(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("input", help="Text file to evaluate, or - for stdin")
        sub.add_argument(
            "--selection",
            type=_parse_selection,
            default=None,
            help="Cursor as N or FROM:TO; the span containing it is shown raw",
        )

    render = subparsers.add_parser("render", help="Print the text with computed values substituted")
    add_input(render)
    render.add_argument("--footer", action="store_true", help="Append the trailing running total")

    annotate = subparsers.add_parser("annotate", help="Print the annotation set as JSON")
    add_input(annotate)

    total = subparsers.add_parser("total", help="Print the running total after the last total marker")
    add_input(total)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ValidationError as exc:
        print(f"Error: invalid config: {exc}", file=sys.stderr)
        return 1
    logger = setup_logging(config.log_level)

    try:
        text = _read_input(args.input)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: cannot read {args.input}: {exc}", file=sys.stderr)
        return 1

    annotations = compute_annotations(text, args.selection, config)
    logger.debug(annotations)

    if args.command == "render":
        out = render_text(text, annotations)
        sys.stdout.write(out)
        if args.footer:
            if out and not out.endswith("\n"):
                sys.stdout.write("\n")
            sys.stdout.write(render_total_footer(annotations) + "\n")
    elif args.command == "annotate":
        sys.stdout.write(annotations.model_dump_json(indent=2) + "\n")
    else:
        sys.stdout.write(f"{annotations.running_total}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
