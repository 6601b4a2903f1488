"""Render an annotated text segment from a JSON request.

The request is a JSON object::

    {
        "text": "Chapter One",
        "offset": 120,
        "typography": [{"start": 120, "end": 131, "css": "h2"}],
        "semantics": [{"start": 128, "end": 131, "id": "note-7"}]
    }

Usage:
    uv run textus-render request.json               # markup to stdout
    cat request.json | uv run textus-render -       # read stdin
    uv run textus-render request.json -o out.html   # write to a file
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from textus import setup_logging
from textus.config import RenderConfig, get_settings
from textus.markup import render
from textus.models import AnnotationFormatError

console = Console(stderr=True)


def _read_request(source: str) -> dict[str, Any]:
    """Load and shape-check the JSON request from *source* (``-`` for stdin)."""
    raw = sys.stdin.read() if source == "-" else Path(source).read_text("utf-8")
    data = json.loads(raw)
    if not isinstance(data, dict):
        msg = "request must be a JSON object"
        raise AnnotationFormatError(msg)
    if not isinstance(data.get("text"), str):
        msg = "request field 'text' must be a string"
        raise AnnotationFormatError(msg)
    for key in ("typography", "semantics"):
        value = data.get(key, [])
        if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
            msg = f"request field {key!r} must be a list of objects"
            raise AnnotationFormatError(msg)
    return data


def _render_request(data: dict[str, Any], config: RenderConfig) -> str:
    try:
        offset = int(data.get("offset", 0))
    except (TypeError, ValueError) as exc:
        msg = f"request field 'offset' must be an integer, got {data['offset']!r}"
        raise AnnotationFormatError(msg) from exc
    return render(
        data["text"],
        offset,
        data.get("typography", []),
        data.get("semantics", []),
        config=config,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="textus-render",
        description="Render an annotated text segment to markup.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Path to the JSON request, or '-' for stdin (default).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write markup to this file instead of stdout.",
    )
    parser.add_argument(
        "--legacy-escape",
        action="store_true",
        help="Escape only the first '<' and '>' of each text run.",
    )
    parser.add_argument(
        "--legacy-priority",
        action="store_true",
        help="Give unknown styles the same nesting priority as h1.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for textus-render."""
    args = _build_parser().parse_args(argv)

    settings = get_settings()
    setup_logging(settings.log.level, settings.log.dir)

    config = settings.render
    overrides = {
        name: True
        for name, flag in (
            ("legacy_escape", args.legacy_escape),
            ("legacy_priority", args.legacy_priority),
        )
        if flag
    }
    if overrides:
        config = config.model_copy(update=overrides)

    try:
        markup = _render_request(_read_request(args.input), config)
    except OSError as exc:
        console.print(
            f"[red]Error:[/] cannot read {escape(args.input)}: {escape(str(exc))}"
        )
        sys.exit(1)
    except UnicodeDecodeError as exc:
        console.print(
            f"[red]Error:[/] request is not UTF-8 ({escape(exc.reason)}): "
            f"{escape(args.input)}"
        )
        sys.exit(1)
    except json.JSONDecodeError as exc:
        console.print(f"[red]Error:[/] invalid JSON: {escape(str(exc))}")
        sys.exit(1)
    except AnnotationFormatError as exc:
        console.print(f"[red]Error:[/] {escape(str(exc))}")
        sys.exit(1)

    if args.output is None:
        sys.stdout.write(markup)
    else:
        args.output.write_text(markup, encoding="utf-8")
        console.print(f"Wrote [bold]{len(markup)}[/] chars to {args.output}")


if __name__ == "__main__":
    main()
