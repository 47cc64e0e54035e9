"""Command-line entry point.

Usage:
    prehighlight input.html > output.html

Reads one HTML file, highlights its ``<pre><code>`` blocks and writes the
rewritten document to stdout.  Diagnostics go to stderr.

The file is read and written as UTF-8 bytes, so line endings and text
outside highlighted blocks come through unchanged whatever the locale.
A path starting with ``-`` is taken as the input path (``prehighlight
-page.html``); ``prehighlight -- -page.html`` works too.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from prehighlight import __version__, setup_logging

console = Console(stderr=True)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1

_PASSTHROUGH_ARGS = frozenset({"-h", "--help", "--"})


def _build_parser() -> argparse.ArgumentParser:
    """Build argparse parser for the single input path."""
    parser = argparse.ArgumentParser(
        prog="prehighlight",
        description=(
            "Syntax-highlight <pre><code> blocks in an HTML file and write the "
            f"result to stdout (v{__version__})."
        ),
    )
    parser.add_argument("input", help="HTML file to process")
    return parser


def _positional_args(argv: list[str]) -> list[str]:
    """Mark every argument as positional unless help or ``--`` was asked for.

    The parser has no options besides ``-h``, so ``-page.html`` must be a path.
    """
    if any(arg in _PASSTHROUGH_ARGS for arg in argv):
        return argv
    return ["--", *argv]


def _read_document(path: Path) -> str | None:
    """Read *path* as UTF-8, printing the error and returning None on failure.

    Bytes are decoded directly so ``\\r\\n`` and lone ``\\r`` are kept.
    """
    try:
        return path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        console.print(
            f"[red]Error:[/] Couldn't read {escape(str(path))} ({escape(str(exc))})",
            highlight=False,
        )
        return None


def main(argv: list[str] | None = None) -> int:
    """Highlight the HTML file named on the command line.

    Returns:
        Process exit status.  Usage errors exit via argparse (status 2).
    """
    from prehighlight.config import get_settings
    from prehighlight.pipeline import rewrite_document_with_report

    raw_args = sys.argv[1:] if argv is None else argv
    args = _build_parser().parse_args(_positional_args(raw_args))

    try:
        settings = get_settings()
    except ValidationError as exc:
        console.print(
            f"[red]Invalid configuration:[/]\n{escape(str(exc))}", highlight=False
        )
        return EXIT_ERROR

    setup_logging(settings.logging.level, settings.logging.log_dir)

    path = Path(args.input)
    document = _read_document(path)
    if document is None:
        return EXIT_ERROR

    rewritten, report = rewrite_document_with_report(
        document,
        marker_class=settings.highlight.marker_class,
    )
    logger.info(
        "%s: %d block(s) found, %d highlighted, %d unresolved, %d failed",
        path,
        report.found,
        report.highlighted,
        report.unresolved,
        report.failed,
    )

    # Output is UTF-8 regardless of the locale's stdout encoding.
    sys.stdout.flush()
    sys.stdout.buffer.write(rewritten.encode("utf-8"))
    sys.stdout.buffer.flush()
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
