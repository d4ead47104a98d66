#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/newsformat/cli.py
"""Command line interface for newsformat.

Compile an article and print the document JSON::

    $ newsformat article.html --title "Hello" --author "Ann"

Use a theme file and settings file::

    $ newsformat article.html --theme themes/dark.yaml --settings newsformat.toml

Write to a file with debug logging::

    $ newsformat article.html -o article.json --log-level DEBUG
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from newsformat import __version__
from newsformat.context import CompileContext
from newsformat.exceptions import ComponentAlertError, NewsFormatError, ValidationError
from newsformat.exporter import ArticleExporter
from newsformat.logging_utils import configure_logging
from newsformat.metadata import ArticleMetadata
from newsformat.settings import ExportSettings, load_settings
from newsformat.theme import ThemeRegistry
from newsformat.utils.encoding import decode_markup

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_ALERT_ERROR = 5


def _iso_date(value: str) -> datetime:
    """Parse an ISO-8601 date for argparse."""
    try:
        return datetime.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}': expected ISO-8601") from e


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="newsformat",
        description="Compile article HTML into a component document.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", metavar="ARTICLE", help="Article HTML file, or '-' for stdin")
    parser.add_argument("--theme", metavar="FILE", help="Theme file (JSON, TOML or YAML)")
    parser.add_argument("--settings", metavar="FILE", help="Settings file (JSON, TOML, YAML or pyproject.toml)")
    parser.add_argument("--title", help="Article title")
    parser.add_argument("--author", help="Article author, used in the byline")
    parser.add_argument("--date", type=_iso_date, help="Publication date (ISO-8601), used in the byline")
    parser.add_argument("--intro", help="Article excerpt")
    parser.add_argument("--permalink", help="Public article URL, searched for recipe schema")
    parser.add_argument("--strict", action="store_true", help="Fail on the first component build error")
    parser.add_argument("-o", "--output", metavar="FILE", help="Write the document here instead of stdout")
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation (default: 2)")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", metavar="FILE", help="Also write log output to this file")
    parser.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _read_input(source: str) -> str:
    if source == "-":
        data = sys.stdin.buffer.read()
    else:
        data = Path(source).read_bytes()
    return decode_markup(data)


def _build_context(parsed_args: argparse.Namespace) -> CompileContext:
    settings = load_settings(parsed_args.settings) if parsed_args.settings else ExportSettings()
    if parsed_args.strict:
        settings = settings.create_updated(strict=True)

    themes = ThemeRegistry()
    if parsed_args.theme:
        themes.load_file(parsed_args.theme, activate=True)

    metadata = ArticleMetadata(
        title=parsed_args.title,
        author=parsed_args.author,
        date=parsed_args.date,
        intro=parsed_args.intro,
        permalink=parsed_args.permalink,
    )
    return CompileContext.create(settings=settings, metadata=metadata, themes=themes)


def main(args: Optional[list[str]] = None) -> int:
    """Run the command line interface; returns the exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    log_level = logging.DEBUG if parsed_args.trace else getattr(logging, parsed_args.log_level)
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)

    errors = Console(stderr=True)

    try:
        html = _read_input(parsed_args.input)
    except OSError as e:
        errors.print(f"[bold red]Error:[/bold red] Could not read {parsed_args.input}: {escape(str(e))}")
        return EXIT_FILE_ERROR
    except UnicodeDecodeError as e:
        errors.print(f"[bold red]Error:[/bold red] Could not decode {parsed_args.input}: {escape(str(e))}")
        return EXIT_FILE_ERROR

    try:
        context = _build_context(parsed_args)
        document = ArticleExporter(context).export(html)
    except ComponentAlertError as e:
        errors.print(f"[bold red]Unmatched markup:[/bold red] {escape(e.message)}")
        return EXIT_ALERT_ERROR
    except NewsFormatError as e:
        errors.print(f"[bold red]Error:[/bold red] {escape(e.message)}")
        logger.debug("Compile failed", exc_info=True)
        return EXIT_VALIDATION_ERROR if isinstance(e, ValidationError) else EXIT_ERROR

    output = document.to_json(indent=parsed_args.indent)
    if parsed_args.output:
        try:
            Path(parsed_args.output).write_text(output + "\n", encoding="utf-8")
        except OSError as e:
            errors.print(f"[bold red]Error:[/bold red] Could not write {parsed_args.output}: {escape(str(e))}")
            return EXIT_FILE_ERROR
        errors.print(f"[green]Wrote {len(document.components)} component(s) to {parsed_args.output}[/green]")
    else:
        sys.stdout.write(output + "\n")

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
