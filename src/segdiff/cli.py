#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for segdiff.

Usage::

    segdiff OLD NEW [--format terminal|html|json|side-by-side] [--output PATH]

Options not given on the command line are read from a configuration file
(see :mod:`segdiff.config`).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from segdiff.config import load_config_with_priority, options_from_config
from segdiff.exceptions import ConfigError, FileError, RenderingError
from segdiff.logging_utils import configure_logging
from segdiff.options import DiffOptions
from segdiff.renderers import HtmlDiffRenderer, JsonDiffRenderer, SideBySideRenderer, TerminalDiffRenderer
from segdiff.text_diff import DiffResult, compare_files

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_RENDERING_ERROR = 7


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser

    """
    parser = argparse.ArgumentParser(
        prog="segdiff",
        description="Compare two text files, detecting moved lines and edits inside lines",
    )

    parser.add_argument("old", help="Old version of the file")
    parser.add_argument("new", help="New version of the file")

    parser.add_argument(
        "--format",
        "-f",
        choices=["terminal", "html", "json", "side-by-side"],
        default="terminal",
        help="Output format: terminal (default, merged inline view), html, json, side-by-side",
    )
    parser.add_argument("--output", "-o", help="Write diff to file (default: stdout)")
    parser.add_argument(
        "--color",
        "--colour",
        dest="color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Colorize terminal output: auto (default, if terminal), always, never",
    )

    parser.add_argument(
        "--granularity",
        "-g",
        choices=["line", "word", "char"],
        default=None,
        help="Top-level comparison unit (default: line)",
    )
    parser.add_argument(
        "--no-nested",
        dest="nested",
        action="store_false",
        default=None,
        help="Do not look for edits inside changed units",
    )
    parser.add_argument("--encoding", default="utf-8", help="Encoding of both input files (default: utf-8)")
    parser.add_argument("--config", help="Configuration file (default: auto-discover)")

    parser.add_argument("--full-page", action="store_true", help="Write a complete HTML document")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log output to this file")
    parser.add_argument("--trace", action="store_true", help="Include timestamps and logger names in log output")

    return parser


def _collect_cli_overrides(parsed: argparse.Namespace) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if parsed.granularity is not None:
        overrides["granularity"] = parsed.granularity
    if parsed.nested is not None:
        overrides["nested"] = parsed.nested
    return overrides


def build_options(parsed: argparse.Namespace) -> DiffOptions:
    """Merge configuration file values and command-line flags.

    Command-line flags take priority over the configuration file.

    Raises
    ------
    ConfigError
        If the configuration cannot be loaded or is invalid

    """
    config = load_config_with_priority(parsed.config)
    options = options_from_config(config)
    return options_from_config(_collect_cli_overrides(parsed), base=options)


def _use_color(parsed: argparse.Namespace) -> bool:
    if parsed.color == "always":
        return True
    if parsed.color == "never" or parsed.output:
        return False
    return sys.stdout.isatty()


def render_result(result: DiffResult, parsed: argparse.Namespace) -> str:
    """Render a diff in the format requested on the command line."""
    use_color = _use_color(parsed)

    if parsed.format == "html":
        return HtmlDiffRenderer(full_page=parsed.full_page).render(result)
    if parsed.format == "json":
        return JsonDiffRenderer().render(result)
    if parsed.format == "side-by-side":
        return SideBySideRenderer(use_color=use_color).render_to_string(result)
    if parsed.format == "terminal":
        return TerminalDiffRenderer(use_color=use_color).render_to_string(result)

    raise RenderingError(f"Unsupported output format: {parsed.format}", rendering_stage="format_selection")


def _write_output(text: str, output: Optional[str]) -> None:
    if output:
        output_path = Path(output)
        logger.info(f"Writing diff to {output_path}")
        output_path.write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)
        if text and not text.endswith("\n"):
            sys.stdout.write("\n")


def main(args: list[str] | None = None) -> int:
    """Run the command-line interface.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments (defaults to ``sys.argv[1:]``)

    Returns
    -------
    int
        Exit code (0 for success)

    """
    parser = create_parser()
    try:
        parsed = parser.parse_args(args)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 0

    configure_logging(parsed.log_level, log_file=parsed.log_file, trace_mode=parsed.trace)

    try:
        options = build_options(parsed)
    except ConfigError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        result = compare_files(parsed.old, parsed.new, options, encoding=parsed.encoding)
    except FileError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_FILE_ERROR

    if not result.has_changes:
        print("No differences found.", file=sys.stderr)

    try:
        _write_output(render_result(result, parsed), parsed.output)
    except RenderingError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RENDERING_ERROR
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        return EXIT_RENDERING_ERROR

    return EXIT_SUCCESS
