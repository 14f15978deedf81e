"""CLI entry point for header-audit."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from header_audit import __version__
from header_audit.config import AuditConfig, apply_overrides, load_config
from header_audit.constants import EXIT_ERROR, EXIT_ISSUES, EXIT_SUCCESS
from header_audit.exceptions import AuditFailure, HeaderAuditError
from header_audit.models.license import BUILTIN_FAMILIES
from header_audit.output.terminal import TerminalFormatter
from header_audit.runner import AuditRunner

# Module-level console for consistent output
_console = Console()
# Separate console for diagnostics and errors (writes to stderr)
_error_console = Console(stderr=True)


def _configure_logging(verbose: bool, debug: bool) -> None:
    """Route library logging through Rich on stderr."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=_error_console, show_path=False)],
        force=True,
    )


def _merge_substring_matchers(
    matchers: tuple[tuple[str, str, str], ...],
) -> Optional[list[dict[str, Any]]]:
    """Group CLI substring matchers by family, keeping declaration order."""
    if not matchers:
        return None
    rules: dict[tuple[str, str], list[str]] = {}
    for category, name, substring in matchers:
        rules.setdefault((category, name), []).append(substring)
    return [
        {
            "license_family_category": category,
            "license_family_name": name,
            "substrings": substrings,
        }
        for (category, name), substrings in rules.items()
    ]


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """Header Audit - Check source files for approved license headers.

    Classifies every file of a source tree against license-header
    matchers, writes XML, text and HTML reports, and fails when files
    with unapproved or unknown licenses are found.

    \b
    Examples:
        header-audit check
        header-audit check src --verbose
        header-audit check --approved Apache-2.0 --approved MIT
        header-audit families
    """
    pass


@main.command()
@click.argument(
    "input_dir",
    required=False,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to configuration file.",
)
@click.option(
    "--report-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory receiving the reports (default: build/reports/rat).",
)
@click.option(
    "--exclude-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="File with one exclusion pattern per line.",
)
@click.option(
    "--stylesheet",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Jinja2 template used for the HTML report.",
)
@click.option(
    "--approved",
    "approved_licenses",
    multiple=True,
    help="Approved license family name (repeatable). Replaces the defaults.",
)
@click.option(
    "--substring-matcher",
    "substring_matchers",
    type=(str, str, str),
    multiple=True,
    metavar="CATEGORY NAME SUBSTRING",
    help="Custom matcher detecting a family by a literal substring (repeatable).",
)
@click.option(
    "--no-default-matchers",
    is_flag=True,
    default=False,
    help="Do not evaluate the built-in default matcher.",
)
@click.option(
    "--fail-on-error/--no-fail-on-error",
    default=None,
    help="Exit with an error status when unapproved licenses are found "
    "(default: fail).",
)
@click.option(
    "--include",
    "includes",
    multiple=True,
    help="Only audit files matching this pattern (repeatable).",
)
@click.option(
    "--exclude",
    "excludes",
    multiple=True,
    help="Never audit files matching this pattern (repeatable).",
)
@click.option(
    "--workers",
    "max_workers",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum number of files read concurrently.",
)
@click.option(
    "--verbose",
    "-v",
    "verbose_flag",
    is_flag=True,
    default=False,
    help="List unapproved files and print the text report.",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Log every file classification.",
)
def check(
    input_dir: Optional[Path],
    config_path: Optional[str],
    report_dir: Optional[Path],
    exclude_file: Optional[Path],
    stylesheet: Optional[Path],
    approved_licenses: tuple[str, ...],
    substring_matchers: tuple[tuple[str, str, str], ...],
    no_default_matchers: bool,
    fail_on_error: Optional[bool],
    includes: tuple[str, ...],
    excludes: tuple[str, ...],
    max_workers: Optional[int],
    verbose_flag: bool,
    debug: bool,
) -> None:
    """Audit license headers of a source tree.

    Audits INPUT_DIR (default: the configured input directory, or the
    current directory). Exit status is 0 when every file is approved, 1
    when unapproved licenses are found, and 2 when the audit could not
    run.

    \b
    Examples:
        header-audit check
        header-audit check src --exclude-file .rat-excludes
        header-audit check --substring-matcher MIT MIT "Permission is hereby granted"
        header-audit check --no-fail-on-error --verbose
    """
    _configure_logging(verbose_flag, debug)

    try:
        config = load_config(config_path)
        config = apply_overrides(
            config,
            {
                "input_dir": input_dir,
                "report_dir": report_dir,
                "exclude_file": exclude_file,
                "stylesheet": stylesheet,
                "approved_licenses": list(approved_licenses) or None,
                "substring_matchers": _merge_substring_matchers(substring_matchers),
                "add_default_matchers": False if no_default_matchers else None,
                "fail_on_error": fail_on_error,
                "includes": list(includes) or None,
                "excludes": (list(config.excludes) + list(excludes)) if excludes else None,
                "max_workers": max_workers,
                "verbose": True if verbose_flag else None,
            },
        )
        _run_check(config)
    except HeaderAuditError as e:
        _display_error(e)
        sys.exit(EXIT_ERROR)


def _run_check(config: AuditConfig) -> None:
    """Run the audit and exit with the matching status."""
    runner = AuditRunner(
        config,
        console=_error_console,
        show_progress=_error_console.is_terminal,
    )
    formatter = TerminalFormatter(console=_console)

    try:
        result = runner.run()
    except AuditFailure as e:
        if runner.result is not None:
            formatter.format_result(runner.result)
        _error_console.print(f"[red bold]{escape(str(e))}[/red bold]", highlight=False)
        sys.exit(EXIT_ISSUES)

    formatter.format_result(result)
    sys.exit(EXIT_SUCCESS)


@main.command()
def families() -> None:
    """List the license families recognized by the default matcher."""
    TerminalFormatter(console=_console).format_families(BUILTIN_FAMILIES)


def _display_error(error: HeaderAuditError) -> None:
    """Display error message to user on stderr.

    Args:
        error: The exception that occurred.
    """
    error_type = type(error).__name__
    _error_console.print(
        f"[red bold]Error: {error_type}: {escape(str(error))}[/red bold]",
        markup=True,
        highlight=False,
    )


if __name__ == "__main__":
    main()
