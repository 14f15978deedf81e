"""Styled (HTML) report rendered through a swappable Jinja2 template.

The style transform receives the parsed structured report as ``report``
and the tool disclaimer as ``disclaimer``. A caller-supplied template file
replaces the bundled ``index.html.j2``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from jinja2 import (
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
    Template,
    TemplateError,
    select_autoescape,
)

from header_audit.constants import LEGAL_DISCLAIMER
from header_audit.exceptions import ConfigurationError, RenderError
from header_audit.models.report import ReportModel
from header_audit.output.xml_report import (
    StructuredReportRenderer,
    parse_structured_report,
)

DEFAULT_TEMPLATE_NAME = "index.html.j2"


def _environment(loader: FileSystemLoader | PackageLoader) -> Environment:
    return Environment(
        loader=loader,
        autoescape=select_autoescape(["html", "htm", "xml", "j2"]),
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


def load_style(stylesheet: Optional[Path] = None) -> Template:
    """Load the style template.

    Args:
        stylesheet: Custom Jinja2 template file, or None for the bundled one.

    Returns:
        The compiled template.

    Raises:
        ConfigurationError: If the template is missing, unreadable or does
            not compile.
    """
    if stylesheet is None:
        env = _environment(PackageLoader("header_audit.output", "templates"))
        name = DEFAULT_TEMPLATE_NAME
        source = f"bundled template '{name}'"
    else:
        if not stylesheet.is_file():
            raise ConfigurationError(f"Stylesheet '{stylesheet}' does not exist")
        env = _environment(FileSystemLoader(str(stylesheet.parent)))
        name = stylesheet.name
        source = f"stylesheet '{stylesheet}'"

    try:
        return env.get_template(name)
    except (TemplateError, OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot load {source}: {e}") from e


class StyledReportRenderer:
    """Apply a style template to the structured report."""

    def __init__(self, stylesheet: Optional[Path] = None) -> None:
        """Initialize the renderer.

        Args:
            stylesheet: Custom template file. The bundled template is used
                when None.

        Raises:
            ConfigurationError: If the template cannot be loaded.
        """
        self._template = load_style(stylesheet)

    def transform(self, structured_document: str) -> str:
        """Transform a structured XML report into the styled artifact.

        Raises:
            RenderError: If the document is malformed or the template fails.
        """
        report = parse_structured_report(structured_document)
        try:
            return self._template.render(report=report, disclaimer=LEGAL_DISCLAIMER)
        except (TemplateError, TypeError, ValueError) as e:
            raise RenderError(f"Style template failed: {e}") from e

    def render(self, report: ReportModel) -> str:
        """Render a frozen report model through the style template."""
        return self.transform(StructuredReportRenderer().render(report))
