"""Output renderers for header-audit."""

from header_audit.output.plain_text import PlainTextRenderer
from header_audit.output.styled import StyledReportRenderer, load_style
from header_audit.output.terminal import TerminalFormatter
from header_audit.output.xml_report import (
    StructuredReportRenderer,
    parse_structured_report,
)

__all__ = [
    "PlainTextRenderer",
    "StructuredReportRenderer",
    "StyledReportRenderer",
    "TerminalFormatter",
    "load_style",
    "parse_structured_report",
]
