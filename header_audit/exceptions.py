"""Custom exceptions for header-audit."""

from __future__ import annotations


class HeaderAuditError(Exception):
    """Base exception for all header-audit errors."""

    pass


class ConfigurationError(HeaderAuditError):
    """Exception raised when configuration is invalid."""

    pass


class FileReadError(HeaderAuditError):
    """Exception raised when an audited file cannot be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read '{path}': {reason}")
        self.path = path
        self.reason = reason


class RenderError(HeaderAuditError):
    """Exception raised when a report artifact cannot be produced."""

    pass


class ScanError(HeaderAuditError):
    """Exception raised when an audit run is driven incorrectly."""

    pass


class AuditFailure(HeaderAuditError):
    """Exception raised when files with unapproved licenses were found."""

    def __init__(self, message: str, num_unapproved: int, report_url: str) -> None:
        super().__init__(message)
        self.num_unapproved = num_unapproved
        self.report_url = report_url
