"""Claim models: the classification result for one audited file."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from header_audit.models.license import LicenseFamily


class DocumentType(Enum):
    """Kind of document, guessed before header classification."""

    STANDARD = "standard"
    GENERATED = "generated"
    BINARY = "binary"
    ARCHIVE = "archive"
    NOTICE = "notice"
    UNREADABLE = "unreadable"


class ClaimOutcome(BaseModel):
    """A single classification outcome recorded for a file.

    Structured reports list outcomes in order. A file normally has exactly
    one outcome; the list form exists for report compatibility.
    """

    model_config = {"extra": "forbid", "frozen": True}

    header_type: str = Field(description="Category code of the matched family")
    license_family: str = Field(description="Display name of the matched family")
    approved: bool = Field(description="Whether the family is approved")


class Claim(BaseModel):
    """Classification result for one scanned, non-excluded file."""

    model_config = {"extra": "forbid", "frozen": True}

    path: str = Field(description="File path relative to the audit root")
    document_type: DocumentType = Field(
        default=DocumentType.STANDARD,
        description="Guessed document type",
    )
    family: Optional[LicenseFamily] = Field(
        default=None,
        description="Matched license family (None when the file was unreadable)",
    )
    approved: bool = Field(default=False, description="Approval decision")
    header_sample: Optional[str] = Field(
        default=None,
        description="Leading lines of files with an unknown license",
    )
    error: Optional[str] = Field(
        default=None,
        description="Read error message for unreadable files",
    )

    @classmethod
    def read_error(cls, path: str, error: str) -> Claim:
        """Create the claim recorded for a file that could not be read.

        Args:
            path: File path relative to the audit root.
            error: Human readable reason.

        Returns:
            An unapproved claim with no family.
        """
        return cls(
            path=path,
            document_type=DocumentType.UNREADABLE,
            family=None,
            approved=False,
            error=error,
        )

    @property
    def is_read_error(self) -> bool:
        """True if the file could not be read."""
        return self.error is not None

    @property
    def is_unknown(self) -> bool:
        """True if no matcher recognized the file header."""
        return self.family is not None and self.family.is_unknown

    @property
    def family_display(self) -> str:
        """Family name for display, 'Unreadable' for read errors."""
        if self.family is None:
            return "Unreadable"
        return self.family.name

    @property
    def reason(self) -> str:
        """Why the claim is unapproved (empty string when approved)."""
        if self.approved:
            return ""
        if self.family is None:
            return f"Read error: {self.error or 'unknown'}"
        if self.family.is_unknown:
            return "Unknown license"
        return f"License '{self.family.name}' not approved"

    @property
    def outcomes(self) -> list[ClaimOutcome]:
        """Ordered classification outcomes (empty for read errors)."""
        if self.family is None:
            return []
        return [
            ClaimOutcome(
                header_type=self.family.category,
                license_family=self.family.name,
                approved=self.approved,
            )
        ]
