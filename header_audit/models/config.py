"""Configuration Pydantic models for header-audit."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from header_audit.constants import DEFAULT_REPORT_DIR
from header_audit.models.license import LicenseFamily


class SubstringRule(BaseModel):
    """A configured substring matcher.

    A header matches the rule if it contains ANY of the substrings as a
    literal, case-sensitive substring.
    """

    model_config = {"extra": "forbid", "frozen": True}

    license_family_category: str = Field(
        min_length=1, description="Category code of the family this rule detects"
    )
    license_family_name: str = Field(
        min_length=1, description="Display name of the family this rule detects"
    )
    substrings: List[str] = Field(
        min_length=1, description="Substrings, any of which identifies the family"
    )

    @field_validator("substrings")
    @classmethod
    def _unique_non_empty(cls, value: List[str]) -> List[str]:
        if any(not s for s in value):
            raise ValueError("substrings must not be empty")
        # Keep declaration order, drop duplicates
        return list(dict.fromkeys(value))

    @property
    def family(self) -> LicenseFamily:
        """The license family this rule reports."""
        return LicenseFamily(
            category=self.license_family_category,
            name=self.license_family_name,
        )


class AuditConfig(BaseModel):
    """Immutable configuration for one audit run.

    Built once (from a config file, CLI flags, or both) before the run
    begins and never mutated afterwards.
    """

    model_config = {"extra": "forbid", "frozen": True}

    input_dir: Path = Field(
        default=Path("."),
        description="Root directory of the audited tree",
    )
    report_dir: Path = Field(
        default=Path(DEFAULT_REPORT_DIR),
        description="Directory receiving the report artifacts",
    )
    verbose: bool = Field(
        default=False,
        description="Print unapproved files to the diagnostic stream",
    )
    fail_on_error: bool = Field(
        default=True,
        description="Fail the run when unapproved licenses are found",
    )
    add_default_matchers: bool = Field(
        default=True,
        description="Evaluate the built-in default matcher first",
    )
    substring_matchers: List[SubstringRule] = Field(
        default_factory=list,
        description="Custom substring matchers, in evaluation order",
    )
    approved_licenses: List[str] = Field(
        default_factory=list,
        description="Approved family names. Replaces the built-in defaults "
        "when non-empty.",
    )
    exclude_file: Optional[Path] = Field(
        default=None,
        description="File with one exclusion glob pattern per line",
    )
    stylesheet: Optional[Path] = Field(
        default=None,
        description="Jinja2 template used to render the styled report",
    )
    includes: List[str] = Field(
        default_factory=list,
        description="Glob patterns of files to discover (all when empty)",
    )
    excludes: List[str] = Field(
        default_factory=lambda: ["**/.git/**"],
        description="Glob patterns of files never discovered",
    )
    max_workers: Optional[int] = Field(
        default=None,
        ge=1,
        description="Maximum number of files read concurrently",
    )

    @field_validator("approved_licenses")
    @classmethod
    def _no_blank_names(cls, value: List[str]) -> List[str]:
        if any(not name.strip() for name in value):
            raise ValueError("approved license names must not be blank")
        return value
