"""Approval policy: decide whether a license family is compliant."""

from __future__ import annotations

from typing import Iterable, Optional

from header_audit.models.config import AuditConfig, SubstringRule
from header_audit.models.license import (
    APACHE_2,
    ARCHIVE,
    BINARY,
    BSD,
    CDDL_1,
    GENERATED,
    GPL_1,
    GPL_2,
    GPL_3,
    LGPL,
    MIT,
    NOTICE,
    OASIS,
    W3C,
    W3C_DOCS,
    LicenseFamily,
)

# Families approved when no explicit approved list is configured
DEFAULT_APPROVED_CATEGORIES: frozenset[str] = frozenset(
    family.category
    for family in (
        APACHE_2,
        MIT,
        BSD,
        GPL_1,
        GPL_2,
        GPL_3,
        LGPL,
        CDDL_1,
        W3C,
        W3C_DOCS,
        OASIS,
        GENERATED,
        BINARY,
        ARCHIVE,
        NOTICE,
    )
)


class ApprovalPolicy:
    """Decides whether a classified family counts as approved.

    With no explicit list, the built-in categories are approved together
    with the families declared by configured substring rules. A non-empty
    explicit list replaces those defaults entirely and is matched against
    family names, exactly and case-sensitively. The unknown family is
    never approved.
    """

    def __init__(
        self,
        approved_names: Optional[Iterable[str]] = None,
        rules: Iterable[SubstringRule] = (),
    ) -> None:
        names = list(approved_names or [])
        self._approved_names: Optional[frozenset[str]] = (
            frozenset(names) if names else None
        )
        self._default_categories = DEFAULT_APPROVED_CATEGORIES | frozenset(
            rule.license_family_category for rule in rules
        )

    @classmethod
    def from_config(cls, config: AuditConfig) -> ApprovalPolicy:
        """Build the policy described by an audit configuration."""
        return cls(
            approved_names=config.approved_licenses,
            rules=config.substring_matchers,
        )

    @property
    def uses_defaults(self) -> bool:
        """True if approval defers to the built-in table."""
        return self._approved_names is None

    def is_approved(self, family: Optional[LicenseFamily]) -> bool:
        """Check whether a family is approved.

        Args:
            family: Classified family (None for unreadable files).

        Returns:
            True if the family is approved under this policy.
        """
        if family is None or family.is_unknown:
            return False
        if self._approved_names is not None:
            return family.name in self._approved_names
        return family.category in self._default_categories
