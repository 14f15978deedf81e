"""License family models for header-audit.

A license family is the unit a header is classified into. Identity is the
category code alone, so a family introduced by a configured rule that
reuses a built-in code compares equal to the built-in one.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class LicenseFamily(BaseModel):
    """A named category of license or header text."""

    model_config = {"extra": "forbid", "frozen": True}

    category: str = Field(description="Short category code, e.g. 'AL'")
    name: str = Field(description="Display name, e.g. 'Apache-2.0'")

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, LicenseFamily):
            return NotImplemented
        return self.category == other.category

    def __hash__(self) -> int:
        return hash(self.category)

    @property
    def is_unknown(self) -> bool:
        """True if this is the unknown-license sentinel."""
        return self.category == UNKNOWN_FAMILY.category


UNKNOWN_FAMILY = LicenseFamily(category="?????", name="Unknown license")

# Families recognized by the default matcher
APACHE_2 = LicenseFamily(category="AL", name="Apache-2.0")
MIT = LicenseFamily(category="MIT", name="MIT")
BSD = LicenseFamily(category="BSD", name="BSD")
GPL_1 = LicenseFamily(category="GPL1", name="GPL-1.0")
GPL_2 = LicenseFamily(category="GPL2", name="GPL-2.0")
GPL_3 = LicenseFamily(category="GPL3", name="GPL-3.0")
LGPL = LicenseFamily(category="LGPL", name="LGPL")
CDDL_1 = LicenseFamily(category="CDDL1", name="CDDL-1.0")
W3C = LicenseFamily(category="W3C", name="W3C Software Copyright")
W3C_DOCS = LicenseFamily(category="W3CD", name="W3C Document Copyright")
OASIS = LicenseFamily(category="OASIS", name="OASIS Open")

# Exemption families: files that need no license header
GENERATED = LicenseFamily(category="GEN", name="Generated")
BINARY = LicenseFamily(category="BIN", name="Binary")
ARCHIVE = LicenseFamily(category="ARC", name="Archive")
NOTICE = LicenseFamily(category="NOTE", name="Notice")

BUILTIN_FAMILIES: tuple[LicenseFamily, ...] = (
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
