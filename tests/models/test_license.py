"""Tests for license family models."""
import pytest
from pydantic import ValidationError

from header_audit.models.license import (
    APACHE_2,
    BUILTIN_FAMILIES,
    MIT,
    UNKNOWN_FAMILY,
    LicenseFamily,
)


class TestLicenseFamily:
    """Tests for LicenseFamily."""

    def test_equality_by_category(self) -> None:
        """Test that families with the same category compare equal."""
        assert LicenseFamily(category="AL", name="Apache License") == APACHE_2

    def test_different_category_not_equal(self) -> None:
        """Test that different categories are different families."""
        assert LicenseFamily(category="MIT", name="Apache-2.0") != APACHE_2

    def test_hash_by_category(self) -> None:
        """Test that families deduplicate by category in sets."""
        families = {APACHE_2, LicenseFamily(category="AL", name="other"), MIT}

        assert len(families) == 2

    def test_not_equal_to_other_types(self) -> None:
        """Test that comparison with a plain string is false."""
        assert APACHE_2 != "AL"

    def test_frozen(self) -> None:
        """Test that a family cannot be modified."""
        with pytest.raises(ValidationError):
            APACHE_2.name = "changed"  # type: ignore[misc]

    def test_extra_fields_forbidden(self) -> None:
        """Test that unknown fields are rejected."""
        with pytest.raises(ValidationError):
            LicenseFamily(category="X", name="X", url="http://x")  # type: ignore[call-arg]


class TestUnknownFamily:
    """Tests for the unknown-license sentinel."""

    def test_is_unknown(self) -> None:
        """Test that the sentinel reports itself as unknown."""
        assert UNKNOWN_FAMILY.is_unknown
        assert UNKNOWN_FAMILY.name == "Unknown license"

    def test_builtins_are_known(self) -> None:
        """Test that no built-in family is the sentinel."""
        assert not any(family.is_unknown for family in BUILTIN_FAMILIES)


class TestBuiltinFamilies:
    """Tests for the built-in family table."""

    def test_categories_unique(self) -> None:
        """Test that built-in categories do not collide."""
        categories = [family.category for family in BUILTIN_FAMILIES]

        assert len(categories) == len(set(categories))

    def test_contains_apache(self) -> None:
        """Test that Apache-2.0 is a built-in family."""
        assert APACHE_2 in BUILTIN_FAMILIES
        assert APACHE_2.name == "Apache-2.0"
