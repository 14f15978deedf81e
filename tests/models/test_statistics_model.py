"""Tests for statistics models."""
import pytest
from pydantic import ValidationError

from header_audit.models.statistics import FamilyStatistics, Statistics


class TestStatistics:
    """Tests for Statistics."""

    def test_total_is_computed(self) -> None:
        """Test that the total is approved plus unapproved."""
        stats = Statistics(num_approved=3, num_unapproved=2)

        assert stats.num_total == 5

    def test_total_in_dump(self) -> None:
        """Test that the computed total is serialized."""
        stats = Statistics(num_approved=1)

        assert stats.model_dump()["num_total"] == 1

    def test_is_frozen(self) -> None:
        """Test that statistics cannot be changed once built."""
        stats = Statistics(
            families=[
                FamilyStatistics(category="AL", name="Apache-2.0", count=4, approved=4)
            ],
            num_approved=4,
        )

        with pytest.raises(ValidationError):
            stats.num_approved = 5
