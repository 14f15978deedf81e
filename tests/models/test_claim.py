"""Tests for claim models."""
import pytest
from pydantic import ValidationError

from header_audit.models.claim import Claim, ClaimOutcome, DocumentType
from header_audit.models.license import APACHE_2, MIT, UNKNOWN_FAMILY


class TestClaim:
    """Tests for Claim."""

    def test_approved_claim(self) -> None:
        """Test an approved claim has no reason and one outcome."""
        claim = Claim(path="src/a.py", family=APACHE_2, approved=True)

        assert claim.reason == ""
        assert claim.document_type == DocumentType.STANDARD
        assert claim.outcomes == [
            ClaimOutcome(header_type="AL", license_family="Apache-2.0", approved=True)
        ]

    def test_unknown_claim(self) -> None:
        """Test the reason of an unrecognized header."""
        claim = Claim(path="a.py", family=UNKNOWN_FAMILY, approved=False)

        assert claim.is_unknown
        assert not claim.is_read_error
        assert claim.reason == "Unknown license"

    def test_unapproved_known_family(self) -> None:
        """Test the reason of a recognized but unapproved family."""
        claim = Claim(path="a.py", family=MIT, approved=False)

        assert not claim.is_unknown
        assert claim.reason == "License 'MIT' not approved"

    def test_frozen(self) -> None:
        """Test that claims cannot be modified."""
        claim = Claim(path="a.py", family=MIT, approved=True)

        with pytest.raises(ValidationError):
            claim.approved = False  # type: ignore[misc]


class TestReadErrorClaim:
    """Tests for claims of unreadable files."""

    def test_read_error_fields(self) -> None:
        """Test that a read error claim is unapproved with no family."""
        claim = Claim.read_error("secret.key", "Permission denied")

        assert claim.is_read_error
        assert claim.family is None
        assert not claim.approved
        assert claim.document_type == DocumentType.UNREADABLE

    def test_read_error_is_not_unknown(self) -> None:
        """Test that a read error is not counted as an unknown license."""
        claim = Claim.read_error("secret.key", "Permission denied")

        assert not claim.is_unknown

    def test_read_error_display(self) -> None:
        """Test reason, display name and outcomes of a read error."""
        claim = Claim.read_error("secret.key", "Permission denied")

        assert claim.reason == "Read error: Permission denied"
        assert claim.family_display == "Unreadable"
        assert claim.outcomes == []

    def test_claim_without_family_or_error(self) -> None:
        """Test that a bare claim with no family still has a reason."""
        claim = Claim(path="lost.py")

        assert claim.reason == "Read error: unknown"
