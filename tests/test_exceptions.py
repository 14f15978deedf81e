"""Tests for custom exceptions."""
import pytest

from header_audit.exceptions import (
    AuditFailure,
    ConfigurationError,
    FileReadError,
    HeaderAuditError,
    RenderError,
    ScanError,
)


class TestExceptionHierarchy:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize(
        "exc_type",
        [ConfigurationError, RenderError, ScanError],
    )
    def test_subclasses_base(self, exc_type: type) -> None:
        """Test that every error derives from HeaderAuditError."""
        assert issubclass(exc_type, HeaderAuditError)

    def test_configuration_error_message(self) -> None:
        """Test that messages are preserved."""
        with pytest.raises(HeaderAuditError, match="bad pattern"):
            raise ConfigurationError("bad pattern")


class TestFileReadError:
    """Tests for FileReadError."""

    def test_carries_path_and_reason(self) -> None:
        """Test that path and reason are exposed."""
        error = FileReadError("src/a.py", "Permission denied")

        assert error.path == "src/a.py"
        assert error.reason == "Permission denied"
        assert "src/a.py" in str(error)
        assert isinstance(error, HeaderAuditError)


class TestAuditFailure:
    """Tests for AuditFailure."""

    def test_carries_count_and_url(self) -> None:
        """Test that the unapproved count and report URL are exposed."""
        error = AuditFailure("2 unapproved", 2, "file:///tmp/index.html")

        assert error.num_unapproved == 2
        assert error.report_url == "file:///tmp/index.html"
        assert str(error) == "2 unapproved"
        assert isinstance(error, HeaderAuditError)
