"""Default configuration values for header-audit."""

from __future__ import annotations

from header_audit.models.config import AuditConfig

# Default configuration file names to search for
DEFAULT_CONFIG_NAMES = [".header-audit.yaml", ".header-audit.yml"]


def get_default_config() -> AuditConfig:
    """Get the default configuration.

    Returns:
        AuditConfig with all defaults.
    """
    return AuditConfig()
