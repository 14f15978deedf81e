"""Configuration handling for header-audit."""
from __future__ import annotations

from header_audit.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from header_audit.config.loader import (
    apply_overrides,
    find_config_file,
    load_config,
    load_config_file,
)
from header_audit.models.config import AuditConfig, SubstringRule

__all__ = [
    "AuditConfig",
    "DEFAULT_CONFIG_NAMES",
    "SubstringRule",
    "apply_overrides",
    "find_config_file",
    "get_default_config",
    "load_config",
    "load_config_file",
]
