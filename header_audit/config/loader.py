"""Configuration file discovery and loading for header-audit."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from header_audit.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from header_audit.exceptions import ConfigurationError
from header_audit.models.config import AuditConfig


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Locate the audit configuration file in a directory.

    `.header-audit.yaml` wins over `.header-audit.yml` when both exist.

    Args:
        start_dir: Directory to look in (the working directory by default).

    Returns:
        The first configuration file found, or None.
    """
    search_dir = start_dir or Path.cwd()
    candidates = (search_dir / name for name in DEFAULT_CONFIG_NAMES)
    return next((path for path in candidates if path.is_file()), None)


def format_validation_errors(error: ValidationError) -> str:
    """Join Pydantic errors as ``loc: msg`` pairs separated by ``; ``."""
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'root'}: {err['msg']}"
        for err in error.errors()
    )


def _validate(data: dict[str, Any], source: str) -> AuditConfig:
    try:
        return AuditConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration{source}: {format_validation_errors(e)}"
        ) from e


def _read_mapping(path: Path) -> dict[str, Any] | None:
    """Read the YAML mapping stored in a configuration file.

    Returns:
        The mapping, or None when the file holds no settings at all.

    Raises:
        ConfigurationError: On read errors, YAML syntax errors or a root
            value that is not a mapping.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file '{path}': {e}") from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML syntax in '{path}': {e}") from e

    # Blank and comment-only files load as None
    if data is None:
        return None
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid configuration in '{path}': "
            f"expected a mapping at root level, got {type(data).__name__}"
        )
    return data


def load_config_file(path: Path) -> AuditConfig:
    """Load and validate an audit configuration file.

    Relative paths in the file (input_dir, report_dir, exclude_file,
    stylesheet) are kept as written and resolve against the working
    directory of the run.

    Raises:
        ConfigurationError: If the file is unreadable, not YAML, or
            describes an invalid configuration.
    """
    data = _read_mapping(path)
    if data is None:
        return get_default_config()
    return _validate(data, f" in '{path}'")


def load_config(config_path: str | Path | None = None) -> AuditConfig:
    """Resolve the configuration for a run.

    An explicit path is always loaded. Otherwise the working directory is
    searched, and the defaults apply when it holds no configuration file.

    Raises:
        ConfigurationError: If the selected file is invalid.
    """
    if config_path is not None:
        return load_config_file(Path(config_path))

    discovered = find_config_file()
    if discovered is None:
        return get_default_config()
    return load_config_file(discovered)


def apply_overrides(config: AuditConfig, overrides: dict[str, Any]) -> AuditConfig:
    """Return a new configuration with the given fields replaced.

    Keys whose value is None are ignored so unset CLI flags keep the
    values loaded from the configuration file.

    Raises:
        ConfigurationError: If the merged configuration is invalid.
    """
    data = config.model_dump()
    data.update({key: value for key, value in overrides.items() if value is not None})
    return _validate(data, "")
