"""
Configuration management and singleton pattern.

This module provides the main configuration loading and management interface,
implementing a singleton pattern to ensure configuration is loaded only once.
"""

import logging
from pathlib import Path
from typing import Optional

from ..models.config import MonitorConfig
from ..validation import handle_config_error, ErrorSeverity
from .loader import load_monitor_section
from .validators import validate_monitor_config

logger = logging.getLogger(__name__)

# --- Global Singleton for Configuration ---

_CONFIG: Optional[MonitorConfig] = None

# Set by the CLI's --config option or by tests. When unset, conf/config.toml
# is looked up in the current working directory.
_CONFIG_FILE_PATH: Optional[Path] = None

DEFAULT_CONFIG_FILE = Path("conf") / "config.toml"


def set_config_path(config_path: Path) -> None:
    """
    Set a custom configuration file path and drop any cached configuration.

    Args:
        config_path: Path to the main config.toml file
    """
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = Path(config_path)
    _CONFIG = None
    logger.info(f"Configuration path set to: {config_path}")


def get_config_path() -> Path:
    """Return the configuration file path that get_config() reads."""
    if _CONFIG_FILE_PATH is not None:
        return _CONFIG_FILE_PATH
    return Path.cwd() / DEFAULT_CONFIG_FILE


def clear_config_cache() -> None:
    """
    Clear the cached configuration, forcing a reload on next access.
    """
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def _load_config(config_path: Path) -> MonitorConfig:
    """
    Load and validate the configuration from a TOML file.

    A missing file is not an error: the collector runs with its defaults and
    keeps the include list next to where the file would be.

    Raises:
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    config_dir = config_path.parent
    if not config_path.exists():
        logger.warning(f"Configuration file {config_path} not found, using defaults")
        return validate_monitor_config({}, config_dir)

    try:
        monitor_data = load_monitor_section(config_path)
        config = validate_monitor_config(monitor_data, config_dir)
    except Exception as e:
        handle_config_error(
            error=e,
            context="processing configuration",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise

    logger.info(
        f"Loaded configuration: source={config.source}, "
        f"threshold={config.memory_threshold_percent}, display_by_pid={config.display_by_pid}, "
        f"{len(config.exclude_processes)} excluded names, {len(config.exclude_pids)} excluded pids"
    )
    return config


def get_config() -> MonitorConfig:
    """
    Get the global configuration, loading it if necessary.

    Returns:
        The singleton MonitorConfig instance

    Raises:
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _load_config(get_config_path())
    return _CONFIG

