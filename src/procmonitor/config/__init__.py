"""
Configuration management for the procmonitor package.

This module provides a clean interface for loading, validating, and accessing
configuration data from a TOML file with singleton pattern management.
"""

# Main configuration interface
from .manager import (
    clear_config_cache,
    get_config,
    get_config_path,
    set_config_path,
)

# For advanced usage - direct access to loaders and validators
from .loader import load_monitor_section, load_toml_file
from .validators import validate_monitor_config

__all__ = [
    # Main interface
    "get_config",
    "set_config_path",
    "clear_config_cache",
    "get_config_path",
    # Advanced interface
    "load_toml_file",
    "load_monitor_section",
    "validate_monitor_config",
]
