"""
Configuration validation utilities.

This module turns the raw `[monitor]` table into a validated MonitorConfig.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..models.config import DEFAULT_INCLUDE_LIST_FILE, DEFAULT_METRIC_PREFIX, MonitorConfig
from ..sources.factory import SOURCE_CHOICES
from ..validation import (
    ValidationError,
    validate_boolean,
    validate_enum_choice,
    validate_non_empty_string,
    validate_pid_list,
    validate_positive_float,
    validate_positive_integer,
    validate_string_list,
)

logger = logging.getLogger(__name__)

LOG_LEVEL_CHOICES = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_KNOWN_KEYS = {
    "memory_threshold_percent",
    "display_by_pid",
    "exclude_processes",
    "exclude_pids",
    "include_list_file",
    "source",
    "metric_prefix",
    "interval_seconds",
    "pin_over_threshold",
    "log_level",
}


def validate_monitor_config(monitor_data: Dict[str, Any], config_dir: Optional[Path] = None) -> MonitorConfig:
    """
    Validate and create a MonitorConfig from raw configuration data.

    Args:
        monitor_data: Raw `[monitor]` table from TOML
        config_dir: Directory that relative paths are resolved against,
            the current directory when None

    Returns:
        Validated MonitorConfig instance

    Raises:
        ValidationError: If validation fails
    """
    if not isinstance(monitor_data, dict):
        raise ValidationError("[monitor] must be a table", field_name="monitor", value=monitor_data)

    unknown = sorted(set(monitor_data) - _KNOWN_KEYS)
    if unknown:
        logger.warning(f"Ignoring unknown keys in [monitor]: {unknown}")

    memory_threshold_percent = None
    if monitor_data.get("memory_threshold_percent") is not None:
        memory_threshold_percent = validate_positive_integer(
            monitor_data["memory_threshold_percent"],
            min_value=0,
            max_value=100,
            field_name="monitor.memory_threshold_percent",
        )

    display_by_pid = validate_boolean(
        monitor_data.get("display_by_pid", False),
        field_name="monitor.display_by_pid",
    )

    exclude_processes = validate_string_list(
        monitor_data.get("exclude_processes", []),
        field_name="monitor.exclude_processes",
    )

    exclude_pids = validate_pid_list(
        monitor_data.get("exclude_pids", []),
        field_name="monitor.exclude_pids",
    )

    include_list_file = Path(validate_non_empty_string(
        monitor_data.get("include_list_file", DEFAULT_INCLUDE_LIST_FILE),
        field_name="monitor.include_list_file",
    )).expanduser()
    if not include_list_file.is_absolute():
        include_list_file = (config_dir or Path.cwd()) / include_list_file

    source = validate_enum_choice(
        monitor_data.get("source", "auto"),
        valid_choices=SOURCE_CHOICES,
        field_name="monitor.source",
    )

    metric_prefix = validate_non_empty_string(
        monitor_data.get("metric_prefix", DEFAULT_METRIC_PREFIX),
        field_name="monitor.metric_prefix",
    )

    interval_seconds = validate_positive_float(
        monitor_data.get("interval_seconds", 60.0),
        min_value=1.0,
        max_value=86400.0,
        field_name="monitor.interval_seconds",
    )

    pin_over_threshold = validate_boolean(
        monitor_data.get("pin_over_threshold", True),
        field_name="monitor.pin_over_threshold",
    )

    log_level = validate_enum_choice(
        str(monitor_data.get("log_level", "INFO")).upper(),
        valid_choices=LOG_LEVEL_CHOICES,
        field_name="monitor.log_level",
    )

    return MonitorConfig(
        memory_threshold_percent=memory_threshold_percent,
        display_by_pid=display_by_pid,
        exclude_processes=frozenset(exclude_processes),
        exclude_pids=frozenset(exclude_pids),
        include_list_file=include_list_file,
        source=source,
        metric_prefix=metric_prefix,
        interval_seconds=interval_seconds,
        pin_over_threshold=pin_over_threshold,
        log_level=log_level,
    )
