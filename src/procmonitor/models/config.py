"""
Configuration data models.

This module contains the configuration structure for the collector, loaded
from the `[monitor]` table of `config.toml`.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Optional

DEFAULT_METRIC_PREFIX = "Custom Metrics|Process Monitor"
DEFAULT_INCLUDE_LIST_FILE = ".monitored-processes"


@dataclass(frozen=True)
class MonitorConfig:
    """
    Configuration for the collector's behavior, loaded from `config.toml`.

    The core only reads these values; nothing in a collection cycle mutates them.
    """

    # Memory-percent threshold below which unpinned processes are not reported.
    # None means "not configured"; see ThresholdPolicy for how 0 is treated.
    memory_threshold_percent: Optional[int] = None
    # Aggregate per "name|pid" instead of per name.
    display_by_pid: bool = False
    # Display keys that are never aggregated.
    exclude_processes: FrozenSet[str] = field(default_factory=frozenset)
    # PIDs that are never aggregated.
    exclude_pids: FrozenSet[int] = field(default_factory=frozenset)
    # Durable include-list file, already resolved to an absolute path.
    include_list_file: Path = Path(DEFAULT_INCLUDE_LIST_FILE)
    # One of "auto", "ps", "tasklist", "psutil".
    source: str = "auto"
    metric_prefix: str = DEFAULT_METRIC_PREFIX
    interval_seconds: float = 60.0
    # Pin every process that reaches the threshold so it stays reported.
    pin_over_threshold: bool = True
    log_level: str = "INFO"
