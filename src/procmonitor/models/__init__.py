"""
Data models for the process collector.

Configuration Models:
- Collector settings read from config.toml

Process Models:
- Raw command output, per-line observations, aggregated records

Result Models:
- The outcome of one collection cycle
"""

from .config import DEFAULT_INCLUDE_LIST_FILE, DEFAULT_METRIC_PREFIX, MonitorConfig
from .process import ProcessObservation, ProcessRecord, RawSnapshot
from .results import CycleReport

__all__ = [
    # Configuration
    "DEFAULT_INCLUDE_LIST_FILE",
    "DEFAULT_METRIC_PREFIX",
    "MonitorConfig",
    # Process
    "ProcessObservation",
    "ProcessRecord",
    "RawSnapshot",
    # Results
    "CycleReport",
]
