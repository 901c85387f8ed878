"""
procmonitor: per-process CPU and memory metrics collector.

The package lists the processes running on the local host, merges repeated
processes into one record per display key, and reports those that use a lot
of memory or that the user has pinned.

The package is organized into specialized modules:
- config: Configuration loading and validation
- models: Data structures
- validation: Exceptions, error handling and value checks
- system: Command execution
- parsing: Header and numeric parsing of command output
- sources: Platform-specific process listing (ps, tasklist, psutil)
- core: Aggregation, include list, threshold policy and reporting
- monitoring: The collection cycle
- cli: Command-line interface

Usage:
    From command line:
        procmonitor --once

    Programmatically:
        from procmonitor import CollectionCycle, IncludeListStore, get_config
        from procmonitor.sources import create_process_source
        config = get_config()
        store = IncludeListStore(config.include_list_file)
        store.load()
        report = CollectionCycle(config, create_process_source(config.source), store).run()
"""

# Main interfaces
from .config import get_config, clear_config_cache, set_config_path
from .monitoring import CollectionCycle
from .cli import main_cli

# Core components
from .core import (
    IncludeListStore,
    MetricPrinter,
    ProcessAggregator,
    ThresholdPolicy,
    select_reportable,
)

# Model classes for external use
from .models import (
    CycleReport,
    MonitorConfig,
    ProcessObservation,
    ProcessRecord,
    RawSnapshot,
)

# Parsing utilities
from .parsing import process_header_line, to_decimal

# Validation utilities
from .validation import (
    CommandSourceError,
    HeaderParseError,
    ProcessMonitorError,
    ValidationError,
)

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    "get_config",
    "clear_config_cache",
    "set_config_path",
    "CollectionCycle",
    "main_cli",
    # Core
    "IncludeListStore",
    "MetricPrinter",
    "ProcessAggregator",
    "ThresholdPolicy",
    "select_reportable",
    # Models
    "CycleReport",
    "MonitorConfig",
    "ProcessObservation",
    "ProcessRecord",
    "RawSnapshot",
    # Parsing
    "process_header_line",
    "to_decimal",
    # Errors
    "CommandSourceError",
    "HeaderParseError",
    "ProcessMonitorError",
    "ValidationError",
]
