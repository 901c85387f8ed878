"""
OS-agnostic core of the collector: aggregation, include list, threshold
policy and reporting.
"""

from .aggregator import (
    METRIC_SEPARATOR,
    ProcessAggregator,
    add_optional,
    escape_name,
    make_display_key,
)
from .include_store import IncludeListStore
from .reporting import MetricPrinter, is_pinned, meets_threshold, select_reportable
from .threshold import DEFAULT_MEMORY_THRESHOLD, ThresholdPolicy

__all__ = [
    "DEFAULT_MEMORY_THRESHOLD",
    "METRIC_SEPARATOR",
    "IncludeListStore",
    "MetricPrinter",
    "ProcessAggregator",
    "ThresholdPolicy",
    "add_optional",
    "escape_name",
    "is_pinned",
    "make_display_key",
    "meets_threshold",
    "select_reportable",
]
