"""
Selection and rendering of reportable process metrics.

A record is reported when it has at least one instance and either its
memory usage reaches the effective threshold or it is pinned, either by its
display key or by its raw process name.
"""

import logging
import sys
from decimal import ROUND_HALF_UP, Decimal
from typing import AbstractSet, Dict, List, Mapping, Optional, TextIO, Tuple

from ..models.process import ProcessRecord
from ..models.results import CycleReport
from .aggregator import METRIC_SEPARATOR

logger = logging.getLogger(__name__)

BYTES_PER_MB = Decimal(1024 * 1024)


def meets_threshold(record: ProcessRecord, threshold: int) -> bool:
    return record.mem_percent is not None and record.mem_percent >= threshold


def select_reportable(
    records: Mapping[str, ProcessRecord],
    threshold: int,
    pinned: AbstractSet[str],
) -> Dict[str, ProcessRecord]:
    """
    Filter records down to the ones that should be reported.

    Args:
        records: Display key to record for the current cycle.
        threshold: Effective memory-percent threshold.
        pinned: Display keys or raw process names from the include list.

    Returns:
        The reportable subset, keyed by display key.
    """
    return {
        key: record
        for key, record in records.items()
        if record.instance_count > 0
        and (meets_threshold(record, threshold) or is_pinned(key, record, pinned))
    }


def is_pinned(key: str, record: ProcessRecord, pinned: AbstractSet[str]) -> bool:
    return key in pinned or (record.process_name is not None and record.process_name in pinned)


def round_metric(value: Decimal) -> int:
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


class MetricPrinter:
    """
    Renders a cycle report as `name=<path>,value=<int>` metric lines.

    Attributes:
        metric_prefix: Path prefix prepended to every metric name.
        stream: Destination of the rendered lines.
    """

    INSTANCES = "Number of running instances"
    CPU_PERCENT = "CPU utilization in Percent"
    MEM_PERCENT = "Memory Utilization in Percent"
    MEM_ABSOLUTE = "Memory Utilization Absolute (MB)"
    TOTAL_MEMORY = "Memory" + METRIC_SEPARATOR + "Total Memory (MB)"

    def __init__(self, metric_prefix: str, stream: Optional[TextIO] = None):
        self.metric_prefix = metric_prefix.rstrip(METRIC_SEPARATOR)
        self.stream = stream or sys.stdout

    def metric_name(self, *parts: str) -> str:
        return METRIC_SEPARATOR.join((self.metric_prefix,) + parts)

    def metrics_for_report(self, report: CycleReport) -> List[Tuple[str, int]]:
        """
        Build the (name, value) pairs for a report, sorted by display key.

        Metrics that are None for a record are omitted.
        """
        metrics: List[Tuple[str, int]] = []
        if report.total_memory_bytes is not None:
            metrics.append((
                self.metric_name(self.TOTAL_MEMORY),
                round_metric(Decimal(report.total_memory_bytes) / BYTES_PER_MB),
            ))

        for key in sorted(report.reportable):
            record = report.reportable[key]
            metrics.append((self.metric_name(key, self.INSTANCES), record.instance_count))
            if record.cpu_percent is not None:
                metrics.append((self.metric_name(key, self.CPU_PERCENT), round_metric(record.cpu_percent)))
            if record.mem_percent is not None:
                metrics.append((self.metric_name(key, self.MEM_PERCENT), round_metric(record.mem_percent)))
            if record.absolute_memory_bytes is not None:
                metrics.append((
                    self.metric_name(key, self.MEM_ABSOLUTE),
                    round_metric(record.absolute_memory_bytes / BYTES_PER_MB),
                ))
        return metrics

    def print_report(self, report: CycleReport) -> int:
        """
        Write every metric of the report to the stream.

        Returns:
            Number of metric lines written.
        """
        metrics = self.metrics_for_report(report)
        for name, value in metrics:
            self.stream.write(f"name={name},value={value}\n")
        self.stream.flush()
        logger.debug(f"Printed {len(metrics)} metrics for {len(report.reportable)} processes")
        return len(metrics)
