"""
One collection cycle: snapshot, aggregate, select, pin.

The cycle ties together a process source, the aggregator, the threshold
policy and the include-list store. It never raises for data problems: a
source that cannot produce a snapshot yields an empty report and the next
cycle tries again.
"""

import logging
from typing import List, Optional

from ..core.aggregator import ProcessAggregator
from ..core.include_store import IncludeListStore
from ..core.reporting import is_pinned, meets_threshold, select_reportable
from ..core.threshold import ThresholdPolicy
from ..models.config import MonitorConfig
from ..models.results import CycleReport
from ..sources.base import ProcessSource
from ..validation import ErrorSeverity, ProcessMonitorError, handle_error

logger = logging.getLogger(__name__)


class CollectionCycle:
    """
    Runs collection cycles against one source.

    The aggregator is owned by the cycle and reset at the start of every run,
    so it holds exactly one cycle's worth of state.

    Attributes:
        config: Collector configuration.
        source: Where process snapshots come from.
        include_store: Pinned process names, already loaded.
        aggregator: Per-cycle process records.
        policy: Memory threshold policy.
    """

    def __init__(
        self,
        config: MonitorConfig,
        source: ProcessSource,
        include_store: IncludeListStore,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config
        self.source = source
        self.include_store = include_store
        self.logger = logger or globals()["logger"]
        self.aggregator = ProcessAggregator(
            display_by_pid=config.display_by_pid,
            exclude_processes=config.exclude_processes,
            exclude_pids=config.exclude_pids,
            logger=self.logger,
        )
        self.policy = ThresholdPolicy(config.memory_threshold_percent)

    def run(self) -> CycleReport:
        """
        Execute one cycle.

        Returns:
            The cycle report. On a source failure `source_failed` is set and
            no records are present.
        """
        self.aggregator.reset()
        threshold = self.policy.effective_threshold()

        try:
            observations = self.source.read_observations()
        except ProcessMonitorError as e:
            handle_error(
                error=e,
                context=f"reading processes from '{self.source.name}'",
                severity=ErrorSeverity.WARNING,
                reraise=False,
                logger=self.logger,
            )
            return CycleReport(threshold=threshold, source_failed=True)

        self.aggregator.observe_all(observations)
        records = self.aggregator.get_processes()

        newly_pinned: List[str] = []
        if self.config.pin_over_threshold:
            newly_pinned = self._pin_over_threshold(records, threshold)

        reportable = select_reportable(records, threshold, self.include_store.names)
        self.logger.info(
            f"Cycle complete: {len(observations)} processes observed, "
            f"{len(records)} aggregated, {len(reportable)} reportable "
            f"(threshold {threshold}%)"
        )
        return CycleReport(
            records=records,
            reportable=reportable,
            threshold=threshold,
            total_memory_bytes=self.source.total_memory_bytes(),
            newly_pinned=newly_pinned,
        )

    def _pin_over_threshold(self, records, threshold: int) -> List[str]:
        pinned = self.include_store.names
        newly_pinned = [
            key
            for key in sorted(records)
            if meets_threshold(records[key], threshold)
            and not is_pinned(key, records[key], pinned)
            and self.include_store.add(key)
        ]
        if newly_pinned:
            self.logger.info(f"Pinned {len(newly_pinned)} processes over threshold: {newly_pinned}")
            self.include_store.save()
        return newly_pinned
