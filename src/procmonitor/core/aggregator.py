"""
Per-cycle aggregation of process observations.

The aggregator folds every observation of a cycle into one ProcessRecord per
display key. Several processes sharing a display key (for example all "java"
instances) are merged: their instance count is incremented and their metrics
are summed.
"""

import dataclasses
import logging
from decimal import Decimal
from typing import Dict, FrozenSet, Iterable, Optional

from ..models.process import ProcessObservation, ProcessRecord

logger = logging.getLogger(__name__)

METRIC_SEPARATOR = "|"
ESCAPE_CHAR = "\\"


def add_optional(current: Optional[Decimal], value: Optional[Decimal]) -> Optional[Decimal]:
    """
    Add two possibly-missing amounts.

    A missing amount contributes nothing; the result is None only when both
    sides are missing.
    """
    if value is None:
        return current
    if current is None:
        return value
    return current + value


def escape_name(name: str) -> str:
    """
    Escape the separator inside a process name.

    The escape is reversible, so two different names never share a key.

    Examples:
        >>> escape_name("a|b")
        'a\\\\|b'
    """
    return name.replace(ESCAPE_CHAR, ESCAPE_CHAR * 2).replace(
        METRIC_SEPARATOR, ESCAPE_CHAR + METRIC_SEPARATOR
    )


def make_display_key(name: str, pid: int, display_by_pid: bool) -> str:
    """
    Build the display key for a process.

    The name is escaped so that "name|pid" keys and metric paths stay
    unambiguous.

    Examples:
        >>> make_display_key("java", 100, False)
        'java'
        >>> make_display_key("java", 100, True)
        'java|100'
    """
    key = escape_name(name)
    if display_by_pid:
        key = f"{key}{METRIC_SEPARATOR}{pid}"
    return key


class ProcessAggregator:
    """
    Maps display keys to the metrics accumulated during the current cycle.

    Exclusions are applied before anything is written; the include list is
    not consulted here.

    Attributes:
        display_by_pid: Whether display keys carry the PID.
        exclude_processes: Display keys or raw process names that are dropped.
        exclude_pids: PIDs that are dropped.
    """

    def __init__(
        self,
        display_by_pid: bool = False,
        exclude_processes: Iterable[str] = (),
        exclude_pids: Iterable[int] = (),
        logger: Optional[logging.Logger] = None,
    ):
        self.display_by_pid = display_by_pid
        self.exclude_processes: FrozenSet[str] = frozenset(exclude_processes)
        self.exclude_pids: FrozenSet[int] = frozenset(exclude_pids)
        self.logger = logger or globals()["logger"]
        self._processes: Dict[str, ProcessRecord] = {}

    def __len__(self) -> int:
        return len(self._processes)

    def __contains__(self, display_key: str) -> bool:
        return display_key in self._processes

    def reset(self) -> None:
        """Drop all records; called at the start of every cycle."""
        self._processes.clear()

    def is_excluded(self, name: str, display_key: str, pid: int) -> bool:
        return (
            display_key in self.exclude_processes
            or name in self.exclude_processes
            or pid in self.exclude_pids
        )

    def observe(
        self,
        name: Optional[str],
        pid: int,
        cpu_percent: Optional[Decimal],
        mem_percent: Optional[Decimal],
        absolute_memory_bytes: Optional[Decimal],
    ) -> None:
        """
        Fold one observed process into the current cycle.

        Args:
            name: Process name, None when the source could not identify it.
            pid: Process ID.
            cpu_percent: CPU utilization in percent, or None.
            mem_percent: Memory utilization in percent, or None.
            absolute_memory_bytes: Resident memory in bytes, or None.
        """
        if name is None:
            self.logger.warning(f"Could not retrieve the name of process with pid {pid}")
            return

        display_key = make_display_key(name, pid, self.display_by_pid)
        if self.is_excluded(name, display_key, pid):
            self.logger.debug(f"Skipping excluded process {display_key} (pid {pid})")
            return

        record = self._processes.get(display_key)
        if record is None:
            self._processes[display_key] = ProcessRecord(
                display_name=display_key,
                process_name=name,
                instance_count=1,
                cpu_percent=cpu_percent,
                mem_percent=mem_percent,
                absolute_memory_bytes=absolute_memory_bytes,
            )
            return

        record.instance_count += 1
        record.cpu_percent = add_optional(record.cpu_percent, cpu_percent)
        record.mem_percent = add_optional(record.mem_percent, mem_percent)
        record.absolute_memory_bytes = add_optional(
            record.absolute_memory_bytes, absolute_memory_bytes
        )

    def observe_all(self, observations: Iterable[ProcessObservation]) -> None:
        for obs in observations:
            self.observe(
                obs.name,
                obs.pid,
                obs.cpu_percent,
                obs.mem_percent,
                obs.absolute_memory_bytes,
            )

    def get_processes(self) -> Dict[str, ProcessRecord]:
        """
        Return a snapshot of the current records.

        The mapping and the records are copies, so callers may modify them
        without affecting the aggregator.
        """
        return {
            key: dataclasses.replace(record)
            for key, record in self._processes.items()
        }
