"""
Process source using the Windows 'tasklist' command.

`tasklist /fo csv` prints one quoted CSV record per process:

    "Image Name","PID","Session Name","Session#","Mem Usage"
    "chrome.exe","4242","Console","1","123,456 K"

tasklist does not report CPU usage, so observations from this source carry
no CPU percent. Memory percent is derived from total physical memory.
"""

import csv
import logging
import re
from decimal import Decimal
from typing import List, Optional

from ..models.process import ProcessObservation, RawSnapshot
from ..parsing import kib_to_bytes, process_header_line, to_decimal
from ..validation import HeaderParseError
from .base import CommandProcessSource

logger = logging.getLogger(__name__)

# Thousands separators differ by locale: "1,234", "1.234", "1 234".
_THOUSANDS_SEPARATORS = re.compile(r"[,.\s]")


def parse_mem_usage(value: str, logger: Optional[logging.Logger] = None) -> Optional[Decimal]:
    """
    Convert a tasklist "Mem Usage" value such as "123,456 K" to bytes.

    Returns:
        The amount in bytes, or None if the value cannot be read.
    """
    token = value.strip()
    if token.upper().endswith("K"):
        token = token[:-1]
    token = _THOUSANDS_SEPARATORS.sub("", token)
    if not token:
        return None
    return kib_to_bytes(to_decimal(token, logger=logger))


class WindowsTasklistSource(CommandProcessSource):
    """
    Lists processes with `tasklist /fo csv`.
    """

    name = "tasklist"
    command = ("tasklist", "/fo", "csv")

    NAME_COLUMN = "Image Name"
    PID_COLUMN = "PID"
    MEM_COLUMN = "Mem Usage"

    def parse_snapshot(self, snapshot: RawSnapshot) -> List[ProcessObservation]:
        """
        Parse `tasklist /fo csv` output into observations.

        Raises:
            HeaderParseError: If a required column is missing from the header.
        """
        lines = [line for line in snapshot.lines if line.strip()]
        if not lines:
            raise HeaderParseError("tasklist output contains no header line")

        header = process_header_line(
            lines[0], self.NAME_COLUMN, self.PID_COLUMN, self.MEM_COLUMN, delimiter=","
        )
        total_memory = self.total_memory_bytes()

        observations: List[ProcessObservation] = []
        for row in csv.reader(lines[1:], skipinitialspace=True):
            observation = self._parse_row(row, header.columns, header.column_count, total_memory)
            if observation is not None:
                observations.append(observation)

        self.logger.debug(f"Parsed {len(observations)} processes from {len(lines) - 1} tasklist lines")
        return observations

    def _parse_row(
        self, row: List[str], columns: dict, column_count: int, total_memory: Optional[int]
    ) -> Optional[ProcessObservation]:
        if len(row) < column_count:
            self.logger.warning(f"Skipping malformed tasklist row: {row}")
            return None

        pid_str = row[columns[self.PID_COLUMN]].strip()
        try:
            pid = int(pid_str)
        except ValueError:
            self.logger.warning(f"Skipping tasklist row with invalid pid '{pid_str}': {row}")
            return None

        name = row[columns[self.NAME_COLUMN]].strip() or None
        absolute_memory = parse_mem_usage(row[columns[self.MEM_COLUMN]], logger=self.logger)

        mem_percent = None
        if absolute_memory is not None and total_memory:
            mem_percent = absolute_memory * 100 / Decimal(total_memory)

        return ProcessObservation(
            name=name,
            pid=pid,
            cpu_percent=None,
            mem_percent=mem_percent,
            absolute_memory_bytes=absolute_memory,
        )
