"""
Process source using the POSIX 'ps' command.

This module provides the PosixPsSource class, which runs
`ps -e -o pid,pcpu,pmem,rss,comm` and parses its column output. Columns are
located through the header line because their order and spacing differ
between Linux and BSD-derived systems.
"""

import logging
import os
from typing import List, Optional

from ..models.process import ProcessObservation, RawSnapshot
from ..parsing import kib_to_bytes, process_header_line, to_decimal
from ..validation import HeaderParseError
from .base import CommandProcessSource

logger = logging.getLogger(__name__)


class PosixPsSource(CommandProcessSource):
    """
    Lists processes with `ps`.

    `LC_ALL=C` is set for the command so decimal points and header names do
    not depend on the user's locale. RSS is reported by ps in KiB and is
    converted to bytes.
    """

    name = "ps"
    command = ("ps", "-e", "-o", "pid,pcpu,pmem,rss,comm")
    env = {"LC_ALL": "C"}

    PID_COLUMN = "PID"
    CPU_COLUMN = "%CPU"
    MEM_COLUMN = "%MEM"
    RSS_COLUMN = "RSS"
    # Linux prints "COMMAND", macOS prints "COMM"; prefix matching covers both.
    COMMAND_COLUMN = "COMM"

    def parse_snapshot(self, snapshot: RawSnapshot) -> List[ProcessObservation]:
        """
        Parse `ps` output into observations.

        Args:
            snapshot: Captured ps output, header line first.

        Returns:
            One observation per well-formed data line.

        Raises:
            HeaderParseError: If a required column is missing from the header.
        """
        lines = [line for line in snapshot.lines if line.strip()]
        if not lines:
            raise HeaderParseError("ps output contains no header line")

        header = process_header_line(
            lines[0],
            self.PID_COLUMN,
            self.CPU_COLUMN,
            self.MEM_COLUMN,
            self.RSS_COLUMN,
            self.COMMAND_COLUMN,
        )
        command_index = header.index_of(self.COMMAND_COLUMN)
        if command_index != header.column_count - 1:
            # The command may contain spaces, so it has to be the last column.
            raise HeaderParseError(
                f"Command column must be last in ps header: '{lines[0].strip()}'",
                header_line=lines[0],
            )

        observations: List[ProcessObservation] = []
        for line in lines[1:]:
            observation = self._parse_line(line, header.columns, header.column_count)
            if observation is not None:
                observations.append(observation)

        self.logger.debug(f"Parsed {len(observations)} processes from {len(lines) - 1} ps lines")
        return observations

    def _parse_line(self, line: str, columns: dict, column_count: int) -> Optional[ProcessObservation]:
        parts = line.split(None, column_count - 1)
        if len(parts) < column_count:
            # An empty command leaves the line one field short.
            if len(parts) == column_count - 1:
                parts.append("")
            else:
                self.logger.warning(f"Skipping malformed ps line: '{line.strip()}'")
                return None

        pid_str = parts[columns[self.PID_COLUMN]]
        try:
            pid = int(pid_str)
        except ValueError:
            self.logger.warning(f"Skipping ps line with invalid pid '{pid_str}': '{line.strip()}'")
            return None

        return ProcessObservation(
            name=self._process_name(parts[columns[self.COMMAND_COLUMN]]),
            pid=pid,
            cpu_percent=to_decimal(parts[columns[self.CPU_COLUMN]], logger=self.logger),
            mem_percent=to_decimal(parts[columns[self.MEM_COLUMN]], logger=self.logger),
            absolute_memory_bytes=kib_to_bytes(
                to_decimal(parts[columns[self.RSS_COLUMN]], logger=self.logger)
            ),
        )

    @staticmethod
    def _process_name(command: str) -> Optional[str]:
        """
        Extract the process name from the command column.

        macOS reports the executable path, Linux the short name, which may
        itself contain a slash (e.g. "kworker/0:1"), so only absolute paths
        are reduced to their basename.
        """
        command = command.strip()
        if not command:
            return None
        if command.startswith("/"):
            return os.path.basename(command) or None
        return command
