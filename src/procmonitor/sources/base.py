"""
Defines the interface that every process source implements.

This module provides:
- ProcessSource: An abstract base class (ABC) for anything that can list the
  processes running on this host as ProcessObservation objects.
- CommandProcessSource: A ProcessSource that runs a command (ps, tasklist)
  and parses its text output.
"""

import logging
import shlex
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence

import psutil

from ..models.process import ProcessObservation, RawSnapshot
from ..system.commands import DEFAULT_COMMAND_TIMEOUT, run_command
from ..validation import CommandSourceError

logger = logging.getLogger(__name__)


class ProcessSource(ABC):
    """
    Abstract base class for process sources.

    The collection core depends only on this interface, so the aggregation,
    threshold and include-list logic is the same on every platform.
    """

    name: str = "abstract"

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or globals()["logger"]

    @abstractmethod
    def read_observations(self) -> List[ProcessObservation]:
        """
        Take one snapshot of the running processes.

        Malformed entries are logged and skipped.

        Returns:
            One observation per process that could be parsed.

        Raises:
            ProcessMonitorError: If no snapshot could be taken at all.
        """
        pass

    def total_memory_bytes(self) -> Optional[int]:
        """
        Total physical memory of the host, or None if it cannot be determined.
        """
        try:
            return int(psutil.virtual_memory().total)
        except (OSError, RuntimeError, AttributeError) as e:
            self.logger.warning(f"Could not determine total physical memory: {e}")
            return None


class CommandProcessSource(ProcessSource):
    """
    A process source backed by a command-line tool.

    Subclasses provide the command and the parsing of its output.

    Attributes:
        command: The command and its arguments.
        timeout: Seconds before the command is killed.
        env: Extra environment variables for the command.
    """

    command: Sequence[str] = ()
    env: Optional[Dict[str, str]] = None

    def __init__(
        self,
        timeout: Optional[float] = DEFAULT_COMMAND_TIMEOUT,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(logger=logger)
        self.timeout = timeout

    def fetch_raw(self) -> RawSnapshot:
        """
        Run the command and capture its output.

        Raises:
            CommandSourceError: If the command fails or prints nothing.
        """
        command_str = shlex.join(self.command)
        return_code, stdout, stderr = run_command(
            self.command, timeout=self.timeout, env=self.env
        )
        if return_code != 0:
            raise CommandSourceError(
                f"Command '{command_str}' failed with exit code {return_code}: {stderr.strip()}",
                command=command_str,
                return_code=return_code,
                stderr=stderr,
            )
        if not stdout.strip():
            raise CommandSourceError(
                f"Command '{command_str}' produced no output",
                command=command_str,
                return_code=return_code,
                stderr=stderr,
            )
        return RawSnapshot.from_text(command_str, stdout)

    @abstractmethod
    def parse_snapshot(self, snapshot: RawSnapshot) -> List[ProcessObservation]:
        """
        Turn captured command output into observations.

        Raises:
            HeaderParseError: If the expected columns cannot be located.
        """
        pass

    def read_observations(self) -> List[ProcessObservation]:
        return self.parse_snapshot(self.fetch_raw())
