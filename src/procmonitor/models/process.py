"""
Process data models.

This module contains the structures that flow through one collection cycle:
raw command output, parsed per-line observations, and the aggregated
per-display-key records.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional


@dataclass
class RawSnapshot:
    """
    Captured output of one process-enumeration command.

    Attributes:
        command: The command line that produced the output.
        lines: Standard output split into lines, trailing newlines removed.
    """

    command: str
    lines: List[str] = field(default_factory=list)

    @classmethod
    def from_text(cls, command: str, text: str) -> "RawSnapshot":
        return cls(command=command, lines=text.splitlines())


@dataclass(frozen=True)
class ProcessObservation:
    """
    A single process as reported by a source.

    Any metric may be None when the source could not determine it.
    """

    name: Optional[str]
    pid: int
    cpu_percent: Optional[Decimal] = None
    mem_percent: Optional[Decimal] = None
    absolute_memory_bytes: Optional[Decimal] = None


@dataclass
class ProcessRecord:
    """
    Metrics accumulated for one display key during one cycle.

    Attributes:
        display_name: The display key (name, or "name|pid").
        instance_count: Number of observations folded into this record.
        cpu_percent: Sum of CPU percent over all instances.
        mem_percent: Sum of memory percent over all instances.
        absolute_memory_bytes: Sum of resident memory in bytes.
        process_name: The process name the key was built from.
    """

    display_name: str
    instance_count: int = 1
    cpu_percent: Optional[Decimal] = None
    mem_percent: Optional[Decimal] = None
    absolute_memory_bytes: Optional[Decimal] = None
    process_name: Optional[str] = None
