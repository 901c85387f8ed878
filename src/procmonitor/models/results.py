"""
Collection result models.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .process import ProcessRecord


@dataclass
class CycleReport:
    """
    Outcome of one collection cycle.
    """

    # Every aggregated record of the cycle, keyed by display key.
    records: Dict[str, ProcessRecord] = field(default_factory=dict)
    # The subset that passed the threshold or is pinned.
    reportable: Dict[str, ProcessRecord] = field(default_factory=dict)
    threshold: int = 100
    total_memory_bytes: Optional[int] = None
    # Display keys pinned for the first time during this cycle.
    newly_pinned: List[str] = field(default_factory=list)
    source_failed: bool = False
