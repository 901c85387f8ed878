"""
Memory threshold policy.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_MEMORY_THRESHOLD = 100


class ThresholdPolicy:
    """
    Decides the memory-percent threshold a process must reach to be reported.

    An unset threshold (None) and a configured 0 both fall back to
    DEFAULT_MEMORY_THRESHOLD, which in practice reports pinned processes only.
    """

    def __init__(self, memory_threshold_percent: Optional[int] = None):
        self.memory_threshold_percent = memory_threshold_percent

    def effective_threshold(self) -> int:
        configured = self.memory_threshold_percent
        if configured is None or configured <= 0:
            return DEFAULT_MEMORY_THRESHOLD
        return configured
