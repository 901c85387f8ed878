"""
Process source implementation using the 'psutil' library.

Works on every platform psutil supports and needs no external command. CPU
percent is measured by psutil against the previous call for the same process,
so the very first cycle reports 0.0 for every process.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

import psutil

from ..models.process import ProcessObservation
from .base import ProcessSource

logger = logging.getLogger(__name__)


def _decimal_or_none(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    # str() first so the float's shortest repr is kept, not its binary expansion
    return Decimal(str(value))


class PsutilSource(ProcessSource):
    """
    Lists processes with `psutil.process_iter`.

    Processes that vanish or deny access while being inspected are skipped.
    """

    name = "psutil"

    _ITER_ATTRS = ["pid", "name", "cpu_percent", "memory_percent", "memory_info"]

    def read_observations(self) -> List[ProcessObservation]:
        observations: List[ProcessObservation] = []
        for proc in psutil.process_iter(self._ITER_ATTRS):
            try:
                info: Dict[str, Any] = proc.info
            except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
                continue
            observation = self._observation_from_info(info)
            if observation is not None:
                observations.append(observation)

        self.logger.debug(f"Read {len(observations)} processes via psutil")
        return observations

    def _observation_from_info(self, info: Dict[str, Any]) -> Optional[ProcessObservation]:
        pid = info.get("pid")
        if pid is None:
            return None

        memory_info = info.get("memory_info")
        rss = getattr(memory_info, "rss", None) if memory_info is not None else None

        return ProcessObservation(
            name=info.get("name") or None,
            pid=int(pid),
            cpu_percent=_decimal_or_none(info.get("cpu_percent")),
            mem_percent=_decimal_or_none(info.get("memory_percent")),
            absolute_memory_bytes=_decimal_or_none(rss),
        )
