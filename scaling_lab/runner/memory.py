"""Process memory sampling against a fixed ceiling."""

from __future__ import annotations

import psutil

from scaling_lab.common.constants import MEMORY_CEILING_MB

_MB = 1024 * 1024


class MemoryMonitor:
    """Samples resident memory of the current process.

    Usage::

        monitor = MemoryMonitor()
        mb = monitor.sample()
        if monitor.is_over_ceiling(mb):
            ...
    """

    def __init__(self, ceiling_mb: float = MEMORY_CEILING_MB) -> None:
        self.ceiling_mb = ceiling_mb
        self._process = psutil.Process()

    def sample(self) -> float:
        """Current resident set size in megabytes."""
        return self._process.memory_info().rss / _MB

    def is_over_ceiling(self, sample_mb: float) -> bool:
        return is_over_ceiling(sample_mb, self.ceiling_mb)


def is_over_ceiling(sample_mb: float, ceiling_mb: float = MEMORY_CEILING_MB) -> bool:
    return sample_mb > ceiling_mb
