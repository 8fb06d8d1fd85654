"""
Lightweight profiling for worklist fetches and pipeline runs.

Measures wall-clock time (perf_counter) and resident memory (psutil) around
a block. The controller wraps every data source fetch in `profile_block`
and logs the result, which is how slow remote endpoints show up in logs.

Usage:
    from worklist.utils.profiler import profile_block

    with profile_block("fetch") as stats:
        rows = await source.fetch(params)
    stats.extra["rows"] = len(rows)

    print(stats.duration_seconds, stats.rss_delta_bytes)
"""

from __future__ import annotations

import contextlib
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Generator, Optional

import psutil


@dataclass
class ProfileStats:
    """
    Container for profiling measurements.
    """

    label: str
    start_ts: float = field(default=0.0)
    end_ts: float = field(default=0.0)
    duration_seconds: float = field(default=0.0)
    start_rss_bytes: Optional[int] = field(default=None)
    end_rss_bytes: Optional[int] = field(default=None)
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def rss_delta_bytes(self) -> Optional[int]:
        if self.start_rss_bytes is None or self.end_rss_bytes is None:
            return None
        return self.end_rss_bytes - self.start_rss_bytes

    def as_log_extra(self) -> Dict[str, Any]:
        """Flatten the measurements into a dict suitable for `log.info(extra=...)`."""
        payload: Dict[str, Any] = {
            "label": self.label,
            "duration_seconds": round(self.duration_seconds, 4),
            "rss_delta_bytes": self.rss_delta_bytes,
        }
        payload.update(self.extra)
        return payload


def _current_rss(process: psutil.Process) -> Optional[int]:
    try:
        return process.memory_info().rss
    except psutil.Error:
        return None


@contextlib.contextmanager
def profile_block(label: str) -> Generator[ProfileStats, None, None]:
    """
    Context manager to profile a block of code.

    Works inside coroutines as well: the measured interval includes any time
    spent awaiting inside the block.

    Parameters
    ----------
    label : str
        Human-friendly label for the profiled block.
    """
    stats = ProfileStats(label=label)
    process = psutil.Process()
    stats.start_rss_bytes = _current_rss(process)
    stats.start_ts = time.perf_counter()
    try:
        yield stats
    finally:
        stats.end_ts = time.perf_counter()
        stats.duration_seconds = stats.end_ts - stats.start_ts
        stats.end_rss_bytes = _current_rss(process)


__all__ = ["ProfileStats", "profile_block"]
