"""Stage timing helpers for pipeline runs."""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from arima_pipeline.utils.logging import get_logger

log = get_logger(__name__, component="profiling")


@dataclass
class Timing:
    wall: float
    cpu: float


def _now() -> Timing:
    return Timing(wall=time.perf_counter(), cpu=time.process_time())


@contextmanager
def track_time(name: str, *, warn_budget: float | None = None) -> Iterator[Timing]:
    start = _now()
    try:
        yield start
    finally:
        end = _now()
        wall_elapsed = end.wall - start.wall
        extra = {
            "segment": name,
            "duration_ms": round(wall_elapsed * 1000, 2),
            "cpu_seconds": round(end.cpu - start.cpu, 4),
        }
        if warn_budget is not None and wall_elapsed >= warn_budget:
            log.warning("Stage exceeded time budget", extra=extra)
        else:
            log.info("Stage timing", extra=extra)


__all__ = ["Timing", "track_time"]
