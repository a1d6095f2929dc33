"""Timing spans for request and LLM logging."""

import time
from contextlib import contextmanager
from typing import Iterator, Optional

from recipe_planner.logging import get_logger

logger = get_logger(__name__)

# Prefix for all timing logs so they stand out and are easy to grep
TIMING_PREFIX = "[TIMING]"


def format_duration(ms: int) -> str:
    """Return human-readable duration: e.g. 12500 -> '12.5s', 750 -> '750ms'."""
    if ms >= 1000:
        return f"{ms / 1000:.1f}s"
    return f"{ms}ms"


class Span:
    def __init__(self, name: str):
        self.name = name
        self._start = time.perf_counter()
        self._elapsed_ms: Optional[int] = None

    def stop(self) -> int:
        if self._elapsed_ms is None:
            self._elapsed_ms = int((time.perf_counter() - self._start) * 1000)
        return self._elapsed_ms

    @property
    def elapsed_ms(self) -> int:
        if self._elapsed_ms is not None:
            return self._elapsed_ms
        return int((time.perf_counter() - self._start) * 1000)


@contextmanager
def time_span(name: str, **extra: object) -> Iterator[Span]:
    """Log elapsed time of the block, with optional key=value fields."""
    span = Span(name)
    try:
        yield span
    finally:
        elapsed = span.stop()
        parts = [f"elapsed_ms={elapsed}", f"({format_duration(elapsed)})"] + [
            f"{k}={v}" for k, v in extra.items()
        ]
        logger.info("%s %s %s", TIMING_PREFIX, name, " ".join(parts))
