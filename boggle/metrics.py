import logging
import time
from contextlib import contextmanager

logger = logging.getLogger("boggle")


class StageTimer:
    """Per-stage timings and counters for one solve (HTTP request or CLI run)."""

    def __init__(self):
        self.timings: dict[str, float] = {}
        self.counters: dict[str, int] = {}
        self._start = time.perf_counter()

    @contextmanager
    def stage(self, name: str):
        t0 = time.perf_counter()
        try:
            yield
        finally:
            elapsed = time.perf_counter() - t0
            self.timings[name] = round(elapsed * 1000, 1)  # ms
            logger.info("stage=%s elapsed=%.1fms", name, self.timings[name])

    def count(self, name: str, value: int):
        self.counters[name] = self.counters.get(name, 0) + value

    @property
    def total_ms(self) -> float:
        return round((time.perf_counter() - self._start) * 1000, 1)

    def summary(self) -> dict:
        return {**self.timings, **self.counters, "total": self.total_ms}
