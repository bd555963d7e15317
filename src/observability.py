"""Observability: per-stage hit counters, handler timings, run summary logging."""

import threading
import time
from contextlib import contextmanager
from typing import Any

import structlog

logger = structlog.get_logger().bind(source="observability")


class Metrics:
    """Thread-safe dict-based collector for counters and timers."""

    def __init__(self):
        self._counters: dict[str, int] = {}
        self._timers: dict[str, list[float]] = {}
        self._lock = threading.Lock()

    def counter(self, name: str, value: int = 1):
        """Increment a counter by the given value."""
        with self._lock:
            self._counters[name] = self._counters.get(name, 0) + value

    def count(self, name: str) -> int:
        with self._lock:
            return self._counters.get(name, 0)

    @contextmanager
    def timer(self, name: str):
        """Context manager to time an operation and store duration."""
        start = time.perf_counter()
        try:
            yield
        finally:
            duration = time.perf_counter() - start
            with self._lock:
                self._timers.setdefault(name, []).append(duration)

    def summary(self) -> dict[str, Any]:
        """Counters plus count/avg/max per timer, in milliseconds."""
        with self._lock:
            counters = dict(self._counters)
            timers = {name: list(d) for name, d in self._timers.items()}

        timer_summary = {}
        for name, durations in timers.items():
            if not durations:
                timer_summary[name] = {"count": 0}
                continue
            timer_summary[name] = {
                "count": len(durations),
                "avg_ms": round(sum(durations) / len(durations) * 1000, 2),
                "max_ms": round(max(durations) * 1000, 2),
            }
        return {"counters": counters, "timers": timer_summary}

    def reset(self):
        with self._lock:
            self._counters.clear()
            self._timers.clear()


# Module-level singleton
metrics = Metrics()


def log_run_summary(collector: Metrics | None = None):
    """Log the current metrics summary via structlog."""
    summary = (collector or metrics).summary()
    logger.info("run_summary", **summary)
