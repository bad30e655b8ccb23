"""Metrics Collector: process-wide request and error counters.

Invariants:
    - Counters never decrease; reset only by building a new collector
    - Increments are lock-guarded (no lost updates from threadpool callers)
    - get_stats() reads both counters under the lock but callers must not
      rely on the pair being consistent with any single request

Design Decisions:
    - One collector per application (app.state.metrics), injected into routes
      and middleware: tests build a fresh one per app
"""

from dataclasses import dataclass
from threading import Lock


@dataclass(frozen=True)
class MetricsStats:
    """Point-in-time snapshot of the counters."""
    requests: int
    errors: int

    def to_response(self) -> dict:
        return {"requests": self.requests, "error": self.errors}


class MetricsCollector:
    """Thread-safe request/error counters."""

    def __init__(self):
        self._lock = Lock()
        self._requests = 0
        self._errors = 0

    def record_request(self) -> None:
        with self._lock:
            self._requests += 1

    def record_error(self) -> None:
        with self._lock:
            self._errors += 1

    def get_stats(self) -> MetricsStats:
        with self._lock:
            return MetricsStats(requests=self._requests, errors=self._errors)
