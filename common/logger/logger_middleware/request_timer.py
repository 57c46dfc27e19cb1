# common/logger/logger_middleware/request_timer.py
import time
from contextlib import contextmanager
from typing import Dict, Iterator


class RequestTimer:
    """Per-request accumulator of named durations (milliseconds) and SQL counts."""

    def __init__(self) -> None:
        self.timings: Dict[str, float] = {}
        self.query_count = 0

    @contextmanager
    def capture(self, name: str) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            self.add(name, (time.perf_counter() - start) * 1000)

    def add(self, name: str, duration_ms: float) -> None:
        self.timings[name] = self.timings.get(name, 0.0) + duration_ms

    def record_query(self, duration_ms: float) -> None:
        self.query_count += 1
        self.add("sql", duration_ms)

    def format_server_timing(self) -> str:
        # app;dur=10.50, sql;dur=2.10
        return ", ".join(f"{name};dur={dur:.2f}" for name, dur in self.timings.items())


__all__ = ["RequestTimer"]
