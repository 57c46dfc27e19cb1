# common/logger/logger.py
"""
Application logger with lazy structlog binding and optional timing.

Usage:
    from common.logger import get_app_logger

    logger = get_app_logger("polyclinic.booking")
    logger.info("Appointment booked", appointment_no=7)

    # Measure how long logging calls take
    timed = get_app_logger("api", track_timing=True)
    timed.get_timing_stats()
"""

import time
from typing import Any, Dict, Optional
import structlog

from common.config.structlog_config import get_logger as _get_structlog_logger


class TimingStats:
    """Running totals of how long logging calls took."""

    def __init__(self) -> None:
        self.reset()

    def record(self, elapsed: float) -> None:
        self.total_calls += 1
        self.total_time += elapsed
        if elapsed > self.max_time:
            self.max_time = elapsed
        if elapsed < self.min_time:
            self.min_time = elapsed

    def get_stats(self) -> Dict[str, Any]:
        calls = self.total_calls
        return {
            "total_calls": calls,
            "avg_time_ms": (self.total_time / calls) * 1000 if calls else 0.0,
            "max_time_ms": self.max_time * 1000,
            "min_time_ms": self.min_time * 1000 if calls else 0.0,
        }

    def reset(self) -> None:
        self.total_calls = 0
        self.total_time = 0.0
        self.max_time = 0.0
        self.min_time = float("inf")


class AppLogger:
    """
    Thin wrapper over a structlog logger.

    The underlying logger is fetched on first use so modules can create
    their loggers at import time, before configure_structlog() has run.
    """

    def __init__(self, name: str = "app", track_timing: bool = False) -> None:
        self._name = name
        self._bound: Optional[structlog.BoundLogger] = None
        self._timing_stats: Optional[TimingStats] = (
            TimingStats() if track_timing else None
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def _logger(self) -> structlog.BoundLogger:
        if self._bound is None:
            self._bound = _get_structlog_logger(self._name)
        return self._bound

    def _emit(self, level: str, msg: str, **kwargs: Any) -> None:
        if self._timing_stats is None:
            getattr(self._logger, level)(msg, **kwargs)
            return

        started = time.perf_counter()
        try:
            getattr(self._logger, level)(msg, **kwargs)
        finally:
            self._timing_stats.record(time.perf_counter() - started)

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._emit("debug", msg, **kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._emit("info", msg, **kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self._emit("warning", msg, **kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self._emit("error", msg, **kwargs)

    def critical(self, msg: str, **kwargs: Any) -> None:
        self._emit("critical", msg, **kwargs)

    def exception(self, msg: str, **kwargs: Any) -> None:
        """Log at error level with the active exception attached."""
        kwargs.setdefault("exc_info", True)
        self._emit("error", msg, **kwargs)

    def get_timing_stats(self) -> Dict[str, Any]:
        """
        Timing totals for this logger.

        Returns a dict with an ``error`` key when timing was not enabled.
        """
        if self._timing_stats is None:
            return {"error": "Timing tracking not enabled"}
        return self._timing_stats.get_stats()

    def reset_timing_stats(self) -> None:
        if self._timing_stats is not None:
            self._timing_stats.reset()


def get_app_logger(name: str = "app", track_timing: bool = False) -> AppLogger:
    """
    Get an application logger.

    Args:
        name: Logger name, shown in every rendered line
        track_timing: Record per-call timing, exposed through /metrics
    """
    return AppLogger(name=name, track_timing=track_timing)


logger = get_app_logger()

__all__ = ["logger", "AppLogger", "TimingStats", "get_app_logger"]
