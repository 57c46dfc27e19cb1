# common/config/structlog_config.py
"""
structlog setup, done once per process by configure_structlog().

Development gets coloured console lines with Rich tracebacks; LOG_FORMAT=json
switches to one JSON object per line for log shippers.
"""
import os
import sys
import threading
from typing import Any, List, Optional
import structlog
from rich.traceback import install as install_rich_traceback

install_rich_traceback(show_locals=False, width=None, extra_lines=3)

# Frames from these packages are collapsed in rendered tracebacks
_SUPPRESSED_FRAMES = ["starlette", "uvicorn", "fastapi", "sqlalchemy"]


class _StructlogState:
    """
    Records which process configured structlog and at what level.

    uvicorn --reload forks workers; each one must configure itself, so the
    pid is part of the state.
    """

    _lock = threading.Lock()

    def __init__(self) -> None:
        self.log_level: Optional[int] = None
        self.process_id: Optional[int] = None

    @property
    def is_configured(self) -> bool:
        return self.process_id == os.getpid()

    def mark_configured(self, log_level: int) -> None:
        with self._lock:
            self.log_level = log_level
            self.process_id = os.getpid()

    def reset(self) -> None:
        """FOR TESTING ONLY."""
        with self._lock:
            self.log_level = None
            self.process_id = None


_state = _StructlogState()


def _renderer(json_output: bool) -> Any:
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(
            show_locals=False,
            width=None,
            suppress=_SUPPRESSED_FRAMES,
        ),
    )


def configure_structlog(log_level: int, json_output: bool = False) -> None:
    """
    Configure structlog for this process.

    Args:
        log_level: Numeric logging level (e.g., logging.INFO)
        json_output: Render JSON lines instead of console output

    Raises:
        RuntimeError: If already configured in this process with another level
    """
    if _state.is_configured:
        if _state.log_level == log_level:
            return
        raise RuntimeError(
            f"structlog already configured in this process. "
            f"Current level: {_state.log_level}, attempted: {log_level}"
        )

    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]
    if json_output:
        processors += [
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.dict_tracebacks,
        ]
    else:
        processors.append(structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=False))
    processors.append(_renderer(json_output))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    _state.mark_configured(log_level)


def get_logger(name: str = "app") -> structlog.BoundLogger:
    """
    Raises:
        RuntimeError: If structlog hasn't been configured in this process
    """
    if not _state.is_configured:
        raise RuntimeError(
            "structlog not configured. "
            "Call configure_structlog() at application startup."
        )
    return structlog.get_logger(name)


def is_configured() -> bool:
    return _state.is_configured


__all__ = [
    "configure_structlog",
    "get_logger",
    "is_configured",
]
