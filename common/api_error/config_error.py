# common/api_error/config_error.py
from typing import Iterable, Optional


class ConfigurationError(RuntimeError):
    """
    Invalid or missing configuration. Raised at startup only.

    ``problems`` holds one entry per offending setting when several were
    found at once.
    """

    def __init__(self, message: str, problems: Optional[Iterable[str]] = None):
        self.problems = list(problems or [])
        if self.problems:
            message = message + "\n" + "\n".join(f"  - {p}" for p in self.problems)
        super().__init__(message)


__all__ = ["ConfigurationError"]
