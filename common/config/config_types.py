# common/config/config_types.py
"""Enumerations accepted by environment variables."""

from enum import Enum
import logging


class EnvLogLevel(str, Enum):
    """LOG_LEVEL values; ``level`` maps to the stdlib numeric level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def level(self) -> int:
        return logging.getLevelName(self.value)

    def __str__(self) -> str:
        return self.value


class LogFormat(str, Enum):
    """LOG_FORMAT values: coloured console lines or one JSON object per line."""

    CONSOLE = "console"
    JSON = "json"


class Environment(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"

    @property
    def is_production(self) -> bool:
        return self is Environment.PRODUCTION

    def __str__(self) -> str:
        return self.value


class DbDriver(str, Enum):
    """DB_DRIVER values, named after the async DBAPI driver."""

    ASYNCPG = "asyncpg"
    PSYCOPG = "psycopg"
    AIOSQLITE = "aiosqlite"

    @property
    def is_file_based(self) -> bool:
        """SQLite needs no host, credentials or pool sizing."""
        return self is DbDriver.AIOSQLITE


class SslMode(str, Enum):
    """libpq sslmode names, also used to build asyncpg SSL contexts."""

    DISABLE = "disable"
    ALLOW = "allow"
    PREFER = "prefer"
    REQUIRE = "require"
    VERIFY_CA = "verify-ca"
    VERIFY_FULL = "verify-full"


__all__ = [
    "EnvLogLevel",
    "LogFormat",
    "Environment",
    "DbDriver",
    "SslMode",
]
