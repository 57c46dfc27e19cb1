# common/config/logging_config.py
from dataclasses import dataclass
from .env_config import get_env, require_env
from .config_types import EnvLogLevel, LogFormat
from common.api_error import ConfigurationError


@dataclass(frozen=True)
class LoggingConfig:
    log_level: EnvLogLevel
    log_format: LogFormat = LogFormat.CONSOLE

    @property
    def level_value(self) -> str:
        return self.log_level.value

    @property
    def level_int(self) -> int:
        return self.log_level.level

    @property
    def json_output(self) -> bool:
        return self.log_format is LogFormat.JSON


def load_logging_config() -> LoggingConfig:
    """
    Read LOG_LEVEL (required) and LOG_FORMAT (console by default).

    Raises:
        ConfigurationError: If a value is missing or not recognised
    """
    raw_level = require_env("LOG_LEVEL").upper()
    raw_format = (get_env("LOG_FORMAT") or LogFormat.CONSOLE.value).lower()

    problems = []
    if raw_level not in EnvLogLevel.__members__:
        problems.append(f"LOG_LEVEL must be one of {[m.value for m in EnvLogLevel]}")
    if raw_format not in {m.value for m in LogFormat}:
        problems.append(f"LOG_FORMAT must be one of {[m.value for m in LogFormat]}")
    if problems:
        raise ConfigurationError("Invalid logging configuration.", problems)

    return LoggingConfig(log_level=EnvLogLevel(raw_level), log_format=LogFormat(raw_format))


__all__ = [
    "LoggingConfig",
    "load_logging_config",
]
