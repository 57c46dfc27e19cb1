# common/config/initialize_config.py
"""
Configuration initialization module.

Handles the complete application configuration lifecycle.
"""
from typing import Optional, List
from pydantic import ValidationError
from .app_config import AppConfig, load_app_config
from .structlog_config import configure_structlog, get_logger
from common.api_error import ConfigurationError


class _ConfigState:
    """
    Process-wide holder for the validated application configuration.
    """

    _instance: Optional["_ConfigState"] = None
    _config: Optional[AppConfig]

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._config = None
        return cls._instance

    @property
    def config(self) -> AppConfig:
        """Get application configuration."""
        if not self._config:
            raise RuntimeError(
                "Configuration not initialized. Call initialize_config() at startup."
            )
        return self._config

    @property
    def is_initialized(self) -> bool:
        return self._config is not None

    def set_config(self, config: AppConfig) -> None:
        self._config = config


_state = _ConfigState()


def initialize_config() -> None:
    """
    Initialize and validate all application configuration.

    This MUST be called once at application startup before any other code.
    Calling it again is a no-op, so the API module and test fixtures can
    both call it.

    Raises:
        ConfigurationError: If configuration is invalid or missing
    """
    if _state.is_initialized:
        return

    try:
        config = load_app_config()
        configure_structlog(config.logging.level_int, json_output=config.logging.json_output)
        _state.set_config(config)
        _log_summary(config)

    except ValidationError as e:
        # Convert Pydantic errors to ConfigurationError with better messages
        problems: List[str] = [
            f"{'.'.join(str(x) for x in error['loc'])}: {error['msg']}"
            for error in e.errors()
        ]
        raise ConfigurationError("Configuration validation failed:", problems) from e


def _log_summary(config: AppConfig) -> None:
    database = config.database
    get_logger("config").info(
        "Configuration loaded",
        environment=config.environment.value,
        version=config.app_version,
        log_format=config.logging.log_format.value,
        database=database.get_connection_url() if database else None,
        auto_create_schema=database.auto_create_schema if database else False,
        token_minutes=config.jwt.expiration_minutes,
    )


def get_config() -> AppConfig:
    """
    Get validated application configuration.

    Raises:
        RuntimeError: If not initialized
    """
    return _state.config


__all__ = ["initialize_config", "get_config"]
