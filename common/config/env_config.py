# common/config/env_config.py
import os
from typing import Callable, Optional, TypeVar
from common.api_error import ConfigurationError

T = TypeVar("T", int, float)


def get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    """
    Get Env variable with optional default
    """
    return os.getenv(name, default=default)


def require_env(name: str) -> str:
    """
    Get required environment variable or raise immediately.
    """
    value = os.getenv(name)
    if not value:
        raise ConfigurationError(f"Missing required env variables: {name}")
    return value


def get_env_bool(name: str, default: bool = False) -> bool:
    """Interpret true/1/yes (any case) as True."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("true", "1", "yes")


def _convert(name: str, raw: str, cast: Callable[[str], T]) -> T:
    try:
        return cast(raw.strip())
    except ValueError:
        raise ConfigurationError(
            f"Invalid {name}: {raw!r} is not a valid {cast.__name__}"
        ) from None


def require_env_number(name: str, cast: Callable[[str], T] = int) -> T:
    """Required numeric variable (DB_PORT, pool sizes...)."""
    return _convert(name, require_env(name), cast)


def get_env_number(name: str, default: T, cast: Callable[[str], T] = int) -> T:
    """Numeric variable falling back to ``default`` when unset or empty."""
    value = os.getenv(name)
    if not value:
        return default
    return _convert(name, value, cast)


__all__ = [
    "require_env",
    "get_env",
    "get_env_bool",
    "require_env_number",
    "get_env_number",
]
