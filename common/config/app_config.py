# common/config/app_config.py
"""
Application settings read from the environment.

``AppConfig`` bundles logging, database, bearer-token and API settings;
every model is frozen once loaded.
"""

from pathlib import Path
from typing import Optional, Any
from pydantic import BaseModel, Field, field_validator, model_validator, SecretStr
from .config_types import EnvLogLevel, DbDriver, SslMode, Environment
from .env_config import (
    require_env,
    get_env,
    get_env_bool,
    require_env_number,
    get_env_number,
)
from .logging_config import LoggingConfig, load_logging_config
from common.api_error import ConfigurationError


class SslConfig(BaseModel):
    """TLS settings for server databases (DB_SSL_*)."""

    mode: SslMode
    cert_path: Optional[Path] = None
    key_path: Optional[Path] = None
    ca_path: Optional[Path] = None

    model_config = {"frozen": True}

    @field_validator("cert_path", "key_path", "ca_path")
    @classmethod
    def file_must_exist(cls, v: Optional[Path]) -> Optional[Path]:
        if v is not None and not v.exists():
            raise ValueError(f"SSL file not found: {v}")
        return v

    @property
    def encrypts(self) -> bool:
        return self.mode in (SslMode.REQUIRE, SslMode.VERIFY_CA, SslMode.VERIFY_FULL)

    def libpq_args(self) -> dict[str, str]:
        """Keyword arguments understood by psycopg/psycopg2 ``connect``."""
        args = {"sslmode": self.mode.value}
        if self.ca_path:
            args["sslrootcert"] = str(self.ca_path)
        if self.cert_path:
            args["sslcert"] = str(self.cert_path)
        if self.key_path:
            args["sslkey"] = str(self.key_path)
        return args


class DatabaseConfig(BaseModel):
    """
    Where patients, doctors and appointments are stored.

    Server drivers (asyncpg, psycopg) need host/port and pool settings.
    The aiosqlite driver treats ``name`` as the database file path and
    ignores everything else.
    """

    driver: DbDriver
    name: str = Field(..., min_length=1, description="Database name or SQLite file")

    host: Optional[str] = Field(default=None, min_length=1)
    port: Optional[int] = Field(default=None, gt=0, le=65535)
    username: Optional[str] = Field(default=None, min_length=1)
    password: Optional[SecretStr] = None

    pool_size: int = Field(10, ge=1, le=100)
    max_overflow: int = Field(20, ge=0, le=100)
    pool_timeout: int = Field(30, ge=1, le=300)
    pool_recycle: int = Field(3600, ge=300)

    ssl: Optional[SslConfig] = None

    # Create tables on startup instead of requiring Alembic (dev/test only)
    auto_create_schema: bool = False

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_server_settings(self) -> "DatabaseConfig":
        if not self.driver.is_file_based and (not self.host or not self.port):
            raise ValueError(f"host and port are required for driver {self.driver.value}")
        return self

    def get_connection_url(self, include_password: bool = False) -> str:
        """
        SQLAlchemy URL for the async engine.

        The password is masked unless ``include_password`` is set, so the
        default form is safe to log.
        """
        if self.driver.is_file_based:
            return f"sqlite+{self.driver.value}:///{self.name}"

        auth = ""
        if self.username:
            secret = "****"
            if include_password and self.password:
                secret = self.password.get_secret_value()
            auth = f"{self.username}:{secret}@"
        return f"postgresql+{self.driver.value}://{auth}{self.host}:{self.port}/{self.name}"


class JwtConfig(BaseModel):
    """Bearer token signing and validation settings."""

    secret_key: SecretStr
    issuer: str = Field(..., min_length=1)
    audience: str = Field(..., min_length=1)
    subject: str = Field(..., min_length=1)
    expiration_minutes: int = Field(2, ge=1, le=24 * 60)
    algorithm: str = "HS256"

    model_config = {"frozen": True}

    @field_validator("secret_key")
    @classmethod
    def validate_secret_length(cls, v: SecretStr) -> SecretStr:
        if len(v.get_secret_value()) < 32:
            raise ValueError("JWT secret key must be at least 32 characters")
        return v


class ApiConfig(BaseModel):
    slow_request_threshold_ms: float = Field(1000.0, gt=0)

    model_config = {"frozen": True}


class AppConfig(BaseModel):
    """
    Everything the API needs at startup, validated once.
    """

    app_title: str = Field(..., min_length=1)
    app_version: str = Field(..., pattern=r"^\d+\.\d+\.\d+$")
    environment: Environment

    logging: LoggingConfig
    jwt: JwtConfig
    database: Optional[DatabaseConfig] = None
    api: ApiConfig = ApiConfig()

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_production_settings(self) -> "AppConfig":
        if not self.environment.is_production:
            return self
        if self.database is None:
            raise ValueError("Database config required in production")
        if self.database.auto_create_schema:
            raise ValueError("DB_AUTO_CREATE_SCHEMA not allowed in production")
        if self.logging.log_level == EnvLogLevel.DEBUG:
            raise ValueError("DEBUG log level not allowed in production")
        return self


def _parse_enum(enum_cls, env_name: str, raw: str):
    try:
        return enum_cls(raw)
    except ValueError:
        valid = [m.value for m in enum_cls]
        raise ConfigurationError(f"Invalid {env_name}: {raw}. Must be one of: {valid}")


def _optional_path(env_name: str) -> Optional[Path]:
    value = get_env(env_name)
    return Path(value) if value else None


def load_ssl_config(required: bool) -> Optional[SslConfig]:
    """DB_SSL_MODE plus the optional DB_SSL_CERT / DB_SSL_KEY / DB_SSL_CA files."""
    raw_mode = require_env("DB_SSL_MODE") if required else get_env("DB_SSL_MODE")
    if not raw_mode:
        return None
    return SslConfig(
        mode=_parse_enum(SslMode, "DB_SSL_MODE", raw_mode),
        cert_path=_optional_path("DB_SSL_CERT"),
        key_path=_optional_path("DB_SSL_KEY"),
        ca_path=_optional_path("DB_SSL_CA"),
    )


def load_database_config(environment: Environment) -> Optional[DatabaseConfig]:
    """
    Load database configuration from environment.

    - DB_DRIVER: asyncpg, psycopg or aiosqlite (unset = no database)
    - DB_NAME: database name, or the file path for aiosqlite
    - DB_AUTO_CREATE_SCHEMA: optional, dev/test only

    Server drivers additionally need DB_HOST, DB_PORT, DB_POOL_SIZE,
    DB_MAX_OVERFLOW, DB_POOL_TIMEOUT and DB_POOL_RECYCLE. DB_USER,
    DB_PASSWORD and DB_SSL_MODE are optional outside production.
    """
    driver_str = get_env("DB_DRIVER")
    if not driver_str:
        return None

    driver = _parse_enum(DbDriver, "DB_DRIVER", driver_str)
    name = require_env("DB_NAME")
    auto_create_schema = get_env_bool("DB_AUTO_CREATE_SCHEMA")

    if driver.is_file_based:
        return DatabaseConfig(
            driver=driver,
            name=name,
            auto_create_schema=auto_create_schema,
        )

    strict = environment.is_production
    read = require_env if strict else get_env
    password = read("DB_PASSWORD")

    return DatabaseConfig(
        driver=driver,
        name=name,
        host=require_env("DB_HOST"),
        port=require_env_number("DB_PORT"),
        username=read("DB_USER"),
        password=SecretStr(password) if password else None,
        pool_size=require_env_number("DB_POOL_SIZE"),
        max_overflow=require_env_number("DB_MAX_OVERFLOW"),
        pool_timeout=require_env_number("DB_POOL_TIMEOUT"),
        pool_recycle=require_env_number("DB_POOL_RECYCLE"),
        ssl=load_ssl_config(required=strict),
        auto_create_schema=auto_create_schema,
    )


def load_jwt_config() -> JwtConfig:
    """
    Load JWT settings.

    Required: JWT_SECRET_KEY, JWT_ISSUER, JWT_AUDIENCE, JWT_SUBJECT
    Optional: JWT_EXPIRATION_MINUTES (default 2)
    """
    return JwtConfig(
        secret_key=SecretStr(require_env("JWT_SECRET_KEY")),
        issuer=require_env("JWT_ISSUER"),
        audience=require_env("JWT_AUDIENCE"),
        subject=require_env("JWT_SUBJECT"),
        expiration_minutes=get_env_number("JWT_EXPIRATION_MINUTES", 2),
    )


def load_api_config() -> ApiConfig:
    return ApiConfig(
        slow_request_threshold_ms=get_env_number(
            "SLOW_REQUEST_THRESHOLD_MS", 1000.0, float
        )
    )


def load_app_config() -> AppConfig:
    """
    Load complete application configuration.

    Raises:
        ValidationError: If configuration is invalid
        ConfigurationError: If required env vars are missing
    """
    env_str = require_env("ENVIRONMENT")
    environment = _parse_enum(Environment, "ENVIRONMENT", env_str)

    return AppConfig(
        app_title=require_env("APP_TITLE"),
        app_version=require_env("APP_VERSION"),
        environment=environment,
        logging=load_logging_config(),
        jwt=load_jwt_config(),
        database=load_database_config(environment),
        api=load_api_config(),
    )


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "SslConfig",
    "JwtConfig",
    "ApiConfig",
    "load_app_config",
]
