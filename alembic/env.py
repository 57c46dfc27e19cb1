"""
Alembic environment configuration.
Uses the same DatabaseConfig as the application for consistency.
"""

import os
import sys
from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool
from alembic import context
from dotenv import load_dotenv

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from common.api_error import ConfigurationError  # noqa: E402
from common.config import DatabaseConfig, get_config, initialize_config  # noqa: E402
from polyclinic.db.models import DbBaseModel  # noqa: E402

load_dotenv()
try:
    initialize_config()
except ConfigurationError as e:
    print(f"FATAL: Configuration error:\n{e}")
    sys.exit(1)

config = context.config
app_config = get_config()

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = DbBaseModel.metadata

# Synchronous driver used for migrations, per application driver
_SYNC_DRIVERS = {
    "asyncpg": "postgresql+psycopg2",
    "psycopg": "postgresql+psycopg",
    "aiosqlite": "sqlite",
}


def _database() -> DatabaseConfig:
    if not app_config.database:
        raise RuntimeError("Database configuration not found in environment")
    return app_config.database


def get_sync_url() -> str:
    """Alembic runs synchronously; swap the async driver for a sync one."""
    db_config = _database()
    driver = _SYNC_DRIVERS[db_config.driver.value]

    if db_config.driver.is_file_based:
        return f"{driver}:///{db_config.name}"

    if db_config.username and db_config.password:
        password = db_config.password.get_secret_value()
        auth = f"{db_config.username}:{password}@"
    elif db_config.username:
        auth = f"{db_config.username}@"
    else:
        auth = ""
    return f"{driver}://{auth}{db_config.host}:{db_config.port}/{db_config.name}"


def get_connect_args() -> dict:
    """libpq style SSL settings mirroring the application's."""
    db_config = _database()
    if db_config.ssl is None or db_config.driver.is_file_based:
        return {}
    return db_config.ssl.libpq_args()


def run_migrations_offline() -> None:
    """Emit SQL to script output instead of executing it."""
    context.configure(
        url=get_sync_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=_database().driver.is_file_based,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = get_sync_url()

    connectable = engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
        connect_args=get_connect_args(),
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            # SQLite cannot ALTER constraints in place
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
