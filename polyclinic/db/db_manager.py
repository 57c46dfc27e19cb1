# polyclinic/db/db_manager.py
"""
Database manager focused on connection management and session handling.

Schema migrations are handled separately via Alembic. ``create_schema`` is
only used when DB_AUTO_CREATE_SCHEMA is set (local development and tests).
"""

import ssl as ssl_module
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Any, Optional

from sqlalchemy import event, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
    AsyncEngine,
)

from common import AppError, DatabaseConfig, get_app_logger, request_timer_context_var
from common.config import DbDriver, SslConfig, SslMode
from polyclinic.db.models import DbBaseModel

logger = get_app_logger(__name__)

_SUPPORTED_URL_PREFIXES = (
    "postgresql+asyncpg://",
    "postgresql+psycopg://",
    "sqlite+aiosqlite://",
)


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# Start time lives on the per-statement execution context, so a statement
# that fails between the two hooks leaves nothing on the pooled connection.
def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    if context is not None:
        context._query_started = time.perf_counter()


def _after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    started = getattr(context, "_query_started", None)
    if started is None:
        return
    timer = request_timer_context_var.get()
    if timer is not None:
        timer.record_query((time.perf_counter() - started) * 1000)


class DbManager:
    """
    Database connection and session manager.

    Usage:
        # Startup
        db_manager = DbManager.from_config(config.database)
        await db_manager.verify_connection()

        # Runtime
        async with db_manager.session() as session:
            result = await session.execute(...)

        # Shutdown
        await db_manager.dispose()
    """

    def __init__(
        self,
        url: str,
        *,
        pool_size: Optional[int] = 10,
        max_overflow: int = 20,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        pool_pre_ping: bool = True,
        echo: bool = False,
        connect_args: Optional[dict[str, Any]] = None,
    ):
        """
        Args:
            url: Async database URL (postgresql+asyncpg://, sqlite+aiosqlite://, ...)
            pool_size: Persistent connections; None keeps the dialect's default pool
            max_overflow: Additional connections beyond pool_size
            pool_timeout: Seconds to wait for a pooled connection
            pool_recycle: Recycle connections after N seconds
            pool_pre_ping: Test connections before handing them out
            echo: Log every SQL statement
            connect_args: Driver specific arguments (SSL, etc.)
        """
        self._validate_url(url)
        self._is_sqlite = url.startswith("sqlite")

        engine_args: dict[str, Any] = {
            "echo": echo,
            "pool_pre_ping": pool_pre_ping,
            "connect_args": connect_args or {},
        }
        if pool_size is not None and not self._is_sqlite:
            engine_args.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_timeout=pool_timeout,
                pool_recycle=pool_recycle,
            )

        self._config: dict[str, Any] = {
            "url": url,
            "pool_size": engine_args.get("pool_size"),
            "max_overflow": engine_args.get("max_overflow"),
        }

        self.engine: AsyncEngine = create_async_engine(url, **engine_args)
        self._install_listeners(self.engine.sync_engine)

        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        logger.info(
            "DbManager initialized",
            dialect=self.engine.dialect.name,
            pool_size=self._config["pool_size"],
            max_overflow=self._config["max_overflow"],
        )

    def _install_listeners(self, sync_engine: Engine) -> None:
        if self._is_sqlite:
            event.listen(sync_engine, "connect", _enable_sqlite_foreign_keys)
        event.listen(sync_engine, "before_cursor_execute", _before_cursor_execute)
        event.listen(sync_engine, "after_cursor_execute", _after_cursor_execute)

    @classmethod
    def from_config(cls, config: DatabaseConfig, **kwargs: Any) -> "DbManager":
        """
        Create a DbManager from DatabaseConfig, including asyncpg SSL setup.

        Example:
            db_manager = DbManager.from_config(config.database)
        """
        url = config.get_connection_url(include_password=True)

        if config.driver.is_file_based:
            return cls(url=url, pool_size=None, **kwargs)

        connect_args = kwargs.pop("connect_args", {})
        if config.ssl and config.driver is DbDriver.ASYNCPG:
            connect_args["ssl"] = cls._build_ssl_context(config.ssl)
        elif config.ssl:
            connect_args.update(config.ssl.libpq_args())

        return cls(
            url=url,
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_timeout=config.pool_timeout,
            pool_recycle=config.pool_recycle,
            connect_args=connect_args,
            **kwargs,
        )

    @staticmethod
    def _build_ssl_context(ssl: SslConfig) -> Any:
        if not ssl.encrypts:
            return False

        ssl_context = ssl_module.create_default_context()
        if ssl.ca_path:
            ssl_context.load_verify_locations(cafile=str(ssl.ca_path))
        if ssl.cert_path and ssl.key_path:
            ssl_context.load_cert_chain(
                certfile=str(ssl.cert_path),
                keyfile=str(ssl.key_path),
            )

        if ssl.mode == SslMode.VERIFY_FULL:
            ssl_context.check_hostname = True
            ssl_context.verify_mode = ssl_module.CERT_REQUIRED
        else:
            # require / verify-ca: encrypted, hostname not checked
            ssl_context.check_hostname = False
            if ssl.mode == SslMode.REQUIRE and not ssl.ca_path:
                ssl_context.verify_mode = ssl_module.CERT_NONE
        return ssl_context

    @staticmethod
    def _validate_url(url: str) -> None:
        if not url or not url.startswith(_SUPPORTED_URL_PREFIXES):
            raise ValueError(
                f"Invalid database URL. Expected one of {_SUPPORTED_URL_PREFIXES}, "
                f"got: {url[:20]}..."
            )

    async def verify_connection(self) -> None:
        """
        Fail fast if the database cannot be reached.

        Raises:
            ConnectionError: If connection fails
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            logger.info("Database connection verified")
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database connection failed", error=str(e))
            raise ConnectionError(f"Failed to connect to database: {e}") from e

    async def verify_migrations_current(self) -> str:
        """
        Check that Alembic migrations have been applied.

        Returns:
            The current revision id

        Raises:
            RuntimeError: If the alembic_version table is missing or empty
        """
        async with self.engine.connect() as conn:
            table_exists = await conn.run_sync(
                lambda sync_conn: inspect(sync_conn).has_table("alembic_version")
            )
            if not table_exists:
                raise RuntimeError(
                    "alembic_version table not found. "
                    "Have you run 'alembic upgrade head'?"
                )

            current_version = await conn.scalar(
                text("SELECT version_num FROM alembic_version")
            )

        if not current_version:
            raise RuntimeError("No migration applied. Run 'alembic upgrade head'.")

        logger.info("Current migration version", revision=current_version)
        return current_version

    async def create_schema(self) -> None:
        """Create any missing tables from the ORM metadata."""
        async with self.engine.begin() as conn:
            await conn.run_sync(DbBaseModel.metadata.create_all)
        logger.info("Database schema ensured", tables=sorted(DbBaseModel.metadata.tables))

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Provide a transactional database session.

        Commits on success (a no-op when the caller already committed),
        rolls back and re-raises on exception.
        """
        session = self.session_maker()
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            if isinstance(e, AppError):
                # Rejected request, nothing wrong with the database
                logger.debug("Session rolled back", error_code=e.code)
            else:
                logger.error("Session error, rolled back", error=str(e))
            raise
        finally:
            await session.close()

    async def health_check(self) -> dict[str, Any]:
        """
        Round-trip the database and report pool state.

        Example:
            {"healthy": True, "dialect": "postgresql", "response_time_ms": 1.8, ...}
        """
        start = time.perf_counter()
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            # Driver error text is logged, never returned
            logger.error("Database health check failed", error=str(e))
            return {"healthy": False}

        return {
            "healthy": True,
            "dialect": self.engine.dialect.name,
            "response_time_ms": round((time.perf_counter() - start) * 1000, 2),
            "pool_status": self.engine.pool.status(),
        }

    async def dispose(self) -> None:
        """Close every pooled connection. Call on shutdown."""
        await self.engine.dispose()
        logger.info("Database connections disposed")

    def get_config_snapshot(self) -> dict[str, Any]:
        snapshot = dict(self._config)
        snapshot["url"] = self.engine.url.render_as_string(hide_password=True)
        return snapshot


__all__ = ["DbManager"]
