"""Tests for DbManager query timing and health probing."""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from common.context_vars import request_timer_context_var
from common.logger.logger_middleware import RequestTimer
from polyclinic.db import DbManager


class TestQueryTiming:
    @pytest.mark.asyncio
    async def test_successful_statements_are_counted(self, db_manager):
        timer = RequestTimer()
        token = request_timer_context_var.set(timer)
        try:
            async with db_manager.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
                await conn.execute(text("SELECT 2"))
        finally:
            request_timer_context_var.reset(token)

        assert timer.query_count == 2
        assert timer.timings["sql"] >= 0

    @pytest.mark.asyncio
    async def test_failed_statements_leave_no_state_on_connection(self, db_manager):
        timer = RequestTimer()
        token = request_timer_context_var.set(timer)
        try:
            async with db_manager.engine.connect() as conn:
                for _ in range(3):
                    with pytest.raises(SQLAlchemyError):
                        await conn.execute(text("SELECT * FROM no_such_table"))
                await conn.execute(text("SELECT 1"))
                raw = await conn.get_raw_connection()
                leftover = raw.info.get("query_start_time", [])
        finally:
            request_timer_context_var.reset(token)

        assert leftover == []
        assert timer.query_count == 1


class TestHealthCheck:
    @pytest.mark.asyncio
    async def test_reachable_database(self, db_manager):
        health = await db_manager.health_check()

        assert health["healthy"] is True
        assert health["dialect"] == "sqlite"

    @pytest.mark.asyncio
    async def test_unreachable_database_reports_no_driver_text(self, tmp_path):
        manager = DbManager(
            f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'clinic.db'}", pool_size=None
        )
        try:
            health = await manager.health_check()
        finally:
            await manager.dispose()

        assert health == {"healthy": False}
