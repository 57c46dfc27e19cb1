# polyclinic/db/deps.py
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession
from typing import AsyncGenerator


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    One session per request, from the DbManager created in the lifespan.
    """
    manager = getattr(request.app.state, "db_manager", None)

    if not manager:
        raise RuntimeError(
            "DbManager not found in app.state. Ensure lifespan is configured."
        )

    async with manager.session() as session:
        yield session


get_session = get_db

__all__ = ["get_session", "get_db"]
