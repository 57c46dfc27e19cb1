# polyclinic/services/v1/base_service.py
from typing import Any
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from common import AppLogger
from polyclinic.core import Outcome

# Faults a service converts into Outcome.error() instead of raising
STORAGE_FAULTS = (SQLAlchemyError, OSError)


def is_foreign_key_violation(error: IntegrityError) -> bool:
    # sqlite: "FOREIGN KEY constraint failed"; postgres: "violates foreign key constraint"
    return "FOREIGN KEY" in str(error.orig).upper()


class BaseService:
    """Shared session handling for the v1 services."""

    logger: AppLogger

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _storage_failure(self, operation: str, error: Exception, **context: Any) -> Outcome[Any]:
        await self.db.rollback()
        self.logger.error(
            "Storage fault",
            operation=operation,
            error_type=type(error).__name__,
            error=str(error),
            **context,
        )
        return Outcome.error()


__all__ = ["STORAGE_FAULTS", "BaseService", "is_foreign_key_violation"]
