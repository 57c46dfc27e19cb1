# polyclinic/db/repositories/user_repository.py
from typing import Optional
from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession
from polyclinic.db.models import User


class UserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_user_name(self, user_name: str) -> Optional[User]:
        query = (
            select(User)
            .where(User.user_name == user_name)
            .execution_options(logging_token="UserRepository.get_by_user_name")
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def is_taken(self, user_name: str, email: str) -> bool:
        query = select(User.user_id).where(
            or_(User.user_name == user_name, User.email == email)
        )
        return (await self.db.scalar(query.limit(1))) is not None

    async def add(self, record: User) -> User:
        self.db.add(record)
        await self.db.flush()
        return record


__all__ = ["UserRepository"]
