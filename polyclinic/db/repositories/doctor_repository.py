# polyclinic/db/repositories/doctor_repository.py
from decimal import Decimal
from typing import Optional, Sequence
from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession
from polyclinic.db.models import Doctor


class DoctorRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> Sequence[Doctor]:
        query = (
            select(Doctor)
            .order_by(Doctor.created_at, Doctor.doctor_id)
            .execution_options(logging_token="DoctorRepository.list_all")
        )
        result = await self.db.execute(query)
        return result.scalars().all()

    async def get(self, doctor_id: str) -> Optional[Doctor]:
        query = (
            select(Doctor)
            .where(Doctor.doctor_id == doctor_id)
            .execution_options(logging_token="DoctorRepository.get")
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def exists(self, doctor_id: str) -> bool:
        query = select(Doctor.doctor_id).where(Doctor.doctor_id == doctor_id)
        return (await self.db.scalar(query)) is not None

    async def list_ids(self) -> Sequence[str]:
        result = await self.db.execute(select(Doctor.doctor_id))
        return result.scalars().all()

    async def add(self, record: Doctor) -> Doctor:
        self.db.add(record)
        await self.db.flush()
        return record

    async def update_fees(self, doctor_id: str, fees: Decimal) -> bool:
        result = await self.db.execute(
            update(Doctor)
            .where(Doctor.doctor_id == doctor_id)
            .values(fees=fees)
            .execution_options(logging_token="DoctorRepository.update_fees")
        )
        return result.rowcount > 0

    async def remove(self, doctor_id: str) -> bool:
        result = await self.db.execute(
            delete(Doctor)
            .where(Doctor.doctor_id == doctor_id)
            .execution_options(logging_token="DoctorRepository.remove")
        )
        return result.rowcount > 0


__all__ = ["DoctorRepository"]
