# polyclinic/db/repositories/patient_repository.py
from typing import Optional, Sequence
from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession
from polyclinic.db.models import Patient


class PatientRepository:
    """Row level access to ``patients``. Never commits."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> Sequence[Patient]:
        query = (
            select(Patient)
            .order_by(Patient.created_at, Patient.patient_id)
            .execution_options(logging_token="PatientRepository.list_all")
        )
        result = await self.db.execute(query)
        return result.scalars().all()

    async def get(self, patient_id: str) -> Optional[Patient]:
        query = (
            select(Patient)
            .where(Patient.patient_id == patient_id)
            .execution_options(logging_token="PatientRepository.get")
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def exists(self, patient_id: str) -> bool:
        query = select(Patient.patient_id).where(Patient.patient_id == patient_id)
        return (await self.db.scalar(query)) is not None

    async def list_ids(self) -> Sequence[str]:
        result = await self.db.execute(select(Patient.patient_id))
        return result.scalars().all()

    async def add(self, record: Patient) -> Patient:
        self.db.add(record)
        await self.db.flush()
        return record

    async def update_age(self, patient_id: str, age: int) -> bool:
        result = await self.db.execute(
            update(Patient)
            .where(Patient.patient_id == patient_id)
            .values(age=age)
            .execution_options(logging_token="PatientRepository.update_age")
        )
        return result.rowcount > 0

    async def remove(self, patient_id: str) -> bool:
        result = await self.db.execute(
            delete(Patient)
            .where(Patient.patient_id == patient_id)
            .execution_options(logging_token="PatientRepository.remove")
        )
        return result.rowcount > 0


__all__ = ["PatientRepository"]
