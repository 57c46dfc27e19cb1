# polyclinic/db/repositories/appointment_repository.py
from datetime import date
from typing import Optional, Sequence
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload
from polyclinic.db.models import Appointment


class AppointmentRepository:
    """
    Appointment rows. Reads that feed the API eager load doctor and
    patient in the same statement so names can be denormalised.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> Sequence[Appointment]:
        query = (
            select(Appointment)
            .options(joinedload(Appointment.doctor), joinedload(Appointment.patient))
            .order_by(Appointment.appointment_no)
            .execution_options(logging_token="AppointmentRepository.list_all")
        )
        result = await self.db.execute(query)
        return result.scalars().all()

    async def get(self, appointment_no: int) -> Optional[Appointment]:
        query = (
            select(Appointment)
            .options(joinedload(Appointment.doctor), joinedload(Appointment.patient))
            .where(Appointment.appointment_no == appointment_no)
            .execution_options(logging_token="AppointmentRepository.get")
        )
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def list_for_date(self, appointment_date: date) -> Sequence[Appointment]:
        """Every booking on one day; the input of the conflict check."""
        query = (
            select(Appointment)
            .where(Appointment.date_of_appointment == appointment_date)
            .execution_options(logging_token="AppointmentRepository.list_for_date")
        )
        result = await self.db.execute(query)
        return result.scalars().all()

    async def add(self, record: Appointment) -> int:
        """Insert and return the number assigned by the store."""
        self.db.add(record)
        await self.db.flush()
        return record.appointment_no

    async def remove(self, appointment_no: int) -> bool:
        result = await self.db.execute(
            delete(Appointment)
            .where(Appointment.appointment_no == appointment_no)
            .execution_options(logging_token="AppointmentRepository.remove")
        )
        return result.rowcount > 0


__all__ = ["AppointmentRepository"]
