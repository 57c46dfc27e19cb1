# polyclinic/services/v1/appointment_service.py
"""
Appointment booking and cancellation.

Booking runs in one transaction: both references are checked, then every
booking on the requested day is compared by the conflict checker, then the
row is inserted. The unique constraints on (doctor, date) and
(patient, date) catch anything that slips in between the check and the
insert, and surface as Conflict.
"""
from typing import List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from common import get_app_logger
from polyclinic.core import Outcome, AppointmentMapper, has_conflict
from polyclinic.db.repositories import (
    AppointmentRepository,
    DoctorRepository,
    PatientRepository,
)
from polyclinic.db.schemas import AppointmentCreate, AppointmentResponse
from .base_service import BaseService, STORAGE_FAULTS, is_foreign_key_violation


class AppointmentService(BaseService):
    logger = get_app_logger(__name__)

    def __init__(self, db: AsyncSession):
        super().__init__(db)
        self.appointments = AppointmentRepository(db)
        self.patients = PatientRepository(db)
        self.doctors = DoctorRepository(db)

    async def get_all_appointments(self) -> Outcome[List[AppointmentResponse]]:
        self.logger.debug("Fetching all appointments")
        try:
            records = await self.appointments.list_all()
        except STORAGE_FAULTS as e:
            return await self._storage_failure("get_all_appointments", e)
        return Outcome.found([AppointmentMapper.to_model(r) for r in records])

    async def get_appointment(self, appointment_no: int) -> Outcome[AppointmentResponse]:
        self.logger.debug("Fetching appointment", appointment_no=appointment_no)
        try:
            record = await self.appointments.get(appointment_no)
        except STORAGE_FAULTS as e:
            return await self._storage_failure(
                "get_appointment", e, appointment_no=appointment_no
            )

        if record is None:
            self.logger.warning("Appointment not found", appointment_no=appointment_no)
            return Outcome.not_found()
        return Outcome.found(AppointmentMapper.to_model(record))

    async def book_appointment(self, appointment: AppointmentCreate) -> Outcome[int]:
        """
        Returns:
            Created(appointment_no), InvalidReference when the patient or
            doctor does not exist, Conflict when either already has a
            booking that day, Error on any other storage fault.
        """
        context = {
            "patient_id": appointment.patient_id,
            "doctor_id": appointment.doctor_id,
            "date_of_appointment": appointment.date_of_appointment.isoformat(),
        }
        self.logger.debug("Booking appointment", **context)

        try:
            if not (
                await self.patients.exists(appointment.patient_id)
                and await self.doctors.exists(appointment.doctor_id)
            ):
                await self.db.rollback()
                self.logger.warning("Booking references unknown patient or doctor", **context)
                return Outcome.invalid_reference()

            same_day = await self.appointments.list_for_date(appointment.date_of_appointment)
            if has_conflict(
                appointment.doctor_id,
                appointment.patient_id,
                appointment.date_of_appointment,
                same_day,
            ):
                await self.db.rollback()
                self.logger.warning("Booking conflicts with an existing appointment", **context)
                return Outcome.conflict()

            appointment_no = await self.appointments.add(
                AppointmentMapper.to_record(appointment)
            )
            await self.db.commit()

        except IntegrityError as e:
            await self.db.rollback()
            if is_foreign_key_violation(e):
                self.logger.warning("Booking rejected by foreign key", **context)
                return Outcome.invalid_reference()
            self.logger.warning("Booking rejected by unique constraint", **context)
            return Outcome.conflict()
        except STORAGE_FAULTS as e:
            return await self._storage_failure("book_appointment", e, **context)

        self.logger.info("Appointment booked", appointment_no=appointment_no, **context)
        return Outcome.created(appointment_no)

    async def cancel_appointment(self, appointment_no: int) -> Outcome[None]:
        """Delete if present. Cancelling twice yields NotFound."""
        self.logger.debug("Cancelling appointment", appointment_no=appointment_no)
        try:
            removed = await self.appointments.remove(appointment_no)
            await self.db.commit()
        except STORAGE_FAULTS as e:
            return await self._storage_failure(
                "cancel_appointment", e, appointment_no=appointment_no
            )

        if not removed:
            self.logger.warning("Appointment not found for cancel", appointment_no=appointment_no)
            return Outcome.not_found()

        self.logger.info("Appointment cancelled", appointment_no=appointment_no)
        return Outcome.removed()


__all__ = ["AppointmentService"]
