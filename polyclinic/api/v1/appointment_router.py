# polyclinic/api/v1/appointment_router.py
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from common.api_error import ConflictError
from polyclinic.api.deps import get_current_user
from polyclinic.core import OutcomeStatus
from polyclinic.db import get_db
from polyclinic.db.schemas import (
    AppointmentCreate,
    AppointmentCreatedResponse,
    AppointmentResponse,
    MessageResponse,
)
from polyclinic.services.v1 import AppointmentService
from .outcome_errors import raise_for_outcome

appointment_router = APIRouter(
    prefix="/appointments",
    tags=["Appointments"],
    dependencies=[Depends(get_current_user)],
)


@appointment_router.get(
    "",
    response_model=List[AppointmentResponse],
    summary="List appointments",
    description="""
    All appointments with doctor and patient names.

    **Database Impact:** one query, doctor and patient joined.
    """,
)
async def get_all_appointments(db: AsyncSession = Depends(get_db)):
    outcome = await AppointmentService(db).get_all_appointments()
    if not outcome.ok:
        raise_for_outcome(outcome, "Appointment")
    return outcome.value


@appointment_router.get(
    "/{appointment_no}",
    response_model=AppointmentResponse,
    summary="Get an appointment",
    responses={404: {"description": "Appointment not found"}},
)
async def get_appointment(appointment_no: int, db: AsyncSession = Depends(get_db)):
    outcome = await AppointmentService(db).get_appointment(appointment_no)
    if not outcome.ok:
        raise_for_outcome(outcome, "Appointment")
    return outcome.value


@appointment_router.post(
    "",
    response_model=AppointmentCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Book an appointment",
    responses={
        400: {
            "description": "APPOINTMENT_CONFLICT when the doctor or patient is "
            "already booked that day, INVALID_REFERENCE for an unknown doctor or patient"
        },
    },
)
async def book_appointment(
    appointment: AppointmentCreate, db: AsyncSession = Depends(get_db)
):
    outcome = await AppointmentService(db).book_appointment(appointment)
    if outcome.status is OutcomeStatus.CONFLICT:
        raise ConflictError(
            "Doctor or patient already has an appointment on "
            f"{appointment.date_of_appointment.isoformat()}",
            code="APPOINTMENT_CONFLICT",
        )
    if not outcome.ok:
        raise_for_outcome(outcome, "Appointment")
    return AppointmentCreatedResponse(appointment_no=outcome.value)


@appointment_router.delete(
    "/{appointment_no}",
    response_model=MessageResponse,
    summary="Cancel an appointment",
    responses={404: {"description": "Appointment not found"}},
)
async def cancel_appointment(appointment_no: int, db: AsyncSession = Depends(get_db)):
    outcome = await AppointmentService(db).cancel_appointment(appointment_no)
    if not outcome.ok:
        raise_for_outcome(outcome, "Appointment")
    return MessageResponse(message=f"Appointment {appointment_no} cancelled")


__all__ = ["appointment_router"]
