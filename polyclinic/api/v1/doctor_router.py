# polyclinic/api/v1/doctor_router.py
from decimal import Decimal
from typing import List
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession
from polyclinic.api.deps import get_current_user
from polyclinic.db import get_db
from polyclinic.db.schemas import (
    FEES_DECIMAL_PLACES,
    FEES_MAX_DIGITS,
    MIN_DOCTOR_FEES,
    DoctorCreate,
    DoctorCreatedResponse,
    DoctorResponse,
    MessageResponse,
)
from polyclinic.services.v1 import DoctorService
from .outcome_errors import raise_for_outcome

doctor_router = APIRouter(
    prefix="/doctors",
    tags=["Doctors"],
    dependencies=[Depends(get_current_user)],
)


@doctor_router.get("", response_model=List[DoctorResponse], summary="List doctors")
async def get_all_doctors(db: AsyncSession = Depends(get_db)):
    outcome = await DoctorService(db).get_all_doctors()
    if not outcome.ok:
        raise_for_outcome(outcome, "Doctor")
    return outcome.value


@doctor_router.get(
    "/{doctor_id}",
    response_model=DoctorResponse,
    summary="Get doctor details",
    responses={404: {"description": "Doctor not found"}},
)
async def get_doctor(doctor_id: str, db: AsyncSession = Depends(get_db)):
    outcome = await DoctorService(db).get_doctor(doctor_id)
    if not outcome.ok:
        raise_for_outcome(outcome, "Doctor")
    return outcome.value


@doctor_router.post(
    "",
    response_model=DoctorCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a doctor",
)
async def add_doctor(doctor: DoctorCreate, db: AsyncSession = Depends(get_db)):
    outcome = await DoctorService(db).add_doctor(doctor)
    if not outcome.ok:
        raise_for_outcome(outcome, "Doctor")
    return DoctorCreatedResponse(doctor_id=outcome.value)


@doctor_router.put(
    "/{doctor_id}/fees/{fees}",
    response_model=MessageResponse,
    summary="Update doctor fees",
    description=f"Fees must be at least {MIN_DOCTOR_FEES} with at most two decimals.",
    responses={404: {"description": "Doctor not found"}},
)
async def update_doctor_fees(
    doctor_id: str,
    fees: Decimal = Path(
        ...,
        ge=MIN_DOCTOR_FEES,
        max_digits=FEES_MAX_DIGITS,
        decimal_places=FEES_DECIMAL_PLACES,
    ),
    db: AsyncSession = Depends(get_db),
):
    outcome = await DoctorService(db).update_doctor_fees(doctor_id, fees)
    if not outcome.ok:
        raise_for_outcome(outcome, "Doctor")
    return MessageResponse(message=f"Fees of doctor {doctor_id} updated to {fees}")


@doctor_router.delete(
    "/{doctor_id}",
    response_model=MessageResponse,
    summary="Remove a doctor",
    responses={404: {"description": "Doctor not found"}},
)
async def remove_doctor(doctor_id: str, db: AsyncSession = Depends(get_db)):
    outcome = await DoctorService(db).remove_doctor(doctor_id)
    if not outcome.ok:
        raise_for_outcome(outcome, "Doctor")
    return MessageResponse(message=f"Doctor {doctor_id} removed")


__all__ = ["doctor_router"]
