# polyclinic/api/v1/patient_router.py
from typing import List
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession
from polyclinic.api.deps import get_current_user
from polyclinic.db import get_db
from polyclinic.db.schemas import (
    MessageResponse,
    PatientCreate,
    PatientCreatedResponse,
    PatientResponse,
)
from polyclinic.services.v1 import PatientService
from .outcome_errors import raise_for_outcome

patient_router = APIRouter(
    prefix="/patients",
    tags=["Patients"],
    dependencies=[Depends(get_current_user)],
)


@patient_router.get(
    "",
    response_model=List[PatientResponse],
    summary="List patients",
)
async def get_all_patients(db: AsyncSession = Depends(get_db)):
    outcome = await PatientService(db).get_all_patients()
    if not outcome.ok:
        raise_for_outcome(outcome, "Patient")
    return outcome.value


@patient_router.get(
    "/{patient_id}",
    response_model=PatientResponse,
    summary="Get patient details",
    responses={404: {"description": "Patient not found"}},
)
async def get_patient(patient_id: str, db: AsyncSession = Depends(get_db)):
    outcome = await PatientService(db).get_patient(patient_id)
    if not outcome.ok:
        raise_for_outcome(outcome, "Patient")
    return outcome.value


@patient_router.post(
    "",
    response_model=PatientCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a patient",
    description="The id (`P<n>`) is assigned by the server.",
)
async def add_patient(patient: PatientCreate, db: AsyncSession = Depends(get_db)):
    outcome = await PatientService(db).add_patient(patient)
    if not outcome.ok:
        raise_for_outcome(outcome, "Patient")
    return PatientCreatedResponse(patient_id=outcome.value)


@patient_router.put(
    "/{patient_id}/age/{age}",
    response_model=MessageResponse,
    summary="Update patient age",
    responses={404: {"description": "Patient not found"}},
)
async def update_patient_age(
    patient_id: str,
    age: int = Path(..., ge=1, le=130),
    db: AsyncSession = Depends(get_db),
):
    outcome = await PatientService(db).update_patient_age(patient_id, age)
    if not outcome.ok:
        raise_for_outcome(outcome, "Patient")
    return MessageResponse(message=f"Age of patient {patient_id} updated to {age}")


@patient_router.delete(
    "/{patient_id}",
    response_model=MessageResponse,
    summary="Remove a patient",
    responses={
        404: {"description": "Patient not found"},
        400: {"description": "Patient still has appointments, or storage failure"},
    },
)
async def remove_patient(patient_id: str, db: AsyncSession = Depends(get_db)):
    outcome = await PatientService(db).remove_patient(patient_id)
    if not outcome.ok:
        raise_for_outcome(outcome, "Patient")
    return MessageResponse(message=f"Patient {patient_id} removed")


__all__ = ["patient_router"]
