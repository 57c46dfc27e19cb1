# polyclinic/db/schemas/appointment_schemas.py
from datetime import date
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class AppointmentBase(BaseModel):
    patient_id: str = Field(..., min_length=2, max_length=10, examples=["P1"])
    doctor_id: str = Field(..., min_length=2, max_length=10, examples=["D1"])
    date_of_appointment: date = Field(..., description="Calendar day of the visit")


class AppointmentCreate(AppointmentBase):
    pass


class AppointmentResponse(AppointmentBase):
    model_config = ConfigDict(from_attributes=True)

    appointment_no: Optional[int] = None

    # Denormalised on read, never written back
    doctor_name: Optional[str] = None
    patient_name: Optional[str] = None


class AppointmentCreatedResponse(BaseModel):
    appointment_no: int


__all__ = [
    "AppointmentBase",
    "AppointmentCreate",
    "AppointmentResponse",
    "AppointmentCreatedResponse",
]
