# polyclinic/db/schemas/doctor_schema.py
from decimal import Decimal
from pydantic import BaseModel, Field, ConfigDict

MIN_DOCTOR_FEES = Decimal("101")
# Matches Numeric(10, 2) on doctors.fees
FEES_MAX_DIGITS = 10
FEES_DECIMAL_PLACES = 2


class DoctorBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    specialization: str = Field(..., min_length=1, max_length=40)
    fees: Decimal = Field(
        ...,
        ge=MIN_DOCTOR_FEES,
        max_digits=FEES_MAX_DIGITS,
        decimal_places=FEES_DECIMAL_PLACES,
    )


class DoctorCreate(DoctorBase):
    pass


class DoctorResponse(DoctorBase):
    model_config = ConfigDict(from_attributes=True)

    doctor_id: str


class DoctorCreatedResponse(BaseModel):
    doctor_id: str


__all__ = [
    "MIN_DOCTOR_FEES",
    "FEES_MAX_DIGITS",
    "FEES_DECIMAL_PLACES",
    "DoctorBase",
    "DoctorCreate",
    "DoctorResponse",
    "DoctorCreatedResponse",
]
