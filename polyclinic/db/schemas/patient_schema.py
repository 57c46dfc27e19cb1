# polyclinic/db/schemas/patient_schema.py
from pydantic import BaseModel, Field, ConfigDict

PHONE_PATTERN = r"^\+?[0-9]{7,15}$"


class PatientBase(BaseModel):
    name: str = Field(..., min_length=3, max_length=40)
    age: int = Field(..., ge=1, le=130)
    gender: str = Field(..., pattern=r"^[MF]$", description="M or F")
    contact_number: str = Field(..., pattern=PHONE_PATTERN, examples=["+919876543210"])


class PatientCreate(PatientBase):
    pass


class PatientResponse(PatientBase):
    model_config = ConfigDict(from_attributes=True)

    patient_id: str


class PatientCreatedResponse(BaseModel):
    patient_id: str


__all__ = [
    "PHONE_PATTERN",
    "PatientBase",
    "PatientCreate",
    "PatientResponse",
    "PatientCreatedResponse",
]
