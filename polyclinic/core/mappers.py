# polyclinic/core/mappers.py
"""
Field-by-field conversion between ORM records and API schemas.

``to_model`` reads a stored row into its API shape; ``to_record`` builds an
unsaved row from an API shape. Ids read from storage are right-trimmed.
"""
from typing import Any, Optional, Union
from sqlalchemy import inspect

from polyclinic.db.models import Patient, Doctor, Appointment
from polyclinic.db.schemas import (
    PatientCreate,
    PatientResponse,
    DoctorCreate,
    DoctorResponse,
    AppointmentCreate,
    AppointmentResponse,
)


def _trim(value: Optional[str]) -> Optional[str]:
    return value.rstrip() if value is not None else None


def _loaded(record: Any, relationship: str) -> Any:
    # Never trigger a lazy load; async sessions cannot run one implicitly
    if relationship in inspect(record).unloaded:
        return None
    return getattr(record, relationship)


class PatientMapper:
    @staticmethod
    def to_model(record: Patient) -> PatientResponse:
        return PatientResponse(
            patient_id=record.patient_id.rstrip(),
            name=record.name,
            age=record.age,
            gender=record.gender,
            contact_number=record.contact_number,
        )

    @staticmethod
    def to_record(
        model: Union[PatientCreate, PatientResponse],
        patient_id: Optional[str] = None,
    ) -> Patient:
        return Patient(
            patient_id=patient_id or getattr(model, "patient_id", None),
            name=model.name,
            age=model.age,
            gender=model.gender,
            contact_number=model.contact_number,
        )


class DoctorMapper:
    @staticmethod
    def to_model(record: Doctor) -> DoctorResponse:
        return DoctorResponse(
            doctor_id=record.doctor_id.rstrip(),
            name=record.name,
            specialization=record.specialization,
            fees=record.fees,
        )

    @staticmethod
    def to_record(
        model: Union[DoctorCreate, DoctorResponse],
        doctor_id: Optional[str] = None,
    ) -> Doctor:
        return Doctor(
            doctor_id=doctor_id or getattr(model, "doctor_id", None),
            name=model.name,
            specialization=model.specialization,
            fees=model.fees,
        )


class AppointmentMapper:
    @staticmethod
    def to_model(record: Appointment) -> AppointmentResponse:
        """
        Expects ``doctor`` and ``patient`` to be eagerly loaded when the
        names are wanted; unloaded relationships leave them as None.
        """
        doctor = _loaded(record, "doctor")
        patient = _loaded(record, "patient")
        return AppointmentResponse(
            appointment_no=record.appointment_no,
            patient_id=record.patient_id.rstrip(),
            doctor_id=record.doctor_id.rstrip(),
            date_of_appointment=record.date_of_appointment,
            doctor_name=_trim(doctor.name) if doctor is not None else None,
            patient_name=_trim(patient.name) if patient is not None else None,
        )

    @staticmethod
    def to_record(model: Union[AppointmentCreate, AppointmentResponse]) -> Appointment:
        record = Appointment(
            patient_id=model.patient_id,
            doctor_id=model.doctor_id,
            date_of_appointment=model.date_of_appointment,
        )
        appointment_no = getattr(model, "appointment_no", None)
        if appointment_no is not None:
            record.appointment_no = appointment_no
        return record


__all__ = ["PatientMapper", "DoctorMapper", "AppointmentMapper"]
