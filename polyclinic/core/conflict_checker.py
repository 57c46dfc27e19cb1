# polyclinic/core/conflict_checker.py
from datetime import date
from typing import Iterable, Protocol


class BookingSlot(Protocol):
    doctor_id: str
    patient_id: str
    date_of_appointment: date


def has_conflict(
    doctor_id: str,
    patient_id: str,
    appointment_date: date,
    existing: Iterable[BookingSlot],
) -> bool:
    """
    True when an existing booking falls on the same day and shares the
    doctor or the patient.

    Ids are compared after trimming trailing padding, so fixed-width
    columns compare equal to the submitted values.
    """
    doctor_id = doctor_id.rstrip()
    patient_id = patient_id.rstrip()
    for appointment in existing:
        if appointment.date_of_appointment != appointment_date:
            continue
        if (
            appointment.doctor_id.rstrip() == doctor_id
            or appointment.patient_id.rstrip() == patient_id
        ):
            return True
    return False


__all__ = ["BookingSlot", "has_conflict"]
