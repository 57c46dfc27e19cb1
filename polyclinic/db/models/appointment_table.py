# polyclinic/db/models/appointment_table.py
from __future__ import annotations
from datetime import date
from typing import TYPE_CHECKING
from sqlalchemy import Integer, Date, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .db_base_model import DbBaseModel

if TYPE_CHECKING:
    from .patient_table import Patient
    from .doctor_table import Doctor


class Appointment(DbBaseModel):
    __tablename__ = "appointments"
    __table_args__ = (
        # One booking per doctor per day and one per patient per day
        UniqueConstraint("doctor_id", "date_of_appointment", name="uq_appointments_doctor_date"),
        UniqueConstraint("patient_id", "date_of_appointment", name="uq_appointments_patient_date"),
        # AUTOINCREMENT so SQLite never hands out a cancelled number again
        {"sqlite_autoincrement": True},
    )

    appointment_no: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    patient_id: Mapped[str] = mapped_column(
        ForeignKey("patients.patient_id"),
        nullable=False,
        index=True,
    )

    doctor_id: Mapped[str] = mapped_column(
        ForeignKey("doctors.doctor_id"),
        nullable=False,
        index=True,
    )

    date_of_appointment: Mapped[date] = mapped_column(Date, nullable=False, index=True)

    patient: Mapped["Patient"] = relationship("Patient", back_populates="appointments")
    doctor: Mapped["Doctor"] = relationship("Doctor", back_populates="appointments")


__all__ = ["Appointment"]
