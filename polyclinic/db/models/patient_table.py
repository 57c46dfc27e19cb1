# polyclinic/db/models/patient_table.py
from __future__ import annotations
from typing import TYPE_CHECKING
from sqlalchemy import String, SmallInteger
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .db_base_model import DbBaseModel

if TYPE_CHECKING:
    from .appointment_table import Appointment


class Patient(DbBaseModel):
    __tablename__ = "patients"

    # P1, P2, ... allocated through id_sequences
    patient_id: Mapped[str] = mapped_column(String(10), primary_key=True)

    name: Mapped[str] = mapped_column(String(40), nullable=False)
    age: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    gender: Mapped[str] = mapped_column(String(1), nullable=False)
    contact_number: Mapped[str] = mapped_column(String(16), nullable=False)

    # Deletion of a booked patient is refused by the FK, not cascaded
    appointments: Mapped[list["Appointment"]] = relationship(
        "Appointment", back_populates="patient", passive_deletes="all"
    )


__all__ = ["Patient"]
