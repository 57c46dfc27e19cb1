"""Tests for DoctorService outcomes."""

from decimal import Decimal

import pytest

from polyclinic.core import OutcomeStatus
from polyclinic.db.schemas import DoctorCreate, PatientCreate
from polyclinic.services.v1 import DoctorService, PatientService


def new_doctor(name: str = "Dr. Mehta", fees: str = "500") -> DoctorCreate:
    return DoctorCreate(name=name, specialization="Cardiology", fees=Decimal(fees))


class TestDoctorService:
    @pytest.mark.asyncio
    async def test_add_and_get(self, db_session):
        service = DoctorService(db_session)

        created = await service.add_doctor(new_doctor(fees="750.50"))
        fetched = await service.get_doctor(created.value)

        assert created.status is OutcomeStatus.CREATED
        assert created.value == "D1"
        assert fetched.status is OutcomeStatus.FOUND
        assert fetched.value.fees == Decimal("750.50")
        assert fetched.value.specialization == "Cardiology"

    @pytest.mark.asyncio
    async def test_doctor_and_patient_sequences_are_independent(self, db_session):
        await PatientService(db_session).add_patient(
            PatientCreate(name="Asha Verma", age=30, gender="F", contact_number="9876543")
        )

        outcome = await DoctorService(db_session).add_doctor(new_doctor())

        assert outcome.value == "D1"

    @pytest.mark.asyncio
    async def test_update_fees(self, db_session):
        service = DoctorService(db_session)
        await service.add_doctor(new_doctor(fees="500"))

        outcome = await service.update_doctor_fees("D1", Decimal("650"))

        assert outcome.status is OutcomeStatus.UPDATED
        assert (await service.get_doctor("D1")).value.fees == Decimal("650")

    @pytest.mark.asyncio
    async def test_update_fees_missing_doctor(self, db_session):
        outcome = await DoctorService(db_session).update_doctor_fees("D3", Decimal("650"))
        assert outcome.status is OutcomeStatus.NOT_FOUND

    @pytest.mark.asyncio
    async def test_get_all_and_remove(self, db_session):
        service = DoctorService(db_session)
        await service.add_doctor(new_doctor("Dr. Mehta"))
        await service.add_doctor(new_doctor("Dr. Iyer"))

        removed = await service.remove_doctor("D1")
        remaining = await service.get_all_doctors()

        assert removed.status is OutcomeStatus.REMOVED
        assert [d.doctor_id for d in remaining.value] == ["D2"]
        assert (await service.remove_doctor("D1")).status is OutcomeStatus.NOT_FOUND
