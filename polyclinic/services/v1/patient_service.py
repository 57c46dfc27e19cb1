# polyclinic/services/v1/patient_service.py
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from common import get_app_logger
from polyclinic.core import Outcome, PatientMapper, PATIENT_ID_PREFIX
from polyclinic.db.repositories import PatientRepository, IdSequenceRepository
from polyclinic.db.schemas import PatientCreate, PatientResponse
from .base_service import BaseService, STORAGE_FAULTS


class PatientService(BaseService):
    logger = get_app_logger(__name__)

    def __init__(self, db: AsyncSession):
        super().__init__(db)
        self.patients = PatientRepository(db)
        self.sequences = IdSequenceRepository(db)

    async def get_all_patients(self) -> Outcome[List[PatientResponse]]:
        self.logger.debug("Fetching all patients")
        try:
            records = await self.patients.list_all()
        except STORAGE_FAULTS as e:
            return await self._storage_failure("get_all_patients", e)
        return Outcome.found([PatientMapper.to_model(r) for r in records])

    async def get_patient(self, patient_id: str) -> Outcome[PatientResponse]:
        self.logger.debug("Fetching patient", patient_id=patient_id)
        try:
            record = await self.patients.get(patient_id)
        except STORAGE_FAULTS as e:
            return await self._storage_failure("get_patient", e, patient_id=patient_id)

        if record is None:
            self.logger.warning("Patient not found", patient_id=patient_id)
            return Outcome.not_found()
        return Outcome.found(PatientMapper.to_model(record))

    async def add_patient(self, patient: PatientCreate) -> Outcome[str]:
        """
        Persist a new patient under the next ``P<n>`` id.

        Returns Created(patient_id), or Error when no id could be
        allocated or storage failed. Nothing is written on failure.
        """
        self.logger.debug("Adding patient", name=patient.name)
        try:
            patient_id = await self.sequences.allocate(
                PATIENT_ID_PREFIX, self.patients.list_ids
            )
            if patient_id is None:
                await self.db.rollback()
                self.logger.error("Could not generate patient id")
                return Outcome.error()

            await self.patients.add(PatientMapper.to_record(patient, patient_id=patient_id))
            await self.db.commit()
        except STORAGE_FAULTS as e:
            return await self._storage_failure("add_patient", e)

        self.logger.info("Patient added", patient_id=patient_id)
        return Outcome.created(patient_id)

    async def update_patient_age(self, patient_id: str, age: int) -> Outcome[None]:
        """Age range is checked by the caller."""
        self.logger.debug("Updating patient age", patient_id=patient_id, age=age)
        try:
            changed = await self.patients.update_age(patient_id, age)
            await self.db.commit()
        except STORAGE_FAULTS as e:
            return await self._storage_failure("update_patient_age", e, patient_id=patient_id)

        if not changed:
            self.logger.warning("Patient not found for age update", patient_id=patient_id)
            return Outcome.not_found()

        self.logger.info("Patient age updated", patient_id=patient_id, age=age)
        return Outcome.updated()

    async def remove_patient(self, patient_id: str) -> Outcome[None]:
        """A patient with appointments is kept; the FK refusal surfaces as Error."""
        self.logger.debug("Removing patient", patient_id=patient_id)
        try:
            removed = await self.patients.remove(patient_id)
            await self.db.commit()
        except STORAGE_FAULTS as e:
            return await self._storage_failure("remove_patient", e, patient_id=patient_id)

        if not removed:
            self.logger.warning("Patient not found for removal", patient_id=patient_id)
            return Outcome.not_found()

        self.logger.info("Patient removed", patient_id=patient_id)
        return Outcome.removed()


__all__ = ["PatientService"]
