# polyclinic/services/v1/doctor_service.py
from decimal import Decimal
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from common import get_app_logger
from polyclinic.core import Outcome, DoctorMapper, DOCTOR_ID_PREFIX
from polyclinic.db.repositories import DoctorRepository, IdSequenceRepository
from polyclinic.db.schemas import DoctorCreate, DoctorResponse
from .base_service import BaseService, STORAGE_FAULTS


class DoctorService(BaseService):
    logger = get_app_logger(__name__)

    def __init__(self, db: AsyncSession):
        super().__init__(db)
        self.doctors = DoctorRepository(db)
        self.sequences = IdSequenceRepository(db)

    async def get_all_doctors(self) -> Outcome[List[DoctorResponse]]:
        self.logger.debug("Fetching all doctors")
        try:
            records = await self.doctors.list_all()
        except STORAGE_FAULTS as e:
            return await self._storage_failure("get_all_doctors", e)
        return Outcome.found([DoctorMapper.to_model(r) for r in records])

    async def get_doctor(self, doctor_id: str) -> Outcome[DoctorResponse]:
        self.logger.debug("Fetching doctor", doctor_id=doctor_id)
        try:
            record = await self.doctors.get(doctor_id)
        except STORAGE_FAULTS as e:
            return await self._storage_failure("get_doctor", e, doctor_id=doctor_id)

        if record is None:
            self.logger.warning("Doctor not found", doctor_id=doctor_id)
            return Outcome.not_found()
        return Outcome.found(DoctorMapper.to_model(record))

    async def add_doctor(self, doctor: DoctorCreate) -> Outcome[str]:
        self.logger.debug("Adding doctor", name=doctor.name)
        try:
            doctor_id = await self.sequences.allocate(
                DOCTOR_ID_PREFIX, self.doctors.list_ids
            )
            if doctor_id is None:
                await self.db.rollback()
                self.logger.error("Could not generate doctor id")
                return Outcome.error()

            await self.doctors.add(DoctorMapper.to_record(doctor, doctor_id=doctor_id))
            await self.db.commit()
        except STORAGE_FAULTS as e:
            return await self._storage_failure("add_doctor", e)

        self.logger.info("Doctor added", doctor_id=doctor_id)
        return Outcome.created(doctor_id)

    async def update_doctor_fees(self, doctor_id: str, fees: Decimal) -> Outcome[None]:
        self.logger.debug("Updating doctor fees", doctor_id=doctor_id, fees=str(fees))
        try:
            changed = await self.doctors.update_fees(doctor_id, fees)
            await self.db.commit()
        except STORAGE_FAULTS as e:
            return await self._storage_failure("update_doctor_fees", e, doctor_id=doctor_id)

        if not changed:
            self.logger.warning("Doctor not found for fee update", doctor_id=doctor_id)
            return Outcome.not_found()

        self.logger.info("Doctor fees updated", doctor_id=doctor_id, fees=str(fees))
        return Outcome.updated()

    async def remove_doctor(self, doctor_id: str) -> Outcome[None]:
        self.logger.debug("Removing doctor", doctor_id=doctor_id)
        try:
            removed = await self.doctors.remove(doctor_id)
            await self.db.commit()
        except STORAGE_FAULTS as e:
            return await self._storage_failure("remove_doctor", e, doctor_id=doctor_id)

        if not removed:
            self.logger.warning("Doctor not found for removal", doctor_id=doctor_id)
            return Outcome.not_found()

        self.logger.info("Doctor removed", doctor_id=doctor_id)
        return Outcome.removed()


__all__ = ["DoctorService"]
