# polyclinic/db/repositories/id_sequence_repository.py
"""
Atomic allocation of ``P<n>`` / ``D<n>`` identifiers.

The counter lives in ``id_sequences``. Incrementing it is a single UPDATE
whose row lock serialises concurrent creators until their transaction ends,
so two requests can never receive the same id.
"""
from typing import Awaitable, Callable, Optional, Sequence
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from polyclinic.core.id_generator import next_id, parse_suffix
from polyclinic.db.models import IdSequence

ExistingIdsLoader = Callable[[], Awaitable[Sequence[str]]]


class IdSequenceRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def allocate(
        self, prefix: str, existing_ids: ExistingIdsLoader
    ) -> Optional[str]:
        """
        Reserve the next identifier for ``prefix``.

        ``existing_ids`` is only awaited when the prefix has no counter yet;
        the counter is then seeded past the highest id already stored.
        Returns None when a stored id cannot be parsed.
        """
        bumped = await self.db.execute(
            update(IdSequence)
            .where(IdSequence.prefix == prefix)
            .values(last_value=IdSequence.last_value + 1)
            .execution_options(logging_token="IdSequenceRepository.allocate")
        )

        if bumped.rowcount == 0:
            return await self._seed(prefix, await existing_ids())

        last_value = await self.db.scalar(
            select(IdSequence.last_value).where(IdSequence.prefix == prefix)
        )
        return f"{prefix}{last_value}"

    async def _seed(self, prefix: str, ids: Sequence[str]) -> Optional[str]:
        first = next_id(prefix, ids)
        if first is None:
            return None

        self.db.add(IdSequence(prefix=prefix, last_value=parse_suffix(first)))
        await self.db.flush()
        return first


__all__ = ["IdSequenceRepository"]
