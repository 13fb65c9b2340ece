from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ovimanager.application.errors import ConflictError, NotFound
from ovimanager.application.interfaces.repositories.breeding_batches import (
    BreedingBatchesRepository,
)
from ovimanager.domain.models.breeding_batch import BatchStatus, BreedingBatch
from ovimanager.infrastructure.db.orm.breeding_batch import BreedingBatchORM


class BreedingBatchesSQLAlchemyRepository(BreedingBatchesRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: BreedingBatchORM) -> BreedingBatch:
        return BreedingBatch(
            id=orm.id,
            name=orm.name,
            start_date=orm.start_date,
            sire_id=orm.sire_id,
            status=BatchStatus(orm.status),
            created_at=orm.created_at,
        )

    async def add(self, batch: BreedingBatch) -> BreedingBatch:
        orm = BreedingBatchORM(
            id=batch.id,
            name=batch.name,
            sire_id=batch.sire_id,
            start_date=batch.start_date,
            status=batch.status.value,
            created_at=batch.created_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Failed to create breeding batch") from exc
        return self._to_domain(orm)

    async def get(self, batch_id: UUID) -> BreedingBatch | None:
        orm = await self.session.get(BreedingBatchORM, batch_id)
        return self._to_domain(orm) if orm else None

    async def list(self, *, status: BatchStatus | None = None) -> list[BreedingBatch]:
        stmt = select(BreedingBatchORM)
        if status is not None:
            stmt = stmt.where(BreedingBatchORM.status == status.value)
        stmt = stmt.order_by(BreedingBatchORM.created_at.desc())
        res = await self.session.execute(stmt)
        return [self._to_domain(x) for x in res.scalars().all()]

    async def update(self, batch: BreedingBatch) -> BreedingBatch:
        orm = await self.session.get(BreedingBatchORM, batch.id)
        if orm is None:
            raise NotFound(f"Breeding batch {batch.id} not found")
        orm.name = batch.name
        orm.sire_id = batch.sire_id
        orm.status = batch.status.value
        await self.session.flush()
        return self._to_domain(orm)

    async def delete(self, batch_id: UUID) -> bool:
        stmt = delete(BreedingBatchORM).where(BreedingBatchORM.id == batch_id)
        try:
            res = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise ConflictError(
                "Breeding batch is still referenced", details={"batch_id": str(batch_id)}
            ) from exc
        return res.rowcount > 0
