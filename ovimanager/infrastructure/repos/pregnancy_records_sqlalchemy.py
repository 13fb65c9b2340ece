from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ovimanager.application.errors import ConflictError, NotFound
from ovimanager.application.interfaces.repositories.pregnancy_records import (
    PregnancyRecordsRepository,
)
from ovimanager.domain.models.pregnancy_record import PregnancyOutcome, PregnancyRecord
from ovimanager.infrastructure.db.orm.pregnancy_record import PregnancyRecordORM


class PregnancyRecordsSQLAlchemyRepository(PregnancyRecordsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: PregnancyRecordORM) -> PregnancyRecord:
        return PregnancyRecord(
            id=orm.id,
            ewe_id=orm.ewe_id,
            covering_date=orm.covering_date,
            due_date=orm.due_date,
            sire_id=orm.sire_id,
            outcome=PregnancyOutcome(orm.outcome),
            actual_date=orm.actual_date,
            origin_batch_id=orm.origin_batch_id,
            notes=orm.notes,
            created_at=orm.created_at,
        )

    async def add(self, record: PregnancyRecord) -> PregnancyRecord:
        orm = PregnancyRecordORM(
            id=record.id,
            ewe_id=record.ewe_id,
            sire_id=record.sire_id,
            covering_date=record.covering_date,
            due_date=record.due_date,
            outcome=record.outcome.value,
            actual_date=record.actual_date,
            origin_batch_id=record.origin_batch_id,
            notes=record.notes,
            created_at=record.created_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(
                "Failed to create pregnancy record",
                details={"ewe_id": str(record.ewe_id)},
            ) from exc
        return self._to_domain(orm)

    async def get(self, record_id: UUID) -> PregnancyRecord | None:
        orm = await self.session.get(PregnancyRecordORM, record_id)
        return self._to_domain(orm) if orm else None

    async def list(
        self,
        *,
        ewe_id: UUID | None = None,
        outcome: PregnancyOutcome | None = None,
        origin_batch_id: UUID | None = None,
    ) -> list[PregnancyRecord]:
        stmt = select(PregnancyRecordORM)
        if ewe_id is not None:
            stmt = stmt.where(PregnancyRecordORM.ewe_id == ewe_id)
        if outcome is not None:
            stmt = stmt.where(PregnancyRecordORM.outcome == outcome.value)
        if origin_batch_id is not None:
            stmt = stmt.where(PregnancyRecordORM.origin_batch_id == origin_batch_id)
        stmt = stmt.order_by(PregnancyRecordORM.covering_date.desc())
        res = await self.session.execute(stmt)
        return [self._to_domain(x) for x in res.scalars().all()]

    async def find_confirmed_by_ewe_and_origin(
        self, ewe_id: UUID, origin_batch_id: UUID
    ) -> PregnancyRecord | None:
        stmt = (
            select(PregnancyRecordORM)
            .where(
                PregnancyRecordORM.ewe_id == ewe_id,
                PregnancyRecordORM.origin_batch_id == origin_batch_id,
                PregnancyRecordORM.outcome == PregnancyOutcome.CONFIRMED.value,
            )
            .limit(1)
        )
        res = await self.session.execute(stmt)
        orm = res.scalars().first()
        return self._to_domain(orm) if orm else None

    async def update(self, record: PregnancyRecord) -> PregnancyRecord:
        orm = await self.session.get(PregnancyRecordORM, record.id)
        if orm is None:
            raise NotFound(f"Pregnancy record {record.id} not found")
        orm.outcome = record.outcome.value
        orm.actual_date = record.actual_date
        orm.notes = record.notes
        await self.session.flush()
        return self._to_domain(orm)

    async def delete(self, record_id: UUID) -> bool:
        stmt = delete(PregnancyRecordORM).where(PregnancyRecordORM.id == record_id)
        res = await self.session.execute(stmt)
        return res.rowcount > 0
