from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ovimanager.application.errors import ConflictError, NotFound
from ovimanager.application.interfaces.repositories.ewe_enrollments import (
    EweEnrollmentsRepository,
)
from ovimanager.domain.models.breeding_batch import BatchStatus
from ovimanager.domain.models.ewe_enrollment import CycleResult, EweEnrollment
from ovimanager.infrastructure.db.orm.breeding_batch import BreedingBatchORM
from ovimanager.infrastructure.db.orm.ewe_enrollment import EweEnrollmentORM


class EweEnrollmentsSQLAlchemyRepository(EweEnrollmentsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: EweEnrollmentORM) -> EweEnrollment:
        return EweEnrollment(
            id=orm.id,
            batch_id=orm.batch_id,
            ewe_id=orm.ewe_id,
            attempt_count=orm.attempt_count,
            cycle1_result=CycleResult(orm.cycle1_result),
            cycle2_result=CycleResult(orm.cycle2_result),
            cycle3_result=CycleResult(orm.cycle3_result),
            finalized=orm.finalized,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    def _active_stmt(self, *columns):
        return (
            select(*(columns or (EweEnrollmentORM,)))
            .join(BreedingBatchORM, BreedingBatchORM.id == EweEnrollmentORM.batch_id)
            .where(BreedingBatchORM.status == BatchStatus.OPEN.value)
        )

    async def add(self, enrollment: EweEnrollment) -> EweEnrollment:
        orm = EweEnrollmentORM(
            id=enrollment.id,
            batch_id=enrollment.batch_id,
            ewe_id=enrollment.ewe_id,
            attempt_count=enrollment.attempt_count,
            cycle1_result=enrollment.cycle1_result.value,
            cycle2_result=enrollment.cycle2_result.value,
            cycle3_result=enrollment.cycle3_result.value,
            finalized=enrollment.finalized,
            created_at=enrollment.created_at,
            updated_at=enrollment.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(
                "Ewe is already enrolled in this batch",
                details={
                    "batch_id": str(enrollment.batch_id),
                    "ewe_id": str(enrollment.ewe_id),
                },
            ) from exc
        return self._to_domain(orm)

    async def get(self, enrollment_id: UUID) -> EweEnrollment | None:
        orm = await self.session.get(EweEnrollmentORM, enrollment_id)
        return self._to_domain(orm) if orm else None

    async def get_for_batch_and_ewe(
        self, batch_id: UUID, ewe_id: UUID
    ) -> EweEnrollment | None:
        stmt = select(EweEnrollmentORM).where(
            EweEnrollmentORM.batch_id == batch_id, EweEnrollmentORM.ewe_id == ewe_id
        )
        res = await self.session.execute(stmt)
        orm = res.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list_for_batch(self, batch_id: UUID) -> list[EweEnrollment]:
        stmt = (
            select(EweEnrollmentORM)
            .where(EweEnrollmentORM.batch_id == batch_id)
            .order_by(EweEnrollmentORM.created_at)
        )
        res = await self.session.execute(stmt)
        return [self._to_domain(x) for x in res.scalars().all()]

    async def find_active_for_ewe(self, ewe_id: UUID) -> EweEnrollment | None:
        stmt = self._active_stmt().where(EweEnrollmentORM.ewe_id == ewe_id).limit(1)
        res = await self.session.execute(stmt)
        orm = res.scalars().first()
        return self._to_domain(orm) if orm else None

    async def active_ewe_ids(self) -> set[UUID]:
        stmt = self._active_stmt(EweEnrollmentORM.ewe_id)
        res = await self.session.execute(stmt)
        return set(res.scalars().all())

    async def update(self, enrollment: EweEnrollment) -> EweEnrollment:
        orm = await self.session.get(EweEnrollmentORM, enrollment.id)
        if orm is None:
            raise NotFound(f"Enrollment {enrollment.id} not found")
        orm.attempt_count = enrollment.attempt_count
        orm.cycle1_result = enrollment.cycle1_result.value
        orm.cycle2_result = enrollment.cycle2_result.value
        orm.cycle3_result = enrollment.cycle3_result.value
        orm.finalized = enrollment.finalized
        orm.updated_at = enrollment.updated_at
        await self.session.flush()
        return self._to_domain(orm)

    async def delete(self, enrollment_id: UUID) -> bool:
        stmt = delete(EweEnrollmentORM).where(EweEnrollmentORM.id == enrollment_id)
        res = await self.session.execute(stmt)
        return res.rowcount > 0
