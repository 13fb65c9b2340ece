from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from ovimanager.application.errors import NotFound
from ovimanager.application.interfaces.unit_of_work import UnitOfWork
from ovimanager.domain.models.breeding_batch import BreedingBatch
from ovimanager.domain.models.ewe_enrollment import EweEnrollment


@dataclass(slots=True)
class BatchDetail:
    batch: BreedingBatch
    enrollments: list[EweEnrollment] = field(default_factory=list)


async def execute(uow: UnitOfWork, batch_id: UUID) -> BatchDetail:
    batch = await uow.breeding_batches.get(batch_id)
    if not batch:
        raise NotFound(f"Breeding batch {batch_id} not found")
    enrollments = await uow.ewe_enrollments.list_for_batch(batch_id)
    return BatchDetail(batch=batch, enrollments=enrollments)
