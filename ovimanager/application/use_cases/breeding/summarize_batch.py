from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from ovimanager.application.errors import NotFound
from ovimanager.application.interfaces.unit_of_work import UnitOfWork
from ovimanager.domain.models.ewe_enrollment import CycleResult


@dataclass(slots=True)
class BatchSummary:
    batch_id: UUID
    enrolled: int
    pregnant: int
    final_empty: int
    in_progress: int


async def execute(uow: UnitOfWork, batch_id: UUID) -> BatchSummary:
    batch = await uow.breeding_batches.get(batch_id)
    if not batch:
        raise NotFound(f"Breeding batch {batch_id} not found")

    enrollments = await uow.ewe_enrollments.list_for_batch(batch_id)
    pregnant = sum(1 for e in enrollments if e.is_pregnant)
    final_empty = sum(
        1 for e in enrollments if e.finalized and e.cycle3_result is CycleResult.EMPTY
    )
    return BatchSummary(
        batch_id=batch_id,
        enrolled=len(enrollments),
        pregnant=pregnant,
        final_empty=final_empty,
        in_progress=sum(1 for e in enrollments if not e.finalized),
    )
