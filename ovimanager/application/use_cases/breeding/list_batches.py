from __future__ import annotations

from ovimanager.application.errors import ValidationError
from ovimanager.application.interfaces.unit_of_work import UnitOfWork
from ovimanager.application.use_cases.breeding.get_batch import BatchDetail
from ovimanager.domain.models.breeding_batch import BatchStatus


async def execute(uow: UnitOfWork, status: str | None = None) -> list[BatchDetail]:
    status_filter = None
    if status is not None:
        try:
            status_filter = BatchStatus(status)
        except ValueError as exc:
            valid = ", ".join(s.value for s in BatchStatus)
            raise ValidationError(f"Invalid status. Must be one of: {valid}") from exc

    batches = await uow.breeding_batches.list(status=status_filter)
    result = []
    for batch in batches:
        enrollments = await uow.ewe_enrollments.list_for_batch(batch.id)
        result.append(BatchDetail(batch=batch, enrollments=enrollments))
    return result
