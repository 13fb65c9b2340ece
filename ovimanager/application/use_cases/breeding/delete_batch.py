from __future__ import annotations

import logging
from dataclasses import dataclass, field
from uuid import UUID

from ovimanager.application.errors import AppError, CascadeDeleteError, NotFound
from ovimanager.application.interfaces.unit_of_work import UnitOfWork
from ovimanager.application.services.steps import OperationSteps
from ovimanager.application.use_cases.breeding import remove_enrollment

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DeleteBatchOutput:
    batch_id: UUID
    released_ewe_ids: list[UUID] = field(default_factory=list)
    cleanup_warnings: list[str] = field(default_factory=list)


async def execute(uow: UnitOfWork, batch_id: UUID) -> DeleteBatchOutput:
    batch = await uow.breeding_batches.get(batch_id)
    if not batch:
        raise NotFound(f"Breeding batch {batch_id} not found")

    output = DeleteBatchOutput(batch_id=batch_id)
    failed: list[dict[str, str]] = []
    enrollments = await uow.ewe_enrollments.list_for_batch(batch_id)
    for enrollment in enrollments:
        try:
            released = await remove_enrollment.release(
                uow,
                batch_id=batch_id,
                ewe_id=enrollment.ewe_id,
                enrollment_id=enrollment.id,
            )
        except AppError as exc:
            await uow.rollback()
            logger.warning(
                "Could not release ewe %s while deleting batch %s: %s",
                enrollment.ewe_id,
                batch_id,
                exc.message,
            )
            failed.append(
                {
                    "ewe_id": str(enrollment.ewe_id),
                    "enrollment_id": str(enrollment.id),
                    "code": exc.code,
                    "message": exc.message,
                }
            )
            continue
        output.released_ewe_ids.append(enrollment.ewe_id)
        if released.cleanup_warning:
            output.cleanup_warnings.append(released.cleanup_warning)

    if failed:
        raise CascadeDeleteError(
            f"Released {len(output.released_ewe_ids)} of {len(enrollments)} ewes; "
            "batch was not deleted",
            details={
                "batch_id": str(batch_id),
                "released": [str(x) for x in output.released_ewe_ids],
                "failed": failed,
            },
        )

    steps = OperationSteps("delete_batch")
    await steps.run("delete_batch", uow.breeding_batches.delete(batch_id))
    await steps.commit(uow)
    logger.info(
        "Breeding batch %s deleted after releasing %d ewes",
        batch_id,
        len(output.released_ewe_ids),
    )
    return output
