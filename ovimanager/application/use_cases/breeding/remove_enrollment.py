from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from ovimanager.application.errors import ConflictError, NotFound, ValidationError
from ovimanager.application.interfaces.unit_of_work import UnitOfWork
from ovimanager.application.services.group_resolver import resolve_or_create
from ovimanager.application.services.steps import OperationSteps
from ovimanager.domain.value_objects.herd_category import HerdCategory

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RemoveEnrollmentOutput:
    batch_id: UUID
    ewe_id: UUID
    enrollment_removed: bool
    pregnancy_record_removed: bool
    cleanup_warning: str | None = None


async def execute(
    uow: UnitOfWork,
    enrollment_id: UUID,
    ewe_id: UUID,
    batch_id: UUID,
) -> RemoveEnrollmentOutput:
    batch = await uow.breeding_batches.get(batch_id)
    if not batch:
        raise NotFound(f"Breeding batch {batch_id} not found")
    if not batch.is_open:
        raise ValidationError("Cannot remove ewes from a closed batch")

    enrollment = await uow.ewe_enrollments.get(enrollment_id)
    if enrollment and (enrollment.batch_id != batch_id or enrollment.ewe_id != ewe_id):
        raise ValidationError(
            "Enrollment does not belong to this batch and ewe",
            details={"enrollment_id": str(enrollment_id)},
        )
    if enrollment is None:
        enrollment = await uow.ewe_enrollments.get_for_batch_and_ewe(batch_id, ewe_id)
    if enrollment is None:
        # Row already gone: only a ewe not live elsewhere may be reset again
        if not await uow.animals.get(ewe_id):
            raise NotFound(f"Animal {ewe_id} not found")
        active = await uow.ewe_enrollments.find_active_for_ewe(ewe_id)
        if active is not None:
            raise ConflictError(
                "Ewe is enrolled in another open batch",
                details={"ewe_id": str(ewe_id), "batch_id": str(active.batch_id)},
            )
    return await release(
        uow,
        batch_id=batch_id,
        ewe_id=ewe_id,
        enrollment_id=enrollment.id if enrollment else None,
    )


async def release(
    uow: UnitOfWork,
    *,
    batch_id: UUID,
    ewe_id: UUID,
    enrollment_id: UUID | None,
) -> RemoveEnrollmentOutput:
    """Take a ewe out of a batch and put her back in the awaiting-mating group.

    The enrollment delete and the animal reset commit together. Removing the
    confirmed pregnancy record from this batch is a separate best-effort step:
    when it fails the removal stands and the failure is returned as a warning.
    """
    steps = OperationSteps("remove_enrollment")
    if enrollment_id is not None:
        await steps.run("delete_enrollment", uow.ewe_enrollments.delete(enrollment_id))

    awaiting = await steps.run(
        "resolve_awaiting_group", resolve_or_create(uow, HerdCategory.AWAITING_MATING)
    )
    updated = await steps.run(
        "reset_animal",
        uow.animals.update(ewe_id, {"group_id": awaiting.id, "is_pregnant": False}),
    )
    if updated is None:
        logger.warning("Animal %s no longer exists; nothing to reset", ewe_id)
    await steps.commit(uow)
    logger.info("Ewe %s released from batch %s", ewe_id, batch_id)

    removed, warning = await _discard_confirmed_pregnancy(uow, ewe_id, batch_id)
    return RemoveEnrollmentOutput(
        batch_id=batch_id,
        ewe_id=ewe_id,
        enrollment_removed=enrollment_id is not None,
        pregnancy_record_removed=removed,
        cleanup_warning=warning,
    )


async def _discard_confirmed_pregnancy(
    uow: UnitOfWork, ewe_id: UUID, batch_id: UUID
) -> tuple[bool, str | None]:
    try:
        record = await uow.pregnancy_records.find_confirmed_by_ewe_and_origin(ewe_id, batch_id)
        if record is None:
            return False, None
        await uow.pregnancy_records.delete(record.id)
        await uow.commit()
    except Exception as exc:
        try:
            await uow.rollback()
        except Exception:
            logger.warning(
                "Rollback after failed pregnancy cleanup also failed for ewe %s", ewe_id
            )
        logger.warning(
            "Pregnancy record cleanup failed for ewe %s from batch %s: %s",
            ewe_id,
            batch_id,
            exc,
            exc_info=True,
        )
        return False, (
            f"Ewe released, but the confirmed pregnancy record from batch {batch_id} "
            "could not be removed; retry the removal to clean it up"
        )
    logger.info("Confirmed pregnancy record %s removed for ewe %s", record.id, ewe_id)
    return True, None
