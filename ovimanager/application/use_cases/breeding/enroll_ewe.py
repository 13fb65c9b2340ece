from __future__ import annotations

import logging
from uuid import UUID

from ovimanager.application.errors import ConflictError, NotFound, ValidationError
from ovimanager.application.interfaces.unit_of_work import UnitOfWork
from ovimanager.application.services.candidates import candidate_rejection
from ovimanager.application.services.group_resolver import find_category_group, resolve_or_create
from ovimanager.application.services.steps import OperationSteps
from ovimanager.domain.models.ewe_enrollment import EweEnrollment
from ovimanager.domain.value_objects.herd_category import HerdCategory

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, batch_id: UUID, ewe_id: UUID) -> EweEnrollment:
    batch = await uow.breeding_batches.get(batch_id)
    if not batch:
        raise NotFound(f"Breeding batch {batch_id} not found")
    if not batch.is_open:
        raise ValidationError("Cannot enroll ewes in a closed batch")

    animal = await uow.animals.get(ewe_id)
    if not animal:
        raise NotFound(f"Animal {ewe_id} not found")

    steps = OperationSteps("enroll_ewe")
    enrollment = await uow.ewe_enrollments.get_for_batch_and_ewe(batch_id, ewe_id)
    if enrollment is None:
        active = await uow.ewe_enrollments.find_active_for_ewe(ewe_id)
        if active is not None:
            raise ConflictError(
                "Ewe is already enrolled in another open batch",
                details={"ewe_id": str(ewe_id), "batch_id": str(active.batch_id)},
            )
        awaiting = await find_category_group(uow, HerdCategory.AWAITING_MATING)
        reason = candidate_rejection(animal, awaiting)
        if reason:
            raise ValidationError(reason, details={"ewe_id": str(ewe_id)})

        # Enrollment row is written before the group change
        enrollment = await steps.run(
            "create_enrollment",
            uow.ewe_enrollments.add(EweEnrollment.create(batch_id=batch_id, ewe_id=ewe_id)),
        )
    else:
        logger.info("Ewe %s already enrolled in batch %s, re-applying group", ewe_id, batch_id)

    in_mating = await steps.run(
        "resolve_in_mating_group", resolve_or_create(uow, HerdCategory.IN_MATING)
    )
    if animal.group_id != in_mating.id:
        await steps.run(
            "assign_in_mating_group",
            uow.animals.update(ewe_id, {"group_id": in_mating.id}),
        )
    await steps.commit(uow)
    logger.info("Ewe %s enrolled in batch %s (%s)", ewe_id, batch_id, enrollment.id)
    return enrollment
