from __future__ import annotations

from uuid import UUID

from ovimanager.application.errors import NotFound
from ovimanager.application.interfaces.unit_of_work import UnitOfWork
from ovimanager.application.services.candidates import candidate_rejection
from ovimanager.application.services.group_resolver import find_category_group
from ovimanager.domain.models.animal import Animal, AnimalStatus, Sex
from ovimanager.domain.value_objects.herd_category import HerdCategory


async def execute(uow: UnitOfWork, batch_id: UUID | None = None) -> list[Animal]:
    """Ewes that could be enrolled right now."""
    if batch_id is not None and not await uow.breeding_batches.get(batch_id):
        raise NotFound(f"Breeding batch {batch_id} not found")

    awaiting = await find_category_group(uow, HerdCategory.AWAITING_MATING)
    if awaiting is None:
        return []

    animals = await uow.animals.list(
        sex=Sex.FEMALE,
        status=AnimalStatus.ACTIVE,
        group_id=awaiting.id,
        is_pregnant=False,
    )
    enrolled = await uow.ewe_enrollments.active_ewe_ids()
    return [
        a
        for a in animals
        if a.id not in enrolled and candidate_rejection(a, awaiting) is None
    ]
