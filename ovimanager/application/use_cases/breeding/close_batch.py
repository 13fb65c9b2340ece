from __future__ import annotations

import logging
from uuid import UUID

from ovimanager.application.errors import NotFound
from ovimanager.application.interfaces.unit_of_work import UnitOfWork
from ovimanager.domain.models.breeding_batch import BreedingBatch

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, batch_id: UUID) -> BreedingBatch:
    batch = await uow.breeding_batches.get(batch_id)
    if not batch:
        raise NotFound(f"Breeding batch {batch_id} not found")
    if not batch.is_open:
        return batch

    batch.close()
    updated = await uow.breeding_batches.update(batch)
    await uow.commit()
    logger.info("Breeding batch closed: %s (%s)", updated.name, updated.id)
    return updated
