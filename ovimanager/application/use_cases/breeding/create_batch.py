from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from ovimanager.application.errors import ValidationError
from ovimanager.application.interfaces.unit_of_work import UnitOfWork
from ovimanager.domain.models.breeding_batch import BreedingBatch

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateBatchInput:
    name: str
    start_date: date | None = None
    sire_id: UUID | None = None


async def execute(uow: UnitOfWork, payload: CreateBatchInput) -> BreedingBatch:
    name = (payload.name or "").strip()
    if not name:
        raise ValidationError("Batch name is required")

    batch = BreedingBatch.create(
        name=name,
        start_date=payload.start_date or date.today(),
        sire_id=payload.sire_id,
    )
    created = await uow.breeding_batches.add(batch)
    await uow.commit()
    logger.info(
        "Breeding batch created: %s (%s) starting %s",
        created.name,
        created.id,
        created.start_date,
    )
    return created
