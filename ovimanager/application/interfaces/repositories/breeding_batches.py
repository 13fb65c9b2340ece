from __future__ import annotations

from typing import Protocol
from uuid import UUID

from ovimanager.domain.models.breeding_batch import BatchStatus, BreedingBatch


class BreedingBatchesRepository(Protocol):
    async def add(self, batch: BreedingBatch) -> BreedingBatch: ...

    async def get(self, batch_id: UUID) -> BreedingBatch | None: ...

    async def list(self, *, status: BatchStatus | None = None) -> list[BreedingBatch]: ...

    async def update(self, batch: BreedingBatch) -> BreedingBatch: ...

    async def delete(self, batch_id: UUID) -> bool: ...
