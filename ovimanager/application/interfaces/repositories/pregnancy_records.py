from __future__ import annotations

from typing import Protocol
from uuid import UUID

from ovimanager.domain.models.pregnancy_record import PregnancyOutcome, PregnancyRecord


class PregnancyRecordsRepository(Protocol):
    async def add(self, record: PregnancyRecord) -> PregnancyRecord: ...

    async def get(self, record_id: UUID) -> PregnancyRecord | None: ...

    async def list(
        self,
        *,
        ewe_id: UUID | None = None,
        outcome: PregnancyOutcome | None = None,
        origin_batch_id: UUID | None = None,
    ) -> list[PregnancyRecord]: ...

    async def find_confirmed_by_ewe_and_origin(
        self, ewe_id: UUID, origin_batch_id: UUID
    ) -> PregnancyRecord | None: ...

    async def update(self, record: PregnancyRecord) -> PregnancyRecord: ...

    async def delete(self, record_id: UUID) -> bool: ...
