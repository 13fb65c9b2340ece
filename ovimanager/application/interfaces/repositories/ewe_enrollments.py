from __future__ import annotations

from typing import Protocol
from uuid import UUID

from ovimanager.domain.models.ewe_enrollment import EweEnrollment


class EweEnrollmentsRepository(Protocol):
    async def add(self, enrollment: EweEnrollment) -> EweEnrollment: ...

    async def get(self, enrollment_id: UUID) -> EweEnrollment | None: ...

    async def get_for_batch_and_ewe(
        self, batch_id: UUID, ewe_id: UUID
    ) -> EweEnrollment | None: ...

    async def list_for_batch(self, batch_id: UUID) -> list[EweEnrollment]: ...

    # Enrollments whose batch is still open
    async def find_active_for_ewe(self, ewe_id: UUID) -> EweEnrollment | None: ...

    async def active_ewe_ids(self) -> set[UUID]: ...

    async def update(self, enrollment: EweEnrollment) -> EweEnrollment: ...

    async def delete(self, enrollment_id: UUID) -> bool: ...
