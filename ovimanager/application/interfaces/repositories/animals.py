from __future__ import annotations

from typing import Protocol
from uuid import UUID

from ovimanager.domain.models.animal import Animal, AnimalStatus, Sex


class AnimalRepository(Protocol):
    async def add(self, animal: Animal) -> Animal: ...

    async def get(self, animal_id: UUID) -> Animal | None: ...

    async def list(
        self,
        *,
        sex: Sex | None = None,
        status: AnimalStatus | None = None,
        group_id: UUID | None = None,
        is_pregnant: bool | None = None,
    ) -> list[Animal]: ...

    async def update(self, animal_id: UUID, data: dict) -> Animal | None: ...
