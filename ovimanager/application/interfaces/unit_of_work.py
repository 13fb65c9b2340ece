from __future__ import annotations

from typing import Protocol

from ovimanager.application.interfaces.repositories.animals import AnimalRepository
from ovimanager.application.interfaces.repositories.breeding_batches import (
    BreedingBatchesRepository,
)
from ovimanager.application.interfaces.repositories.ewe_enrollments import (
    EweEnrollmentsRepository,
)
from ovimanager.application.interfaces.repositories.pregnancy_records import (
    PregnancyRecordsRepository,
)
from ovimanager.domain.ports.groups_repo import GroupsRepo


class UnitOfWork(Protocol):
    animals: AnimalRepository
    groups: GroupsRepo
    breeding_batches: BreedingBatchesRepository
    ewe_enrollments: EweEnrollmentsRepository
    pregnancy_records: PregnancyRecordsRepository

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
