from __future__ import annotations

from datetime import date
from uuid import UUID, uuid4

import pytest

from ovimanager.domain.models.animal import Animal, Sex
from ovimanager.domain.models.breeding_batch import BatchStatus, BreedingBatch
from ovimanager.domain.models.ewe_enrollment import EweEnrollment
from ovimanager.domain.models.group import Group, normalize_group_name
from ovimanager.domain.models.pregnancy_record import PregnancyOutcome, PregnancyRecord


class Failures:
    """Named repository calls that should raise on their next invocations."""

    def __init__(self) -> None:
        self._armed: dict[str, Exception] = {}
        self._only_for: dict[str, UUID] = {}

    def arm(self, call: str, exc: Exception | None = None, *, only_for: UUID | None = None) -> None:
        self._armed[call] = exc or RuntimeError(f"{call} unavailable")
        if only_for is not None:
            self._only_for[call] = only_for

    def clear(self) -> None:
        self._armed.clear()
        self._only_for.clear()

    def check(self, call: str, key: UUID | None = None) -> None:
        exc = self._armed.get(call)
        if exc is None:
            return
        target = self._only_for.get(call)
        if target is not None and target != key:
            return
        raise exc


class InMemoryGroups:
    def __init__(self, failures: Failures) -> None:
        self.items: dict[UUID, Group] = {}
        self.failures = failures

    async def add(self, group: Group) -> Group:
        self.items[group.id] = group
        return group

    async def get(self, group_id: UUID) -> Group | None:
        return self.items.get(group_id)

    async def list_all(self) -> list[Group]:
        return list(self.items.values())

    async def insert_if_absent(self, name: str) -> Group:
        self.failures.check("groups.insert_if_absent")
        for group in self.items.values():
            if group.normalized_name == normalize_group_name(name):
                return group
        return await self.add(Group.create(name))


class InMemoryAnimals:
    def __init__(self, failures: Failures) -> None:
        self.items: dict[UUID, Animal] = {}
        self.failures = failures

    async def add(self, animal: Animal) -> Animal:
        self.items[animal.id] = animal
        return animal

    async def get(self, animal_id: UUID) -> Animal | None:
        return self.items.get(animal_id)

    async def list(self, *, sex=None, status=None, group_id=None, is_pregnant=None):
        return [
            a
            for a in self.items.values()
            if (sex is None or a.sex is sex)
            and (status is None or a.status is status)
            and (group_id is None or a.group_id == group_id)
            and (is_pregnant is None or a.is_pregnant is is_pregnant)
        ]

    async def update(self, animal_id: UUID, data: dict) -> Animal | None:
        self.failures.check("animals.update", animal_id)
        animal = self.items.get(animal_id)
        if animal is None:
            return None
        for key, value in data.items():
            setattr(animal, key, value)
        return animal


class InMemoryBatches:
    def __init__(self, failures: Failures) -> None:
        self.items: dict[UUID, BreedingBatch] = {}
        self.failures = failures

    async def add(self, batch: BreedingBatch) -> BreedingBatch:
        self.items[batch.id] = batch
        return batch

    async def get(self, batch_id: UUID) -> BreedingBatch | None:
        return self.items.get(batch_id)

    async def list(self, *, status=None):
        return [b for b in self.items.values() if status is None or b.status is status]

    async def update(self, batch: BreedingBatch) -> BreedingBatch:
        self.items[batch.id] = batch
        return batch

    async def delete(self, batch_id: UUID) -> bool:
        self.failures.check("breeding_batches.delete", batch_id)
        return self.items.pop(batch_id, None) is not None


class InMemoryEnrollments:
    def __init__(self, failures: Failures, batches: InMemoryBatches) -> None:
        self.items: dict[UUID, EweEnrollment] = {}
        self.failures = failures
        self._batches = batches

    async def add(self, enrollment: EweEnrollment) -> EweEnrollment:
        self.failures.check("ewe_enrollments.add", enrollment.ewe_id)
        self.items[enrollment.id] = enrollment
        return enrollment

    async def get(self, enrollment_id: UUID) -> EweEnrollment | None:
        return self.items.get(enrollment_id)

    async def get_for_batch_and_ewe(self, batch_id: UUID, ewe_id: UUID):
        for e in self.items.values():
            if e.batch_id == batch_id and e.ewe_id == ewe_id:
                return e
        return None

    async def list_for_batch(self, batch_id: UUID) -> list[EweEnrollment]:
        return [e for e in self.items.values() if e.batch_id == batch_id]

    def _active(self) -> list[EweEnrollment]:
        return [
            e
            for e in self.items.values()
            if (b := self._batches.items.get(e.batch_id)) is not None
            and b.status is BatchStatus.OPEN
        ]

    async def find_active_for_ewe(self, ewe_id: UUID) -> EweEnrollment | None:
        return next((e for e in self._active() if e.ewe_id == ewe_id), None)

    async def active_ewe_ids(self) -> set[UUID]:
        return {e.ewe_id for e in self._active()}

    async def update(self, enrollment: EweEnrollment) -> EweEnrollment:
        self.failures.check("ewe_enrollments.update", enrollment.ewe_id)
        self.items[enrollment.id] = enrollment
        return enrollment

    async def delete(self, enrollment_id: UUID) -> bool:
        enrollment = self.items.get(enrollment_id)
        self.failures.check("ewe_enrollments.delete", enrollment.ewe_id if enrollment else None)
        return self.items.pop(enrollment_id, None) is not None


class InMemoryPregnancies:
    def __init__(self, failures: Failures) -> None:
        self.items: dict[UUID, PregnancyRecord] = {}
        self.failures = failures

    async def add(self, record: PregnancyRecord) -> PregnancyRecord:
        self.failures.check("pregnancy_records.add", record.ewe_id)
        self.items[record.id] = record
        return record

    async def get(self, record_id: UUID) -> PregnancyRecord | None:
        return self.items.get(record_id)

    async def list(self, *, ewe_id=None, outcome=None, origin_batch_id=None):
        self.failures.check("pregnancy_records.list", ewe_id)
        return [
            r
            for r in self.items.values()
            if (ewe_id is None or r.ewe_id == ewe_id)
            and (outcome is None or r.outcome is outcome)
            and (origin_batch_id is None or r.origin_batch_id == origin_batch_id)
        ]

    async def find_confirmed_by_ewe_and_origin(self, ewe_id: UUID, origin_batch_id: UUID):
        self.failures.check("pregnancy_records.find_confirmed", ewe_id)
        for r in self.items.values():
            if (
                r.ewe_id == ewe_id
                and r.origin_batch_id == origin_batch_id
                and r.outcome is PregnancyOutcome.CONFIRMED
            ):
                return r
        return None

    async def update(self, record: PregnancyRecord) -> PregnancyRecord:
        self.items[record.id] = record
        return record

    async def delete(self, record_id: UUID) -> bool:
        record = self.items.get(record_id)
        self.failures.check("pregnancy_records.delete", record.ewe_id if record else None)
        return self.items.pop(record_id, None) is not None


class InMemoryUnitOfWork:
    def __init__(self) -> None:
        self.failures = Failures()
        self.groups = InMemoryGroups(self.failures)
        self.animals = InMemoryAnimals(self.failures)
        self.breeding_batches = InMemoryBatches(self.failures)
        self.ewe_enrollments = InMemoryEnrollments(self.failures, self.breeding_batches)
        self.pregnancy_records = InMemoryPregnancies(self.failures)
        self.commits = 0
        self.rollbacks = 0

    async def __aenter__(self) -> InMemoryUnitOfWork:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def commit(self) -> None:
        self.failures.check("commit")
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1
        self.failures.check("rollback")

    # Seeding helpers

    def group(self, name: str) -> Group:
        group = Group.create(name)
        self.groups.items[group.id] = group
        return group

    def ewe(self, group: Group | None = None, **fields) -> Animal:
        animal = Animal.create(
            tag=fields.pop("tag", f"EWE-{uuid4().hex[:6]}"),
            sex=fields.pop("sex", Sex.FEMALE),
            group_id=group.id if group else None,
        )
        for key, value in fields.items():
            setattr(animal, key, value)
        self.animals.items[animal.id] = animal
        return animal

    def batch(self, name: str = "SPRING-24", **fields) -> BreedingBatch:
        batch = BreedingBatch.create(
            name=name,
            start_date=fields.pop("start_date", date(2024, 11, 20)),
            sire_id=fields.pop("sire_id", None),
        )
        for key, value in fields.items():
            setattr(batch, key, value)
        self.breeding_batches.items[batch.id] = batch
        return batch


class StaticVerifier:
    def __init__(self, secret: str) -> None:
        self.secret = secret
        self.calls: list[str] = []

    def verify(self, candidate: str) -> bool:
        self.calls.append(candidate)
        return candidate == self.secret


@pytest.fixture()
def uow() -> InMemoryUnitOfWork:
    return InMemoryUnitOfWork()


@pytest.fixture()
def verifier() -> StaticVerifier:
    return StaticVerifier("let-me-in")
