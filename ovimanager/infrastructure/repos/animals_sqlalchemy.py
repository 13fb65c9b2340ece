from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ovimanager.application.errors import ConflictError
from ovimanager.application.interfaces.repositories.animals import AnimalRepository
from ovimanager.domain.models.animal import Animal, AnimalStatus, Sex
from ovimanager.infrastructure.db.orm.animal import AnimalORM

_UPDATABLE_FIELDS = {"group_id", "is_pregnant", "name"}


class AnimalsSQLAlchemyRepository(AnimalRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: AnimalORM) -> Animal:
        return Animal(
            id=orm.id,
            tag=orm.tag,
            sex=Sex(orm.sex),
            name=orm.name,
            status=AnimalStatus(orm.status),
            group_id=orm.group_id,
            is_pregnant=orm.is_pregnant,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    async def add(self, animal: Animal) -> Animal:
        orm = AnimalORM(
            id=animal.id,
            tag=animal.tag,
            name=animal.name,
            sex=animal.sex.value,
            status=animal.status.value,
            group_id=animal.group_id,
            is_pregnant=animal.is_pregnant,
            created_at=animal.created_at,
            updated_at=animal.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(
                "Animal tag already exists or group is unknown",
                details={"tag": animal.tag, "group_id": str(animal.group_id)},
            ) from exc
        return self._to_domain(orm)

    async def get(self, animal_id: UUID) -> Animal | None:
        orm = await self.session.get(AnimalORM, animal_id)
        return self._to_domain(orm) if orm else None

    async def list(
        self,
        *,
        sex: Sex | None = None,
        status: AnimalStatus | None = None,
        group_id: UUID | None = None,
        is_pregnant: bool | None = None,
    ) -> list[Animal]:
        stmt = select(AnimalORM)
        if sex is not None:
            stmt = stmt.where(AnimalORM.sex == sex.value)
        if status is not None:
            stmt = stmt.where(AnimalORM.status == status.value)
        if group_id is not None:
            stmt = stmt.where(AnimalORM.group_id == group_id)
        if is_pregnant is not None:
            stmt = stmt.where(AnimalORM.is_pregnant.is_(is_pregnant))
        stmt = stmt.order_by(AnimalORM.tag)
        res = await self.session.execute(stmt)
        return [self._to_domain(x) for x in res.scalars().all()]

    async def update(self, animal_id: UUID, data: dict) -> Animal | None:
        unknown = set(data) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Animal fields not updatable here: {sorted(unknown)}")
        orm = await self.session.get(AnimalORM, animal_id)
        if orm is None:
            return None
        for key, value in data.items():
            setattr(orm, key, value)
        orm.updated_at = datetime.now(timezone.utc)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(
                "Animal update rejected by a dependency",
                details={"animal_id": str(animal_id), "fields": sorted(data)},
            ) from exc
        return self._to_domain(orm)
