from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ovimanager.application.errors import ConflictError, InfrastructureError
from ovimanager.domain.models.group import Group, normalize_group_name
from ovimanager.domain.ports.groups_repo import GroupsRepo
from ovimanager.infrastructure.db.orm.group import GroupORM


class GroupsSQLAlchemyRepository(GroupsRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: GroupORM) -> Group:
        return Group(id=orm.id, name=orm.name, created_at=orm.created_at)

    async def add(self, group: Group) -> Group:
        orm = GroupORM(
            id=group.id,
            name=group.name,
            normalized_name=group.normalized_name,
            created_at=group.created_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError(
                "Group name already exists", details={"name": group.name}
            ) from exc
        return self._to_domain(orm)

    async def get(self, group_id: UUID) -> Group | None:
        orm = await self.session.get(GroupORM, group_id)
        return self._to_domain(orm) if orm else None

    async def list_all(self) -> list[Group]:
        stmt = select(GroupORM).order_by(GroupORM.created_at, GroupORM.name)
        res = await self.session.execute(stmt)
        return [self._to_domain(x) for x in res.scalars().all()]

    async def insert_if_absent(self, name: str) -> Group:
        normalized = normalize_group_name(name)
        values = {
            "id": uuid4(),
            "name": name.strip(),
            "normalized_name": normalized,
            "created_at": datetime.now(timezone.utc),
        }
        dialect = self.session.bind.dialect.name
        if dialect == "postgresql":
            stmt = pg_insert(GroupORM)
        elif dialect == "sqlite":
            stmt = sqlite_insert(GroupORM)
        else:
            raise InfrastructureError(f"Unsupported database dialect for groups: {dialect}")
        stmt = stmt.values(**values).on_conflict_do_nothing(index_elements=["normalized_name"])
        await self.session.execute(stmt)

        res = await self.session.execute(
            select(GroupORM).where(GroupORM.normalized_name == normalized)
        )
        return self._to_domain(res.scalar_one())
