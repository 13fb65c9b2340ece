from __future__ import annotations

from abc import ABC, abstractmethod
from uuid import UUID

from ovimanager.domain.models.group import Group


class GroupsRepo(ABC):
    @abstractmethod
    async def add(self, group: Group) -> Group: ...

    @abstractmethod
    async def get(self, group_id: UUID) -> Group | None: ...

    @abstractmethod
    async def list_all(self) -> list[Group]: ...

    @abstractmethod
    async def insert_if_absent(self, name: str) -> Group:
        """Insert a group unless one with the same normalized name exists; return the stored row."""
