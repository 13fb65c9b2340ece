from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class Sex(str, Enum):
    FEMALE = "female"
    MALE = "male"


class AnimalStatus(str, Enum):
    ACTIVE = "active"
    CULLED = "culled"
    DEAD = "dead"


@dataclass(slots=True)
class Animal:
    id: UUID
    tag: str
    sex: Sex
    name: str | None = None
    status: AnimalStatus = AnimalStatus.ACTIVE
    group_id: UUID | None = None
    is_pregnant: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        tag: str,
        sex: Sex,
        name: str | None = None,
        group_id: UUID | None = None,
        status: AnimalStatus = AnimalStatus.ACTIVE,
    ) -> Animal:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            tag=tag,
            sex=sex,
            name=name,
            status=status,
            group_id=group_id,
            is_pregnant=False,
            created_at=now,
            updated_at=now,
        )
