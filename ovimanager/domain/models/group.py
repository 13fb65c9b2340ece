from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


def normalize_group_name(name: str) -> str:
    return " ".join(name.split()).upper()


@dataclass(slots=True)
class Group:
    id: UUID
    name: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(cls, name: str) -> Group:
        return cls(id=uuid4(), name=name.strip(), created_at=datetime.now(timezone.utc))

    @property
    def normalized_name(self) -> str:
        return normalize_group_name(self.name)
