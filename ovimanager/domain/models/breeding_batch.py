from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class BatchStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


@dataclass(slots=True)
class BreedingBatch:
    id: UUID
    name: str
    start_date: date
    sire_id: UUID | None = None
    status: BatchStatus = BatchStatus.OPEN
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        name: str,
        start_date: date,
        sire_id: UUID | None = None,
    ) -> BreedingBatch:
        return cls(
            id=uuid4(),
            name=name,
            start_date=start_date,
            sire_id=sire_id,
            status=BatchStatus.OPEN,
            created_at=datetime.now(timezone.utc),
        )

    @property
    def is_open(self) -> bool:
        return self.status is BatchStatus.OPEN

    def close(self) -> None:
        self.status = BatchStatus.CLOSED
