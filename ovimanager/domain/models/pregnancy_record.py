from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from uuid import UUID, uuid4


class PregnancyOutcome(str, Enum):
    CONFIRMED = "confirmed"
    BIRTH = "birth"
    FAILURE = "failure"


GESTATION_DAYS = 150


def due_date_for(covering_date: date) -> date:
    return covering_date + timedelta(days=GESTATION_DAYS)


@dataclass(slots=True)
class PregnancyRecord:
    id: UUID
    ewe_id: UUID
    covering_date: date
    due_date: date
    sire_id: UUID | None = None
    outcome: PregnancyOutcome = PregnancyOutcome.CONFIRMED
    actual_date: date | None = None
    origin_batch_id: UUID | None = None
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def confirm(
        cls,
        ewe_id: UUID,
        covering_date: date,
        sire_id: UUID | None = None,
        origin_batch_id: UUID | None = None,
        notes: str | None = None,
    ) -> PregnancyRecord:
        return cls(
            id=uuid4(),
            ewe_id=ewe_id,
            covering_date=covering_date,
            due_date=due_date_for(covering_date),
            sire_id=sire_id,
            outcome=PregnancyOutcome.CONFIRMED,
            origin_batch_id=origin_batch_id,
            notes=notes,
            created_at=datetime.now(timezone.utc),
        )

    @property
    def is_open(self) -> bool:
        return self.outcome is PregnancyOutcome.CONFIRMED

    def close(self, outcome: PregnancyOutcome, actual_date: date | None = None) -> None:
        if outcome is PregnancyOutcome.CONFIRMED:
            raise ValueError("Confirmation is only reachable through a pregnant cycle result")
        if not self.is_open:
            raise ValueError("Pregnancy record already has a terminal outcome")
        self.outcome = outcome
        self.actual_date = actual_date
