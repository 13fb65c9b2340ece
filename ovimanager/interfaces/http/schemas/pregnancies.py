from __future__ import annotations

from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from ovimanager.domain.models.pregnancy_record import PregnancyOutcome


class OutcomeInput(BaseModel):
    outcome: str  # birth, failure
    actual_date: date | None = None


class PregnancyRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    ewe_id: UUID
    sire_id: UUID | None
    covering_date: date
    due_date: date
    outcome: PregnancyOutcome
    actual_date: date | None
    origin_batch_id: UUID | None
    notes: str | None


class DueDateResponse(BaseModel):
    covering_date: date
    due_date: date
    gestation_days: int
