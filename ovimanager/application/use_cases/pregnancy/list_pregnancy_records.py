from __future__ import annotations

from uuid import UUID

from ovimanager.application.errors import ValidationError
from ovimanager.application.interfaces.unit_of_work import UnitOfWork
from ovimanager.domain.models.pregnancy_record import PregnancyOutcome, PregnancyRecord


async def execute(
    uow: UnitOfWork,
    ewe_id: UUID | None = None,
    outcome: str | None = None,
    origin_batch_id: UUID | None = None,
) -> list[PregnancyRecord]:
    outcome_filter = None
    if outcome is not None:
        try:
            outcome_filter = PregnancyOutcome(outcome)
        except ValueError as exc:
            valid = ", ".join(o.value for o in PregnancyOutcome)
            raise ValidationError(f"Invalid outcome. Must be one of: {valid}") from exc

    records = await uow.pregnancy_records.list(
        ewe_id=ewe_id,
        outcome=outcome_filter,
        origin_batch_id=origin_batch_id,
    )
    return sorted(records, key=lambda r: r.covering_date, reverse=True)
