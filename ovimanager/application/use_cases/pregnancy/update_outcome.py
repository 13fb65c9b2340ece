from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from ovimanager.application.errors import ConflictError, NotFound, ValidationError
from ovimanager.application.interfaces.unit_of_work import UnitOfWork
from ovimanager.application.services.steps import OperationSteps
from ovimanager.domain.models.pregnancy_record import PregnancyOutcome, PregnancyRecord

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class UpdateOutcomeInput:
    record_id: UUID
    outcome: str  # birth, failure
    actual_date: date | None = None


async def execute(uow: UnitOfWork, payload: UpdateOutcomeInput) -> PregnancyRecord:
    try:
        outcome = PregnancyOutcome(payload.outcome)
    except ValueError as exc:
        raise ValidationError("Invalid outcome. Must be one of: birth, failure") from exc

    if outcome is PregnancyOutcome.BIRTH:
        actual_date = payload.actual_date or date.today()
    elif outcome is PregnancyOutcome.FAILURE:
        actual_date = payload.actual_date
    elif outcome is PregnancyOutcome.CONFIRMED:
        raise ValidationError("Pregnancies are confirmed from a breeding batch cycle result")
    else:
        raise ValidationError(f"Unsupported outcome: {outcome.value}")

    record = await uow.pregnancy_records.get(payload.record_id)
    if not record:
        raise NotFound(f"Pregnancy record {payload.record_id} not found")
    if not record.is_open:
        raise ConflictError(
            "Pregnancy record already has a terminal outcome",
            details={"record_id": str(record.id), "outcome": record.outcome.value},
        )

    record.close(outcome, actual_date)
    steps = OperationSteps("update_pregnancy_outcome")
    updated = await steps.run("update_record", uow.pregnancy_records.update(record))
    await steps.run(
        "clear_pregnant_flag", uow.animals.update(record.ewe_id, {"is_pregnant": False})
    )
    await steps.commit(uow)
    logger.info(
        "Pregnancy record %s closed as %s for ewe %s", record.id, outcome.value, record.ewe_id
    )
    return updated
