from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from ovimanager.application.errors import NotFound, PermissionDenied, ValidationError
from ovimanager.application.interfaces.secret_verifier import SecretVerifier
from ovimanager.application.interfaces.unit_of_work import UnitOfWork
from ovimanager.application.services.steps import OperationSteps
from ovimanager.domain.models.breeding_batch import BreedingBatch
from ovimanager.domain.models.ewe_enrollment import MAX_CYCLES, CycleResult, EweEnrollment
from ovimanager.domain.models.pregnancy_record import PregnancyRecord

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RecordCycleResultInput:
    batch_id: UUID
    ewe_id: UUID
    cycle: int
    result: str  # pregnant, empty
    manager_secret: str | None = None


@dataclass(slots=True)
class RecordCycleResultOutput:
    enrollment: EweEnrollment
    pregnancy_record: PregnancyRecord | None = None


def _parse_result(value: str) -> CycleResult:
    try:
        result = CycleResult(value)
    except ValueError as exc:
        raise ValidationError("Invalid result. Must be one of: pregnant, empty") from exc
    if result is CycleResult.PENDING:
        raise ValidationError("Invalid result. Must be one of: pregnant, empty")
    return result


def _authorize_override(verifier: SecretVerifier | None, candidate: str | None) -> None:
    if not candidate or verifier is None or not verifier.verify(candidate):
        raise PermissionDenied("Manager secret required to change a finalized enrollment")


async def execute(
    uow: UnitOfWork,
    payload: RecordCycleResultInput,
    verifier: SecretVerifier | None = None,
) -> RecordCycleResultOutput:
    if payload.cycle < 1 or payload.cycle > MAX_CYCLES:
        raise ValidationError(f"Cycle must be between 1 and {MAX_CYCLES}")
    result = _parse_result(payload.result)

    batch = await uow.breeding_batches.get(payload.batch_id)
    if not batch:
        raise NotFound(f"Breeding batch {payload.batch_id} not found")
    if not batch.is_open:
        raise ValidationError("Cannot record cycle results on a closed batch")

    enrollment = await uow.ewe_enrollments.get_for_batch_and_ewe(payload.batch_id, payload.ewe_id)
    if not enrollment:
        raise NotFound(f"Ewe {payload.ewe_id} is not enrolled in batch {payload.batch_id}")
    if not enrollment.is_reachable(payload.cycle):
        raise ValidationError(
            f"Cycle {payload.cycle} can only be recorded after cycle {payload.cycle - 1} is empty",
            details={"cycles": [r.value for r in enrollment.results]},
        )

    # Same value again is a retry: side effects are re-applied, nothing is rewritten
    is_retry = enrollment.result_for(payload.cycle) is result
    if enrollment.finalized and not is_retry:
        _authorize_override(verifier, payload.manager_secret)
        logger.info(
            "Manager override on finalized enrollment %s (cycle %d -> %s)",
            enrollment.id,
            payload.cycle,
            result.value,
        )

    steps = OperationSteps("record_cycle_result")
    if not is_retry:
        enrollment.apply_result(payload.cycle, result)
        enrollment = await steps.run(
            "update_enrollment", uow.ewe_enrollments.update(enrollment)
        )

    record = None
    if enrollment.is_pregnant:
        record = await _ensure_pregnancy(uow, steps, batch, payload.ewe_id)
    else:
        await _discard_pregnancy(uow, steps, batch, payload.ewe_id)
    await steps.commit(uow)

    logger.info(
        "Cycle %d recorded as %s for ewe %s in batch %s (finalized=%s)",
        payload.cycle,
        result.value,
        payload.ewe_id,
        batch.id,
        enrollment.finalized,
    )
    return RecordCycleResultOutput(enrollment=enrollment, pregnancy_record=record)


async def _ensure_pregnancy(
    uow: UnitOfWork, steps: OperationSteps, batch: BreedingBatch, ewe_id: UUID
) -> PregnancyRecord:
    existing = await steps.run(
        "find_pregnancy_record",
        uow.pregnancy_records.list(ewe_id=ewe_id, origin_batch_id=batch.id),
    )
    if existing:
        record = existing[0]
    else:
        record = await steps.run(
            "create_pregnancy_record",
            uow.pregnancy_records.add(
                PregnancyRecord.confirm(
                    ewe_id=ewe_id,
                    covering_date=batch.start_date,
                    sire_id=batch.sire_id,
                    origin_batch_id=batch.id,
                )
            ),
        )
    if record.is_open:
        await steps.run("flag_pregnant", uow.animals.update(ewe_id, {"is_pregnant": True}))
    return record


async def _discard_pregnancy(
    uow: UnitOfWork, steps: OperationSteps, batch: BreedingBatch, ewe_id: UUID
) -> None:
    record = await steps.run(
        "find_pregnancy_record",
        uow.pregnancy_records.find_confirmed_by_ewe_and_origin(ewe_id, batch.id),
    )
    if record is None:
        return
    await steps.run("delete_pregnancy_record", uow.pregnancy_records.delete(record.id))
    await steps.run("clear_pregnant_flag", uow.animals.update(ewe_id, {"is_pregnant": False}))
