from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from ovimanager.application.use_cases.pregnancy import list_pregnancy_records, update_outcome
from ovimanager.domain.models.pregnancy_record import GESTATION_DAYS, due_date_for
from ovimanager.infrastructure.db.session import SQLAlchemyUnitOfWork
from ovimanager.interfaces.http.deps import get_uow
from ovimanager.interfaces.http.schemas.pregnancies import (
    DueDateResponse,
    OutcomeInput,
    PregnancyRecordResponse,
)

router = APIRouter(prefix="/pregnancies", tags=["pregnancies"])


@router.get("/", response_model=list[PregnancyRecordResponse])
async def list_pregnancies(
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    ewe_id: UUID | None = Query(None),
    outcome: str | None = Query(None),
    origin_batch_id: UUID | None = Query(None),
):
    return await list_pregnancy_records.execute(
        uow, ewe_id=ewe_id, outcome=outcome, origin_batch_id=origin_batch_id
    )


@router.get("/due-date", response_model=DueDateResponse)
async def projected_due_date(covering_date: date = Query(...)):
    return DueDateResponse(
        covering_date=covering_date,
        due_date=due_date_for(covering_date),
        gestation_days=GESTATION_DAYS,
    )


@router.get("/{record_id}", response_model=PregnancyRecordResponse)
async def get_pregnancy(record_id: UUID, *, uow: SQLAlchemyUnitOfWork = Depends(get_uow)):
    record = await uow.pregnancy_records.get(record_id)
    if not record:
        raise HTTPException(status_code=404, detail="Pregnancy record not found")
    return record


@router.post("/{record_id}/outcome", response_model=PregnancyRecordResponse)
async def record_outcome(
    record_id: UUID,
    payload: OutcomeInput,
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
):
    return await update_outcome.execute(
        uow,
        update_outcome.UpdateOutcomeInput(
            record_id=record_id,
            outcome=payload.outcome,
            actual_date=payload.actual_date,
        ),
    )
