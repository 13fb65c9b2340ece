from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from ovimanager.application.interfaces.secret_verifier import SecretVerifier
from ovimanager.application.use_cases.breeding import (
    close_batch,
    create_batch,
    delete_batch,
    enroll_ewe,
    get_batch,
    list_batches,
    list_candidates,
    record_cycle_result,
    remove_enrollment,
    summarize_batch,
)
from ovimanager.application.use_cases.breeding.get_batch import BatchDetail
from ovimanager.config.settings import Settings
from ovimanager.infrastructure.db.session import SQLAlchemyUnitOfWork
from ovimanager.interfaces.http.deps import get_app_settings, get_secret_verifier, get_uow
from ovimanager.interfaces.http.schemas.animals import AnimalResponse
from ovimanager.interfaces.http.schemas.breeding import (
    BatchCreate,
    BatchResponse,
    BatchSummaryResponse,
    CycleResultInput,
    CycleResultResponse,
    DeleteBatchResponse,
    EnrollmentCreate,
    EnrollmentResponse,
    RemoveEnrollmentResponse,
)
from ovimanager.interfaces.http.schemas.pregnancies import PregnancyRecordResponse

router = APIRouter(prefix="/breeding/batches", tags=["breeding"])


def _batch_response(detail: BatchDetail) -> BatchResponse:
    batch = detail.batch
    return BatchResponse(
        id=batch.id,
        name=batch.name,
        sire_id=batch.sire_id,
        start_date=batch.start_date,
        status=batch.status,
        enrollments=[EnrollmentResponse.model_validate(e) for e in detail.enrollments],
    )


@router.get("/", response_model=list[BatchResponse])
async def list_batches_endpoint(
    status_filter: str | None = Query(None, alias="status"),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
):
    details = await list_batches.execute(uow, status=status_filter)
    return [_batch_response(d) for d in details]


@router.post("/", response_model=BatchResponse, status_code=status.HTTP_201_CREATED)
async def create_batch_endpoint(
    payload: BatchCreate,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
):
    batch = await create_batch.execute(
        uow,
        create_batch.CreateBatchInput(
            name=payload.name,
            start_date=payload.start_date,
            sire_id=payload.sire_id,
        ),
    )
    return _batch_response(BatchDetail(batch=batch))


@router.get("/{batch_id}", response_model=BatchResponse)
async def get_batch_endpoint(batch_id: UUID, uow: SQLAlchemyUnitOfWork = Depends(get_uow)):
    return _batch_response(await get_batch.execute(uow, batch_id))


@router.delete("/{batch_id}", response_model=DeleteBatchResponse)
async def delete_batch_endpoint(batch_id: UUID, uow: SQLAlchemyUnitOfWork = Depends(get_uow)):
    result = await delete_batch.execute(uow, batch_id)
    return DeleteBatchResponse.model_validate(result)


@router.post("/{batch_id}/close", response_model=BatchResponse)
async def close_batch_endpoint(batch_id: UUID, uow: SQLAlchemyUnitOfWork = Depends(get_uow)):
    await close_batch.execute(uow, batch_id)
    return _batch_response(await get_batch.execute(uow, batch_id))


@router.get("/{batch_id}/summary", response_model=BatchSummaryResponse)
async def batch_summary_endpoint(batch_id: UUID, uow: SQLAlchemyUnitOfWork = Depends(get_uow)):
    summary = await summarize_batch.execute(uow, batch_id)
    return BatchSummaryResponse.model_validate(summary)


@router.get("/{batch_id}/candidates", response_model=list[AnimalResponse])
async def candidates_endpoint(batch_id: UUID, uow: SQLAlchemyUnitOfWork = Depends(get_uow)):
    return await list_candidates.execute(uow, batch_id)


@router.post(
    "/{batch_id}/enrollments",
    response_model=EnrollmentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def enroll_endpoint(
    batch_id: UUID,
    payload: EnrollmentCreate,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
):
    enrollment = await enroll_ewe.execute(uow, batch_id, payload.ewe_id)
    return EnrollmentResponse.model_validate(enrollment)


@router.delete(
    "/{batch_id}/enrollments/{enrollment_id}",
    response_model=RemoveEnrollmentResponse,
)
async def remove_enrollment_endpoint(
    batch_id: UUID,
    enrollment_id: UUID,
    ewe_id: UUID = Query(...),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
):
    result = await remove_enrollment.execute(uow, enrollment_id, ewe_id, batch_id)
    return RemoveEnrollmentResponse.model_validate(result)


@router.post("/{batch_id}/ewes/{ewe_id}/cycles/{cycle}", response_model=CycleResultResponse)
async def record_cycle_endpoint(
    batch_id: UUID,
    ewe_id: UUID,
    cycle: int,
    payload: CycleResultInput,
    request: Request,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    settings: Settings = Depends(get_app_settings),
    verifier: SecretVerifier = Depends(get_secret_verifier),
):
    result = await record_cycle_result.execute(
        uow,
        record_cycle_result.RecordCycleResultInput(
            batch_id=batch_id,
            ewe_id=ewe_id,
            cycle=cycle,
            result=payload.result,
            manager_secret=request.headers.get(settings.manager_secret_header),
        ),
        verifier=verifier,
    )
    record = result.pregnancy_record
    return CycleResultResponse(
        enrollment=EnrollmentResponse.model_validate(result.enrollment),
        pregnancy_record=PregnancyRecordResponse.model_validate(record) if record else None,
    )
