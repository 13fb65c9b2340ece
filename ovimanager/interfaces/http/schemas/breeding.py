from __future__ import annotations

from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from ovimanager.domain.models.breeding_batch import BatchStatus
from ovimanager.domain.models.ewe_enrollment import CycleResult
from ovimanager.interfaces.http.schemas.pregnancies import PregnancyRecordResponse


class BatchCreate(BaseModel):
    name: str
    start_date: date | None = None
    sire_id: UUID | None = None


class EnrollmentCreate(BaseModel):
    ewe_id: UUID


class CycleResultInput(BaseModel):
    result: str  # pregnant, empty


class EnrollmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    batch_id: UUID
    ewe_id: UUID
    attempt_count: int
    cycle1_result: CycleResult
    cycle2_result: CycleResult
    cycle3_result: CycleResult
    finalized: bool


class BatchResponse(BaseModel):
    id: UUID
    name: str
    sire_id: UUID | None
    start_date: date
    status: BatchStatus
    enrollments: list[EnrollmentResponse] = []


class BatchSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    batch_id: UUID
    enrolled: int
    pregnant: int
    final_empty: int
    in_progress: int


class CycleResultResponse(BaseModel):
    enrollment: EnrollmentResponse
    pregnancy_record: PregnancyRecordResponse | None = None


class RemoveEnrollmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    batch_id: UUID
    ewe_id: UUID
    enrollment_removed: bool
    pregnancy_record_removed: bool
    cleanup_warning: str | None = None


class DeleteBatchResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    batch_id: UUID
    released_ewe_ids: list[UUID]
    cleanup_warnings: list[str]
