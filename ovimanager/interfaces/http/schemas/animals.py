from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from ovimanager.domain.models.animal import AnimalStatus, Sex


class AnimalCreate(BaseModel):
    tag: str
    sex: Sex
    name: str | None = None
    group_id: UUID | None = None
    status: AnimalStatus = AnimalStatus.ACTIVE


class AnimalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    tag: str
    name: str | None
    sex: Sex
    status: AnimalStatus
    group_id: UUID | None
    is_pregnant: bool
