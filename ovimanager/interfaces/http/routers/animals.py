from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ovimanager.application.errors import ValidationError
from ovimanager.domain.models.animal import Animal, Sex
from ovimanager.infrastructure.db.session import SQLAlchemyUnitOfWork
from ovimanager.interfaces.http.deps import get_uow
from ovimanager.interfaces.http.schemas.animals import AnimalCreate, AnimalResponse

router = APIRouter(prefix="/animals", tags=["animals"])


@router.get("/", response_model=list[AnimalResponse])
async def list_animals(
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    sex: Sex | None = Query(None),
    group_id: UUID | None = Query(None),
    is_pregnant: bool | None = Query(None),
):
    return await uow.animals.list(sex=sex, group_id=group_id, is_pregnant=is_pregnant)


@router.post("/", response_model=AnimalResponse, status_code=status.HTTP_201_CREATED)
async def create_animal(payload: AnimalCreate, *, uow: SQLAlchemyUnitOfWork = Depends(get_uow)):
    tag = payload.tag.strip()
    if not tag:
        raise ValidationError("Animal tag is required")
    if payload.group_id is not None and not await uow.groups.get(payload.group_id):
        raise ValidationError("Unknown group", details={"group_id": str(payload.group_id)})
    animal = Animal.create(
        tag=tag,
        sex=payload.sex,
        name=payload.name,
        group_id=payload.group_id,
        status=payload.status,
    )
    created = await uow.animals.add(animal)
    await uow.commit()
    return created


@router.get("/{animal_id}", response_model=AnimalResponse)
async def get_animal(animal_id: UUID, *, uow: SQLAlchemyUnitOfWork = Depends(get_uow)):
    animal = await uow.animals.get(animal_id)
    if not animal:
        raise HTTPException(status_code=404, detail="Animal not found")
    return animal
