from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ovimanager.application.errors import ValidationError
from ovimanager.domain.models.group import Group
from ovimanager.infrastructure.db.session import SQLAlchemyUnitOfWork
from ovimanager.interfaces.http.deps import get_uow
from ovimanager.interfaces.http.schemas.groups import GroupCreate, GroupResponse

router = APIRouter(prefix="/groups", tags=["groups"])


@router.get("/", response_model=list[GroupResponse])
async def list_groups(*, uow: SQLAlchemyUnitOfWork = Depends(get_uow)):
    return await uow.groups.list_all()


@router.post("/", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
async def create_group(payload: GroupCreate, *, uow: SQLAlchemyUnitOfWork = Depends(get_uow)):
    if not payload.name.strip():
        raise ValidationError("Group name is required")
    created = await uow.groups.add(Group.create(payload.name))
    await uow.commit()
    return created
