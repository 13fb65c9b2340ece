from __future__ import annotations

import pytest

from ovimanager.application.services.group_resolver import find_category_group, resolve_or_create
from ovimanager.domain.value_objects.herd_category import HerdCategory


@pytest.mark.asyncio
async def test_resolver_prefers_existing_alias(uow):
    existing = uow.group("Matrizes Vazias")
    group = await resolve_or_create(uow, HerdCategory.AWAITING_MATING)
    assert group.id == existing.id
    assert len(uow.groups.items) == 1


@pytest.mark.asyncio
async def test_resolver_creates_canonical_group_once(uow):
    assert await find_category_group(uow, HerdCategory.IN_MATING) is None

    first = await resolve_or_create(uow, HerdCategory.IN_MATING)
    second = await resolve_or_create(uow, HerdCategory.IN_MATING)

    assert first.name == "EM MONTA"
    assert first.id == second.id
    assert len(uow.groups.items) == 1
