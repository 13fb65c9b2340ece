from __future__ import annotations

import logging

from ovimanager.application.interfaces.unit_of_work import UnitOfWork
from ovimanager.domain.models.group import Group
from ovimanager.domain.value_objects.herd_category import HerdCategory

logger = logging.getLogger(__name__)


async def find_category_group(uow: UnitOfWork, category: HerdCategory) -> Group | None:
    """Return the existing group whose name matches one of the category aliases."""
    for group in await uow.groups.list_all():
        if category.matches(group.name):
            return group
    return None


async def resolve_or_create(uow: UnitOfWork, category: HerdCategory) -> Group:
    """Find the group for a herd category, creating it under its canonical name if missing.

    Creation goes through the repository's insert-if-absent, so two callers racing
    on an empty table both end up with the same row.
    """
    found = await find_category_group(uow, category)
    if found is not None:
        return found
    group = await uow.groups.insert_if_absent(category.canonical_name)
    logger.info("Herd group ready for %s: %s (%s)", category.value, group.name, group.id)
    return group
