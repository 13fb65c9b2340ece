from __future__ import annotations

from ovimanager.domain.models.animal import Animal, AnimalStatus, Sex
from ovimanager.domain.models.group import Group
from ovimanager.domain.value_objects.herd_category import HerdCategory


def candidate_rejection(animal: Animal, awaiting_group: Group | None) -> str | None:
    """Return why an animal cannot join a breeding batch, or None if it can.

    Membership in the awaiting-mating group is a strict requirement.
    Enrollment in another open batch is checked separately by the caller.
    """
    if animal.sex is not Sex.FEMALE:
        return "Only ewes can be enrolled in a breeding batch"
    if animal.status is not AnimalStatus.ACTIVE:
        return "Animal is not active"
    if animal.is_pregnant:
        return "Ewe is already pregnant"
    if awaiting_group is None or animal.group_id != awaiting_group.id:
        return (
            f"Ewe must belong to the {HerdCategory.AWAITING_MATING.canonical_name} group "
            "before enrollment"
        )
    return None
