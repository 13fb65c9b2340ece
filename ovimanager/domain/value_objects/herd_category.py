from __future__ import annotations

from enum import Enum

from ovimanager.domain.models.group import normalize_group_name


class HerdCategory(str, Enum):
    """Herd groups the breeding workflow moves ewes between."""

    AWAITING_MATING = "AWAITING_MATING"
    IN_MATING = "IN_MATING"

    @property
    def canonical_name(self) -> str:
        return CANONICAL_NAMES[self]

    @property
    def aliases(self) -> frozenset[str]:
        return GROUP_ALIASES[self]

    def matches(self, group_name: str) -> bool:
        return normalize_group_name(group_name) in self.aliases


CANONICAL_NAMES: dict[HerdCategory, str] = {
    HerdCategory.AWAITING_MATING: "VAZIAS",
    HerdCategory.IN_MATING: "EM MONTA",
}

# Accepted spellings, already normalized (upper case, single spaces).
GROUP_ALIASES: dict[HerdCategory, frozenset[str]] = {
    HerdCategory.AWAITING_MATING: frozenset({"VAZIA", "VAZIAS", "MATRIZES VAZIAS"}),
    HerdCategory.IN_MATING: frozenset({"EM MONTA"}),
}
