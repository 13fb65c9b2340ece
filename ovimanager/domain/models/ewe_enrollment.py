from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class CycleResult(str, Enum):
    PENDING = "pending"
    PREGNANT = "pregnant"
    EMPTY = "empty"


MAX_CYCLES = 3


def is_finalized(results: tuple[CycleResult, CycleResult, CycleResult]) -> bool:
    """An enrollment is terminal once any cycle is pregnant or the third cycle came back empty."""
    return CycleResult.PREGNANT in results or results[2] is CycleResult.EMPTY


@dataclass(slots=True)
class EweEnrollment:
    id: UUID
    batch_id: UUID
    ewe_id: UUID
    attempt_count: int = 1
    cycle1_result: CycleResult = CycleResult.PENDING
    cycle2_result: CycleResult = CycleResult.PENDING
    cycle3_result: CycleResult = CycleResult.PENDING
    finalized: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(cls, batch_id: UUID, ewe_id: UUID) -> EweEnrollment:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            batch_id=batch_id,
            ewe_id=ewe_id,
            created_at=now,
            updated_at=now,
        )

    @property
    def results(self) -> tuple[CycleResult, CycleResult, CycleResult]:
        return (self.cycle1_result, self.cycle2_result, self.cycle3_result)

    @property
    def is_pregnant(self) -> bool:
        return CycleResult.PREGNANT in self.results

    def result_for(self, cycle: int) -> CycleResult:
        _check_cycle(cycle)
        return self.results[cycle - 1]

    def is_reachable(self, cycle: int) -> bool:
        _check_cycle(cycle)
        return all(r is CycleResult.EMPTY for r in self.results[: cycle - 1])

    def apply_result(self, cycle: int, result: CycleResult) -> None:
        """Set a cycle's result and derive attempt count and finalization.

        Later cycles depend on this one, so they are reset to pending.
        """
        _check_cycle(cycle)
        if result is CycleResult.PENDING:
            raise ValueError("A cycle result cannot be reset to pending")
        if not self.is_reachable(cycle):
            raise ValueError(f"Cycle {cycle} is not reachable")

        results = list(self.results)
        results[cycle - 1] = result
        for later in range(cycle, MAX_CYCLES):
            results[later] = CycleResult.PENDING
        self.cycle1_result, self.cycle2_result, self.cycle3_result = results

        if result is CycleResult.EMPTY and cycle < MAX_CYCLES:
            self.attempt_count = cycle + 1
        elif result is CycleResult.EMPTY or result is CycleResult.PREGNANT:
            self.attempt_count = cycle
        else:
            raise ValueError(f"Unknown cycle result: {result!r}")
        self.finalized = is_finalized(self.results)
        self.updated_at = datetime.now(timezone.utc)


def _check_cycle(cycle: int) -> None:
    if cycle < 1 or cycle > MAX_CYCLES:
        raise ValueError(f"Cycle must be between 1 and {MAX_CYCLES}")
