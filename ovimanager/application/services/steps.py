from __future__ import annotations

import logging
from collections.abc import Awaitable
from typing import Any, TypeVar

from ovimanager.application.errors import AppError, ConflictError, StepFailedError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OperationSteps:
    """Runs the storage writes of one operation and remembers how far it got.

    A failing write is re-raised with the list of steps already done and the
    ones already committed, so the caller knows whether a retry is needed.
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        self.completed: list[str] = []
        self.committed: list[str] = []

    async def run(self, name: str, awaitable: Awaitable[T]) -> T:
        try:
            result = await awaitable
        except ConflictError as exc:
            details = {**(exc.details or {}), **self.report(name)}
            raise ConflictError(exc.message, details=details) from exc
        except AppError:
            raise
        except Exception as exc:
            logger.warning(
                "%s failed at step %s after %s: %s",
                self.operation,
                name,
                self.completed or "no steps",
                exc,
            )
            raise StepFailedError(
                f"{self.operation} failed at step '{name}'", details=self.report(name)
            ) from exc
        self.completed.append(name)
        return result

    async def commit(self, uow: Any) -> None:
        await self.run("commit", uow.commit())
        self.committed = list(self.completed)

    def report(self, failed_step: str) -> dict[str, Any]:
        return {
            "operation": self.operation,
            "failed_step": failed_step,
            "completed_steps": list(self.completed),
            "committed_steps": list(self.committed),
        }
