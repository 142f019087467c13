"""Compensating actions for writes that span the identity service and the database.

Each completed step may register an undo callback. If a later step raises,
the registered callbacks run newest first and the original error propagates.
A failing compensation is logged and does not mask the original error.
"""
import inspect
import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


async def _run(fn: Callable[[], Any]) -> Any:
    result = fn()
    if inspect.isawaitable(result):
        result = await result
    return result


class Saga:
    def __init__(self, name: str):
        self.name = name
        self._compensations: list[tuple[str, Callable[[], Any]]] = []

    async def step(
        self,
        label: str,
        action: Callable[[], Any],
        compensate: Optional[Callable[[], Any]] = None,
    ) -> Any:
        result = await _run(action)
        if compensate is not None:
            self._compensations.append((label, compensate))
        return result

    async def compensate(self) -> None:
        while self._compensations:
            label, undo = self._compensations.pop()
            try:
                await _run(undo)
                logger.info("%s: compensated step '%s'", self.name, label)
            except Exception:
                logger.exception("%s: compensation for step '%s' failed, manual cleanup required", self.name, label)

    async def __aenter__(self) -> "Saga":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        if exc is not None:
            logger.error("%s failed: %s", self.name, exc)
            await self.compensate()
        return False
