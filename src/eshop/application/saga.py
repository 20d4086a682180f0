"""Lightweight saga runner.

A saga is an ordered list of steps, each with a forward action and an
optional compensation.  ``Saga.execute()`` runs the actions in order.  When
one fails, the compensations of the steps that *completed* run in reverse
order and the original exception is re-raised.

The runner keeps its own accumulator of completed steps; a step becomes a
rollback candidate only after its action returned normally.  Every action
and compensation is recorded in a ``SagaLog``, which is the natural thing
to persist if in-flight sagas ever need crash recovery.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)


class StepStatus(Enum):
    EXECUTING = "EXECUTING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class SagaStep:
    name: str
    action: Callable[[], Any]
    compensation: Callable[[], Any] | None = None


@dataclass
class SagaLogEntry:
    step: int
    action: str
    compensating: bool = False
    status: StepStatus = StepStatus.EXECUTING
    error: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class SagaLog:
    saga: str
    entries: list[SagaLogEntry] = field(default_factory=list)

    def start(self, step: int, action: str, compensating: bool = False) -> SagaLogEntry:
        entry = SagaLogEntry(step=step, action=action, compensating=compensating)
        self.entries.append(entry)
        return entry

    @property
    def failed_compensations(self) -> list[SagaLogEntry]:
        return [
            e for e in self.entries
            if e.compensating and e.status == StepStatus.FAILED
        ]


class Saga:

    def __init__(self, name: str, steps: list[SagaStep]) -> None:
        self._steps = list(steps)
        self.log = SagaLog(saga=name)

    def execute(self) -> SagaLog:
        completed: list[tuple[int, SagaStep]] = []

        for index, step in enumerate(self._steps, start=1):
            entry = self.log.start(index, step.name)
            try:
                step.action()
            except Exception as exc:
                entry.status = StepStatus.FAILED
                entry.error = str(exc)
                logger.warning(
                    "Saga %s step %d (%s) failed: %s",
                    self.log.saga, index, step.name, exc,
                )
                self._compensate(completed)
                raise
            entry.status = StepStatus.COMPLETED
            completed.append((index, step))

        return self.log

    def _compensate(self, completed: list[tuple[int, SagaStep]]) -> None:
        # A failing compensation must not stop the remaining ones from running.
        for index, step in reversed(completed):
            if step.compensation is None:
                continue
            entry = self.log.start(index, step.name, compensating=True)
            try:
                step.compensation()
            except Exception as exc:
                entry.status = StepStatus.FAILED
                entry.error = str(exc)
                logger.error(
                    "Saga %s compensation of step %d (%s) failed; "
                    "manual reconciliation required",
                    self.log.saga, index, step.name, exc_info=True,
                )
                continue
            entry.status = StepStatus.COMPLETED
            logger.info("Saga %s compensated step %d (%s)", self.log.saga, index, step.name)
