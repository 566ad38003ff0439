"""Bounded-concurrency dispatch of per-target work units.

``Orchestrator.run`` walks the target list in input order.  Before each
dispatch it takes one slot from an admission gate (a bounded semaphore of
capacity ``concurrency``), blocking while the gate is full.  The unit runs on
a worker thread and gives its slot back when it finishes, whatever the
outcome.  ``run`` returns only once every dispatched unit is done, which is
the point where read-back and export become safe.

Units never see each other's failures: anything a unit raises is caught at
its boundary, logged with the target and phase, and recorded as ``FAILED``.
"""

from __future__ import annotations

import enum
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Optional

from wordcrawl.config import settings
from wordcrawl.errors import CrawlError

logger = logging.getLogger(__name__)

Unit = Callable[[str], Any]


class TargetState(str, enum.Enum):
    PENDING = "pending"
    DISPATCHED = "dispatched"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class TargetOutcome:
    target: str
    state: TargetState = TargetState.PENDING
    error: Optional[BaseException] = None


@dataclass
class RunReport:
    """Final state of every target handed to :meth:`Orchestrator.run`."""

    outcomes: List[TargetOutcome] = field(default_factory=list)

    @property
    def completed(self) -> List[str]:
        return [o.target for o in self.outcomes if o.state is TargetState.COMPLETED]

    @property
    def failed(self) -> List[str]:
        return [o.target for o in self.outcomes if o.state is TargetState.FAILED]

    def state_of(self, target: str) -> TargetState:
        """State of the last occurrence of *target* in the run."""
        for outcome in reversed(self.outcomes):
            if outcome.target == target:
                return outcome.state
        raise KeyError(target)


class Orchestrator:
    """Runs a unit of work over a target list with at most *concurrency*
    units in flight."""

    def __init__(self, concurrency: Optional[int] = None) -> None:
        self.concurrency = concurrency if concurrency is not None else settings.concurrency
        if self.concurrency < 1:
            raise ValueError("concurrency must be at least 1")

    def run(self, targets: Iterable[str], unit: Unit) -> RunReport:
        report = RunReport(outcomes=[TargetOutcome(target=t) for t in targets])
        if not report.outcomes:
            return report

        gate = threading.BoundedSemaphore(self.concurrency)
        with ThreadPoolExecutor(
            max_workers=self.concurrency, thread_name_prefix="wordcrawl"
        ) as pool:
            futures = []
            for outcome in report.outcomes:
                gate.acquire()
                outcome.state = TargetState.DISPATCHED
                futures.append(pool.submit(self._run_unit, unit, outcome, gate))
            wait(futures)

        logger.info(
            "Run finished: %d completed, %d failed",
            len(report.completed),
            len(report.failed),
        )
        return report

    @staticmethod
    def _run_unit(unit: Unit, outcome: TargetOutcome, gate: threading.BoundedSemaphore) -> None:
        try:
            unit(outcome.target)
            outcome.state = TargetState.COMPLETED
        except CrawlError as exc:
            logger.error(
                "Error processing %s during %s: %s", outcome.target, exc.phase, exc
            )
            outcome.error = exc
            outcome.state = TargetState.FAILED
        except Exception as exc:
            logger.exception("Unexpected error processing %s", outcome.target)
            outcome.error = exc
            outcome.state = TargetState.FAILED
        finally:
            gate.release()
