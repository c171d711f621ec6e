"""Bounded-concurrency fan-out over a list of work items."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Generic, List, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


@dataclass
class TaskOutcome(Generic[T, R]):
    """Result of one worker invocation: either ``value`` or ``error`` is meaningful."""

    index: int
    item: T
    value: Optional[R] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BoundedRunResult(Generic[T, R]):
    outcomes: List[TaskOutcome[T, R]] = field(default_factory=list)

    @property
    def values(self) -> List[R]:
        """Successful values in input order."""
        return [o.value for o in self.outcomes if o.ok]

    @property
    def failures(self) -> List[TaskOutcome[T, R]]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def ok(self) -> bool:
        return not self.failures


async def run_bounded(
    items: Sequence[T],
    worker: Callable[[T], Awaitable[R]],
    limit: int = 10,
) -> BoundedRunResult[T, R]:
    """Run ``worker`` over ``items`` with at most ``limit`` invocations in flight.

    Outcomes keep input order regardless of completion order. A failing item
    never cancels its siblings; its exception is recorded on its outcome.
    """
    if limit < 1:
        raise ValueError("limit must be at least 1")

    semaphore = asyncio.Semaphore(limit)

    async def _run_one(item: T) -> R:
        async with semaphore:
            return await worker(item)

    results = await asyncio.gather(*(_run_one(item) for item in items), return_exceptions=True)

    outcomes: List[TaskOutcome[T, R]] = []
    for index, (item, result) in enumerate(zip(items, results)):
        if isinstance(result, BaseException):
            if isinstance(result, asyncio.CancelledError):
                raise result
            logger.debug(f"Work item {index} failed: {result}")
            outcomes.append(TaskOutcome(index=index, item=item, error=result))
        else:
            outcomes.append(TaskOutcome(index=index, item=item, value=result))

    return BoundedRunResult(outcomes=outcomes)
