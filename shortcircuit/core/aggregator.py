"""
Short-circuiting aggregator for asyncio.

Observes every task concurrently and settles one aggregate future:
1. Short-circuit: the first value (in completion order) that fulfills the
   stop condition settles the aggregate with ``[value]``
2. Accumulation: if every task succeeds without fulfilling the condition,
   the aggregate settles with all values in input order
3. Failure: the first task error is relayed unchanged
4. Settle once: anything that happens afterwards has no effect

Tasks are observed, never owned. Nothing here cancels, retries or restarts
a task, and tasks keep running after the aggregate has settled.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from typing import Generic

from shortcircuit.core.conditions import StopCondition
from shortcircuit.core.config import AggregateConfig, AggregateStats, SettlementKind
from shortcircuit.core.tracker import Settlement, SettlementTracker
from shortcircuit.types import StopDefiner, T, TaskSequence
from shortcircuit.utils.async_utils import require_task_likes, to_future

logger = logging.getLogger(__name__)


class ShortCircuitAggregator(Generic[T]):
    """
    Aggregates tasks, settling early when a value meets the stop condition.

    Usage:
        aggregator = ShortCircuitAggregator(lambda v: v is None, config)

        # Await the aggregate like asyncio.gather
        values = await aggregator.run([fetch(a), fetch(b), fetch(c)])

        # What decided the last run
        print(aggregator.stats.outcome, aggregator.stats.deciding_index)

    ``run`` must be called while an event loop is running.
    """

    def __init__(
        self,
        stop: StopDefiner,
        config: AggregateConfig | None = None,
    ):
        self.config = config or AggregateConfig()
        self.condition: StopCondition[T] = StopCondition.from_definer(
            stop, strict=self.config.strict_predicate
        )
        self.stats = AggregateStats()

    def run(self, tasks: TaskSequence) -> asyncio.Future[list[T]]:
        """Observe ``tasks`` and return the aggregate future."""
        loop = asyncio.get_running_loop()
        outer: asyncio.Future[list[T]] = loop.create_future()

        items = list(tasks) if tasks is not None else []
        if not items:
            self.stats = AggregateStats(outcome=SettlementKind.COMPLETED)
            outer.set_result([])
            return outer

        if not self.config.wrap_values:
            require_task_likes(items)

        tracker: SettlementTracker[T] = SettlementTracker(
            len(items), self.condition, name=self.config.name
        )
        self.stats = tracker.stats
        logger.debug(f"{self.config.name} observing {len(items)} tasks")

        for index, item in enumerate(items):
            future = to_future(item, loop)
            future.add_done_callback(
                functools.partial(self._on_task_done, tracker, outer, index)
            )
        return outer

    def _on_task_done(
        self,
        tracker: SettlementTracker[T],
        outer: asyncio.Future[list[T]],
        index: int,
        future: asyncio.Future,
    ) -> None:
        if future.cancelled():
            if outer.done():
                return
            settlement = tracker.record_cancelled(index)
        else:
            # Retrieve first so late failures are not reported as unhandled
            error = future.exception()
            if outer.done():
                return
            if error is not None:
                settlement = tracker.record_error(index, error)
            else:
                settlement = tracker.record_value(index, future.result())

        if settlement is not None:
            _apply_settlement(outer, settlement)

    def __repr__(self) -> str:
        return (
            f"ShortCircuitAggregator("
            f"name={self.config.name!r}, "
            f"condition={self.condition.name!r})"
        )


def _apply_settlement(outer: asyncio.Future, settlement: Settlement) -> None:
    if outer.done():
        # The caller cancelled the aggregate
        return
    if settlement.kind is SettlementKind.FAILED:
        outer.set_exception(settlement.error)
    elif settlement.kind is SettlementKind.CANCELLED:
        outer.cancel(msg=f"task {settlement.index} was cancelled")
    else:
        outer.set_result(settlement.values)


# Convenience function for simple cases
def all_short_circuit(
    tasks: TaskSequence,
    stop: StopDefiner,
    *,
    config: AggregateConfig | None = None,
) -> asyncio.Future[list[T]]:
    """
    Run ``tasks`` concurrently and settle with a list of their values.

    Settles with ``[value]`` as soon as one value fulfills ``stop`` (a literal
    compared with strict equality, or a predicate), with every value in input
    order when none does, or with the first task error. ``None`` or an empty
    sequence settles immediately with ``[]``.
    """
    return ShortCircuitAggregator(stop, config).run(tasks)
