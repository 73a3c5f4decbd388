"""
Short-circuiting aggregation over concurrent.futures.

Same settlement rules as the asyncio aggregator, for futures completed by
worker threads (for example a ThreadPoolExecutor). Done-callbacks can run on
any thread at the same time, so the tracker's lock and latch carry the
settle-once guarantee instead of cooperative scheduling.

    with ThreadPoolExecutor() as pool:
        futures = [pool.submit(ping, host) for host in hosts]
        first_down = all_short_circuit_futures(futures, lambda up: not up)
        print(first_down.result(timeout=30))
"""

from __future__ import annotations

import functools
import logging
from concurrent.futures import CancelledError, Future
from typing import Any, Iterable, Optional

from shortcircuit.core.conditions import StopCondition
from shortcircuit.core.config import AggregateConfig, SettlementKind
from shortcircuit.core.tracker import Settlement, SettlementTracker
from shortcircuit.types import StopDefiner

logger = logging.getLogger(__name__)


def all_short_circuit_futures(
    futures: Optional[Iterable[Any]],
    stop: StopDefiner,
    *,
    config: AggregateConfig | None = None,
) -> Future:
    """
    Aggregate ``concurrent.futures.Future`` objects into one future.

    Non-future items count as values that have already settled. A cancelled
    input future fails the aggregate with ``concurrent.futures.CancelledError``.
    The returned future is marked running immediately and cannot be cancelled.
    """
    config = config or AggregateConfig()
    outer: Future = Future()
    outer.set_running_or_notify_cancel()

    items = list(futures) if futures is not None else []
    if not items:
        outer.set_result([])
        return outer

    if not config.wrap_values:
        for index, item in enumerate(items):
            if not isinstance(item, Future):
                raise TypeError(
                    f"A concurrent.futures.Future is required "
                    f"(got {type(item).__name__} at index {index})"
                )

    condition = StopCondition.from_definer(stop, strict=config.strict_predicate)
    tracker = SettlementTracker(len(items), condition, name=config.name)
    logger.debug(f"{config.name} observing {len(items)} futures")

    for index, item in enumerate(items):
        if tracker.is_done:
            break
        if isinstance(item, Future):
            # Runs immediately on this thread if the future is already done
            item.add_done_callback(
                functools.partial(_on_future_done, tracker, outer, index)
            )
        else:
            _apply_settlement(outer, tracker.record_value(index, item))
    return outer


def _on_future_done(
    tracker: SettlementTracker,
    outer: Future,
    index: int,
    future: Future,
) -> None:
    if tracker.is_done:
        return
    if future.cancelled():
        settlement = tracker.record_cancelled(index)
    else:
        error = future.exception()
        if error is not None:
            settlement = tracker.record_error(index, error)
        else:
            settlement = tracker.record_value(index, future.result())
    _apply_settlement(outer, settlement)


def _apply_settlement(outer: Future, settlement: Settlement | None) -> None:
    if settlement is None:
        return
    if settlement.kind is SettlementKind.FAILED:
        outer.set_exception(settlement.error)
    elif settlement.kind is SettlementKind.CANCELLED:
        outer.set_exception(CancelledError(f"future {settlement.index} was cancelled"))
    else:
        outer.set_result(settlement.values)
