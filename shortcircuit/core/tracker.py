"""
SettlementTracker - the settle-once state machine behind every front end.

Each observed task reports exactly one event to the tracker (a value, an
error, or a cancellation). The tracker decides whether that event settles
the aggregate and hands back a Settlement at most once per invocation.
Front ends only translate the Settlement onto their own future type.

    tracker = SettlementTracker(total=3, condition=condition)
    settlement = tracker.record_value(1, "b")
    if settlement is not None:
        apply(settlement)
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Generic, Optional

from shortcircuit.core.conditions import StopCondition
from shortcircuit.core.config import AggregateStats, SettlementKind
from shortcircuit.core.latch import SettleOnceLatch
from shortcircuit.types import T

logger = logging.getLogger(__name__)


@dataclass
class Settlement(Generic[T]):
    """The single outcome of one aggregator invocation."""

    kind: SettlementKind
    index: Optional[int] = None
    values: list[T] = field(default_factory=list)
    error: Optional[BaseException] = None


class SettlementTracker(Generic[T]):
    """
    Tracks values by position and settles the aggregate exactly once.

    Predicates run outside the internal lock; all state mutation and the
    latch flip happen inside it, so observers may call in from several
    threads at once.
    """

    def __init__(self, total: int, condition: StopCondition[T], name: str = "aggregate"):
        self.total = total
        self.condition = condition
        self.name = name
        self.stats = AggregateStats(total=total)
        self._values: list[Any] = [None] * total
        self._settled_count = 0
        self._latch = SettleOnceLatch()
        self._lock = threading.Lock()

    @property
    def is_done(self) -> bool:
        return self._latch.is_set

    def record_value(self, index: int, value: T) -> Optional[Settlement[T]]:
        """Record a successful settlement of the task at ``index``."""
        if self._latch.is_set:
            return None
        try:
            fulfilled = self.condition.is_fulfilled(value, index)
        except Exception as e:
            return self.record_error(index, e)

        with self._lock:
            if not fulfilled:
                if self._latch.is_set:
                    return None
                self._values[index] = value
                self._settled_count += 1
                self.stats.succeeded += 1
                if self._settled_count != self.total:
                    return None
                return self._settle(SettlementKind.COMPLETED, index, values=list(self._values))

            if self._latch.is_set:
                return None
            self.stats.succeeded += 1
            return self._settle(SettlementKind.SHORT_CIRCUITED, index, values=[value])

    def record_error(self, index: int, error: BaseException) -> Optional[Settlement[T]]:
        """Record a failed task; the first failure settles the aggregate."""
        with self._lock:
            if self._latch.is_set:
                return None
            self.stats.failed += 1
            return self._settle(SettlementKind.FAILED, index, error=error)

    def record_cancelled(self, index: int) -> Optional[Settlement[T]]:
        """Record a task that ended cancelled instead of settling."""
        with self._lock:
            if self._latch.is_set:
                return None
            self.stats.failed += 1
            return self._settle(SettlementKind.CANCELLED, index)

    def _settle(self, kind: SettlementKind, index: int, **kwargs: Any) -> Optional[Settlement[T]]:
        # Caller holds self._lock
        if not self._latch.try_set():
            return None
        self.stats.outcome = kind
        self.stats.deciding_index = index
        logger.debug(f"{self.name} {kind.value} by task {index} of {self.total}")
        return Settlement(kind=kind, index=index, **kwargs)

    def __repr__(self) -> str:
        return (
            f"SettlementTracker("
            f"total={self.total}, "
            f"settled={self._settled_count}, "
            f"done={self._latch.is_set})"
        )
