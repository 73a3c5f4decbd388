"""
Shortcircuit Core - settle-once aggregation of concurrent tasks.

- ShortCircuitAggregator / all_short_circuit: asyncio front end. Settles
  with the first value that meets the stop condition, with every value in
  input order, or with the first task error.

- all_short_circuit_futures: the same rules for concurrent.futures,
  safe when futures complete on many threads at once.

- Deferred: an asyncio.Future resolved or rejected through an executor.

Example usage:

    from shortcircuit.core import all_short_circuit

    # First replica that reports a hit wins; otherwise all answers in order
    answers = await all_short_circuit(
        [lookup(replica, key) for replica in replicas],
        lambda answer: answer.hit,
    )
"""

from shortcircuit.core.aggregator import ShortCircuitAggregator, all_short_circuit
from shortcircuit.core.conditions import (
    StopCondition,
    is_short_circuit_condition_fulfilled,
    strict_equals,
)
from shortcircuit.core.config import AggregateConfig, AggregateStats, SettlementKind
from shortcircuit.core.deferred import Deferred
from shortcircuit.core.latch import SettleOnceLatch
from shortcircuit.core.threaded import all_short_circuit_futures
from shortcircuit.core.tracker import Settlement, SettlementTracker

__all__ = [
    "ShortCircuitAggregator",
    "all_short_circuit",
    "all_short_circuit_futures",
    "Deferred",
    "StopCondition",
    "is_short_circuit_condition_fulfilled",
    "strict_equals",
    "AggregateConfig",
    "AggregateStats",
    "SettlementKind",
    "SettleOnceLatch",
    "Settlement",
    "SettlementTracker",
]
