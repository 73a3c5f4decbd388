"""
shortcircuit - Promise.all with an early exit.

Usage:

    import shortcircuit as sc

    # Settles with [value] for the first value that fulfills the predicate,
    # otherwise with every value in input order
    values = await sc.all_short_circuit(
        [check(host) for host in hosts],
        lambda status: status == "down",
    )

    # Literal stop values use strict equality
    values = await sc.all_short_circuit(tasks, None)

    # Threads instead of an event loop
    future = sc.all_short_circuit_futures(pool_futures, lambda v: v > 100)
    values = future.result()

The first task error is relayed unchanged; anything that settles after the
aggregate is ignored.
"""

# Core
from .core.aggregator import ShortCircuitAggregator, all_short_circuit
from .core.threaded import all_short_circuit_futures
from .core.deferred import Deferred

# Stop conditions
from .core.conditions import (
    StopCondition,
    is_short_circuit_condition_fulfilled,
    strict_equals,
)

# Configuration
from .core.config import AggregateConfig, AggregateStats, SettlementKind

# Error types
from .core.errors import (
    ShortCircuitError,
    ConfigurationError,
    StopConditionError,
)

# Logging
from .utils.logging_utils import setup_logging, get_logger

__version__ = "0.1.0"

__all__ = [
    # Core
    "ShortCircuitAggregator",
    "all_short_circuit",
    "all_short_circuit_futures",
    "Deferred",
    # Stop conditions
    "StopCondition",
    "is_short_circuit_condition_fulfilled",
    "strict_equals",
    # Configuration
    "AggregateConfig",
    "AggregateStats",
    "SettlementKind",
    # Errors
    "ShortCircuitError",
    "ConfigurationError",
    "StopConditionError",
    # Logging
    "setup_logging",
    "get_logger",
]
