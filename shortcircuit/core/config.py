"""Configuration and runtime statistics for the aggregator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from shortcircuit.core.errors import ConfigurationError


class SettlementKind(str, Enum):
    SHORT_CIRCUITED = "short_circuited"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class AggregateConfig:
    """Configuration for the aggregator."""

    name: str = "all_short_circuit"  # Label used in log records
    strict_predicate: bool = False  # Predicates must return a real bool
    wrap_values: bool = True  # Non-awaitables count as settled values

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise ConfigurationError(
                "name must be a non-empty string", field_name="name", value=self.name
            )
        for flag in ("strict_predicate", "wrap_values"):
            if not isinstance(getattr(self, flag), bool):
                raise ConfigurationError(
                    f"{flag} must be a bool",
                    field_name=flag,
                    value=getattr(self, flag),
                )


@dataclass
class AggregateStats:
    """What one invocation observed up to the moment it settled."""

    total: int = 0
    succeeded: int = 0
    failed: int = 0
    outcome: SettlementKind | None = None
    deciding_index: int | None = None

    @property
    def settled(self) -> bool:
        return self.outcome is not None

    @property
    def pending(self) -> int:
        return self.total - self.succeeded - self.failed
