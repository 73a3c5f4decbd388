"""
Stop conditions - decide whether a settled value ends the aggregate early.

A stop condition is defined either by a literal target value or by a
predicate. Any callable is treated as a predicate:

    condition = StopCondition.from_definer(lambda v: v > 10)
    condition.is_fulfilled(11)  # True

    condition = StopCondition.from_definer("ready")
    condition.is_fulfilled("ready")  # True

Literal targets use strict equality: scalars of the exact same type compare
by value, everything else compares by identity.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Optional

from shortcircuit.core.errors import StopConditionError
from shortcircuit.types import StopDefiner, T

_SCALAR_TYPES = (type(None), bool, int, float, complex, str, bytes)


def strict_equals(value: Any, target: Any) -> bool:
    """
    Strict equality between a settled value and a literal target.

    Scalars must share the exact type and compare equal, so ``1`` never
    matches ``True`` or ``1.0`` and NaN never matches itself. Any other
    object only matches itself.

    Unlike JavaScript ``===``, ``1.0`` and ``1`` are different values here:
    Python keeps int and float apart, so the target's type is part of it.
    """
    if type(value) is type(target) and isinstance(value, _SCALAR_TYPES):
        return value == target
    return value is target


@dataclass(frozen=True)
class StopCondition(Generic[T]):
    """
    An immutable stop condition for one aggregator invocation.

    Attributes:
        target: Literal value compared with strict_equals (unused for predicates)
        predicate: Callable evaluated once per successfully settled value
        strict: Require the predicate to return a bool
    """

    target: Any = None
    predicate: Optional[Callable[[T], Any]] = None
    strict: bool = False
    name: str = field(default="", compare=False)

    @classmethod
    def from_definer(cls, stop: StopDefiner, strict: bool = False) -> "StopCondition[T]":
        if callable(stop):
            name = getattr(stop, "__name__", type(stop).__name__)
            return cls(predicate=stop, strict=strict, name=name)
        return cls(target=stop, strict=strict, name=repr(stop))

    @property
    def is_predicate(self) -> bool:
        return self.predicate is not None

    def is_fulfilled(self, value: T, index: int | None = None) -> bool:
        """
        Evaluate the condition against a settled value.

        Exceptions raised by the predicate propagate to the caller.
        """
        if self.predicate is None:
            return strict_equals(value, self.target)
        result = self.predicate(value)
        if self.strict and not isinstance(result, bool):
            raise StopConditionError(
                f"Stop predicate '{self.name}' must return a bool",
                index=index,
                result_type=type(result).__name__,
            )
        return bool(result)


def is_short_circuit_condition_fulfilled(value: T, stop: StopDefiner) -> bool:
    """Return whether ``value`` satisfies ``stop`` (a literal or a predicate)."""
    return StopCondition.from_definer(stop).is_fulfilled(value)
