"""
Error hierarchy for shortcircuit.

Design:
- Errors raised by the package itself inherit from ShortCircuitError
- Task errors are never wrapped; the aggregator relays them unchanged
- Include context for debugging
"""

from __future__ import annotations

from typing import Any


class ShortCircuitError(Exception):
    """Base class for all errors raised by shortcircuit itself."""

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


class ConfigurationError(ShortCircuitError):
    """Invalid configuration."""

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        **context: Any,
    ):
        super().__init__(message, field_name=field_name, **context)
        self.field_name = field_name


class StopConditionError(ShortCircuitError):
    """A stop predicate returned something other than a bool in strict mode."""

    def __init__(
        self,
        message: str,
        *,
        index: int | None = None,
        result_type: str | None = None,
        **context: Any,
    ):
        super().__init__(message, index=index, result_type=result_type, **context)
        self.index = index
        self.result_type = result_type
