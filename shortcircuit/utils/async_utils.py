import asyncio
import inspect
from typing import Any, Iterable


def is_task_like(item: Any) -> bool:
    """True for anything that can be awaited (futures, tasks, coroutines)."""
    return asyncio.isfuture(item) or inspect.isawaitable(item)


def done_future(value: Any, loop: asyncio.AbstractEventLoop) -> asyncio.Future:
    """Return a future that has already settled with ``value``."""
    future = loop.create_future()
    future.set_result(value)
    return future


def to_future(item: Any, loop: asyncio.AbstractEventLoop) -> asyncio.Future:
    """
    Turn a task-like item into a future on ``loop``.

    Futures and tasks are returned as is, coroutines and other awaitables
    are scheduled with ensure_future, and plain values become futures that
    have already settled with that value.
    """
    if asyncio.isfuture(item):
        return item
    if inspect.isawaitable(item):
        return asyncio.ensure_future(item, loop=loop)
    return done_future(item, loop)


def require_task_likes(items: Iterable[Any]) -> None:
    """Raise TypeError for the first item that cannot be awaited."""
    for index, item in enumerate(items):
        if not is_task_like(item):
            raise TypeError(
                f"An asyncio.Future, a coroutine or an awaitable is required "
                f"(got {type(item).__name__} at index {index})"
            )
