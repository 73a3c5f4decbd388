from typing import Any, Awaitable, Callable, Iterable, Optional, TypeVar, Union

T = TypeVar("T")

# typing aliases
StopPredicate = Callable[[T], Any]
StopDefiner = Union[T, StopPredicate]

# anything the aggregator can observe: futures, tasks, coroutines,
# other awaitables, or plain values that count as already settled
TaskLike = Union[Awaitable[T], T]
TaskSequence = Optional[Iterable[TaskLike]]
