"""
Deferred - a future settled by an executor callback.

    deferred = Deferred(lambda resolve, reject: loop.call_later(0.1, resolve, 42))
    assert await deferred == 42

The executor runs synchronously inside the constructor. If it raises, the
deferred is rejected with that exception.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Generic, Optional

from shortcircuit.core.aggregator import all_short_circuit
from shortcircuit.types import T
from shortcircuit.utils.async_utils import is_task_like

ResolveFn = Callable[[Any], None]
RejectFn = Callable[[BaseException], None]
Executor = Callable[[ResolveFn, RejectFn], Any]


class Deferred(asyncio.Future, Generic[T]):
    """
    An asyncio.Future that is resolved or rejected through callbacks.

    ``resolve`` with an awaitable adopts its outcome once it settles. After
    the first call to ``resolve`` or ``reject`` every later call is ignored.
    """

    all_short_circuit = staticmethod(all_short_circuit)

    def __init__(
        self,
        executor: Optional[Executor] = None,
        *,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        super().__init__(loop=loop)
        self._locked_in = False
        if executor is not None:
            try:
                executor(self.resolve, self.reject)
            except Exception as e:
                self.reject(e)

    @property
    def is_locked_in(self) -> bool:
        """True once resolve or reject has been called (or the future is done)."""
        return self._locked_in or self.done()

    def resolve(self, value: Any = None) -> None:
        if self.is_locked_in:
            return
        if value is self:
            self.reject(TypeError("A deferred cannot be resolved with itself"))
            return
        if is_task_like(value):
            self._locked_in = True
            source = asyncio.ensure_future(value, loop=self.get_loop())
            source.add_done_callback(self._adopt)
            return
        self.set_result(value)

    def reject(self, error: BaseException) -> None:
        if self.is_locked_in:
            return
        self.set_exception(error)

    def _adopt(self, source: asyncio.Future) -> None:
        if source.cancelled():
            if not self.done():
                self.cancel()
            return
        error = source.exception()
        if self.done():
            return
        if error is not None:
            self.set_exception(error)
        else:
            self.set_result(source.result())
