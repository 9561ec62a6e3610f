"""Chain runner — executes handlers one at a time with explicit handoff.

Each handler gets its own ``Context`` whose ``next`` advances to the
following position. The runner tracks one advance per position:

- ``next()`` a second time at the same position raises ``NextCalledTwice``
  immediately, before anything runs again.
- A non-callable entry raises ``HandlerNotCallable`` when reached.
- Reaching a position past the end raises ``ChainExhausted``: ``next()``
  from the last handler is an error, and so is an empty chain.

``next()`` returns an awaitable. A handler that calls it without awaiting
(every plain ``def`` handler) has it awaited by the runner as soon as the
handler returns, so sync handlers can pass control along too.
"""

import inspect
from collections.abc import Callable, Coroutine, Sequence
from typing import Any, TypeAlias

from perch._internal.invoke import invoke
from perch._internal.types import Handler, Next
from perch.context import Context
from perch.errors import ChainExhausted, HandlerNotCallable, NextCalledTwice

ContextFactory: TypeAlias = Callable[[Next], Context]


class _Advance:
    """The ``next`` callable handed to the handler at one chain position."""

    __slots__ = ("_index", "_pending", "_runner")

    def __init__(self, runner: "ChainRunner", index: int) -> None:
        self._runner = runner
        self._index = index
        self._pending: Coroutine[Any, Any, None] | None = None

    def __call__(self) -> Coroutine[Any, Any, None]:
        if self._pending is not None:
            raise NextCalledTwice(self._index)
        self._pending = self._runner.run_from(self._index + 1)
        return self._pending

    @property
    def _unstarted(self) -> bool:
        return (
            self._pending is not None
            and inspect.getcoroutinestate(self._pending) == inspect.CORO_CREATED
        )

    async def settle(self) -> None:
        """Run the rest of the chain if the handler asked for it but didn't await."""
        if self._unstarted:
            await self._pending  # type: ignore[misc]

    def discard(self) -> None:
        """Drop an un-awaited advance after the handler failed."""
        if self._unstarted:
            self._pending.close()  # type: ignore[union-attr]


class ChainRunner:
    """Runs an ordered handler chain for a single request.

    Usage::

        runner = ChainRunner([*global_handlers, *route.handlers], make_context)
        await runner.run()

    *make_context* builds the ``Context`` for one position from its ``next``
    callable; the runner never copies ``req`` or ``res``.
    """

    __slots__ = ("_handlers", "_make_context")

    def __init__(self, handlers: Sequence[Handler], make_context: ContextFactory) -> None:
        self._handlers = tuple(handlers)
        self._make_context = make_context

    def __len__(self) -> int:
        return len(self._handlers)

    async def run(self) -> None:
        """Run the chain from its first handler."""
        await self.run_from(0)

    async def run_from(self, index: int) -> None:
        """Run the handler at *index*; it decides whether the rest runs."""
        if index >= len(self._handlers):
            raise ChainExhausted(index)

        handler = self._handlers[index]
        if not callable(handler):
            raise HandlerNotCallable(index, handler)

        advance = _Advance(self, index)
        try:
            await invoke(handler, self._make_context(advance))
        except BaseException:
            advance.discard()
            raise
        await advance.settle()
