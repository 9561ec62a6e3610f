"""Handler protocol and Next type alias.

A handler is any callable matching::

    async def my_handler(ctx: Context) -> None: ...

No base class required. The chain runner checks the shape, not the lineage.
Global handlers registered with ``App.use`` and route handlers share this
protocol; a handler acts as middleware by awaiting ``ctx.next()``::

    async def timing(ctx):
        start = time.monotonic()
        await ctx.next()
        ctx.res.headers["X-Time"] = f"{time.monotonic() - start:.3f}"

A handler that never calls ``ctx.next()`` ends the chain.
"""

from collections.abc import Awaitable
from typing import TYPE_CHECKING, Any, Protocol

from perch._internal.types import Next

if TYPE_CHECKING:
    from perch.context import Context

__all__ = ["Handler", "Next"]


class Handler(Protocol):
    """Protocol for perch handlers.

    Accepts both functions and callable objects, sync or async::

        # Function handler
        def health(ctx):
            ctx.res.body = {"ok": True}

        # Class handler
        class RequireToken:
            async def __call__(self, ctx):
                if ctx.req.header("authorization") != f"Bearer {self.token}":
                    ctx.res.status = 401
                    return
                await ctx.next()
    """

    def __call__(self, ctx: "Context") -> Awaitable[None] | Any: ...
