"""Invoke helpers — call sync or async handlers uniformly.

Perch handlers can be ``def`` or ``async def``. Any code that calls
a user-provided handler must handle both cases. This module provides
a single helper so the sync/async check lives in exactly one place.

Usage::

    from perch._internal.invoke import invoke

    await invoke(handler, ctx)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable.

    Works with both sync and async callables::

        # sync: returns immediately
        def health(ctx):
            ctx.res.body = {"ok": True}

        # async: returns a coroutine, awaited here
        async def profile(ctx):
            ctx.res.body = await load_profile(ctx.req.params["id"])
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
