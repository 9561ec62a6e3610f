"""Middleware — Protocol-based, no inheritance required.

A handler is any callable matching:
    async def handler(ctx: Context) -> None

Global handlers (``App.use``) and route handlers run as one chain;
a handler passes control along by awaiting ``ctx.next()``.

Components:
    ChainRunner -- Sequential chain execution with single-advance checks
    CORSConfig / CORSPolicy -- Preflight answers and CORS headers
"""

from perch.middleware.chain import ChainRunner
from perch.middleware.cors import CORSConfig, CORSPolicy
from perch.middleware.protocol import Handler, Next

__all__ = [
    "CORSConfig",
    "CORSPolicy",
    "ChainRunner",
    "Handler",
    "Next",
]
