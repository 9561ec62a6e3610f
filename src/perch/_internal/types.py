"""Shared type aliases used across perch modules."""

from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeAlias

# Route or global handler: receives a Context, may be sync or async
Handler: TypeAlias = Callable[..., Any]

# Advances the chain to the next handler; completes when that handler does
Next: TypeAlias = Callable[[], Awaitable[None]]

# Inbound serverless event (API Gateway shaped) and outbound response dict
Event: TypeAlias = Mapping[str, Any]
ResponseDict: TypeAlias = dict[str, Any]
