"""Per-request handler context.

Every handler receives a ``Context``: the fixed fields ``env``, ``req``,
``res`` and ``next``, plus whatever extension fields the caller passed to
``App.handle``. Extension fields read like attributes::

    await app.handle(event, context, {"user": current_user})

    async def profile(ctx):
        ctx.res.body = {"name": ctx.user.name}

The fixed fields always win over an extension of the same name.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from perch._internal.types import Next
from perch.http.request import Request
from perch.http.response import Response


@dataclass(slots=True)
class Context:
    """Handler context, one per handler invocation.

    ``req`` and ``res`` are shared by every handler of a request; a change
    made to ``res`` by one handler is visible to all later ones.
    """

    env: Mapping[str, str]
    req: Request
    res: Response
    next: Next
    extensions: Mapping[str, Any] = field(default_factory=dict)

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails, i.e. for extension fields
        try:
            extensions = object.__getattribute__(self, "extensions")
            return extensions[name]
        except (AttributeError, KeyError):
            msg = f"Context has no field {name!r}"
            raise AttributeError(msg) from None

    def get(self, name: str, default: Any = None) -> Any:
        """Return extension field *name*, or *default* if not supplied."""
        return self.extensions.get(name, default)
