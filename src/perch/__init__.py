"""Perch — a small request router for serverless HTTP functions.

Maps API Gateway style events to handler chains and turns the result
back into a response dict.

Basic usage::

    from perch import App

    app = App()

    async def show_user(ctx):
        ctx.res.body = {"id": ctx.req.params["id"]}

    app.get("/users/:id", show_user)

    # Lambda handler: module.app
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "CORSConfig",
    "ChainError",
    "ChainExhausted",
    "ConfigurationError",
    "Context",
    "Handler",
    "HandlerNotCallable",
    "Next",
    "NextCalledTwice",
    "PerchError",
    "Request",
    "Response",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast on cold starts while providing a clean
    top-level API.
    """
    if name == "App":
        from perch.app import App

        return App

    if name == "AppConfig":
        from perch.config import AppConfig

        return AppConfig

    if name == "Context":
        from perch.context import Context

        return Context

    if name == "Request":
        from perch.http.request import Request

        return Request

    if name == "Response":
        from perch.http.response import Response

        return Response

    if name in ("CORSConfig", "Handler", "Next"):
        from perch import middleware as _mw

        return getattr(_mw, name)

    if name in (
        "ChainError",
        "ChainExhausted",
        "ConfigurationError",
        "HandlerNotCallable",
        "NextCalledTwice",
        "PerchError",
    ):
        from perch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
