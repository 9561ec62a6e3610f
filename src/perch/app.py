"""Perch application class.

Mutable during setup (route registration, global handlers, CORS, debug).
Frozen when the first event is handled.
"""

import threading
from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from typing import Any, TypeAlias

import anyio

from perch._internal.types import Event, Handler, ResponseDict
from perch.config import AppConfig
from perch.middleware.cors import CORSConfig, CORSPolicy
from perch.routing.route import HTTP_METHODS, WILDCARD, Route
from perch.routing.table import RouteTable, parse_path
from perch.server.handler import handle_event

RouteDecorator: TypeAlias = Callable[[Handler], Handler]


class App:
    """The perch application.

    Usage::

        app = App()
        app.use(authenticate)
        app.get("/users/:id", load_user, show_user)

        @app.post("/users")
        async def create_user(ctx):
            ctx.res.json(ctx.req.body, status=201)

        app.cors().debug()

        # AWS Lambda entry point
        handler = app

    Thread safety:
        The setup phase is single-threaded (registration at import time).
        The freeze transition uses a Lock + double-check so exactly one
        thread builds the route table, even when several invocations
        arrive concurrently on a warm container.
    """

    __slots__ = (
        "_cors",
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_middleware_list",
        "_pending_routes",
        "_table",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._pending_routes: list[Route] = []
        self._middleware_list: list[Handler] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._table: RouteTable | None = None
        self._middleware: tuple[Handler, ...] = ()
        self._cors: CORSPolicy | None = None

    # -- Route registration --
    #
    # Each call registers one route and returns the app for chaining. With
    # no handlers it returns a decorator instead: ``@app.get("/path")``.

    def connect(self, path: str, *handlers: Handler) -> "App | RouteDecorator":
        """Register a CONNECT route."""
        return self._register("CONNECT", path, handlers)

    def delete(self, path: str, *handlers: Handler) -> "App | RouteDecorator":
        """Register a DELETE route."""
        return self._register("DELETE", path, handlers)

    def get(self, path: str, *handlers: Handler) -> "App | RouteDecorator":
        """Register a GET route."""
        return self._register("GET", path, handlers)

    def head(self, path: str, *handlers: Handler) -> "App | RouteDecorator":
        """Register a HEAD route."""
        return self._register("HEAD", path, handlers)

    def options(self, path: str, *handlers: Handler) -> "App | RouteDecorator":
        """Register an OPTIONS route.

        Never reached while CORS is enabled: preflight answers every
        ``OPTIONS`` request first.
        """
        return self._register("OPTIONS", path, handlers)

    def patch(self, path: str, *handlers: Handler) -> "App | RouteDecorator":
        """Register a PATCH route."""
        return self._register("PATCH", path, handlers)

    def post(self, path: str, *handlers: Handler) -> "App | RouteDecorator":
        """Register a POST route."""
        return self._register("POST", path, handlers)

    def put(self, path: str, *handlers: Handler) -> "App | RouteDecorator":
        """Register a PUT route."""
        return self._register("PUT", path, handlers)

    def trace(self, path: str, *handlers: Handler) -> "App | RouteDecorator":
        """Register a TRACE route."""
        return self._register("TRACE", path, handlers)

    def any(self, path: str, *handlers: Handler) -> "App | RouteDecorator":
        """Register a route for every method.

        With ``path="*"`` the route is a catch-all, used only when no other
        route matches.
        """
        return self._register(WILDCARD, path, handlers)

    def route(
        self,
        path: str,
        *,
        methods: Iterable[str] | None = None,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            path: Path pattern. Use ``:name`` for path parameters and ``*``
                alone for a catch-all.
            methods: HTTP methods. Defaults to ``["GET"]``; ``"*"`` means any.

        Example::

            @app.route("/users/:id", methods=["GET", "HEAD"])
            async def show_user(ctx):
                ctx.res.body = await load(ctx.req.params["id"])
        """

        def decorator(func: Handler) -> Handler:
            for method in methods or ("GET",):
                self._register(method, path, (func,))
            return func

        return decorator

    # -- Global handlers --

    def use(self, *handlers: Handler) -> "App":
        """Append global handlers, run before every route's own handlers."""
        self._check_not_frozen()
        self._middleware_list.extend(handlers)
        return self

    # -- Settings --

    def debug(self, state: bool = True) -> "App":
        """Turn debug mode on or off.

        In debug mode 404 and 500 responses carry a diagnostic body and
        failures are logged with their traceback.
        """
        self._check_not_frozen()
        self.config = replace(self.config, debug=state)
        return self

    def cors(self, config: CORSConfig | None = None, **fields: Any) -> "App":
        """Enable CORS.

        Pass a ``CORSConfig`` or its fields as keywords; omitted fields
        keep their defaults::

            app.cors(allow_origin="https://example.com", max_age=600)
        """
        self._check_not_frozen()
        if config is None:
            config = CORSConfig(**fields)
        elif fields:
            config = replace(config, **fields)
        self.config = replace(self.config, cors=config)
        return self

    # -- Introspection --

    @property
    def routes(self) -> list[Route]:
        """All registered routes, in registration order."""
        if self._table is not None:
            return self._table.routes
        return list(self._pending_routes)

    @property
    def middleware(self) -> tuple[Handler, ...]:
        """Global handlers, in the order they run."""
        if self._frozen:
            return self._middleware
        return tuple(self._middleware_list)

    # -- Request handling --

    async def handle(
        self,
        event: Event,
        context: Any = None,
        extensions: Mapping[str, Any] | None = None,
    ) -> ResponseDict:
        """Handle one event and return the response dict.

        *context* is the runtime's invocation token, passed through to
        handlers as ``ctx.req.lambda_context``. *extensions* are added to
        every handler's context.

        Never raises: failures become 500 responses.
        """
        self._ensure_frozen()
        assert self._table is not None
        return await handle_event(
            event,
            context,
            table=self._table,
            middleware=self._middleware,
            config=self.config,
            cors=self._cors,
            extensions=extensions,
        )

    def __call__(self, event: Event, context: Any = None) -> ResponseDict:
        """Synchronous entry point for runtimes that call a plain function.

        Runs ``handle`` to completion on a fresh event loop::

            app = App()
            ...
            lambda_handler = app  # configured as module.lambda_handler
        """
        return anyio.run(self.handle, event, context)

    # -- Internal --

    def _register(
        self, method: str, path: str, handlers: tuple[Handler, ...]
    ) -> "App | RouteDecorator":
        self._check_not_frozen()
        method = method.upper()
        if method != WILDCARD and method not in HTTP_METHODS:
            msg = f"Unknown HTTP method {method!r} for route {path!r}."
            raise ValueError(msg)
        segments = parse_path(path)

        if not handlers:

            def decorator(func: Handler) -> Handler:
                self._check_not_frozen()
                self._pending_routes.append(
                    Route(method=method, path=path, segments=segments, handlers=(func,))
                )
                return func

            return decorator

        self._pending_routes.append(
            Route(method=method, path=path, segments=segments, handlers=handlers)
        )
        return self

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        table = RouteTable()
        for route in self._pending_routes:
            table.add(route)
        table.compile()
        self._table = table

        self._middleware = tuple(self._middleware_list)
        self._cors = CORSPolicy(self.config.cors) if self.config.cors is not None else None
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started handling requests. "
                "Register routes, handlers, and settings before the first event."
            )
            raise RuntimeError(msg)
