"""Event handler — translates serverless events to perch types and back.

The pipeline for one request::

    event -> HTTPEvent -> Request
          -> CORS preflight?  -> preflight response
          -> route match?     -> 404 response
          -> handler chain    -> Response -> response dict

Everything after the raw event is received runs inside a single error
boundary: whatever is raised becomes a 500, and nothing escapes.
"""

import os
from collections.abc import Mapping
from typing import Any

from perch._internal.types import Event, Handler, Next, ResponseDict
from perch.config import AppConfig
from perch.context import Context
from perch.http.event import HTTPEvent
from perch.http.request import Request, bind_params, parse_body
from perch.http.response import Response, finalize_response
from perch.middleware.chain import ChainRunner
from perch.middleware.cors import CORSPolicy
from perch.routing.table import RouteTable
from perch.server.errors import handle_internal_error, handle_not_found


async def handle_event(
    event: Event,
    context: Any,
    *,
    table: RouteTable,
    middleware: tuple[Handler, ...],
    config: AppConfig,
    cors: CORSPolicy | None = None,
    extensions: Mapping[str, Any] | None = None,
) -> ResponseDict:
    """Process a single event through the full pipeline. Never raises."""
    request: Request | None = None
    try:
        request = Request.from_event(
            HTTPEvent.from_event(event),
            event=event,
            lambda_context=context,
        )

        if cors is not None and request.method == "OPTIONS":
            return cors.preflight()

        parse_body(request, config.body_methods)

        match = table.match(request.method, request.path)
        if match is None:
            return handle_not_found(request, debug=config.debug, body=config.not_found_body)
        bind_params(request, match.path_params)

        response = Response()
        if cors is not None:
            response.headers.update(cors.headers())

        await _run_chain(
            (*middleware, *match.route.handlers),
            request,
            response,
            env=config.env if config.env is not None else os.environ,
            extensions=extensions or {},
        )

        return finalize_response(response, json_content_type=config.json_content_type)

    except Exception as exc:
        return handle_internal_error(exc, request, debug=config.debug)


async def _run_chain(
    handlers: tuple[Handler, ...],
    request: Request,
    response: Response,
    *,
    env: Mapping[str, str],
    extensions: Mapping[str, Any],
) -> None:
    """Run *handlers* against one shared request and response."""

    def make_context(next: Next) -> Context:
        return Context(env=env, req=request, res=response, next=next, extensions=extensions)

    await ChainRunner(handlers, make_context).run()
