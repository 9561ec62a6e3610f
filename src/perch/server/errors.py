"""Error responses for perch requests.

Maps a missing route and unexpected failures to response dicts. Debug
mode only changes what the bodies contain and whether failures are
logged; status codes stay the same.
"""

import logging
import traceback

from perch._internal.types import ResponseDict
from perch.http.request import Request

logger = logging.getLogger("perch.server")


def _describe(request: Request | None) -> tuple[str, str]:
    if request is None:
        return "-", "-"
    return request.method, request.path


def _error_response(status: int, body: str | None) -> ResponseDict:
    response: ResponseDict = {"statusCode": status}
    if body is not None:
        response["body"] = body
    return response


def handle_not_found(request: Request, *, debug: bool, body: str) -> ResponseDict:
    """404 for a request no route serves. *body* is only sent in debug mode."""
    logger.debug("404 %s %s", request.method, request.path)
    return _error_response(404, body if debug else None)


def handle_internal_error(
    exc: Exception,
    request: Request | None,
    *,
    debug: bool,
) -> ResponseDict:
    """500 for any failure raised while handling a request.

    In debug mode the traceback is logged and returned as the body;
    otherwise the body is empty.
    """
    if not debug:
        return _error_response(500, None)

    method, path = _describe(request)
    logger.exception("500 %s %s", method, path)
    return _error_response(500, "".join(traceback.format_exception(exc)))
