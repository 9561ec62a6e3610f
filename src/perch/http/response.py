"""HTTP response record and its finalization.

One ``Response`` is created per request and threaded through the whole
handler chain; every handler mutates the same object. ``finalize_response``
turns it into the dict returned to the serverless runtime, exactly once,
after the chain completes.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from perch._internal.types import ResponseDict
from perch.http.headers import has_header

# Status codes that never carry a body
BODYLESS_STATUSES: frozenset[int] = frozenset({101, 204, 205, 304})

DEFAULT_JSON_CONTENT_TYPE = "application/json; charset=utf-8"


@dataclass(slots=True)
class Response:
    """A mutable HTTP response.

    ``body`` is either a string (sent as is) or any JSON-serializable value
    (serialized on finalize). ``status`` defaults to 200 when a body is
    present and 204 otherwise.

    ``raw`` is an escape hatch: when set, it is returned verbatim and every
    other field is ignored.
    """

    headers: dict[str, str] = field(default_factory=dict)
    status: int | None = None
    body: Any = None
    raw: Mapping[str, Any] | None = None

    def json(self, data: Any, status: int | None = None) -> None:
        """Set a JSON body (and optionally the status) in one call."""
        self.body = data
        if status is not None:
            self.status = status

    def redirect(self, location: str, status: int = 302) -> None:
        """Answer with a redirect to *location*."""
        self.headers["Location"] = location
        self.status = status


def serialize_body(body: Any) -> str:
    """Compact JSON text for a structured body."""
    return json.dumps(body, separators=(",", ":"), ensure_ascii=False)


def finalize_response(
    response: Response,
    *,
    json_content_type: str = DEFAULT_JSON_CONTENT_TYPE,
) -> ResponseDict:
    """Normalize a Response into the outbound response dict.

    - ``raw`` set: returned verbatim.
    - Structured body: serialized to JSON; ``Content-Type`` is set unless
      a handler already set one.
    - Status: explicit, else 200 with a body, else 204.
    - Bodies are dropped for 101, 204, 205 and 304.
    """
    if response.raw is not None:
        return dict(response.raw)

    headers = dict(response.headers)
    body = response.body
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    elif body is not None and not isinstance(body, str):
        body = serialize_body(body)
        if not has_header(headers, "Content-Type"):
            headers["Content-Type"] = json_content_type

    status = response.status if response.status is not None else (200 if body else 204)

    result: ResponseDict = {"statusCode": status, "headers": headers}
    if body is not None and status not in BODYLESS_STATUSES:
        result["body"] = body
    return result
