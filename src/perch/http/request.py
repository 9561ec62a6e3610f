"""HTTP request as seen by handlers.

Built once per event. Path parameters, query parameters and the parsed
body are filled in while the request is normalized; handlers treat the
result as read-only.
"""

import json
from collections.abc import Collection, Mapping
from dataclasses import dataclass, field
from typing import Any

from perch.http.event import HTTPEvent
from perch.http.headers import get_header
from perch.http.query import parse_query


@dataclass(slots=True)
class Request:
    """An inbound HTTP request.

    ``body`` is the raw string as received, the parsed JSON value for
    JSON requests with a body-bearing method, or ``None``.

    ``event`` and ``lambda_context`` carry the raw invocation through
    untouched for handlers that need provider-specific details.
    """

    method: str
    url: str
    path: str
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)
    body: Any = None
    is_base64_encoded: bool = False
    event: Mapping[str, Any] = field(default_factory=dict, repr=False)
    lambda_context: Any = field(default=None, repr=False)

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.header("content-type")

    def header(self, name: str, default: str | None = None) -> str | None:
        """Case-insensitive header lookup."""
        value = get_header(self.headers, name)
        return default if value is None else value

    @classmethod
    def from_event(
        cls,
        http_event: HTTPEvent,
        *,
        event: Mapping[str, Any] | None = None,
        lambda_context: Any = None,
    ) -> "Request":
        """Build a Request from a parsed event.

        Query parameters supplied by the gateway are merged with those
        parsed from the URL; the URL-derived values win.
        """
        return cls(
            method=http_event.method,
            url=http_event.url,
            path=http_event.path,
            headers=http_event.headers,
            params=dict(http_event.path_params),
            query={**http_event.query, **parse_query(http_event.raw_query)},
            body=http_event.body,
            is_base64_encoded=http_event.is_base64_encoded,
            event=event or {},
            lambda_context=lambda_context,
        )


def parse_body(request: Request, body_methods: Collection[str]) -> None:
    """Replace a JSON request body with its parsed value.

    Applies to *body_methods* only, and only when the content type
    mentions ``json``. A body that fails to parse becomes ``{}``.
    """
    if request.method not in body_methods:
        return
    if "json" not in (request.content_type or ""):
        return
    try:
        request.body = json.loads(request.body)
    except (TypeError, ValueError, RecursionError):
        request.body = {}


def bind_params(request: Request, path_params: Mapping[str, str]) -> None:
    """Merge route-derived path parameters over the gateway-supplied ones."""
    request.params = {**request.params, **path_params}
