"""Typed view of an inbound serverless HTTP event.

The only component that reads the raw event dict. Accepts the API Gateway
HTTP API shape (payload format 2.0) and the REST API / payload 1.0 shape,
so everything downstream works with one set of field names.
"""

import base64
import binascii
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from perch.http.headers import get_header
from perch.http.query import build_query


@dataclass(frozen=True, slots=True)
class HTTPEvent:
    """Typed HTTP event parsed from a raw event mapping.

    Internal only -- handlers interact with Request, not this.
    """

    method: str
    path: str
    domain: str
    headers: dict[str, str] = field(default_factory=dict)
    raw_query: str = ""
    query: dict[str, str] = field(default_factory=dict)
    path_params: dict[str, str] = field(default_factory=dict)
    body: str | None = None
    is_base64_encoded: bool = False

    @property
    def url(self) -> str:
        """Absolute request URL rebuilt from domain, path and query."""
        url = f"https://{self.domain}{self.path}"
        if self.raw_query:
            url = f"{url}?{self.raw_query}"
        return url

    @classmethod
    def from_event(cls, event: Mapping[str, Any]) -> "HTTPEvent":
        """Parse a raw API Gateway event into a typed object.

        Raises ``ValueError`` if the event carries no HTTP method.
        """
        request_context: Mapping[str, Any] = event.get("requestContext") or {}
        http: Mapping[str, Any] = request_context.get("http") or {}

        method = http.get("method") or event.get("httpMethod")
        if not method:
            msg = "Event has no HTTP method (requestContext.http.method or httpMethod)."
            raise ValueError(msg)

        headers = dict(event.get("headers") or {})
        query = dict(event.get("queryStringParameters") or {})
        raw_query = event.get("rawQueryString")
        if raw_query is None:
            raw_query = build_query(query)

        body, is_base64 = _decode_body(event.get("body"), bool(event.get("isBase64Encoded")))

        return cls(
            method=method.upper(),
            path=event.get("rawPath") or http.get("path") or event.get("path") or "/",
            domain=request_context.get("domainName") or get_header(headers, "host") or "localhost",
            headers=headers,
            raw_query=raw_query,
            query=query,
            path_params=dict(event.get("pathParameters") or {}),
            body=body,
            is_base64_encoded=is_base64,
        )


def _decode_body(body: str | None, is_base64: bool) -> tuple[str | None, bool]:
    """Decode a base64 body to text when it is valid UTF-8.

    Binary payloads stay base64 encoded and keep the flag set so handlers
    can decode them themselves.
    """
    if body is None or not is_base64:
        return body, False
    try:
        return base64.b64decode(body, validate=True).decode("utf-8"), False
    except (binascii.Error, UnicodeDecodeError):
        return body, True
