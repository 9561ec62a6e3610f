"""Test client for perch applications.

Builds API Gateway HTTP API (payload 2.0) events and sends them through
``App.handle``, the same path the Lambda runtime takes. No HTTP involved.
"""

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from perch._internal.types import Event, ResponseDict
from perch.app import App
from perch.http.headers import get_header
from perch.http.query import parse_query


def make_event(
    method: str,
    path: str,
    *,
    headers: Mapping[str, str] | None = None,
    body: str | None = None,
    json: Any = None,
    path_params: Mapping[str, str] | None = None,
    domain: str = "testserver",
) -> dict[str, Any]:
    """Build a payload 2.0 event.

    *path* may carry a query string (``"/items?limit=2"``). Passing *json*
    serializes it as the body and sets ``content-type: application/json``
    unless *headers* sets one.
    """
    path_part, _, raw_query = path.partition("?")
    event_headers = {key.lower(): value for key, value in (headers or {}).items()}

    if json is not None:
        body = json_module.dumps(json)
        event_headers.setdefault("content-type", "application/json")

    event: dict[str, Any] = {
        "version": "2.0",
        "rawPath": path_part,
        "rawQueryString": raw_query,
        "headers": event_headers,
        "requestContext": {
            "domainName": domain,
            "http": {"method": method.upper(), "path": path_part},
        },
        "isBase64Encoded": False,
    }
    if raw_query:
        event["queryStringParameters"] = parse_query(raw_query)
    if path_params:
        event["pathParameters"] = dict(path_params)
    if body is not None:
        event["body"] = body
    return event


@dataclass(frozen=True, slots=True)
class TestResponse:
    """The response dict returned by ``App.handle``, with helpers."""

    __test__ = False  # Tell pytest this is not a test class

    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: str | None = None
    raw: ResponseDict = field(default_factory=dict, repr=False)

    @property
    def json(self) -> Any:
        """Body parsed as JSON."""
        assert self.body is not None, "Response has no body"
        return json_module.loads(self.body)

    @property
    def has_body(self) -> bool:
        return "body" in self.raw

    def header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        return get_header(self.headers, name)

    @classmethod
    def from_dict(cls, response: ResponseDict) -> "TestResponse":
        return cls(
            status=response.get("statusCode", 0),
            headers=dict(response.get("headers") or {}),
            body=response.get("body"),
            raw=response,
        )


class TestClient:
    """Async test client for perch applications.

    Usage::

        async with TestClient(app) as client:
            response = await client.get("/users/42")
            assert response.status == 200
            assert response.json == {"id": "42"}

    *context* and *extensions* are passed to every ``App.handle`` call.
    """

    __test__ = False  # Tell pytest this is not a test class
    __slots__ = ("app", "context", "extensions")

    def __init__(
        self,
        app: App,
        *,
        context: Any = None,
        extensions: Mapping[str, Any] | None = None,
    ) -> None:
        self.app = app
        self.context = context
        self.extensions = extensions

    async def __aenter__(self) -> "TestClient":
        self.app._ensure_frozen()
        return self

    async def __aexit__(self, *args: object) -> None:
        pass

    async def get(self, path: str, *, headers: Mapping[str, str] | None = None) -> TestResponse:
        """Send a GET request."""
        return await self.request("GET", path, headers=headers)

    async def head(self, path: str, *, headers: Mapping[str, str] | None = None) -> TestResponse:
        """Send a HEAD request."""
        return await self.request("HEAD", path, headers=headers)

    async def options(
        self, path: str, *, headers: Mapping[str, str] | None = None
    ) -> TestResponse:
        """Send an OPTIONS request."""
        return await self.request("OPTIONS", path, headers=headers)

    async def post(
        self,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: str | None = None,
        json: Any = None,
    ) -> TestResponse:
        """Send a POST request."""
        return await self.request("POST", path, headers=headers, body=body, json=json)

    async def put(
        self,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: str | None = None,
        json: Any = None,
    ) -> TestResponse:
        """Send a PUT request."""
        return await self.request("PUT", path, headers=headers, body=body, json=json)

    async def patch(
        self,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: str | None = None,
        json: Any = None,
    ) -> TestResponse:
        """Send a PATCH request."""
        return await self.request("PATCH", path, headers=headers, body=body, json=json)

    async def delete(
        self,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: str | None = None,
        json: Any = None,
    ) -> TestResponse:
        """Send a DELETE request."""
        return await self.request("DELETE", path, headers=headers, body=body, json=json)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
        body: str | None = None,
        json: Any = None,
    ) -> TestResponse:
        """Send an arbitrary request through the app."""
        event = make_event(method, path, headers=headers, body=body, json=json)
        return await self.send(event)

    async def send(self, event: Event) -> TestResponse:
        """Send a prebuilt event through the app."""
        response = await self.app.handle(event, self.context, self.extensions)
        return TestResponse.from_dict(response)
