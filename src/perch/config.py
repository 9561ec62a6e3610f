"""Application configuration.

AppConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups. ``App.debug()`` and ``App.cors()`` swap in a
modified copy during setup.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from perch.middleware.cors import CORSConfig


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, cors=CORSConfig(allow_origin="https://example.com"))
    """

    # Surface tracebacks and the not-found message in response bodies
    debug: bool = False

    # CORS is on exactly when a config is present
    cors: CORSConfig | None = None

    # Request bodies
    body_methods: frozenset[str] = frozenset({"POST", "PUT", "PATCH", "DELETE"})

    # Responses
    json_content_type: str = "application/json; charset=utf-8"
    not_found_body: str = "Route not found!"

    # Mapping handed to handlers as ``ctx.env``; None means ``os.environ``
    env: Mapping[str, str] | None = None
