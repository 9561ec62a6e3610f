"""CORS policy.

Answers ``OPTIONS`` preflight requests on its own and stamps the same
``Access-Control-*`` headers onto every other response. Configured once
per app; no per-request state.
"""

from dataclasses import dataclass

from perch._internal.types import ResponseDict
from perch.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class CORSConfig:
    """CORS configuration.

    Every field defaults independently. Override what you need::

        CORSConfig(allow_origin="https://example.com", max_age=600)
    """

    allow_origin: str = "*"
    allow_methods: str = "*"
    allow_headers: str = "*, Authorization"
    max_age: int = 86400  # 24 hours
    options_success_status: int = 204

    def __post_init__(self) -> None:
        if self.max_age < 0:
            msg = f"CORS max_age must be >= 0, got {self.max_age}"
            raise ConfigurationError(msg)


class CORSPolicy:
    """Applies a ``CORSConfig`` to requests.

    Usage::

        policy = CORSPolicy(CORSConfig())
        if request.method == "OPTIONS":
            return policy.preflight()
        response.headers.update(policy.headers())
    """

    __slots__ = ("_headers", "config")

    def __init__(self, config: CORSConfig | None = None) -> None:
        self.config = config or CORSConfig()
        cfg = self.config
        self._headers = {
            "Access-Control-Allow-Origin": cfg.allow_origin,
            "Access-Control-Allow-Methods": cfg.allow_methods,
            "Access-Control-Allow-Headers": cfg.allow_headers,
            "Access-Control-Max-Age": str(cfg.max_age),
        }

    def headers(self) -> dict[str, str]:
        """The four ``Access-Control-*`` headers, as a fresh dict."""
        return dict(self._headers)

    def preflight(self) -> ResponseDict:
        """The complete answer to an ``OPTIONS`` request."""
        return {
            "statusCode": self.config.options_success_status,
            "headers": self.headers(),
        }
