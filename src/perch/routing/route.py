"""Route, PathSegment and RouteMatch frozen dataclasses."""

from dataclasses import dataclass

from perch._internal.types import Handler

# Methods with a dedicated registration call on App
HTTP_METHODS: frozenset[str] = frozenset(
    {"CONNECT", "DELETE", "GET", "HEAD", "OPTIONS", "PATCH", "POST", "PUT", "TRACE"}
)

# Matches every method (``App.any``) or, as a whole pattern, every path
WILDCARD = "*"

PARAM_PREFIX = ":"


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``/users``  (is_param=False)
    Param:   ``/:id``    (is_param=True, param_name="id")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route definition.

    Created by a registration call on the app, owned by the route table.
    ``segments`` is empty for both ``/`` and the whole-path wildcard;
    ``is_catch_all`` tells them apart.
    """

    method: str
    path: str
    segments: tuple[PathSegment, ...]
    handlers: tuple[Handler, ...]

    @property
    def is_catch_all(self) -> bool:
        return self.path == WILDCARD

    def accepts(self, method: str) -> bool:
        """True if this route serves *method*."""
        return self.method == WILDCARD or self.method == method


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]
