"""Ordered route table with segment-wise path matching.

Routes are registered during setup and frozen when the app serves its
first request. Lookup is a linear scan in registration order: the first
route that matches wins, there is no specificity scoring.
"""

from perch.errors import ConfigurationError
from perch.routing.route import PARAM_PREFIX, WILDCARD, PathSegment, Route, RouteMatch


def split_path(path: str) -> list[str]:
    """Split a path into its non-empty ``/``-delimited tokens."""
    return [part for part in path.split("/") if part]


def parse_path(path: str) -> tuple[PathSegment, ...]:
    """Parse a route path string into segments.

    Examples::

        "/users"          -> (PathSegment("users"),)
        "/users/:id"      -> (PathSegment("users"), PathSegment(":id", is_param=True, param_name="id"))
        "/"               -> ()
        "*"               -> ()  (whole-path wildcard, see Route.is_catch_all)

    Raises ``ConfigurationError`` for patterns this router cannot serve.
    """
    if path == WILDCARD:
        return ()

    segments: list[PathSegment] = []
    seen: set[str] = set()
    for part in split_path(path):
        if part == WILDCARD:
            msg = (
                f"Route path {path!r} uses '*' as a segment. "
                "'*' is only valid as the whole pattern (catch-all route)."
            )
            raise ConfigurationError(msg)
        if part.startswith("{") and part.endswith("}"):
            msg = (
                f"Route path {path!r} uses {{param}} syntax. "
                f"Use :param instead, e.g. ':{part[1:-1]}'."
            )
            raise ConfigurationError(msg)
        if part.startswith(PARAM_PREFIX):
            name = part[len(PARAM_PREFIX):]
            if not name:
                msg = f"Route path {path!r} has a parameter without a name."
                raise ConfigurationError(msg)
            if name in seen:
                msg = f"Route path {path!r} binds parameter {name!r} twice."
                raise ConfigurationError(msg)
            seen.add(name)
            segments.append(PathSegment(value=part, is_param=True, param_name=name))
        else:
            segments.append(PathSegment(value=part))
    return tuple(segments)


def match_segments(
    segments: tuple[PathSegment, ...],
    parts: list[str],
) -> dict[str, str] | None:
    """Match path tokens against a parsed pattern.

    Returns the bound parameters on a full match, ``None`` otherwise.
    Nothing is bound unless every position matches.
    """
    if len(segments) != len(parts):
        return None
    params: dict[str, str] = {}
    for segment, part in zip(segments, parts, strict=True):
        if segment.is_param:
            params[segment.param_name or ""] = part
        elif segment.value != part:
            return None
    return params


class RouteTable:
    """Ordered collection of routes.

    Usage::

        table = RouteTable()
        table.add(Route("GET", "/users/:id", parse_path("/users/:id"), (handler,)))
        table.compile()
        match = table.match("GET", "/users/42")
    """

    __slots__ = ("_compiled", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._compiled = False

    def add(self, route: Route) -> None:
        """Append a route. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        self._routes.append(route)

    @property
    def routes(self) -> list[Route]:
        """All registered routes, in registration order."""
        return list(self._routes)

    def __len__(self) -> int:
        return len(self._routes)

    def compile(self) -> None:
        """Freeze the table. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Find the route serving *method* and *path*.

        Tries every non-wildcard route in registration order, then falls
        back to the earliest method-compatible ``*`` route. Returns ``None``
        if neither exists.
        """
        parts = split_path(path)

        for route in self._routes:
            if route.is_catch_all or not route.accepts(method):
                continue
            params = match_segments(route.segments, parts)
            if params is not None:
                return RouteMatch(route=route, path_params=params)

        for route in self._routes:
            if route.is_catch_all and route.accepts(method):
                return RouteMatch(route=route, path_params={})

        return None
