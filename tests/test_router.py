"""Tests for perch.routing.table — ordered route table and path matching."""

import pytest

from perch.errors import ConfigurationError
from perch.routing.route import Route
from perch.routing.table import RouteTable, match_segments, parse_path, split_path


def _handler(ctx) -> None:
    ctx.res.body = "ok"


def _route(path: str, method: str = "GET") -> Route:
    return Route(method=method, path=path, segments=parse_path(path), handlers=(_handler,))


def _table(*routes: Route) -> RouteTable:
    t = RouteTable()
    for route in routes:
        t.add(route)
    t.compile()
    return t


class TestParsePath:
    def test_static(self) -> None:
        segments = parse_path("/users")
        assert len(segments) == 1
        assert segments[0].value == "users"
        assert segments[0].is_param is False

    def test_multi_static(self) -> None:
        segments = parse_path("/api/v2/users")
        assert [s.value for s in segments] == ["api", "v2", "users"]

    def test_param(self) -> None:
        segments = parse_path("/users/:id")
        assert segments[1].is_param is True
        assert segments[1].param_name == "id"
        assert segments[1].value == ":id"

    def test_root(self) -> None:
        assert parse_path("/") == ()

    def test_wildcard_whole_pattern(self) -> None:
        assert parse_path("*") == ()

    def test_empty_segments_dropped(self) -> None:
        assert [s.value for s in parse_path("//users///list/")] == ["users", "list"]

    def test_rejects_wildcard_segment(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            parse_path("/files/*")
        assert "catch-all" in str(exc_info.value)

    def test_rejects_brace_param(self) -> None:
        """Perch expects :param, not {param}."""
        with pytest.raises(ConfigurationError) as exc_info:
            parse_path("/share/{slug}")
        assert ":slug" in str(exc_info.value)

    def test_rejects_unnamed_param(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_path("/users/:")

    def test_rejects_duplicate_param(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_path("/a/:id/b/:id")


class TestMatchSegments:
    def test_segment_count_must_match(self) -> None:
        assert match_segments(parse_path("/users/:id"), split_path("/users")) is None
        assert match_segments(parse_path("/users"), split_path("/users/1")) is None

    def test_no_partial_binding(self) -> None:
        segments = parse_path("/users/:id/posts")
        assert match_segments(segments, ["users", "7", "comments"]) is None

    def test_binds_all_params(self) -> None:
        segments = parse_path("/users/:uid/posts/:pid")
        assert match_segments(segments, ["users", "7", "posts", "9"]) == {
            "uid": "7",
            "pid": "9",
        }


class TestStaticRoutes:
    def test_root(self) -> None:
        match = _table(_route("/")).match("GET", "/")
        assert match is not None
        assert match.path_params == {}

    def test_simple_path(self) -> None:
        match = _table(_route("/users")).match("GET", "/users")
        assert match is not None
        assert match.route.path == "/users"

    def test_multiple_routes(self) -> None:
        t = _table(_route("/users"), _route("/posts"))
        assert t.match("GET", "/users").route.path == "/users"  # type: ignore[union-attr]
        assert t.match("GET", "/posts").route.path == "/posts"  # type: ignore[union-attr]

    def test_trailing_slash_ignored(self) -> None:
        match = _table(_route("/users")).match("GET", "/users/")
        assert match is not None

    def test_unknown_path(self) -> None:
        assert _table(_route("/users")).match("GET", "/posts") is None

    def test_literal_tokens_are_case_sensitive(self) -> None:
        assert _table(_route("/users")).match("GET", "/Users") is None


class TestParams:
    def test_string_param(self) -> None:
        match = _table(_route("/users/:name")).match("GET", "/users/alice")
        assert match is not None
        assert match.path_params == {"name": "alice"}

    def test_params_are_strings(self) -> None:
        match = _table(_route("/users/:id")).match("GET", "/users/42")
        assert match is not None
        assert match.path_params == {"id": "42"}

    def test_param_does_not_span_segments(self) -> None:
        assert _table(_route("/files/:name")).match("GET", "/files/a/b") is None


class TestMethods:
    def test_method_must_match(self) -> None:
        t = _table(_route("/users", "POST"))
        assert t.match("GET", "/users") is None
        assert t.match("POST", "/users") is not None

    def test_any_method(self) -> None:
        t = _table(_route("/users", "*"))
        for method in ("GET", "POST", "DELETE", "PATCH"):
            assert t.match(method, "/users") is not None

    def test_same_path_different_methods(self) -> None:
        get = _route("/users", "GET")
        post = _route("/users", "POST")
        t = _table(get, post)
        assert t.match("GET", "/users").route is get  # type: ignore[union-attr]
        assert t.match("POST", "/users").route is post  # type: ignore[union-attr]


class TestPrecedence:
    def test_first_registered_wins(self) -> None:
        param = _route("/users/:id")
        static = _route("/users/me")
        t = _table(param, static)
        match = t.match("GET", "/users/me")
        assert match is not None
        assert match.route is param
        assert match.path_params == {"id": "me"}

    def test_static_first_when_registered_first(self) -> None:
        static = _route("/users/me")
        param = _route("/users/:id")
        t = _table(static, param)
        assert t.match("GET", "/users/me").route is static  # type: ignore[union-attr]
        assert t.match("GET", "/users/7").route is param  # type: ignore[union-attr]

    def test_wildcard_method_route_registered_first_wins(self) -> None:
        anything = _route("/users", "*")
        get = _route("/users", "GET")
        assert _table(anything, get).match("GET", "/users").route is anything  # type: ignore[union-attr]


class TestCatchAll:
    def test_catch_all_used_when_nothing_else_matches(self) -> None:
        catch_all = _route("*", "*")
        users = _route("/users")
        t = _table(catch_all, users)
        assert t.match("GET", "/users").route is users  # type: ignore[union-attr]
        match = t.match("GET", "/anything/else")
        assert match is not None
        assert match.route is catch_all
        assert match.path_params == {}

    def test_catch_all_respects_method(self) -> None:
        t = _table(_route("*", "POST"))
        assert t.match("GET", "/x") is None
        assert t.match("POST", "/x") is not None

    def test_catch_all_matches_root(self) -> None:
        assert _table(_route("*", "*")).match("GET", "/") is not None

    def test_earliest_compatible_catch_all(self) -> None:
        post_only = _route("*", "POST")
        anything = _route("*", "*")
        t = _table(post_only, anything)
        assert t.match("GET", "/x").route is anything  # type: ignore[union-attr]
        assert t.match("POST", "/x").route is post_only  # type: ignore[union-attr]


class TestCompile:
    def test_add_after_compile_raises(self) -> None:
        t = _table(_route("/users"))
        with pytest.raises(RuntimeError):
            t.add(_route("/posts"))

    def test_routes_in_registration_order(self) -> None:
        a, b, c = _route("/a"), _route("/b"), _route("*", "*")
        t = _table(a, b, c)
        assert t.routes == [a, b, c]
        assert len(t) == 3
