"""Routing tests."""

import logging

import pytest
from hookrouter_core.http.request import Request, Response
from hookrouter_core.routing.errors import (
    MethodNotAllowed,
    RouteNotFound,
    RouteTableFrozenError,
)
from hookrouter_core.routing.matcher import Literal, Param, PathPattern, match
from hookrouter_core.routing.router import HttpMethod, RouteMatch, Router


def echo(tag):
    def handler(request):
        return Response.json({"tag": tag, "params": request.path_params})
    return handler


class TestPathPattern:
    """Test pattern compilation."""

    def test_compile_tags_segments(self):
        """Test literal and parameter segments."""
        pattern = PathPattern.compile("/api/users/:id")
        assert pattern.segments == (
            Literal(""),
            Literal("api"),
            Literal("users"),
            Param("id"),
        )
        assert pattern.param_names == ("id",)
        assert pattern.is_parameterized

    def test_literal_only_pattern(self):
        """Test pattern without parameters."""
        assert not PathPattern.compile("/health").is_parameterized


class TestMatch:
    """Test the path matcher."""

    def test_extracts_parameter(self):
        """Test single parameter extraction."""
        result = match("/api/users/:id", "/api/users/1")
        assert result
        assert result.params == {"id": "1"}

    def test_extracts_multiple_parameters(self):
        """Test several parameters."""
        result = match("/orgs/:org/repos/:repo", "/orgs/acme/repos/widgets")
        assert result.params == {"org": "acme", "repo": "widgets"}

    def test_segment_count_must_match(self):
        """Test no wildcard behaviour."""
        assert not match("/api/users/:id", "/api/users")
        assert not match("/api/users/:id", "/api/users/1/posts")

    def test_literal_mismatch(self):
        """Test literal segments compare exactly."""
        assert not match("/api/users/:id", "/api/Users/1")

    def test_trailing_slash_is_significant(self):
        """Test no trailing-slash normalization."""
        assert not match("/a", "/a/")
        assert match("/a/", "/a/")
        assert match("/a/:rest", "/a/").params == {"rest": ""}

    def test_no_url_decoding(self):
        """Test raw segment is captured."""
        assert match("/files/:name", "/files/a%20b").params == {"name": "a%20b"}

    def test_parameter_matches_any_segment(self):
        """Parameter segments match whatever is at their position."""
        for value in ("1", "abc", ":id", "x-y_z"):
            assert match("/u/:id", f"/u/{value}").params == {"id": value}

    def test_compiled_pattern_accepted(self):
        """Test matching against a precompiled pattern."""
        compiled = PathPattern.compile("/api/users/:id")
        assert match(compiled, "/api/users/7").params == {"id": "7"}


class TestCompiledRoutePattern:
    """Test patterns are compiled at registration."""

    def test_route_holds_compiled_pattern(self):
        """Test the route carries its tagged segments."""
        router = Router()
        router.get("/api/users/:id", echo("user"))

        (route,) = list(router.table)
        assert route.compiled == PathPattern.compile("/api/users/:id")
        assert route.matches("/api/users/7", "GET") == {"id": "7"}
        assert route.matches("/api/items/7", "GET") is None

    def test_duplicate_parameter_name_last_wins(self):
        """A repeated parameter name binds the later segment."""
        assert match("/a/:x/:x", "/a/1/2").params == {"x": "2"}


class TestRouteRegistration:
    """Test route table setup."""

    def test_register_and_list(self):
        """Test routes are listed in registration order."""
        router = Router()
        router.get("/", echo("home")).post("/api/users", echo("create"))
        assert router.get_routes() == [("GET", "/"), ("POST", "/api/users")]

    def test_method_is_normalized(self):
        """Test lower-case method names."""
        router = Router()
        router.register("patch", "/x", echo("x"))
        assert router.get_routes() == [("PATCH", "/x")]

    def test_unsupported_method_rejected(self):
        """Test methods outside the enumeration."""
        router = Router()
        with pytest.raises(ValueError):
            router.register("HEAD", "/x", echo("x"))

    def test_pattern_must_start_with_slash(self):
        """Test pattern validation."""
        router = Router()
        with pytest.raises(ValueError):
            router.get("api/users", echo("x"))

    def test_frozen_table_rejects_routes(self):
        """Test immutability after setup."""
        router = Router()
        router.get("/a", echo("a"))
        router.freeze()
        assert router.table.frozen
        with pytest.raises(RouteTableFrozenError):
            router.get("/b", echo("b"))

    def test_all_shortcuts(self):
        """Test method shortcut helpers."""
        router = Router()
        router.get("/r", echo("r"))
        router.post("/r", echo("r"))
        router.put("/r", echo("r"))
        router.delete("/r", echo("r"))
        router.patch("/r", echo("r"))
        router.options("/r", echo("r"))
        assert [m for m, _ in router.get_routes()] == [m.value for m in HttpMethod]


class TestResolve:
    """Test lookup priority."""

    def test_exact_before_parameterized(self):
        """Exact registration wins even when registered later."""
        router = Router()
        router.get("/api/users/:id", echo("param"))
        router.get("/api/users/me", echo("exact"))

        resolved = router.resolve("GET", "/api/users/me")
        assert isinstance(resolved, RouteMatch)
        assert resolved.route.pattern == "/api/users/me"
        assert resolved.params == {}

    def test_first_registered_parameterized_wins(self):
        """Test registration order as priority."""
        router = Router()
        router.get("/items/:id", echo("first"))
        router.get("/items/:name", echo("second"))

        resolved = router.resolve("GET", "/items/42")
        assert resolved.route.pattern == "/items/:id"
        assert resolved.params == {"id": "42"}

    def test_parameterized_requires_method(self):
        """Test method must match for parameterized routes."""
        router = Router()
        router.post("/items/:id", echo("post"))
        router.get("/items/:id", echo("get"))

        assert router.resolve("GET", "/items/1").route.method is HttpMethod.GET

    def test_method_not_allowed(self):
        """Test wrong verb on a registered path."""
        router = Router()
        router.get("/api/users", echo("list"))

        resolved = router.resolve("DELETE", "/api/users")
        assert resolved == MethodNotAllowed(method="DELETE")
        assert resolved.status == 405

    def test_not_found(self):
        """Test unknown path."""
        router = Router()
        router.get("/api/users", echo("list"))

        resolved = router.resolve("GET", "/nope")
        assert resolved == RouteNotFound(path="/nope", method="GET")
        assert resolved.status == 404

    def test_parameterized_path_wrong_method_is_not_found(self):
        """405 only applies to paths equal to a registered pattern."""
        router = Router()
        router.get("/api/users/:id", echo("get"))

        assert isinstance(router.resolve("DELETE", "/api/users/1"), RouteNotFound)


class TestRoute:
    """Test request dispatch."""

    def test_handler_receives_path_params(self):
        """GET /api/users/1 binds id=1."""
        seen = {}

        def get_user(request):
            seen.update(request.path_params)
            return Response.json({"ok": True})

        router = Router()
        router.get("/api/users/:id", get_user)

        response = router.route(Request(method="GET", path="/api/users/1"))
        assert response.status == 200
        assert seen == {"id": "1"}

    def test_extracted_params_override_supplied(self):
        """Extraction wins on key collision; other keys survive."""
        router = Router()
        router.get("/api/users/:id", echo("user"))

        request = Request(
            method="GET",
            path="/api/users/1",
            path_params={"id": "999", "tenant": "acme"},
        )
        response = router.route(request)

        assert response.json_body()["params"] == {"id": "1", "tenant": "acme"}
        assert request.path_params == {"id": "999", "tenant": "acme"}

    def test_not_found_response(self):
        """Test 404 body."""
        router = Router()
        response = router.route(Request(method="GET", path="/missing"))

        body = response.json_body()
        assert response.status == 404
        assert body["error"] == "Not Found"
        assert body["path"] == "/missing"
        assert body["method"] == "GET"
        assert "timestamp" in body

    def test_method_not_allowed_response(self):
        """Test 405 body."""
        router = Router()
        router.get("/hello", echo("hello"))

        response = router.route(Request(method="POST", path="/hello"))
        assert response.status == 405
        assert response.json_body()["method"] == "POST"

    def test_handler_exception_becomes_500(self, caplog):
        """Test handler faults never escape."""
        def broken(request):
            raise RuntimeError("database password is hunter2")

        router = Router()
        router.get("/boom", broken)

        with caplog.at_level(logging.ERROR, logger="hookrouter_core.routing.router"):
            response = router.route(Request(method="GET", path="/boom"))

        assert response.status == 500
        assert response.json_body()["error"] == "Internal Server Error"
        assert "hunter2" not in response.body
        assert "Handler error" in caplog.text

    def test_handler_returning_non_response_becomes_500(self):
        """Test malformed handler output."""
        router = Router()
        router.get("/bad", lambda request: {"status": 200})

        assert router.route(Request(method="GET", path="/bad")).status == 500

    def test_logs_method_and_path(self, caplog):
        """Test per-request log line."""
        router = Router()
        router.get("/hello", echo("hello"))

        with caplog.at_level(logging.INFO, logger="hookrouter_core.routing.router"):
            router.route(Request(method="GET", path="/hello"))

        assert "[Router] GET /hello" in caplog.text
