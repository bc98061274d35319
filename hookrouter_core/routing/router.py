"""Router - Request routing engine.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional, Tuple, Union

from hookrouter_core.http.request import Request, Response
from hookrouter_core.routing.errors import (
    HandlerFault,
    MethodNotAllowed,
    RouteNotFound,
    RouteTableFrozenError,
    RoutingError,
)
from hookrouter_core.routing.matcher import PathPattern, match_segments

logger = logging.getLogger(__name__)

Handler = Callable[[Request], Response]


class HttpMethod(str, Enum):
    """Methods a route can be registered under."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    OPTIONS = "OPTIONS"

    @classmethod
    def parse(cls, method: Union[str, "HttpMethod"]) -> "HttpMethod":
        """Normalize a method name, rejecting unsupported verbs."""
        if isinstance(method, cls):
            return method
        try:
            return cls(str(method).upper())
        except ValueError:
            raise ValueError(f"Unsupported HTTP method: {method!r}") from None


@dataclass(frozen=True)
class Route:
    """Route definition. Immutable once registered."""

    method: HttpMethod
    pattern: str
    handler: Handler = field(compare=False)
    name: str = ""
    compiled: PathPattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if not self.pattern.startswith("/"):
            raise ValueError(f"Route pattern must start with '/': {self.pattern!r}")
        object.__setattr__(self, "compiled", PathPattern.compile(self.pattern))

    def is_exact(self, method: str, path: str) -> bool:
        """Method and path equal the registration verbatim."""
        return self.method.value == method and self.pattern == path

    def matches(self, path: str, method: str) -> Optional[Dict[str, str]]:
        """Return extracted path parameters if route matches, None otherwise."""
        if self.method.value != method:
            return None
        result = match_segments(self.compiled, path)
        if result:
            return result.params
        return None


@dataclass
class RouteMatch:
    """A resolved route and the parameters extracted for it."""

    route: Route
    params: Dict[str, str] = field(default_factory=dict)


class RouteTable:
    """Ordered collection of routes.

    Registration order is match priority. Once frozen the table is
    read-only, so concurrent lookups need no locking.
    """

    def __init__(self, routes: Optional[List[Route]] = None):
        self._routes: List[Route] = list(routes or [])
        self._frozen = False

    def add(self, route: Route) -> "RouteTable":
        if self._frozen:
            raise RouteTableFrozenError(
                f"Cannot register {route.method.value} {route.pattern}: table is frozen"
            )
        self._routes.append(route)
        return self

    def freeze(self) -> "RouteTable":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def find_exact(self, method: str, path: str) -> Optional[Route]:
        for route in self._routes:
            if route.is_exact(method, path):
                return route
        return None

    def find_parameterized(self, method: str, path: str) -> Optional[RouteMatch]:
        """First route in registration order whose pattern matches."""
        for route in self._routes:
            params = route.matches(path, method)
            if params is not None:
                return RouteMatch(route=route, params=params)
        return None

    def has_pattern(self, path: str) -> bool:
        """Whether any route is registered with exactly this pattern."""
        return any(route.pattern == path for route in self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(tuple(self._routes))

    def __len__(self) -> int:
        return len(self._routes)


class Router:
    """Request Router.

    Features:
    - Exact routes (/api/users)
    - Path parameters (/api/users/:id)
    - First-registered-wins among parameterized routes
    - 404 vs 405 disambiguation
    - Handler faults converted to 500 responses

    Usage:
        router = Router()
        router.get("/api/users/:id", get_user)
        router.post("/api/users", create_user)

        response = router.route(Request(method="GET", path="/api/users/1"))
    """

    def __init__(self, table: Optional[RouteTable] = None):
        self._table = table or RouteTable()

    @property
    def table(self) -> RouteTable:
        return self._table

    def register(
        self,
        method: Union[str, HttpMethod],
        pattern: str,
        handler: Handler,
        name: str = "",
    ) -> "Router":
        """Add a route.

        Args:
            method: HTTP method
            pattern: URL pattern, e.g. "/api/users/:id"
            handler: Request handler function
            name: Route name
        """
        route = Route(
            method=HttpMethod.parse(method),
            pattern=pattern,
            handler=handler,
            name=name,
        )
        self._table.add(route)
        return self

    def freeze(self) -> "Router":
        """Make the route table read-only."""
        self._table.freeze()
        return self

    def resolve(self, method: str, path: str) -> Union[RouteMatch, RoutingError]:
        """Find the route for a request.

        Exact method+path registrations win over parameterized ones.
        """
        exact = self._table.find_exact(method, path)
        if exact is not None:
            return RouteMatch(route=exact)

        param_match = self._table.find_parameterized(method, path)
        if param_match is not None:
            return param_match

        if self._table.has_pattern(path):
            return MethodNotAllowed(method=method)

        return RouteNotFound(path=path, method=method)

    def route(self, request: Request) -> Response:
        """Dispatch a request to its handler. Never raises."""
        logger.info(f"[Router] {request.method} {request.path}")

        resolved = self.resolve(request.method, request.path)
        if isinstance(resolved, RoutingError):
            return resolved.to_response()

        if resolved.params:
            request = dataclasses.replace(
                request,
                path_params={**request.path_params, **resolved.params},
            )

        return self._invoke(resolved.route, request)

    def _invoke(self, route: Route, request: Request) -> Response:
        try:
            response = route.handler(request)
        except Exception:
            logger.exception(
                f"[Router] Handler error for {route.method.value} {route.pattern}"
            )
            return HandlerFault().to_response()

        if not isinstance(response, Response):
            logger.error(
                f"[Router] Handler for {route.method.value} {route.pattern} "
                f"returned {type(response).__name__}, expected Response"
            )
            return HandlerFault().to_response()

        return response

    def get_routes(self) -> List[Tuple[str, str]]:
        """Get (method, pattern) for all routes."""
        return [(route.method.value, route.pattern) for route in self._table]

    def get(self, pattern: str, handler: Handler, **kwargs) -> "Router":
        """Add GET route."""
        return self.register(HttpMethod.GET, pattern, handler, **kwargs)

    def post(self, pattern: str, handler: Handler, **kwargs) -> "Router":
        """Add POST route."""
        return self.register(HttpMethod.POST, pattern, handler, **kwargs)

    def put(self, pattern: str, handler: Handler, **kwargs) -> "Router":
        """Add PUT route."""
        return self.register(HttpMethod.PUT, pattern, handler, **kwargs)

    def delete(self, pattern: str, handler: Handler, **kwargs) -> "Router":
        """Add DELETE route."""
        return self.register(HttpMethod.DELETE, pattern, handler, **kwargs)

    def patch(self, pattern: str, handler: Handler, **kwargs) -> "Router":
        """Add PATCH route."""
        return self.register(HttpMethod.PATCH, pattern, handler, **kwargs)

    def options(self, pattern: str, handler: Handler, **kwargs) -> "Router":
        """Add OPTIONS route."""
        return self.register(HttpMethod.OPTIONS, pattern, handler, **kwargs)


__all__ = [
    "Handler",
    "HttpMethod",
    "Route",
    "RouteMatch",
    "RouteTable",
    "Router",
]
