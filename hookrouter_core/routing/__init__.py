"""Routing module - Request routing and matching."""

from hookrouter_core.routing.errors import (
    HandlerFault,
    MethodNotAllowed,
    RouteNotFound,
    RouteTableFrozenError,
    RoutingError,
)
from hookrouter_core.routing.matcher import MatchResult, PathPattern, match
from hookrouter_core.routing.router import HttpMethod, Route, RouteMatch, RouteTable, Router

__all__ = [
    "Router",
    "Route",
    "RouteMatch",
    "RouteTable",
    "HttpMethod",
    "PathPattern",
    "MatchResult",
    "match",
    "RoutingError",
    "RouteNotFound",
    "MethodNotAllowed",
    "HandlerFault",
    "RouteTableFrozenError",
]
