"""Routing errors - Structured no-match and fault outcomes.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from hookrouter_core.http.request import Response


class RouteTableFrozenError(RuntimeError):
    """Raised when a route is added after the table was frozen."""


@dataclass(frozen=True)
class RoutingError:
    """Base class for routing outcomes that did not reach a handler."""

    status: int = 500
    error: str = "Internal Server Error"

    def details(self) -> Dict[str, Any]:
        return {}

    def to_response(self) -> Response:
        """Render as a timestamped JSON error response."""
        return Response.error(self.status, self.error, **self.details())


@dataclass(frozen=True)
class RouteNotFound(RoutingError):
    """No route matches the path under any method."""

    path: str = ""
    method: str = ""
    status: int = 404
    error: str = "Not Found"

    def details(self) -> Dict[str, Any]:
        return {"path": self.path, "method": self.method}


@dataclass(frozen=True)
class MethodNotAllowed(RoutingError):
    """The path is registered, but only for other methods."""

    method: str = ""
    status: int = 405
    error: str = "Method Not Allowed"

    def details(self) -> Dict[str, Any]:
        return {"method": self.method}


@dataclass(frozen=True)
class HandlerFault(RoutingError):
    """The handler raised or returned something that is not a Response.

    The underlying fault is logged by the router and never rendered.
    """

    status: int = 500
    error: str = "Internal Server Error"


__all__ = [
    "RouteTableFrozenError",
    "RoutingError",
    "RouteNotFound",
    "MethodNotAllowed",
    "HandlerFault",
]
