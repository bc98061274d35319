"""CORS Middleware - Cross-Origin Resource Sharing.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from hookrouter_core.http.request import Request, Response
from hookrouter_core.middleware.base import Middleware

logger = logging.getLogger(__name__)


@dataclass
class CORSConfig:
    """CORS configuration."""

    allow_origins: List[str] = field(default_factory=lambda: ["*"])
    allow_methods: List[str] = field(
        default_factory=lambda: ["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"]
    )
    allow_headers: List[str] = field(
        default_factory=lambda: ["Content-Type", "Authorization"]
    )
    max_age: int = 86400


class CORSMiddleware(Middleware):
    """CORS middleware for cross-origin requests.

    Preflight ``OPTIONS`` requests are answered before routing.
    """

    def __init__(self, config: Optional[CORSConfig] = None):
        self.config = config or CORSConfig()

    def pre_request(self, request: Request) -> Optional[Response]:
        """Handle preflight OPTIONS requests."""
        if request.method == "OPTIONS":
            return self._preflight_response(request)
        return None

    def post_request(
        self,
        request: Request,
        response: Response,
    ) -> Optional[Response]:
        """Add CORS origin header to response."""
        origin = self._allowed_origin(request.header("origin") or request.header("Origin"))
        if origin is None:
            return None

        response.set_header("Access-Control-Allow-Origin", origin)
        return response

    def _preflight_response(self, request: Request) -> Response:
        """Generate preflight response."""
        origin = self._allowed_origin(request.header("origin") or request.header("Origin"))

        response = Response(status=200, headers={})
        if origin is not None:
            response.set_header("Access-Control-Allow-Origin", origin)
            response.set_header(
                "Access-Control-Allow-Methods", ", ".join(self.config.allow_methods)
            )
            response.set_header(
                "Access-Control-Allow-Headers", ", ".join(self.config.allow_headers)
            )
            response.set_header("Access-Control-Max-Age", str(self.config.max_age))

        return response

    def _allowed_origin(self, origin: str) -> Optional[str]:
        """Value for Access-Control-Allow-Origin, or None if not allowed."""
        if "*" in self.config.allow_origins:
            return "*"
        if origin and origin in self.config.allow_origins:
            return origin
        return None


__all__ = [
    "CORSMiddleware",
    "CORSConfig",
]
