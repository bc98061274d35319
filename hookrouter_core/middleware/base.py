"""Middleware Base - Base classes for middleware.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple, Union

from hookrouter_core.http.request import Request, Response

logger = logging.getLogger(__name__)


class Middleware(ABC):
    """Abstract middleware base class.

    Middleware can process requests before routing and
    responses before sending to client.

    Pipeline:
    ┌────────────────────────────────────────────────────────────┐
    │                  Middleware Pipeline                        │
    │                                                             │
    │  Request ──▶ MW1 ──▶ MW2 ──▶ ... ──▶ Router                │
    │                                          │                  │
    │  Response ◀── MW1 ◀── MW2 ◀── ... ◀──────┘                 │
    └────────────────────────────────────────────────────────────┘
    """

    @abstractmethod
    def pre_request(
        self,
        request: Request,
    ) -> Optional[Union[Request, Response]]:
        """Process request before routing.

        Args:
            request: Request object

        Returns:
            Modified request, Response to short-circuit, or None
        """
        pass

    @abstractmethod
    def post_request(
        self,
        request: Request,
        response: Response,
    ) -> Optional[Response]:
        """Process response before sending.

        Args:
            request: Original request
            response: Response from handler

        Returns:
            Modified response or None
        """
        pass


class MiddlewareChain:
    """Chain of middleware for sequential execution."""

    def __init__(self, middleware: Optional[List[Middleware]] = None):
        self._middleware = list(middleware or [])

    def add(self, middleware: Middleware) -> "MiddlewareChain":
        """Add middleware to chain."""
        self._middleware.append(middleware)
        return self

    def remove(self, middleware: Middleware) -> bool:
        """Remove middleware from chain."""
        try:
            self._middleware.remove(middleware)
            return True
        except ValueError:
            return False

    def process_request(
        self,
        request: Request,
    ) -> Tuple[Request, Optional[Response]]:
        """Process request through all middleware.

        A middleware that raises stops the chain with a 500 response;
        the request never reaches the router.

        Returns:
            Tuple of (modified_request, short_circuit_response)
        """
        current_request = request

        for mw in self._middleware:
            try:
                result = mw.pre_request(current_request)
            except Exception:
                logger.exception(
                    f"Middleware pre_request error in {type(mw).__name__}"
                )
                return current_request, Response.error(
                    500,
                    "Internal Server Error",
                    requestId=current_request.request_id,
                )

            if result is None:
                continue

            if isinstance(result, Response):
                return current_request, result

            current_request = result

        return current_request, None

    def process_response(
        self,
        request: Request,
        response: Response,
    ) -> Response:
        """Process response through all middleware (reverse order)."""
        current_response = response

        for mw in reversed(self._middleware):
            try:
                result = mw.post_request(request, current_response)
                if result is not None:
                    current_response = result
            except Exception as e:
                logger.error(f"Middleware post_request error: {e}")

        return current_response

    def __len__(self) -> int:
        return len(self._middleware)


__all__ = [
    "Middleware",
    "MiddlewareChain",
]
