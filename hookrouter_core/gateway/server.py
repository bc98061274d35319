"""Gateway Server - Middleware pipeline in front of the router.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, List, Optional

from hookrouter_core.http.request import Request, Response
from hookrouter_core.middleware.base import Middleware, MiddlewareChain
from hookrouter_core.routing.router import Router
from hookrouter_core.utils.helpers import split_target, utc_timestamp

logger = logging.getLogger(__name__)


class Gateway:
    """Request entry point.

    Features:
    - Middleware pipeline (auth, CORS, logging)
    - Routing
    - API Gateway proxy events
    - Local development server

    Usage:
        gateway = Gateway(router)
        gateway.use(LoggingMiddleware())
        gateway.use(WebhookAuthMiddleware(authenticator))
        response = gateway.handle(request)
    """

    def __init__(self, router: Router, middleware: Optional[List[Middleware]] = None):
        self.router = router
        self._chain = MiddlewareChain(middleware)
        self._server: Optional[ThreadingHTTPServer] = None
        self._lock = threading.RLock()

    def use(self, middleware: Middleware) -> "Gateway":
        """Add middleware to the pipeline."""
        with self._lock:
            self._chain.add(middleware)
        return self

    def handle(self, request: Request) -> Response:
        """Run a request through middleware and routing. Never raises."""
        try:
            request, short_circuit = self._chain.process_request(request)
            if short_circuit is not None:
                response = short_circuit
            else:
                response = self.router.route(request)
            return self._chain.process_response(request, response)
        except Exception:
            logger.exception(f"[Gateway] Unexpected error for {request.method} {request.path}")
            return Response.json(
                {
                    "error": "Internal Server Error",
                    "message": "An unexpected error occurred",
                    "timestamp": utc_timestamp(),
                    "requestId": request.request_id,
                },
                status=500,
            )

    def handle_event(self, event: Dict[str, Any]) -> Dict[str, Any]:
        """Handle an API Gateway proxy event."""
        request = Request.from_event(event)
        logger.info(f"[Handler] {request.method} {request.path}")
        return self.handle(request).to_result()

    def run(
        self,
        host: str = "127.0.0.1",
        port: int = 3000,
    ) -> None:
        """Serve the gateway over HTTP for local development. Blocks."""
        server = ThreadingHTTPServer((host, port), _make_handler(self))
        with self._lock:
            self._server = server

        logger.info(f"Development server running on http://{host}:{port}")
        try:
            server.serve_forever()
        finally:
            server.server_close()

    def stop(self) -> None:
        """Stop the development server."""
        with self._lock:
            if self._server:
                self._server.shutdown()
                self._server = None


def request_from_http(
    method: str,
    target: str,
    headers: Dict[str, str],
    body: bytes,
) -> Request:
    """Build a Request from raw HTTP parts.

    Header names are lower-cased, matching what API Gateway delivers.
    """
    path, query = split_target(target)
    return Request(
        method=method,
        path=path,
        headers={key.lower(): value for key, value in headers.items()},
        query=query,
        body=body.decode("utf-8", errors="replace") if body else None,
    )


def content_length(value: Optional[str]) -> int:
    """Parse a Content-Length header. Negative values read nothing.

    Raises:
        ValueError: if the header is not an integer
    """
    if not value:
        return 0
    return max(0, int(value))


def _make_handler(gateway: Gateway) -> type:
    class _GatewayRequestHandler(BaseHTTPRequestHandler):
        def _dispatch(self) -> None:
            try:
                length = content_length(self.headers.get("Content-Length"))
            except ValueError:
                self._send(Response.error(400, "Bad Request", message="Invalid Content-Length"))
                return

            body = self.rfile.read(length) if length else b""

            request = request_from_http(
                self.command, self.path, dict(self.headers.items()), body
            )
            self._send(gateway.handle(request))

        def _send(self, response: Response) -> None:
            payload = response.body.encode("utf-8")
            self.send_response(response.status)
            for key, value in response.headers.items():
                self.send_header(key, value)
            self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            self.wfile.write(payload)

        do_GET = do_POST = do_PUT = do_DELETE = do_PATCH = do_OPTIONS = _dispatch

        def log_message(self, format: str, *args: Any) -> None:
            logger.debug("[DevServer] " + format % args)

    return _GatewayRequestHandler


__all__ = [
    "Gateway",
    "content_length",
    "request_from_http",
]
