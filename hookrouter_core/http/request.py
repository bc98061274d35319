"""Request/Response - HTTP request and response objects.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from hookrouter_core.utils.helpers import utc_timestamp

DEFAULT_HEADERS: Dict[str, str] = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, PATCH, OPTIONS",
}


@dataclass
class Request:
    """HTTP Request object.

    Header keys are kept exactly as given. Webhook headers are looked up
    by their lower-cased names, which is how API Gateway delivers them.
    """

    method: str
    path: str
    headers: Dict[str, Optional[str]] = field(default_factory=dict)
    query: Dict[str, str] = field(default_factory=dict)
    path_params: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None
    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    # Per-request scratch space for middleware
    context: Dict[str, Any] = field(default_factory=dict)

    def header(self, name: str, default: str = "") -> str:
        """Get header value (exact key)."""
        value = self.headers.get(name)
        return value if value is not None else default

    def json(self) -> Any:
        """Parse body as JSON (empty body parses as an empty object)."""
        return json.loads(self.body or "{}")

    def text(self) -> str:
        """Get body as text."""
        return self.body or ""

    @classmethod
    def from_event(cls, event: Dict[str, Any]) -> "Request":
        """Build a request from an API Gateway proxy event."""
        request_context = event.get("requestContext") or {}
        kwargs: Dict[str, Any] = {}
        if request_context.get("requestId"):
            kwargs["request_id"] = request_context["requestId"]

        return cls(
            method=event.get("httpMethod") or "GET",
            path=event.get("path") or "/",
            headers=dict(event.get("headers") or {}),
            query=dict(event.get("queryStringParameters") or {}),
            path_params=dict(event.get("pathParameters") or {}),
            body=event.get("body"),
            **kwargs,
        )


@dataclass
class Response:
    """HTTP Response object."""

    status: int = 200
    body: str = ""
    headers: Dict[str, str] = field(default_factory=dict)

    STATUS_MESSAGES = {
        200: "OK",
        201: "Created",
        204: "No Content",
        400: "Bad Request",
        401: "Unauthorized",
        403: "Forbidden",
        404: "Not Found",
        405: "Method Not Allowed",
        500: "Internal Server Error",
    }

    @property
    def status_message(self) -> str:
        """Get status message."""
        return self.STATUS_MESSAGES.get(self.status, "Unknown")

    @property
    def is_success(self) -> bool:
        """Check if response is successful (2xx)."""
        return 200 <= self.status < 300

    @property
    def is_error(self) -> bool:
        """Check if response is error (4xx or 5xx)."""
        return self.status >= 400

    def set_header(self, name: str, value: str) -> "Response":
        """Set header value."""
        self.headers[name] = value
        return self

    def json_body(self) -> Any:
        """Parse body as JSON."""
        return json.loads(self.body)

    def to_result(self) -> Dict[str, Any]:
        """Convert to an API Gateway proxy result."""
        return {
            "statusCode": self.status,
            "headers": dict(self.headers),
            "body": self.body,
        }

    @classmethod
    def json(
        cls,
        data: Any,
        status: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ) -> "Response":
        """Create JSON response with the default headers."""
        resp_headers = dict(DEFAULT_HEADERS)
        if headers:
            resp_headers.update(headers)
        return cls(status=status, body=json.dumps(data), headers=resp_headers)

    @classmethod
    def error(
        cls,
        status: int,
        error: Optional[str] = None,
        **extra: Any,
    ) -> "Response":
        """Create timestamped error response.

        Keyword arguments, ``message`` included, are added to the body
        next to ``error`` and ``timestamp``.
        """
        payload = {
            "error": error or cls.STATUS_MESSAGES.get(status, "Error"),
            "timestamp": utc_timestamp(),
        }
        payload.update(extra)
        return cls.json(payload, status=status)


__all__ = [
    "DEFAULT_HEADERS",
    "Request",
    "Response",
]
