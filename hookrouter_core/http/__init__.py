"""HTTP module - Request and response objects."""

from hookrouter_core.http.request import DEFAULT_HEADERS, Request, Response

__all__ = [
    "DEFAULT_HEADERS",
    "Request",
    "Response",
]
