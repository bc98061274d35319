"""Gateway module - Request entry point."""

from hookrouter_core.gateway.server import Gateway, request_from_http

__all__ = [
    "Gateway",
    "request_from_http",
]
