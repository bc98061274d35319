"""Middleware module - Request/response middleware."""

from hookrouter_core.middleware.base import Middleware, MiddlewareChain
from hookrouter_core.middleware.logging import LoggingMiddleware, configure_logging
from hookrouter_core.middleware.cors import CORSMiddleware
from hookrouter_core.middleware.webhook import WebhookAuthMiddleware

__all__ = [
    "Middleware",
    "MiddlewareChain",
    "LoggingMiddleware",
    "CORSMiddleware",
    "WebhookAuthMiddleware",
    "configure_logging",
]
