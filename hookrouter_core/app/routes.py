"""Routes - Route table for the sample application.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from functools import partial
from typing import Optional

from hookrouter_core.app import handlers
from hookrouter_core.gateway.server import Gateway
from hookrouter_core.middleware.cors import CORSConfig, CORSMiddleware
from hookrouter_core.middleware.logging import LoggingConfig, LoggingMiddleware
from hookrouter_core.middleware.webhook import WebhookAuthMiddleware
from hookrouter_core.routing.router import Router
from hookrouter_core.security.webhook import WebhookAuthenticator
from hookrouter_core.utils.config import Config

ENDPOINT_DESCRIPTIONS = {
    ("GET", "/"): "API overview",
    ("GET", "/hello"): "Hello world message",
    ("GET", "/health"): "Health check",
    ("GET", "/api/users"): "Get all users",
    ("GET", "/api/users/:id"): "Get user by ID",
    ("POST", "/api/users"): "Create new user",
    ("POST", "/api/webhook/send"): "Send a (simulated) outbound webhook",
    ("POST", "/webhook/:provider"): "Receive a signed webhook",
    ("POST", "/webhook/:provider/:secret"): "Receive a path-secret webhook",
}


def setup_routes(config: Optional[Config] = None) -> Router:
    """Build and freeze the application's router."""
    config = config or Config()
    router = Router()
    endpoints = []

    router.get("/", partial(handlers.home, config=config, endpoints=endpoints))
    router.get("/hello", handlers.hello)
    router.get("/health", handlers.health)

    router.get("/api/users", handlers.list_users)
    router.get("/api/users/:id", handlers.get_user)
    router.post("/api/users", handlers.create_user)

    router.post("/api/webhook/send", partial(handlers.send_webhook, config=config))
    router.post("/webhook/:provider", handlers.receive_webhook)
    router.post("/webhook/:provider/:secret", handlers.receive_webhook)

    router.freeze()

    endpoints.extend(
        {
            "method": method,
            "path": path,
            "description": ENDPOINT_DESCRIPTIONS.get((method, path), ""),
        }
        for method, path in router.get_routes()
    )
    return router


def create_gateway(config: Optional[Config] = None) -> Gateway:
    """Router plus the standard middleware stack."""
    config = config or Config()
    gateway = Gateway(setup_routes(config))

    if config.access_log:
        gateway.use(LoggingMiddleware(LoggingConfig(skip_paths=["/health"])))
    gateway.use(CORSMiddleware(CORSConfig(allow_origins=list(config.cors_origins))))
    gateway.use(WebhookAuthMiddleware(WebhookAuthenticator(config.webhook_auth())))

    return gateway


__all__ = [
    "setup_routes",
    "create_gateway",
]
