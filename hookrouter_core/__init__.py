"""hookrouter - HTTP routing with webhook authentication.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

hookrouter provides a small request router and an inbound webhook
authenticator:
- Exact and parameterized routes (/api/users/:id)
- 404 / 405 disambiguation, handler faults mapped to 500
- GitHub HMAC-SHA256 signatures (x-hub-signature-256)
- AWS SNS delivery metadata checks
- Shared secrets embedded in the webhook path

Architecture Overview:
┌─────────────────────────────────────────────────────────────────────────────┐
│                              hookrouter                                      │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                              │
│  ┌───────────────────────────────────────────────────────────────────────┐  │
│  │                        Request Pipeline                                │  │
│  │  Event ──▶ Gateway ──▶ Middleware ──▶ Router ──▶ Handler ──▶ Result   │  │
│  └───────────────────────────────────────────────────────────────────────┘  │
│                                                                              │
│  ┌─────────────────┐  ┌─────────────────┐  ┌─────────────────────────────┐ │
│  │    Gateway      │  │   Middleware    │  │        Routing              │ │
│  │                 │  │                 │  │                             │ │
│  │ - Lambda events │  │ - Logging       │  │ - Tagged path segments      │ │
│  │ - Dev server    │  │ - CORS          │  │ - Exact before parameterized│ │
│  │ - Request       │  │ - Webhook auth  │  │ - First registered wins     │ │
│  │ - Response      │  │                 │  │ - 404 / 405 / 500 outcomes  │ │
│  └─────────────────┘  └─────────────────┘  └─────────────────────────────┘ │
│                                                                              │
│  ┌──────────────────────────────────────────────────────────────────────┐  │
│  │                        Webhook Authenticator                          │  │
│  │  GitHub HMAC ──▶ SNS metadata ──▶ Path secret ──▶ Pass-through/deny  │  │
│  └──────────────────────────────────────────────────────────────────────┘  │
│                                                                              │
└─────────────────────────────────────────────────────────────────────────────┘

Usage:
    from hookrouter_core import Gateway, Router, WebhookAuthenticator

    router = Router()
    router.get("/api/users/:id", get_user)
    router.freeze()

    gateway = Gateway(router)
    gateway.use(WebhookAuthMiddleware(WebhookAuthenticator(config.webhook_auth())))

    result = gateway.handle_event(event)
"""

__version__ = "0.1.0"
__author__ = "BlackRoad OS, Inc."

# HTTP
from hookrouter_core.http.request import DEFAULT_HEADERS, Request, Response

# Gateway
from hookrouter_core.gateway.server import Gateway

# Routing
from hookrouter_core.routing.router import HttpMethod, Route, RouteTable, Router
from hookrouter_core.routing.matcher import PathPattern, match
from hookrouter_core.routing.errors import (
    HandlerFault,
    MethodNotAllowed,
    RouteNotFound,
    RoutingError,
)

# Middleware
from hookrouter_core.middleware.base import Middleware, MiddlewareChain
from hookrouter_core.middleware.logging import LoggingMiddleware
from hookrouter_core.middleware.cors import CORSMiddleware
from hookrouter_core.middleware.webhook import WebhookAuthMiddleware

# Security
from hookrouter_core.security.webhook import (
    AuthVerdict,
    WebhookAuthConfig,
    WebhookAuthenticator,
    WebhookService,
    authenticate,
)
from hookrouter_core.security.signatures import (
    sign_payload,
    verify_hmac_signature,
    verify_secret,
)

# Utils
from hookrouter_core.utils.config import Config, load_config

__all__ = [
    # Version
    "__version__",
    # HTTP
    "DEFAULT_HEADERS",
    "Request",
    "Response",
    # Gateway
    "Gateway",
    # Routing
    "HttpMethod",
    "Route",
    "RouteTable",
    "Router",
    "PathPattern",
    "match",
    "RoutingError",
    "RouteNotFound",
    "MethodNotAllowed",
    "HandlerFault",
    # Middleware
    "Middleware",
    "MiddlewareChain",
    "LoggingMiddleware",
    "CORSMiddleware",
    "WebhookAuthMiddleware",
    # Security
    "AuthVerdict",
    "WebhookAuthConfig",
    "WebhookAuthenticator",
    "WebhookService",
    "authenticate",
    "sign_payload",
    "verify_hmac_signature",
    "verify_secret",
    # Utils
    "Config",
    "load_config",
]
