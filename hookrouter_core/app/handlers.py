"""Handlers - Sample endpoints served by the router.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import logging
import os
import platform
import sys
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from hookrouter_core.http.request import Request, Response
from hookrouter_core.utils.config import Config
from hookrouter_core.utils.helpers import mask_url, utc_timestamp

logger = logging.getLogger(__name__)

PROCESS_STARTED = time.monotonic()

GREETINGS = {
    "en": "Hello, {name}!",
    "ja": "こんにちは、{name}さん！",
    "es": "¡Hola, {name}!",
    "fr": "Bonjour, {name}!",
    "de": "Hallo, {name}!",
}

MOCK_USERS: Tuple[Dict[str, Any], ...] = (
    {"id": 1, "name": "Alice Johnson", "email": "alice@example.com", "role": "admin"},
    {"id": 2, "name": "Bob Smith", "email": "bob@example.com", "role": "user"},
    {"id": 3, "name": "Charlie Brown", "email": "charlie@example.com", "role": "user"},
    {"id": 4, "name": "Diana Prince", "email": "diana@example.com", "role": "moderator"},
    {"id": 5, "name": "Eve Wilson", "email": "eve@example.com", "role": "user"},
)

WEBHOOK_TYPES = ("slack", "discord", "teams", "generic")


class BodyError(ValueError):
    """Request body failed structural validation."""


def _parse_json_object(request: Request) -> Dict[str, Any]:
    try:
        data = request.json()
    except ValueError:
        raise BodyError("Invalid JSON in request body") from None
    if not isinstance(data, dict):
        raise BodyError("Invalid request body format")
    return data


def _optional_str(data: Dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise BodyError(f"Field '{key}' must be a string")
    return value


@dataclass(frozen=True)
class CreateUserBody:
    """Body of ``POST /api/users``."""

    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None

    @classmethod
    def parse(cls, request: Request) -> "CreateUserBody":
        data = _parse_json_object(request)
        return cls(
            name=_optional_str(data, "name"),
            email=_optional_str(data, "email"),
            role=_optional_str(data, "role"),
        )


@dataclass(frozen=True)
class SendWebhookBody:
    """Body of ``POST /api/webhook/send``."""

    message: Optional[str] = None
    type: Optional[str] = None

    @classmethod
    def parse(cls, request: Request) -> "SendWebhookBody":
        data = _parse_json_object(request)
        return cls(
            message=_optional_str(data, "message"),
            type=_optional_str(data, "type"),
        )


def home(request: Request, config: Config, endpoints: List[Dict[str, str]]) -> Response:
    """API overview."""
    return Response.json({
        "message": "Welcome to the hookrouter API",
        "version": config.app_version,
        "endpoints": endpoints,
        "timestamp": utc_timestamp(),
        "requestId": request.request_id,
    })


def hello(request: Request) -> Response:
    """Greeting in the requested language, English by default."""
    name = request.query.get("name") or "World"
    language = request.query.get("lang") or "en"
    template = GREETINGS.get(language, GREETINGS["en"])

    return Response.json({
        "message": template.format(name=name),
        "language": language,
        "name": name,
        "timestamp": utc_timestamp(),
        "requestId": request.request_id,
    })


def _max_rss_kb() -> Optional[int]:
    """Peak resident set size, or None where ``resource`` is unavailable."""
    try:
        import resource
    except ImportError:
        return None
    return resource.getrusage(resource.RUSAGE_SELF).ru_maxrss


def health(request: Request) -> Response:
    started = time.perf_counter()
    checks = {
        "timestamp": utc_timestamp(),
        "uptime": round(time.monotonic() - PROCESS_STARTED, 3),
        "maxRssKb": _max_rss_kb(),
        "pid": os.getpid(),
        "version": sys.version.split()[0],
        "platform": platform.system().lower(),
    }
    elapsed_ms = (time.perf_counter() - started) * 1000

    return Response.json({
        "status": "healthy",
        "responseTime": f"{elapsed_ms:.0f}ms",
        "checks": checks,
        "requestId": request.request_id,
    })


def _int_param(query: Dict[str, str], key: str, default: int) -> int:
    try:
        return int(query.get(key) or default)
    except ValueError:
        return default


def list_users(request: Request) -> Response:
    """Paginated users, optionally filtered by role."""
    limit = _int_param(request.query, "limit", 10)
    offset = _int_param(request.query, "offset", 0)
    role = request.query.get("role")

    users = [u for u in MOCK_USERS if not role or u["role"] == role]
    page = users[offset:offset + limit]

    return Response.json({
        "users": page,
        "pagination": {
            "total": len(users),
            "limit": limit,
            "offset": offset,
            "hasMore": offset + limit < len(users),
        },
        "timestamp": utc_timestamp(),
        "requestId": request.request_id,
    })


def get_user(request: Request) -> Response:
    user_id = request.path_params.get("id")
    if not user_id:
        return Response.error(400, "Bad Request", message="User ID is required")

    try:
        wanted = int(user_id)
    except ValueError:
        return Response.error(400, "Bad Request", message=f"Invalid user ID: {user_id}")

    for user in MOCK_USERS:
        if user["id"] == wanted:
            return Response.json({
                "user": user,
                "timestamp": utc_timestamp(),
                "requestId": request.request_id,
            })

    return Response.error(404, "Not Found", message=f"User with ID {user_id} not found")


def create_user(request: Request) -> Response:
    """Validate and echo a new user. Nothing is stored."""
    try:
        body = CreateUserBody.parse(request)
    except BodyError as e:
        return Response.error(400, "Bad Request", message=str(e))

    if not body.name or not body.email:
        return Response.error(400, "Bad Request", message="Name and email are required")

    user = {
        "id": max(u["id"] for u in MOCK_USERS) + 1,
        "name": body.name,
        "email": body.email,
        "role": body.role or "user",
    }

    return Response.json(
        {
            "message": "User created successfully",
            "user": user,
            "timestamp": utc_timestamp(),
            "requestId": request.request_id,
        },
        status=201,
    )


def send_webhook(request: Request, config: Config) -> Response:
    """Simulate sending an outbound webhook.

    The payload is built and logged, but nothing leaves the process.
    """
    if not config.enable_webhooks:
        return Response.error(
            400,
            "WebHook functionality is disabled",
            requestId=request.request_id,
        )

    try:
        body = SendWebhookBody.parse(request)
    except BodyError as e:
        return Response.error(400, str(e))

    if not body.message:
        return Response.error(400, "Message is required")

    webhook_type = body.type or "generic"
    urls = config.webhook_urls()
    # Unknown types fall back to the generic URL
    url = urls[webhook_type] if webhook_type in WEBHOOK_TYPES else urls["generic"]

    if not url:
        return Response.error(
            400,
            f"WebHook URL for type '{webhook_type}' is not configured",
            availableTypes=[key for key, value in urls.items() if value],
        )

    payload = {
        "text": body.message,
        "timestamp": utc_timestamp(),
        "source": "hookrouter",
        "environment": config.environment,
        "version": config.app_version,
    }

    logger.info(f"[WebHook] Sending to {webhook_type}: {mask_url(url)}")
    logger.debug(f"[WebHook] Payload: {json.dumps(payload)}")

    return Response.json({
        "result": {
            "status": "success",
            "message": "WebHook sent successfully",
            "type": webhook_type,
            "url": mask_url(url),
            "payload": payload,
        },
        "timestamp": utc_timestamp(),
        "requestId": request.request_id,
    })


def receive_webhook(request: Request) -> Response:
    """Acknowledge an authenticated inbound delivery."""
    verdict = request.context.get("webhook")
    service = verdict.service.value if verdict and verdict.service else None
    provider = request.path_params.get("provider") or (verdict.provider if verdict else None)

    logger.info(f"[WebHook] Received {request.path} service={service}")

    return Response.json({
        "received": True,
        "service": service,
        "provider": provider,
        "timestamp": utc_timestamp(),
        "requestId": request.request_id,
    })


__all__ = [
    "CreateUserBody",
    "SendWebhookBody",
    "home",
    "hello",
    "health",
    "list_users",
    "get_user",
    "create_user",
    "send_webhook",
    "receive_webhook",
]
