"""Logging Middleware - Request/response logging.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

from hookrouter_core.http.request import Request, Response
from hookrouter_core.middleware.base import Middleware

logger = logging.getLogger(__name__)


class JSONFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def configure_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install a root handler with a plain or JSON formatter."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level.upper())


@dataclass
class LoggingConfig:
    """Logging middleware configuration."""

    log_query: bool = True
    skip_paths: List[str] = field(default_factory=list)


class LoggingMiddleware(Middleware):
    """Logging middleware for requests and responses."""

    def __init__(self, config: Optional[LoggingConfig] = None):
        self.config = config or LoggingConfig()

    def pre_request(self, request: Request) -> Optional[Request]:
        """Log incoming request."""
        if request.path in self.config.skip_paths:
            return None

        request_id = request.request_id[:8]
        request.context["_start_time"] = time.time()

        log_parts = [f"[{request_id}] --> {request.method} {request.path}"]

        if self.config.log_query and request.query:
            log_parts.append(f"query={request.query}")

        logger.info(" ".join(log_parts))
        return request

    def post_request(
        self,
        request: Request,
        response: Response,
    ) -> Optional[Response]:
        """Log outgoing response."""
        start_time = request.context.get("_start_time")
        if start_time is None:
            return None

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            f"[{request.request_id[:8]}] <-- {response.status} ({duration_ms:.2f}ms)"
        )

        return None


__all__ = [
    "JSONFormatter",
    "LoggingMiddleware",
    "LoggingConfig",
    "configure_logging",
]
