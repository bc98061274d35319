"""Lambda entry point - API Gateway proxy integration.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from hookrouter_core.app.routes import create_gateway
from hookrouter_core.gateway.server import Gateway
from hookrouter_core.middleware.logging import configure_logging
from hookrouter_core.utils.config import load_config

logger = logging.getLogger(__name__)

_gateway: Optional[Gateway] = None


def get_gateway() -> Gateway:
    """Gateway built once per process (cold start)."""
    global _gateway
    if _gateway is None:
        config = load_config(os.environ.get("HOOKROUTER_CONFIG_FILE"))
        configure_logging(config.log_level, config.log_format)
        _gateway = create_gateway(config)
    return _gateway


def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """AWS Lambda handler."""
    return get_gateway().handle_event(event)


__all__ = [
    "get_gateway",
    "handler",
]
