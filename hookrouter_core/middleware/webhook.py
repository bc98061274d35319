"""Webhook Auth Middleware - Reject unauthenticated webhook deliveries.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

from hookrouter_core.http.request import Request, Response
from hookrouter_core.middleware.base import Middleware
from hookrouter_core.security.webhook import WebhookAuthenticator

logger = logging.getLogger(__name__)


class WebhookAuthMiddleware(Middleware):
    """Runs the webhook authenticator before routing.

    An invalid verdict short-circuits with 401. A valid verdict that
    names a service is stored in ``request.context["webhook"]``.
    """

    def __init__(self, authenticator: WebhookAuthenticator):
        self.authenticator = authenticator

    def pre_request(self, request: Request) -> Optional[Union[Request, Response]]:
        try:
            verdict = self.authenticator.authenticate(
                request.method,
                request.path,
                request.headers,
                request.body,
            )
        except Exception:
            logger.exception(f"[WebHook] Authentication failed for {request.method} {request.path}")
            return Response.error(401, "Unauthorized", message="Webhook verification error")

        if not verdict.is_valid:
            return Response.error(401, "Unauthorized", message=verdict.error)

        if verdict.service is not None:
            request.context["webhook"] = verdict
        return request

    def post_request(
        self,
        request: Request,
        response: Response,
    ) -> Optional[Response]:
        return None


__all__ = [
    "WebhookAuthMiddleware",
]
