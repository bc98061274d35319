"""Webhook Authentication - Inbound webhook verification.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, List, Mapping, Optional

from hookrouter_core.security.signatures import (
    verify_hmac_signature,
    verify_secret,
    verify_sns_metadata,
)
from hookrouter_core.utils.helpers import utc_now

logger = logging.getLogger(__name__)

GITHUB_SIGNATURE_HEADER = "x-hub-signature-256"

SNS_MESSAGE_TYPE_HEADER = "x-amz-sns-message-type"
SNS_MESSAGE_ID_HEADER = "x-amz-sns-message-id"
SNS_TIMESTAMP_HEADER = "x-amz-sns-timestamp"
SNS_SIGNATURE_VERSION_HEADER = "x-amz-sns-signature-version"
SNS_SIGNATURE_HEADER = "x-amz-sns-signature"
SNS_SIGNING_CERT_URL_HEADER = "x-amz-sns-signing-cert-url"

PATH_PROVIDERS = ("github", "aws")
PATH_SECRET_PATTERN = re.compile(r"/webhook/(github|aws)/([^/]+)$")

WEBHOOK_PREFIX = "/webhook/"
API_WEBHOOK_MARKER = "/api/webhook/"

NO_STRATEGY_ERROR = "No valid authentication method found for webhook"


class WebhookService(str, Enum):
    """Service a verified webhook came from."""

    GITHUB = "github"
    AWS_SNS = "aws-sns"
    PATH_SECRET = "path-secret"


@dataclass(frozen=True)
class WebhookAuthConfig:
    """Webhook secrets, loaded once per process.

    An empty or missing secret disables the strategy that needs it.
    """

    github_secret: Optional[str] = None
    aws_secret: Optional[str] = None
    path_secret: Optional[str] = None


@dataclass
class AuthVerdict:
    """Result of webhook authentication."""

    is_valid: bool
    service: Optional[WebhookService] = None
    provider: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_check(
        cls,
        is_valid: bool,
        service: WebhookService,
        error: str,
        provider: Optional[str] = None,
    ) -> "AuthVerdict":
        return cls(
            is_valid=is_valid,
            service=service,
            provider=provider,
            error=None if is_valid else error,
        )


@dataclass
class WebhookRequest:
    """The parts of a request the strategies look at."""

    method: str
    path: str
    headers: Mapping[str, Optional[str]] = field(default_factory=dict)
    body: str = ""

    def header(self, name: str) -> str:
        return self.headers.get(name) or ""


class WebhookStrategy(ABC):
    """One verification scheme.

    ``applies`` decides whether the strategy owns the request; once it
    does, its ``verify`` verdict is final.
    """

    service: WebhookService

    @abstractmethod
    def applies(self, request: WebhookRequest, config: WebhookAuthConfig) -> bool:
        pass

    @abstractmethod
    def verify(self, request: WebhookRequest, config: WebhookAuthConfig) -> AuthVerdict:
        pass


class GitHubSignatureStrategy(WebhookStrategy):
    """HMAC-SHA256 body signature in ``x-hub-signature-256``."""

    service = WebhookService.GITHUB

    def applies(self, request: WebhookRequest, config: WebhookAuthConfig) -> bool:
        return bool(request.header(GITHUB_SIGNATURE_HEADER)) and bool(config.github_secret)

    def verify(self, request: WebhookRequest, config: WebhookAuthConfig) -> AuthVerdict:
        is_valid = verify_hmac_signature(
            request.body,
            request.header(GITHUB_SIGNATURE_HEADER),
            config.github_secret or "",
        )
        return AuthVerdict.from_check(is_valid, self.service, "Invalid GitHub signature")


class SnsMetadataStrategy(WebhookStrategy):
    """AWS SNS delivery headers.

    Only the metadata is validated; see ``verify_sns_metadata``.
    """

    service = WebhookService.AWS_SNS

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._clock = clock

    def applies(self, request: WebhookRequest, config: WebhookAuthConfig) -> bool:
        return bool(request.header(SNS_MESSAGE_TYPE_HEADER)) and bool(
            request.header(SNS_MESSAGE_ID_HEADER)
        )

    def verify(self, request: WebhookRequest, config: WebhookAuthConfig) -> AuthVerdict:
        is_valid = verify_sns_metadata(
            message_type=request.header(SNS_MESSAGE_TYPE_HEADER),
            timestamp=request.header(SNS_TIMESTAMP_HEADER),
            signature_version=request.header(SNS_SIGNATURE_VERSION_HEADER),
            signature=request.header(SNS_SIGNATURE_HEADER),
            signing_cert_url=request.header(SNS_SIGNING_CERT_URL_HEADER),
            now=self._clock(),
        )
        return AuthVerdict.from_check(is_valid, self.service, "Invalid AWS SNS signature")


class PathSecretStrategy(WebhookStrategy):
    """Shared secret as the last path segment: ``/webhook/<provider>/<secret>``."""

    service = WebhookService.PATH_SECRET

    def applies(self, request: WebhookRequest, config: WebhookAuthConfig) -> bool:
        on_provider_path = any(
            f"/webhook/{provider}/" in request.path for provider in PATH_PROVIDERS
        )
        return on_provider_path and bool(config.path_secret)

    def verify(self, request: WebhookRequest, config: WebhookAuthConfig) -> AuthVerdict:
        provider = "github" if "/github/" in request.path else "aws"

        matched = PATH_SECRET_PATTERN.search(request.path)
        is_valid = matched is not None and verify_secret(
            matched.group(2), config.path_secret or ""
        )
        return AuthVerdict.from_check(
            is_valid,
            self.service,
            "Invalid webhook path secret",
            provider=provider,
        )


def is_webhook_path(path: str) -> bool:
    """Paths under the webhook prefixes require authentication."""
    return path.startswith(WEBHOOK_PREFIX) or API_WEBHOOK_MARKER in path


def default_strategies() -> List[WebhookStrategy]:
    """Strategies in precedence order."""
    return [
        GitHubSignatureStrategy(),
        SnsMetadataStrategy(),
        PathSecretStrategy(),
    ]


class WebhookAuthenticator:
    """Webhook authenticator.

    Strategies are tried in order; the first whose precondition holds
    decides the verdict, even when its verification fails. Requests
    that no strategy claims are valid unless they target a webhook
    path.

    Usage:
        auth = WebhookAuthenticator(WebhookAuthConfig(github_secret="s3cret"))
        verdict = auth.authenticate("POST", "/webhook/github", headers, body)
        if not verdict.is_valid:
            ...  # respond 401
    """

    def __init__(
        self,
        config: Optional[WebhookAuthConfig] = None,
        strategies: Optional[List[WebhookStrategy]] = None,
    ):
        self.config = config or WebhookAuthConfig()
        self._strategies = strategies if strategies is not None else default_strategies()

    def authenticate(
        self,
        method: str,
        path: str,
        headers: Optional[Mapping[str, Optional[str]]] = None,
        body: Optional[str] = None,
    ) -> AuthVerdict:
        """Authenticate a request. Never raises."""
        request = WebhookRequest(
            method=method,
            path=path,
            headers=headers or {},
            body=body or "",
        )

        for strategy in self._strategies:
            try:
                if not strategy.applies(request, self.config):
                    continue
                verdict = strategy.verify(request, self.config)
            except Exception:
                logger.exception(f"Webhook strategy {type(strategy).__name__} failed")
                return AuthVerdict(
                    is_valid=False,
                    service=strategy.service,
                    error="Webhook verification error",
                )

            if not verdict.is_valid:
                logger.warning(
                    f"Webhook rejected: {method} {path} "
                    f"service={verdict.service.value if verdict.service else None} "
                    f"error={verdict.error}"
                )
            return verdict

        if not is_webhook_path(path):
            return AuthVerdict(is_valid=True)

        logger.warning(f"Webhook rejected: {method} {path} error={NO_STRATEGY_ERROR}")
        return AuthVerdict(is_valid=False, error=NO_STRATEGY_ERROR)


def authenticate(
    method: str,
    path: str,
    headers: Optional[Mapping[str, Optional[str]]],
    body: Optional[str],
    config: WebhookAuthConfig,
) -> AuthVerdict:
    """Authenticate a single request with the default strategies."""
    return WebhookAuthenticator(config).authenticate(method, path, headers, body)


__all__ = [
    "GITHUB_SIGNATURE_HEADER",
    "WebhookService",
    "WebhookAuthConfig",
    "AuthVerdict",
    "WebhookRequest",
    "WebhookStrategy",
    "GitHubSignatureStrategy",
    "SnsMetadataStrategy",
    "PathSecretStrategy",
    "WebhookAuthenticator",
    "authenticate",
    "default_strategies",
    "is_webhook_path",
]
