"""Security module - Webhook authentication."""

from hookrouter_core.security.signatures import (
    sign_payload,
    verify_hmac_signature,
    verify_secret,
    verify_sns_metadata,
)
from hookrouter_core.security.webhook import (
    AuthVerdict,
    WebhookAuthConfig,
    WebhookAuthenticator,
    WebhookService,
    authenticate,
)

__all__ = [
    "AuthVerdict",
    "WebhookAuthConfig",
    "WebhookAuthenticator",
    "WebhookService",
    "authenticate",
    "sign_payload",
    "verify_hmac_signature",
    "verify_secret",
    "verify_sns_metadata",
]
