"""Signature verifiers - HMAC, shared-secret and SNS metadata checks.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import hashlib
import hmac
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from hookrouter_core.utils.helpers import parse_timestamp, utc_now

SIGNATURE_PREFIX = "sha256="

SNS_SIGNATURE_VERSION = "1"
SNS_CERT_URL_PREFIX = "https://sns."
SNS_CERT_URL_DOMAIN = ".amazonaws.com/"
SNS_MESSAGE_TYPES = frozenset(
    {"Notification", "SubscriptionConfirmation", "UnsubscribeConfirmation"}
)
SNS_MAX_CLOCK_SKEW = timedelta(milliseconds=3_600_000)


def _to_bytes(value: Union[str, bytes]) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode("utf-8")


def sign_payload(payload: Union[str, bytes], secret: str) -> str:
    """Compute the ``sha256=<hex>`` signature of a payload."""
    digest = hmac.new(_to_bytes(secret), _to_bytes(payload), hashlib.sha256)
    return SIGNATURE_PREFIX + digest.hexdigest()


def constant_time_equals(provided: str, expected: str) -> bool:
    """Compare two strings without leaking where they differ.

    Inputs of different length are unequal without comparing.
    """
    provided_bytes = _to_bytes(provided)
    expected_bytes = _to_bytes(expected)
    if len(provided_bytes) != len(expected_bytes):
        return False
    return hmac.compare_digest(provided_bytes, expected_bytes)


def verify_hmac_signature(
    payload: Union[str, bytes],
    signature: Optional[str],
    secret: str,
) -> bool:
    """Verify an ``X-Hub-Signature-256`` style signature.

    Args:
        payload: Raw request body
        signature: Header value, e.g. "sha256=ab12..."
        secret: Shared webhook secret

    Returns:
        True only if the signature carries the ``sha256=`` prefix and its
        digest equals HMAC-SHA256(secret, payload).
    """
    if not signature or not signature.startswith(SIGNATURE_PREFIX):
        return False

    expected = sign_payload(payload, secret)
    return constant_time_equals(signature, expected)


def verify_secret(provided: Optional[str], expected: str) -> bool:
    """Constant-time check of a shared secret."""
    if provided is None:
        return False
    return constant_time_equals(provided, expected)


def verify_sns_metadata(
    message_type: str,
    timestamp: str,
    signature_version: str,
    signature: str,
    signing_cert_url: str,
    now: Optional[datetime] = None,
) -> bool:
    """Structural validation of an SNS delivery.

    Checks the signature version, signing certificate URL, message type
    and timestamp freshness. The signature itself is not verified
    against the signing certificate, so a forged request with plausible
    metadata passes.
    """
    if signature_version != SNS_SIGNATURE_VERSION:
        return False

    if not signing_cert_url.startswith(SNS_CERT_URL_PREFIX):
        return False
    if SNS_CERT_URL_DOMAIN not in signing_cert_url:
        return False

    if message_type not in SNS_MESSAGE_TYPES:
        return False

    sent_at = parse_timestamp(timestamp)
    if sent_at is None:
        return False

    now = now or utc_now()
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return abs(now - sent_at) <= SNS_MAX_CLOCK_SKEW


__all__ = [
    "SIGNATURE_PREFIX",
    "SNS_MESSAGE_TYPES",
    "SNS_MAX_CLOCK_SKEW",
    "sign_payload",
    "constant_time_equals",
    "verify_hmac_signature",
    "verify_secret",
    "verify_sns_metadata",
]
