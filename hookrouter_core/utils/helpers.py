"""Helper utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Optional, Tuple
from urllib.parse import parse_qsl, urlsplit


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    now = now or utc_now()
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def parse_timestamp(value: str) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp.

    A trailing ``Z`` is accepted and naive values are taken as UTC.
    Returns None when the value cannot be parsed.
    """
    if not value:
        return None

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def mask_url(url: str, visible: int = 20) -> str:
    """Keep the first characters of a URL and hide the rest."""
    return url[:visible] + "***"


def split_target(target: str) -> Tuple[str, Dict[str, str]]:
    """Split a raw request target into (path, single-valued query)."""
    parsed = urlsplit(target)
    query: Dict[str, str] = {}
    for key, value in parse_qsl(parsed.query, keep_blank_values=True):
        # First value wins, like API Gateway's single-value map
        query.setdefault(key, value)
    return parsed.path or "/", query


__all__ = [
    "utc_now",
    "utc_timestamp",
    "parse_timestamp",
    "mask_url",
    "split_target",
]
