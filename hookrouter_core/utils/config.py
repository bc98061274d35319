"""Configuration utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import dataclasses
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from hookrouter_core.security.webhook import WebhookAuthConfig

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="Config")

ENV_PREFIX = "HOOKROUTER_"


@dataclass(frozen=True)
class Config:
    """Application configuration. Loaded once per process."""

    # Application
    app_version: str = "1.0.0"
    environment: str = "development"

    # Server (local development)
    host: str = "127.0.0.1"
    port: int = 3000

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"
    access_log: bool = True

    # CORS
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    # Outbound webhooks (simulated)
    enable_webhooks: bool = False
    slack_webhook_url: str = ""
    discord_webhook_url: str = ""
    teams_webhook_url: str = ""
    generic_webhook_url: str = ""

    # Inbound webhook secrets
    github_webhook_secret: str = ""
    aws_webhook_secret: str = ""
    webhook_path_secret: str = ""

    @classmethod
    def from_dict(cls: Type[T], data: Mapping[str, Any]) -> T:
        """Create config from dictionary."""
        # Filter to only valid fields
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        return cls(**filtered)

    @classmethod
    def from_json(cls: Type[T], path: str) -> T:
        """Load config from JSON file."""
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_yaml(cls: Type[T], path: str) -> T:
        """Load config from YAML file."""
        try:
            import yaml
        except ImportError:
            raise ImportError("PyYAML required for YAML config") from None

        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_env(
        cls: Type[T],
        prefix: str = ENV_PREFIX,
        environ: Optional[Mapping[str, str]] = None,
    ) -> T:
        """Load config from environment variables.

        Values are converted by the declared field type, so secrets
        stay strings even when they look numeric.
        """
        return cls.from_dict(cls.env_overrides(prefix, environ))

    @classmethod
    def env_overrides(
        cls,
        prefix: str = ENV_PREFIX,
        environ: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        """Typed values for every field set in the environment."""
        environ = os.environ if environ is None else environ
        defaults = cls()
        data: Dict[str, Any] = {}

        for f in dataclasses.fields(cls):
            key = prefix + f.name.upper()
            if key not in environ:
                continue
            data[f.name] = _convert(environ[key], getattr(defaults, f.name), key)

        return data

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return dataclasses.asdict(self)

    def merge(self, overrides: Mapping[str, Any]) -> "Config":
        """Copy with the given fields replaced."""
        data = self.to_dict()
        data.update(overrides)
        return type(self).from_dict(data)

    def webhook_auth(self) -> WebhookAuthConfig:
        """Secrets for the webhook authenticator (empty means unset)."""
        return WebhookAuthConfig(
            github_secret=self.github_webhook_secret or None,
            aws_secret=self.aws_webhook_secret or None,
            path_secret=self.webhook_path_secret or None,
        )

    def webhook_urls(self) -> Dict[str, str]:
        """Outbound webhook URLs keyed by type."""
        return {
            "slack": self.slack_webhook_url,
            "discord": self.discord_webhook_url,
            "teams": self.teams_webhook_url,
            "generic": self.generic_webhook_url,
        }


def _convert(raw: str, default: Any, key: str) -> Any:
    """Convert an environment string to the type of ``default``."""
    if isinstance(default, bool):
        return raw.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(default, int):
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"{key} must be an integer, got {raw!r}") from None
    if isinstance(default, list):
        return [item.strip() for item in raw.split(",") if item.strip()]
    return raw


def load_config(
    path: Optional[str] = None,
    env_prefix: str = ENV_PREFIX,
    environ: Optional[Mapping[str, str]] = None,
) -> Config:
    """Load configuration from multiple sources.

    Priority (highest to lowest):
    1. Environment variables
    2. Config file (if provided)
    3. Defaults
    """
    config = Config()

    # Load from file if provided
    if path:
        path_obj = Path(path)
        if path_obj.exists():
            if path.endswith(".json"):
                config = Config.from_json(path)
            elif path.endswith((".yaml", ".yml")):
                config = Config.from_yaml(path)
            else:
                logger.warning(f"Unknown config format: {path}")
        else:
            logger.warning(f"Config file not found: {path}")

    # Override with environment variables
    return config.merge(Config.env_overrides(env_prefix, environ))


__all__ = [
    "Config",
    "ENV_PREFIX",
    "load_config",
]
