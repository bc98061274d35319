"""Utils module - Utility functions."""

from hookrouter_core.utils.helpers import (
    mask_url,
    parse_timestamp,
    utc_timestamp,
)
from hookrouter_core.utils.config import (
    Config,
    load_config,
)

__all__ = [
    "Config",
    "load_config",
    "mask_url",
    "parse_timestamp",
    "utc_timestamp",
]
