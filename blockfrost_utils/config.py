"""
Configuration management for blockfrost-utils

Defaults can be overridden once at startup, either through environment
variables (BLOCKFROST_WEBHOOK_TOLERANCE, BLOCKFROST_DEBUG) or set_config().
Explicit arguments passed to the helpers always win over global config.
"""

import os
import threading
from dataclasses import dataclass, field
from typing import Optional

from .types import DEFAULT_TIMESTAMP_TOLERANCE_SECONDS


def _tolerance_from_env() -> int:
    raw = os.environ.get("BLOCKFROST_WEBHOOK_TOLERANCE", "")
    if not raw:
        return DEFAULT_TIMESTAMP_TOLERANCE_SECONDS
    try:
        return int(raw)
    except ValueError:
        raise ValueError(
            f"BLOCKFROST_WEBHOOK_TOLERANCE must be an integer number of seconds, got {raw!r}"
        )


@dataclass
class BlockfrostUtilsConfig:
    """
    Configuration for blockfrost-utils.

    Attributes:
        timestamp_tolerance_seconds: Maximum accepted age of a webhook signature
        debug: Promote signature rejection diagnostics from DEBUG to INFO
    """
    timestamp_tolerance_seconds: int = field(default_factory=_tolerance_from_env)
    debug: bool = field(default_factory=lambda: os.environ.get("BLOCKFROST_DEBUG", "").lower() == "true")

    def __post_init__(self):
        if self.timestamp_tolerance_seconds < 0:
            raise ValueError(
                f"timestamp_tolerance_seconds must be >= 0, got {self.timestamp_tolerance_seconds}"
            )


_config: Optional[BlockfrostUtilsConfig] = None
_config_lock = threading.Lock()


def get_config() -> BlockfrostUtilsConfig:
    """
    Get the current configuration.

    Returns:
        BlockfrostUtilsConfig instance (created from env vars if not set)
    """
    global _config
    with _config_lock:
        if _config is None:
            _config = BlockfrostUtilsConfig()
        return _config


def set_config(
    timestamp_tolerance_seconds: Optional[int] = None,
    debug: Optional[bool] = None,
) -> BlockfrostUtilsConfig:
    """
    Set the global configuration. Omitted values keep their current setting.

    Example:
        ```python
        from blockfrost_utils import set_config

        set_config(timestamp_tolerance_seconds=300, debug=True)
        ```
    """
    global _config
    with _config_lock:
        current = _config if _config is not None else BlockfrostUtilsConfig()
        _config = BlockfrostUtilsConfig(
            timestamp_tolerance_seconds=(
                timestamp_tolerance_seconds
                if timestamp_tolerance_seconds is not None
                else current.timestamp_tolerance_seconds
            ),
            debug=debug if debug is not None else current.debug,
        )
        return _config


def clear_config() -> None:
    """Reset the global configuration (mainly for tests)."""
    global _config
    with _config_lock:
        _config = None


def is_debug_enabled() -> bool:
    return get_config().debug
