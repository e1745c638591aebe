"""
Configuration loader.

Reads config.yaml (or an equivalent config.json), validates it
against the packaged JSON Schema and returns a frozen GridConfig.
"""

from config.loader import (
    DEFAULT_PRICE_FEED_URL,
    ConfigError,
    GridConfig,
    load_config,
)

__all__ = [
    "ConfigError",
    "DEFAULT_PRICE_FEED_URL",
    "GridConfig",
    "load_config",
]
