"""
Configuration management for vaultwatch.

Use get_config() to access all configuration settings.

Example:
    from vaultwatch.config import get_config

    config = get_config()

    # Access chain settings
    polygon_rpc = config.chains.get_rpc_url("polygon")

    # Access cache settings
    wallet_ttl = config.batchers.WALLET_TTL_SECONDS
"""

from .base import BaseConfig, ConfigError
from .batchers import BatcherConfig
from .chains import ChainConfig
from .manager import ConfigManager, get_config, reload_config

__all__ = [
    "BaseConfig",
    "ConfigError",
    "BatcherConfig",
    "ChainConfig",
    "ConfigManager",
    "get_config",
    "reload_config",
]
