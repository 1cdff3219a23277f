"""
Cache and multicall settings for the batched fetchers.
"""

from dataclasses import dataclass

from .base import BaseConfig, ConfigError


@dataclass
class BatcherConfig(BaseConfig):
    """Refresh intervals and multicall limits."""

    # Wallet data changes with every user transaction, pool data far less often
    WALLET_TTL_SECONDS: float = BaseConfig.get_env_float("WALLET_TTL_SECONDS", 2.0)
    POOL_TTL_SECONDS: float = BaseConfig.get_env_float("POOL_TTL_SECONDS", 60.0)
    LP_TTL_SECONDS: float = BaseConfig.get_env_float("LP_TTL_SECONDS", 60.0)

    # Calls per aggregate3 request
    MULTICALL_BATCH_SIZE: int = BaseConfig.get_env_int("MULTICALL_BATCH_SIZE", 500)
    MULTICALL_TIMEOUT_SECONDS: float = BaseConfig.get_env_float(
        "MULTICALL_TIMEOUT_SECONDS", 30.0
    )

    def _validate_config(self):
        """Validate configuration values."""
        super()._validate_config()
        for name in ("WALLET_TTL_SECONDS", "POOL_TTL_SECONDS", "LP_TTL_SECONDS",
                     "MULTICALL_TIMEOUT_SECONDS"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive, got: {getattr(self, name)}")
        if self.MULTICALL_BATCH_SIZE < 1:
            raise ConfigError(
                f"MULTICALL_BATCH_SIZE must be at least 1, got: {self.MULTICALL_BATCH_SIZE}"
            )
