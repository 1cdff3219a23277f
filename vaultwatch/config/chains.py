"""
Chain-specific configuration for vaultwatch.
"""

from dataclasses import dataclass
from typing import Dict

from .base import BaseConfig


@dataclass
class ChainConfig(BaseConfig):
    """Chain-specific configuration for the networks vaults are deployed on."""

    # Default chain settings
    DEFAULT_CHAIN: str = BaseConfig.get_env("DEFAULT_CHAIN", "polygon")

    # Chain-specific RPC URLs
    POLYGON_RPC_URL: str = BaseConfig.get_env(
        "POLYGON_RPC_URL", "https://polygon-rpc.com"
    )
    AVALANCHE_RPC_URL: str = BaseConfig.get_env(
        "AVALANCHE_RPC_URL", "https://api.avax.network/ext/bc/C/rpc"
    )
    BSC_RPC_URL: str = BaseConfig.get_env(
        "BSC_RPC_URL", "https://bsc-dataseed.binance.org"
    )

    # Chain IDs
    POLYGON_CHAIN_ID: int = 137
    AVALANCHE_CHAIN_ID: int = 43114
    BSC_CHAIN_ID: int = 56

    # Multicall3 is deployed at the same address on every supported chain
    MULTICALL3_ADDRESS: str = BaseConfig.get_env(
        "MULTICALL3_ADDRESS", "0xcA11bde05977b3631167028862bE2a173976CA11"
    )

    @property
    def supported_chains(self) -> Dict[str, Dict]:
        """Get configuration for all supported chains."""
        return {
            "polygon": {
                "chain_id": self.POLYGON_CHAIN_ID,
                "rpc_url": self.POLYGON_RPC_URL,
                "multicall_address": self.MULTICALL3_ADDRESS,
                "native_token": "MATIC",
                "explorer_url": "https://polygonscan.com",
            },
            "avalanche": {
                "chain_id": self.AVALANCHE_CHAIN_ID,
                "rpc_url": self.AVALANCHE_RPC_URL,
                "multicall_address": self.MULTICALL3_ADDRESS,
                "native_token": "AVAX",
                "explorer_url": "https://snowtrace.io",
            },
            "bsc": {
                "chain_id": self.BSC_CHAIN_ID,
                "rpc_url": self.BSC_RPC_URL,
                "multicall_address": self.MULTICALL3_ADDRESS,
                "native_token": "BNB",
                "explorer_url": "https://bscscan.com",
            },
        }

    def get_chain_config(self, chain_name: str) -> Dict:
        """Get configuration for a specific chain."""
        if chain_name not in self.supported_chains:
            raise ValueError(f"Unsupported chain: {chain_name}")
        return self.supported_chains[chain_name]

    def get_rpc_url(self, chain_name: str) -> str:
        """Get RPC URL for a specific chain."""
        return self.get_chain_config(chain_name)["rpc_url"]

    def get_chain_id(self, chain_name: str) -> int:
        """Get chain ID for a specific chain."""
        return self.get_chain_config(chain_name)["chain_id"]

    def get_chain_name(self, chain_id: int) -> str:
        """Get the chain name registered for a chain ID."""
        for name, chain in self.supported_chains.items():
            if chain["chain_id"] == chain_id:
                return name
        raise ValueError(f"Unsupported chain id: {chain_id}")
