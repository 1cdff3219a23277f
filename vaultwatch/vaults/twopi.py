"""
Process-wide context for one chain: provider, vaults, signer and the
registry holding the fetchers' caches.
"""

import logging
from typing import Iterable, List, Optional

from web3 import AsyncWeb3

from ..batchers.base import BatchConfig
from ..batchers.errors import ValidationError
from ..batchers.multicall import MULTICALL3_ADDRESS, MulticallExecutor
from ..batchers.registry import BatcherRegistry
from .signers import Signer
from .vault import Vault

logger = logging.getLogger(__name__)


class TwoPi:
    """
    Entry point for reading vault state on one chain.

    Build one per chain at startup and pass it to every consumer. Fetchers
    keep their caches in ``registry``; share a registry between contexts to
    share caches, or give each test its own.
    """

    def __init__(
        self,
        web3: AsyncWeb3,
        chain_id: int,
        vaults: Optional[Iterable[Vault]] = None,
        signer: Optional[Signer] = None,
        registry: Optional[BatcherRegistry] = None,
        multicall_address: str = MULTICALL3_ADDRESS,
        batch_config: Optional[BatchConfig] = None,
        executor: Optional[MulticallExecutor] = None,
    ):
        self.web3 = web3
        self.chain_id = chain_id
        self.signer = signer
        self.registry = registry if registry is not None else BatcherRegistry()
        self.multicall_address = multicall_address
        self.batch_config = batch_config or BatchConfig()
        self._executor = executor
        self._vaults: List[Vault] = []

        for vault in vaults or []:
            self.add_vault(vault)

    @classmethod
    def from_config(
        cls,
        chain_name: str,
        vaults: Optional[Iterable[Vault]] = None,
        signer: Optional[Signer] = None,
        registry: Optional[BatcherRegistry] = None,
    ) -> "TwoPi":
        """Build a context for a configured chain using an HTTP provider."""
        from ..config import get_config

        chain_config = get_config().chains.get_chain_config(chain_name)
        web3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(chain_config["rpc_url"]))
        logger.info(f"Connecting to {chain_name} at {chain_config['rpc_url']}")

        return cls(
            web3,
            chain_config["chain_id"],
            vaults=vaults,
            signer=signer,
            registry=registry,
            multicall_address=chain_config["multicall_address"],
            batch_config=BatchConfig.from_config(),
        )

    @property
    def executor(self) -> MulticallExecutor:
        """Multicall executor bound to this chain, built on first use."""
        if self._executor is None:
            self._executor = MulticallExecutor(
                self.web3, self.multicall_address, self.batch_config
            )
        return self._executor

    def add_vault(self, vault: Vault) -> None:
        """Attach a vault to this context."""
        if vault.chain_id != self.chain_id:
            raise ValidationError(
                f"Vault {vault.id} is deployed on chain {vault.chain_id}, not {self.chain_id}"
            )
        if self.get_vault(vault.id) is not None:
            raise ValidationError(f"Duplicate vault id: {vault.id}")
        vault.twopi = self
        self._vaults.append(vault)

    def get_vaults(self) -> List[Vault]:
        return list(self._vaults)

    def get_vault(self, vault_id: str) -> Optional[Vault]:
        for vault in self._vaults:
            if vault.id == vault_id:
                return vault
        return None

    def __repr__(self) -> str:
        return f"TwoPi(chain_id={self.chain_id}, vaults={len(self._vaults)})"
