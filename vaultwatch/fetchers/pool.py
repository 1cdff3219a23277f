"""
Pool data: vault decimals, deposit token decimals, price per full share and
TVL for every vault of a chain.
"""

from dataclasses import dataclass
from typing import Any, Dict, List

from ..batchers.calls import BatchedCall, to_batched_calls
from ..vaults.abis import token_contract, vault_contract
from ..vaults.twopi import TwoPi
from ..vaults.vault import Vault
from .base import VaultFetcher


@dataclass(frozen=True)
class PoolContext:
    twopi: TwoPi


def calls_for(vault: Vault) -> List[BatchedCall]:
    vault_c = vault_contract(vault)
    token_c = token_contract(vault)
    pid_args = () if vault.pid is None else (vault.pid,)

    pairs = [
        ("vaultDecimals", vault_c.decimals(*pid_args)),
        ("pricePerFullShare", vault_c.getPricePerFullShare(*pid_args)),
        ("tvl", vault_c.balance(*pid_args)),
    ]
    # The native token has no contract to ask; Vault.token_decimals covers it
    if token_c is not None:
        pairs.insert(1, ("tokenDecimals", token_c.decimals()))

    return to_batched_calls(vault.id, pairs)


class PoolFetcher(VaultFetcher[PoolContext]):
    TTL_SETTING = "POOL_TTL_SECONDS"

    async def build_and_execute(self, context: PoolContext) -> None:
        batched_calls = [
            batched_call
            for vault in context.twopi.get_vaults()
            for batched_call in calls_for(vault)
        ]
        await self.run_batched_calls(context.twopi.executor, batched_calls)

    async def get_pool_data(self, context: PoolContext, vault: Vault) -> Dict[str, Any]:
        await self.perform(context)
        return self.entity_data(vault.id)


async def get_pool_data(twopi: TwoPi, vault: Vault) -> Dict[str, Any]:
    fetcher = twopi.registry.get_instance(f"pool-{twopi.chain_id}", PoolFetcher)

    return await fetcher.get_pool_data(PoolContext(twopi), vault)
