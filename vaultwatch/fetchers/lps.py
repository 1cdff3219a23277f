"""
LP composition: supply and decimals of each LP token together with the
reserves of its two underlying tokens.
"""

from dataclasses import dataclass
from typing import Dict, List

from ..batchers.calls import BatchedCall, to_batched_calls
from ..vaults.abis import lp_token_contracts
from ..vaults.twopi import TwoPi
from ..vaults.vault import Vault
from .base import VaultFetcher


@dataclass(frozen=True)
class LpContext:
    twopi: TwoPi


def calls_for(vault: Vault) -> List[BatchedCall]:
    if not vault.is_lp:
        return []

    lp_token, token0, token1 = lp_token_contracts(vault)

    return to_batched_calls(vault.id, [
        ("decimals", lp_token.decimals()),
        ("totalSupply", lp_token.totalSupply()),
        ("token0Balance", token0.balanceOf(lp_token.address)),
        ("token0Decimals", token0.decimals()),
        ("token1Balance", token1.balanceOf(lp_token.address)),
        ("token1Decimals", token1.decimals()),
    ])


class LpFetcher(VaultFetcher[LpContext]):
    """LP reserves move slowly; refreshed every minute."""

    TTL_SETTING = "LP_TTL_SECONDS"

    async def build_and_execute(self, context: LpContext) -> None:
        batched_calls = [
            batched_call
            for vault in context.twopi.get_vaults()
            for batched_call in calls_for(vault)
        ]
        await self.run_batched_calls(context.twopi.executor, batched_calls)

    async def get_lp_data(self, context: LpContext) -> Dict[str, Dict[str, int]]:
        await self.perform(context)
        return self.snapshot()


async def get_lp_data(twopi: TwoPi) -> Dict[str, Dict[str, int]]:
    fetcher = twopi.registry.get_instance(f"lps-{twopi.chain_id}", LpFetcher)

    return await fetcher.get_lp_data(LpContext(twopi))
