"""
Wallet data: token balance, allowance, vault shares and rewards of the
connected wallet, for every vault of a chain.
"""

from dataclasses import dataclass
from typing import Any, Dict, List

from web3 import Web3

from ..batchers.calls import BatchedCall, to_batched_calls
from ..batchers.multicall import MulticallExecutor
from ..vaults.abis import token_contract, vault_contract
from ..vaults.twopi import TwoPi
from ..vaults.vault import Vault
from .base import VaultFetcher


@dataclass(frozen=True)
class WalletContext:
    address: str
    twopi: TwoPi


def calls_for(address: str, executor: MulticallExecutor, vault: Vault) -> List[BatchedCall]:
    vault_c = vault_contract(vault)
    token_c = token_contract(vault)

    if token_c is not None:
        balance = token_c.balanceOf(address)
        allowance = token_c.allowance(address, vault_c.address)
    else:
        # Native tokens need no approval, the balance doubles as allowance
        balance = executor.eth_balance(address)
        allowance = executor.eth_balance(address)

    if vault_c.has("pendingPiToken"):
        shares = vault_c.balanceOf(vault.pid, address)
        pending_pi_tokens = vault_c.pendingPiToken(vault.pid, address)
        paid_rewards = vault_c.paidRewards(vault.pid)
    else:
        # Single vaults pay no rewards; repeat the shares call to keep the record shape
        shares = vault_c.balanceOf(address)
        pending_pi_tokens = vault_c.balanceOf(address)
        paid_rewards = vault_c.balanceOf(address)

    return to_batched_calls(vault.id, [
        ("balance", balance),
        ("allowance", allowance),
        ("shares", shares),
        ("pendingPiTokens", pending_pi_tokens),
        ("paidRewards", paid_rewards),
    ])


class WalletFetcher(VaultFetcher[WalletContext]):
    """Per-wallet cache, refreshed every couple of seconds."""

    TTL_SETTING = "WALLET_TTL_SECONDS"

    async def build_and_execute(self, context: WalletContext) -> None:
        executor = context.twopi.executor
        batched_calls = [
            batched_call
            for vault in context.twopi.get_vaults()
            for batched_call in calls_for(context.address, executor, vault)
        ]
        await self.run_batched_calls(executor, batched_calls)

    async def get_wallet_data(self, context: WalletContext, vault: Vault) -> Dict[str, Any]:
        await self.perform(context)
        return self.entity_data(vault.id)


async def get_wallet_data(twopi: TwoPi, vault: Vault) -> Dict[str, Any]:
    """
    Wallet data of the connected signer for one vault.

    Returns an empty dict when no signer is connected.
    """
    if twopi.signer is None:
        return {}

    address = Web3.to_checksum_address(await twopi.signer.get_address())
    fetcher = twopi.registry.get_instance(f"wallet-{twopi.chain_id}-{address}", WalletFetcher)

    return await fetcher.get_wallet_data(WalletContext(address, twopi), vault)
