"""
Minimal ABIs for the contracts read by the fetchers.

Each entry maps a method name to its canonical signature and output types.
"""

from typing import Optional, Tuple

from ..batchers.calls import Contract

ERC20_ABI = {
    "decimals": ("decimals()", ("uint8",)),
    "totalSupply": ("totalSupply()", ("uint256",)),
    "balanceOf": ("balanceOf(address)", ("uint256",)),
    "allowance": ("allowance(address,address)", ("uint256",)),
}

# Single-strategy vault: one contract per vault
VAULT_ABI = {
    "decimals": ("decimals()", ("uint8",)),
    "balanceOf": ("balanceOf(address)", ("uint256",)),
    "balance": ("balance()", ("uint256",)),
    "getPricePerFullShare": ("getPricePerFullShare()", ("uint256",)),
}

# Archimedes: one contract serving many vaults, addressed by pool id
ARCHIMEDES_ABI = {
    "decimals": ("decimals(uint256)", ("uint8",)),
    "balanceOf": ("balanceOf(uint256,address)", ("uint256",)),
    "balance": ("balance(uint256)", ("uint256",)),
    "getPricePerFullShare": ("getPricePerFullShare(uint256)", ("uint256",)),
    "pendingPiToken": ("pendingPiToken(uint256,address)", ("uint256",)),
    "paidRewards": ("paidRewards(uint256)", ("uint256",)),
}


def vault_contract(vault) -> Contract:
    """Contract for a vault, Archimedes-style when the vault has a pool id."""
    if vault.pid is not None:
        return Contract(vault.address, ARCHIMEDES_ABI)
    return Contract(vault.address, VAULT_ABI)


def token_contract(vault) -> Optional[Contract]:
    """Contract for the deposit token, None for the native gas token."""
    if vault.token_address is None:
        return None
    return Contract(vault.token_address, ERC20_ABI)


def lp_token_contracts(vault) -> Tuple[Contract, Contract, Contract]:
    """LP token, token0 and token1 contracts of an LP vault."""
    if vault.token_address is None or not vault.lp_tokens:
        raise ValueError(f"Vault {vault.id} is not an LP vault")
    token0, token1 = vault.lp_tokens
    return (
        Contract(vault.token_address, ERC20_ABI),
        Contract(token0, ERC20_ABI),
        Contract(token1, ERC20_ABI),
    )
