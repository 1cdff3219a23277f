"""
Vault domain model: vaults, their ABIs, signers and the per-chain context.
"""

from .abis import ARCHIMEDES_ABI, ERC20_ABI, VAULT_ABI, lp_token_contracts, token_contract, vault_contract
from .signers import Signer, StaticSigner
from .twopi import TwoPi
from .vault import Borrow, Vault, load_vaults

__all__ = [
    'ARCHIMEDES_ABI',
    'ERC20_ABI',
    'VAULT_ABI',
    'lp_token_contracts',
    'token_contract',
    'vault_contract',
    'Signer',
    'StaticSigner',
    'TwoPi',
    'Borrow',
    'Vault',
    'load_vaults',
]
