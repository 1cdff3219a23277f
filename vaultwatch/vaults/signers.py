"""
Wallet signers.

Fetchers only need the address of the connected wallet, resolved
asynchronously because browser or remote signers answer over the network.
"""

from typing import Protocol

from web3 import Web3


class Signer(Protocol):
    async def get_address(self) -> str:
        ...


class StaticSigner:
    """Read-only signer for a known address."""

    def __init__(self, address: str):
        self.address = Web3.to_checksum_address(address)

    async def get_address(self) -> str:
        return self.address

    def __repr__(self) -> str:
        return f"StaticSigner({self.address})"
