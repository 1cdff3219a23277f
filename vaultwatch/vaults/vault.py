"""
Vault model.

A vault is the entity whose on-chain state the fetchers track; its ``id`` is
the key of every fetcher's cache store.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

# MATIC, AVAX and BNB all use 18 decimals
NATIVE_DECIMALS = 18


@dataclass(frozen=True)
class Borrow:
    """Leverage settings of a borrowing vault."""

    depth: int
    percentage: int


@dataclass
class Vault:
    """A yield vault deployed on one chain."""

    id: str
    address: str
    token: str
    chain_id: int
    token_address: Optional[str] = None  # None for the native gas token
    pid: Optional[int] = None  # Set for vaults served by Archimedes
    oracle: Optional[str] = None
    lp_tokens: Optional[Tuple[str, str]] = None
    earn: str = ""
    price_id: str = ""
    uses: str = ""
    pool: str = ""
    symbol: str = ""
    borrow: Optional[Borrow] = None
    twopi: Any = field(default=None, repr=False, compare=False)

    @property
    def is_native(self) -> bool:
        return self.token_address is None

    @property
    def is_lp(self) -> bool:
        return self.oracle == "lps"

    def signer(self):
        return self.twopi.signer if self.twopi else None

    async def shares(self) -> Optional[int]:
        info = await self._wallet_data()
        return info.get("shares") if info is not None else None

    async def allowance(self) -> Optional[int]:
        info = await self._wallet_data()
        return info.get("allowance") if info is not None else None

    async def balance(self) -> Optional[int]:
        info = await self._wallet_data()
        return info.get("balance") if info is not None else None

    async def decimals(self) -> Optional[int]:
        info = await self._pool_data()
        return info.get("vaultDecimals") if info is not None else None

    async def token_decimals(self) -> Optional[int]:
        if self.twopi is None:
            return None
        if self.is_native:
            return NATIVE_DECIMALS
        info = await self._pool_data()
        return info.get("tokenDecimals") if info is not None else None

    async def price_per_full_share(self) -> Optional[int]:
        info = await self._pool_data()
        return info.get("pricePerFullShare") if info is not None else None

    async def tvl(self) -> Optional[int]:
        info = await self._pool_data()
        return info.get("tvl") if info is not None else None

    async def lp_data(self) -> Optional[Dict[str, int]]:
        if self.twopi is None or not self.is_lp:
            return None
        from ..fetchers import get_lp_data

        return (await get_lp_data(self.twopi)).get(self.id, {})

    async def _wallet_data(self) -> Optional[Dict[str, Any]]:
        if self.twopi is None:
            return None
        # fetchers build calls from vaults, so they are imported lazily
        from ..fetchers import get_wallet_data

        return await get_wallet_data(self.twopi, self)

    async def _pool_data(self) -> Optional[Dict[str, Any]]:
        if self.twopi is None:
            return None
        from ..fetchers import get_pool_data

        return await get_pool_data(self.twopi, self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Vault":
        """Build a vault from a JSON record."""
        borrow = data.get("borrow")
        lp_tokens = data.get("lp_tokens")
        return cls(
            id=data["id"],
            address=data["address"],
            token=data["token"],
            chain_id=int(data["chain_id"]),
            token_address=data.get("token_address"),
            pid=data.get("pid"),
            oracle=data.get("oracle"),
            lp_tokens=tuple(lp_tokens) if lp_tokens else None,
            earn=data.get("earn", ""),
            price_id=data.get("price_id", ""),
            uses=data.get("uses", ""),
            pool=data.get("pool", ""),
            symbol=data.get("symbol", ""),
            borrow=Borrow(**borrow) if borrow else None,
        )


def load_vaults(path: Union[str, Path], chain_id: Optional[int] = None) -> List[Vault]:
    """
    Load vault definitions from a JSON file holding a list of vault records.

    Args:
        path: JSON file path
        chain_id: Only keep vaults deployed on this chain

    Returns:
        Vaults in file order
    """
    with open(path, "r") as f:
        records = json.load(f)

    vaults = [Vault.from_dict(record) for record in records]
    if chain_id is not None:
        vaults = [vault for vault in vaults if vault.chain_id == chain_id]

    logger.info(f"Loaded {len(vaults)} vaults from {path}")
    return vaults
