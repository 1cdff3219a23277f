"""
Cached vault data fetchers.

Each fetcher batches the reads for every vault of a chain into one multicall
and caches the result for its configured TTL.
"""

from .base import VaultFetcher
from .lps import LpContext, LpFetcher, get_lp_data
from .pool import PoolContext, PoolFetcher, get_pool_data
from .wallet import WalletContext, WalletFetcher, get_wallet_data

_available_fetchers = {
    'wallet': WalletFetcher,
    'pool': PoolFetcher,
    'lps': LpFetcher,
}

__all__ = [
    'VaultFetcher',
    'LpContext',
    'LpFetcher',
    'get_lp_data',
    'PoolContext',
    'PoolFetcher',
    'get_pool_data',
    'WalletContext',
    'WalletFetcher',
    'get_wallet_data',
    'get_fetcher',
    'list_fetchers',
]


def get_fetcher(name: str) -> type:
    """Get fetcher class for a dataset."""
    name_lower = name.lower()
    if name_lower not in _available_fetchers:
        raise ValueError(f"No fetcher available for dataset: {name}")
    return _available_fetchers[name_lower]


def list_fetchers():
    """List available dataset fetchers."""
    return list(_available_fetchers.keys())
