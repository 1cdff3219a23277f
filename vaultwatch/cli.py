#!/usr/bin/env python3
"""
Command-line snapshot of vault state.

Usage:
    python -m vaultwatch.cli --chain polygon --vaults vaults.json
    python -m vaultwatch.cli --chain polygon --vaults vaults.json --dataset lps
    python -m vaultwatch.cli --chain polygon --vaults vaults.json --dataset wallet --address 0x...
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from vaultwatch.batchers.errors import BatchError
from vaultwatch.config import get_config
from vaultwatch.fetchers import get_lp_data, get_pool_data, get_wallet_data, list_fetchers
from vaultwatch.vaults import StaticSigner, TwoPi, load_vaults

logger = logging.getLogger(__name__)


async def collect(twopi: TwoPi, dataset: str) -> Dict[str, Any]:
    """Read one dataset for every vault of the context."""
    if dataset == "lps":
        return await get_lp_data(twopi)

    vaults = twopi.get_vaults()
    fetch = get_wallet_data if dataset == "wallet" else get_pool_data
    # The first call refreshes the cache, the others are cache hits or join it
    results = await asyncio.gather(*(fetch(twopi, vault) for vault in vaults))
    return {vault.id: data for vault, data in zip(vaults, results)}


async def run(twopi: TwoPi, dataset: str) -> Dict[str, Any]:
    """Collect a dataset and close the provider session afterwards."""
    try:
        return await collect(twopi, dataset)
    finally:
        await twopi.web3.provider.disconnect()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print cached on-chain vault data as JSON")
    parser.add_argument("--chain", default=None, help="Chain name (defaults to DEFAULT_CHAIN)")
    parser.add_argument("--vaults", required=True, help="JSON file with vault definitions")
    parser.add_argument("--dataset", choices=list_fetchers(), default="pool")
    parser.add_argument("--address", help="Wallet address for the wallet dataset")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    config = get_config()
    chain = args.chain or config.chains.DEFAULT_CHAIN

    if args.dataset == "wallet" and not args.address:
        logger.error("--address is required for the wallet dataset")
        return 2

    try:
        chain_id = config.chains.get_chain_id(chain)
    except ValueError as e:
        logger.error(str(e))
        return 2

    vaults = load_vaults(args.vaults, chain_id=chain_id)
    signer = StaticSigner(args.address) if args.address else None
    twopi = TwoPi.from_config(chain, vaults=vaults, signer=signer)

    try:
        data = asyncio.run(run(twopi, args.dataset))
    except BatchError as e:
        logger.error(f"Failed to read {args.dataset} data on {chain}: {e}")
        return 1

    print(json.dumps(data, indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
