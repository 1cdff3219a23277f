"""Shared fixtures for fetcher tests."""

from typing import Any, Dict, List, Optional, Sequence, Tuple
from unittest.mock import Mock

import pytest
from web3 import Web3

from ...batchers.calls import ContractCall
from ...batchers.multicall import MulticallExecutor
from ...vaults import StaticSigner, TwoPi, Vault

POLYGON = 137

ARCHIMEDES = Web3.to_checksum_address("0x" + "a1" * 20)
SINGLE_VAULT = Web3.to_checksum_address("0x" + "b2" * 20)
USDC = Web3.to_checksum_address("0x" + "c3" * 20)
DAI = Web3.to_checksum_address("0x" + "d4" * 20)
WMATIC = Web3.to_checksum_address("0x" + "e5" * 20)
LP_TOKEN = Web3.to_checksum_address("0x" + "f6" * 20)
WALLET = Web3.to_checksum_address("0x" + "77" * 20)


class FakeExecutor(MulticallExecutor):
    """
    Multicall executor answering from a table instead of the chain.

    Values are looked up by (target, signature, args), then (target, signature),
    then signature; anything else answers 0.
    """

    def __init__(self, values: Optional[Dict[Tuple, Any]] = None):
        super().__init__(Mock())
        self.values = values or {}
        self.error: Optional[Exception] = None
        self.invocations: List[List[ContractCall]] = []

    @property
    def call_count(self) -> int:
        return len(self.invocations)

    def answer(self, call: ContractCall) -> Any:
        for key in ((call.target, call.signature, call.args), (call.target, call.signature), call.signature):
            if key in self.values:
                return self.values[key]
        return 0

    async def execute(self, calls: Sequence[ContractCall], block_identifier="latest") -> List[Any]:
        self.invocations.append(list(calls))
        if self.error is not None:
            raise self.error
        return [self.answer(call) for call in calls]


@pytest.fixture
def chain_values():
    return {
        (USDC, "decimals()"): 6,
        (DAI, "decimals()"): 18,
        (WMATIC, "decimals()"): 18,
        (LP_TOKEN, "decimals()"): 18,
        (LP_TOKEN, "totalSupply()"): 5 * 10**18,
        (USDC, "balanceOf(address)", (WALLET,)): 250 * 10**6,
        (USDC, "balanceOf(address)", (LP_TOKEN,)): 4000 * 10**6,
        (WMATIC, "balanceOf(address)", (LP_TOKEN,)): 5000 * 10**18,
        (USDC, "allowance(address,address)"): 2**256 - 1,
        "getEthBalance(address)": 3 * 10**18,
        (ARCHIMEDES, "balanceOf(uint256,address)", (1, WALLET)): 120 * 10**6,
        (ARCHIMEDES, "pendingPiToken(uint256,address)", (1, WALLET)): 42,
        (ARCHIMEDES, "paidRewards(uint256)", (1,)): 1000,
        (ARCHIMEDES, "decimals(uint256)", (1,)): 6,
        (ARCHIMEDES, "getPricePerFullShare(uint256)", (1,)): 10**18 + 5,
        (ARCHIMEDES, "balance(uint256)", (1,)): 10**12,
        (SINGLE_VAULT, "decimals()"): 18,
        (SINGLE_VAULT, "balanceOf(address)"): 9 * 10**18,
        (SINGLE_VAULT, "balance()"): 10**24,
        (SINGLE_VAULT, "getPricePerFullShare()"): 10**18,
    }


@pytest.fixture
def executor(chain_values):
    return FakeExecutor(chain_values)


@pytest.fixture
def usdc_vault():
    return Vault(id="polygon-usdc-aave", address=ARCHIMEDES, token="usdc", chain_id=POLYGON,
                 token_address=USDC, pid=1, uses="Aave", pool="aave", symbol="USDC")


@pytest.fixture
def matic_vault():
    return Vault(id="polygon-matic-aave", address=ARCHIMEDES, token="matic", chain_id=POLYGON,
                 pid=2, uses="Aave", pool="aave", symbol="MATIC")


@pytest.fixture
def dai_vault():
    return Vault(id="polygon-dai-single", address=SINGLE_VAULT, token="dai", chain_id=POLYGON,
                 token_address=DAI, uses="Curve", pool="curve", symbol="DAI")


@pytest.fixture
def lp_vault():
    return Vault(id="polygon-wmatic-usdc-lp", address=ARCHIMEDES, token="wmatic-usdc",
                 chain_id=POLYGON, token_address=LP_TOKEN, pid=3, oracle="lps",
                 lp_tokens=(WMATIC, USDC), symbol="WMATIC-USDC")


@pytest.fixture
def twopi(executor, usdc_vault, matic_vault, dai_vault, lp_vault):
    return TwoPi(Mock(), POLYGON, vaults=[usdc_vault, matic_vault, dai_vault, lp_vault],
                 signer=StaticSigner(WALLET), executor=executor)
