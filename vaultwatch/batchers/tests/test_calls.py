"""
Tests for call descriptors, batch building and result merging.
"""

import pytest
from eth_abi import decode, encode
from web3 import Web3

from ..calls import (
    BatchedCall,
    Contract,
    ContractCall,
    merge_results,
    parse_input_types,
    to_batched_calls,
)
from ..errors import ValidationError

OWNER = Web3.to_checksum_address("0x" + "ab" * 20)
SPENDER = Web3.to_checksum_address("0x" + "cd" * 20)
TOKEN = Web3.to_checksum_address("0x" + "12" * 20)

ERC20 = {
    "decimals": ("decimals()", ("uint8",)),
    "balanceOf": ("balanceOf(address)", ("uint256",)),
    "allowance": ("allowance(address,address)", ("uint256",)),
}


class TestSignatures:

    @pytest.mark.parametrize("signature,expected", [
        ("decimals()", []),
        ("balanceOf(address)", ["address"]),
        ("balanceOf(uint256,address)", ["uint256", "address"]),
        ("aggregate3((address,bool,bytes)[])", ["(address,bool,bytes)[]"]),
        ("swap((address,uint256),bytes32)", ["(address,uint256)", "bytes32"]),
    ])
    def test_parse_input_types(self, signature, expected):
        """Test argument types are split at top-level commas only."""
        assert parse_input_types(signature) == expected

    @pytest.mark.parametrize("signature", ["decimals", "(address)", "balanceOf(address"])
    def test_parse_invalid_signature(self, signature):
        with pytest.raises(ValidationError, match="Invalid function signature"):
            parse_input_types(signature)


class TestContractCall:

    def test_encode_without_arguments(self):
        """Test calldata of a no-argument call is the bare selector."""
        call = ContractCall(TOKEN, "decimals()", output_types=("uint8",))
        assert call.encode() == bytes.fromhex("313ce567")

    def test_encode_with_arguments(self):
        """Test calldata is selector followed by the encoded arguments."""
        call = ContractCall(TOKEN, "allowance(address,address)", (OWNER, SPENDER))
        data = call.encode()

        assert data[:4] == bytes.fromhex("dd62ed3e")
        decoded = decode(["address", "address"], data[4:])
        assert tuple(Web3.to_checksum_address(a) for a in decoded) == (OWNER, SPENDER)

    def test_encode_argument_count_mismatch(self):
        call = ContractCall(TOKEN, "balanceOf(address)", ())
        with pytest.raises(ValidationError, match="expects 1 arguments"):
            call.encode()

    def test_decode_single_output(self):
        call = ContractCall(TOKEN, "balanceOf(address)", (OWNER,))
        assert call.decode(encode(["uint256"], [10**21])) == 10**21

    def test_decode_multiple_outputs(self):
        call = ContractCall(TOKEN, "getReserves()", output_types=("uint112", "uint112", "uint32"))
        data = encode(["uint112", "uint112", "uint32"], [5, 7, 1700000000])
        assert call.decode(data) == (5, 7, 1700000000)


class TestContract:

    def test_attribute_builds_call(self):
        """Test ABI methods are exposed as call builders."""
        token = Contract(TOKEN.lower(), ERC20)
        call = token.balanceOf(OWNER)

        assert call == ContractCall(TOKEN, "balanceOf(address)", (OWNER,), ("uint256",))

    def test_address_is_checksummed(self):
        assert Contract(TOKEN.lower(), ERC20).address == TOKEN

    def test_has(self):
        token = Contract(TOKEN, ERC20)
        assert token.has("allowance")
        assert not token.has("pendingPiToken")

    def test_unknown_method(self):
        token = Contract(TOKEN, ERC20)
        with pytest.raises(AttributeError):
            token.pendingPiToken(1, OWNER)
        with pytest.raises(ValidationError, match="has no method"):
            token.call("pendingPiToken", 1, OWNER)


class TestBatchBuilding:

    def test_to_batched_calls_preserves_order(self):
        token = Contract(TOKEN, ERC20)
        pairs = [("decimals", token.decimals()), ("balance", token.balanceOf(OWNER))]

        batched = to_batched_calls("vault-1", pairs)

        assert [b.label for b in batched] == ["decimals", "balance"]
        assert all(b.entity_id == "vault-1" for b in batched)
        assert batched[1].call == pairs[1][1]

    def test_to_batched_calls_empty(self):
        """Test an entity with nothing to read contributes nothing."""
        assert to_batched_calls("vault-1", []) == []


class TestMergeResults:

    @pytest.fixture
    def batched_calls(self):
        token = Contract(TOKEN, ERC20)
        return (
            to_batched_calls("vault-1", [("balance", token.balanceOf(OWNER)), ("decimals", token.decimals())])
            + to_batched_calls("vault-2", [("balance", token.balanceOf(OWNER)), ("decimals", token.decimals())])
        )

    def test_merge_by_position(self, batched_calls):
        """Test each result lands at its call's entity and label."""
        store = {}
        merge_results(batched_calls, [100, 18, 50, 6], store)

        assert store == {
            "vault-1": {"balance": 100, "decimals": 18},
            "vault-2": {"balance": 50, "decimals": 6},
        }

    def test_merge_overwrites_and_keeps_other_fields(self, batched_calls):
        """Test merged fields replace old values while unrelated fields stay."""
        store = {"vault-1": {"balance": 1, "tvl": 99}}
        result = merge_results(batched_calls[:1], [100], store)

        assert result is store
        assert store == {"vault-1": {"balance": 100, "tvl": 99}}

    def test_merge_length_mismatch(self, batched_calls):
        store = {}
        with pytest.raises(ValidationError, match="Got 3 results for 4 calls"):
            merge_results(batched_calls, [1, 2, 3], store)
        assert store == {}

    def test_merge_rejects_duplicate_labels(self, batched_calls):
        """Test a duplicated (entity, label) pair is rejected before any write."""
        duplicate = batched_calls + [BatchedCall("vault-1", "balance", batched_calls[0].call)]
        store = {}

        with pytest.raises(ValidationError, match="Duplicate field"):
            merge_results(duplicate, [1, 2, 3, 4, 5], store)
        assert store == {}
