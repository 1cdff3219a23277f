"""
Call descriptors, batch building and result merging.

A refresh builds ``(label, ContractCall)`` pairs per entity, tags them with the
entity id via :func:`to_batched_calls`, executes the flat batch in a single
multicall and folds the ordered results back into a nested cache store with
:func:`merge_results`.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple

from eth_abi import decode, encode
from eth_utils import function_signature_to_4byte_selector
from web3 import Web3

from .errors import ValidationError

logger = logging.getLogger(__name__)

CacheStore = Dict[str, Dict[str, Any]]


def parse_input_types(signature: str) -> List[str]:
    """
    Extract the argument types from a canonical function signature.

    ``"balanceOf(uint256,address)"`` gives ``["uint256", "address"]``. Commas
    nested inside tuple types are kept.
    """
    start = signature.find("(")
    if start <= 0 or not signature.endswith(")"):
        raise ValidationError(f"Invalid function signature: {signature}")

    body = signature[start + 1:-1]
    types, depth, current = [], 0, ""
    for char in body:
        if char == "," and depth == 0:
            types.append(current)
            current = ""
            continue
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        current += char
    if current:
        types.append(current)
    return types


@dataclass(frozen=True)
class ContractCall:
    """An unexecuted read-only contract call."""

    target: str
    signature: str
    args: Tuple[Any, ...] = ()
    output_types: Tuple[str, ...] = ("uint256",)

    @property
    def input_types(self) -> List[str]:
        return parse_input_types(self.signature)

    def encode(self) -> bytes:
        """Build calldata: 4-byte selector followed by the ABI-encoded arguments."""
        input_types = self.input_types
        if len(input_types) != len(self.args):
            raise ValidationError(
                f"{self.signature} expects {len(input_types)} arguments, got {len(self.args)}"
            )
        selector = function_signature_to_4byte_selector(self.signature)
        if not input_types:
            return selector
        return selector + encode(input_types, list(self.args))

    def decode(self, data: bytes) -> Any:
        """Decode return data; a single output is returned unwrapped."""
        values = decode(list(self.output_types), bytes(data))
        if len(values) == 1:
            return values[0]
        return tuple(values)


class Contract:
    """
    Address plus a minimal ABI that builds :class:`ContractCall` objects.

    The ABI maps method names to ``(signature, output_types)``::

        token = Contract(address, {"balanceOf": ("balanceOf(address)", ("uint256",))})
        call = token.balanceOf(owner)
    """

    def __init__(self, address: str, abi: Mapping[str, Tuple[str, Tuple[str, ...]]]):
        self.address = Web3.to_checksum_address(address)
        self.abi = dict(abi)

    def has(self, name: str) -> bool:
        """Check whether the ABI defines a method."""
        return name in self.abi

    def call(self, name: str, *args: Any) -> ContractCall:
        if name not in self.abi:
            raise ValidationError(f"Contract {self.address} has no method {name}")
        signature, output_types = self.abi[name]
        return ContractCall(self.address, signature, tuple(args), tuple(output_types))

    def __getattr__(self, name: str):
        if name.startswith("_") or name not in self.__dict__.get("abi", {}):
            raise AttributeError(name)
        return lambda *args: self.call(name, *args)

    def __repr__(self) -> str:
        return f"Contract({self.address})"


@dataclass(frozen=True)
class BatchedCall:
    """A contract call scoped to one entity and labeled with the field it fills."""

    entity_id: str
    label: str
    call: ContractCall


def to_batched_calls(
    entity_id: str, pairs: Iterable[Tuple[str, ContractCall]]
) -> List[BatchedCall]:
    """
    Tag ``(label, call)`` pairs with an entity id.

    Args:
        entity_id: Id of the entity the calls read from
        pairs: Ordered ``(label, call)`` pairs; may be empty

    Returns:
        BatchedCall list in the same order as ``pairs``
    """
    return [BatchedCall(entity_id, label, call) for label, call in pairs]


def merge_results(
    batched_calls: Sequence[BatchedCall], results: Sequence[Any], store: CacheStore
) -> CacheStore:
    """
    Write ordered multicall results into ``store[entity_id][label]``.

    Values replace whatever the store held for the same entity and label.
    The input is validated before anything is written.

    Args:
        batched_calls: Calls in submission order
        results: Decoded results in the same order
        store: Cache store mutated in place

    Returns:
        The same store

    Raises:
        ValidationError: On a length mismatch or a duplicated (entity, label) pair
    """
    if len(batched_calls) != len(results):
        raise ValidationError(
            f"Got {len(results)} results for {len(batched_calls)} calls"
        )

    seen = set()
    for batched_call in batched_calls:
        key = (batched_call.entity_id, batched_call.label)
        if key in seen:
            raise ValidationError(
                f"Duplicate field {batched_call.label!r} for entity {batched_call.entity_id!r}"
            )
        seen.add(key)

    for batched_call, value in zip(batched_calls, results):
        store.setdefault(batched_call.entity_id, {})[batched_call.label] = value

    logger.debug(f"Merged {len(results)} results for {len({c.entity_id for c in batched_calls})} entities")
    return store
