"""
Multicall3 executor.

Aggregates many read-only calls into a single eth_call against the Multicall3
contract (deployed at the same address on all major EVM chains) and decodes
the results in submission order.
"""

import asyncio
import logging
from typing import Any, List, Optional, Sequence, Union

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError, EncodingError
from eth_utils import function_signature_to_4byte_selector
from web3 import AsyncWeb3, Web3

from .base import BatchConfig
from .calls import ContractCall
from .errors import ContractError, ErrorHandler, ValidationError

logger = logging.getLogger(__name__)

MULTICALL3_ADDRESS = "0xcA11bde05977b3631167028862bE2a173976CA11"

AGGREGATE3_SIGNATURE = "aggregate3((address,bool,bytes)[])"
AGGREGATE3_SELECTOR = function_signature_to_4byte_selector(AGGREGATE3_SIGNATURE)


class MulticallExecutor:
    """
    Runs read calls through Multicall3.aggregate3.

    Every call is submitted with allowFailure disabled, so one reverting call
    fails the whole batch and no partial results are ever returned.
    """

    def __init__(
        self,
        web3: AsyncWeb3,
        multicall_address: str = MULTICALL3_ADDRESS,
        config: Optional[BatchConfig] = None,
    ):
        """
        Initialize the executor.

        Args:
            web3: AsyncWeb3 instance connected to the target chain
            multicall_address: Multicall3 deployment address
            config: Batch configuration
        """
        self.web3 = web3
        self.multicall_address = Web3.to_checksum_address(multicall_address)
        self.config = config or BatchConfig()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.error_handler = ErrorHandler(self.logger)

    def eth_balance(self, address: str) -> ContractCall:
        """Build a call reading the native gas token balance of an address."""
        return ContractCall(
            self.multicall_address,
            "getEthBalance(address)",
            (Web3.to_checksum_address(address),),
            ("uint256",),
        )

    async def execute(
        self,
        calls: Sequence[ContractCall],
        block_identifier: Union[int, str] = "latest",
    ) -> List[Any]:
        """
        Execute calls and return their decoded results in the same order.

        Args:
            calls: Calls to execute
            block_identifier: Block to call at

        Returns:
            One decoded value per call

        Raises:
            BatchError: If any chunk fails; nothing is returned in that case
        """
        if not calls:
            return []

        chunks = self._chunk_calls(list(calls))
        self.logger.debug(f"Executing {len(calls)} calls in {len(chunks)} multicall chunks")

        # All chunks of one batch read the same block
        if len(chunks) > 1 and block_identifier == "latest":
            block_identifier = await self._latest_block()

        results: List[Any] = []
        for chunk in chunks:
            results.extend(await self._execute_chunk(chunk, block_identifier))
        return results

    async def _latest_block(self) -> int:
        try:
            return await asyncio.wait_for(self.web3.eth.block_number, timeout=self.config.timeout)
        except Exception as e:
            self.logger.error(f"Failed to read the latest block number: {e}")
            raise self.error_handler.to_batch_error(e, "Failed to read block number") from e

    def _chunk_calls(self, calls: List[ContractCall]) -> List[List[ContractCall]]:
        """Split calls into chunks based on batch_size."""
        chunk_size = self.config.batch_size
        return [calls[i : i + chunk_size] for i in range(0, len(calls), chunk_size)]

    def _prepare_call_data(self, calls: Sequence[ContractCall]) -> str:
        """
        Encode an aggregate3 call for the given calls.

        Returns:
            Complete call data as hex string
        """
        try:
            encoded_calls = [(call.target, False, call.encode()) for call in calls]
            encoded_args = encode(["(address,bool,bytes)[]"], [encoded_calls])
        except (EncodingError, TypeError, ValueError) as e:
            raise ValidationError(f"Failed to prepare call data: {e}") from e
        return "0x" + (AGGREGATE3_SELECTOR + encoded_args).hex()

    async def _execute_chunk(
        self, calls: Sequence[ContractCall], block_identifier: Union[int, str]
    ) -> List[Any]:
        call_data = self._prepare_call_data(calls)

        try:
            raw_response = await asyncio.wait_for(
                self.web3.eth.call(
                    {"to": self.multicall_address, "data": call_data},
                    block_identifier=block_identifier,
                ),
                timeout=self.config.timeout,
            )
        except Exception as e:
            self.logger.error(f"Multicall of {len(calls)} calls failed: {e}")
            raise self.error_handler.to_batch_error(e, "Multicall failed") from e

        return self._decode_response(raw_response, calls)

    def _decode_response(self, raw_response: bytes, calls: Sequence[ContractCall]) -> List[Any]:
        """
        Decode the aggregate3 response into one value per call.

        Args:
            raw_response: Raw bytes returned by eth_call
            calls: Calls in submission order

        Returns:
            Decoded values
        """
        try:
            (return_data,) = decode(["(bool,bytes)[]"], bytes(raw_response))
        except DecodingError as e:
            raise ContractError(f"Failed to decode multicall response: {e}") from e

        if len(return_data) != len(calls):
            raise ContractError(
                f"Multicall returned {len(return_data)} results for {len(calls)} calls"
            )

        results = []
        for call, (success, data) in zip(calls, return_data):
            if not success:
                raise ContractError(f"Call {call.signature} on {call.target} failed")
            try:
                results.append(call.decode(data))
            except DecodingError as e:
                raise ContractError(
                    f"Failed to decode {call.signature} on {call.target}: {e}"
                ) from e
        return results
