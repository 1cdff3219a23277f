"""
Batched, cached on-chain reads.

This package provides the request-coalescing Batcher, the call descriptor
and result merging helpers it is built on, and a Multicall3 executor that
runs a whole batch in a single eth_call.
"""

from .base import Batcher, BatchConfig, CallExecutor
from .calls import (
    BatchedCall,
    CacheStore,
    Contract,
    ContractCall,
    merge_results,
    to_batched_calls,
)
from .errors import (
    BatchError,
    ContractError,
    ErrorHandler,
    NetworkError,
    RateLimitError,
    ValidationError,
)
from .multicall import MULTICALL3_ADDRESS, MulticallExecutor
from .registry import BatcherRegistry

__all__ = [
    'Batcher',
    'BatchConfig',
    'CallExecutor',
    'BatchedCall',
    'CacheStore',
    'Contract',
    'ContractCall',
    'merge_results',
    'to_batched_calls',
    'BatchError',
    'ContractError',
    'ErrorHandler',
    'NetworkError',
    'RateLimitError',
    'ValidationError',
    'MULTICALL3_ADDRESS',
    'MulticallExecutor',
    'BatcherRegistry',
]
