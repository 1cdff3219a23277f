"""
vaultwatch: cached, multicall-batched reads of yield vault state.
"""

__version__ = "0.1.0"
