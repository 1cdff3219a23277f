"""
Base classes for batched, cached on-chain reads.

A Batcher owns a cache store that is refreshed from the chain at most once per
TTL. Concurrent callers asking for a refresh while one is already running
share that refresh instead of starting their own, so any number of callers
costs at most one multicall round trip per instance.
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, Protocol, Sequence, TypeVar

from .calls import BatchedCall, CacheStore, ContractCall, merge_results
from .errors import ErrorHandler

logger = logging.getLogger(__name__)

ContextT = TypeVar("ContextT")


@dataclass
class BatchConfig:
    """Configuration for multicall execution."""

    batch_size: int = 500
    timeout: float = 30.0

    @classmethod
    def from_config(cls) -> "BatchConfig":
        """Build from the global configuration."""
        # config loads .env on import
        from ..config import get_config

        batchers = get_config().batchers
        return cls(
            batch_size=batchers.MULTICALL_BATCH_SIZE,
            timeout=batchers.MULTICALL_TIMEOUT_SECONDS,
        )


class CallExecutor(Protocol):
    """Anything that runs N read calls in one round trip and returns N results in order."""

    async def execute(self, calls: Sequence[ContractCall]) -> List[Any]:
        ...


class Batcher(ABC, Generic[ContextT]):
    """
    Abstract base class for TTL-cached, request-coalescing batched reads.

    Subclasses implement :meth:`build_and_execute`, which builds the calls for
    every relevant entity and merges the results into :attr:`store`, usually
    through :meth:`run_batched_calls`. Callers go through :meth:`perform` and
    read the store afterwards.
    """

    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic):
        """
        Initialize the batcher.

        Args:
            ttl: Seconds a successful refresh stays fresh
            clock: Monotonic time source, in seconds
        """
        self.ttl = ttl
        self.store: CacheStore = {}
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.error_handler = ErrorHandler(self.logger)
        self._clock = clock
        self._last_refresh: Optional[float] = None
        self._pending: Optional[asyncio.Task] = None

    @property
    def last_refresh(self) -> Optional[float]:
        """Clock value of the last successful refresh, None before the first one."""
        return self._last_refresh

    @property
    def is_refreshing(self) -> bool:
        return self._pending is not None

    def is_fresh(self) -> bool:
        """Check whether the last successful refresh is younger than the TTL."""
        if self._last_refresh is None:
            return False
        return self._clock() - self._last_refresh < self.ttl

    def invalidate(self) -> None:
        """Force the next perform() to refresh. Cached values stay readable."""
        self._last_refresh = None

    async def perform(self, context: ContextT) -> None:
        """
        Make sure the store is fresh.

        Returns immediately on a cache hit. While a refresh is running every
        caller awaits that same refresh, whatever its own context. Otherwise a
        new refresh is started. Errors from the refresh propagate to every
        caller awaiting it.

        Args:
            context: Forwarded to build_and_execute()
        """
        if self._pending is None:
            if self.is_fresh():
                return
            self._pending = asyncio.ensure_future(self._refresh(context))
            self._pending.add_done_callback(self._on_refresh_done)

        # A cancelled caller must not cancel the shared refresh
        await asyncio.shield(self._pending)

    async def _refresh(self, context: ContextT) -> None:
        self.logger.debug(f"Refreshing {self.__class__.__name__}")
        started = self._clock()
        try:
            await self.build_and_execute(context)
            self._last_refresh = self._clock()
            self.logger.debug(
                f"Refreshed {len(self.store)} entities in {self._clock() - started:.3f}s"
            )
        finally:
            self._pending = None

    def _on_refresh_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self.error_handler.log_error(
                error, {"batcher": self.__class__.__name__, "entities": len(self.store)}
            )

    @abstractmethod
    async def build_and_execute(self, context: ContextT) -> None:
        """
        Build calls for every relevant entity, execute them and merge the results.

        Args:
            context: Typed context of the concrete batcher
        """
        pass

    async def run_batched_calls(
        self,
        executor: CallExecutor,
        batched_calls: Sequence[BatchedCall],
        store: Optional[CacheStore] = None,
    ) -> None:
        """
        Execute a flat batch in one multicall and merge it into the store.

        An empty batch performs no network call.

        Args:
            executor: Multicall executor bound to the right chain
            batched_calls: Calls for all entities, in submission order
            store: Target store, defaults to self.store
        """
        if not batched_calls:
            self.logger.debug("Nothing to fetch")
            return

        target = self.store if store is None else store
        results = await executor.execute([batched.call for batched in batched_calls])
        merge_results(batched_calls, results, target)
