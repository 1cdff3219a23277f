"""Shared fixtures for batcher tests."""

import asyncio
from typing import Any, Callable, Dict, List, Optional, Sequence

import pytest

from ..base import Batcher
from ..calls import ContractCall, to_batched_calls

TOKEN_ADDRESS = "0x" + "11" * 20


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class RecordingExecutor:
    """
    Stand-in for the multicall executor.

    Returns ``results`` (or ``responder(calls)``), optionally waits on ``gate``
    first and raises ``error`` when set.
    """

    def __init__(self, results: Optional[List[Any]] = None,
                 responder: Optional[Callable[[Sequence[ContractCall]], List[Any]]] = None):
        self.results = results
        self.responder = responder
        self.error: Optional[Exception] = None
        self.gate: Optional[asyncio.Event] = None
        self.invocations: List[List[ContractCall]] = []

    @property
    def call_count(self) -> int:
        return len(self.invocations)

    async def execute(self, calls: Sequence[ContractCall]) -> List[Any]:
        self.invocations.append(list(calls))
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        if self.responder is not None:
            return self.responder(calls)
        return list(self.results)


class EntityBatcher(Batcher):
    """Batcher reading ``label()`` for every label of every entity."""

    def __init__(self, executor: RecordingExecutor, entities: Dict[str, List[str]],
                 ttl: float = 2.0, clock: Optional[FakeClock] = None):
        super().__init__(ttl, clock=clock or FakeClock())
        self.executor = executor
        self.entities = entities
        self.contexts: List[Any] = []

    async def build_and_execute(self, context) -> None:
        self.contexts.append(context)
        batched_calls = [
            batched_call
            for entity_id, labels in self.entities.items()
            for batched_call in to_batched_calls(
                entity_id, [(label, ContractCall(TOKEN_ADDRESS, f"{label}()")) for label in labels]
            )
        ]
        await self.run_batched_calls(self.executor, batched_calls)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def vault_entities():
    return {"vault-1": ["balance", "decimals"], "vault-2": ["balance", "decimals"]}


@pytest.fixture
def executor():
    return RecordingExecutor(results=[100, 18, 50, 6])


@pytest.fixture
def batcher(executor, vault_entities, clock):
    return EntityBatcher(executor, vault_entities, ttl=2.0, clock=clock)
