"""
Base class for the per-dataset vault fetchers.
"""

import time
from typing import Any, Callable, Dict, Optional

from ..batchers.base import Batcher, ContextT


class VaultFetcher(Batcher[ContextT]):
    """
    Batcher whose TTL defaults to a configured setting.

    Subclasses name the BatcherConfig attribute holding their TTL so the
    registry can build them with no arguments.
    """

    TTL_SETTING: str = ""

    def __init__(self, ttl: Optional[float] = None, clock: Callable[[], float] = time.monotonic):
        if ttl is None:
            from ..config import get_config

            ttl = getattr(get_config().batchers, self.TTL_SETTING)
        super().__init__(ttl, clock=clock)

    def entity_data(self, entity_id: str) -> Dict[str, Any]:
        """Copy of the cached fields of one entity, empty when unknown."""
        return dict(self.store.get(entity_id, {}))

    def snapshot(self) -> Dict[str, Dict[str, Any]]:
        """Copy of the whole store."""
        return {entity_id: dict(fields) for entity_id, fields in self.store.items()}
