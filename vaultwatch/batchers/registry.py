"""
Registry holding one Batcher per cache key.
"""

import logging
from threading import Lock
from typing import Dict, List, Type, TypeVar

from .base import Batcher
from .errors import ValidationError

logger = logging.getLogger(__name__)

B = TypeVar("B", bound=Batcher)


class BatcherRegistry:
    """
    Maps cache keys (one per chain or wallet context) to Batcher instances.

    Instances are created lazily on first request and live as long as the
    registry. Keys are never evicted; their number is bounded by the number of
    chains and wallets in use.
    """

    def __init__(self):
        self._instances: Dict[str, Batcher] = {}
        self._lock = Lock()

    def get_instance(self, key: str, batcher_cls: Type[B]) -> B:
        """
        Get the batcher for a key, creating it on first use.

        Args:
            key: Cache key, e.g. "lps-137"
            batcher_cls: Batcher class with a zero-argument constructor

        Returns:
            The single instance registered for the key

        Raises:
            ValidationError: If the key is registered with an unrelated class
        """
        try:
            instance = self._instances[key]
        except KeyError:
            with self._lock:
                # Another thread may have created it while we waited for the lock
                instance = self._instances.get(key)
                if instance is None:
                    instance = batcher_cls()
                    self._instances[key] = instance
                    logger.debug(f"Created {batcher_cls.__name__} for {key}")

        if not isinstance(instance, batcher_cls):
            raise ValidationError(
                f"Key {key} is registered to {type(instance).__name__}, not {batcher_cls.__name__}"
            )
        return instance

    def keys(self) -> List[str]:
        return list(self._instances)

    def clear(self) -> None:
        """Drop every instance."""
        with self._lock:
            self._instances.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._instances

    def __len__(self) -> int:
        return len(self._instances)
