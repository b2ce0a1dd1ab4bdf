"""
Dedup Ledger

Owned store of accepted transaction references. The only mutating operation
is ``insert_if_absent``, which checks and records a reference in one atomic
step so two concurrent submissions of the same reference cannot both be
accepted.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Optional, Set

import redis

from swiftguard.core.config import LedgerBackend, LedgerConfig
from swiftguard.core.exceptions import LedgerException

logger = logging.getLogger(__name__)


class DedupLedger(ABC):
    """Set of accepted transaction references. Grows monotonically."""

    @property
    @abstractmethod
    def backend(self) -> str:
        pass

    @abstractmethod
    def insert_if_absent(self, reference: str) -> bool:
        """
        Record a reference unless it is already present.

        Returns:
            True if the reference was newly inserted, False if it was already seen
        """
        pass

    @abstractmethod
    def contains(self, reference: str) -> bool:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    def __contains__(self, reference: object) -> bool:
        return isinstance(reference, str) and self.contains(reference)


class InMemoryDedupLedger(DedupLedger):
    """Process-lifetime ledger guarded by a lock."""

    def __init__(self):
        self._references: Set[str] = set()
        self._lock = threading.Lock()

    @property
    def backend(self) -> str:
        return LedgerBackend.MEMORY.value

    def insert_if_absent(self, reference: str) -> bool:
        with self._lock:
            if reference in self._references:
                return False
            self._references.add(reference)
            return True

    def contains(self, reference: str) -> bool:
        with self._lock:
            return reference in self._references

    def clear(self) -> None:
        with self._lock:
            self._references.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._references)


class RedisDedupLedger(DedupLedger):
    """
    Ledger persisted in Redis, shared across processes.

    ``SET key 1 NX`` is atomic on the server, which makes it the
    insert-if-absent primitive.
    """

    def __init__(self, client: "redis.Redis", key_prefix: str = "swiftguard:ref:"):
        self.client = client
        self.key_prefix = key_prefix

    @classmethod
    def from_url(cls, redis_url: str, key_prefix: str = "swiftguard:ref:") -> "RedisDedupLedger":
        client = redis.from_url(
            redis_url,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
        )
        return cls(client, key_prefix)

    @property
    def backend(self) -> str:
        return LedgerBackend.REDIS.value

    def _key(self, reference: str) -> str:
        return f"{self.key_prefix}{reference}"

    def insert_if_absent(self, reference: str) -> bool:
        try:
            return bool(self.client.set(self._key(reference), 1, nx=True))
        except redis.RedisError as e:
            raise LedgerException(f"Failed to record reference: {e}", self.backend)

    def contains(self, reference: str) -> bool:
        try:
            return bool(self.client.exists(self._key(reference)))
        except redis.RedisError as e:
            raise LedgerException(f"Failed to look up reference: {e}", self.backend)

    def clear(self) -> None:
        try:
            keys = list(self.client.scan_iter(match=f"{self.key_prefix}*"))
            if keys:
                self.client.delete(*keys)
        except redis.RedisError as e:
            raise LedgerException(f"Failed to clear ledger: {e}", self.backend)

    def __len__(self) -> int:
        try:
            return sum(1 for _ in self.client.scan_iter(match=f"{self.key_prefix}*"))
        except redis.RedisError as e:
            raise LedgerException(f"Failed to count references: {e}", self.backend)


def create_ledger(config: Optional[LedgerConfig] = None) -> DedupLedger:
    """Create the ledger selected by configuration."""
    config = config or LedgerConfig()

    if config.backend == LedgerBackend.REDIS:
        logger.info("Using Redis dedup ledger")
        return RedisDedupLedger.from_url(config.redis_url, config.key_prefix)

    logger.info("Using in-memory dedup ledger")
    return InMemoryDedupLedger()
