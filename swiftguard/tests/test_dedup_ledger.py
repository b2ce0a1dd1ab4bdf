"""
Tests for the dedup ledger backends.
"""

import threading
from unittest.mock import MagicMock, patch

import pytest
import redis

from swiftguard.core.config import LedgerBackend, LedgerConfig
from swiftguard.core.exceptions import LedgerException
from swiftguard.validators.dedup_ledger import (
    InMemoryDedupLedger,
    RedisDedupLedger,
    create_ledger,
)


class TestInMemoryDedupLedger:
    """Tests for the in-memory ledger."""

    def test_insert_if_absent(self, ledger):
        assert ledger.insert_if_absent("REF1") is True
        assert ledger.insert_if_absent("REF1") is False
        assert ledger.insert_if_absent("REF2") is True
        assert len(ledger) == 2

    def test_contains(self, ledger):
        ledger.insert_if_absent("REF1")

        assert ledger.contains("REF1")
        assert "REF1" in ledger
        assert "REF2" not in ledger
        assert 42 not in ledger

    def test_clear(self, ledger):
        ledger.insert_if_absent("REF1")
        ledger.clear()

        assert len(ledger) == 0
        assert ledger.insert_if_absent("REF1") is True

    def test_concurrent_inserts_accept_once(self, ledger):
        """Only one of many concurrent inserts of the same reference wins."""
        results = []
        results_lock = threading.Lock()
        barrier = threading.Barrier(16)

        def worker():
            barrier.wait()
            inserted = ledger.insert_if_absent("REF_RACE")
            with results_lock:
                results.append(inserted)

        threads = [threading.Thread(target=worker) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results.count(True) == 1
        assert len(ledger) == 1

    def test_backend_name(self, ledger):
        assert ledger.backend == "memory"


class TestRedisDedupLedger:
    """Tests for the Redis ledger with a mocked client."""

    @pytest.fixture
    def client(self):
        return MagicMock()

    def test_insert_uses_set_nx(self, client):
        client.set.return_value = True
        ledger = RedisDedupLedger(client, key_prefix="test:")

        assert ledger.insert_if_absent("REF1") is True
        client.set.assert_called_once_with("test:REF1", 1, nx=True)

    def test_insert_existing_reference(self, client):
        client.set.return_value = None
        ledger = RedisDedupLedger(client)

        assert ledger.insert_if_absent("REF1") is False

    def test_contains(self, client):
        client.exists.return_value = 1
        ledger = RedisDedupLedger(client, key_prefix="test:")

        assert ledger.contains("REF1")
        client.exists.assert_called_once_with("test:REF1")

    def test_clear_and_len(self, client):
        client.scan_iter.return_value = iter(["test:REF1", "test:REF2"])
        ledger = RedisDedupLedger(client, key_prefix="test:")

        ledger.clear()

        client.scan_iter.assert_called_with(match="test:*")
        client.delete.assert_called_once_with("test:REF1", "test:REF2")

        client.scan_iter.return_value = iter(["test:REF3"])
        assert len(ledger) == 1

    def test_redis_errors_wrapped(self, client):
        client.set.side_effect = redis.ConnectionError("connection refused")
        ledger = RedisDedupLedger(client)

        with pytest.raises(LedgerException) as exc_info:
            ledger.insert_if_absent("REF1")

        assert exc_info.value.context == {"backend": "redis"}

    def test_from_url(self):
        with patch("swiftguard.validators.dedup_ledger.redis.from_url") as from_url:
            ledger = RedisDedupLedger.from_url("redis://cache:6379/1", key_prefix="p:")

        from_url.assert_called_once()
        assert from_url.call_args.args[0] == "redis://cache:6379/1"
        assert from_url.call_args.kwargs["decode_responses"] is True
        assert ledger.key_prefix == "p:"


class TestCreateLedger:
    """Tests for backend selection."""

    def test_default_is_memory(self):
        assert isinstance(create_ledger(), InMemoryDedupLedger)

    def test_redis_backend(self):
        config = LedgerConfig(backend=LedgerBackend.REDIS, redis_url="redis://cache:6379/0")

        with patch("swiftguard.validators.dedup_ledger.redis.from_url") as from_url:
            ledger = create_ledger(config)

        assert isinstance(ledger, RedisDedupLedger)
        assert ledger.client is from_url.return_value
