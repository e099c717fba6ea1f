"""Tests for InMemoryCacheBackend."""

from datetime import timedelta

import pytest

from querycache.infrastructure.backends.memory import InMemoryCacheBackend


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestInMemoryCacheBackend:
    """Tests for InMemoryCacheBackend."""

    @pytest.fixture
    def clock(self) -> FakeClock:
        return FakeClock()

    @pytest.fixture
    def backend(self, clock: FakeClock) -> InMemoryCacheBackend:
        """Create a backend for testing."""
        return InMemoryCacheBackend(maxsize=100, default_ttl=300.0, timer=clock)

    @pytest.mark.asyncio
    async def test_set_and_get(self, backend: InMemoryCacheBackend) -> None:
        """Test basic set and get operations."""
        await backend.set("key1", b"value1")
        result = await backend.get("key1")
        assert result == b"value1"

    @pytest.mark.asyncio
    async def test_get_missing_key(self, backend: InMemoryCacheBackend) -> None:
        """Test getting a missing key returns None."""
        result = await backend.get("nonexistent")
        assert result is None

    @pytest.mark.asyncio
    async def test_delete(self, backend: InMemoryCacheBackend) -> None:
        """Test deleting a key."""
        await backend.set("key1", b"value1")

        # Delete existing key
        deleted = await backend.delete("key1")
        assert deleted is True

        # Verify deleted
        result = await backend.get("key1")
        assert result is None

        # Delete non-existing key
        deleted = await backend.delete("key1")
        assert deleted is False

    @pytest.mark.asyncio
    async def test_exists(self, backend: InMemoryCacheBackend) -> None:
        """Test checking if key exists."""
        await backend.set("key1", b"value1")

        assert await backend.exists("key1") is True
        assert await backend.exists("nonexistent") is False

    @pytest.mark.asyncio
    async def test_clear(self, backend: InMemoryCacheBackend) -> None:
        """Test clearing all keys."""
        await backend.set("key1", b"value1")
        await backend.set("key2", b"value2")

        await backend.clear()

        assert len(backend) == 0
        assert await backend.get("key1") is None

    @pytest.mark.asyncio
    async def test_flush_clears(self, backend: InMemoryCacheBackend) -> None:
        """Test flush() empties the backend like clear()."""
        await backend.set("key1", b"value1")

        await backend.flush()

        assert len(backend) == 0

    @pytest.mark.asyncio
    async def test_per_item_ttl(
        self, backend: InMemoryCacheBackend, clock: FakeClock
    ) -> None:
        """Test that each item expires after its own TTL."""
        await backend.set("short", b"s", ttl=timedelta(seconds=10))
        await backend.set("long", b"l", ttl=timedelta(minutes=30))

        clock.now = 11.0

        assert await backend.get("short") is None
        assert await backend.get("long") == b"l"

    @pytest.mark.asyncio
    async def test_default_ttl(
        self, backend: InMemoryCacheBackend, clock: FakeClock
    ) -> None:
        """Test that items without a TTL use the default."""
        await backend.set("key1", b"value1")

        clock.now = 299.0
        assert await backend.get("key1") == b"value1"

        clock.now = 301.0
        assert await backend.get("key1") is None

    @pytest.mark.asyncio
    async def test_lru_eviction(self, clock: FakeClock) -> None:
        """Test that the least recently used item is evicted when full."""
        backend = InMemoryCacheBackend(maxsize=2, timer=clock)
        await backend.set("a", b"1")
        await backend.set("b", b"2")
        await backend.get("a")
        await backend.set("c", b"3")

        assert await backend.get("a") == b"1"
        assert await backend.get("b") is None
        assert await backend.get("c") == b"3"

    def test_maxsize(self, backend: InMemoryCacheBackend) -> None:
        """Test the maxsize property."""
        assert backend.maxsize == 100
