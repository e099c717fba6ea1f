"""Tests for salt-based cache invalidation."""

import itertools
from unittest.mock import AsyncMock

import pytest

from querycache import (
    CacheConfig,
    InMemoryCacheBackend,
    InMemorySaltStore,
    InvalidationController,
    QueryCacheService,
    QuerySpec,
    SaltStoreUnavailableError,
)


def create_controller(
    salt_store: InMemorySaltStore | None = None,
    tracked_types: frozenset[str] = frozenset({"post"}),
    auxiliary_caches: list | None = None,
) -> tuple[InvalidationController, InMemorySaltStore]:
    """Create a controller with a deterministic token sequence."""
    store = salt_store or InMemorySaltStore()
    counter = itertools.count(1)
    controller = InvalidationController(
        salt_store=store,
        tracked_types=tracked_types,
        auxiliary_caches=auxiliary_caches or [],
        config=CacheConfig(),
        token_factory=lambda: f"salt-{next(counter)}",
    )
    return controller, store


class TestPublishTransitions:
    """Tests for which transitions invalidate."""

    @pytest.mark.asyncio
    async def test_publish_replaces_salt(self):
        """Publishing a tracked type writes a new salt."""
        controller, store = create_controller()

        replaced = await controller.on_content_published("post", "draft", "published")

        assert replaced is True
        assert await store.read_salt() == "salt-1"
        assert controller.flushed

    @pytest.mark.asyncio
    async def test_first_publish_creates_salt(self):
        """The salt is created by the first publish event."""
        controller, store = create_controller()
        assert await store.read_salt() is None

        await controller.on_content_published("post", None, "published")

        assert await store.read_salt() == "salt-1"

    @pytest.mark.parametrize(
        ("old_status", "new_status"),
        [
            ("published", "published"),
            ("draft", "pending"),
            ("published", "draft"),
            ("published", "trash"),
        ],
    )
    @pytest.mark.asyncio
    async def test_non_publish_transitions_ignored(self, old_status, new_status):
        """Only transitions into the published status invalidate."""
        controller, store = create_controller(InMemorySaltStore("salt-0"))

        replaced = await controller.on_content_published(
            "post", old_status, new_status
        )

        assert replaced is False
        assert await store.read_salt() == "salt-0"

    @pytest.mark.asyncio
    async def test_untracked_type_ignored(self):
        """Publishing an untracked type leaves the salt alone."""
        controller, store = create_controller(InMemorySaltStore("salt-0"))

        replaced = await controller.on_content_published("page", "draft", "published")

        assert replaced is False
        assert await store.read_salt() == "salt-0"
        assert not controller.flushed

    @pytest.mark.asyncio
    async def test_custom_published_status(self):
        """The published status is configurable."""
        store = InMemorySaltStore()
        controller = InvalidationController(
            salt_store=store,
            tracked_types={"post"},
            config=CacheConfig(published_status="publish"),
            token_factory=lambda: "new",
        )

        assert await controller.on_content_published("post", "draft", "published") is False
        assert await controller.on_content_published("post", "draft", "publish") is True


class TestDebounce:
    """Tests for once-per-scope invalidation."""

    @pytest.mark.asyncio
    async def test_bulk_publish_bumps_once(self):
        """Many publish events in one scope replace the salt once."""
        controller, store = create_controller()

        results = [
            await controller.on_content_published("post", "draft", "published")
            for _ in range(5)
        ]

        assert results == [True, False, False, False, False]
        assert await store.read_salt() == "salt-1"

    @pytest.mark.asyncio
    async def test_new_scope_bumps_again(self):
        """A fresh controller (new request) can invalidate again."""
        store = InMemorySaltStore()
        first, _ = create_controller(store)
        await first.on_content_published("post", "draft", "published")
        first_salt = await store.read_salt()

        second = InvalidationController(
            salt_store=store,
            tracked_types={"post"},
            token_factory=lambda: "salt-next",
        )
        await second.on_content_published("post", "draft", "published")

        assert await store.read_salt() != first_salt

    @pytest.mark.asyncio
    async def test_invalidate_all_ignores_debounce(self):
        """Manual invalidation always replaces the salt."""
        controller, store = create_controller()
        await controller.on_content_published("post", "draft", "published")

        assert await controller.invalidate_all() is True
        assert await store.read_salt() == "salt-2"


class TestFailures:
    """Tests for salt store and auxiliary cache failures."""

    @pytest.mark.asyncio
    async def test_salt_store_failure_is_not_raised(self):
        """A failing salt store doesn't break the publish path."""
        store = InMemorySaltStore()
        store.replace_salt = AsyncMock(  # type: ignore[method-assign]
            side_effect=SaltStoreUnavailableError("down")
        )
        controller, _ = create_controller(store)

        replaced = await controller.on_content_published("post", "draft", "published")

        assert replaced is False
        assert not controller.flushed

    @pytest.mark.asyncio
    async def test_retry_after_salt_store_failure(self):
        """A later publish in the same scope retries the replacement."""
        store = InMemorySaltStore()
        store.replace_salt = AsyncMock(  # type: ignore[method-assign]
            side_effect=[SaltStoreUnavailableError("down"), None]
        )
        controller, _ = create_controller(store)

        assert await controller.on_content_published("post", "draft", "published") is False
        assert await controller.on_content_published("post", "draft", "published") is True
        assert store.replace_salt.await_count == 2

    @pytest.mark.asyncio
    async def test_auxiliary_caches_flushed(self):
        """Auxiliary caches are flushed after the salt is replaced."""
        aux = InMemoryCacheBackend()
        await aux.set("k", b"v")
        controller, _ = create_controller(auxiliary_caches=[aux])

        await controller.on_content_published("post", "draft", "published")

        assert len(aux) == 0

    @pytest.mark.asyncio
    async def test_auxiliary_failure_does_not_abort(self):
        """A failing auxiliary cache doesn't stop the others or the salt."""
        broken = AsyncMock()
        broken.flush.side_effect = RuntimeError("aux down")
        healthy = AsyncMock()
        controller, store = create_controller(auxiliary_caches=[broken, healthy])

        replaced = await controller.on_content_published("post", "draft", "published")

        assert replaced is True
        assert await store.read_salt() == "salt-1"
        healthy.flush.assert_awaited_once()


class TestServiceIntegration:
    """Tests for controllers created by the service."""

    @pytest.mark.asyncio
    async def test_tracks_registry_types_by_default(
        self, service: QueryCacheService, salt_store: InMemorySaltStore
    ):
        """Without tracked_types the cacheable registry types are tracked."""
        controller = service.invalidation_controller()

        assert await controller.on_content_published("page", "draft", "published") is False
        assert await controller.on_content_published("article", "draft", "published") is True
        assert await salt_store.read_salt() is not None

    @pytest.mark.asyncio
    async def test_configured_tracked_types(
        self,
        backend: InMemoryCacheBackend,
        registry,
        entity_loader,
    ):
        """Configured tracked types take precedence."""
        from querycache import DefaultKeyBuilder, JsonSerializer

        store = InMemorySaltStore()
        service = QueryCacheService(
            backend=backend,
            key_builder=DefaultKeyBuilder(),
            serializer=JsonSerializer(),
            registry=registry,
            salt_store=store,
            entity_loader=entity_loader,
            config=CacheConfig(tracked_types=frozenset({"page"})),
        )
        controller = service.invalidation_controller()

        assert await controller.on_content_published("post", "draft", "published") is False
        assert await controller.on_content_published("page", "draft", "published") is True

    @pytest.mark.asyncio
    async def test_invalidation_isolates_writers(
        self,
        service: QueryCacheService,
        backend: InMemoryCacheBackend,
        posts: list,
    ):
        """Old entries stay stored but are no longer reachable."""
        spec = QuerySpec(search_term="widgets", content_types=("post",))

        async with service.query(spec) as session:
            await session.record(posts[:3], 3, 1)
            old_key = session.key
        assert old_key is not None

        controller = service.invalidation_controller()
        await controller.on_content_published("post", "draft", "published")

        async with service.query(spec) as session:
            assert session.key != old_key
            assert await session.try_get_cached() is None

        assert await backend.exists(old_key.result_key)
