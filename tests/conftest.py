"""Pytest configuration for querycache tests."""

from dataclasses import dataclass

import pytest

from querycache import (
    CacheConfig,
    DefaultKeyBuilder,
    InMemoryCacheBackend,
    InMemoryEntityLoader,
    InMemorySaltStore,
    JsonSerializer,
    QueryCacheService,
    StaticContentTypeRegistry,
)


@dataclass(frozen=True)
class Post:
    """Minimal content entity used across tests."""

    id: int
    title: str
    post_type: str = "post"


@pytest.fixture(autouse=True)
def reset_decorator_config():
    """Reset decorator configuration before each test."""
    import querycache.decorators

    # Store original value
    original_service = querycache.decorators._cache_service

    yield

    # Restore original value after test
    querycache.decorators._cache_service = original_service


@pytest.fixture
def posts() -> list[Post]:
    """A small set of stored posts."""
    return [Post(id=i, title=f"Widget {i}") for i in range(1, 6)]


@pytest.fixture
def entity_loader(posts: list[Post]) -> InMemoryEntityLoader:
    """An entity loader knowing every post fixture."""
    return InMemoryEntityLoader({post.id: post for post in posts})


@pytest.fixture
def backend() -> InMemoryCacheBackend:
    """An empty in-memory backend."""
    return InMemoryCacheBackend(maxsize=100)


@pytest.fixture
def salt_store() -> InMemorySaltStore:
    """A salt store holding no salt yet."""
    return InMemorySaltStore()


@pytest.fixture
def registry() -> StaticContentTypeRegistry:
    """Registry where posts and articles are cacheable, pages are not."""
    return StaticContentTypeRegistry({"post": True, "article": True, "page": False})


@pytest.fixture
def config() -> CacheConfig:
    """Default configuration with remote-index integration enabled."""
    return CacheConfig(remote_index_integration=True)


@pytest.fixture
def service(
    backend: InMemoryCacheBackend,
    registry: StaticContentTypeRegistry,
    salt_store: InMemorySaltStore,
    entity_loader: InMemoryEntityLoader,
    config: CacheConfig,
) -> QueryCacheService:
    """A fully wired query cache service."""
    return QueryCacheService(
        backend=backend,
        key_builder=DefaultKeyBuilder(prefix="test"),
        serializer=JsonSerializer(),
        registry=registry,
        salt_store=salt_store,
        entity_loader=entity_loader,
        config=config,
    )
