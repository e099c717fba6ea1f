"""Integration adapters for querycache."""

from querycache.adapters.orchestration import QueryCacheHandler, QueryExecutor

__all__ = ["QueryCacheHandler", "QueryExecutor"]
