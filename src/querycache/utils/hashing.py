"""Hashing utilities for cache key generation."""

import hashlib
import json
from collections.abc import Mapping
from dataclasses import fields
from typing import Any

from querycache.core.entities.query_spec import QuerySpec

# 32 hex characters of SHA-256 (128 bits)
DIGEST_LENGTH = 32


def hash_value(value: Any) -> str:
    """Create a deterministic hash of a value.

    Args:
        value: Any JSON-serializable value.

    Returns:
        A hexadecimal hash string (first 32 chars of SHA-256).
    """
    if value is None:
        return "none"

    # Normalize to JSON with sorted keys for determinism
    normalized = json.dumps(
        normalize_value(value), sort_keys=True, default=_encode_unknown
    )
    return hashlib.sha256(normalized.encode()).hexdigest()[:DIGEST_LENGTH]


def normalize_search_term(term: str | None) -> str | None:
    """Collapse whitespace in a search term.

    Args:
        term: The raw search term.

    Returns:
        The normalized term, or None when it is blank.
    """
    if term is None:
        return None
    collapsed = " ".join(term.split())
    return collapsed or None


def normalize_value(value: Any) -> Any:
    """Recursively convert a value into a JSON-stable structure.

    Sets become sorted lists, tuples become lists and mapping keys
    become strings tagged with their type unless they are strings
    already, so that ``json.dumps(sort_keys=True)`` sees the
    same structure for values that mean the same thing.
    """
    if isinstance(value, Mapping):
        return {_encode_key(k): normalize_value(v) for k, v in value.items()}
    if isinstance(value, (set, frozenset)):
        return sorted((normalize_value(v) for v in value), key=repr)
    if isinstance(value, (list, tuple)):
        return [normalize_value(v) for v in value]
    return value


def canonicalize_spec(spec: QuerySpec) -> dict[str, Any]:
    """Reduce a query spec to the canonical mapping that gets hashed.

    Transient fields are dropped, content types are treated as a set,
    the search term is whitespace-normalized and the sort direction is
    upper-cased.

    Args:
        spec: The query specification.

    Returns:
        A JSON-serializable mapping.
    """
    canonical: dict[str, Any] = {}
    for spec_field in fields(spec):
        if spec_field.metadata.get("transient"):
            continue
        canonical[spec_field.name] = normalize_value(getattr(spec, spec_field.name))

    canonical["search_term"] = normalize_search_term(spec.search_term)
    canonical["content_types"] = sorted(set(spec.content_types))
    if isinstance(spec.order, str):
        canonical["order"] = spec.order.upper()

    return canonical


def _encode_key(key: Any) -> str:
    """Render a mapping key so that ``1`` and ``"1"`` stay distinct."""
    if isinstance(key, str):
        return key
    return f"{type(key).__name__}:{key!r}"


def _encode_unknown(value: Any) -> dict[str, str]:
    """Encode a value JSON has no type for, keeping its type apart."""
    return {"__type__": type(value).__qualname__, "repr": repr(value)}
