"""Exception hierarchy for querycache.

Every failure in the caching layer is recoverable: callers fall back to
executing the real query. These exceptions exist so collaborators can
signal *what* went wrong; the session decides how to degrade.
"""


class QueryCacheError(Exception):
    """Base class for all querycache errors."""


class CacheUnavailableError(QueryCacheError):
    """Raised when the backing key-value store cannot be reached."""


class MalformedCacheEntryError(QueryCacheError):
    """Raised when a stored value cannot be decoded into the expected shape."""


class SaltStoreUnavailableError(QueryCacheError):
    """Raised when the invalidation salt cannot be read or written."""
