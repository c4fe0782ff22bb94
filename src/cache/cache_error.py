"""Error raised by key-value stores."""


class CacheError(Exception):
    """Cache or history backend is unreachable or refused the operation."""
