"""Cache ports — interfaces implemented by cache stores."""

from mongocache.cache.ports.outbound import CacheStore

__all__ = ["CacheStore"]
