"""mongocache — a MongoDB cache store with TTL expiry and optional gzip compression."""

from mongocache.cache import CacheStore, GzipCodec, MongoCacheStore, create, store_from_config
from mongocache.config import StoreOptions, resolve_options
from mongocache.core import Config

__version__ = "0.1.0"

__all__ = [
    "CacheStore",
    "Config",
    "GzipCodec",
    "MongoCacheStore",
    "StoreOptions",
    "create",
    "resolve_options",
    "store_from_config",
]
