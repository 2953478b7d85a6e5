"""Mongocache Cache — MongoDB cache store with TTL expiry and gzip compression."""

from mongocache.cache.adapters.mongodb import MongoCacheStore
from mongocache.cache.codec import GzipCodec
from mongocache.cache.factory import create, store_from_config
from mongocache.cache.ports.outbound import CacheStore

__all__ = [
    "CacheStore",
    "GzipCodec",
    "MongoCacheStore",
    "create",
    "store_from_config",
]
