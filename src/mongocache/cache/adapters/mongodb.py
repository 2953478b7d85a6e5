# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""MongoDB-backed cache store."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING, WriteConcern
from pymongo.errors import PyMongoError
from pymongo.results import DeleteResult

from mongocache.cache.codec import GzipCodec, is_compressible
from mongocache.config.options import StoreOptions, resolve_options
from mongocache.kernel.exceptions import ConfigurationException

_logger = logging.getLogger(__name__)

KEY_INDEX_NAME = "key_unique"
EXPIRY_INDEX_NAME = "expiresAt_ttl"

_EPOCH = datetime(1970, 1, 1)


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the way BSON dates round-trip."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class MongoCacheStore:
    """Cache store persisting one document per key in a MongoDB collection.

    Documents have the shape ``{key, value, expiresAt, compressed?}``.
    Expiry is enforced twice: a TTL index lets the server reap stale
    documents, and every read re-checks ``expiresAt`` so an entry that
    the reaper has not reached yet is never returned.

    The store performs no I/O until :meth:`start` runs. Operations call
    ``start()`` themselves, so requests issued before bootstrap finishes
    wait for it instead of failing.

    Args:
        target: A MongoDB connection string, a Motor client, a Motor
            database, or ``None`` to build the URI from *options*.
        options: Store settings (``database``, ``hosts``, ``collection``,
            ``compression``, ``ttl``, ...) and whitelisted driver options.
            A ``client`` entry is used as the connection handle.
        codec: Codec for binary values; defaults to gzip at the
            configured ``compression_level``.
        clock: Returns the current UTC time as a naive datetime.
        on_ready: Called with the store once indexes are in place; may be
            a coroutine function.
    """

    name = "mongodb"

    def __init__(
        self,
        target: Any = None,
        options: Mapping[str, Any] | None = None,
        *,
        codec: GzipCodec | None = None,
        clock: Callable[[], datetime] = utcnow,
        on_ready: Callable[[MongoCacheStore], Any] | None = None,
    ) -> None:
        handle = None if isinstance(target, str) else target
        if handle is None and options:
            handle = options.get("client")

        self._options: StoreOptions = resolve_options(target if isinstance(target, str) else None, options)
        self._codec = codec or GzipCodec(self._options.compression_level)
        self._clock = clock
        self._on_ready = on_ready

        self._client: Any = None
        self._database: Any = None
        self._owns_client = False
        if handle is not None:
            if hasattr(handle, "get_database"):
                self._client = handle
            elif hasattr(handle, "get_collection"):
                self._database = handle
            else:
                raise ConfigurationException(
                    f"Unsupported connection handle {type(handle).__name__}",
                    code="CONFIG_CONNECTION",
                )

        self._collection: Any = None
        self._start_lock = asyncio.Lock()
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def options(self) -> StoreOptions:
        return self._options

    @property
    def collection(self) -> Any:
        """The collection handle, or ``None`` before :meth:`start`."""
        return self._collection

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Connect, ensure the collection exists and declare its indexes.

        Collection and index failures are logged; the store still serves
        requests against the collection handle afterwards.
        """
        async with self._start_lock:
            if self._collection is not None:
                return

            database = self._open_database()
            name = self._options.collection
            _logger.debug("Bootstrapping cache collection '%s.%s'", self._options.database, name)

            try:
                if name not in await database.list_collection_names():
                    await database.create_collection(name)
            except PyMongoError as exc:
                _logger.warning("Could not create cache collection '%s': %s", name, exc)

            collection = database[name]
            if not collection.write_concern.acknowledged:
                collection = collection.with_options(write_concern=WriteConcern(w=1))
            self._collection = collection

            if await self._ensure_indexes(collection) and self._on_ready is not None:
                result = self._on_ready(self)
                if inspect.isawaitable(result):
                    await result

    async def stop(self) -> None:
        """Wait for pending expiry cleanups and close an owned client."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None
            self._owns_client = False
        self._collection = None

    async def __aenter__(self) -> MongoCacheStore:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

    def _open_database(self) -> Any:
        if self._database is not None:
            return self._database
        if self._client is None:
            self._client = AsyncIOMotorClient(self._options.uri, **self._options.client_kwargs)
            self._owns_client = True
        return self._client.get_database(self._options.database)

    async def _ensure_indexes(self, collection: Any) -> bool:
        # TTL index first; each index is declared on its own.
        declared = [
            await self._create_index(
                collection,
                [("expiresAt", ASCENDING)],
                name=EXPIRY_INDEX_NAME,
                background=True,
                expireAfterSeconds=int(self._options.ttl),
            ),
            await self._create_index(collection, [("key", ASCENDING)], name=KEY_INDEX_NAME, unique=True),
        ]
        if not all(declared):
            return False
        _logger.info("Cache collection '%s' ready", self._options.collection)
        return True

    async def _create_index(self, collection: Any, keys: list[tuple[str, int]], **kwargs: Any) -> bool:
        try:
            await collection.create_index(keys, **kwargs)
        except PyMongoError:
            _logger.exception(
                "Error during index creation '%s' on '%s'", kwargs.get("name"), self._options.collection
            )
            return False
        return True

    async def _ready_collection(self) -> Any:
        if self._collection is None:
            await self.start()
        return self._collection

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def get(self, key: str) -> Any | None:
        """Return the live value for *key*, or ``None``.

        An expired document is scheduled for removal and reported as a
        miss. Compressed values are decompressed before being returned.

        Raises:
            DecompressionException: If a compressed value is corrupt.
        """
        collection = await self._ready_collection()
        document = await collection.find_one({"key": key})
        if document is None:
            return None

        if self._is_expired(document.get("expiresAt")):
            self._schedule_purge(collection, document)
            return None

        if document.get("compressed"):
            return await self._codec.decompress(document["value"])
        return document.get("value")

    async def set(self, key: str, value: Any, ttl: float | timedelta | None = None) -> Any | None:
        """Upsert *value* under *key*, expiring after *ttl* seconds.

        An explicit ``ttl`` (zero included) wins over the store default.
        Binary values are compressed when compression is enabled.

        Returns:
            *value* as given, or ``None`` if the server matched and
            inserted nothing.
        """
        seconds = self._effective_ttl(ttl)
        collection = await self._ready_collection()

        document: dict[str, Any] = {
            "key": key,
            "value": value,
            "expiresAt": self._clock() + timedelta(seconds=seconds),
        }
        if self._options.compression and is_compressible(value):
            document["value"] = await self._codec.compress(value)
            document["compressed"] = True

        result = await collection.replace_one({"key": key}, document, upsert=True)
        if not result.matched_count and result.upserted_id is None:
            return None
        return value

    async def delete(self, key: str) -> DeleteResult:
        """Remove the entry for *key*; a missing key is not an error."""
        collection = await self._ready_collection()
        return await collection.delete_many({"key": key})

    async def reset(self) -> DeleteResult:
        """Remove every entry in the collection."""
        collection = await self._ready_collection()
        return await collection.delete_many({})

    def is_cacheable_value(self, value: Any) -> bool:
        return value is not None

    # ------------------------------------------------------------------
    # Expiry
    # ------------------------------------------------------------------

    def _effective_ttl(self, ttl: float | timedelta | None) -> float:
        if ttl is None:
            return float(self._options.ttl)
        seconds = ttl.total_seconds() if isinstance(ttl, timedelta) else float(ttl)
        if seconds < 0:
            raise ValueError(f"ttl must not be negative, got {ttl!r}")
        return seconds

    def _is_expired(self, expires_at: Any) -> bool:
        now = self._clock()
        if isinstance(expires_at, datetime):
            if expires_at.tzinfo is not None:
                expires_at = expires_at.astimezone(timezone.utc).replace(tzinfo=None)
            return expires_at < now
        # Epoch milliseconds, as written by earlier versions of the document shape.
        if isinstance(expires_at, (int, float)) and not isinstance(expires_at, bool):
            return expires_at < (now - _EPOCH) / timedelta(milliseconds=1)
        return False

    def _schedule_purge(self, collection: Any, document: Mapping[str, Any]) -> None:
        # Matching on expiresAt too leaves a concurrently refreshed entry alone.
        task = asyncio.ensure_future(
            self._purge(collection, {"_id": document["_id"], "expiresAt": document["expiresAt"]})
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _purge(self, collection: Any, query: dict[str, Any]) -> None:
        try:
            await collection.delete_one(query)
        except PyMongoError as exc:
            _logger.warning("Failed to remove expired cache entry %s: %s", query.get("_id"), exc)
