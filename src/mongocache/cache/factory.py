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
"""Store construction helpers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from mongocache.cache.adapters.mongodb import MongoCacheStore
from mongocache.config.properties import CacheStoreProperties
from mongocache.core.config import Config


async def create(
    target: Any = None,
    options: Mapping[str, Any] | None = None,
    **kwargs: Any,
) -> MongoCacheStore:
    """Create a store and wait for its bootstrap to finish.

    Keyword arguments are merged over *options*, so
    ``await create("mongodb://db:27017/app", ttl=300, compression=True)``
    is equivalent to passing them in the mapping.
    """
    merged = {**(options or {}), **kwargs}
    store = MongoCacheStore(target, merged)
    await store.start()
    return store


def store_from_config(config: Config, **overrides: Any) -> MongoCacheStore:
    """Build an unstarted store from the ``mongocache.store`` section.

    *overrides* are passed to :class:`MongoCacheStore` as keyword
    arguments (``codec``, ``clock``, ``on_ready``).
    """
    properties = config.bind(CacheStoreProperties)
    return MongoCacheStore(properties.uri, properties.to_options(), **overrides)
