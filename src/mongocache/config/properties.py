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
"""Cache store configuration properties."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from mongocache.config.options import (
    DEFAULT_COLLECTION,
    DEFAULT_COMPRESSION_LEVEL,
    DEFAULT_TTL,
    DEFAULT_URI,
)
from mongocache.core.config import config_properties


@config_properties(prefix="mongocache.store")
@dataclass
class CacheStoreProperties:
    """Configuration for the MongoDB cache store (mongocache.store.*)."""

    uri: str = DEFAULT_URI
    database: str = ""
    collection: str = DEFAULT_COLLECTION
    compression: bool = False
    compression_level: int = DEFAULT_COMPRESSION_LEVEL
    ttl: int = DEFAULT_TTL
    client_options: dict = field(default_factory=dict)

    def to_options(self) -> dict[str, Any]:
        """Flatten into the option bag understood by ``resolve_options``."""
        options: dict[str, Any] = dict(self.client_options)
        options.update(
            collection=self.collection,
            compression=self.compression,
            compression_level=self.compression_level,
            ttl=self.ttl,
        )
        if self.database:
            options["database"] = self.database
        return options
