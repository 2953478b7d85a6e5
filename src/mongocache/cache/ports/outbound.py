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
"""Cache store protocol."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Store interface consumed by a cache manager.

    ``get`` returns ``None`` for a missing or expired key. ``set`` returns
    the value that was stored, or ``None`` when the backend reports that no
    entry was written. ``delete`` and ``reset`` return the backend's
    acknowledgement unchanged.
    """

    name: str

    async def get(self, key: str) -> Any | None: ...

    async def set(self, key: str, value: Any, ttl: float | timedelta | None = None) -> Any | None: ...

    async def delete(self, key: str) -> Any: ...

    async def reset(self) -> Any: ...

    def is_cacheable_value(self, value: Any) -> bool: ...
