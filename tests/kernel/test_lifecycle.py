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
"""Tests for the Lifecycle protocol."""

from __future__ import annotations

from mongocache.cache.adapters.mongodb import MongoCacheStore
from mongocache.kernel.lifecycle import Lifecycle


class TestLifecycleProtocol:
    def test_store_is_lifecycle(self):
        assert issubclass(MongoCacheStore, Lifecycle)

    def test_lifecycle_protocol_is_runtime_checkable(self):
        class Started:
            async def start(self) -> None: ...

            async def stop(self) -> None: ...

        class NotStarted:
            async def start(self) -> None: ...

        assert isinstance(Started(), Lifecycle)
        assert not isinstance(NotStarted(), Lifecycle)
