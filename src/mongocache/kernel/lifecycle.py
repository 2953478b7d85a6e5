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
"""Lifecycle protocol for components that own connections.

The store opens its client and declares its indexes in start(), and
releases what it owns in stop(). Callers that run their own application
context call these in registration order and reverse order respectively.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Lifecycle(Protocol):
    """Standard lifecycle for infrastructure adapters."""

    async def start(self) -> None:
        """Open connections and prepare server-side state.

        Must be safe to call more than once; only the first call does work.
        """
        ...

    async def stop(self) -> None:
        """Release connections and clean up resources.

        Best-effort cleanup -- pending background work is awaited and its
        failures are logged rather than raised.
        """
        ...
