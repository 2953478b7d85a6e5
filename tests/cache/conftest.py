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
"""Fixtures wiring MongoCacheStore to the in-memory Motor stubs."""

from __future__ import annotations

import pytest
from motor_stubs import FakeClock, FakeCollection, FakeMotorClient

from mongocache.cache.adapters.mongodb import MongoCacheStore


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def client() -> FakeMotorClient:
    return FakeMotorClient()


@pytest.fixture
def collection(client: FakeMotorClient) -> FakeCollection:
    return client.get_database("test")["cacheman"]


@pytest.fixture
def store(client: FakeMotorClient, clock: FakeClock) -> MongoCacheStore:
    return MongoCacheStore(client, {"database": "test"}, clock=clock)


@pytest.fixture
def compressing_store(client: FakeMotorClient, clock: FakeClock) -> MongoCacheStore:
    return MongoCacheStore(client, {"database": "test", "compression": True}, clock=clock)
