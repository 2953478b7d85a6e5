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
"""Tests for CacheStoreProperties binding."""

from __future__ import annotations

from pathlib import Path

from mongocache.config.properties import CacheStoreProperties
from mongocache.core.config import Config


class TestCacheStoreProperties:
    def test_dataclass_defaults(self):
        props = CacheStoreProperties()
        assert props.uri == "mongodb://127.0.0.1:27017"
        assert props.database == ""
        assert props.collection == "cacheman"
        assert props.compression is False
        assert props.compression_level == 6
        assert props.ttl == 60
        assert props.client_options == {}

    def test_bind_from_packaged_defaults(self):
        props = Config.from_file("does-not-exist.yaml").bind(CacheStoreProperties)
        assert props == CacheStoreProperties()

    def test_bind_from_yaml(self, tmp_path: Path):
        config_file = tmp_path / "mongocache.yaml"
        config_file.write_text(
            "mongocache:\n"
            "  store:\n"
            "    uri: mongodb://db:27017\n"
            "    database: app\n"
            "    compression: true\n"
            "    ttl: 120\n"
            "    client_options:\n"
            "      maxPoolSize: 20\n"
        )
        props = Config.from_file(config_file).bind(CacheStoreProperties)
        assert props.uri == "mongodb://db:27017"
        assert props.database == "app"
        assert props.compression is True
        assert props.ttl == 120
        assert props.collection == "cacheman"
        assert props.client_options == {"maxPoolSize": 20}

    def test_env_strings_coerced(self, monkeypatch):
        monkeypatch.setenv("MONGOCACHE_STORE_COMPRESSION", "true")
        monkeypatch.setenv("MONGOCACHE_STORE_COMPRESSION_LEVEL", "9")
        props = Config({}).bind(CacheStoreProperties)
        assert props.compression is True
        assert props.compression_level == 9

    def test_to_options(self):
        props = CacheStoreProperties(database="app", ttl=5, client_options={"w": 1})
        assert props.to_options() == {
            "w": 1,
            "database": "app",
            "collection": "cacheman",
            "compression": False,
            "compression_level": 6,
            "ttl": 5,
        }

    def test_to_options_omits_blank_database(self):
        assert "database" not in CacheStoreProperties().to_options()

    def test_to_options_store_settings_win(self):
        props = CacheStoreProperties(ttl=5, client_options={"ttl": 999})
        assert props.to_options()["ttl"] == 5
