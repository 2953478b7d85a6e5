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
"""Mongocache Logging: structlog output for the store's loggers."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from mongocache.core.config import Config
from mongocache.logging.structlog_adapter import StructlogAdapter


@runtime_checkable
class LoggingPort(Protocol):
    """What :func:`configure_logging` hands back to the application.

    ``configure`` applies the ``mongocache.logging.*`` keys, and
    ``set_level`` adjusts one logger afterwards (for example
    ``mongocache.cache.adapters.mongodb`` to trace bootstrap and purges).
    """

    def configure(self, config: Config) -> None: ...
    def get_logger(self, name: str) -> Any: ...
    def set_level(self, name: str, level: str) -> None: ...


def configure_logging(config: Config) -> LoggingPort:
    """Configure structlog from *config* and return the adapter."""
    adapter = StructlogAdapter()
    adapter.configure(config)
    return adapter


__all__ = ["LoggingPort", "StructlogAdapter", "configure_logging"]
