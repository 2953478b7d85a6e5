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
"""Gzip codec for binary cache values."""

from __future__ import annotations

import asyncio
import gzip
import zlib
from typing import Any

from mongocache.config.options import DEFAULT_COMPRESSION_LEVEL
from mongocache.kernel.exceptions import CompressionException, DecompressionException

BINARY_TYPES: tuple[type, ...] = (bytes, bytearray, memoryview)


def is_compressible(value: Any) -> bool:
    """Return True if *value* is a binary blob the codec may compress.

    ``bson.Binary`` subclasses ``bytes`` and is therefore included; text,
    numbers and structured values never are.
    """
    return isinstance(value, BINARY_TYPES)


class GzipCodec:
    """Compresses and decompresses binary values with gzip framing.

    Work runs in the loop's default executor so large payloads do not
    block the event loop.
    """

    def __init__(self, level: int = DEFAULT_COMPRESSION_LEVEL) -> None:
        self._level = level

    @property
    def level(self) -> int:
        return self._level

    async def compress(self, data: bytes | bytearray | memoryview) -> bytes:
        """Gzip-compress *data*.

        Raises:
            CompressionException: If *data* is not binary or zlib fails.
        """
        if not is_compressible(data):
            raise CompressionException(
                f"Cannot compress value of type {type(data).__name__}",
                code="CODEC_001",
                context={"type": type(data).__name__},
            )
        try:
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(None, gzip.compress, bytes(data), self._level)
        except zlib.error as exc:
            raise CompressionException(str(exc), code="CODEC_001") from exc

    async def decompress(self, data: Any) -> bytes:
        """Decompress a gzip blob read back from the store.

        Raises:
            DecompressionException: If *data* is not binary or not a
                complete gzip stream.
        """
        if not is_compressible(data):
            raise DecompressionException(
                f"Stored compressed value has type {type(data).__name__}, expected bytes",
                code="CODEC_002",
                context={"type": type(data).__name__},
            )
        try:
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(None, gzip.decompress, bytes(data))
        except (OSError, EOFError, zlib.error) as exc:
            raise DecompressionException(
                f"Stored value is not a valid gzip stream: {exc}",
                code="CODEC_002",
            ) from exc
