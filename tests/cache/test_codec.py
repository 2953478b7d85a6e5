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
"""Tests for the gzip codec and its binary-only gate."""

from __future__ import annotations

import gzip

import pytest

from mongocache.cache.codec import GzipCodec, is_compressible
from mongocache.kernel.exceptions import CodecException, CompressionException, DecompressionException


class TestIsCompressible:
    @pytest.mark.parametrize("value", [b"x", bytearray(b"x"), memoryview(b"x")])
    def test_binary_types(self, value):
        assert is_compressible(value) is True

    @pytest.mark.parametrize("value", ["text", 1, 1.5, None, {"a": b"x"}, [b"x"]])
    def test_other_types(self, value):
        assert is_compressible(value) is False

    def test_bson_binary_is_bytes(self):
        from bson import Binary

        assert is_compressible(Binary(b"payload")) is True


class TestGzipCodec:
    @pytest.mark.asyncio
    async def test_output_is_standard_gzip(self):
        codec = GzipCodec()
        compressed = await codec.compress(b"hello world")
        assert gzip.decompress(compressed) == b"hello world"

    @pytest.mark.asyncio
    async def test_round_trip(self):
        codec = GzipCodec(level=9)
        payload = b"abc" * 1000
        compressed = await codec.compress(payload)
        assert len(compressed) < len(payload)
        assert await codec.decompress(compressed) == payload

    @pytest.mark.asyncio
    async def test_memoryview_input(self):
        codec = GzipCodec()
        compressed = await codec.compress(memoryview(b"view"))
        assert await codec.decompress(compressed) == b"view"

    @pytest.mark.asyncio
    async def test_decompress_accepts_bson_binary(self):
        from bson import Binary

        codec = GzipCodec()
        assert await codec.decompress(Binary(gzip.compress(b"stored"))) == b"stored"

    def test_default_level(self):
        assert GzipCodec().level == 6

    @pytest.mark.asyncio
    async def test_compress_rejects_text(self):
        with pytest.raises(CompressionException, match="Cannot compress value of type str"):
            await GzipCodec().compress("text")  # type: ignore[arg-type]

    @pytest.mark.asyncio
    async def test_decompress_corrupt_blob(self):
        with pytest.raises(DecompressionException, match="not a valid gzip stream") as exc_info:
            await GzipCodec().decompress(b"definitely not gzip")
        assert exc_info.value.code == "CODEC_002"
        assert exc_info.value.__cause__ is not None

    @pytest.mark.asyncio
    async def test_decompress_truncated_blob(self):
        truncated = gzip.compress(b"x" * 1000)[:-8]
        with pytest.raises(DecompressionException):
            await GzipCodec().decompress(truncated)

    @pytest.mark.asyncio
    async def test_decompress_non_binary(self):
        with pytest.raises(DecompressionException, match="expected bytes"):
            await GzipCodec().decompress({"not": "bytes"})

    def test_codec_errors_share_a_base(self):
        assert issubclass(CompressionException, CodecException)
        assert issubclass(DecompressionException, CodecException)
