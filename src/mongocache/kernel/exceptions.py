"""Exception hierarchy for mongocache.

All errors raised by the store itself inherit from MongoCacheException.
Driver errors (``pymongo.errors.PyMongoError``) raised by find, upsert and
remove calls are deliberately not wrapped: they reach the caller unchanged.

Categories:
- ConfigurationException: invalid store options
- InfrastructureException: failures of the storage pipeline owned by the store
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class MongoCacheException(Exception):
    """Base exception for all mongocache errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CODEC_002").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(MongoCacheException):
    """Store options are missing, malformed or out of range."""


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(MongoCacheException):
    """Failures in the storage pipeline owned by the store."""


class CodecException(InfrastructureException):
    """A stored value could not be encoded or decoded."""


class CompressionException(CodecException):
    """A value could not be compressed before storage."""


class DecompressionException(CodecException):
    """A stored compressed value is corrupt or not a gzip stream."""
