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
"""Store option resolution.

Turns the loosely-typed option bag accepted by the store (connection
fields, store settings and driver tuning keys) into a frozen
:class:`StoreOptions`. Resolution is pure: the caller's mapping is never
modified.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any
from urllib.parse import quote_plus, unquote_plus, urlsplit

from mongocache.kernel.exceptions import ConfigurationException

_logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 27017
DEFAULT_URI = f"mongodb://{DEFAULT_HOST}:{DEFAULT_PORT}"
DEFAULT_DATABASE = "cacheman"
DEFAULT_COLLECTION = "cacheman"
DEFAULT_TTL = 60
DEFAULT_COMPRESSION_LEVEL = 6

# Keyword arguments forwarded verbatim to the Motor/PyMongo client.
VALID_OPTION_NAMES: frozenset[str] = frozenset(
    {
        # pool
        "maxPoolSize",
        "minPoolSize",
        "maxIdleTimeMS",
        "maxConnecting",
        "waitQueueTimeoutMS",
        # tls
        "tls",
        "tlsInsecure",
        "tlsAllowInvalidCertificates",
        "tlsAllowInvalidHostnames",
        "tlsCAFile",
        "tlsCertificateKeyFile",
        "tlsCertificateKeyFilePassword",
        "tlsCRLFile",
        "tlsDisableOCSPEndpointCheck",
        # timeouts
        "connectTimeoutMS",
        "socketTimeoutMS",
        "serverSelectionTimeoutMS",
        "timeoutMS",
        # topology / high availability
        "replicaSet",
        "directConnection",
        "heartbeatFrequencyMS",
        "localThresholdMS",
        "retryWrites",
        "retryReads",
        # read / write concern
        "w",
        "wTimeoutMS",
        "journal",
        "readPreference",
        "readPreferenceTags",
        "maxStalenessSeconds",
        "readConcernLevel",
        # auth
        "authSource",
        "authMechanism",
        "authMechanismProperties",
        # serialization
        "document_class",
        "tz_aware",
        "tzinfo",
        "uuidRepresentation",
        "unicode_decode_error_handler",
        "type_registry",
        # misc
        "appname",
        "compressors",
        "zlibCompressionLevel",
        "connect",
    }
)

# Option names of the original driver mapped onto their PyMongo spelling.
LEGACY_OPTION_NAMES: Mapping[str, str] = MappingProxyType(
    {
        "poolSize": "maxPoolSize",
        "ssl": "tls",
        "sslCA": "tlsCAFile",
        "sslCert": "tlsCertificateKeyFile",
        "sslKey": "tlsCertificateKeyFile",
        "sslPass": "tlsCertificateKeyFilePassword",
        "sslCRL": "tlsCRLFile",
        "wtimeout": "wTimeoutMS",
        "j": "journal",
        "haInterval": "heartbeatFrequencyMS",
        "acceptableLatencyMS": "localThresholdMS",
        "secondaryAcceptableLatencyMS": "localThresholdMS",
    }
)

# Original driver options with no PyMongo counterpart.
UNSUPPORTED_OPTION_NAMES: frozenset[str] = frozenset(
    {
        "autoReconnect",
        "noDelay",
        "keepAlive",
        "keepAliveInitialDelay",
        "family",
        "reconnectTries",
        "reconnectInterval",
        "ha",
        "connectWithNoPrimary",
        "forceServerObjectId",
        "serializeFunctions",
        "ignoreUndefined",
        "raw",
        "bufferMaxEntries",
        "pkFactory",
        "promiseLibrary",
        "loggerLevel",
        "logger",
        "promoteValues",
        "promoteBuffers",
        "promoteLongs",
        "domainsEnabled",
        "checkServerIdentity",
        "validateOptions",
        "auth",
    }
)

# Keys consumed by the store itself rather than the driver.
STORE_OPTION_NAMES: frozenset[str] = frozenset(
    {
        "database",
        "db",
        "hosts",
        "host",
        "port",
        "username",
        "password",
        "collection",
        "compression",
        "compression_level",
        "compressionLevel",
        "ttl",
        "client",
    }
)


@dataclass(frozen=True)
class StoreOptions:
    """Fully resolved, immutable store settings."""

    uri: str = DEFAULT_URI
    database: str = DEFAULT_DATABASE
    collection: str = DEFAULT_COLLECTION
    compression: bool = False
    compression_level: int = DEFAULT_COMPRESSION_LEVEL
    ttl: int | float = DEFAULT_TTL
    client_kwargs: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


def resolve_options(target: str | None = None, options: Mapping[str, Any] | None = None) -> StoreOptions:
    """Resolve a connection target and an option bag into :class:`StoreOptions`.

    Args:
        target: A MongoDB connection string, or ``None`` to derive one from
            the ``hosts``/``host``/``port``/``database`` options.
        options: Store settings and driver keyword arguments. Not modified.

    Raises:
        ConfigurationException: If ``ttl``, ``compression_level`` or
            ``hosts`` hold unusable values.
    """
    raw: Mapping[str, Any] = options or {}

    database = raw.get("database") or raw.get("db")
    if target is None:
        uri = format_uri(
            _resolve_hosts(raw),
            database=database,
            username=raw.get("username"),
            password=raw.get("password"),
        )
    else:
        uri = target

    return StoreOptions(
        uri=uri,
        database=str(database or database_from_uri(uri) or DEFAULT_DATABASE),
        collection=str(raw.get("collection") or DEFAULT_COLLECTION),
        compression=bool(raw.get("compression", False)),
        compression_level=_resolve_compression_level(raw),
        ttl=_resolve_ttl(raw.get("ttl")),
        client_kwargs=MappingProxyType(pick_client_options(raw)),
    )


def pick_client_options(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Return the driver keyword arguments contained in *raw*.

    Whitelisted names pass through, legacy names are renamed, and options
    the driver no longer understands are dropped.
    """
    picked: dict[str, Any] = {}
    for name, value in raw.items():
        if name in STORE_OPTION_NAMES:
            continue
        if name in VALID_OPTION_NAMES:
            picked[name] = value
        elif name == "sslValidate":
            picked["tlsAllowInvalidCertificates"] = not value
        elif name in LEGACY_OPTION_NAMES:
            picked.setdefault(LEGACY_OPTION_NAMES[name], value)
        elif name in UNSUPPORTED_OPTION_NAMES:
            _logger.debug("Dropping unsupported client option '%s'", name)
    return picked


def format_uri(
    hosts: Sequence[tuple[str, int]],
    database: str | None = None,
    username: str | None = None,
    password: str | None = None,
) -> str:
    """Build a ``mongodb://`` connection string from its parts."""
    credentials = ""
    if username:
        credentials = quote_plus(str(username))
        if password is not None:
            credentials += ":" + quote_plus(str(password))
        credentials += "@"
    netloc = ",".join(f"{host}:{port}" for host, port in hosts)
    path = f"/{quote_plus(str(database))}" if database else ""
    return f"mongodb://{credentials}{netloc}{path}"


def database_from_uri(uri: str) -> str | None:
    """Return the default database named in the path of *uri*, if any."""
    path = urlsplit(uri).path.lstrip("/")
    return unquote_plus(path) or None


def _resolve_hosts(raw: Mapping[str, Any]) -> list[tuple[str, int]]:
    hosts = raw.get("hosts")
    if not hosts:
        return [(str(raw.get("host") or DEFAULT_HOST), int(raw.get("port") or DEFAULT_PORT))]

    resolved: list[tuple[str, int]] = []
    for entry in hosts:
        if isinstance(entry, Mapping):
            resolved.append((str(entry.get("host") or DEFAULT_HOST), int(entry.get("port") or DEFAULT_PORT)))
        elif isinstance(entry, str):
            host, _, port = entry.partition(":")
            resolved.append((host or DEFAULT_HOST, int(port) if port else DEFAULT_PORT))
        else:
            raise ConfigurationException(
                f"Unsupported host entry {entry!r}",
                code="CONFIG_HOSTS",
                context={"hosts": list(hosts)},
            )
    return resolved


def _resolve_ttl(value: Any) -> int | float:
    if value is None:
        return DEFAULT_TTL
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        raise ConfigurationException(
            f"ttl must be a non-negative number of seconds, got {value!r}",
            code="CONFIG_TTL",
            context={"ttl": value},
        )
    return value


def _resolve_compression_level(raw: Mapping[str, Any]) -> int:
    value = raw.get("compression_level", raw.get("compressionLevel"))
    if value is None:
        return DEFAULT_COMPRESSION_LEVEL
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 9:
        raise ConfigurationException(
            f"compression_level must be an integer between 0 and 9, got {value!r}",
            code="CONFIG_COMPRESSION_LEVEL",
            context={"compression_level": value},
        )
    return value
