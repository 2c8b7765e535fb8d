# SPDX-License-Identifier: MIT
#
#  █████╗ ██████╗  █████╗ ███████╗
# ██╔══██╗██╔══██╗██╔══██╗██╔════╝
# ███████║██████╔╝███████║███████╗
# ██╔══██║██╔══██╗██╔══██║╚════██║
# ██║  ██║██║  ██║██║  ██║███████║
# ╚═╝  ╚═╝╚═╝  ╚═╝╚═╝  ╚═╝╚══════╝
# Copyright (C) 2026 Riza Emre ARAS <r.emrearas@proton.me>
#
# Licensed under the MIT License.
# See LICENSE and THIRD_PARTY_LICENSES for details.

"""SPARQL 1.1 Protocol client — queries, updates, redirects, typed results."""

from __future__ import annotations

from sparql_protocol.config import ClientConfig, load_config, load_env_config
from sparql_protocol.errors import (
    CircularRedirectionError,
    ConfigError,
    ConversionError,
    RequestFailedError,
    SparqlProtocolError,
    TransportError,
    UnsupportedBackendError,
)
from sparql_protocol.namespaces import NamespaceRegistry, default_registry
from sparql_protocol.sparql import RequestIntent, ResultKind, SparqlClient
from sparql_protocol.transport import BackendResponse, UrllibHttpClient

__all__ = [
    "BackendResponse",
    "CircularRedirectionError",
    "ClientConfig",
    "ConfigError",
    "ConversionError",
    "NamespaceRegistry",
    "RequestFailedError",
    "RequestIntent",
    "ResultKind",
    "SparqlClient",
    "SparqlProtocolError",
    "TransportError",
    "UnsupportedBackendError",
    "UrllibHttpClient",
    "default_registry",
    "load_config",
    "load_env_config",
]
