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
"""Transport sub-package: backend contract, adapters, default HTTP client."""

from __future__ import annotations

from typing import Any

import requests

from sparql_protocol.errors import UnsupportedBackendError
from sparql_protocol.transport.base import (
    BackendResponse,
    ExecuteAdapter,
    StatefulAdapter,
    StatefulHttpClient,
    SyncHttpClient,
    TransportBackend,
    adapt_backend,
)
from sparql_protocol.transport.urllib_client import DEFAULT_TIMEOUT, UrllibHttpClient

__all__ = [
    "DEFAULT_TIMEOUT",
    "BackendResponse",
    "ExecuteAdapter",
    "StatefulAdapter",
    "StatefulHttpClient",
    "SyncHttpClient",
    "TransportBackend",
    "UrllibHttpClient",
    "adapt_backend",
    "build_backend",
    "get_default_http_client",
    "set_default_http_client",
]

_default_client: Any = None


def get_default_http_client() -> Any:
    """Process-wide client used when a SparqlClient is built without one."""
    global _default_client
    if _default_client is None:
        _default_client = requests.Session()
    return _default_client


def set_default_http_client(client: Any) -> None:
    """Replace the process-wide client; None restores the lazy default."""
    global _default_client
    _default_client = client


def build_backend(name: str, timeout: float, user_agent: str) -> TransportBackend:
    """Create a fresh adapted backend by name: ``requests`` or ``urllib``."""
    if name == "urllib":
        return adapt_backend(UrllibHttpClient(timeout=timeout, user_agent=user_agent))
    if name == "requests":
        session = requests.Session()
        session.headers["User-Agent"] = user_agent
        return adapt_backend(session, timeout=timeout)
    raise UnsupportedBackendError(f"Unknown transport backend: {name}")
