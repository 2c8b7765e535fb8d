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

"""Exception hierarchy for the SPARQL protocol client.

Every failure that reaches the caller is a SparqlProtocolError subclass,
except parse errors raised by rdflib itself, which pass through untouched.
"""

from __future__ import annotations

from typing import Sequence


class SparqlProtocolError(Exception):
    """Base class for all client errors."""


class TransportError(SparqlProtocolError):
    """The backend could not complete the HTTP exchange (DNS, refused, timeout)."""

    def __init__(self, message: str, uri: str | None = None) -> None:
        super().__init__(message)
        self.uri = uri


class UnsupportedBackendError(SparqlProtocolError):
    """The configured HTTP client matches none of the known adapter shapes."""


class CircularRedirectionError(SparqlProtocolError):
    """An endpoint redirected back to a URI already visited in this request."""

    def __init__(self, location: str, history: Sequence[str]) -> None:
        chain = " → ".join([*history, location])
        super().__init__(f"Circular redirection: {chain}")
        self.location = location
        self.history = list(history)


class RequestFailedError(SparqlProtocolError):
    """Non-2xx response without a usable Location header."""

    def __init__(self, status: int, body: bytes, uri: str) -> None:
        preview = body[:500].decode("utf-8", errors="replace")
        super().__init__(f"HTTP request for SPARQL query failed: {status} from {uri}: {preview}")
        self.status = status
        self.body = body
        self.uri = uri


class ConversionError(SparqlProtocolError):
    """Update data is neither literal triple text nor an RDF graph."""


class ConfigError(SparqlProtocolError):
    """A configuration file or environment could not be turned into ClientConfig."""

    def __init__(self, message: str, context: object = None) -> None:
        super().__init__(message if context is None else f"{message} ({context})")
        self.context = context
