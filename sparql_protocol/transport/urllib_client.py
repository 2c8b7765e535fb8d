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

"""Stateful HTTP client on top of urllib.

Configure method, URI, headers and body one call at a time, then send
with ``request()``. HTTP error statuses (4xx, 5xx and unfollowed 3xx)
come back as responses; only failures to reach the server raise.
"""

from __future__ import annotations

import http.client
import ssl
import urllib.error
import urllib.request

import certifi

from sparql_protocol.errors import TransportError
from sparql_protocol.logger import get_logger
from sparql_protocol.transport.base import BackendResponse

log = get_logger(__name__)

_ssl_ctx = ssl.create_default_context(cafile=certifi.where())

DEFAULT_USER_AGENT = "sparql-protocol/0.1"
DEFAULT_TIMEOUT = 30


class _NoRedirect(urllib.request.HTTPRedirectHandler):
    """Surface 3xx responses as HTTPError instead of following them."""

    def redirect_request(self, req, fp, code, msg, headers, newurl):  # noqa: ANN001
        return None


class UrllibHttpClient:
    def __init__(self, timeout: float = DEFAULT_TIMEOUT, user_agent: str = DEFAULT_USER_AGENT) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self._opener = urllib.request.build_opener(
            urllib.request.HTTPSHandler(context=_ssl_ctx),
            _NoRedirect(),
        )
        self.reset_parameters()

    def reset_parameters(self) -> None:
        """Forget everything configured for the previous request."""
        self._method = "GET"
        self._uri: str | None = None
        self._headers: dict[str, str] = {"User-Agent": self.user_agent}
        self._data: bytes | None = None

    def set_method(self, method: str) -> None:
        self._method = method.upper()

    def set_uri(self, uri: str) -> None:
        self._uri = uri

    def set_header(self, name: str, value: str) -> None:
        self._headers[name] = value

    def set_raw_data(self, data: bytes | str) -> None:
        self._data = data.encode("utf-8") if isinstance(data, str) else data

    def request(self) -> BackendResponse:
        """Send the configured request and return the response."""
        if not self._uri:
            raise ValueError("No URI configured for request")

        uri = self._uri
        req = urllib.request.Request(
            uri,
            data=self._data,
            headers=self._headers,
            method=self._method,
        )
        log.debug("%s %s (%d bytes)", self._method, uri, len(self._data or b""))

        try:
            with self._opener.open(req, timeout=self.timeout) as resp:
                return BackendResponse(
                    status=resp.status,
                    headers=dict(resp.headers.items()),
                    body=resp.read(),
                    reason=resp.reason or "",
                    uri=uri,
                )
        except urllib.error.HTTPError as exc:
            return BackendResponse(
                status=exc.code,
                headers=dict(exc.headers.items()) if exc.headers else {},
                body=exc.read() or b"",
                reason=str(exc.reason),
                uri=uri,
            )
        except urllib.error.URLError as exc:
            raise TransportError(f"Connection error: {exc.reason}", uri=uri) from exc
        except TimeoutError as exc:
            raise TransportError(f"Timeout after {self.timeout}s", uri=uri) from exc
        except http.client.HTTPException as exc:
            raise TransportError(f"Malformed response: {exc!r}", uri=uri) from exc
