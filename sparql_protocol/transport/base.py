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

"""Transport contract and the adapters that normalise HTTP client shapes.

The protocol client only ever calls ``TransportBackend.execute``. Two
client shapes are adapted onto it:

  execute-style   one call per exchange, ``request(method, url, ...)``
                  returning a response object (requests.Session)
  stateful        set_method / set_uri / set_header / set_raw_data, then
                  a no-argument ``request()`` (UrllibHttpClient)

Backends never follow redirects themselves; 3xx responses are returned
to the caller, which owns redirect policy.
"""

from __future__ import annotations

import http.client
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, runtime_checkable

import requests
from requests.structures import CaseInsensitiveDict

from sparql_protocol.errors import TransportError, UnsupportedBackendError


@dataclass(frozen=True, slots=True)
class BackendResponse:
    """Status, headers and body of one HTTP exchange, whichever backend made it."""

    status: int
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    body: bytes = b""
    reason: str = ""
    uri: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.headers, CaseInsensitiveDict):
            object.__setattr__(self, "headers", CaseInsensitiveDict(self.headers or {}))
        if isinstance(self.body, str):
            object.__setattr__(self, "body", self.body.encode("utf-8"))

    @property
    def is_successful(self) -> bool:
        return 200 <= self.status < 300

    def header(self, name: str, default: str | None = None) -> str | None:
        return self.headers.get(name, default)

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


@runtime_checkable
class TransportBackend(Protocol):
    """The single contract the protocol client depends on."""

    def execute(
        self,
        method: str,
        uri: str,
        headers: Mapping[str, str],
        body: bytes | None = None,
    ) -> BackendResponse:
        """Perform one exchange; raise TransportError when none happened."""
        ...


@runtime_checkable
class StatefulHttpClient(Protocol):
    """Configure-then-send client shape."""

    def set_method(self, method: str) -> Any: ...

    def set_uri(self, uri: str) -> Any: ...

    def set_header(self, name: str, value: str) -> Any: ...

    def set_raw_data(self, data: bytes) -> Any: ...

    def reset_parameters(self) -> Any: ...

    def request(self) -> Any: ...


@runtime_checkable
class SyncHttpClient(Protocol):
    """Execute-style client shape."""

    def request(self, method: str, url: str, **kwargs: Any) -> Any: ...


class ExecuteAdapter:
    """Adapts an execute-style client such as ``requests.Session``."""

    def __init__(self, client: SyncHttpClient, timeout: float | None = None) -> None:
        self.client = client
        self.timeout = timeout

    def execute(
        self,
        method: str,
        uri: str,
        headers: Mapping[str, str],
        body: bytes | None = None,
    ) -> BackendResponse:
        try:
            resp = self.client.request(
                method,
                uri,
                headers=dict(headers),
                data=body,
                timeout=self.timeout,
                allow_redirects=False,
            )
        except (requests.RequestException, OSError) as exc:
            raise TransportError(f"{method} {uri} failed: {exc}", uri=uri) from exc

        return BackendResponse(
            status=resp.status_code,
            headers=resp.headers,
            body=resp.content or b"",
            reason=resp.reason or "",
            uri=uri,
        )


class StatefulAdapter:
    """Adapts a configure-then-send client; headers are set one at a time."""

    def __init__(self, client: StatefulHttpClient) -> None:
        self.client = client

    def execute(
        self,
        method: str,
        uri: str,
        headers: Mapping[str, str],
        body: bytes | None = None,
    ) -> BackendResponse:
        self.client.reset_parameters()

        self.client.set_method(method)
        self.client.set_uri(uri)
        for name, value in headers.items():
            self.client.set_header(name, value)
        if body is not None:
            self.client.set_raw_data(body)

        try:
            resp = self.client.request()
        except (OSError, http.client.HTTPException) as exc:
            raise TransportError(f"{method} {uri} failed: {exc!r}", uri=uri) from exc

        if isinstance(resp, BackendResponse):
            return resp
        return BackendResponse(
            status=resp.status,
            headers=resp.headers,
            body=resp.body,
            reason=getattr(resp, "reason", "") or "",
            uri=uri,
        )


def adapt_backend(client: Any, timeout: float | None = None) -> TransportBackend:
    """Wrap ``client`` in the adapter matching its shape.

    Stateful clients are checked before execute-style ones because both
    expose a method called ``request``.
    """
    if isinstance(client, TransportBackend):
        return client
    if isinstance(client, StatefulHttpClient):
        return StatefulAdapter(client)
    if hasattr(client, "set_method"):
        # Without a reset, headers and body would leak into the next request.
        raise UnsupportedBackendError(f"Stateful HTTP client {type(client).__name__} has no reset_parameters()")
    if isinstance(client, SyncHttpClient):
        return ExecuteAdapter(client, timeout=timeout)
    raise UnsupportedBackendError(f"Unsupported HTTP client type: {type(client).__name__}")
