"""Shared fixtures: scripted transport backends and canned SPARQL bodies."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Callable

import pytest

from sparql_protocol.transport import BackendResponse

RESULTS_JSON = "application/sparql-results+json"


@dataclass
class Call:
    method: str
    uri: str
    headers: dict[str, str]
    body: bytes | None


class ScriptedBackend:
    """TransportBackend that replays queued responses and records every call."""

    def __init__(self, *responses: BackendResponse | Exception) -> None:
        self.responses = list(responses)
        self.calls: list[Call] = []

    def execute(self, method, uri, headers, body=None) -> BackendResponse:
        self.calls.append(Call(method, uri, dict(headers), body))
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {uri}")
        nxt = self.responses.pop(0)
        if isinstance(nxt, Exception):
            raise nxt
        return nxt


def results_body(variables: list[str], rows: list[dict[str, dict[str, str]]]) -> bytes:
    return json.dumps({"head": {"vars": variables}, "results": {"bindings": rows}}).encode("utf-8")


@pytest.fixture
def make_response() -> Callable[..., BackendResponse]:
    def _make(
        status: int = 200,
        body: bytes | str = b"",
        content_type: str | None = None,
        location: str | None = None,
    ) -> BackendResponse:
        headers: dict[str, str] = {}
        if content_type:
            headers["Content-Type"] = content_type
        if location:
            headers["Location"] = location
        return BackendResponse(status=status, headers=headers, body=body)

    return _make


@pytest.fixture
def empty_results(make_response) -> BackendResponse:
    return make_response(200, results_body([], []), RESULTS_JSON)


@pytest.fixture
def count_response(make_response) -> BackendResponse:
    body = results_body(["count"], [{"count": {"type": "literal", "value": "42"}}])
    return make_response(200, body, RESULTS_JSON)


@pytest.fixture
def scripted() -> type[ScriptedBackend]:
    """Factory: ``scripted(resp1, resp2, ...)`` builds a ScriptedBackend."""
    return ScriptedBackend


@pytest.fixture
def results() -> Callable[..., bytes]:
    return results_body
