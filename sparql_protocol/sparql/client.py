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

"""SPARQL 1.1 Protocol client.

Shapes query and update requests, sends them through a pluggable
transport backend, chases endpoint redirects and parses the response:

  preprocess → classify verb → negotiate Accept → GET or POST → execute
  → 3xx: move endpoint, retry   → 2xx: Result (tabular) or Graph (RDF)

Redirects move ``query_uri`` / ``update_uri`` for good, so later calls go
straight to the new endpoint. That mutation makes a client unsafe to
share between threads without a lock.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Mapping
from urllib.parse import urlencode, urljoin, urlsplit

from rdflib import Graph
from rdflib.query import Result

from sparql_protocol.config import ClientConfig, load_config
from sparql_protocol.errors import CircularRedirectionError, RequestFailedError, SparqlProtocolError
from sparql_protocol.logger import get_logger
from sparql_protocol.namespaces import NamespaceRegistry, add_missing_prefixes, default_registry
from sparql_protocol.sparql.negotiation import SPARQL_RESULTS_TYPES, accept_header_for, format_accept_header
from sparql_protocol.sparql.processor import parse_response
from sparql_protocol.sparql.queries import (
    build_clear,
    build_count_query,
    build_named_graphs_query,
    build_update_data,
    determine_query_verb,
)
from sparql_protocol.transport import (
    DEFAULT_TIMEOUT,
    BackendResponse,
    TransportBackend,
    adapt_backend,
    build_backend,
    get_default_http_client,
)

log = get_logger(__name__)

# Longest GET URI sent before switching to a form-encoded POST.
GET_URI_LIMIT = 2046


class RequestIntent(str, Enum):
    QUERY = "query"
    UPDATE = "update"


@dataclass(frozen=True, slots=True)
class RedirectHop:
    """An endpoint left behind while chasing redirects, with the text sent to it."""

    uri: str
    query: str


class SparqlClient:
    """Client for one SPARQL endpoint pair.

    If the query and update endpoints are the same, give a single URI.
    ``http_client`` may be a ``TransportBackend``, a ``requests.Session``-like
    object or a stateful configure-then-send client; None uses the
    process-wide default. It is adapted when a request is made.
    """

    def __init__(
        self,
        query_uri: str,
        update_uri: str | None = None,
        *,
        http_client: Any = None,
        namespaces: Mapping[str, str] | None = None,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> None:
        if not query_uri and not update_uri:
            raise ValueError("A query or update endpoint URI is required")

        self._query_uri = query_uri
        self._update_uri = update_uri or query_uri
        self._query_uri_has_params = bool(urlsplit(query_uri).query)
        self.http_client = http_client
        self.namespaces = default_registry if namespaces is None else namespaces
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: ClientConfig) -> SparqlClient:
        """Build a client with its own backend and namespace registry."""
        registry = NamespaceRegistry(
            config.namespaces.prefixes,
            include_defaults=config.namespaces.include_defaults,
        )
        backend = build_backend(
            config.transport.backend,
            timeout=config.transport.timeout,
            user_agent=config.transport.user_agent,
        )
        return cls(
            config.endpoint.query,
            config.endpoint.update,
            http_client=backend,
            namespaces=registry,
            timeout=config.transport.timeout,
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> SparqlClient:
        """Load a YAML client file; raise ConfigError when it is unusable."""
        return cls.from_config(load_config(Path(path)).unwrap())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(query_uri={self._query_uri!r}, update_uri={self._update_uri!r})"

    @property
    def query_uri(self) -> str:
        return self._query_uri

    @property
    def update_uri(self) -> str:
        return self._update_uri

    # ── Public operations ──────────────────────────────────────

    def query(self, query: str) -> Result | Graph | BackendResponse:
        """Run a read query.

        SELECT and ASK give an rdflib ``Result``; CONSTRUCT and DESCRIBE give
        an rdflib ``Graph``. A 204 or empty body returns the raw response.
        """
        return self._request(RequestIntent.QUERY, query)

    def update(self, query: str) -> BackendResponse:
        """Run an update; the successful response is returned unparsed."""
        return self._request(RequestIntent.UPDATE, query)

    def insert(self, data: str | Graph, graph_uri: str | None = None) -> BackendResponse:
        return self.update_data("INSERT", data, graph_uri)

    def delete(self, data: str | Graph, graph_uri: str | None = None) -> BackendResponse:
        return self.update_data("DELETE", data, graph_uri)

    def update_data(self, operation: str, data: str | Graph, graph_uri: str | None = None) -> BackendResponse:
        """Send ``<operation> DATA {...}`` built from triple text or a Graph."""
        return self.update(build_update_data(operation, data, graph_uri))

    def clear(self, graph_uri: str, silent: bool = False) -> BackendResponse:
        """Clear a named graph, or ``all`` / ``named`` / ``default``."""
        return self.update(build_clear(graph_uri, silent))

    def count_triples(self, condition: str = "?s ?p ?o") -> int:
        """Count triples matching ``condition`` (all triples by default)."""
        rows = list(self._select(build_count_query(condition)))
        if not rows:
            raise SparqlProtocolError("Count query returned no rows")
        # ResultRow is a tuple, so row.count would be tuple.count.
        return int(rows[0]["count"].toPython())

    def list_named_graphs(self, limit: int | None = None) -> list[Any]:
        """Return the ``?g`` binding of every named graph (optionally limited)."""
        return [row["g"] for row in self._select(build_named_graphs_query(limit))]

    # ── Overridable hooks ──────────────────────────────────────

    def preprocess_query(self, query: str) -> str:
        """Add missing PREFIX declarations; subclasses may rewrite further."""
        return add_missing_prefixes(query, self.namespaces)

    def parse_response(self, response: BackendResponse) -> Result | Graph:
        return parse_response(response, base_uri=self._query_uri)

    # ── Request state machine ──────────────────────────────────

    def _select(self, query: str) -> Result:
        result = self.query(query)
        if not isinstance(result, Result):
            raise SparqlProtocolError(f"Expected a SPARQL result set, got {type(result).__name__}")
        return result

    def _endpoint(self, intent: RequestIntent) -> str:
        return self._query_uri if intent is RequestIntent.QUERY else self._update_uri

    def _move_endpoint(self, intent: RequestIntent, uri: str) -> None:
        if intent is RequestIntent.QUERY:
            self._query_uri = uri
        else:
            self._update_uri = uri

    def _request(self, intent: RequestIntent, query: str) -> Any:
        history: list[RedirectHop] = []

        while True:
            response = self._execute_query(self.preprocess_query(query), intent)

            if not response.is_successful:
                current = self._endpoint(intent)
                location = response.header("Location")
                visited = [hop.uri for hop in history]

                if location:
                    target = urljoin(current, location)
                    if target in visited:
                        raise CircularRedirectionError(target, [*visited, current])

                    log.warning("SPARQL %s redirected (%d): %s → %s", intent.value, response.status, current, target)
                    history.append(RedirectHop(uri=current, query=query))
                    self._move_endpoint(intent, target)
                    continue

                raise RequestFailedError(response.status, response.body, response.uri or current)

            if response.status == 204 or intent is RequestIntent.UPDATE or not response.body:
                return response

            return self.parse_response(response)

    def _execute_query(self, processed_query: str, intent: RequestIntent) -> BackendResponse:
        """Shape the HTTP request for ``intent`` and send it."""
        headers: dict[str, str] = {}

        if intent is RequestIntent.UPDATE:
            headers["Accept"] = format_accept_header(SPARQL_RESULTS_TYPES)
            headers["Content-Type"] = "application/sparql-update"
            return self._send("POST", self._update_uri, headers, processed_query.encode("utf-8"))

        headers["Accept"] = accept_header_for(determine_query_verb(processed_query))

        encoded_query = urlencode({"query": processed_query})
        delimiter = "&" if self._query_uri_has_params else "?"
        get_uri = f"{self._query_uri}{delimiter}{encoded_query}"

        if len(get_uri) <= GET_URI_LIMIT:
            return self._send("GET", get_uri, headers)

        headers["Content-Type"] = "application/x-www-form-urlencoded"
        return self._send("POST", self._query_uri, headers, encoded_query.encode("ascii"))

    def _send(
        self,
        method: str,
        uri: str,
        headers: Mapping[str, str],
        body: bytes | None = None,
    ) -> BackendResponse:
        client = self.http_client if self.http_client is not None else get_default_http_client()
        backend: TransportBackend = adapt_backend(client, timeout=self.timeout)
        log.info("SPARQL %s → %s (%d bytes)", method, uri, len(body or b""))
        return backend.execute(method, uri, headers, body)
