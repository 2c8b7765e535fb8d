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

"""SPARQL response classifier — turns a successful response into a result.

The Content-Type decides the kind: ``application/sparql-results*`` is a
tabular result set, everything else is handed to rdflib as RDF graph data.
Unknown graph formats fail inside rdflib, not here.
"""

from __future__ import annotations

from enum import Enum
from io import BytesIO

from rdflib import Dataset, Graph
from rdflib.query import Result

from sparql_protocol.logger import get_logger
from sparql_protocol.transport.base import BackendResponse

log = get_logger(__name__)

SPARQL_RESULTS_PREFIX = "application/sparql-results"

_RESULT_FORMATS = {
    "application/sparql-results+json": "json",
    "application/sparql-results+xml": "xml",
}

_QUAD_TYPES = frozenset({"application/n-quads", "application/trig"})


class ResultKind(Enum):
    RESULTS = "results"
    GRAPH = "graph"


def parse_mime_type(content_type: str | None) -> str:
    """``text/turtle; charset=utf-8`` → ``text/turtle``."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def classify_content_type(mime_type: str) -> ResultKind:
    if mime_type.startswith(SPARQL_RESULTS_PREFIX):
        return ResultKind.RESULTS
    return ResultKind.GRAPH


def parse_results(body: bytes, mime_type: str) -> Result:
    """Parse a SPARQL results document (JSON or XML) into an rdflib Result."""
    fmt = _RESULT_FORMATS.get(mime_type, mime_type)
    return Result.parse(BytesIO(body), format=fmt)


def parse_graph(base_uri: str, body: bytes, mime_type: str) -> Graph:
    """Parse RDF data; quad formats land in a Dataset so graph names survive."""
    graph: Graph = Dataset() if mime_type in _QUAD_TYPES else Graph()
    graph.parse(data=body, format=mime_type or None, publicID=base_uri)
    return graph


def parse_response(response: BackendResponse, base_uri: str) -> Result | Graph:
    """Classify ``response`` by Content-Type and build the matching artifact."""
    mime_type = parse_mime_type(response.header("Content-Type"))
    kind = classify_content_type(mime_type)
    log.info("Response %d: %s → %s (%d bytes)", response.status, mime_type or "?", kind.value, len(response.body))

    if kind is ResultKind.RESULTS:
        return parse_results(response.body, mime_type)
    return parse_graph(base_uri, response.body, mime_type)
