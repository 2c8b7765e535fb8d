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

"""SPARQL text helpers: query-form classification and statement builders.

Classification is a prologue scanner, not a grammar. It skips whitespace,
comments, BASE and PREFIX clauses, then looks at the next keyword only.
Anything it cannot read yields None, which callers treat as "non-standard
query" rather than an error.
"""

from __future__ import annotations

import re

from rdflib import Graph

from sparql_protocol.errors import ConversionError

QUERY_VERBS = ("CONSTRUCT", "SELECT", "ASK", "DESCRIBE")
UPDATE_DATA_OPERATIONS = frozenset({"INSERT", "DELETE"})

_SKIPPABLE = (
    re.compile(r"\s+"),
    re.compile(r"#[^\n]*"),
    re.compile(r"BASE\s*<[^>]*>", re.IGNORECASE),
    re.compile(r"PREFIX\s+[\w.-]*:\s*<[^>]*>", re.IGNORECASE),
)
_VERB_RE = re.compile(r"(" + "|".join(QUERY_VERBS) + r")(?!\w)", re.IGNORECASE)
_CLEAR_TARGET_RE = re.compile(r"all|named|default", re.IGNORECASE)


def _skip_prologue(query: str) -> int:
    pos = 0
    while True:
        for pattern in _SKIPPABLE:
            match = pattern.match(query, pos)
            if match and match.end() > pos:
                pos = match.end()
                break
        else:
            return pos


def determine_query_verb(query: str) -> str | None:
    """Return SELECT, ASK, CONSTRUCT or DESCRIBE (upper-cased), or None."""
    match = _VERB_RE.match(query, _skip_prologue(query))
    if match is None:
        return None
    return match.group(1).upper()


def convert_to_triples(data: str | Graph) -> str:
    """Literal triple text passes through; graphs become N-Triples."""
    if isinstance(data, str):
        return data
    if isinstance(data, Graph):
        # Turtle would need its prefixes split out of the body first.
        return data.serialize(format="nt")
    raise ConversionError(
        f"Don't know how to convert {type(data).__name__} to triples for SPARQL query"
    )


def build_update_data(operation: str, data: str | Graph, graph_uri: str | None = None) -> str:
    """Build ``INSERT DATA {...}`` / ``DELETE DATA {...}``, optionally in a named graph."""
    verb = operation.strip().upper()
    if verb not in UPDATE_DATA_OPERATIONS:
        raise ValueError(f"Unsupported data operation: {operation!r}")

    triples = convert_to_triples(data)
    if graph_uri:
        return f"{verb} DATA {{GRAPH <{graph_uri}> {{{triples}}}}}"
    return f"{verb} DATA {{{triples}}}"


def build_clear(graph_uri: str, silent: bool = False) -> str:
    """``CLEAR [SILENT] (GRAPH <uri> | ALL | NAMED | DEFAULT)``."""
    parts = ["CLEAR"]
    if silent:
        parts.append("SILENT")
    if _CLEAR_TARGET_RE.fullmatch(graph_uri):
        parts.append(graph_uri)
    else:
        parts.append(f"GRAPH <{graph_uri}>")
    return " ".join(parts)


def build_count_query(condition: str = "?s ?p ?o") -> str:
    # The condition is pasted verbatim; callers own its validity.
    return f"SELECT (COUNT(*) AS ?count) {{{condition}}}"


def build_named_graphs_query(limit: int | None = None) -> str:
    query = "SELECT DISTINCT ?g WHERE {GRAPH ?g {?s ?p ?o}}"
    if limit is not None:
        query += f" LIMIT {int(limit)}"
    return query
