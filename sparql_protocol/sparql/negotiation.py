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

"""Accept-header negotiation for SPARQL query and update requests."""

from __future__ import annotations

from typing import Mapping

SPARQL_RESULTS_TYPES: dict[str, float] = {
    "application/sparql-results+json": 1.0,
    "application/sparql-results+xml": 0.8,
}

SPARQL_GRAPH_TYPES: dict[str, float] = {
    "application/ld+json": 1.0,
    "application/rdf+xml": 0.9,
    "text/turtle": 0.8,
    "application/n-quads": 0.7,
    "application/n-triples": 0.7,
}

_GRAPH_VERBS = frozenset({"CONSTRUCT", "DESCRIBE"})


def format_accept_header(types: Mapping[str, float]) -> str:
    """Render ``{mime: q}`` as ``a, b;q=0.9, ...`` ordered by descending q.

    ``sorted`` is stable, so equal weights keep the mapping's order.
    """
    ranked = sorted(types.items(), key=lambda item: item[1], reverse=True)
    parts: list[str] = []
    for mime, q in ranked:
        if not 0.0 <= q <= 1.0:
            raise ValueError(f"Quality weight for {mime} out of range: {q}")
        parts.append(mime if q == 1.0 else f"{mime};q={q:.1f}")
    return ", ".join(parts)


def accept_header_for(verb: str | None) -> str:
    """Accept header for a classified verb; unclassified queries ask for results."""
    if verb in _GRAPH_VERBS:
        return format_accept_header(SPARQL_GRAPH_TYPES)
    return format_accept_header(SPARQL_RESULTS_TYPES)
