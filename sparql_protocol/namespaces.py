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

"""Namespace prefix registry and PREFIX auto-injection.

Injection is a plain substring scan, not a parse: a prefix that only
appears inside a string literal or comment still gets declared.
"""

from __future__ import annotations

import re
from typing import Iterator, Mapping

from sparql_protocol.logger import get_logger

log = get_logger(__name__)

_PREFIX_RE = re.compile(r"^[A-Za-z][\w.-]*$")

DEFAULT_NAMESPACES: dict[str, str] = {
    "bibo": "http://purl.org/ontology/bibo/",
    "cc": "http://creativecommons.org/ns#",
    "cert": "http://www.w3.org/ns/auth/cert#",
    "ctag": "http://commontag.org/ns#",
    "dc": "http://purl.org/dc/terms/",
    "dc11": "http://purl.org/dc/elements/1.1/",
    "dcat": "http://www.w3.org/ns/dcat#",
    "dcterms": "http://purl.org/dc/terms/",
    "doap": "http://usefulinc.com/ns/doap#",
    "exif": "http://www.w3.org/2003/12/exif/ns#",
    "foaf": "http://xmlns.com/foaf/0.1/",
    "geo": "http://www.w3.org/2003/01/geo/wgs84_pos#",
    "gr": "http://purl.org/goodrelations/v1#",
    "grddl": "http://www.w3.org/2003/g/data-view#",
    "ical": "http://www.w3.org/2002/12/cal/icaltzd#",
    "ma": "http://www.w3.org/ns/ma-ont#",
    "mo": "http://purl.org/ontology/mo/",
    "owl": "http://www.w3.org/2002/07/owl#",
    "rdf": "http://www.w3.org/1999/02/22-rdf-syntax-ns#",
    "rdfa": "http://www.w3.org/ns/rdfa#",
    "rdfs": "http://www.w3.org/2000/01/rdf-schema#",
    "rev": "http://purl.org/stuff/rev#",
    "rss": "http://purl.org/rss/1.0/",
    "schema": "http://schema.org/",
    "sioc": "http://rdfs.org/sioc/ns#",
    "skos": "http://www.w3.org/2004/02/skos/core#",
    "wot": "http://xmlns.com/wot/0.1/",
    "xhv": "http://www.w3.org/1999/xhtml/vocab#",
    "xsd": "http://www.w3.org/2001/XMLSchema#",
}


class NamespaceRegistry(Mapping[str, str]):
    """Ordered prefix → URI mapping.

    Iteration order is insertion order; it is also the order in which
    missing PREFIX declarations are emitted.
    """

    def __init__(self, namespaces: Mapping[str, str] | None = None, *, include_defaults: bool = True) -> None:
        self._namespaces: dict[str, str] = {}
        if include_defaults:
            self._namespaces.update(DEFAULT_NAMESPACES)
        for prefix, uri in (namespaces or {}).items():
            self.set(prefix, uri)

    def __getitem__(self, prefix: str) -> str:
        return self._namespaces[prefix]

    def __iter__(self) -> Iterator[str]:
        return iter(self._namespaces)

    def __len__(self) -> int:
        return len(self._namespaces)

    def set(self, prefix: str, uri: str) -> None:
        """Register or replace a prefix."""
        if not _PREFIX_RE.match(prefix):
            raise ValueError(f"Invalid namespace prefix: {prefix!r}")
        if not uri:
            raise ValueError(f"Empty namespace URI for prefix {prefix!r}")
        self._namespaces[prefix] = uri

    def delete(self, prefix: str) -> None:
        self._namespaces.pop(prefix, None)

    def reset(self) -> None:
        """Drop custom prefixes and restore the defaults."""
        self._namespaces = dict(DEFAULT_NAMESPACES)

    def namespaces(self) -> dict[str, str]:
        return dict(self._namespaces)


default_registry = NamespaceRegistry()


def add_missing_prefixes(query: str, namespaces: Mapping[str, str]) -> str:
    """Prepend a PREFIX line for every used-but-undeclared registry prefix."""
    prefixes = ""
    for prefix, uri in namespaces.items():
        if f"{prefix}:" in query and f"PREFIX {prefix}:" not in query:
            prefixes += f"PREFIX {prefix}: <{uri}>\n"

    if prefixes:
        log.debug("Injected prefixes:\n%s", prefixes.rstrip())
    return prefixes + query
