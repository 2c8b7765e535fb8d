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
"""SPARQL sub-package: protocol client, request shaping, response processor."""

from __future__ import annotations

from sparql_protocol.sparql.client import RedirectHop, RequestIntent, SparqlClient
from sparql_protocol.sparql.processor import ResultKind

__all__ = ["RedirectHop", "RequestIntent", "ResultKind", "SparqlClient"]
