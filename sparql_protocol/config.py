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

"""Loads client configuration from YAML or the environment into dataclasses.

Pure loader — structure checks only, no network access.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from sparql_protocol.result import Fail, Ok, Result
from sparql_protocol.transport.urllib_client import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT

BACKENDS = ("requests", "urllib")


# ── Endpoint ───────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class EndpointConfig:
    query: str
    update: str | None = None


# ── Transport ──────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class TransportConfig:
    backend: str = "requests"
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT


# ── Namespaces ─────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class NamespaceConfig:
    include_defaults: bool = True
    prefixes: dict[str, str] = field(default_factory=dict)


# ── Top-level ──────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class ClientConfig:
    endpoint: EndpointConfig
    transport: TransportConfig = field(default_factory=TransportConfig)
    namespaces: NamespaceConfig = field(default_factory=NamespaceConfig)


# ── Loaders ────────────────────────────────────────────────────

def _build_transport(raw: dict[str, Any]) -> TransportConfig:
    return TransportConfig(
        backend=raw.get("backend", "requests"),
        timeout=float(raw.get("timeout", DEFAULT_TIMEOUT)),
        user_agent=raw.get("user_agent", DEFAULT_USER_AGENT),
    )


def _build_namespaces(raw: dict[str, Any]) -> NamespaceConfig:
    return NamespaceConfig(
        include_defaults=bool(raw.get("include_defaults", True)),
        prefixes={str(k): str(v) for k, v in (raw.get("prefixes") or {}).items()},
    )


def _check(config: ClientConfig, context: str) -> Result[ClientConfig]:
    if not config.endpoint.query:
        return Fail(error="Query endpoint must not be empty", context=context)
    if config.transport.backend not in BACKENDS:
        return Fail(
            error=f"Unknown transport backend '{config.transport.backend}' (expected one of {', '.join(BACKENDS)})",
            context=context,
        )
    if config.transport.timeout <= 0:
        return Fail(error=f"Timeout must be positive, got {config.transport.timeout}", context=context)
    return Ok(data=config)


def load_config(path: Path) -> Result[ClientConfig]:
    """Load a client YAML file into ClientConfig."""
    if not path.exists():
        return Fail(error=f"Config file not found: {path}")

    try:
        raw: dict[str, Any] = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        return Fail(error=f"YAML parse error: {exc}", context=str(path))

    try:
        config = ClientConfig(
            endpoint=EndpointConfig(
                query=raw["endpoint"]["query"],
                update=raw["endpoint"].get("update"),
            ),
            transport=_build_transport(raw.get("transport") or {}),
            namespaces=_build_namespaces(raw.get("namespaces") or {}),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        return Fail(error=f"Config structure error: {exc}", context=str(path))

    return _check(config, str(path))


def load_env_config() -> Result[ClientConfig]:
    """Build ClientConfig from SPARQL_* environment variables (.env honoured)."""
    load_dotenv()

    query = os.getenv("SPARQL_QUERY_URI", "")
    if not query:
        return Fail(error="SPARQL_QUERY_URI is not set")

    try:
        timeout = float(os.getenv("SPARQL_TIMEOUT", str(DEFAULT_TIMEOUT)))
    except ValueError:
        return Fail(error="SPARQL_TIMEOUT must be a number", context=os.getenv("SPARQL_TIMEOUT"))

    config = ClientConfig(
        endpoint=EndpointConfig(query=query, update=os.getenv("SPARQL_UPDATE_URI") or None),
        transport=TransportConfig(
            backend=os.getenv("SPARQL_BACKEND", "requests"),
            timeout=timeout,
            user_agent=os.getenv("SPARQL_USER_AGENT", DEFAULT_USER_AGENT),
        ),
    )
    return _check(config, "environment")
