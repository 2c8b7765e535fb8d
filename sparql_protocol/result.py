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

"""Outcome values returned by the configuration loaders.

``load_config`` and ``load_env_config`` never raise for a bad file or
environment; they return ``Fail`` so callers can log and fall back.
Callers that would rather stop call ``unwrap()``, which turns a
``Fail`` into ``ConfigError``. The protocol client itself always raises.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, NoReturn, TypeVar

from sparql_protocol.errors import ConfigError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A configuration that loaded and passed its checks."""

    data: T
    ok: bool = field(default=True, init=False)

    def unwrap(self) -> T:
        return self.data


@dataclass(frozen=True, slots=True)
class Fail:
    """Why a configuration was rejected; ``context`` names the file or variable."""

    error: str
    context: Any = None
    ok: bool = field(default=False, init=False)

    def unwrap(self) -> NoReturn:
        raise ConfigError(self.error, context=self.context)

    def __str__(self) -> str:
        if self.context is None:
            return self.error
        return f"{self.error} ({self.context})"


Result = Ok[T] | Fail
