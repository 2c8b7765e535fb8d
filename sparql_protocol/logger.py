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

"""Logger factory shared by every module of the client.

Handlers are attached once, on the package root logger, so that child
loggers propagate to a single stderr stream. The level comes from
SPARQL_PROTOCOL_LOG_LEVEL and defaults to WARNING: a library stays quiet
unless asked.
"""

from __future__ import annotations

import logging
import os
import sys

_FMT = "%(asctime)s [%(levelname)s] %(name)s — %(message)s"
_ROOT = "sparql_protocol"
_LEVEL_ENV = "SPARQL_PROTOCOL_LOG_LEVEL"


def _configure_root() -> logging.Logger:
    root = logging.getLogger(_ROOT)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FMT, datefmt="%H:%M:%S"))
        root.addHandler(handler)
        level_name = os.getenv(_LEVEL_ENV, "WARNING").upper()
        root.setLevel(getattr(logging, level_name, logging.WARNING))
    return root


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the package root with a consistent format."""
    root = _configure_root()
    if name == _ROOT or name.startswith(_ROOT + "."):
        return logging.getLogger(name)
    return root.getChild(name)
