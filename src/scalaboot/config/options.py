"""Parsing of the host's initialization options.

The host forwards the user's plugin settings verbatim, e.g.::

    serverPath = "/opt/metals/bin/metals"

    [lsp]
    serverPath = "metals"
    serverArgs = ["--verbose"]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InitializationOptions:
    """User overrides extracted from the initialize payload.

    Attributes:
        server_path: Top-level ``serverPath`` (None when absent or empty)
        lsp_server_path: ``lsp.serverPath`` (None when absent or empty)
        lsp_server_args: String entries of ``lsp.serverArgs`` in order
        raw: The untouched payload, passed through to the backend
    """

    server_path: Optional[str] = None
    lsp_server_path: Optional[str] = None
    lsp_server_args: Tuple[str, ...] = ()
    raw: Any = None


def _non_empty_string(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


def _string_args(value: Any) -> Tuple[str, ...]:
    """Keep the string entries of an argument array, dropping the rest."""
    if not isinstance(value, list):
        return ()

    args = []
    for arg in value:
        if isinstance(arg, str):
            args.append(arg)
        else:
            logger.debug("Skipping non-string serverArgs entry: %r", arg)
    return tuple(args)


def parse_initialization_options(options: Any) -> InitializationOptions:
    """Extract override settings from an initialization-options payload.

    Anything that is not a JSON object yields no overrides.
    """
    if not isinstance(options, dict):
        return InitializationOptions(raw=options)

    lsp = options.get("lsp")
    if not isinstance(lsp, dict):
        lsp = {}

    return InitializationOptions(
        server_path=_non_empty_string(options.get("serverPath")),
        lsp_server_path=_non_empty_string(lsp.get("serverPath")),
        lsp_server_args=_string_args(lsp.get("serverArgs")),
        raw=options,
    )
