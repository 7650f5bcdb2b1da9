"""Bridge between host requests and the launch decision engine.

The host sends a single ``initialize`` request; the bridge resolves a
launch directive and asks the host to start the backend. Failures become
an error message for the user instead of a crash.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence, Tuple

from .launch import DocumentFilter, LaunchDecisionEngine, LaunchDirective

logger = logging.getLogger(__name__)

INITIALIZE_METHOD = "initialize"


class MessageType(IntEnum):
    """LSP message severities."""

    ERROR = 1
    WARNING = 2
    INFO = 3
    LOG = 4


class HostRPC(Protocol):
    """Capabilities the host offers to the plugin."""

    def start_backend(
        self,
        server_uri: str,
        server_args: Sequence[str],
        document_selector: Sequence[DocumentFilter],
        options: Any,
    ) -> None:
        ...

    def show_message(self, severity: MessageType, message: str) -> None:
        ...


@dataclass
class RecordingHost:
    """Host that keeps what it was asked to do."""

    started: Optional[Dict[str, Any]] = None
    messages: List[Tuple[MessageType, str]] = field(default_factory=list)

    def start_backend(
        self,
        server_uri: str,
        server_args: Sequence[str],
        document_selector: Sequence[DocumentFilter],
        options: Any,
    ) -> None:
        self.started = {
            "server_uri": server_uri,
            "server_args": list(server_args),
            "document_selector": list(document_selector),
            "options": options,
        }

    def show_message(self, severity: MessageType, message: str) -> None:
        self.messages.append((severity, message))

    @property
    def errors(self) -> List[str]:
        return [message for severity, message in self.messages if severity is MessageType.ERROR]


class PluginBridge:
    """Handles host requests for the plugin.

    Only the first successful ``initialize`` request is acted on; a failed
    one may be retried. The engine is created lazily so configuration is
    read at that point.
    """

    def __init__(
        self,
        host: HostRPC,
        engine_factory: Callable[[], LaunchDecisionEngine],
    ):
        self.host = host
        self.engine_factory = engine_factory
        self.initialized = False
        self.directive: Optional[LaunchDirective] = None

    def handle_request(self, method: str, params: Any) -> None:
        if method != INITIALIZE_METHOD:
            logger.debug("Ignoring request %s", method)
            return

        if self.initialized:
            logger.warning("Ignoring repeated initialize request")
            return

        options = params.get("initializationOptions") if isinstance(params, dict) else None
        try:
            self.initialize(options)
        except Exception as e:
            logger.error("Backend resolution failed: %s", e)
            self.host.show_message(MessageType.ERROR, f"plugin returned with error: {e}")
        else:
            self.initialized = True

    def initialize(self, initialization_options: Any) -> LaunchDirective:
        """Resolve the launch directive and hand it to the host."""
        engine = self.engine_factory()
        directive = engine.resolve(initialization_options)
        self.host.start_backend(
            directive.server_uri,
            list(directive.server_args),
            list(directive.document_selector),
            directive.passthrough_options,
        )
        self.directive = directive
        return directive
