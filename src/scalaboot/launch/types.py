"""Data types for launch decisions."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class LaunchState(Enum):
    """How a launch directive was decided, in evaluation order."""

    DIRECT_OVERRIDE = "direct_override"
    NAMESPACED_OVERRIDE = "namespaced_override"
    AUTO_PROVISION = "auto_provision"


class InstallStatus(Enum):
    """Whether an auto-provisioned backend is present on disk."""

    INSTALLED = "installed"
    MISSING = "missing"
    NOT_APPLICABLE = "not_applicable"


@dataclass(frozen=True)
class DocumentFilter:
    """Which documents a backend is associated with."""

    language_id: str
    file_glob_pattern: str
    uri_scheme: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """LSP DocumentFilter shape."""
        return {
            "language": self.language_id,
            "scheme": self.uri_scheme,
            "pattern": self.file_glob_pattern,
        }


DocumentSelector = Tuple[DocumentFilter, ...]


@dataclass(frozen=True)
class LaunchDirective:
    """Everything the host needs to start the backend.

    Attributes:
        server_uri: Server location (override path verbatim, or file: URI)
        server_args: Arguments passed to the server
        document_selector: Documents the server handles
        passthrough_options: Initialization options forwarded untouched
        state: Launch state that produced this directive
    """

    server_uri: str
    server_args: Tuple[str, ...]
    document_selector: DocumentSelector
    passthrough_options: Any = None
    state: LaunchState = LaunchState.AUTO_PROVISION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "server_uri": self.server_uri,
            "server_args": list(self.server_args),
            "document_selector": [f.to_dict() for f in self.document_selector],
            "passthrough_options": self.passthrough_options,
            "state": self.state.value,
        }
