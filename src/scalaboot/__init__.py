"""scalaboot: decides which Scala language server to launch and how."""

from .bridge import HostRPC, MessageType, PluginBridge, RecordingHost
from .errors import (
    AssetFormatError,
    BootstrapError,
    ConfigurationError,
    ReleaseResolutionError,
    ScalabootError,
    ToolchainNotFound,
    VersionParseFailure,
)
from .launch import LaunchDecisionEngine, LaunchDirective, LaunchState

__version__ = "0.1.0"

__all__ = [
    "HostRPC",
    "MessageType",
    "PluginBridge",
    "RecordingHost",
    "LaunchDecisionEngine",
    "LaunchDirective",
    "LaunchState",
    "ScalabootError",
    "ToolchainNotFound",
    "VersionParseFailure",
    "ReleaseResolutionError",
    "AssetFormatError",
    "ConfigurationError",
    "BootstrapError",
]
