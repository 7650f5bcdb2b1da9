"""Toolchain version detection (java, scala, sbt)."""

from .detector import ToolchainDetector, detect, detect_all, is_command_available
from .specs import PROBE_SPECS, ProbeSpec
from .types import BuildToolVersions, ToolchainVersions

__all__ = [
    "ToolchainDetector",
    "ToolchainVersions",
    "BuildToolVersions",
    "PROBE_SPECS",
    "ProbeSpec",
    "detect",
    "detect_all",
    "is_command_available",
]
