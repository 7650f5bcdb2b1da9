"""Best-effort toolchain version detection via subprocess probes."""

from __future__ import annotations

import logging
import re
import shutil
import subprocess
from typing import Dict, List, Optional, Tuple, Union

from ..config import ProbeConfig
from ..errors import ToolchainNotFound, VersionParseFailure
from .specs import PROBE_SPECS, VERSION_PATTERN, get_probe_spec
from .types import BuildToolVersions, ToolchainVersions

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(VERSION_PATTERN)


def is_command_available(command: str) -> bool:
    """Check if a command is available in PATH."""
    return shutil.which(command) is not None


def run_probe(
    tool_name: str, version_flag: str, timeout: Optional[float] = None
) -> Tuple[str, str]:
    """Run a version probe and return its (stderr, stdout) output.

    Most JVM tools print their version on stderr while sbt and Scala 3
    use stdout. Either stream may also carry JVM warnings.

    Raises:
        ToolchainNotFound: If the tool is missing, times out or fails
    """
    try:
        result = subprocess.run(
            [tool_name, version_flag],
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except (OSError, subprocess.SubprocessError) as e:
        raise ToolchainNotFound(tool_name, str(e)) from e

    if result.returncode != 0:
        raise ToolchainNotFound(tool_name, f"exited with status {result.returncode}")

    return result.stderr or "", result.stdout or ""


def extract_version(tool_name: str, output: str) -> str:
    """First MAJOR.MINOR.PATCH on the first line of probe output.

    Raises:
        VersionParseFailure: If the first line holds no version
    """
    lines = output.splitlines()
    first_line = lines[0] if lines else ""
    match = _VERSION_RE.search(first_line)
    if not match:
        raise VersionParseFailure(tool_name, first_line)
    return match.group(0)


def extract_versions(output: str) -> List[str]:
    """Every MAJOR.MINOR.PATCH in probe output, in order of appearance.

    When some lines mention "version", only those are searched so that
    version-like paths in warnings are skipped.
    """
    lines = output.splitlines()
    version_lines = [line for line in lines if "version" in line.lower()]
    return _VERSION_RE.findall("\n".join(version_lines or lines))


def detect(
    tool_name: str, version_flag: str, timeout: Optional[float] = None
) -> str:
    """Detect a tool's version.

    The first line of stderr is tried, then the first line of stdout.

    Args:
        tool_name: Executable to run
        version_flag: Flag that makes it print its version
        timeout: Optional probe timeout in seconds

    Returns:
        The version string, or "" if the tool is missing or its output
        holds no version
    """
    try:
        stderr, stdout = run_probe(tool_name, version_flag, timeout)
    except ToolchainNotFound as e:
        logger.debug("Version probe failed: %s", e)
        return ""

    for stream in (stderr, stdout):
        try:
            return extract_version(tool_name, stream)
        except VersionParseFailure as e:
            logger.debug("Version probe failed: %s", e)
    return ""


def detect_all(
    tool_name: str, version_flag: str, timeout: Optional[float] = None
) -> List[str]:
    """Detect every version a tool reports across stderr and stdout.

    Returns:
        List of version strings, empty if the tool is missing
    """
    try:
        stderr, stdout = run_probe(tool_name, version_flag, timeout)
    except ToolchainNotFound as e:
        logger.debug("Version probe failed: %s", e)
        return []
    return extract_versions("\n".join((stderr, stdout)))


class ToolchainDetector:
    """Probes java, scala and sbt for their versions."""

    def __init__(self, probes: Optional[ProbeConfig] = None):
        self.probes = probes or ProbeConfig()

    def executable_for(self, tool: str) -> str:
        """Configured executable for a tool, falling back to its spec."""
        configured = getattr(self.probes, tool, None)
        if configured:
            return configured
        return PROBE_SPECS[tool].executable_name

    def probe(self, tool: str) -> Union[str, List[str]]:
        spec = get_probe_spec(tool)
        executable = self.executable_for(tool)
        timeout = self.probes.timeout_seconds
        if spec.collect == "all":
            return detect_all(executable, spec.version_flag, timeout)
        return detect(executable, spec.version_flag, timeout)

    def detect_toolchain(self) -> ToolchainVersions:
        """Probe every tool and collect the results."""
        versions = ToolchainVersions(
            primary_runtime_version=self.probe("java"),
            language_version=self.probe("scala"),
            build_tool_versions=BuildToolVersions.from_matches(self.probe("sbt")),
        )
        logger.info("Detected toolchain: %r", versions)
        return versions

    def check_prerequisites(self) -> Dict[str, bool]:
        """Check which probe executables are on PATH.

        Returns:
            Dict mapping tool name to availability
        """
        return {
            tool: is_command_available(self.executable_for(tool))
            for tool in PROBE_SPECS
        }
