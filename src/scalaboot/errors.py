"""Error types raised while resolving a backend launch."""

from __future__ import annotations

from typing import Optional


class ScalabootError(Exception):
    """Base class for all bootstrap errors."""


class ToolchainNotFound(ScalabootError):
    """A probe executable is missing or exited abnormally.

    Absorbed by the detector, which reports an empty version instead.
    """

    def __init__(self, tool_name: str, reason: str = ""):
        self.tool_name = tool_name
        message = f"{tool_name} not available"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class VersionParseFailure(ScalabootError):
    """Probe output did not contain a MAJOR.MINOR.PATCH version."""

    def __init__(self, tool_name: str, output: str):
        self.tool_name = tool_name
        self.output = output
        super().__init__(f"No version found in {tool_name} output: {output!r}")


class ReleaseResolutionError(ScalabootError):
    """The release registry could not provide a stable release."""

    def __init__(self, repository: str, reason: str):
        self.repository = repository
        self.reason = reason
        super().__init__(f"Cannot resolve latest release of {repository}: {reason}")


class AssetFormatError(ScalabootError):
    """A release string does not have the MAJOR.MINOR.PATCH+BUILD shape."""

    def __init__(self, release: str):
        self.release = release
        super().__init__(
            f"Release '{release}' does not match MAJOR.MINOR.PATCH+BUILD"
        )


class ConfigurationError(ScalabootError):
    """User-supplied configuration cannot be turned into a server location."""


class BootstrapError(ScalabootError):
    """Auto-provisioning failed; wraps the originating error."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
