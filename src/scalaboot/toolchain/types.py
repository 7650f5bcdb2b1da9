"""Data types for toolchain detection."""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class BuildToolVersions:
    """System-installed and project-pinned build tool versions."""

    system: str = ""
    project: str = ""

    @classmethod
    def from_matches(cls, matches: List[str]) -> "BuildToolVersions":
        """Build from probe matches in output order.

        sbt reports the project version first and the launcher script
        version second. A lone match is the system version.
        """
        if not matches:
            return cls()
        if len(matches) == 1:
            return cls(system=matches[0])
        return cls(system=matches[1], project=matches[0])


@dataclass(frozen=True)
class ToolchainVersions:
    """Versions of the local toolchain.

    An empty string means the tool was not found or its version could
    not be parsed.

    Attributes:
        primary_runtime_version: JVM version (``java -version``)
        language_version: Scala version (``scala -version``)
        build_tool_versions: sbt versions (``sbt -version``)
    """

    primary_runtime_version: str = ""
    language_version: str = ""
    build_tool_versions: BuildToolVersions = field(default_factory=BuildToolVersions)

    def __repr__(self) -> str:
        def show(value: str) -> str:
            return value or "-"

        return (
            f"<ToolchainVersions java={show(self.primary_runtime_version)} "
            f"scala={show(self.language_version)} "
            f"sbt={show(self.build_tool_versions.system)}"
            f"/{show(self.build_tool_versions.project)}>"
        )
