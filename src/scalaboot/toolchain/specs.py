"""Declarative probe specifications for the Scala toolchain.

To probe another tool, add its ProbeSpec here.
"""

from dataclasses import dataclass
from typing import Dict, Literal

VERSION_PATTERN = r"\d+\.\d+\.\d+"


@dataclass(frozen=True)
class ProbeSpec:
    """How to ask a tool for its version."""

    display_name: str
    executable_name: str
    version_flag: str
    # "first": first match on the first output line; "all": every match
    collect: Literal["first", "all"] = "first"


PROBE_SPECS: Dict[str, ProbeSpec] = {
    "java": ProbeSpec(
        display_name="Java",
        executable_name="java",
        version_flag="-version",
    ),
    # Only the version tag matters here, mainly to tell Scala 2 from Scala 3
    "scala": ProbeSpec(
        display_name="Scala",
        executable_name="scala",
        version_flag="-version",
    ),
    # sbt version in this project: 1.9.9
    # sbt script version: 1.9.9
    "sbt": ProbeSpec(
        display_name="sbt",
        executable_name="sbt",
        version_flag="-version",
        collect="all",
    ),
}


def get_probe_spec(tool: str) -> ProbeSpec:
    """Get the probe spec for a tool.

    Raises:
        ValueError: If the tool has no probe spec
    """
    if tool not in PROBE_SPECS:
        supported = ", ".join(PROBE_SPECS.keys())
        raise ValueError(f"Tool '{tool}' not supported. Supported tools: {supported}")

    return PROBE_SPECS[tool]
