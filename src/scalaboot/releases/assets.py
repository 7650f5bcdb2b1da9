"""Download asset selection for a resolved JDK release."""

from __future__ import annotations

import platform
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple
from urllib.parse import quote

from ..errors import AssetFormatError

DEFAULT_REPOSITORY = "adoptium/temurin21-binaries"

_RELEASE_RE = re.compile(r"(\d+)\.(\d+)\.(\d+)\+\d+")


class OperatingSystem(Enum):
    """Platforms the host can report."""

    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"
    OTHER = "other"

    @classmethod
    def from_name(cls, name: Optional[str]) -> "OperatingSystem":
        """Map a platform identifier ("windows", "Darwin", ...) to a member."""
        normalized = (name or "").strip().lower()
        aliases = {
            "windows": cls.WINDOWS,
            "win32": cls.WINDOWS,
            "macos": cls.MACOS,
            "darwin": cls.MACOS,
            "linux": cls.LINUX,
        }
        return aliases.get(normalized, cls.OTHER)


# OS -> (asset platform token, archive extension)
ASSET_TABLE: Dict[OperatingSystem, Tuple[str, str]] = {
    OperatingSystem.WINDOWS: ("windows", "msi"),
    OperatingSystem.MACOS: ("mac", "tar.gz"),
    OperatingSystem.LINUX: ("linux", "tar.gz"),
}

# Unmapped platforms still get something workable
DEFAULT_ASSET = ASSET_TABLE[OperatingSystem.LINUX]

# platform.machine() -> asset architecture token
ARCHITECTURES: Dict[str, str] = {
    "x86_64": "x64",
    "amd64": "x64",
    "arm64": "aarch64",
    "aarch64": "aarch64",
}


@dataclass(frozen=True)
class AssetPlan:
    """Where to download a release from and how to file it locally.

    Attributes:
        operating_system: Target platform
        asset_url: Full download URL
        major_version_tag: Local bookkeeping tag, e.g. "OpenJDK21U"
        asset_name: File name of the asset
        architecture: CPU architecture token used in the asset name
    """

    operating_system: OperatingSystem
    asset_url: str
    major_version_tag: str
    asset_name: str = ""
    architecture: str = "x64"


def read_major_version_tag(release: str) -> str:
    """Extract the major-version tag from a release.

    e.g. for 21.0.2+13, get OpenJDK21U

    Raises:
        AssetFormatError: If the release is not MAJOR.MINOR.PATCH+BUILD
    """
    match = _RELEASE_RE.search(release)
    if not match:
        raise AssetFormatError(release)
    return f"OpenJDK{match.group(1)}U"


def detect_operating_system() -> OperatingSystem:
    """Platform of the running host."""
    return OperatingSystem.from_name(platform.system())


def detect_architecture() -> str:
    """CPU architecture token of the running host (x64 when unknown)."""
    return ARCHITECTURES.get(platform.machine().lower(), "x64")


def select_asset(
    release: str,
    operating_system: OperatingSystem,
    architecture: str = "x64",
    repository: str = DEFAULT_REPOSITORY,
) -> AssetPlan:
    """Choose the download asset for a release on a platform.

    Args:
        release: Release string, e.g. "21.0.2+13"
        operating_system: Target platform
        architecture: CPU architecture token ("x64", "aarch64")
        repository: Registry identifier that publishes the assets

    Returns:
        AssetPlan for the release

    Raises:
        AssetFormatError: If the release is not MAJOR.MINOR.PATCH+BUILD
    """
    major_version_tag = read_major_version_tag(release)
    os_token, extension = ASSET_TABLE.get(operating_system, DEFAULT_ASSET)

    asset_name = (
        f"{major_version_tag}-jdk_{architecture}_{os_token}_hotspot_"
        f"{release.replace('+', '_')}.{extension}"
    )
    asset_url = (
        f"https://github.com/{repository}/releases/download/"
        f"jdk-{quote(release, safe='')}/{asset_name}"
    )

    return AssetPlan(
        operating_system=operating_system,
        asset_url=asset_url,
        major_version_tag=major_version_tag,
        asset_name=asset_name,
        architecture=architecture,
    )
