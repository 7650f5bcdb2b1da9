"""Release resolution and download asset selection."""

from .assets import (
    AssetPlan,
    OperatingSystem,
    detect_architecture,
    detect_operating_system,
    read_major_version_tag,
    select_asset,
)
from .registry import GitHubReleaseRegistry, ReleaseEntry, ReleaseRegistry
from .resolver import ReleaseResolver, is_stable, normalize_tag

__all__ = [
    "AssetPlan",
    "OperatingSystem",
    "detect_architecture",
    "detect_operating_system",
    "read_major_version_tag",
    "select_asset",
    "GitHubReleaseRegistry",
    "ReleaseEntry",
    "ReleaseRegistry",
    "ReleaseResolver",
    "is_stable",
    "normalize_tag",
]
