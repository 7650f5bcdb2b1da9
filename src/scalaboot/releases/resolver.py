"""Latest stable release lookup."""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

import semver

from ..errors import ReleaseResolutionError
from .registry import ReleaseEntry, ReleaseRegistry

logger = logging.getLogger(__name__)

DEFAULT_WINDOW = 30

_TAG_PREFIX_RE = re.compile(r"^\D+")


def normalize_tag(tag: str) -> str:
    """Strip a non-numeric tag prefix: ``jdk-21.0.2+13`` -> ``21.0.2+13``."""
    return _TAG_PREFIX_RE.sub("", tag.strip())


def parse_version(release: str) -> Optional[semver.VersionInfo]:
    """Parse a normalized release string, or None if it is not semver."""
    try:
        return semver.VersionInfo.parse(release)
    except ValueError:
        return None


def is_stable(entry: ReleaseEntry) -> bool:
    """Whether a release is a published, final build.

    Early-access builds hide their marker in the build metadata
    (``21.0.3+7-ea-beta``), so only purely numeric build metadata counts.
    """
    if entry.draft or entry.prerelease:
        return False

    version = parse_version(normalize_tag(entry.tag))
    if version is None or version.prerelease:
        return False

    return version.build is None or version.build.isdigit()


def _sort_key(release: str) -> Tuple[int, int, int, int]:
    version = parse_version(release)
    if version is None:
        return (-1, -1, -1, -1)
    build = int(version.build) if version.build and version.build.isdigit() else -1
    return (version.major, version.minor, version.patch, build)


class ReleaseResolver:
    """Resolves the newest stable release of a repository.

    Reads a bounded window of recent releases rather than the single
    "latest" pointer, because registries can mark non-final builds as latest.
    """

    def __init__(
        self,
        registry: ReleaseRegistry,
        *,
        window: int = DEFAULT_WINDOW,
        allow_prerelease: bool = False,
    ):
        self.registry = registry
        self.window = window
        self.allow_prerelease = allow_prerelease

    def latest_stable(self, repository: str) -> str:
        """Return the newest stable release of ``repository``.

        Args:
            repository: Registry identifier, e.g. "adoptium/temurin21-binaries"

        Returns:
            Normalized version string, e.g. "21.0.2+13"

        Raises:
            ReleaseResolutionError: If the registry fails, lists nothing,
                or lists only unstable releases and prereleases are not allowed
        """
        entries = self.registry.list_releases(repository, self.window)
        if not entries:
            raise ReleaseResolutionError(repository, "no releases published")

        stable = [normalize_tag(entry.tag) for entry in entries if is_stable(entry)]
        if stable:
            latest = max(stable, key=_sort_key)
            logger.info("Latest stable release of %s: %s", repository, latest)
            return latest

        if self.allow_prerelease:
            candidates = self._parseable(entries)
            if candidates:
                latest = max(candidates, key=_sort_key)
                logger.warning(
                    "No stable release of %s, falling back to %s", repository, latest
                )
                return latest

        raise ReleaseResolutionError(
            repository, f"no stable release among the latest {len(entries)}"
        )

    @staticmethod
    def _parseable(entries: List[ReleaseEntry]) -> List[str]:
        releases = [normalize_tag(entry.tag) for entry in entries if not entry.draft]
        return [release for release in releases if parse_version(release) is not None]
