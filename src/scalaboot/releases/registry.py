"""Release registry clients."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

import requests

from ..errors import ReleaseResolutionError

logger = logging.getLogger(__name__)

# GitHub serves at most this many releases per page
MAX_PER_PAGE = 100


@dataclass(frozen=True)
class ReleaseEntry:
    """One published release as reported by a registry."""

    tag: str
    prerelease: bool = False
    draft: bool = False


class ReleaseRegistry(Protocol):
    """Anything that can list the recent releases of a repository."""

    def list_releases(self, repository: str, limit: int) -> List[ReleaseEntry]:
        """Return up to ``limit`` releases, newest first."""
        ...


class GitHubReleaseRegistry:
    """Lists releases through the GitHub REST API."""

    def __init__(
        self,
        *,
        api_base: str = "https://api.github.com",
        token: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        self.api_base = api_base.rstrip("/")
        self.token = token.strip() if isinstance(token, str) else ""
        self.timeout_seconds = timeout_seconds

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "scalaboot",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def list_releases(self, repository: str, limit: int) -> List[ReleaseEntry]:
        """Fetch the newest ``limit`` releases of ``repository``.

        Raises:
            ReleaseResolutionError: If the API is unreachable or answers
                with something other than a list of releases
        """
        if limit > MAX_PER_PAGE:
            logger.warning(
                "Release window %d exceeds the per-page maximum; using %d",
                limit,
                MAX_PER_PAGE,
            )
            limit = MAX_PER_PAGE

        url = f"{self.api_base}/repos/{repository}/releases"
        logger.debug("Fetching releases: %s (per_page=%d)", url, limit)

        try:
            response = requests.get(
                url,
                headers=self._headers(),
                params={"per_page": limit},
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else "?"
            raise ReleaseResolutionError(repository, f"HTTP {status}") from exc
        except ValueError as exc:
            raise ReleaseResolutionError(repository, "malformed registry response") from exc
        except requests.RequestException as exc:
            raise ReleaseResolutionError(repository, f"registry unreachable ({exc})") from exc

        if not isinstance(payload, list):
            raise ReleaseResolutionError(repository, "malformed registry response")

        return [_to_entry(item) for item in payload if _has_tag(item)]


def _has_tag(item: Any) -> bool:
    return isinstance(item, dict) and isinstance(item.get("tag_name"), str)


def _to_entry(item: Dict[str, Any]) -> ReleaseEntry:
    return ReleaseEntry(
        tag=item["tag_name"],
        prerelease=bool(item.get("prerelease", False)),
        draft=bool(item.get("draft", False)),
    )
