"""Configuration file parser for scalaboot."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import urlparse
from urllib.request import url2pathname

from dotenv import load_dotenv

from ..errors import ConfigurationError

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Fallback for Python 3.10

CONFIG_FILENAME = ".scalaboot.toml"
PLUGIN_ROOT_ENV = "SCALABOOT_PLUGIN_ROOT"
GITHUB_TOKEN_ENV = "GITHUB_TOKEN"


@dataclass
class BackendConfig:
    """Which backend to provision and which files it serves."""

    repository: str = "adoptium/temurin21-binaries"
    server_binary: str = "metals"
    language_id: str = "scala"
    file_glob: str = "**/*.{scala}"


@dataclass
class ReleaseConfig:
    """Release registry settings."""

    window: int = 30
    allow_prerelease: bool = False
    api_base: str = "https://api.github.com"
    token: Optional[str] = None


@dataclass
class ProbeConfig:
    """Executables used for toolchain version probes."""

    java: str = "java"
    scala: str = "scala"
    sbt: str = "sbt"
    timeout_seconds: Optional[float] = None


@dataclass
class BootstrapConfig:
    """Complete scalaboot configuration."""

    backend: BackendConfig = field(default_factory=BackendConfig)
    release: ReleaseConfig = field(default_factory=ReleaseConfig)
    probes: ProbeConfig = field(default_factory=ProbeConfig)

    # Plugin working directory; auto-provisioned backends live under it
    plugin_root: Path = field(default_factory=Path.cwd)


def find_config_file(plugin_root: Path) -> Optional[Path]:
    """Find .scalaboot.toml in the plugin root.

    Args:
        plugin_root: Plugin working directory

    Returns:
        Path to .scalaboot.toml if found, None otherwise
    """
    config_file = plugin_root / CONFIG_FILENAME
    if config_file.exists():
        return config_file
    return None


def get_plugin_root() -> Path:
    """Plugin working directory from the environment, or the cwd.

    Hosts may hand the directory over as a file: URI.
    """
    root = os.getenv(PLUGIN_ROOT_ENV)
    if not root:
        return Path.cwd()
    if root.startswith("file:"):
        return Path(url2pathname(urlparse(root).path))
    return Path(root)


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    """A top-level table of the config file, empty when absent."""
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigurationError(f"[{name}] in {CONFIG_FILENAME} must be a table")
    return section


def _positive_int(section: Dict[str, Any], key: str, default: int) -> int:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(f"{key} must be a positive integer, got {value!r}")
    return value


def load_config(plugin_root: Optional[Path] = None) -> BootstrapConfig:
    """Load configuration from .scalaboot.toml or use defaults.

    Args:
        plugin_root: Plugin working directory (defaults to SCALABOOT_PLUGIN_ROOT
            or the current directory)

    Returns:
        BootstrapConfig with loaded or default configuration

    Raises:
        ConfigurationError: If a section is not a table or a value has the
            wrong type
    """
    load_dotenv()

    if plugin_root is None:
        plugin_root = get_plugin_root()
    config = BootstrapConfig(plugin_root=Path(plugin_root))
    config.release.token = os.getenv(GITHUB_TOKEN_ENV) or None

    config_file = find_config_file(config.plugin_root)
    if not config_file:
        return config

    try:
        with open(config_file, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        # Unreadable config falls back to defaults
        return config

    backend_data = _section(data, "backend")
    config.backend.repository = backend_data.get("repository", config.backend.repository)
    config.backend.server_binary = backend_data.get(
        "server_binary", config.backend.server_binary
    )
    config.backend.language_id = backend_data.get("language_id", config.backend.language_id)
    config.backend.file_glob = backend_data.get("file_glob", config.backend.file_glob)

    release_data = _section(data, "release")
    config.release.window = _positive_int(release_data, "window", config.release.window)
    config.release.allow_prerelease = bool(release_data.get("allow_prerelease", False))
    config.release.api_base = release_data.get("api_base", config.release.api_base)

    probe_data = _section(data, "probes")
    config.probes.java = probe_data.get("java", config.probes.java)
    config.probes.scala = probe_data.get("scala", config.probes.scala)
    config.probes.sbt = probe_data.get("sbt", config.probes.sbt)
    timeout = probe_data.get("timeout_seconds")
    if timeout is not None:
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            raise ConfigurationError(
                f"timeout_seconds must be a number, got {timeout!r}"
            )
        config.probes.timeout_seconds = float(timeout)

    return config
