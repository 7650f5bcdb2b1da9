"""Pytest configuration and shared fixtures."""

import tempfile
from pathlib import Path
from typing import Generator, Optional

import pytest

from scalaboot.config import BootstrapConfig
from scalaboot.launch import LaunchDecisionEngine
from scalaboot.releases import OperatingSystem, ReleaseResolver
from tests.fixtures.registry import TEMURIN_RELEASES, FakeRegistry


@pytest.fixture
def temp_plugin_root() -> Generator[Path, None, None]:
    """Empty plugin working directory."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def bootstrap_config(temp_plugin_root: Path) -> BootstrapConfig:
    return BootstrapConfig(plugin_root=temp_plugin_root)


@pytest.fixture
def registry(bootstrap_config: BootstrapConfig) -> FakeRegistry:
    """Registry publishing a few Temurin 21 releases."""
    return FakeRegistry({bootstrap_config.backend.repository: list(TEMURIN_RELEASES)})


@pytest.fixture
def make_engine(bootstrap_config: BootstrapConfig, registry: FakeRegistry):
    """Factory for engines wired to the fake registry."""

    def _make(
        operating_system: OperatingSystem = OperatingSystem.LINUX,
        registry_override: Optional[FakeRegistry] = None,
    ) -> LaunchDecisionEngine:
        resolver = ReleaseResolver(registry_override or registry)
        return LaunchDecisionEngine(
            bootstrap_config,
            resolver,
            operating_system=operating_system,
        )

    return _make
