"""Launch decision engine.

Picks how to start the backend. States are evaluated in LAUNCH_ORDER and
the first one that produces a directive wins:

1. Direct override: top-level ``serverPath``
2. Namespaced override: ``lsp.serverPath`` with ``lsp.serverArgs``
3. Auto-provision: latest stable JDK release installed under the plugin root
"""

from __future__ import annotations

import logging
import unicodedata
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple
from urllib.parse import urljoin, urlparse
from urllib.request import url2pathname

from ..config import BootstrapConfig, InitializationOptions, parse_initialization_options
from ..errors import (
    AssetFormatError,
    BootstrapError,
    ConfigurationError,
    ReleaseResolutionError,
)
from ..releases import (
    GitHubReleaseRegistry,
    OperatingSystem,
    ReleaseResolver,
    detect_architecture,
    detect_operating_system,
    select_asset,
)
from ..toolchain import ToolchainDetector
from .types import (
    DocumentFilter,
    DocumentSelector,
    InstallStatus,
    LaunchDirective,
    LaunchState,
)

logger = logging.getLogger(__name__)

LAUNCH_ORDER: Tuple[LaunchState, ...] = (
    LaunchState.DIRECT_OVERRIDE,
    LaunchState.NAMESPACED_OVERRIDE,
    LaunchState.AUTO_PROVISION,
)


def build_document_selector(config: BootstrapConfig) -> DocumentSelector:
    """Document selector for the configured backend family."""
    return (
        DocumentFilter(
            language_id=config.backend.language_id,
            file_glob_pattern=config.backend.file_glob,
        ),
    )


def validate_server_path(server_path: str) -> str:
    """Check that a user-supplied server path can name a location.

    Raises:
        ConfigurationError: If the path is blank or contains control characters
    """
    if not server_path.strip():
        raise ConfigurationError(f"Server path {server_path!r} is blank")
    if any(unicodedata.category(ch) == "Cc" for ch in server_path):
        raise ConfigurationError(
            f"Server path {server_path!r} contains control characters"
        )
    return server_path


def server_binary_name(binary: str, operating_system: OperatingSystem) -> str:
    if operating_system is OperatingSystem.WINDOWS and "." not in binary:
        return f"{binary}.bat"
    return binary


def install_status(directive: LaunchDirective) -> InstallStatus:
    """Whether the backend of an auto-provisioned directive is on disk."""
    if directive.state is not LaunchState.AUTO_PROVISION:
        return InstallStatus.NOT_APPLICABLE

    path = Path(url2pathname(urlparse(directive.server_uri).path))
    if path.exists():
        return InstallStatus.INSTALLED
    return InstallStatus.MISSING


class LaunchDecisionEngine:
    """Turns initialization options into a single launch directive.

    Collaborators are injected so a resolution is a function of the
    configuration and the environment it is given.
    """

    def __init__(
        self,
        config: BootstrapConfig,
        resolver: ReleaseResolver,
        *,
        operating_system: OperatingSystem,
        architecture: str = "x64",
        detector: Optional[ToolchainDetector] = None,
    ):
        self.config = config
        self.resolver = resolver
        self.operating_system = operating_system
        self.architecture = architecture
        self.detector = detector
        self._handlers: Dict[
            LaunchState, Callable[[InitializationOptions], Optional[LaunchDirective]]
        ] = {
            LaunchState.DIRECT_OVERRIDE: self._direct_override,
            LaunchState.NAMESPACED_OVERRIDE: self._namespaced_override,
            LaunchState.AUTO_PROVISION: self._auto_provision,
        }

    @classmethod
    def from_config(cls, config: BootstrapConfig) -> "LaunchDecisionEngine":
        """Engine wired to GitHub and the running host's platform."""
        registry = GitHubReleaseRegistry(
            api_base=config.release.api_base,
            token=config.release.token,
        )
        resolver = ReleaseResolver(
            registry,
            window=config.release.window,
            allow_prerelease=config.release.allow_prerelease,
        )
        return cls(
            config,
            resolver,
            operating_system=detect_operating_system(),
            architecture=detect_architecture(),
            detector=ToolchainDetector(config.probes),
        )

    def resolve(self, initialization_options: Any) -> LaunchDirective:
        """Decide how to launch the backend.

        Args:
            initialization_options: Raw initialization options from the host

        Returns:
            LaunchDirective from the first state that applies

        Raises:
            ConfigurationError: If an override path is malformed
            BootstrapError: If auto-provisioning fails
        """
        options = parse_initialization_options(initialization_options)

        for state in LAUNCH_ORDER:
            directive = self._handlers[state](options)
            if directive is not None:
                logger.info("Launching %s via %s", directive.server_uri, state.value)
                return directive

        # Auto-provision always produces a directive or raises
        raise BootstrapError("No launch state applied")

    def _direct_override(
        self, options: InitializationOptions
    ) -> Optional[LaunchDirective]:
        if options.server_path is None:
            return None

        return LaunchDirective(
            server_uri=validate_server_path(options.server_path),
            server_args=(),
            document_selector=build_document_selector(self.config),
            passthrough_options=options.raw,
            state=LaunchState.DIRECT_OVERRIDE,
        )

    def _namespaced_override(
        self, options: InitializationOptions
    ) -> Optional[LaunchDirective]:
        if options.lsp_server_path is None:
            return None

        return LaunchDirective(
            server_uri=validate_server_path(options.lsp_server_path),
            server_args=options.lsp_server_args,
            document_selector=build_document_selector(self.config),
            passthrough_options=options.raw,
            state=LaunchState.NAMESPACED_OVERRIDE,
        )

    def _auto_provision(self, options: InitializationOptions) -> LaunchDirective:
        repository = self.config.backend.repository

        try:
            release = self.resolver.latest_stable(repository)
            plan = select_asset(
                release,
                self.operating_system,
                architecture=self.architecture,
                repository=repository,
            )
        except (ReleaseResolutionError, AssetFormatError) as e:
            raise BootstrapError("Auto-provisioning failed", cause=e) from e

        # Detection only feeds the log, which the detector writes at info
        if self.detector is not None and logger.isEnabledFor(logging.INFO):
            self.detector.detect_toolchain()

        logger.info("Selected asset %s (%s)", plan.asset_name, plan.asset_url)

        directive = LaunchDirective(
            server_uri=self.install_uri(plan.major_version_tag),
            server_args=(),
            document_selector=build_document_selector(self.config),
            passthrough_options=options.raw,
            state=LaunchState.AUTO_PROVISION,
        )

        if install_status(directive) is InstallStatus.MISSING:
            logger.warning(
                "Backend not installed yet at %s; download it from %s",
                directive.server_uri,
                plan.asset_url,
            )
        return directive

    def install_uri(self, major_version_tag: str) -> str:
        """file: URI of the backend binary under the plugin root.

        Raises:
            BootstrapError: If the plugin root cannot be expressed as a URI
        """
        binary = server_binary_name(
            self.config.backend.server_binary, self.operating_system
        )
        try:
            root_uri = Path(self.config.plugin_root).resolve().as_uri()
        except ValueError as e:
            raise BootstrapError("Invalid plugin root", cause=e) from e
        return urljoin(root_uri.rstrip("/") + "/", f"{major_version_tag}/{binary}")
