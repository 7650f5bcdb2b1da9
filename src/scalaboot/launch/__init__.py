"""Launch decisions for the language server backend."""

from .engine import (
    LAUNCH_ORDER,
    LaunchDecisionEngine,
    build_document_selector,
    install_status,
)
from .types import (
    DocumentFilter,
    DocumentSelector,
    InstallStatus,
    LaunchDirective,
    LaunchState,
)

__all__ = [
    "LAUNCH_ORDER",
    "LaunchDecisionEngine",
    "build_document_selector",
    "install_status",
    "DocumentFilter",
    "DocumentSelector",
    "InstallStatus",
    "LaunchDirective",
    "LaunchState",
]
