"""Configuration management for scalaboot."""

from .options import InitializationOptions, parse_initialization_options
from .parser import (
    BackendConfig,
    BootstrapConfig,
    ProbeConfig,
    ReleaseConfig,
    find_config_file,
    get_plugin_root,
    load_config,
)

__all__ = [
    "BootstrapConfig",
    "BackendConfig",
    "ReleaseConfig",
    "ProbeConfig",
    "load_config",
    "find_config_file",
    "get_plugin_root",
    "InitializationOptions",
    "parse_initialization_options",
]
