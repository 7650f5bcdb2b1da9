"""MCP server for scalaboot.

Exposes backend launch resolution as MCP tools using FastMCP.
"""

from __future__ import annotations

import sys
from dataclasses import asdict
from typing import Any, Dict, Optional

from mcp.server import FastMCP

from .bridge import INITIALIZE_METHOD, PluginBridge, RecordingHost
from .config import load_config
from .errors import ConfigurationError
from .launch import LaunchDecisionEngine, install_status
from .toolchain import ToolchainDetector

mcp = FastMCP("scalaboot")


@mcp.tool()
def resolve_launch(initialization_options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Resolve how the Scala language server should be launched.

    Runs the same initialize flow a host editor would: overrides from
    ``serverPath`` or ``lsp.serverPath``/``lsp.serverArgs`` win, otherwise the
    latest stable JDK release is selected and installed under the plugin root.

    Args:
        initialization_options: Plugin settings as the editor would send them

    Returns:
        The launch directive, or {"error": message} if resolution failed
    """
    host = RecordingHost()
    bridge = PluginBridge(host, lambda: LaunchDecisionEngine.from_config(load_config()))
    bridge.handle_request(
        INITIALIZE_METHOD, {"initializationOptions": initialization_options}
    )

    if bridge.directive is None:
        return {"error": "; ".join(host.errors) or "no launch directive produced"}

    result = bridge.directive.to_dict()
    result["install_status"] = install_status(bridge.directive).value
    return result


@mcp.tool()
def get_toolchain_info() -> Dict[str, Any]:
    """Report local java, scala and sbt versions and which tools are on PATH.

    Empty versions mean the tool is missing or printed no version.
    """
    try:
        config = load_config()
    except ConfigurationError as e:
        return {"error": str(e)}

    detector = ToolchainDetector(config.probes)
    versions = detector.detect_toolchain()
    return {
        "versions": asdict(versions),
        "available": detector.check_prerequisites(),
    }


@mcp.tool()
def get_bootstrap_config() -> Dict[str, Any]:
    """Show the effective scalaboot configuration (token redacted)."""
    try:
        config = load_config()
    except ConfigurationError as e:
        return {"error": str(e)}

    data = asdict(config)
    data["plugin_root"] = str(config.plugin_root)
    if data["release"].get("token"):
        data["release"]["token"] = "***"
    return data


def main():
    """Run the MCP server.

    The plugin root can be set via the SCALABOOT_PLUGIN_ROOT environment
    variable; it defaults to the current working directory.
    """
    config = load_config()

    # stdout is used for the MCP protocol
    print("🚀 Starting scalaboot MCP Server", file=sys.stderr)
    print(f"📂 Plugin root: {config.plugin_root}", file=sys.stderr)
    print(f"📦 Backend repository: {config.backend.repository}", file=sys.stderr)
    print("", file=sys.stderr)

    mcp.run()


if __name__ == "__main__":
    main()
