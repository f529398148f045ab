"""MCP server assets, registered in the client's mcp.json."""

from pathlib import Path

from sx.core.errors import HandlerError
from sx.fetch.archive import list_files
from sx.handlers.base import AssetHandler, DirectoryAssetHandler
from sx.handlers.settings import (
    MCP_CONFIG_FILE_NAME,
    McpServerEntry,
    read_mcp_config,
    write_mcp_config,
)
from sx.metadata.models import McpConfig as McpMetadata


def _mcp_section(handler: AssetHandler, mcp: McpMetadata | None) -> McpMetadata:
    if mcp is None or not mcp.command:
        raise HandlerError(f"{handler.name}: [mcp] section with a command is required")
    return mcp


def _unregister(name: str, target_base: Path) -> None:
    config_path = target_base / MCP_CONFIG_FILE_NAME
    if not config_path.exists():
        return
    config = read_mcp_config(config_path)
    write_mcp_config(config_path, config.without_server(name))


class McpHandler(DirectoryAssetHandler):
    """Packaged MCP server: code extracted under mcp-servers/, config entry points at it.

    Arguments naming files in the archive are rewritten to absolute paths.
    """

    directory = "mcp-servers"

    def install(self, zip_data: bytes, target_base: Path) -> None:
        mcp = _mcp_section(self, self._metadata.mcp)
        files = set(list_files(zip_data))
        super().install(zip_data, target_base)

        install_dir = target_base / self.get_install_path()
        args = [
            str(install_dir / arg.removeprefix("./")) if arg.removeprefix("./") in files else arg
            for arg in mcp.args
        ]
        entry = McpServerEntry(command=mcp.command, args=args, env=dict(mcp.env) or None)

        config_path = target_base / MCP_CONFIG_FILE_NAME
        config = read_mcp_config(config_path)
        write_mcp_config(config_path, config.with_server(self.name, entry))

    def remove(self, target_base: Path) -> None:
        _unregister(self.name, target_base)
        super().remove(target_base)


class McpRemoteHandler(AssetHandler):
    """MCP server run by an external command (npx, docker, ...): config entry only."""

    def get_install_path(self) -> str:
        return MCP_CONFIG_FILE_NAME

    def install(self, zip_data: bytes, target_base: Path) -> None:
        mcp = _mcp_section(self, self._metadata.mcp)
        entry = McpServerEntry(command=mcp.command, args=list(mcp.args), env=dict(mcp.env) or None)

        config_path = target_base / MCP_CONFIG_FILE_NAME
        config = read_mcp_config(config_path)
        write_mcp_config(config_path, config.with_server(self.name, entry))

    def remove(self, target_base: Path) -> None:
        _unregister(self.name, target_base)

    def verify_installed(self, target_base: Path) -> tuple[bool, str]:
        config_path = target_base / MCP_CONFIG_FILE_NAME
        if not config_path.exists():
            return False, f"{config_path} not found"
        if self.name not in read_mcp_config(config_path).mcp_servers:
            return False, f"{self.name} not registered in {config_path}"
        return True, "installed"
