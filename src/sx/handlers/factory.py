"""Handler selection by asset type."""

from sx.assets.types import AssetType
from sx.handlers.base import AssetHandler
from sx.handlers.hook import HookHandler
from sx.handlers.mcp import McpHandler, McpRemoteHandler
from sx.handlers.prompt_file import AgentHandler, CommandHandler
from sx.handlers.skill import SkillHandler
from sx.metadata.models import AssetInfo, Metadata

HANDLER_TYPES: dict[AssetType, type[AssetHandler]] = {
    AssetType.SKILL: SkillHandler,
    AssetType.AGENT: AgentHandler,
    AssetType.COMMAND: CommandHandler,
    AssetType.HOOK: HookHandler,
    AssetType.MCP: McpHandler,
    AssetType.MCP_REMOTE: McpRemoteHandler,
}


def create_handler(asset_type: AssetType, metadata: Metadata) -> AssetHandler:
    return HANDLER_TYPES[asset_type](metadata)


def removal_metadata(name: str, asset_type: AssetType) -> Metadata:
    """Minimal metadata for removing an asset whose archive is not at hand."""
    return Metadata(
        metadata_version="1.0",
        asset=AssetInfo(name=name, version="", type=asset_type, description=""),
    )
