"""Asset type enumeration."""

from enum import Enum


class AssetType(Enum):
    """Kinds of assets sx can install.

    The value is the key used in lock files and metadata.toml.
    """

    SKILL = "skill"
    AGENT = "agent"
    COMMAND = "command"
    HOOK = "hook"
    MCP = "mcp"
    MCP_REMOTE = "mcp-remote"

    @property
    def label(self) -> str:
        """Human-readable name for output."""
        return _LABELS[self]

    @classmethod
    def parse(cls, key: str) -> "AssetType":
        """Look up an asset type by its lock file key.

        Raises:
            ValueError: If the key is not a known asset type
        """
        for asset_type in cls:
            if asset_type.value == key:
                return asset_type
        valid = ", ".join(t.value for t in cls)
        raise ValueError(f"Unknown asset type '{key}' (expected one of: {valid})")


_LABELS: dict[AssetType, str] = {
    AssetType.SKILL: "Skill",
    AssetType.AGENT: "Agent",
    AssetType.COMMAND: "Command",
    AssetType.HOOK: "Hook",
    AssetType.MCP: "MCP Server",
    AssetType.MCP_REMOTE: "Remote MCP Server",
}


def all_asset_types() -> frozenset[AssetType]:
    return frozenset(AssetType)
