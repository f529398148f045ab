"""Typed schemas for the JSON config files handlers edit.

Both models allow extra keys so settings written by the user or by other
tools survive a read-modify-write cycle unchanged.
"""

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sx.core.errors import HandlerError

SETTINGS_FILE_NAME = "settings.json"
MCP_CONFIG_FILE_NAME = "mcp.json"


class HookEntry(BaseModel):
    """One hook registration under settings.json "hooks".<event>.

    Entries sx writes carry the owning asset name in "_artifact"; entries
    without it belong to someone else and are never touched.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    script: str | None = None
    artifact: str | None = Field(default=None, alias="_artifact")
    is_async: bool | None = Field(default=None, alias="async")
    fail_on_error: bool | None = Field(default=None, alias="failOnError")
    timeout: int | None = None


class ClaudeSettings(BaseModel):
    """settings.json in a client directory."""

    model_config = ConfigDict(extra="allow")

    hooks: dict[str, list[HookEntry]] | None = None

    def with_hook(self, event: str, entry: HookEntry) -> "ClaudeSettings":
        """Copy with entry registered for event, replacing any entry for the same asset."""
        hooks = dict(self.hooks or {})
        existing = [hook for hook in hooks.get(event, []) if hook.artifact != entry.artifact]
        hooks[event] = [*existing, entry]
        return self.model_copy(update={"hooks": hooks})

    def without_asset_hooks(self, asset_name: str) -> "ClaudeSettings":
        """Copy with every hook owned by asset_name removed, across all events."""
        if self.hooks is None:
            return self
        hooks = {
            event: [hook for hook in entries if hook.artifact != asset_name]
            for event, entries in self.hooks.items()
        }
        return self.model_copy(update={"hooks": hooks})


class McpServerEntry(BaseModel):
    model_config = ConfigDict(extra="allow")

    command: str
    args: list[str] = Field(default_factory=list)
    env: dict[str, str] | None = None


class McpConfig(BaseModel):
    """mcp.json in a client directory."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    mcp_servers: dict[str, McpServerEntry] = Field(default_factory=dict, alias="mcpServers")

    def with_server(self, name: str, entry: McpServerEntry) -> "McpConfig":
        return self.model_copy(update={"mcp_servers": {**self.mcp_servers, name: entry}})

    def without_server(self, name: str) -> "McpConfig":
        servers = {key: value for key, value in self.mcp_servers.items() if key != name}
        return self.model_copy(update={"mcp_servers": servers})


def read_settings(path: Path) -> ClaudeSettings:
    """Read settings.json, returning empty settings if it does not exist.

    Raises:
        HandlerError: If the file exists but cannot be parsed
    """
    if not path.exists():
        return ClaudeSettings()
    try:
        return ClaudeSettings.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        raise HandlerError(f"Failed to parse {path}: {e}") from e


def write_settings(path: Path, settings: ClaudeSettings) -> None:
    _write_json(path, settings)


def read_mcp_config(path: Path) -> McpConfig:
    """Read mcp.json, returning an empty config if it does not exist.

    Raises:
        HandlerError: If the file exists but cannot be parsed
    """
    if not path.exists():
        return McpConfig()
    try:
        return McpConfig.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        raise HandlerError(f"Failed to parse {path}: {e}") from e


def write_mcp_config(path: Path, config: McpConfig) -> None:
    _write_json(path, config)


def _write_json(path: Path, model: BaseModel) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    data = model.model_dump(by_alias=True, exclude_none=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
