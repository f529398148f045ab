"""Models for metadata.toml, the manifest embedded in every asset archive.

Example metadata.toml:

    [asset]
    name = "lint-on-save"
    version = "1.0.0"
    type = "hook"
    description = "Runs the linter after every edit"

    [hook]
    event = "PostToolUse"
    script-file = "hook.sh"
    timeout = 30
"""

from dataclasses import dataclass, field

from sx.assets.types import AssetType


@dataclass(frozen=True)
class AssetInfo:
    """The [asset] table."""

    name: str
    version: str
    type: AssetType
    description: str
    authors: tuple[str, ...] = ()
    dependencies: tuple[str, ...] = ()


@dataclass(frozen=True)
class PromptConfig:
    """The [skill], [agent] or [command] table."""

    prompt_file: str


@dataclass(frozen=True)
class HookConfig:
    """The [hook] table."""

    event: str
    script_file: str
    is_async: bool = False
    fail_on_error: bool = True
    timeout: int | None = None


@dataclass(frozen=True)
class McpConfig:
    """The [mcp] table, shared by mcp and mcp-remote assets."""

    command: str
    args: tuple[str, ...] = ()
    env: dict[str, str] = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class Metadata:
    """Parsed metadata.toml."""

    metadata_version: str
    asset: AssetInfo
    prompt: PromptConfig | None = None
    hook: HookConfig | None = None
    mcp: McpConfig | None = None


DEFAULT_PROMPT_FILES: dict[AssetType, str] = {
    AssetType.SKILL: "SKILL.md",
    AssetType.AGENT: "AGENT.md",
    AssetType.COMMAND: "COMMAND.md",
}


def prompt_file_for(metadata: Metadata) -> str:
    """Return the prompt file name for prompt-based asset types."""
    if metadata.prompt is not None and metadata.prompt.prompt_file:
        return metadata.prompt.prompt_file
    return DEFAULT_PROMPT_FILES.get(metadata.asset.type, "")
