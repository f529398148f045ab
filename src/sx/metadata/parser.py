"""Parsing and validation for metadata.toml."""

import tomllib
from typing import Any

from sx.assets.types import AssetType
from sx.assets.versions import is_valid_semver
from sx.core.errors import MetadataError
from sx.metadata.models import AssetInfo, HookConfig, McpConfig, Metadata, PromptConfig

METADATA_FILE_NAME = "metadata.toml"

_PROMPT_SECTIONS: dict[AssetType, str] = {
    AssetType.SKILL: "skill",
    AssetType.AGENT: "agent",
    AssetType.COMMAND: "command",
}


def parse_metadata(data: bytes) -> Metadata:
    """Parse metadata.toml bytes.

    Raises:
        MetadataError: If the TOML is invalid or required fields are missing
    """
    try:
        raw = tomllib.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        raise MetadataError(f"Failed to parse {METADATA_FILE_NAME}: {e}") from e

    asset_table = raw.get("asset")
    if not isinstance(asset_table, dict):
        raise MetadataError(f"{METADATA_FILE_NAME}: [asset] section is required")

    type_key = asset_table.get("type")
    if not isinstance(type_key, str):
        raise MetadataError(f"{METADATA_FILE_NAME}: asset type is required")
    try:
        asset_type = AssetType.parse(type_key)
    except ValueError as e:
        raise MetadataError(f"{METADATA_FILE_NAME}: {e}") from e

    info = AssetInfo(
        name=str(asset_table.get("name", "")),
        version=str(asset_table.get("version", "")),
        type=asset_type,
        description=str(asset_table.get("description", "")),
        authors=tuple(str(a) for a in asset_table.get("authors", [])),
        dependencies=tuple(str(d) for d in asset_table.get("dependencies", [])),
    )

    return Metadata(
        metadata_version=str(raw.get("metadata-version", "1.0")),
        asset=info,
        prompt=_parse_prompt(raw, asset_type),
        hook=_parse_hook(raw.get("hook")),
        mcp=_parse_mcp(raw.get("mcp")),
    )


def validate_metadata(metadata: Metadata) -> None:
    """Validate parsed metadata.

    Raises:
        MetadataError: On the first problem found
    """
    info = metadata.asset
    if not info.name:
        raise MetadataError("asset name is required")
    if not info.version:
        raise MetadataError(f"{info.name}: asset version is required")
    if not is_valid_semver(info.version):
        raise MetadataError(f"{info.name}: invalid semantic version '{info.version}'")
    if not info.description:
        raise MetadataError(f"{info.name}: asset description is required")

    if info.type == AssetType.HOOK:
        if metadata.hook is None:
            raise MetadataError(f"{info.name}: [hook] section is required for hooks")
        if not metadata.hook.event:
            raise MetadataError(f"{info.name}: hook event is required")
        if not metadata.hook.script_file:
            raise MetadataError(f"{info.name}: hook script-file is required")

    if info.type in (AssetType.MCP, AssetType.MCP_REMOTE):
        if metadata.mcp is None or not metadata.mcp.command:
            raise MetadataError(f"{info.name}: [mcp] section with a command is required")


def validate_metadata_files(metadata: Metadata, files: list[str]) -> None:
    """Validate metadata against the list of files in its archive.

    Raises:
        MetadataError: If a file referenced by the metadata is missing
    """
    validate_metadata(metadata)
    if metadata.prompt is not None and metadata.prompt.prompt_file not in files:
        raise MetadataError(
            f"{metadata.asset.name}: prompt file not found in archive: "
            f"{metadata.prompt.prompt_file}"
        )
    if metadata.hook is not None and metadata.hook.script_file not in files:
        raise MetadataError(
            f"{metadata.asset.name}: hook script not found in archive: "
            f"{metadata.hook.script_file}"
        )


def _parse_prompt(raw: dict[str, Any], asset_type: AssetType) -> PromptConfig | None:
    section_name = _PROMPT_SECTIONS.get(asset_type)
    if section_name is None:
        return None
    section = raw.get(section_name)
    if not isinstance(section, dict):
        return None
    prompt_file = section.get("prompt-file")
    if not isinstance(prompt_file, str) or not prompt_file:
        return None
    return PromptConfig(prompt_file=prompt_file)


def _parse_hook(section: object) -> HookConfig | None:
    if not isinstance(section, dict):
        return None
    timeout = section.get("timeout")
    return HookConfig(
        event=str(section.get("event", "")),
        script_file=str(section.get("script-file", "")),
        is_async=bool(section.get("async", False)),
        fail_on_error=bool(section.get("fail-on-error", True)),
        timeout=int(timeout) if isinstance(timeout, int) else None,
    )


def _parse_mcp(section: object) -> McpConfig | None:
    if not isinstance(section, dict):
        return None
    return McpConfig(
        command=str(section.get("command", "")),
        args=tuple(str(arg) for arg in section.get("args", [])),
        env={str(k): str(v) for k, v in section.get("env", {}).items()},
    )
