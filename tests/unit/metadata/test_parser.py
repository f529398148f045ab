"""Tests for metadata.toml parsing and validation."""

import pytest

from sx.assets.types import AssetType
from sx.core.errors import MetadataError
from sx.metadata.models import prompt_file_for
from sx.metadata.parser import parse_metadata, validate_metadata, validate_metadata_files
from tests.fakes.archives import metadata_toml


def test_parse_skill_metadata() -> None:
    """Test parsing the [asset] table and a prompt section."""
    data = metadata_toml(
        "code-review",
        extra='authors = ["Ada"]\n[skill]\nprompt-file = "README.md"\n',
    ).encode()

    metadata = parse_metadata(data)

    assert metadata.asset.name == "code-review"
    assert metadata.asset.type == AssetType.SKILL
    assert metadata.asset.authors == ("Ada",)
    assert prompt_file_for(metadata) == "README.md"
    validate_metadata(metadata)


def test_prompt_file_defaults_by_type() -> None:
    """Test that prompt-based types fall back to a conventional file name."""
    agent = parse_metadata(metadata_toml("a", asset_type="agent").encode())
    skill = parse_metadata(metadata_toml("s").encode())

    assert prompt_file_for(agent) == "AGENT.md"
    assert prompt_file_for(skill) == "SKILL.md"


def test_parse_hook_metadata() -> None:
    data = metadata_toml(
        "lint",
        asset_type="hook",
        extra=(
            '[hook]\nevent = "PostToolUse"\nscript-file = "hook.sh"\n'
            "async = true\nfail-on-error = false\ntimeout = 30\n"
        ),
    ).encode()

    metadata = parse_metadata(data)

    assert metadata.hook is not None
    assert metadata.hook.event == "PostToolUse"
    assert metadata.hook.script_file == "hook.sh"
    assert metadata.hook.is_async is True
    assert metadata.hook.fail_on_error is False
    assert metadata.hook.timeout == 30


def test_parse_mcp_metadata() -> None:
    data = metadata_toml(
        "search",
        asset_type="mcp-remote",
        extra='[mcp]\ncommand = "npx"\nargs = ["-y", "search-mcp"]\nenv = {TOKEN = "x"}\n',
    ).encode()

    metadata = parse_metadata(data)

    assert metadata.mcp is not None
    assert metadata.mcp.command == "npx"
    assert metadata.mcp.args == ("-y", "search-mcp")
    assert metadata.mcp.env == {"TOKEN": "x"}


# =============================================================================
# Errors
# =============================================================================


def test_parse_rejects_invalid_toml() -> None:
    with pytest.raises(MetadataError, match="Failed to parse"):
        parse_metadata(b"[asset")


def test_parse_requires_asset_section() -> None:
    with pytest.raises(MetadataError, match=r"\[asset\] section is required"):
        parse_metadata(b'[skill]\nprompt-file = "x"\n')


def test_validate_requires_description() -> None:
    metadata = parse_metadata(metadata_toml("a", description="").encode())

    with pytest.raises(MetadataError, match="description is required"):
        validate_metadata(metadata)


def test_validate_requires_semver() -> None:
    metadata = parse_metadata(metadata_toml("a", version="1.0").encode())

    with pytest.raises(MetadataError, match="invalid semantic version"):
        validate_metadata(metadata)


def test_validate_hook_requires_hook_section() -> None:
    metadata = parse_metadata(metadata_toml("h", asset_type="hook").encode())

    with pytest.raises(MetadataError, match=r"\[hook\] section is required"):
        validate_metadata(metadata)


def test_validate_mcp_requires_command() -> None:
    metadata = parse_metadata(metadata_toml("m", asset_type="mcp").encode())

    with pytest.raises(MetadataError, match="command is required"):
        validate_metadata(metadata)


def test_validate_files_requires_hook_script() -> None:
    """Test that a referenced script must be present in the archive."""
    metadata = parse_metadata(
        metadata_toml(
            "h",
            asset_type="hook",
            extra='[hook]\nevent = "Stop"\nscript-file = "run.sh"\n',
        ).encode()
    )

    validate_metadata_files(metadata, ["metadata.toml", "run.sh"])
    with pytest.raises(MetadataError, match="run.sh"):
        validate_metadata_files(metadata, ["metadata.toml"])
