"""Tests for lock file parsing and serialization."""

from pathlib import Path

import pytest

from sx.assets.types import AssetType
from sx.core.errors import LockFileError
from sx.lockfile.models import LockScope, ScopeType, SourceGit, SourceHttp, SourcePath
from sx.lockfile.parser import load_lock_file, parse_lock_file, serialize_lock_file

LOCK_TOML = b"""
lock-version = "1.0"
version = "abc123"
created-by = "sx 0.1.0"

[[assets]]
name = "code-review"
version = "1.2.0"
type = "skill"
clients = ["claude-code"]
dependencies = [{name = "git-helpers"}]
scopes = [{repo = "git@github.com:acme/api.git", paths = ["services/billing"]}]

[assets.source-http]
url = "https://vault.example.com/code-review-1.2.0.zip"
hashes = {sha256 = "deadbeef"}

[[assets]]
name = "git-helpers"
version = "0.3.1"
type = "command"

[assets.source-git]
url = "https://github.com/acme/assets.git"
ref = "4f2c1e0"
subdirectory = "commands/git-helpers"

[[assets]]
name = "local-mcp"
version = "2.0.0"
type = "mcp-remote"
scopes = [{repo = "https://github.com/acme/web"}]

[assets.source-path]
path = "./assets/local-mcp"
"""


def test_parse_lock_file_reads_header_fields() -> None:
    """Test that top-level lock file fields are parsed."""
    lock_file = parse_lock_file(LOCK_TOML)

    assert lock_file.lock_version == "1.0"
    assert lock_file.version == "abc123"
    assert lock_file.created_by == "sx 0.1.0"
    assert [asset.name for asset in lock_file.assets] == ["code-review", "git-helpers", "local-mcp"]


def test_parse_lock_file_reads_asset_details() -> None:
    """Test that an asset's type, clients, dependencies, scopes and source are parsed."""
    asset = parse_lock_file(LOCK_TOML).assets[0]

    assert asset.type == AssetType.SKILL
    assert asset.clients == ("claude-code",)
    assert [dep.name for dep in asset.dependencies] == ["git-helpers"]
    assert asset.scopes == (
        LockScope(repo="git@github.com:acme/api.git", paths=("services/billing",)),
    )
    assert asset.scopes[0].scope_type == ScopeType.PATH
    assert asset.source == SourceHttp(
        url="https://vault.example.com/code-review-1.2.0.zip", hashes={"sha256": "deadbeef"}
    )
    assert not asset.is_global


def test_parse_lock_file_reads_each_source_kind() -> None:
    """Test that git and path sources are parsed."""
    lock_file = parse_lock_file(LOCK_TOML)

    assert lock_file.assets[1].source == SourceGit(
        url="https://github.com/acme/assets.git",
        ref="4f2c1e0",
        subdirectory="commands/git-helpers",
    )
    assert lock_file.assets[1].is_global
    assert lock_file.assets[2].source == SourcePath(path="./assets/local-mcp")
    assert lock_file.assets[2].scopes[0].scope_type == ScopeType.REPO


def test_parse_lock_file_accepts_short_dependency_form() -> None:
    """Test that dependencies may be listed as plain names."""
    data = b"""
lock-version = "1.0"
[[assets]]
name = "a"
version = "1.0.0"
type = "agent"
dependencies = ["b"]
[assets.source-path]
path = "a"
"""
    asset = parse_lock_file(data).assets[0]

    assert [dep.name for dep in asset.dependencies] == ["b"]


def test_find_asset_by_name() -> None:
    """Test LockFile.find_asset."""
    lock_file = parse_lock_file(LOCK_TOML)

    found = lock_file.find_asset("git-helpers")
    assert found is not None
    assert found.version == "0.3.1"
    assert lock_file.find_asset("missing") is None


def test_serialize_lock_file_round_trips() -> None:
    """Test that serializing and re-parsing gives an equal lock file."""
    lock_file = parse_lock_file(LOCK_TOML)

    reparsed = parse_lock_file(serialize_lock_file(lock_file).encode("utf-8"))

    assert reparsed == lock_file


def test_load_lock_file_reads_from_disk(tmp_path: Path) -> None:
    """Test that load_lock_file parses a file on disk."""
    path = tmp_path / "sx.lock"
    path.write_bytes(LOCK_TOML)

    assert len(load_lock_file(path).assets) == 3


def test_load_lock_file_missing_raises(tmp_path: Path) -> None:
    """Test that a missing lock file is a LockFileError."""
    with pytest.raises(LockFileError, match="not found"):
        load_lock_file(tmp_path / "sx.lock")


# =============================================================================
# Malformed input
# =============================================================================


@pytest.mark.parametrize(
    ("data", "message"),
    [
        (b"lock-version = ", "Failed to parse"),
        (b'assets = "nope"', "array of tables"),
        (
            b'[[assets]]\nname = "a"\nversion = "1.0.0"\n[assets.source-path]\npath = "a"\n',
            "type",
        ),
        (
            b'[[assets]]\nname = "a"\nversion = "1.0.0"\ntype = "widget"\n'
            b'[assets.source-path]\npath = "a"\n',
            "Unknown asset type",
        ),
        (b'[[assets]]\nname = "a"\nversion = "1.0.0"\ntype = "skill"\n', "one of source-http"),
        (
            b'[[assets]]\nname = "a"\nversion = "1.0.0"\ntype = "skill"\n'
            b'[assets.source-path]\npath = "a"\n[assets.source-http]\nurl = "https://x"\n',
            "only one source",
        ),
        (
            b'[[assets]]\nname = "a"\nversion = "1.0.0"\ntype = "skill"\nscopes = [{paths = []}]\n'
            b'[assets.source-path]\npath = "a"\n',
            "repo",
        ),
        (
            b'[[assets]]\nname = "a"\nversion = "1.0.0"\ntype = "skill"\n'
            b'[assets.source-http]\nurl = "https://x"\nhashes = "abc"\n',
            "'hashes' must be a table",
        ),
        (
            b'[[assets]]\nname = "a"\nversion = "1.0.0"\ntype = "skill"\ndependencies = "b"\n'
            b'[assets.source-path]\npath = "a"\n',
            "'dependencies' must be a list",
        ),
        (
            b'[[assets]]\nname = "a"\nversion = "1.0.0"\ntype = "skill"\nscopes = "x"\n'
            b'[assets.source-path]\npath = "a"\n',
            "'scopes' must be a list",
        ),
        (
            b'[[assets]]\nname = "a"\nversion = "1.0.0"\ntype = "skill"\nclients = "cursor"\n'
            b'[assets.source-path]\npath = "a"\n',
            "'clients' must be a list",
        ),
    ],
)
def test_parse_lock_file_rejects_malformed_input(data: bytes, message: str) -> None:
    """Test that structural problems raise LockFileError."""
    with pytest.raises(LockFileError, match=message):
        parse_lock_file(data)
