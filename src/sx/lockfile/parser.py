"""Lock file I/O for sx.lock.

Example lock file:

    lock-version = "1.0"
    version = "a1b2c3"
    created-by = "sx 0.1.0"

    [[assets]]
    name = "code-review"
    version = "1.2.0"
    type = "skill"
    dependencies = [{name = "git-helpers"}]
    scopes = [{repo = "git@github.com:acme/api.git", paths = ["services/billing"]}]

    [assets.source-http]
    url = "https://vault.example.com/code-review-1.2.0.zip"
    hashes = {sha256 = "..."}
"""

import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from sx.assets.types import AssetType
from sx.core.errors import LockFileError
from sx.lockfile.models import (
    Asset,
    AssetSourceSpec,
    Dependency,
    LockFile,
    LockScope,
    SourceGit,
    SourceHttp,
    SourcePath,
)

LOCK_FILE_NAME = "sx.lock"


def parse_lock_file(data: bytes) -> LockFile:
    """Parse lock file bytes into a LockFile.

    Only structure is checked here; call validate_lock_file() for semantic
    checks (versions, uniqueness, dependencies).

    Raises:
        LockFileError: If the data is not valid TOML or has the wrong shape
    """
    try:
        raw = tomllib.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        raise LockFileError(f"Failed to parse lock file: {e}") from e

    assets_data = raw.get("assets", [])
    if not isinstance(assets_data, list):
        raise LockFileError("'assets' must be an array of tables")

    assets = tuple(_parse_asset(entry, index) for index, entry in enumerate(assets_data))

    return LockFile(
        lock_version=str(raw.get("lock-version", "")),
        version=str(raw.get("version", "")),
        created_by=str(raw.get("created-by", "")),
        assets=assets,
    )


def load_lock_file(path: Path) -> LockFile:
    """Read and parse a lock file from disk.

    Raises:
        LockFileError: If the file does not exist or cannot be parsed
    """
    if not path.exists():
        raise LockFileError(f"Lock file not found: {path}")
    return parse_lock_file(path.read_bytes())


def serialize_lock_file(lock_file: LockFile) -> str:
    """Render a LockFile back to TOML."""
    data: dict[str, Any] = {
        "lock-version": lock_file.lock_version,
        "version": lock_file.version,
        "created-by": lock_file.created_by,
        "assets": [_asset_to_dict(asset) for asset in lock_file.assets],
    }
    return tomli_w.dumps(data)


def _parse_asset(entry: object, index: int) -> Asset:
    if not isinstance(entry, dict):
        raise LockFileError(f"assets[{index}] must be a table")

    name = str(entry.get("name", ""))
    label = name or f"assets[{index}]"

    type_key = entry.get("type")
    if not isinstance(type_key, str):
        raise LockFileError(f"{label}: missing required 'type' field")
    try:
        asset_type = AssetType.parse(type_key)
    except ValueError as e:
        raise LockFileError(f"{label}: {e}") from e

    dependencies = tuple(
        _parse_dependency(dep, label) for dep in _list_field(entry, "dependencies", label)
    )
    scopes = tuple(_parse_scope(scope, label) for scope in _list_field(entry, "scopes", label))
    clients = tuple(str(client) for client in _list_field(entry, "clients", label))

    return Asset(
        name=name,
        version=str(entry.get("version", "")),
        type=asset_type,
        source=_parse_source(entry, label),
        dependencies=dependencies,
        scopes=scopes,
        clients=clients,
    )


def _list_field(entry: dict[str, Any], key: str, label: str) -> list[Any]:
    value = entry.get(key, [])
    if not isinstance(value, list):
        raise LockFileError(f"{label}: '{key}' must be a list")
    return value


def _parse_dependency(dep: object, label: str) -> Dependency:
    # Accept the short form `dependencies = ["other"]` as well as tables
    if isinstance(dep, str):
        return Dependency(name=dep)
    if isinstance(dep, dict) and isinstance(dep.get("name"), str):
        return Dependency(name=dep["name"])
    raise LockFileError(f"{label}: dependency entries need a 'name'")


def _parse_scope(scope: object, label: str) -> LockScope:
    if not isinstance(scope, dict) or not isinstance(scope.get("repo"), str):
        raise LockFileError(f"{label}: scope entries need a 'repo' URL")
    paths = scope.get("paths", [])
    if not isinstance(paths, list):
        raise LockFileError(f"{label}: scope 'paths' must be a list")
    return LockScope(repo=scope["repo"], paths=tuple(str(p) for p in paths))


def _parse_source(entry: dict[str, Any], label: str) -> AssetSourceSpec:
    sources: list[AssetSourceSpec] = []

    http = entry.get("source-http")
    if isinstance(http, dict):
        raw_hashes = http.get("hashes", {})
        if not isinstance(raw_hashes, dict):
            raise LockFileError(f"{label}: source-http 'hashes' must be a table")
        hashes = {str(k): str(v) for k, v in raw_hashes.items()}
        sources.append(SourceHttp(url=str(http.get("url", "")), hashes=hashes))

    git = entry.get("source-git")
    if isinstance(git, dict):
        sources.append(
            SourceGit(
                url=str(git.get("url", "")),
                ref=str(git.get("ref", "")),
                subdirectory=str(git.get("subdirectory", "")),
            )
        )

    path = entry.get("source-path")
    if isinstance(path, dict):
        sources.append(SourcePath(path=str(path.get("path", ""))))

    if len(sources) == 0:
        raise LockFileError(
            f"{label}: one of source-http, source-git or source-path is required"
        )
    if len(sources) > 1:
        raise LockFileError(f"{label}: only one source may be specified")
    return sources[0]


def _asset_to_dict(asset: Asset) -> dict[str, Any]:
    data: dict[str, Any] = {
        "name": asset.name,
        "version": asset.version,
        "type": asset.type.value,
    }
    if asset.clients:
        data["clients"] = list(asset.clients)
    if asset.dependencies:
        data["dependencies"] = [{"name": dep.name} for dep in asset.dependencies]
    if asset.scopes:
        scopes: list[dict[str, Any]] = []
        for scope in asset.scopes:
            scope_data: dict[str, Any] = {"repo": scope.repo}
            if scope.paths:
                scope_data["paths"] = list(scope.paths)
            scopes.append(scope_data)
        data["scopes"] = scopes

    source = asset.source
    if isinstance(source, SourceHttp):
        data["source-http"] = {"url": source.url, "hashes": dict(source.hashes)}
    elif isinstance(source, SourceGit):
        git_data = {"url": source.url, "ref": source.ref}
        if source.subdirectory:
            git_data["subdirectory"] = source.subdirectory
        data["source-git"] = git_data
    else:
        data["source-path"] = {"path": source.path}
    return data
