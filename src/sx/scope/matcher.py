"""Scope matching for the current working context.

A context is global (outside any repository, or a global install was
requested), a repository root, or a path inside a repository. Assets
without scopes apply everywhere; scoped assets apply only where one of
their scope entries matches.
"""

from dataclasses import dataclass
from pathlib import Path

from sx.lockfile.models import Asset, LockScope, ScopeType
from sx.tracker.models import AssetKey


@dataclass(frozen=True)
class CurrentScope:
    """The context an install or query runs in.

    Attributes:
        type: Kind of context
        repo_url: Repository URL, empty for the global context
        repo_path: Repo-relative path, empty unless type is PATH
    """

    type: ScopeType
    repo_url: str = ""
    repo_path: str = ""

    @classmethod
    def global_scope(cls) -> "CurrentScope":
        return cls(type=ScopeType.GLOBAL)


def matches_asset(scope: CurrentScope, asset: Asset) -> bool:
    """Check whether an asset applies in the given context."""
    if asset.is_global:
        return True
    return any(_matches_entry(scope, entry) for entry in asset.scopes)


def _matches_entry(scope: CurrentScope, entry: LockScope) -> bool:
    if scope.type == ScopeType.GLOBAL:
        return False
    if scope.repo_url != entry.repo:
        return False
    if not entry.paths:
        return True
    if scope.type != ScopeType.PATH:
        return False
    return scope.repo_path in entry.paths


class ScopeMatcher:
    """Filters assets against a fixed context."""

    def __init__(self, scope: CurrentScope) -> None:
        self._scope = scope

    @property
    def scope(self) -> CurrentScope:
        return self._scope

    def matches_asset(self, asset: Asset) -> bool:
        return matches_asset(self._scope, asset)

    def filter(self, assets: tuple[Asset, ...] | list[Asset]) -> list[Asset]:
        return [asset for asset in assets if self.matches_asset(asset)]


def install_base(
    scope: CurrentScope, repo_root: Path | None, global_base: Path, client_dir: str
) -> Path:
    """Client directory for the context: global, repository root, or path."""
    if scope.type == ScopeType.GLOBAL or repo_root is None:
        return global_base
    if scope.type == ScopeType.PATH and scope.repo_path:
        return repo_root / scope.repo_path / client_dir
    return repo_root / client_dir


def get_install_locations(
    asset: Asset,
    scope: CurrentScope,
    repo_root: Path | None,
    global_base: Path,
    client_dir: str,
) -> list[Path]:
    """Directories an asset installs into for the current context.

    Only the active context is considered. Every applicable asset lands in
    the context's client directory, so a path-scoped asset that lists
    several paths yields the single location for scope.repo_path, and a
    global asset installed from inside a repository lands in that
    repository.

    Args:
        asset: The asset being installed
        scope: Current context
        repo_root: Repository root, None outside a repository
        global_base: Client's global directory, e.g. ~/.claude
        client_dir: Client's per-repository directory name, e.g. ".claude"

    Returns:
        One location, or none when the asset does not apply here
    """
    if not matches_asset(scope, asset):
        return []
    return [install_base(scope, repo_root, global_base, client_dir)]


def asset_key_for_scope(name: str, scope: CurrentScope) -> AssetKey:
    """Tracker key for an asset installed in the given context."""
    if scope.type == ScopeType.GLOBAL:
        return AssetKey(name=name, repository="", path="")
    if scope.type == ScopeType.REPO:
        return AssetKey(name=name, repository=scope.repo_url, path="")
    return AssetKey(name=name, repository=scope.repo_url, path=scope.repo_path)
