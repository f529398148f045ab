"""Data models for the sx lock file.

A lock file pins every asset to an exact version and source. Models are
frozen: a lock file is only ever changed by regenerating it.
"""

from dataclasses import dataclass, field
from enum import Enum

from sx.assets.types import AssetType


class ScopeType(Enum):
    """Applicability boundary of an asset or of the current working context."""

    GLOBAL = "global"
    REPO = "repo"
    PATH = "path"


@dataclass(frozen=True)
class Dependency:
    """Reference to another asset in the same lock file, by name only."""

    name: str


@dataclass(frozen=True)
class LockScope:
    """One scope entry on an asset.

    Empty paths means the whole repository; otherwise only the listed
    paths inside it (repo-relative, compared exactly).
    """

    repo: str
    paths: tuple[str, ...] = ()

    @property
    def scope_type(self) -> ScopeType:
        if self.paths:
            return ScopeType.PATH
        return ScopeType.REPO


@dataclass(frozen=True)
class SourceHttp:
    """Archive downloaded over HTTP(S).

    hashes maps algorithm to hex digest, e.g. {"sha256": "ab12..."}.
    """

    url: str
    hashes: dict[str, str] = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class SourceGit:
    """Asset stored in a git repository at a pinned commit."""

    url: str
    ref: str
    subdirectory: str = ""


@dataclass(frozen=True)
class SourcePath:
    """Asset on the local filesystem (zip file or directory).

    Relative paths are resolved against the lock file's directory.
    """

    path: str


AssetSourceSpec = SourceHttp | SourceGit | SourcePath


@dataclass(frozen=True)
class Asset:
    """A resolved lock file entry."""

    name: str
    version: str
    type: AssetType
    source: AssetSourceSpec
    dependencies: tuple[Dependency, ...] = ()
    scopes: tuple[LockScope, ...] = ()
    # Empty means every client
    clients: tuple[str, ...] = ()

    @property
    def is_global(self) -> bool:
        return len(self.scopes) == 0

    def matches_client(self, client_id: str) -> bool:
        """Check whether the asset is meant for the given client."""
        if not self.clients:
            return True
        return client_id in self.clients


@dataclass(frozen=True)
class LockFile:
    """The complete, pinned set of assets."""

    lock_version: str
    version: str
    created_by: str
    assets: tuple[Asset, ...]

    def find_asset(self, name: str) -> Asset | None:
        for asset in self.assets:
            if asset.name == name:
                return asset
        return None
