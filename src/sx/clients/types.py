"""Request and response types exchanged with clients."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from sx.assets.types import AssetType
from sx.lockfile.models import Asset, ScopeType
from sx.metadata.models import Metadata
from sx.scope.matcher import CurrentScope


class ResultStatus(Enum):
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class AssetResult:
    """Outcome of one asset on one client.

    asset_name is empty for the single SKIPPED result recorded when a
    client had nothing compatible to install.
    """

    asset_name: str
    status: ResultStatus
    message: str = ""
    error: Exception | None = None


@dataclass(frozen=True)
class InstallScope:
    """Where a batch is installed.

    Attributes:
        type: Install scope kind
        repo_url: Repository URL, empty for global
        repo_root: Repository checkout root, None outside a repository
        path: Repo-relative path for PATH scope
    """

    type: ScopeType
    repo_url: str = ""
    repo_root: Path | None = None
    path: str = ""

    @property
    def context(self) -> CurrentScope:
        """The matching context, for scope checks against lock entries."""
        return CurrentScope(type=self.type, repo_url=self.repo_url, repo_path=self.path)


@dataclass(frozen=True)
class AssetBundle:
    """A fetched asset ready to install."""

    asset: Asset
    metadata: Metadata
    zip_data: bytes


@dataclass(frozen=True)
class InstallOptions:
    force: bool = False


@dataclass(frozen=True)
class InstallRequest:
    bundles: tuple[AssetBundle, ...]
    scope: InstallScope
    options: InstallOptions = field(default_factory=InstallOptions)


@dataclass(frozen=True)
class RemovalTarget:
    """An asset to remove. type is None when it was not recorded."""

    name: str
    type: AssetType | None


@dataclass(frozen=True)
class UninstallRequest:
    targets: tuple[RemovalTarget, ...]
    scope: InstallScope


@dataclass(frozen=True)
class ClientResponse:
    """Per-asset results from one install or uninstall call."""

    results: tuple[AssetResult, ...] = ()

    def succeeded(self, asset_name: str) -> bool:
        return any(
            result.asset_name == asset_name and result.status == ResultStatus.SUCCESS
            for result in self.results
        )
