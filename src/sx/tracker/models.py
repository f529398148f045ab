"""Installation tracker records."""

from dataclasses import dataclass

from sx.assets.types import AssetType


@dataclass(frozen=True)
class AssetKey:
    """Identity of a tracker entry.

    Attributes:
        name: Asset name
        repository: Repository URL, empty for global installs
        path: Repo-relative path, empty unless path scoped
    """

    name: str
    repository: str
    path: str


@dataclass(frozen=True)
class InstalledAsset:
    """An asset recorded as installed at one scope.

    Attributes:
        name: Asset name
        version: Installed version
        repository: Repository URL, empty for global installs
        path: Repo-relative path, empty unless path scoped
        clients: IDs of the clients the asset was installed to
        type: Asset type, None for entries written before types were recorded
    """

    name: str
    version: str
    repository: str
    path: str
    clients: tuple[str, ...]
    type: AssetType | None = None

    @property
    def key(self) -> AssetKey:
        return AssetKey(name=self.name, repository=self.repository, path=self.path)

    @property
    def is_global(self) -> bool:
        return self.repository == ""

    @property
    def scope_description(self) -> str:
        """Label used when grouping entries for display."""
        if self.is_global:
            return "Global"
        if self.path:
            return f"{self.repository}:{self.path}"
        return self.repository
