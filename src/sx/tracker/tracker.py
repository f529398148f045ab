"""In-memory installation tracker.

The tracker is the only record of what sx has installed; client
directories are never scanned to rebuild it. It is mutated on the calling
thread only, after concurrent fetch and install work has joined.
"""

from collections.abc import Callable, Iterable

from sx.tracker.models import AssetKey, InstalledAsset

TRACKER_FORMAT_VERSION = "1"


class Tracker:
    """Set of InstalledAsset entries, at most one per AssetKey."""

    def __init__(
        self,
        *,
        version: str = TRACKER_FORMAT_VERSION,
        assets: Iterable[InstalledAsset] = (),
    ) -> None:
        self.version = version
        self._assets: list[InstalledAsset] = []
        for asset in assets:
            self.upsert_asset(asset)

    @property
    def assets(self) -> list[InstalledAsset]:
        """Copy of all entries in insertion order."""
        return list(self._assets)

    def find_asset(self, key: AssetKey) -> InstalledAsset | None:
        """Look up an entry by exact key."""
        for asset in self._assets:
            if asset.key == key:
                return asset
        return None

    def find_asset_with_matcher(
        self,
        name: str,
        repo_url: str,
        path: str,
        repo_matcher: Callable[[str, str], bool],
    ) -> InstalledAsset | None:
        """Look up an entry, comparing repositories with repo_matcher.

        Names and paths still compare exactly. Global lookups (empty
        repo_url) only find global entries.
        """
        for asset in self._assets:
            if asset.name != name or asset.path != path:
                continue
            if repo_url == "" or asset.repository == "":
                if asset.repository == repo_url:
                    return asset
                continue
            if repo_matcher(asset.repository, repo_url):
                return asset
        return None

    def upsert_asset(self, entry: InstalledAsset) -> None:
        """Insert an entry or replace the one with the same key."""
        for index, asset in enumerate(self._assets):
            if asset.key == entry.key:
                self._assets[index] = entry
                return
        self._assets.append(entry)

    def remove_asset(self, key: AssetKey) -> bool:
        """Remove the entry with this key.

        Returns:
            True if an entry was removed
        """
        for index, asset in enumerate(self._assets):
            if asset.key == key:
                del self._assets[index]
                return True
        return False

    def needs_install(self, key: AssetKey, version: str, clients: Iterable[str]) -> bool:
        """Check whether an asset must be (re)installed.

        False only when an entry exists at key with exactly this version and
        its client set already contains every requested client. A newly
        targeted client triggers an install without touching the clients
        already recorded.
        """
        existing = self.find_asset(key)
        if existing is None:
            return True
        if existing.version != version:
            return True
        return not set(clients).issubset(existing.clients)

    def find_by_scope(self, repository: str, path: str) -> list[InstalledAsset]:
        """All entries recorded at exactly this scope."""
        return [
            asset
            for asset in self._assets
            if asset.repository == repository and asset.path == path
        ]

    def group_by_scope(self) -> dict[str, list[InstalledAsset]]:
        """Entries grouped by scope description, in first-seen order."""
        groups: dict[str, list[InstalledAsset]] = {}
        for asset in self._assets:
            groups.setdefault(asset.scope_description, []).append(asset)
        return groups
