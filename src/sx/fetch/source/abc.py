"""Abstract interface for retrieving asset archives."""

from abc import ABC, abstractmethod

from sx.fetch.cancellation import CancelToken
from sx.lockfile.models import Asset


class AssetSource(ABC):
    """Retrieves the zip archive for an asset from wherever it is pinned."""

    @abstractmethod
    def fetch_asset_bytes(self, asset: Asset, cancel_token: CancelToken) -> bytes:
        """Return the asset's zip archive.

        Args:
            asset: Lock file entry naming the source
            cancel_token: Checked before blocking work

        Raises:
            FetchError: If the archive cannot be retrieved or verified
            OperationCancelledError: If cancelled while fetching
        """
        ...
