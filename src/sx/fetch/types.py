"""Fetch result types."""

from dataclasses import dataclass

from sx.lockfile.models import Asset
from sx.metadata.models import Metadata


@dataclass(frozen=True)
class DownloadResult:
    """Outcome of fetching one asset.

    Exactly one of (zip_data and metadata) or error is set.
    """

    asset: Asset
    zip_data: bytes | None = None
    metadata: Metadata | None = None
    error: Exception | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None
