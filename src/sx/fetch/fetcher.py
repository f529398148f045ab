"""Bounded concurrent fetching of asset archives."""

import logging
import zipfile
from concurrent.futures import ThreadPoolExecutor, as_completed

from sx.core.errors import FetchError, MetadataError
from sx.fetch.archive import list_files, read_file
from sx.fetch.cancellation import CancelToken
from sx.fetch.source.abc import AssetSource
from sx.fetch.types import DownloadResult
from sx.lockfile.models import Asset
from sx.metadata.models import Metadata
from sx.metadata.parser import METADATA_FILE_NAME, parse_metadata, validate_metadata_files

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 10


class AssetFetcher:
    """Downloads archives and parses their metadata.

    One asset failing never affects the others: every input asset gets
    exactly one DownloadResult.
    """

    def __init__(self, source: AssetSource) -> None:
        self._source = source

    def fetch_assets(
        self,
        assets: list[Asset] | tuple[Asset, ...],
        *,
        concurrency: int,
        cancel_token: CancelToken,
    ) -> list[DownloadResult]:
        """Fetch assets with at most `concurrency` in flight.

        Results are returned in completion order.

        Raises:
            ValueError: If concurrency is less than 1
        """
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")
        if len(assets) == 0:
            return []

        results: list[DownloadResult] = []
        with ThreadPoolExecutor(max_workers=min(concurrency, len(assets))) as executor:
            futures = [
                executor.submit(self._fetch_one, asset, cancel_token) for asset in assets
            ]
            for future in as_completed(futures):
                results.append(future.result())

        failed = sum(1 for result in results if not result.succeeded)
        logger.debug("Fetched %d assets, %d failed", len(results), failed)
        return results

    def _fetch_one(self, asset: Asset, cancel_token: CancelToken) -> DownloadResult:
        try:
            cancel_token.raise_if_cancelled()
            zip_data = self._source.fetch_asset_bytes(asset, cancel_token)
            metadata = _read_metadata(asset, zip_data)
        # Worker boundary: every failure becomes this asset's result
        except Exception as e:
            logger.debug("Fetch failed for %s: %s", asset.name, e)
            return DownloadResult(asset=asset, error=e)
        return DownloadResult(asset=asset, zip_data=zip_data, metadata=metadata)


def _read_metadata(asset: Asset, zip_data: bytes) -> Metadata:
    try:
        raw = read_file(zip_data, METADATA_FILE_NAME)
    except KeyError as e:
        raise MetadataError(f"'{asset.name}' archive has no {METADATA_FILE_NAME}") from e
    except zipfile.BadZipFile as e:
        raise FetchError(f"'{asset.name}' is not a valid zip archive: {e}") from e
    metadata = parse_metadata(raw)
    if metadata.asset.type != asset.type:
        raise MetadataError(
            f"'{asset.name}' type mismatch: lock file says {asset.type.value}, "
            f"archive says {metadata.asset.type.value}"
        )
    # Handlers install under the archive name, so it must be the tracked one
    if metadata.asset.name != asset.name:
        raise MetadataError(
            f"'{asset.name}' name mismatch: archive says '{metadata.asset.name}'"
        )
    validate_metadata_files(metadata, list_files(zip_data))
    return metadata
