"""Production AssetSource: HTTP downloads, git checkouts and local paths."""

import hashlib
import logging
import subprocess
import tempfile
import urllib.error
import urllib.request
from pathlib import Path

from sx.core.errors import FetchError, IntegrityError
from sx.fetch.archive import zip_directory
from sx.fetch.cancellation import CancelToken
from sx.fetch.source.abc import AssetSource
from sx.lockfile.models import Asset, SourceGit, SourceHttp, SourcePath

logger = logging.getLogger(__name__)

USER_AGENT = "sx"


class RealAssetSource(AssetSource):
    """Fetches archives using urllib, the git CLI and the filesystem."""

    def __init__(self, *, lock_dir: Path, timeout: float) -> None:
        """
        Args:
            lock_dir: Directory containing the lock file; relative
                source-path entries resolve against it
            timeout: Upper bound in seconds for a single network operation
        """
        self._lock_dir = lock_dir
        self._timeout = timeout

    def fetch_asset_bytes(self, asset: Asset, cancel_token: CancelToken) -> bytes:
        cancel_token.raise_if_cancelled()
        source = asset.source
        if isinstance(source, SourceHttp):
            return self._fetch_http(asset, source, cancel_token)
        if isinstance(source, SourceGit):
            return self._fetch_git(asset, source, cancel_token)
        return self._fetch_path(asset, source)

    def _timeout_for(self, cancel_token: CancelToken) -> float:
        remaining = cancel_token.remaining_seconds()
        if remaining is None:
            return self._timeout
        return min(self._timeout, remaining)

    def _fetch_http(self, asset: Asset, source: SourceHttp, cancel_token: CancelToken) -> bytes:
        logger.debug("Downloading %s from %s", asset.name, source.url)
        request = urllib.request.Request(source.url, headers={"User-Agent": USER_AGENT})
        try:
            with urllib.request.urlopen(request, timeout=self._timeout_for(cancel_token)) as response:
                data = response.read()
        except urllib.error.HTTPError as e:
            raise FetchError(
                f"Failed to download '{asset.name}': HTTP {e.code} {e.reason}"
            ) from e
        except (urllib.error.URLError, TimeoutError, OSError) as e:
            raise FetchError(f"Failed to download '{asset.name}': {e}") from e

        expected = source.hashes.get("sha256")
        if expected:
            actual = hashlib.sha256(data).hexdigest()
            if actual.lower() != expected.lower():
                raise IntegrityError(asset.name, expected, actual)
        return data

    def _fetch_git(self, asset: Asset, source: SourceGit, cancel_token: CancelToken) -> bytes:
        logger.debug("Cloning %s at %s for %s", source.url, source.ref, asset.name)
        with tempfile.TemporaryDirectory(prefix="sx-git-") as temp_dir:
            checkout = Path(temp_dir) / "repo"
            self._run_git(["clone", "--quiet", source.url, str(checkout)], None, asset, cancel_token)
            self._run_git(["checkout", "--quiet", source.ref], checkout, asset, cancel_token)

            asset_dir = checkout / source.subdirectory if source.subdirectory else checkout
            if not asset_dir.is_dir():
                raise FetchError(
                    f"Subdirectory '{source.subdirectory}' not found in {source.url} "
                    f"for '{asset.name}'"
                )
            return zip_directory(asset_dir)

    def _run_git(
        self,
        args: list[str],
        cwd: Path | None,
        asset: Asset,
        cancel_token: CancelToken,
    ) -> None:
        cancel_token.raise_if_cancelled()
        try:
            subprocess.run(
                ["git", *args],
                cwd=cwd,
                capture_output=True,
                text=True,
                check=True,
                timeout=self._timeout_for(cancel_token),
            )
        except subprocess.CalledProcessError as e:
            raise FetchError(
                f"git {args[0]} failed for '{asset.name}': {e.stderr.strip()}"
            ) from e
        except subprocess.TimeoutExpired as e:
            raise FetchError(f"git {args[0]} timed out for '{asset.name}'") from e

    def _fetch_path(self, asset: Asset, source: SourcePath) -> bytes:
        path = Path(source.path).expanduser()
        if not path.is_absolute():
            path = self._lock_dir / path
        if path.is_dir():
            return zip_directory(path)
        if path.is_file():
            return path.read_bytes()
        raise FetchError(f"Source path for '{asset.name}' does not exist: {path}")
