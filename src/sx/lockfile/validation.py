"""Semantic validation for parsed lock files."""

from sx.assets.versions import is_valid_semver
from sx.core.errors import DependencyResolutionError, LockFileError
from sx.lockfile.models import Asset, LockFile, SourceGit, SourceHttp, SourcePath
from sx.resolver.resolver import check_lock_file_dependencies


def validate_lock_file(lock_file: LockFile) -> None:
    """Validate a lock file.

    Checks:
    - lock-version is present
    - every asset has a non-empty, unique name
    - every version is a valid semantic version
    - every source has its required fields
    - dependencies all exist and are acyclic

    Raises:
        LockFileError: On the first problem found. Dependency problems are
            raised with the resolver error chained as the cause.
    """
    if not lock_file.lock_version:
        raise LockFileError("lock-version is required")

    seen: set[str] = set()
    for index, asset in enumerate(lock_file.assets):
        if not asset.name:
            raise LockFileError(f"assets[{index}]: name is required")
        if asset.name in seen:
            raise LockFileError(f"Duplicate asset name: {asset.name}")
        seen.add(asset.name)
        _validate_asset(asset)

    try:
        check_lock_file_dependencies(lock_file)
    except DependencyResolutionError as e:
        raise LockFileError(f"Invalid dependencies: {e}") from e


def _validate_asset(asset: Asset) -> None:
    if not asset.version:
        raise LockFileError(f"{asset.name}: version is required")
    if not is_valid_semver(asset.version):
        raise LockFileError(f"{asset.name}: invalid semantic version '{asset.version}'")

    source = asset.source
    if isinstance(source, SourceHttp) and not source.url:
        raise LockFileError(f"{asset.name}: source-http requires a url")
    if isinstance(source, SourceGit):
        if not source.url:
            raise LockFileError(f"{asset.name}: source-git requires a url")
        if not source.ref:
            raise LockFileError(f"{asset.name}: source-git requires a ref")
    if isinstance(source, SourcePath) and not source.path:
        raise LockFileError(f"{asset.name}: source-path requires a path")

    for scope in asset.scopes:
        if not scope.repo:
            raise LockFileError(f"{asset.name}: scope entries require a repo URL")
