"""Exception hierarchy for sx operations.

Errors are raised where they are detected and only caught at aggregation
points: the fetcher worker, the orchestrator's per-client call, and the CLI
entry point.
"""


class SxError(Exception):
    """Base exception for all sx errors."""


class LockFileError(SxError):
    """Lock file could not be parsed or failed validation.

    Non-retryable: the lock file must be regenerated.
    """


class MetadataError(SxError):
    """metadata.toml inside an asset archive is missing or invalid."""


class DependencyResolutionError(SxError):
    """Base class for dependency resolution failures."""


class CycleError(DependencyResolutionError):
    """Dependency edges form a cycle.

    Attributes:
        cycle: Asset names along the cycle, first and last entries equal
    """

    def __init__(self, cycle: list[str]) -> None:
        self.cycle = cycle
        super().__init__(f"Circular dependency detected: {' -> '.join(cycle)}")


class MissingDependencyError(DependencyResolutionError):
    """An asset depends on a name that is not in the lock file."""

    def __init__(self, asset_name: str, dependency_name: str) -> None:
        self.asset_name = asset_name
        self.dependency_name = dependency_name
        super().__init__(
            f"Asset '{asset_name}' depends on '{dependency_name}', "
            "which is not in the lock file"
        )


class FetchError(SxError):
    """A single asset could not be downloaded or read."""


class IntegrityError(FetchError):
    """Downloaded bytes do not match the hash pinned in the lock file."""

    def __init__(self, asset_name: str, expected: str, actual: str) -> None:
        self.asset_name = asset_name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Hash mismatch for '{asset_name}': expected sha256:{expected}, got sha256:{actual}"
        )


class OperationCancelledError(SxError):
    """The operation was cancelled or its deadline passed."""


class HandlerError(SxError):
    """An asset handler failed to install or remove an asset."""


class UnknownClientError(SxError):
    """A client ID was requested that the registry does not know."""

    def __init__(self, client_id: str) -> None:
        self.client_id = client_id
        super().__init__(f"Unknown client: {client_id}")
