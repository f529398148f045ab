"""Results of a reconciliation pass."""

from dataclasses import dataclass, field

from sx.clients.types import ClientResponse
from sx.lockfile.models import Asset


@dataclass(frozen=True)
class InstallResult:
    """Aggregated install outcome. errors[i] explains failed[i]."""

    installed: tuple[str, ...] = ()
    failed: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()

    @property
    def has_failures(self) -> bool:
        return len(self.failed) > 0


@dataclass(frozen=True)
class RemovalResult:
    """Aggregated uninstall outcome. errors[i] explains failed[i]."""

    removed: tuple[str, ...] = ()
    failed: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()
    not_found: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def has_failures(self) -> bool:
        return len(self.failed) > 0


@dataclass(frozen=True)
class InstallOutcome:
    """Everything an install run did, for reporting.

    Attributes:
        resolved: Applicable assets plus dependencies, in install order
        to_install: The subset that needed installing
        result: Per-asset install result
        cleanup: Assets removed because they left the lock file
        client_responses: Raw per-client install responses
        warnings: Non-fatal problems (e.g. tracker could not be saved)
    """

    resolved: tuple[Asset, ...]
    to_install: tuple[Asset, ...]
    result: InstallResult
    cleanup: RemovalResult
    client_responses: dict[str, ClientResponse] = field(default_factory=dict)
    warnings: tuple[str, ...] = ()

    @property
    def has_failures(self) -> bool:
        return self.result.has_failures or self.cleanup.has_failures
