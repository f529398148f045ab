"""Dependency container threaded through the CLI."""

from dataclasses import dataclass
from pathlib import Path

from sx.clients.factory import create_default_registry
from sx.clients.registry import ClientRegistry
from sx.core.config import SxConfig, default_config_dir, load_config
from sx.fetch.source.abc import AssetSource
from sx.fetch.source.real import RealAssetSource
from sx.gateway.git.abc import Git
from sx.gateway.git.real import RealGit
from sx.tracker.store.abc import TrackerStore
from sx.tracker.store.real import JsonTrackerStore, get_tracker_path

# Per-request cap for a single download or git call; the run deadline still applies
NETWORK_TIMEOUT_SECONDS = 300.0


@dataclass(frozen=True)
class SxContext:
    """Immutable context holding every dependency an sx command uses.

    Created at the CLI entry point and passed to commands through Click's
    context object. Tests construct it directly with fakes.
    """

    config: SxConfig
    registry: ClientRegistry
    tracker_store: TrackerStore
    asset_source: AssetSource
    git: Git
    home: Path
    cwd: Path
    lock_path: Path


def create_context(*, lock_file: Path | None = None) -> SxContext:
    """Create the production context.

    Args:
        lock_file: Lock file path overriding the configured one
    """
    home = Path.home()
    cwd = Path.cwd()
    config = load_config(default_config_dir(home), home=home)

    lock_path = lock_file if lock_file is not None else config.lock_file
    if not lock_path.is_absolute():
        lock_path = cwd / lock_path

    return SxContext(
        config=config,
        registry=create_default_registry(home),
        tracker_store=JsonTrackerStore(get_tracker_path(config.cache_dir)),
        asset_source=RealAssetSource(lock_dir=lock_path.parent, timeout=NETWORK_TIMEOUT_SECONDS),
        git=RealGit(),
        home=home,
        cwd=cwd,
        lock_path=lock_path,
    )
