"""Explicit uninstall of named assets."""

import logging

from sx.clients.base import Client
from sx.clients.orchestrator import Orchestrator
from sx.clients.types import InstallScope
from sx.core.context import SxContext
from sx.reconcile.models import RemovalResult
from sx.reconcile.removal import remove_entries
from sx.scope.matcher import CurrentScope, asset_key_for_scope
from sx.scope.repo_urls import repo_urls_match
from sx.tracker.models import InstalledAsset

logger = logging.getLogger(__name__)


def run_uninstall(
    ctx: SxContext,
    names: list[str],
    scope: CurrentScope,
    install_scope: InstallScope,
    target_clients: list[Client],
) -> RemovalResult:
    """Uninstall named assets from the current scope and update the tracker.

    Entries are found by exact key first, then by comparing repository URLs
    leniently so an entry recorded under the HTTPS form of a URL is still
    found from an SSH checkout. A tracker save failure is reported as a
    warning; the removals themselves already happened.
    """
    tracker = ctx.tracker_store.load()

    entries: list[InstalledAsset] = []
    not_found: list[str] = []
    for name in names:
        key = asset_key_for_scope(name, scope)
        entry = tracker.find_asset(key)
        if entry is None:
            entry = tracker.find_asset_with_matcher(name, key.repository, key.path, repo_urls_match)
        if entry is None:
            not_found.append(name)
            continue
        entries.append(entry)

    result = remove_entries(Orchestrator(), tracker, entries, install_scope, target_clients)
    warnings: list[str] = []
    if entries:
        try:
            ctx.tracker_store.save(tracker)
        except OSError as e:
            logger.error("Failed to save installation tracker: %s", e)
            warnings.append(f"Failed to save installation state: {e}")

    return RemovalResult(
        removed=result.removed,
        failed=result.failed,
        errors=result.errors,
        not_found=tuple(not_found),
        warnings=tuple(warnings),
    )
