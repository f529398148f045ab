"""The install reconciliation pass.

Brings the current scope's installed assets in line with the lock file:
assets that are new or changed are fetched and installed, assets that left
the lock file are uninstalled, and the tracker records the result.
"""

import logging

from sx.clients.base import Client
from sx.clients.orchestrator import Orchestrator, applicable_client_ids
from sx.clients.types import (
    AssetBundle,
    ClientResponse,
    InstallOptions,
    InstallScope,
    ResultStatus,
)
from sx.core.context import SxContext
from sx.fetch.cancellation import CancelToken
from sx.fetch.fetcher import AssetFetcher
from sx.lockfile.models import Asset, LockFile
from sx.reconcile.models import InstallOutcome, InstallResult
from sx.reconcile.removal import remove_entries
from sx.resolver.resolver import DependencyResolver
from sx.scope.matcher import CurrentScope, ScopeMatcher, asset_key_for_scope
from sx.tracker.models import InstalledAsset
from sx.tracker.tracker import Tracker

logger = logging.getLogger(__name__)


def run_install(
    ctx: SxContext,
    lock_file: LockFile,
    scope: CurrentScope,
    install_scope: InstallScope,
    target_clients: list[Client],
    cancel_token: CancelToken,
    *,
    force: bool = False,
) -> InstallOutcome:
    """Run one reconciliation pass for the current scope.

    With force, every applicable asset is reinstalled regardless of the
    tracker.

    Raises:
        DependencyResolutionError: If the applicable assets cannot be ordered
    """
    applicable = [
        asset
        for asset in ScopeMatcher(scope).filter(lock_file.assets)
        if applicable_client_ids(asset, target_clients, install_scope)
    ]
    resolved = DependencyResolver(lock_file).resolve(applicable)
    logger.info("%d applicable assets, %d after dependencies", len(applicable), len(resolved))

    tracker = ctx.tracker_store.load()
    client_ids = {
        asset.name: applicable_client_ids(asset, target_clients, install_scope)
        for asset in resolved
    }
    to_install = [
        asset
        for asset in resolved
        if client_ids[asset.name]
        and (
            force
            or tracker.needs_install(
                asset_key_for_scope(asset.name, scope), asset.version, client_ids[asset.name]
            )
        )
    ]

    orchestrator = Orchestrator()
    resolved_names = {asset.name for asset in resolved}
    key = asset_key_for_scope("", scope)
    stale = [
        entry
        for entry in tracker.find_by_scope(key.repository, key.path)
        if entry.name not in resolved_names
    ]
    cleanup = remove_entries(orchestrator, tracker, stale, install_scope, target_clients)

    installed: list[str] = []
    failed: list[str] = []
    errors: list[str] = []
    responses: dict[str, ClientResponse] = {}

    if to_install:
        bundles = _fetch_bundles(ctx, to_install, cancel_token, failed, errors)
        if bundles:
            responses = orchestrator.install_to_clients(
                bundles, install_scope, InstallOptions(force=force), target_clients, cancel_token
            )
        for bundle in bundles:
            asset = bundle.asset
            ids = client_ids[asset.name]
            succeeded = [
                cid for cid in ids if cid in responses and responses[cid].succeeded(asset.name)
            ]
            if len(succeeded) == len(ids):
                _record_install(tracker, asset, scope, succeeded)
                installed.append(asset.name)
                continue
            failed.append(asset.name)
            errors.append(_failure_message(asset.name, responses))

    warnings: list[str] = []
    try:
        ctx.tracker_store.save(tracker)
    except OSError as e:
        logger.error("Failed to save installation tracker: %s", e)
        warnings.append(f"Failed to save installation state: {e}")

    for client in target_clients:
        try:
            client.ensure_skills_support(install_scope)
        except OSError as e:
            logger.warning("Skills support setup failed for %s: %s", client.client_id, e)
            warnings.append(f"Skills support setup failed for {client.display_name}: {e}")

    return InstallOutcome(
        resolved=resolved,
        to_install=tuple(to_install),
        result=InstallResult(
            installed=tuple(installed), failed=tuple(failed), errors=tuple(errors)
        ),
        cleanup=cleanup,
        client_responses=responses,
        warnings=tuple(warnings),
    )


def _fetch_bundles(
    ctx: SxContext,
    assets: list[Asset],
    cancel_token: CancelToken,
    failed: list[str],
    errors: list[str],
) -> list[AssetBundle]:
    """Fetch assets, recording download failures. Bundles keep the input order."""
    results = AssetFetcher(ctx.asset_source).fetch_assets(
        assets, concurrency=ctx.config.concurrency, cancel_token=cancel_token
    )
    by_name = {result.asset.name: result for result in results}

    bundles: list[AssetBundle] = []
    for asset in assets:
        result = by_name[asset.name]
        if result.error is not None or result.zip_data is None or result.metadata is None:
            failed.append(asset.name)
            errors.append(f"Download failed: {result.error}")
            continue
        bundles.append(AssetBundle(asset=asset, metadata=result.metadata, zip_data=result.zip_data))
    return bundles


def _record_install(
    tracker: Tracker, asset: Asset, scope: CurrentScope, client_ids: list[str]
) -> None:
    key = asset_key_for_scope(asset.name, scope)
    existing = tracker.find_asset(key)
    clients = list(client_ids)
    if existing is not None and existing.version == asset.version:
        # Same version: a newly added client joins the ones already recorded
        clients = [*existing.clients, *(cid for cid in client_ids if cid not in existing.clients)]
    tracker.upsert_asset(
        InstalledAsset(
            name=asset.name,
            version=asset.version,
            repository=key.repository,
            path=key.path,
            clients=tuple(clients),
            type=asset.type,
        )
    )


def _failure_message(asset_name: str, responses: dict[str, ClientResponse]) -> str:
    messages = [
        f"{client_id}: {result.error or result.message}"
        for client_id, response in responses.items()
        for result in response.results
        if result.asset_name == asset_name and result.status == ResultStatus.FAILED
    ]
    if not messages:
        return "Not installed to every applicable client"
    return "; ".join(messages)
