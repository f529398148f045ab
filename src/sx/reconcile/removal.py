"""Removing tracked assets from clients."""

import logging

from sx.clients.base import Client
from sx.clients.orchestrator import Orchestrator
from sx.clients.types import InstallScope, RemovalTarget, ResultStatus
from sx.reconcile.models import RemovalResult
from sx.tracker.models import InstalledAsset
from sx.tracker.tracker import Tracker

logger = logging.getLogger(__name__)


def remove_entries(
    orchestrator: Orchestrator,
    tracker: Tracker,
    entries: list[InstalledAsset],
    install_scope: InstallScope,
    target_clients: list[Client],
) -> RemovalResult:
    """Uninstall tracked entries from the clients they were installed to.

    An entry is dropped from the tracker once every recorded client it was
    removed from succeeded. Clients that failed, or are not among
    target_clients, stay recorded so a later run can retry.
    """
    if not entries:
        return RemovalResult()

    logger.info("Removing %d asset(s) no longer wanted", len(entries))

    succeeded: dict[str, set[str]] = {entry.name: set() for entry in entries}
    failures: dict[str, list[str]] = {entry.name: [] for entry in entries}

    for client in target_clients:
        targets = [
            RemovalTarget(name=entry.name, type=entry.type)
            for entry in entries
            if not entry.clients or client.client_id in entry.clients
        ]
        if not targets:
            continue
        responses = orchestrator.uninstall_from_clients(targets, install_scope, [client])
        for result in responses[client.client_id].results:
            if result.status == ResultStatus.FAILED:
                failures[result.asset_name].append(
                    f"{client.client_id}: {result.error or result.message}"
                )
            else:
                succeeded[result.asset_name].add(client.client_id)

    removed: list[str] = []
    failed: list[str] = []
    errors: list[str] = []
    for entry in entries:
        if failures[entry.name]:
            failed.append(entry.name)
            errors.append("; ".join(failures[entry.name]))

        if entry.clients:
            remaining = tuple(cid for cid in entry.clients if cid not in succeeded[entry.name])
        elif failures[entry.name]:
            remaining = tuple(
                client.client_id
                for client in target_clients
                if client.client_id not in succeeded[entry.name]
            )
        else:
            remaining = ()

        if remaining:
            tracker.upsert_asset(
                InstalledAsset(
                    name=entry.name,
                    version=entry.version,
                    repository=entry.repository,
                    path=entry.path,
                    clients=remaining,
                    type=entry.type,
                )
            )
        else:
            tracker.remove_asset(entry.key)
            if not failures[entry.name]:
                removed.append(entry.name)

    return RemovalResult(removed=tuple(removed), failed=tuple(failed), errors=tuple(errors))
