"""Fan-out of installs and uninstalls across clients."""

import logging
import threading

from sx.clients.base import Client
from sx.clients.types import (
    AssetBundle,
    AssetResult,
    ClientResponse,
    InstallOptions,
    InstallRequest,
    InstallScope,
    RemovalTarget,
    ResultStatus,
    UninstallRequest,
)
from sx.fetch.cancellation import CancelToken
from sx.lockfile.models import Asset, ScopeType

logger = logging.getLogger(__name__)

NO_COMPATIBLE_ASSETS = "No compatible assets"


class Orchestrator:
    """Installs a fetched batch into several clients at once.

    Each client runs on its own thread; one client failing or raising
    never affects the results recorded for the others.
    """

    def install_to_clients(
        self,
        bundles: list[AssetBundle],
        scope: InstallScope,
        options: InstallOptions,
        clients: list[Client],
        cancel_token: CancelToken,
    ) -> dict[str, ClientResponse]:
        """Install to the given clients concurrently.

        Returns:
            Response per client ID, one entry for every client given
        """
        results: dict[str, ClientResponse] = {}
        lock = threading.Lock()

        def worker(client: Client) -> None:
            response = self._install_to_client(client, bundles, scope, options, cancel_token)
            with lock:
                results[client.client_id] = response

        threads = [
            threading.Thread(target=worker, args=(client,), name=f"install-{client.client_id}")
            for client in clients
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        return results

    def _install_to_client(
        self,
        client: Client,
        bundles: list[AssetBundle],
        scope: InstallScope,
        options: InstallOptions,
        cancel_token: CancelToken,
    ) -> ClientResponse:
        compatible = filter_bundles(bundles, client, scope)
        if not compatible:
            return ClientResponse(
                results=(AssetResult("", ResultStatus.SKIPPED, NO_COMPATIBLE_ASSETS),)
            )

        request = InstallRequest(bundles=tuple(compatible), scope=scope, options=options)
        try:
            cancel_token.raise_if_cancelled()
            return client.install_assets(request)
        # Client boundary: a raising client is recorded as failures for that client only
        except Exception as e:
            logger.error("Install to %s failed: %s", client.client_id, e)
            return ClientResponse(
                results=tuple(
                    AssetResult(bundle.asset.name, ResultStatus.FAILED, str(e), e)
                    for bundle in compatible
                )
            )

    def uninstall_from_clients(
        self,
        targets: list[RemovalTarget],
        scope: InstallScope,
        clients: list[Client],
    ) -> dict[str, ClientResponse]:
        """Remove assets from each client in turn.

        A client raising is recorded as failed results for that client and
        the remaining clients are still processed.
        """
        results: dict[str, ClientResponse] = {}
        request = UninstallRequest(targets=tuple(targets), scope=scope)
        for client in clients:
            try:
                results[client.client_id] = client.uninstall_assets(request)
            # Client boundary, as for installs
            except Exception as e:
                logger.error("Uninstall from %s failed: %s", client.client_id, e)
                results[client.client_id] = ClientResponse(
                    results=tuple(
                        AssetResult(target.name, ResultStatus.FAILED, str(e), e)
                        for target in targets
                    )
                )
        return results


def filter_bundles(
    bundles: list[AssetBundle], client: Client, scope: InstallScope
) -> list[AssetBundle]:
    """Bundles the client can take at this install scope."""
    return [
        bundle
        for bundle in bundles
        if applicable_client_ids(bundle.asset, [client], scope)
    ]


def has_any_errors(results: dict[str, ClientResponse]) -> bool:
    return any(
        result.status == ResultStatus.FAILED
        for response in results.values()
        for result in response.results
    )


def applicable_client_ids(asset: Asset, clients: list[Client], scope: InstallScope) -> list[str]:
    """IDs of the clients that would receive this asset at this install scope.

    Uses the same rules as the per-client filter applied during installs.
    """
    ids: list[str] = []
    for client in clients:
        if not asset.matches_client(client.client_id):
            continue
        if not client.supports_asset_type(asset.type):
            continue
        if not asset.is_global:
            if scope.type == ScopeType.GLOBAL or not client.supports_scoped_install:
                continue
        ids.append(client.client_id)
    return ids
