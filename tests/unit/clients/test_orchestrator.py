"""Tests for Orchestrator fan-out and applicability filtering."""

from pathlib import Path

from sx.assets.types import AssetType
from sx.clients.orchestrator import (
    NO_COMPATIBLE_ASSETS,
    Orchestrator,
    applicable_client_ids,
    has_any_errors,
)
from sx.clients.types import (
    AssetBundle,
    AssetResult,
    ClientResponse,
    InstallOptions,
    InstallScope,
    RemovalTarget,
    ResultStatus,
)
from sx.fetch.cancellation import CancelToken
from sx.lockfile.models import LockScope, ScopeType
from tests.fakes.archives import make_asset, make_bundle
from tests.fakes.client import FakeClient

REPO = "https://github.com/acme/api"
GLOBAL_SCOPE = InstallScope(type=ScopeType.GLOBAL)
REPO_SCOPE = InstallScope(type=ScopeType.REPO, repo_url=REPO, repo_root=Path("/work/api"))


def _install(
    clients: list[FakeClient], bundles: list[AssetBundle], scope: InstallScope = GLOBAL_SCOPE
) -> dict[str, ClientResponse]:
    return Orchestrator().install_to_clients(
        bundles, scope, InstallOptions(), list(clients), CancelToken()
    )


def test_raising_client_does_not_affect_others() -> None:
    """Test that a client raising fails only that client's assets."""
    first = FakeClient("first")
    second = FakeClient("second", raise_on_install=RuntimeError("disk on fire"))
    third = FakeClient("third")
    bundles = [make_bundle("a"), make_bundle("b")]

    results = _install([first, second, third], bundles)

    assert set(results) == {"first", "second", "third"}
    assert results["first"].succeeded("a") and results["first"].succeeded("b")
    assert results["third"].succeeded("a") and results["third"].succeeded("b")
    failed = results["second"].results
    assert [r.asset_name for r in failed] == ["a", "b"]
    assert all(r.status == ResultStatus.FAILED for r in failed)
    assert "disk on fire" in failed[0].message
    assert has_any_errors(results)


def test_client_without_compatible_assets_is_skipped() -> None:
    mcp_only = FakeClient("mcp-only", asset_types=frozenset({AssetType.MCP}))

    results = _install([mcp_only], [make_bundle("a")])

    assert results["mcp-only"].results == (
        AssetResult("", ResultStatus.SKIPPED, NO_COMPATIBLE_ASSETS),
    )
    assert mcp_only.install_requests == []
    assert not has_any_errors(results)


def test_global_scope_excludes_scoped_assets() -> None:
    client = FakeClient("c")
    bundles = [make_bundle("global"), make_bundle("scoped", scopes=(LockScope(repo=REPO),))]

    _install([client], bundles, GLOBAL_SCOPE)

    assert client.installed_names == ["global"]


def test_client_filter_on_asset() -> None:
    claude = FakeClient("claude-code")
    cursor = FakeClient("cursor")
    bundles = [make_bundle("a", clients=("cursor",)), make_bundle("b")]

    _install([claude, cursor], bundles)

    assert claude.installed_names == ["b"]
    assert sorted(cursor.installed_names) == ["a", "b"]


def test_cancelled_token_fails_client() -> None:
    client = FakeClient("c")
    token = CancelToken()
    token.cancel()

    results = Orchestrator().install_to_clients(
        [make_bundle("a")], GLOBAL_SCOPE, InstallOptions(), [client], token
    )

    assert results["c"].results[0].status == ResultStatus.FAILED
    assert client.install_requests == []


# =============================================================================
# Uninstall
# =============================================================================


def test_uninstall_continues_after_raising_client() -> None:
    first = FakeClient("first", raise_on_uninstall=RuntimeError("locked"))
    second = FakeClient("second")
    targets = [RemovalTarget("a", AssetType.SKILL)]

    results = Orchestrator().uninstall_from_clients(targets, REPO_SCOPE, [first, second])

    assert results["first"].results[0].status == ResultStatus.FAILED
    assert results["second"].succeeded("a")
    assert second.uninstalled_names == ["a"]


# =============================================================================
# Applicability
# =============================================================================


def test_applicable_client_ids() -> None:
    full = FakeClient("full")
    no_scoped = FakeClient("no-scoped", scoped_install=False)
    mcp_only = FakeClient("mcp-only", asset_types=frozenset({AssetType.MCP}))
    clients = [full, no_scoped, mcp_only]
    scoped = make_asset("s", scopes=(LockScope(repo=REPO),))

    assert applicable_client_ids(make_asset("g"), clients, REPO_SCOPE) == ["full", "no-scoped"]
    assert applicable_client_ids(scoped, clients, REPO_SCOPE) == ["full"]
    assert applicable_client_ids(scoped, clients, GLOBAL_SCOPE) == []


def test_has_any_errors_ignores_skipped() -> None:
    results = {
        "a": ClientResponse((AssetResult("x", ResultStatus.SUCCESS),)),
        "b": ClientResponse((AssetResult("", ResultStatus.SKIPPED),)),
    }

    assert not has_any_errors(results)
