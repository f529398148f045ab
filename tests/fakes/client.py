"""Fake Client for testing."""

from sx.assets.types import AssetType, all_asset_types
from sx.clients.base import Client
from sx.clients.types import (
    AssetResult,
    ClientResponse,
    InstallRequest,
    InstallScope,
    ResultStatus,
    UninstallRequest,
)


class FakeClient(Client):
    """In-memory Client for testing.

    Records every request. Behavior is configured through constructor
    arguments: `raise_on_install` makes install_assets raise, and
    `failing_assets` reports FAILED for the named assets.

    Example:
        >>> client = FakeClient("claude-code")
        >>> client.install_assets(request)
        >>> assert client.installed_names == ["a"]
    """

    def __init__(
        self,
        client_id: str,
        *,
        asset_types: frozenset[AssetType] | None = None,
        installed: bool = True,
        scoped_install: bool = True,
        raise_on_install: Exception | None = None,
        raise_on_uninstall: Exception | None = None,
        failing_assets: frozenset[str] = frozenset(),
    ) -> None:
        self._client_id = client_id
        self._asset_types = asset_types if asset_types is not None else all_asset_types()
        self._installed = installed
        self._scoped_install = scoped_install
        self._raise_on_install = raise_on_install
        self._raise_on_uninstall = raise_on_uninstall
        self._failing_assets = failing_assets
        self._install_requests: list[InstallRequest] = []
        self._uninstall_requests: list[UninstallRequest] = []
        self._skills_support_scopes: list[InstallScope] = []

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def display_name(self) -> str:
        return f"Fake {self._client_id}"

    @property
    def supports_scoped_install(self) -> bool:
        return self._scoped_install

    def supports_asset_type(self, asset_type: AssetType) -> bool:
        return asset_type in self._asset_types

    def is_installed(self) -> bool:
        return self._installed

    def install_assets(self, request: InstallRequest) -> ClientResponse:
        self._install_requests.append(request)
        if self._raise_on_install is not None:
            raise self._raise_on_install
        return ClientResponse(
            results=tuple(self._result_for(bundle.asset.name) for bundle in request.bundles)
        )

    def uninstall_assets(self, request: UninstallRequest) -> ClientResponse:
        self._uninstall_requests.append(request)
        if self._raise_on_uninstall is not None:
            raise self._raise_on_uninstall
        return ClientResponse(
            results=tuple(self._result_for(target.name) for target in request.targets)
        )

    def ensure_skills_support(self, scope: InstallScope) -> None:
        self._skills_support_scopes.append(scope)

    def _result_for(self, name: str) -> AssetResult:
        if name in self._failing_assets:
            return AssetResult(name, ResultStatus.FAILED, "failed", RuntimeError(f"{name} failed"))
        return AssetResult(name, ResultStatus.SUCCESS, "ok")

    @property
    def install_requests(self) -> list[InstallRequest]:
        return list(self._install_requests)

    @property
    def uninstall_requests(self) -> list[UninstallRequest]:
        return list(self._uninstall_requests)

    @property
    def installed_names(self) -> list[str]:
        """Asset names passed to install_assets, in call order."""
        return [
            bundle.asset.name for request in self._install_requests for bundle in request.bundles
        ]

    @property
    def uninstalled_names(self) -> list[str]:
        return [target.name for request in self._uninstall_requests for target in request.targets]

    @property
    def skills_support_scopes(self) -> list[InstallScope]:
        return list(self._skills_support_scopes)
