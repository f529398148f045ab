"""Client interface and the handler-driven implementation shared by clients."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from sx.assets.types import AssetType
from sx.clients.types import (
    AssetResult,
    ClientResponse,
    InstallRequest,
    InstallScope,
    ResultStatus,
    UninstallRequest,
)
from sx.core.errors import SxError
from sx.handlers.factory import create_handler, removal_metadata
from sx.scope.matcher import install_base

logger = logging.getLogger(__name__)


class Client(ABC):
    """An AI coding assistant that assets can be installed into."""

    @property
    @abstractmethod
    def client_id(self) -> str: ...

    @property
    @abstractmethod
    def display_name(self) -> str: ...

    @abstractmethod
    def supports_asset_type(self, asset_type: AssetType) -> bool: ...

    @property
    @abstractmethod
    def supports_scoped_install(self) -> bool:
        """Whether repo and path scoped installs are possible."""
        ...

    @abstractmethod
    def is_installed(self) -> bool:
        """Detect whether the assistant is present on this machine."""
        ...

    @abstractmethod
    def install_assets(self, request: InstallRequest) -> ClientResponse:
        """Install a batch. Per-asset failures are reported in the response.

        Raises:
            Exception: Only for failures that affect the whole batch
        """
        ...

    @abstractmethod
    def uninstall_assets(self, request: UninstallRequest) -> ClientResponse: ...

    @abstractmethod
    def ensure_skills_support(self, scope: InstallScope) -> None:
        """Post-install configuration so the assistant can discover skills."""
        ...


class BaseClient(Client):
    """Client that installs through the per-type handlers into one directory."""

    def __init__(
        self,
        *,
        client_id: str,
        display_name: str,
        asset_types: frozenset[AssetType],
        home: Path,
        dir_name: str,
    ) -> None:
        self._client_id = client_id
        self._display_name = display_name
        self._asset_types = asset_types
        self._home = home
        self._dir_name = dir_name

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def display_name(self) -> str:
        return self._display_name

    @property
    def dir_name(self) -> str:
        return self._dir_name

    @property
    def global_base(self) -> Path:
        return self._home / self._dir_name

    @property
    def supports_scoped_install(self) -> bool:
        return True

    def supports_asset_type(self, asset_type: AssetType) -> bool:
        return asset_type in self._asset_types

    def target_base(self, scope: InstallScope) -> Path:
        """Client directory for the install scope."""
        return install_base(scope.context, scope.repo_root, self.global_base, self._dir_name)

    def install_assets(self, request: InstallRequest) -> ClientResponse:
        target_base = self.target_base(request.scope)
        target_base.mkdir(parents=True, exist_ok=True)

        results: list[AssetResult] = []
        for bundle in request.bundles:
            name = bundle.asset.name
            handler = create_handler(bundle.metadata.asset.type, bundle.metadata)
            try:
                handler.install(bundle.zip_data, target_base)
            except (SxError, OSError) as e:
                logger.debug("%s: install of %s failed: %s", self.client_id, name, e)
                results.append(
                    AssetResult(name, ResultStatus.FAILED, f"Installation failed: {e}", e)
                )
                continue
            results.append(AssetResult(name, ResultStatus.SUCCESS, f"Installed to {target_base}"))
        return ClientResponse(results=tuple(results))

    def uninstall_assets(self, request: UninstallRequest) -> ClientResponse:
        target_base = self.target_base(request.scope)

        results: list[AssetResult] = []
        for target in request.targets:
            if target.type is None:
                # Unknown type: every handler's removal is a no-op when absent
                asset_types = sorted(self._asset_types, key=lambda t: t.value)
            elif self.supports_asset_type(target.type):
                asset_types = [target.type]
            else:
                results.append(
                    AssetResult(
                        target.name,
                        ResultStatus.SKIPPED,
                        f"Unsupported asset type: {target.type.value}",
                    )
                )
                continue

            try:
                for asset_type in asset_types:
                    handler = create_handler(asset_type, removal_metadata(target.name, asset_type))
                    handler.remove(target_base)
            except (SxError, OSError) as e:
                results.append(AssetResult(target.name, ResultStatus.FAILED, str(e), e))
                continue
            results.append(
                AssetResult(target.name, ResultStatus.SUCCESS, "Uninstalled successfully")
            )
        return ClientResponse(results=tuple(results))

    def ensure_skills_support(self, scope: InstallScope) -> None:
        return None
