"""Asset handler interface and the shared directory-asset behavior."""

import shutil
import tomllib
from abc import ABC, abstractmethod
from pathlib import Path

from sx.fetch.archive import extract_zip
from sx.metadata.models import Metadata
from sx.metadata.parser import METADATA_FILE_NAME


class AssetHandler(ABC):
    """Installs and removes one asset inside a client directory.

    target_base is the client directory for the install scope, e.g.
    ~/.claude or <repo>/.claude.
    """

    def __init__(self, metadata: Metadata) -> None:
        self._metadata = metadata

    @property
    def name(self) -> str:
        return self._metadata.asset.name

    @abstractmethod
    def install(self, zip_data: bytes, target_base: Path) -> None:
        """Install the asset.

        Raises:
            HandlerError: If the archive is invalid or files cannot be written
        """
        ...

    @abstractmethod
    def remove(self, target_base: Path) -> None:
        """Remove the asset. Removing an absent asset is not an error."""
        ...

    @abstractmethod
    def get_install_path(self) -> str:
        """Install location relative to target_base."""
        ...

    @abstractmethod
    def verify_installed(self, target_base: Path) -> tuple[bool, str]:
        """Check the asset is present on disk.

        Returns:
            (installed, message) where message explains a negative result
        """
        ...


class DirectoryAssetHandler(AssetHandler):
    """Asset extracted whole into <target_base>/<directory>/<name>."""

    directory: str

    def get_install_path(self) -> str:
        return f"{self.directory}/{self.name}"

    def install(self, zip_data: bytes, target_base: Path) -> None:
        install_dir = target_base / self.get_install_path()
        # Replace rather than merge so files dropped from a new version disappear
        if install_dir.exists():
            shutil.rmtree(install_dir)
        extract_zip(zip_data, install_dir)

    def remove(self, target_base: Path) -> None:
        install_dir = target_base / self.get_install_path()
        if install_dir.exists():
            shutil.rmtree(install_dir)

    def verify_installed(self, target_base: Path) -> tuple[bool, str]:
        install_dir = target_base / self.get_install_path()
        if not install_dir.is_dir():
            return False, f"{install_dir} not found"

        metadata_path = install_dir / METADATA_FILE_NAME
        if not metadata_path.exists():
            return False, f"{METADATA_FILE_NAME} missing from {install_dir}"

        with metadata_path.open("rb") as f:
            installed_version = tomllib.load(f).get("asset", {}).get("version", "")
        expected = self._metadata.asset.version
        if expected and installed_version != expected:
            return False, f"installed version {installed_version}, expected {expected}"
        return True, "installed"
