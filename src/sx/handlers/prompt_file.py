"""Handlers for assets installed as a single markdown file."""

from pathlib import Path

from sx.core.errors import HandlerError
from sx.fetch.archive import list_files, read_file
from sx.handlers.base import AssetHandler
from sx.metadata.models import prompt_file_for


class PromptFileHandler(AssetHandler):
    """Installs the asset's prompt file as <target_base>/<directory>/<name>.md."""

    directory: str

    def get_install_path(self) -> str:
        return f"{self.directory}/{self.name}.md"

    def install(self, zip_data: bytes, target_base: Path) -> None:
        prompt_file = prompt_file_for(self._metadata)
        if prompt_file not in list_files(zip_data):
            raise HandlerError(f"{self.name}: prompt file not found in archive: {prompt_file}")

        destination = target_base / self.get_install_path()
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(read_file(zip_data, prompt_file))

    def remove(self, target_base: Path) -> None:
        (target_base / self.get_install_path()).unlink(missing_ok=True)

    def verify_installed(self, target_base: Path) -> tuple[bool, str]:
        path = target_base / self.get_install_path()
        if not path.is_file():
            return False, f"{path} not found"
        return True, "installed"


class AgentHandler(PromptFileHandler):
    directory = "agents"


class CommandHandler(PromptFileHandler):
    directory = "commands"
