"""Hook assets: script directory plus a registration in settings.json."""

from pathlib import Path

from sx.core.errors import HandlerError
from sx.fetch.archive import list_files
from sx.handlers.base import DirectoryAssetHandler
from sx.handlers.settings import (
    SETTINGS_FILE_NAME,
    HookEntry,
    read_settings,
    write_settings,
)


class HookHandler(DirectoryAssetHandler):
    directory = "hooks"

    def install(self, zip_data: bytes, target_base: Path) -> None:
        hook = self._metadata.hook
        if hook is None:
            raise HandlerError(f"{self.name}: [hook] section missing in metadata")
        if hook.script_file not in list_files(zip_data):
            raise HandlerError(f"{self.name}: script file not found in archive: {hook.script_file}")

        super().install(zip_data, target_base)

        script_path = target_base / self.get_install_path() / hook.script_file
        entry_fields: dict[str, object] = {"script": str(script_path), "artifact": self.name}
        if hook.is_async:
            entry_fields["is_async"] = True
        if not hook.fail_on_error:
            entry_fields["fail_on_error"] = False
        if hook.timeout:
            entry_fields["timeout"] = hook.timeout

        settings_path = target_base / SETTINGS_FILE_NAME
        settings = read_settings(settings_path)
        write_settings(settings_path, settings.with_hook(hook.event, HookEntry(**entry_fields)))

    def remove(self, target_base: Path) -> None:
        settings_path = target_base / SETTINGS_FILE_NAME
        if settings_path.exists():
            settings = read_settings(settings_path)
            write_settings(settings_path, settings.without_asset_hooks(self.name))
        super().remove(target_base)
