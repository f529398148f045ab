"""Claude Code client."""

import shutil
from pathlib import Path

from sx.assets.types import all_asset_types
from sx.clients.base import BaseClient

CLAUDE_CODE_CLIENT_ID = "claude-code"

_VSCODE_EXTENSION_DIRS = (".vscode/extensions", ".vscode-server/extensions")
_VSCODE_EXTENSION_GLOB = "anthropic-ai.claude-code-*"


class ClaudeCodeClient(BaseClient):
    """Installs every asset type into ~/.claude or <repo>[/<path>]/.claude."""

    def __init__(self, *, home: Path) -> None:
        super().__init__(
            client_id=CLAUDE_CODE_CLIENT_ID,
            display_name="Claude Code",
            asset_types=all_asset_types(),
            home=home,
            dir_name=".claude",
        )

    def is_installed(self) -> bool:
        if shutil.which("claude") is not None:
            return True
        if self.global_base.is_dir():
            return True
        for extension_dir in _VSCODE_EXTENSION_DIRS:
            if any((self._home / extension_dir).glob(_VSCODE_EXTENSION_GLOB)):
                return True
        return False
