from pathlib import Path

from sx.clients.claude_code.client import ClaudeCodeClient
from sx.clients.cursor.client import CursorClient
from sx.clients.registry import ClientRegistry


def create_default_registry(home: Path) -> ClientRegistry:
    """Registry with every client sx ships."""
    return ClientRegistry([ClaudeCodeClient(home=home), CursorClient(home=home)])
