"""sx CLI entry point.

This package installs AI assistant assets (skills, agents, commands, hooks
and MCP servers) pinned in an sx lock file. See `sx --help` for details.
"""

from sx.cli.cli import cli


def main() -> None:
    """CLI entry point used by the `sx` console script."""
    cli()
