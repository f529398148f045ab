"""Abstract interface for the git queries sx needs."""

from abc import ABC, abstractmethod
from pathlib import Path


class Git(ABC):
    """Read-only git queries used to detect the working context."""

    @abstractmethod
    def get_repository_root(self, cwd: Path) -> Path | None:
        """Get the repository root containing cwd.

        Returns:
            Path to the repository root, or None if cwd is not in a git repo
        """
        ...

    @abstractmethod
    def get_remote_url(self, repo_root: Path, remote: str) -> str | None:
        """Get the URL of a remote.

        Returns:
            The remote URL, or None if the remote is not configured
        """
        ...
