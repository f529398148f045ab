"""Real implementation of Git using subprocess."""

import subprocess
from pathlib import Path

from sx.gateway.git.abc import Git


class RealGit(Git):
    def get_repository_root(self, cwd: Path) -> Path | None:
        try:
            result = subprocess.run(
                ["git", "rev-parse", "--show-toplevel"],
                cwd=cwd,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError:
            # git is not installed, so there is no repository context
            return None
        if result.returncode != 0:
            return None
        return Path(result.stdout.strip())

    def get_remote_url(self, repo_root: Path, remote: str) -> str | None:
        result = subprocess.run(
            ["git", "remote", "get-url", remote],
            cwd=repo_root,
            capture_output=True,
            text=True,
            check=False,
        )
        if result.returncode != 0:
            return None
        url = result.stdout.strip()
        return url or None
