"""Working-context detection from git."""

import logging
from dataclasses import dataclass
from pathlib import Path

from sx.gateway.git.abc import Git
from sx.lockfile.models import ScopeType
from sx.scope.matcher import CurrentScope

logger = logging.getLogger(__name__)

DEFAULT_REMOTE = "origin"


@dataclass(frozen=True)
class GitContext:
    """Where the current directory sits relative to a repository.

    Attributes:
        repo_root: Repository root, None outside a repository
        repo_url: URL of the origin remote, empty if none
        relative_path: cwd relative to repo_root in posix form, empty at the root
    """

    repo_root: Path | None
    repo_url: str
    relative_path: str

    @property
    def is_repo(self) -> bool:
        return self.repo_root is not None


def detect_git_context(git: Git, cwd: Path) -> GitContext:
    repo_root = git.get_repository_root(cwd)
    if repo_root is None:
        return GitContext(repo_root=None, repo_url="", relative_path="")

    repo_url = git.get_remote_url(repo_root, DEFAULT_REMOTE) or ""
    try:
        relative = cwd.resolve().relative_to(repo_root.resolve()).as_posix()
    except ValueError:
        relative = ""
    if relative == ".":
        relative = ""

    logger.debug("Git context: root=%s url=%s path=%s", repo_root, repo_url, relative)
    return GitContext(repo_root=repo_root, repo_url=repo_url, relative_path=relative)


def current_scope_for(git_context: GitContext) -> CurrentScope:
    """Scope for the detected context.

    A repository without a remote has no identity to match lock file scopes
    against, so it is treated as global.
    """
    if not git_context.is_repo or not git_context.repo_url:
        return CurrentScope.global_scope()
    if git_context.relative_path:
        return CurrentScope(
            type=ScopeType.PATH,
            repo_url=git_context.repo_url,
            repo_path=git_context.relative_path,
        )
    return CurrentScope(type=ScopeType.REPO, repo_url=git_context.repo_url)
