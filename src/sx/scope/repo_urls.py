"""Repository URL equivalence.

Lock files and git remotes spell the same repository several ways:

- git@github.com:owner/repo.git
- https://github.com/owner/repo.git
- https://github.com/owner/repo

Tracker keys compare URLs as exact strings. This module provides the
lenient comparison used by matcher lookups.
"""


def normalize_repo_url(url: str) -> str:
    """Reduce a repository URL to host/owner/repo form.

    Unrecognized URLs are returned with only surrounding whitespace, a
    trailing slash and a .git suffix removed.
    """
    normalized = url.strip().rstrip("/")

    if normalized.endswith(".git"):
        normalized = normalized[:-4]

    # scp-like SSH syntax: git@host:owner/repo
    if normalized.startswith("git@") and ":" in normalized:
        host, path = normalized[len("git@") :].split(":", 1)
        return f"{host}/{path}".lower()

    for prefix in ("ssh://git@", "https://", "http://"):
        if normalized.startswith(prefix):
            return normalized[len(prefix) :].lower()

    return normalized


def repo_urls_match(a: str, b: str) -> bool:
    """Check whether two URLs point at the same repository."""
    if a == b:
        return True
    if not a or not b:
        return False
    return normalize_repo_url(a) == normalize_repo_url(b)
