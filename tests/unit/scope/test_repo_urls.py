"""Tests for repository URL equivalence."""

import pytest

from sx.scope.repo_urls import normalize_repo_url, repo_urls_match


@pytest.mark.parametrize(
    "url",
    [
        "git@github.com:acme/api.git",
        "git@github.com:acme/api",
        "https://github.com/acme/api.git",
        "https://github.com/acme/api",
        "https://github.com/acme/api/",
        "ssh://git@github.com/acme/api.git",
    ],
)
def test_equivalent_spellings_normalize_together(url: str) -> None:
    assert normalize_repo_url(url) == "github.com/acme/api"


def test_match_ssh_and_https() -> None:
    assert repo_urls_match("git@github.com:acme/api.git", "https://github.com/acme/api")


def test_different_repositories_do_not_match() -> None:
    assert not repo_urls_match("https://github.com/acme/api", "https://github.com/acme/web")
    assert not repo_urls_match("https://github.com/acme/api", "https://gitlab.com/acme/api")


def test_empty_url_only_matches_empty() -> None:
    assert repo_urls_match("", "")
    assert not repo_urls_match("", "https://github.com/acme/api")
