"""Helpers shared by the install-style commands."""

from dataclasses import dataclass

import click

from sx.clients.base import Client
from sx.clients.types import InstallScope
from sx.core.context import SxContext
from sx.core.errors import SxError
from sx.gateway.git.context import GitContext, current_scope_for, detect_git_context
from sx.scope.matcher import CurrentScope


@dataclass(frozen=True)
class ResolvedScope:
    git_context: GitContext
    scope: CurrentScope
    install_scope: InstallScope


def resolve_scope(ctx: SxContext, *, force_global: bool) -> ResolvedScope:
    """Current scope and matching install scope for the working directory."""
    git_context = detect_git_context(ctx.git, ctx.cwd)
    scope = CurrentScope.global_scope() if force_global else current_scope_for(git_context)
    install_scope = InstallScope(
        type=scope.type,
        repo_url=scope.repo_url,
        repo_root=git_context.repo_root,
        path=scope.repo_path,
    )
    return ResolvedScope(git_context=git_context, scope=scope, install_scope=install_scope)


def select_clients(ctx: SxContext, client_ids: tuple[str, ...]) -> list[Client]:
    """Clients named on the command line, else in config, else those detected.

    Raises:
        click.ClickException: If a client ID is unknown or none are available
    """
    ids = client_ids or ctx.config.clients
    try:
        if ids:
            clients = [ctx.registry.get(client_id) for client_id in ids]
        else:
            clients = ctx.registry.detect_installed()
    except SxError as e:
        raise click.ClickException(str(e)) from e

    if not clients:
        known = ", ".join(client.client_id for client in ctx.registry.all_clients())
        raise click.ClickException(f"No supported AI clients detected (supported: {known})")
    return clients


def describe_scope(scope: CurrentScope) -> str:
    if scope.repo_url and scope.repo_path:
        return f"{scope.repo_url}:{scope.repo_path}"
    if scope.repo_url:
        return scope.repo_url
    return "global"
