import click

from sx.cli.common import describe_scope, resolve_scope, select_clients
from sx.cli.output import user_output
from sx.core.context import SxContext
from sx.core.errors import SxError
from sx.fetch.cancellation import CancelToken
from sx.lockfile.parser import load_lock_file
from sx.lockfile.validation import validate_lock_file
from sx.reconcile.install import run_install
from sx.reconcile.models import InstallOutcome


@click.command("install")
@click.option("--global", "force_global", is_flag=True, help="Install global assets only")
@click.option("--force", is_flag=True, help="Reinstall assets even if already up to date")
@click.option(
    "--client",
    "client_ids",
    multiple=True,
    help="Install to this client only (repeatable)",
)
@click.pass_obj
def install_cmd(
    ctx: SxContext, force_global: bool, force: bool, client_ids: tuple[str, ...]
) -> None:
    """Install the lock file's assets for the current directory.

    Assets already installed at the locked version are skipped and assets
    removed from the lock file are uninstalled.
    """
    clients = select_clients(ctx, client_ids)
    resolved = resolve_scope(ctx, force_global=force_global)

    try:
        lock_file = load_lock_file(ctx.lock_path)
        validate_lock_file(lock_file)
        outcome = run_install(
            ctx,
            lock_file,
            resolved.scope,
            resolved.install_scope,
            clients,
            CancelToken.with_timeout(ctx.config.install_timeout_seconds),
            force=force,
        )
    except SxError as e:
        raise click.ClickException(str(e)) from e

    client_names = ", ".join(client.display_name for client in clients)
    user_output(f"Scope: {describe_scope(resolved.scope)} | Clients: {client_names}")
    _report(outcome)

    if outcome.has_failures:
        raise SystemExit(1)


def _report(outcome: InstallOutcome) -> None:
    for name in outcome.cleanup.removed:
        user_output(click.style("  - ", fg="yellow") + f"Removed {name}")
    for name, error in zip(outcome.cleanup.failed, outcome.cleanup.errors, strict=True):
        user_output(click.style("  ✗ ", fg="red") + f"Failed to remove {name}: {error}")

    if not outcome.to_install:
        user_output(click.style("✓ ", fg="green") + "All assets are up to date")
    else:
        unchanged = len(outcome.resolved) - len(outcome.to_install)
        user_output(f"Installing {len(outcome.to_install)} asset(s), {unchanged} unchanged")
        for name in outcome.result.installed:
            user_output(click.style("  ✓ ", fg="green") + name)
        for name, error in zip(outcome.result.failed, outcome.result.errors, strict=True):
            user_output(click.style("  ✗ ", fg="red") + f"{name}: {error}")

    for warning in outcome.warnings:
        user_output(click.style("Warning: ", fg="yellow") + warning)
