import click

from sx.cli.common import resolve_scope, select_clients
from sx.cli.output import user_output
from sx.core.context import SxContext
from sx.reconcile.uninstall import run_uninstall


@click.command("uninstall")
@click.argument("names", nargs=-1, required=True)
@click.option("--global", "force_global", is_flag=True, help="Uninstall from the global scope")
@click.option("--client", "client_ids", multiple=True, help="Uninstall from this client only")
@click.pass_obj
def uninstall_cmd(
    ctx: SxContext, names: tuple[str, ...], force_global: bool, client_ids: tuple[str, ...]
) -> None:
    """Uninstall assets by name from the current scope."""
    clients = select_clients(ctx, client_ids)
    resolved = resolve_scope(ctx, force_global=force_global)

    result = run_uninstall(ctx, list(names), resolved.scope, resolved.install_scope, clients)

    for name in result.removed:
        user_output(click.style("✓ ", fg="green") + f"Uninstalled {name}")
    for name in result.not_found:
        user_output(click.style("Warning: ", fg="yellow") + f"{name} is not installed here")
    for name, error in zip(result.failed, result.errors, strict=True):
        user_output(click.style("✗ ", fg="red") + f"{name}: {error}")
    for warning in result.warnings:
        user_output(click.style("Warning: ", fg="yellow") + warning)

    if result.has_failures:
        raise SystemExit(1)
