import click
from rich.console import Console
from rich.table import Table

from sx.cli.output import user_output
from sx.core.context import SxContext


@click.command("status")
@click.pass_obj
def status_cmd(ctx: SxContext) -> None:
    """Show installed assets grouped by scope."""
    tracker = ctx.tracker_store.load()
    groups = tracker.group_by_scope()
    if not groups:
        user_output("No assets installed")
        return

    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("Scope", style="cyan", no_wrap=True)
    table.add_column("Asset", style="yellow", no_wrap=True)
    table.add_column("Type", no_wrap=True)
    table.add_column("Version", no_wrap=True)
    table.add_column("Clients")

    for scope_label, entries in groups.items():
        for index, entry in enumerate(entries):
            table.add_row(
                scope_label if index == 0 else "",
                entry.name,
                entry.type.label if entry.type is not None else "[dim]-[/dim]",
                entry.version,
                ", ".join(entry.clients),
            )

    # Output table to stderr (consistent with user_output convention)
    console = Console(stderr=True, force_terminal=True, width=200)
    console.print(table)
