import click

from sx.cli.output import user_output
from sx.core.context import SxContext
from sx.core.errors import SxError
from sx.lockfile.parser import load_lock_file
from sx.lockfile.validation import validate_lock_file


@click.command("validate")
@click.pass_obj
def validate_cmd(ctx: SxContext) -> None:
    """Check the lock file for structural and dependency errors."""
    try:
        lock_file = load_lock_file(ctx.lock_path)
        validate_lock_file(lock_file)
    except SxError as e:
        raise click.ClickException(str(e)) from e

    user_output(
        click.style("✓ ", fg="green")
        + f"{ctx.lock_path.name} is valid ({len(lock_file.assets)} assets)"
    )
