import logging
from pathlib import Path

import click

from sx.cli.commands.install import install_cmd
from sx.cli.commands.status import status_cmd
from sx.cli.commands.uninstall import uninstall_cmd
from sx.cli.commands.validate import validate_cmd
from sx.core.context import create_context
from sx.core.errors import SxError

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="sx")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--lock-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Lock file to use instead of the configured one",
)
@click.pass_context
def cli(ctx: click.Context, debug: bool, lock_file: Path | None) -> None:
    """Install AI assistant assets pinned in an sx lock file."""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")

    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        try:
            ctx.obj = create_context(lock_file=lock_file)
        except SxError as e:
            raise click.ClickException(str(e)) from e


cli.add_command(install_cmd)
cli.add_command(uninstall_cmd)
cli.add_command(status_cmd)
cli.add_command(validate_cmd)
