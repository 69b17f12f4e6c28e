"""
Command-line interface for lazydraft.
"""
import logging
from pathlib import Path

import click

from lazydraft import __version__
from lazydraft.commands.common import AppContext
from lazydraft.commands.config import config, init, reset
from lazydraft.commands.draft import draft
from lazydraft.commands.project import project
from lazydraft.config import ConfigPaths
from lazydraft.exceptions import LazyDraftError


@click.group()
@click.version_option(__version__, prog_name="lazydraft")
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="LAZYDRAFT_CONFIG_DIR",
    help="Config directory (default: ~/.config/lazydraft).",
)
@click.option("-v", "--verbose", is_flag=True, help="Log file operations.")
@click.pass_context
def cli(ctx, config_dir, verbose):
    """Simple application to transfer drafts to your static site."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        paths = ConfigPaths(config_dir) if config_dir else ConfigPaths.default()
    except LazyDraftError as e:
        raise click.ClickException(str(e))
    ctx.obj = AppContext(paths=paths)


cli.add_command(init)
cli.add_command(reset)
cli.add_command(config)
cli.add_command(project)
cli.add_command(draft)


def main():
    cli()


if __name__ == '__main__':
    main()
