"""
Config command group: create or remove the lazydraft config directory.
"""
import click

from lazydraft.commands.common import AppContext, handle_errors, pass_app
from lazydraft.config import init_config_dir, reset_config_dir


@click.command(name="init")
@pass_app
@handle_errors
def init(app: AppContext):
    """Create config files to start tracking your projects."""
    created = init_config_dir(app.paths)
    for path in (app.paths.config_dir, app.paths.projects_file, app.paths.settings_file):
        state = "created" if path in created else "present"
        click.echo(f" • {path} is {state}")


@click.command(name="reset")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@pass_app
@handle_errors
def reset(app: AppContext, yes):
    """Delete the config folder to start over."""
    if not yes:
        click.confirm(f"Remove {app.paths.config_dir}?", abort=True)
    if reset_config_dir(app.paths):
        click.echo("\nConfig folder is removed.")
    else:
        click.echo("\nNo config folder found.")


@click.group()
def config():
    """Configure lazydraft."""
    pass


config.add_command(init)
config.add_command(reset)
