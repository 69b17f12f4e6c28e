"""
Project command group: list projects and choose the active one.
"""
import click

from lazydraft.commands.common import AppContext, choose, handle_errors, pass_app
from lazydraft.config import Settings, save_settings
from lazydraft.core.pipeline import select


@click.group()
def project():
    """Track your projects."""
    pass


@project.command(name="list")
@pass_app
@handle_errors
def list_projects(app: AppContext):
    """List your current projects."""
    names = app.registry().get_project_names()
    if not names:
        click.echo(f"\nNo projects configured. Add one to {app.paths.projects_file}")
        return

    active_name = app.settings().active_project
    click.echo("\nCurrent Project List")
    for index, name in enumerate(names, start=1):
        marker = " (active)" if name == active_name else ""
        click.echo(f"  {index}) {name}{marker}")


@project.command(name="active")
@pass_app
@handle_errors
def active_project(app: AppContext):
    """Show the active project used for draft management."""
    current = app.active_project()
    click.echo(f"\nCurrent active project is {current.name}")


@project.command(name="config")
@click.option("-n", "--number", help="Number of the project to activate.")
@pass_app
@handle_errors
def configure_active(app: AppContext, number):
    """Change the active project used for draft management."""
    names = app.registry().get_project_names()
    click.echo("\nCurrent Project List")
    for index, name in enumerate(names, start=1):
        click.echo(f"  {index}) {name}")

    chosen = select(names, choose(number, "\nSelect project to make it active"))
    save_settings(app.paths, Settings(active_project=chosen))
    click.echo(f"\n{chosen} is now the active project")


@project.command(name="show")
@click.argument("name", required=False)
@pass_app
@handle_errors
def show_project(app: AppContext, name):
    """Show a project's directories and drafts. Defaults to the active project."""
    current = app.registry().get_project(name) if name else app.active_project()
    target = current.target
    staged = current.staged_names()
    click.echo(f"\n{current.name}")
    click.echo(f"  published:      {current.published_dir}")
    click.echo(f"  source assets:  {current.source_asset_dir or '-'}")
    click.echo(f"  target content: {target.content_dir}")
    click.echo(f"  target assets:  {target.asset_dir}")
    click.echo(f"  asset prefix:   {target.asset_prefix}")
    click.echo(f"  rewrite:        {target.rewrite}")
    click.echo(f"  drafts:         {len(current.posts)}")
    for post_name, post in zip(current.get_post_names(), current.posts):
        marker = " (staged)" if post.target_name in staged else ""
        click.echo(f"    {post_name}{marker}")
