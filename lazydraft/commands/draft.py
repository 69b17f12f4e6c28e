"""
Draft command group: list, stage, update, unstage and publish drafts.

Every command works on the active project.
"""
import click

from lazydraft.commands.common import AppContext, choose, handle_errors, pass_app
from lazydraft.core.pipeline import StagingPipeline
from lazydraft.exceptions import SelectionError


def _print_drafts(pipeline: StagingPipeline) -> None:
    click.echo(f"\n Post drafts of {pipeline.project.name}")
    for index, (post, staged) in enumerate(pipeline.draft_listing(), start=1):
        marker = " (staged)" if staged else ""
        click.echo(f"  {index}) {post.name}{marker}")


def _print_staged(pipeline: StagingPipeline) -> None:
    staged = pipeline.staged_posts()
    if not staged:
        raise SelectionError("there are no staged drafts")
    click.echo("\nStaged posts are")
    for index, post in enumerate(staged, start=1):
        click.echo(f"  {index}) {post.name}")


def _pipeline(app: AppContext) -> StagingPipeline:
    return StagingPipeline(app.active_project())


number_option = click.option("-n", "--number", help="Number of the post, as listed.")


@click.group()
def draft():
    """Manage the drafts of the active project."""
    pass


@draft.command(name="list")
@pass_app
@handle_errors
def list_drafts(app: AppContext):
    """List all drafts, marking staged ones."""
    pipeline = _pipeline(app)
    if not pipeline.project.posts:
        click.echo(f"\nNo drafts in {pipeline.project.name}")
        return
    _print_drafts(pipeline)


@draft.command()
@number_option
@pass_app
@handle_errors
def stage(app: AppContext, number):
    """Copy a draft into the site's content directory."""
    pipeline = _pipeline(app)
    if number is None:
        _print_drafts(pipeline)
    post = pipeline.stage(choose(number, "\nType post number"))
    click.echo(f"\n{post.name} is added to the stage.")


@draft.command()
@number_option
@pass_app
@handle_errors
def update(app: AppContext, number):
    """Replace a staged draft with its latest version."""
    pipeline = _pipeline(app)
    if number is None:
        _print_staged(pipeline)
    post = pipeline.update(choose(number, "\nType post number to update"))
    click.echo(f"\n{post.name} is updated.")


@draft.command()
@number_option
@pass_app
@handle_errors
def unstage(app: AppContext, number):
    """Remove a staged draft from the site."""
    pipeline = _pipeline(app)
    if number is None:
        _print_staged(pipeline)
    post = pipeline.unstage(choose(number, "\nType post number to unstage"))
    click.echo(f"\n{post.name} is removed from the stage.")


@draft.command()
@number_option
@pass_app
@handle_errors
def publish(app: AppContext, number):
    """Update a staged draft, archive it and remove it from the drafts."""
    pipeline = _pipeline(app)
    if number is None:
        _print_staged(pipeline)
    result = pipeline.publish(choose(number, "\nType post number to publish"))
    click.echo(f"\n • {result.post.name} is updated")
    click.echo(f" • Copied to {result.archived_path}")
    click.echo(" • Removed from drafts")
