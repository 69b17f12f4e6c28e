"""
Shared state and error handling for lazydraft commands.
"""
import functools
from dataclasses import dataclass
from typing import Optional

import click

from lazydraft.config import ConfigPaths, Settings, load_projects_config, load_settings
from lazydraft.core.project import Project
from lazydraft.core.registry import ProjectRegistry
from lazydraft.exceptions import ActiveProjectError, LazyDraftError, SelectionError


@dataclass
class AppContext:
    """Per-invocation state handed to every command through click's context."""
    paths: ConfigPaths
    _registry: Optional[ProjectRegistry] = None

    def registry(self) -> ProjectRegistry:
        """Load projects.yml and scan every project, once per invocation."""
        if self._registry is None:
            self._registry = ProjectRegistry.from_config(load_projects_config(self.paths))
        return self._registry

    def settings(self) -> Settings:
        return load_settings(self.paths)

    def active_project(self) -> Project:
        return self.registry().get_active_project(self.settings())


pass_app = click.make_pass_decorator(AppContext)


def handle_errors(func):
    """Turn lazydraft errors into command output.

    A missing active project or an invalid choice is something the user can
    fix, so it is printed and the command ends normally. Every other error
    exits with a non-zero status.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (ActiveProjectError, SelectionError) as e:
            click.echo(f"\n{e}")
        except LazyDraftError as e:
            raise click.ClickException(str(e))
    return wrapper


def choose(number: Optional[str], prompt: str) -> str:
    """Return the number given on the command line, or ask for one."""
    if number is not None:
        return number
    return click.prompt(prompt, default="", show_default=False)
