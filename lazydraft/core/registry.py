"""Project registry: every configured project, keyed by name."""

import logging
from typing import TYPE_CHECKING, Dict, Iterable, List

from lazydraft.core.discovery import DraftDiscovery
from lazydraft.core.project import Project
from lazydraft.exceptions import ActiveProjectError

if TYPE_CHECKING:
    from lazydraft.config import ProjectConfig, Settings

logger = logging.getLogger(__name__)


def build_project(config: "ProjectConfig") -> Project:
    """Scan a project's drafts and build its Project.

    Raises:
        DiscoveryError: If the project's directories cannot be read
    """
    discovery = DraftDiscovery(
        config.draft_dir,
        asset_dir=config.source_asset_dir,
        asset_prefix_key=config.asset_prefix_key,
    )
    posts = discovery.discover_all()
    logger.debug("Found %d drafts in project %s", len(posts), config.name)
    return Project(
        name=config.name,
        posts=posts,
        target=config.target,
        published_dir=config.published_dir,
        source_asset_dir=config.source_asset_dir,
    )


class ProjectRegistry:
    """Holds all configured projects and resolves the active one."""

    def __init__(self, projects: Iterable[Project], flagged_active: Iterable[str] = ()):
        """Initialize ProjectRegistry.

        Args:
            projects: The projects to register
            flagged_active: Names carrying the legacy ``active: true`` flag
        """
        self.projects: Dict[str, Project] = {p.name: p for p in projects}
        self.flagged_active = [name for name in flagged_active if name in self.projects]

    @classmethod
    def from_config(cls, configs: List["ProjectConfig"]) -> "ProjectRegistry":
        """Build the registry, scanning every project up front.

        Any unreadable project directory aborts the whole build.
        """
        projects = [build_project(config) for config in configs]
        return cls(projects, [c.name for c in configs if c.active])

    def get_project_names(self) -> List[str]:
        return sorted(self.projects)

    def get_project(self, name: str) -> Project:
        try:
            return self.projects[name]
        except KeyError:
            raise ActiveProjectError(f"Project '{name}' is not configured")

    def get_active_project(self, settings: "Settings") -> Project:
        """Resolve the active project named by the settings record.

        When settings name no project, a single project flagged
        ``active: true`` in projects.yml is used instead.

        Raises:
            ActiveProjectError: If no project is active or the active name
                is not configured
        """
        name = settings.active_project
        if not name:
            if len(self.flagged_active) > 1:
                names = ', '.join(self.flagged_active)
                raise ActiveProjectError(f"More than one project is flagged active: {names}")
            if not self.flagged_active:
                raise ActiveProjectError(
                    "No active project found. See 'lazydraft project config'"
                )
            name = self.flagged_active[0]

        for project_name, project in self.projects.items():
            if project_name == name:
                return project
        raise ActiveProjectError(f"Active project '{name}' is not configured")
