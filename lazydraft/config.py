"""
Configuration files for lazydraft.

Two YAML files live in the config directory (``~/.config/lazydraft`` by
default):

- ``projects.yml`` maps project names to their source and target layouts.
- ``settings.yml`` records the active project as ``activeProject``.
"""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from lazydraft.core.discovery import DEFAULT_ASSET_PREFIX_KEY
from lazydraft.core.models import DEFAULT_ASSET_PREFIX, REWRITE_MODES, REWRITE_WIKILINK, TargetInfo
from lazydraft.exceptions import ConfigError, PathResolutionError

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = Path(".config") / "lazydraft"
PROJECTS_FILE_NAME = "projects.yml"
SETTINGS_FILE_NAME = "settings.yml"

ACTIVE_PROJECT_KEY = "activeProject"

REPAIR_HINT = "Run 'lazydraft config init' to create it or 'lazydraft reset' to start over."


@dataclass
class ConfigPaths:
    """Locations of the config directory and the files inside it."""
    config_dir: Path

    @classmethod
    def default(cls) -> "ConfigPaths":
        """Config paths under the user's home directory.

        Raises:
            PathResolutionError: If the home directory cannot be determined
        """
        try:
            home = Path.home()
        except RuntimeError as e:
            raise PathResolutionError(f"User home directory cannot be retrieved: {e}") from e
        return cls(home / CONFIG_DIR_NAME)

    @property
    def projects_file(self) -> Path:
        return self.config_dir / PROJECTS_FILE_NAME

    @property
    def settings_file(self) -> Path:
        return self.config_dir / SETTINGS_FILE_NAME


@dataclass
class ProjectConfig:
    """One projects.yml entry with every directory resolved to a path."""
    name: str
    draft_dir: Path
    published_dir: Path
    target: TargetInfo
    source_asset_dir: Optional[Path] = None
    asset_prefix_key: str = DEFAULT_ASSET_PREFIX_KEY
    active: bool = False


@dataclass
class Settings:
    """Persisted application settings."""
    active_project: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {ACTIVE_PROJECT_KEY: self.active_project or ""}


def _read_yaml(path: Path) -> Any:
    try:
        text = path.read_text(encoding='utf-8')
    except FileNotFoundError as e:
        raise ConfigError(f"Config file {path} does not exist. {REPAIR_HINT}") from e
    except OSError as e:
        raise ConfigError(f"Config file {path} cannot be read: {e}") from e

    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file {path} is not valid YAML: {e}. {REPAIR_HINT}") from e


def _resolve_dir(base: Path, value: str) -> Path:
    """Resolve a configured directory relative to its base directory."""
    path = Path(str(value)).expanduser()
    if path.is_absolute():
        return path
    return base / path


def _section(project: str, data: Dict, key: str) -> Dict:
    section = data.get(key)
    if not isinstance(section, dict):
        raise ConfigError(f"Project '{project}' is missing its '{key}' section")
    return section


def _require(project: str, section: Dict, section_name: str, *keys: str) -> str:
    """Return the first present key of a section.

    Several keys name the same setting across config file versions.
    """
    for key in keys:
        value = section.get(key)
        if value is not None and value != "":
            return str(value)
    raise ConfigError(f"Project '{project}' is missing '{section_name}.{keys[0]}'")


def parse_project(name: str, data: Any) -> ProjectConfig:
    """Convert one raw projects.yml entry into a ProjectConfig.

    Args:
        name: Project name
        data: The entry's parsed YAML value

    Returns:
        ProjectConfig with resolved paths

    Raises:
        ConfigError: If a section or required key is missing
    """
    if not isinstance(data, dict):
        raise ConfigError(f"Project '{name}' must be a mapping")

    source = _section(name, data, 'source')
    target = _section(name, data, 'target')

    source_base = Path(_require(name, source, 'source', 'base_dir')).expanduser()
    draft_dir = _require(name, source, 'source', 'draft_posts_dir', 'draft_dir')
    published_dir = _require(name, source, 'source', 'published_posts_dir')
    source_assets = source.get('assets_dir')

    target_base = Path(_require(name, target, 'target', 'base_dir')).expanduser()
    content_dir = _require(name, target, 'target', 'content_dir')
    target_assets = _require(name, target, 'target', 'asset_dir', 'assets_dir')

    rewrite = target.get('rewrite') or REWRITE_WIKILINK
    if rewrite not in REWRITE_MODES:
        modes = ', '.join(REWRITE_MODES)
        raise ConfigError(f"Project '{name}' has unknown rewrite '{rewrite}' (expected one of: {modes})")

    asset_prefix = target.get('asset_prefix')

    return ProjectConfig(
        name=name,
        draft_dir=_resolve_dir(source_base, draft_dir),
        published_dir=_resolve_dir(source_base, published_dir),
        source_asset_dir=_resolve_dir(source_base, source_assets) if source_assets else None,
        asset_prefix_key=source.get('asset_prefix_key') or DEFAULT_ASSET_PREFIX_KEY,
        target=TargetInfo(
            base_dir=target_base,
            content_dir=_resolve_dir(target_base, content_dir),
            asset_dir=_resolve_dir(target_base, target_assets),
            asset_prefix=DEFAULT_ASSET_PREFIX if asset_prefix is None else str(asset_prefix),
            rewrite=rewrite,
        ),
        active=bool(data.get('active', False)),
    )


def load_projects_config(paths: ConfigPaths) -> List[ProjectConfig]:
    """Load every project defined in projects.yml.

    An empty file defines no projects.

    Raises:
        ConfigError: If the file is missing, unreadable or malformed
    """
    data = _read_yaml(paths.projects_file)
    if data is None:
        return []
    if not isinstance(data, dict):
        raise ConfigError(
            f"Config file {paths.projects_file} must map project names to settings. {REPAIR_HINT}"
        )
    return [parse_project(str(name), entry) for name, entry in data.items()]


def load_settings(paths: ConfigPaths) -> Settings:
    """Load settings.yml. A missing or empty file means no active project.

    Raises:
        ConfigError: If the file exists but is unreadable or malformed
    """
    if not paths.settings_file.exists():
        return Settings()

    data = _read_yaml(paths.settings_file)
    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {paths.settings_file} is malformed. {REPAIR_HINT}")

    active = data.get(ACTIVE_PROJECT_KEY)
    return Settings(active_project=str(active) if active else None)


def save_settings(paths: ConfigPaths, settings: Settings) -> None:
    """Write settings.yml, replacing its previous contents."""
    try:
        paths.config_dir.mkdir(parents=True, exist_ok=True)
        with open(paths.settings_file, 'w', encoding='utf-8') as f:
            yaml.safe_dump(settings.to_dict(), f, default_flow_style=False)
    except OSError as e:
        raise ConfigError(f"Cannot write settings file {paths.settings_file}: {e}") from e
    logger.debug("Saved settings to %s", paths.settings_file)


def init_config_dir(paths: ConfigPaths) -> List[Path]:
    """Create the config directory and empty config files where missing.

    Returns:
        The paths that were created
    """
    created: List[Path] = []
    try:
        if not paths.config_dir.is_dir():
            paths.config_dir.mkdir(parents=True)
            created.append(paths.config_dir)
        for file_path in (paths.projects_file, paths.settings_file):
            if not file_path.exists():
                file_path.touch()
                created.append(file_path)
    except OSError as e:
        raise ConfigError(f"Cannot create config directory {paths.config_dir}: {e}") from e
    return created


def reset_config_dir(paths: ConfigPaths) -> bool:
    """Delete the config directory.

    Returns:
        True if a directory was removed, False if there was none
    """
    if not paths.config_dir.exists():
        return False
    try:
        shutil.rmtree(paths.config_dir)
    except OSError as e:
        raise ConfigError(f"Cannot remove config directory {paths.config_dir}: {e}") from e
    return True
