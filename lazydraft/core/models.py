"""Data models for lazydraft."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

DEFAULT_ASSET_PREFIX = "/img/"

REWRITE_WIKILINK = "wikilink"
REWRITE_PREFIX = "prefix"
REWRITE_MODES = (REWRITE_WIKILINK, REWRITE_PREFIX)


def normalize_post_name(name: str) -> str:
    """Convert a draft file name to the name it is staged under.

    Lowercases and replaces spaces with hyphens, nothing else:
    ``"Hello World.md"`` becomes ``"hello-world.md"``.
    """
    return name.lower().replace(" ", "-")


@dataclass
class Post:
    """A draft post and the assets that travel with it.

    Does NOT store content - read it via read_raw() when needed.
    """
    name: str
    base_dir: Path
    asset_dir: Optional[Path] = None
    asset_names: List[str] = field(default_factory=list)
    bundle_dir: Optional[Path] = None

    @property
    def path(self) -> Path:
        """Absolute path of the post's markdown file."""
        return self.base_dir / self.name

    @property
    def asset_paths(self) -> List[Path]:
        if self.asset_dir is None:
            return []
        return [self.asset_dir / name for name in self.asset_names]

    @property
    def target_name(self) -> str:
        """File name of the post inside the target content directory."""
        return normalize_post_name(self.name)

    @property
    def slug(self) -> str:
        """Normalized stem, used to name the post's target asset folder."""
        return normalize_post_name(Path(self.name).stem)

    @property
    def is_bundle(self) -> bool:
        return self.bundle_dir is not None

    def read_raw(self) -> str:
        """Read file contents on demand."""
        return self.path.read_text(encoding='utf-8')


@dataclass
class TargetInfo:
    """Where staged posts and their assets are written.

    Attributes:
        base_dir: Root of the static site
        content_dir: Directory receiving rendered markdown
        asset_dir: Directory receiving copied assets
        asset_prefix: Public URL prefix for assets
        rewrite: Image reference rewrite policy (wikilink or prefix)
    """
    base_dir: Path
    content_dir: Path
    asset_dir: Path
    asset_prefix: str = DEFAULT_ASSET_PREFIX
    rewrite: str = REWRITE_WIKILINK
