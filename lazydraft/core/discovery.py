"""Draft discovery module for finding posts and their assets."""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from lazydraft.core.models import Post
from lazydraft.exceptions import DiscoveryError

logger = logging.getLogger(__name__)

DEFAULT_ASSET_PREFIX_KEY = "asset-prefix"


class DraftDiscovery:
    """Discovers draft posts and their assets in a source directory.

    Two layouts are recognised side by side:

    - A markdown file directly in the draft directory is a single-file post.
      Its assets live in the shared asset directory and are the files whose
      names start with the prefix the post declares on an ``asset-prefix:``
      line.
    - A subdirectory is a bundle post: its markdown file is the post and
      every other file in it is an asset.
    """

    def __init__(
        self,
        draft_dir: Path,
        asset_dir: Optional[Path] = None,
        asset_prefix_key: str = DEFAULT_ASSET_PREFIX_KEY,
    ):
        """Initialize DraftDiscovery.

        Args:
            draft_dir: Directory holding the drafts
            asset_dir: Shared asset directory for single-file posts
            asset_prefix_key: Key of the line declaring a post's asset prefix
        """
        self.draft_dir = Path(draft_dir)
        self.asset_dir = Path(asset_dir) if asset_dir is not None else None
        self.asset_prefix_key = asset_prefix_key

    def discover_all(self) -> List[Post]:
        """Find all draft posts.

        Returns:
            Posts in file-name order

        Raises:
            DiscoveryError: If a directory cannot be listed, a post cannot be
                read, or two posts would be staged under the same name
        """
        shared_assets = self._list_shared_assets()
        posts: List[Post] = []
        seen: Dict[str, Path] = {}

        for entry in self._list_dir(self.draft_dir):
            if entry.name.startswith('.'):
                continue

            if entry.is_dir():
                post = self._scan_bundle(entry)
            elif entry.is_file() and entry.suffix.lower() == '.md':
                post = self._scan_file_post(entry, shared_assets)
            else:
                logger.debug("Ignoring non-markdown entry %s", entry)
                continue

            if post is None:
                continue

            if post.target_name in seen:
                raise DiscoveryError(
                    f"Drafts {seen[post.target_name]} and {post.path} "
                    f"would both be staged as '{post.target_name}'"
                )
            seen[post.target_name] = post.path
            posts.append(post)

        return posts

    def _scan_file_post(self, file_path: Path, shared_assets: List[str]) -> Post:
        prefix = self.read_asset_prefix(self._read_text(file_path))
        assets: List[str] = []
        if prefix:
            assets = [name for name in shared_assets if name.startswith(prefix)]

        return Post(
            name=file_path.name,
            base_dir=file_path.parent,
            asset_dir=self.asset_dir,
            asset_names=assets,
        )

    def _scan_bundle(self, bundle_dir: Path) -> Optional[Post]:
        entries = [e for e in self._list_dir(bundle_dir) if not e.name.startswith('.')]
        markdown = [e for e in entries if e.is_file() and e.suffix.lower() == '.md']

        if not markdown:
            logger.warning("Skipping %s: no markdown file found", bundle_dir)
            return None

        post_file = markdown[0]
        if len(markdown) > 1:
            extra = ', '.join(e.name for e in markdown[1:])
            logger.warning("Using %s as the post in %s; ignoring %s", post_file.name, bundle_dir, extra)
        assets = [e.name for e in entries if e.is_file() and e not in markdown]

        return Post(
            name=post_file.name,
            base_dir=bundle_dir,
            asset_dir=bundle_dir,
            asset_names=assets,
            bundle_dir=bundle_dir,
        )

    def read_asset_prefix(self, content: str) -> Optional[str]:
        """Extract the asset prefix a post declares.

        Scans for a line containing ``<asset_prefix_key>:``. The last such
        line wins.

        Args:
            content: Raw post text

        Returns:
            The declared prefix, or None if the post declares none
        """
        marker = f"{self.asset_prefix_key}:"
        prefix = None
        for line in content.splitlines():
            if marker in line:
                value = line.split(marker, 1)[1].strip().strip('"\'')
                prefix = value or None
        return prefix

    def _list_shared_assets(self) -> List[str]:
        if self.asset_dir is None:
            return []
        return [e.name for e in self._list_dir(self.asset_dir) if e.is_file()]

    def _list_dir(self, directory: Path) -> List[Path]:
        try:
            return sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise DiscoveryError(f"Cannot list directory {directory}: {e}") from e

    def _read_text(self, file_path: Path) -> str:
        try:
            return file_path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise DiscoveryError(f"Cannot read draft {file_path}: {e}") from e
