"""Content processor for rewriting drafts into the target site."""

import logging
import shutil
from pathlib import Path
from typing import Optional

from lazydraft.core.models import REWRITE_PREFIX, REWRITE_WIKILINK, Post, TargetInfo
from lazydraft.exceptions import ConfigError, FileSystemError
from lazydraft.transforms.images import ImageTransform, asset_url, replace_prefix, wikilink_embeds

logger = logging.getLogger(__name__)


class ContentProcessor:
    """Rewrites draft content and writes it, with its assets, to the target.

    Handles:
    - Image reference rewriting (wiki-link embeds or asset folder prefix)
    - Asset copying
    - Writing the post under its normalized name
    """

    def __init__(self, target: TargetInfo, local_asset_folder: Optional[str] = None):
        """Initialize ContentProcessor.

        Args:
            target: Target directories and URL prefix
            local_asset_folder: Asset folder name used inside drafts, replaced
                by the public prefix when the rewrite policy is "prefix"
        """
        if target.rewrite not in (REWRITE_WIKILINK, REWRITE_PREFIX):
            raise ConfigError(f"Unknown rewrite policy: {target.rewrite}")
        self.target = target
        self.local_asset_folder = local_asset_folder or ""

    def transform_for(self, post: Post) -> ImageTransform:
        """Build the image transform for a post."""
        if self.target.rewrite == REWRITE_PREFIX:
            return replace_prefix(self.local_asset_folder, self.target.asset_prefix)
        return wikilink_embeds(asset_url(self.target.asset_prefix, post.slug))

    def rewrite(self, post: Post, content: str) -> str:
        """Rewrite a post's raw content for the target site.

        Args:
            post: The post the content belongs to
            content: Raw post text

        Returns:
            Content with image references rewritten
        """
        return self.transform_for(post)(content)

    def asset_target_dir(self, post: Post) -> Path:
        """Directory a post's assets are copied into."""
        if self.target.rewrite == REWRITE_PREFIX:
            return self.target.asset_dir
        return self.target.asset_dir / post.slug

    def content_target_path(self, post: Post) -> Path:
        return self.target.content_dir / post.target_name

    def write(self, post: Post) -> Path:
        """Copy a post's assets and write its rewritten content to the target.

        Args:
            post: The post to stage

        Returns:
            Path of the written content file

        Raises:
            FileSystemError: If a source cannot be read or a destination
                cannot be written
        """
        try:
            raw_content = post.read_raw()
        except (OSError, UnicodeDecodeError) as e:
            raise FileSystemError(f"Cannot read draft {post.path}: {e}") from e

        self._copy_assets(post)

        output_path = self.content_target_path(post)
        try:
            output_path.write_text(self.rewrite(post, raw_content), encoding='utf-8')
        except OSError as e:
            raise FileSystemError(f"Cannot write {output_path}: {e}") from e

        logger.info("Wrote %s", output_path)
        return output_path

    def _copy_assets(self, post: Post) -> None:
        if not post.asset_names:
            return

        destination = self.asset_target_dir(post)
        try:
            destination.mkdir(exist_ok=True)
        except OSError as e:
            raise FileSystemError(f"Cannot create asset directory {destination}: {e}") from e

        for source in post.asset_paths:
            try:
                shutil.copyfile(source, destination / source.name)
            except OSError as e:
                raise FileSystemError(f"Cannot copy asset {source}: {e}") from e
            logger.debug("Copied asset %s to %s", source.name, destination)
