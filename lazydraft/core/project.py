"""Project model: one project's drafts, target and published archive."""

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Set

from lazydraft.core.models import REWRITE_PREFIX, Post, TargetInfo
from lazydraft.core.processor import ContentProcessor
from lazydraft.exceptions import FileSystemError

logger = logging.getLogger(__name__)


@dataclass
class Project:
    """A configured project and the drafts found in it.

    Staged state is never stored: every query lists the target content
    directory again, so it cannot drift from the filesystem.
    """
    name: str
    posts: List[Post]
    target: TargetInfo
    published_dir: Path
    source_asset_dir: Optional[Path] = None
    processor: ContentProcessor = field(init=False, repr=False)

    def __post_init__(self):
        local_folder = self.source_asset_dir.name if self.source_asset_dir else None
        self.processor = ContentProcessor(self.target, local_asset_folder=local_folder)

    def get_post_names(self) -> List[str]:
        return [post.name for post in self.posts]

    def get_target_content_dir_files(self) -> List[str]:
        """List the file names currently in the target content directory.

        Raises:
            FileSystemError: If the directory cannot be listed
        """
        try:
            return [p.name for p in self.target.content_dir.iterdir() if p.is_file()]
        except OSError as e:
            raise FileSystemError(
                f"Cannot list target content directory {self.target.content_dir}: {e}"
            ) from e

    def staged_names(self) -> Set[str]:
        return set(self.get_target_content_dir_files())

    def get_staged_posts(self) -> List[Post]:
        """Compute the staged view: drafts whose normalized name is in the target.

        Returns:
            Staged posts in draft-list order
        """
        target_files = self.get_target_content_dir_files()
        return [
            post for post in self.posts
            if any(target == post.target_name for target in target_files)
        ]

    def index_of(self, post: Post) -> int:
        """Find a post's index in the draft list by normalized-name match.

        Linear scan; draft lists are small.

        Raises:
            ValueError: If no draft has the post's name
        """
        for index, draft in enumerate(self.posts):
            if draft.target_name == post.target_name:
                return index
        raise ValueError(f"{post.name} is not a draft of {self.name}")

    def copy_post_to_target(self, index: int) -> Path:
        """Stage the draft at ``index``: copy its assets and rewritten content.

        Raises:
            IndexError: If index is out of range
            FileSystemError: If any read or write fails
        """
        if not 0 <= index < len(self.posts):
            raise IndexError(f"Draft index {index} out of range")
        return self.processor.write(self.posts[index])

    def remove_post_from_target(self, post: Post) -> None:
        """Delete a post's copied assets and its rendered content file.

        A failure partway leaves the target partially cleaned.

        Raises:
            FileSystemError: If the content file is missing or a deletion fails
        """
        asset_dir = self.processor.asset_target_dir(post)
        try:
            if self.target.rewrite == REWRITE_PREFIX:
                for name in post.asset_names:
                    (asset_dir / name).unlink(missing_ok=True)
            elif asset_dir.is_dir():
                shutil.rmtree(asset_dir)
        except OSError as e:
            raise FileSystemError(f"Cannot remove assets of {post.name}: {e}") from e

        content_path = self.processor.content_target_path(post)
        try:
            content_path.unlink()
        except OSError as e:
            raise FileSystemError(f"Cannot remove {content_path}: {e}") from e

        logger.info("Removed %s from target", post.name)

    def update_post_to_latest(self, post: Post, index: int) -> Path:
        """Replace the staged copy of a post with its current draft.

        Not atomic: if the copy fails the post is left unstaged.
        """
        self.remove_post_from_target(post)
        return self.copy_post_to_target(index)

    def copy_draft_to_published(self, post: Post) -> Path:
        """Archive a draft into the published directory, preserving structure.

        Bundle posts are copied as a whole directory. Single-file posts are
        copied as the markdown file, with their assets under a folder named
        like the source asset directory.

        Returns:
            Path of the archived markdown file
        """
        try:
            self.published_dir.mkdir(parents=True, exist_ok=True)
            if post.bundle_dir is not None:
                destination = self.published_dir / post.bundle_dir.name
                shutil.copytree(post.bundle_dir, destination, dirs_exist_ok=True)
                archived = destination / post.name
            else:
                archived = self.published_dir / post.name
                shutil.copy2(post.path, archived)
                if post.asset_names and post.asset_dir is not None:
                    asset_destination = self.published_dir / post.asset_dir.name
                    asset_destination.mkdir(exist_ok=True)
                    for source in post.asset_paths:
                        shutil.copy2(source, asset_destination / source.name)
        except OSError as e:
            raise FileSystemError(f"Cannot archive {post.name}: {e}") from e

        logger.info("Copied %s to %s", post.name, self.published_dir)
        return archived

    def remove_post_from_drafts(self, post: Post) -> None:
        """Delete a draft from the source tree and from the draft list.

        For single-file posts the assets in the shared asset directory are
        deleted too, except those another remaining draft also lists.
        """
        others = [p for p in self.posts if p.target_name != post.target_name]
        shared = {path for other in others for path in other.asset_paths}
        try:
            if post.bundle_dir is not None:
                shutil.rmtree(post.bundle_dir)
            else:
                post.path.unlink()
                for source in post.asset_paths:
                    if source in shared:
                        logger.debug("Keeping %s, used by another draft", source.name)
                        continue
                    source.unlink(missing_ok=True)
        except OSError as e:
            raise FileSystemError(f"Cannot remove draft {post.name}: {e}") from e

        self.posts = others
        logger.info("Removed %s from drafts", post.name)
