"""Staging pipeline: moves drafts between draft, staged and published."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple, TypeVar

from lazydraft.core.models import Post
from lazydraft.core.project import Project
from lazydraft.exceptions import SelectionError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def parse_selection(raw: str, count: int) -> int:
    """Validate a 1-based user choice and convert it to a list index.

    Args:
        raw: The user's input
        count: Length of the list being chosen from

    Returns:
        The 0-based index

    Raises:
        SelectionError: If the input is not an integer in [1, count]
    """
    try:
        choice = int(str(raw).strip())
    except ValueError:
        raise SelectionError("invalid choice")
    if choice < 1 or choice > count:
        raise SelectionError("invalid choice")
    return choice - 1


def select(items: Sequence[T], raw: str) -> T:
    """Pick an item from a list with a 1-based user choice."""
    return items[parse_selection(raw, len(items))]


@dataclass
class PublishResult:
    """Result of a publish operation."""
    post: Post
    staged_path: Path
    archived_path: Path


class StagingPipeline:
    """Runs the stage, update, unstage and publish transitions for a project.

    A draft's state is read from the filesystem: it is staged when its
    normalized name is in the target content directory. Multi-step
    transitions are not rolled back when a later step fails.
    """

    def __init__(self, project: Project):
        self.project = project

    def draft_listing(self) -> List[Tuple[Post, bool]]:
        """Every draft paired with whether it is staged."""
        staged = self.project.staged_names()
        return [(post, post.target_name in staged) for post in self.project.posts]

    def staged_posts(self) -> List[Post]:
        return self.project.get_staged_posts()

    def choose_staged(self, raw: str) -> Tuple[Post, int]:
        """Resolve a choice from the staged list to a post and its draft index.

        The index is recovered by name so it stays correct even when the
        staged list is ordered differently from the draft list.

        Raises:
            SelectionError: If nothing is staged or the choice is invalid
        """
        staged = self.staged_posts()
        if not staged:
            raise SelectionError("there are no staged drafts")
        post = select(staged, raw)
        return post, self.project.index_of(post)

    def stage(self, raw: str) -> Post:
        """Stage the draft chosen from the full draft list."""
        if not self.project.posts:
            raise SelectionError("there are no drafts")
        index = parse_selection(raw, len(self.project.posts))
        self.project.copy_post_to_target(index)
        post = self.project.posts[index]
        logger.info("Staged %s", post.name)
        return post

    def update(self, raw: str) -> Post:
        """Replace a staged post with its latest draft."""
        post, index = self.choose_staged(raw)
        self.project.update_post_to_latest(post, index)
        logger.info("Updated %s", post.name)
        return post

    def unstage(self, raw: str) -> Post:
        """Remove a staged post from the target."""
        post, _ = self.choose_staged(raw)
        self.project.remove_post_from_target(post)
        logger.info("Unstaged %s", post.name)
        return post

    def publish(self, raw: str) -> PublishResult:
        """Publish a staged post.

        Steps, in order: update the staged copy to the latest draft, archive
        the draft, delete it from the drafts. The rendered copy stays in the
        target content directory; with the draft gone it no longer counts
        as staged.
        """
        post, index = self.choose_staged(raw)
        staged_path = self.project.update_post_to_latest(post, index)
        archived_path = self.project.copy_draft_to_published(post)
        self.project.remove_post_from_drafts(post)
        logger.info("Published %s", post.name)
        return PublishResult(post=post, staged_path=staged_path, archived_path=archived_path)
