"""
lazydraft - Move drafts into a static site

A small command-line tool that manages drafts kept in a notes directory:
- Staging drafts into a static site's content directory
- Rewriting Obsidian image embeds to markdown images
- Updating and unstaging staged drafts
- Archiving published drafts
"""

from lazydraft.core.models import Post, TargetInfo, normalize_post_name
from lazydraft.core.discovery import DraftDiscovery
from lazydraft.core.processor import ContentProcessor
from lazydraft.core.project import Project
from lazydraft.core.registry import ProjectRegistry
from lazydraft.core.pipeline import PublishResult, StagingPipeline
from lazydraft.exceptions import LazyDraftError

__version__ = "1.0.7"

__all__ = [
    "Post",
    "TargetInfo",
    "normalize_post_name",
    "DraftDiscovery",
    "ContentProcessor",
    "Project",
    "ProjectRegistry",
    "PublishResult",
    "StagingPipeline",
    "LazyDraftError",
]
