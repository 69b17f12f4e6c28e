"""Core components for lazydraft."""

from lazydraft.core.models import Post, TargetInfo, normalize_post_name
from lazydraft.core.discovery import DraftDiscovery
from lazydraft.core.processor import ContentProcessor
from lazydraft.core.project import Project
from lazydraft.core.registry import ProjectRegistry, build_project
from lazydraft.core.pipeline import PublishResult, StagingPipeline, parse_selection

__all__ = [
    "Post",
    "TargetInfo",
    "normalize_post_name",
    "DraftDiscovery",
    "ContentProcessor",
    "Project",
    "ProjectRegistry",
    "build_project",
    "PublishResult",
    "StagingPipeline",
    "parse_selection",
]
