"""Shared fixtures: a throwaway notes tree and static site."""

from pathlib import Path

import pytest
import yaml

from lazydraft.config import ConfigPaths, parse_project
from lazydraft.core.registry import build_project

HELLO_WORLD = """---
title: Hello World
asset-prefix: hello
---

# Hello World

![[hello-cover.png]]

See [[Second Post]] and ![[hello-diagram.svg]].
"""

SECOND_POST = """---
title: Second Post
---

No images here.
"""


def project_entry(root: Path, **target_overrides) -> dict:
    """Raw projects.yml entry for the tree built by make_blog."""
    target = {
        'base_dir': str(root / "site"),
        'content_dir': "content/posts",
        'asset_dir': "static/img",
        'asset_prefix': "/img/",
    }
    target.update(target_overrides)
    return {
        'source': {
            'base_dir': str(root / "notes"),
            'draft_posts_dir': "drafts",
            'published_posts_dir': "published",
            'assets_dir': "assets",
        },
        'target': target,
    }


def make_blog(root: Path) -> Path:
    """Create a notes tree with two drafts and an empty site."""
    drafts = root / "notes" / "drafts"
    assets = root / "notes" / "assets"
    drafts.mkdir(parents=True)
    assets.mkdir()
    (root / "notes" / "published").mkdir()
    (root / "site" / "content" / "posts").mkdir(parents=True)
    (root / "site" / "static" / "img").mkdir(parents=True)

    (drafts / "Hello World.md").write_text(HELLO_WORLD)
    (drafts / "Second Post.md").write_text(SECOND_POST)
    (assets / "hello-cover.png").write_bytes(b"\x89PNG cover")
    (assets / "hello-diagram.svg").write_bytes(b"<svg/>")
    (assets / "other.png").write_bytes(b"\x89PNG other")
    return root


@pytest.fixture
def blog_root(tmp_path: Path) -> Path:
    return make_blog(tmp_path)


@pytest.fixture
def blog_project(blog_root: Path):
    """The 'blog' Project built from the fixture tree."""
    return build_project(parse_project("blog", project_entry(blog_root)))


@pytest.fixture
def config_paths(blog_root: Path) -> ConfigPaths:
    """A config directory defining 'blog' and 'notes', with 'blog' active."""
    paths = ConfigPaths(blog_root / "config")
    paths.config_dir.mkdir()

    other = blog_root / "other"
    (other / "drafts").mkdir(parents=True)
    (other / "site" / "content").mkdir(parents=True)
    notes_entry = {
        'source': {
            'base_dir': str(other),
            'draft_dir': "drafts",
            'published_posts_dir': "published",
        },
        'target': {
            'base_dir': str(other / "site"),
            'content_dir': "content",
            'assets_dir': "static",
        },
    }

    paths.projects_file.write_text(yaml.safe_dump({
        'blog': project_entry(blog_root),
        'notes': notes_entry,
    }))
    paths.settings_file.write_text("activeProject: blog\n")
    return paths
