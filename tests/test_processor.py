"""Tests for ContentProcessor class."""

import pytest
from pathlib import Path

from lazydraft.core.models import Post, TargetInfo
from lazydraft.core.processor import ContentProcessor
from lazydraft.exceptions import ConfigError, FileSystemError


class TestContentProcessor:
    """Tests for ContentProcessor class."""

    @pytest.fixture
    def target(self, tmp_path: Path) -> TargetInfo:
        content = tmp_path / "site" / "content"
        assets = tmp_path / "site" / "static"
        content.mkdir(parents=True)
        assets.mkdir(parents=True)
        return TargetInfo(base_dir=tmp_path / "site", content_dir=content, asset_dir=assets)

    def _create_post(self, tmp_path: Path, content: str, assets=None) -> Post:
        """Helper to create a Post with real files."""
        drafts = tmp_path / "drafts"
        asset_dir = tmp_path / "assets"
        drafts.mkdir(exist_ok=True)
        asset_dir.mkdir(exist_ok=True)
        (drafts / "My Post.md").write_text(content)
        for name in assets or []:
            (asset_dir / name).write_bytes(f"data:{name}".encode())
        return Post(
            name="My Post.md",
            base_dir=drafts,
            asset_dir=asset_dir,
            asset_names=list(assets or []),
        )

    def test_rewrite_uses_post_asset_folder(self, tmp_path, target):
        processor = ContentProcessor(target)
        post = self._create_post(tmp_path, "")
        assert processor.rewrite(post, "![[a.png]]") == "![](/img/my-post/a.png)"

    def test_rewrite_with_custom_prefix(self, tmp_path, target):
        target.asset_prefix = "/static/images"
        processor = ContentProcessor(target)
        post = self._create_post(tmp_path, "")
        assert processor.rewrite(post, "![[a.png]]") == "![](/static/images/my-post/a.png)"

    def test_rewrite_prefix_policy(self, tmp_path, target):
        target.rewrite = "prefix"
        processor = ContentProcessor(target, local_asset_folder="assets/")
        post = self._create_post(tmp_path, "")
        assert processor.rewrite(post, "![](assets/a.png)") == "![](/img/a.png)"

    def test_unknown_policy_rejected(self, target):
        target.rewrite = "html"
        with pytest.raises(ConfigError):
            ContentProcessor(target)

    def test_write_creates_normalized_file(self, tmp_path, target):
        processor = ContentProcessor(target)
        post = self._create_post(tmp_path, "Hi ![[a.png]]", assets=["a.png"])

        output = processor.write(post)

        assert output == target.content_dir / "my-post.md"
        assert output.read_text() == "Hi ![](/img/my-post/a.png)"

    def test_write_copies_assets_byte_for_byte(self, tmp_path, target):
        processor = ContentProcessor(target)
        post = self._create_post(tmp_path, "x", assets=["a.png", "b.gif"])

        processor.write(post)

        copied = target.asset_dir / "my-post"
        assert sorted(p.name for p in copied.iterdir()) == ["a.png", "b.gif"]
        assert (copied / "a.png").read_bytes() == b"data:a.png"

    def test_write_without_assets_creates_no_folder(self, tmp_path, target):
        processor = ContentProcessor(target)
        post = self._create_post(tmp_path, "x")

        processor.write(post)

        assert not (target.asset_dir / "my-post").exists()

    def test_prefix_policy_copies_assets_flat(self, tmp_path, target):
        target.rewrite = "prefix"
        processor = ContentProcessor(target, local_asset_folder="assets")
        post = self._create_post(tmp_path, "x", assets=["a.png"])

        processor.write(post)

        assert (target.asset_dir / "a.png").exists()

    def test_missing_asset_raises(self, tmp_path, target):
        processor = ContentProcessor(target)
        post = self._create_post(tmp_path, "x")
        post.asset_names = ["ghost.png"]

        with pytest.raises(FileSystemError, match="ghost.png"):
            processor.write(post)

    def test_missing_post_raises(self, tmp_path, target):
        processor = ContentProcessor(target)
        post = Post(name="Nope.md", base_dir=tmp_path)

        with pytest.raises(FileSystemError):
            processor.write(post)

    def test_missing_content_dir_raises(self, tmp_path, target):
        target.content_dir = tmp_path / "absent"
        processor = ContentProcessor(target)
        post = self._create_post(tmp_path, "x")

        with pytest.raises(FileSystemError):
            processor.write(post)
