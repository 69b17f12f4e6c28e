"""Tests for the staging pipeline."""

import pytest

from lazydraft.config import parse_project
from lazydraft.core.pipeline import StagingPipeline, parse_selection, select
from lazydraft.core.registry import build_project
from lazydraft.exceptions import SelectionError
from tests.conftest import project_entry


class TestParseSelection:
    """Tests for 1-based selection validation."""

    def test_first(self):
        assert parse_selection("1", 3) == 0

    def test_last(self):
        assert parse_selection("3", 3) == 2

    def test_whitespace_allowed(self):
        assert parse_selection(" 2\n", 3) == 1

    @pytest.mark.parametrize("raw", ["0", "-1", "4", "abc", "", "1.5"])
    def test_invalid(self, raw):
        with pytest.raises(SelectionError, match="invalid choice"):
            parse_selection(raw, 3)

    def test_empty_list(self):
        with pytest.raises(SelectionError):
            parse_selection("1", 0)

    def test_select_returns_item(self):
        assert select(["a", "b"], "2") == "b"


class TestStagingPipeline:
    """Tests for StagingPipeline transitions."""

    @pytest.fixture
    def pipeline(self, blog_project):
        return StagingPipeline(blog_project)

    def content_files(self, pipeline):
        return sorted(pipeline.project.get_target_content_dir_files())

    @pytest.mark.parametrize("choice", ["1", "2"])
    def test_stage_includes_post_exactly_once(self, pipeline, choice):
        post = pipeline.stage(choice)

        staged = pipeline.staged_posts()

        assert [p.name for p in staged].count(post.name) == 1

    def test_stage_example_scenario(self, pipeline):
        pipeline.stage("1")

        assert self.content_files(pipeline) == ["hello-world.md"]
        listing = [(post.name, staged) for post, staged in pipeline.draft_listing()]
        assert listing == [("Hello World.md", True), ("Second Post.md", False)]

        pipeline.unstage("1")

        assert self.content_files(pipeline) == []

    def test_stage_invalid_choice(self, pipeline):
        with pytest.raises(SelectionError):
            pipeline.stage("3")
        assert self.content_files(pipeline) == []

    def test_stage_with_no_drafts(self, pipeline):
        pipeline.project.posts = []
        with pytest.raises(SelectionError, match="no drafts"):
            pipeline.stage("1")

    def test_update_leaves_single_latest_copy(self, pipeline):
        pipeline.stage("2")
        post = pipeline.project.posts[1]
        post.path.write_text("Latest")

        pipeline.update("1")
        pipeline.update("1")

        assert self.content_files(pipeline) == ["second-post.md"]
        output = pipeline.project.target.content_dir / "second-post.md"
        assert output.read_text() == "Latest"

    def test_update_resolves_draft_index_by_name(self, pipeline):
        pipeline.stage("2")
        post = pipeline.project.posts[1]
        post.path.write_text("Changed")

        updated = pipeline.update("1")

        assert updated.name == "Second Post.md"
        assert not (pipeline.project.target.content_dir / "hello-world.md").exists()

    def test_unstage_removes_content_and_assets(self, pipeline):
        pipeline.stage("1")

        pipeline.unstage("1")

        target = pipeline.project.target
        assert self.content_files(pipeline) == []
        assert list(target.asset_dir.iterdir()) == []
        assert pipeline.staged_posts() == []

    @pytest.mark.parametrize("operation", ["update", "unstage", "publish"])
    def test_nothing_staged(self, pipeline, operation):
        with pytest.raises(SelectionError, match="no staged drafts"):
            getattr(pipeline, operation)("1")

    def test_staged_choice_out_of_range(self, pipeline):
        pipeline.stage("1")
        with pytest.raises(SelectionError, match="invalid choice"):
            pipeline.unstage("2")

    def test_publish(self, pipeline, blog_root):
        pipeline.stage("1")
        post = pipeline.project.posts[0]
        latest = post.read_raw() + "\nOne more line.\n"
        post.path.write_text(latest)

        result = pipeline.publish("1")

        assert result.post.name == "Hello World.md"
        assert "Hello World.md" not in pipeline.project.get_post_names()
        assert not post.path.exists()
        assert result.archived_path.read_text() == latest
        assert pipeline.staged_posts() == []
        assert "One more line." in result.staged_path.read_text()

    def test_publish_visible_after_rescan(self, pipeline, blog_root):
        pipeline.stage("1")
        pipeline.publish("1")

        rescanned = build_project(parse_project("blog", project_entry(blog_root)))
        assert rescanned.get_post_names() == ["Second Post.md"]
        assert rescanned.get_staged_posts() == []

    def test_publish_keeps_other_drafts_assets(self, blog_root):
        drafts = blog_root / "notes" / "drafts"
        assets = blog_root / "notes" / "assets"
        (drafts / "Second Post.md").write_text("asset-prefix: hello-world\n![[hello-world-map.png]]\n")
        (assets / "hello-world-map.png").write_bytes(b"map")
        pipeline = StagingPipeline(build_project(parse_project("blog", project_entry(blog_root))))

        pipeline.stage("1")
        pipeline.publish("1")

        assert (assets / "hello-world-map.png").exists()
        pipeline.stage("1")
        staged_asset = pipeline.project.target.asset_dir / "second-post" / "hello-world-map.png"
        assert staged_asset.read_bytes() == b"map"
