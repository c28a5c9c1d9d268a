"""Tests for the asset pipeline.

This module tests the request flow end to end:
- Building an artifact on first request
- Serving from cache when inputs are unchanged
- Rebuilding when an input changes
- Failing atomically on missing assets
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from asset_pipeline import AssetPipeline, MissingAssetError, PipelineConfig
from asset_pipeline.cache_store import CacheStore
from asset_pipeline.core.types import AssetRequest

from conftest import BASE_MTIME_NS


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def pipeline(tmp_path: Path, asset_dir: Path, write_file) -> AssetPipeline:
    """Pipeline over a small asset tree with two fallback directories."""
    write_file(asset_dir / "a.js", "AAA")
    write_file(asset_dir / "b.js", "BBB")
    write_file(tmp_path / "vendor" / "jquery" / "jquery.js", "$$$")
    write_file(tmp_path / "shared" / "jquery.js", "shared")

    config = PipelineConfig(
        asset_directory=asset_dir,
        fallback_directories=[tmp_path / "vendor", tmp_path / "shared"],
    )
    return AssetPipeline(config)


# ============================================================================
# TestProcess
# ============================================================================

class TestProcess:
    """Tests for the build-or-serve flow."""

    def test_first_request_builds(self, pipeline: AssetPipeline, asset_dir: Path) -> None:
        """Test that the first request concatenates and writes the artifact."""
        result = pipeline.process(["a.js", "b.js"])

        assert result.from_cache is False
        assert result.content == b"AAABBB"
        assert result.cache_key == "a+b.js"
        assert result.location == os.path.join(str(asset_dir / "cache"), "a+b.js")
        assert (asset_dir / "cache" / "a+b.js").read_bytes() == b"AAABBB"

    def test_second_request_is_served_from_cache(self, pipeline: AssetPipeline, asset_dir: Path) -> None:
        """Test that an unchanged request reads but never writes."""
        first = pipeline.process(["a.js", "b.js"])
        artifact_mtime = (asset_dir / "cache" / "a+b.js").stat().st_mtime_ns

        with patch.object(CacheStore, "write") as write:
            second = pipeline.process(["a.js", "b.js"])

        write.assert_not_called()
        assert second.from_cache is True
        assert second.content == first.content
        assert second.location == first.location
        assert (asset_dir / "cache" / "a+b.js").stat().st_mtime_ns == artifact_mtime

    def test_stale_input_triggers_rebuild(self, pipeline: AssetPipeline, asset_dir: Path) -> None:
        """Test that bumping an input's mtime rebuilds and overwrites."""
        pipeline.process(["a.js", "b.js"])
        artifact = asset_dir / "cache" / "a+b.js"

        (asset_dir / "b.js").write_bytes(b"CHANGED")
        newer = artifact.stat().st_mtime_ns + 10**9
        os.utime(asset_dir / "b.js", ns=(newer, newer))

        result = pipeline.process(["a.js", "b.js"])

        assert result.from_cache is False
        assert result.content == b"AAACHANGED"
        assert artifact.read_bytes() == b"AAACHANGED"

    def test_equal_timestamp_is_served_from_cache(self, pipeline: AssetPipeline, asset_dir: Path) -> None:
        """Test that a tie between input and artifact is a cache hit."""
        pipeline.process(["a.js"])
        os.utime(asset_dir / "cache" / "a.js", ns=(BASE_MTIME_NS, BASE_MTIME_NS))

        result = pipeline.process(["a.js"])

        assert result.from_cache is True

    def test_options_prefix_the_key(self, pipeline: AssetPipeline, asset_dir: Path) -> None:
        """Test that options change the artifact name but not the content."""
        result = pipeline.process(["a.js", "b.js"], options=["min", "42"])

        assert result.cache_key == "min.42.a+b.js"
        assert (asset_dir / "cache" / "min.42.a+b.js").read_bytes() == b"AAABBB"

    def test_default_options_apply_when_none_given(self, pipeline: AssetPipeline) -> None:
        """Test that configured default options are used."""
        pipeline.config.default_options = ["min"]

        assert pipeline.process(["a.js"]).cache_key == "min.a.js"
        assert pipeline.process(["a.js"], options=[]).cache_key == "a.js"

    def test_fallback_assets_are_included(self, pipeline: AssetPipeline) -> None:
        """Test that assets from the first matching fallback are concatenated."""
        result = pipeline.process(["jquery.js", "a.js"])

        assert result.cache_key == "jquery+a.js"
        assert result.content == b"$$$AAA"

    def test_process_request(self, pipeline: AssetPipeline) -> None:
        """Test that a prepared AssetRequest is served the same way."""
        result = pipeline.process_request(AssetRequest(asset_names=["b.js", "a.js"]))

        assert result.content == b"BBBAAA"

    def test_artifact_path(self, pipeline: AssetPipeline, asset_dir: Path) -> None:
        """Test that only the location is returned."""
        assert pipeline.artifact_path(["a.js"]) == os.path.join(str(asset_dir / "cache"), "a.js")


# ============================================================================
# TestMissingAssets
# ============================================================================

class TestMissingAssets:
    """Tests for whole-request failure on unresolvable assets."""

    def test_missing_asset_builds_and_reads_nothing(self, pipeline: AssetPipeline, asset_dir: Path) -> None:
        """Test that one missing name fails the request before any cache access."""
        with patch.object(CacheStore, "build") as build, patch.object(CacheStore, "read_cached") as read:
            with pytest.raises(MissingAssetError) as exc_info:
                pipeline.process(["a.js", "missing.js", "b.js"])

        assert exc_info.value.asset == "missing.js"
        build.assert_not_called()
        read.assert_not_called()
        assert list((asset_dir / "cache").iterdir()) == []

    def test_empty_request_is_rejected(self, pipeline: AssetPipeline) -> None:
        """Test that a request without names is a ValueError."""
        with pytest.raises(ValueError):
            pipeline.process([])


# ============================================================================
# TestDirectories
# ============================================================================

class TestDirectories:
    """Tests for changing directories after construction."""

    def test_setters_leave_shared_config_untouched(self, tmp_path: Path, asset_dir: Path) -> None:
        """Test that pipelines built from one config do not move each other."""
        config = PipelineConfig(
            asset_directory=asset_dir,
            fallback_directories=[tmp_path / "vendor"],
            default_options=["min"],
        )
        first = AssetPipeline(config)
        second = AssetPipeline(config)

        first.set_asset_directory(tmp_path / "other", fallbacks=[tmp_path / "shared"])
        first.set_cache_directory("built")
        first.config.default_options.append("v2")

        assert config.asset_directory == asset_dir
        assert config.cache_directory == "cache"
        assert config.fallback_directories == [tmp_path / "vendor"]
        assert config.default_options == ["min"]
        assert second.cache_path == asset_dir / "cache"
        assert second.config.fallback_directories == [tmp_path / "vendor"]

    def test_cache_path_follows_asset_directory(self, pipeline: AssetPipeline, tmp_path: Path) -> None:
        """Test that the cache directory is relative to the asset directory."""
        pipeline.set_asset_directory(tmp_path / "other", fallbacks=[tmp_path / "vendor"])

        assert pipeline.cache_path == tmp_path / "other" / "cache"
        assert pipeline.config.fallback_directories == [tmp_path / "vendor"]

    def test_set_cache_directory(self, pipeline: AssetPipeline, asset_dir: Path) -> None:
        """Test that artifacts move to the new cache directory."""
        (asset_dir / "built").mkdir()
        pipeline.set_cache_directory("built")

        result = pipeline.process(["a.js"])

        assert result.location == os.path.join(str(asset_dir / "built"), "a.js")

    def test_empty_cache_directory_uses_asset_directory(self, pipeline: AssetPipeline, asset_dir: Path) -> None:
        """Test that an empty cache directory stores artifacts beside the assets."""
        pipeline.set_cache_directory("")

        result = pipeline.process(["a.js", "b.js"])

        assert (asset_dir / "a+b.js").read_bytes() == b"AAABBB"
        assert result.location == os.path.join(str(asset_dir), "a+b.js")
