"""Asset pipeline orchestration.

This module provides the main interface for serving concatenated assets.
A request is resolved, keyed, checked against the cache and either served
from the cached artifact or rebuilt.
"""

import dataclasses
import logging
from collections.abc import Sequence
from pathlib import Path

from .cache_store import CacheStore
from .config import PipelineConfig
from .core.cache_key import compute_key
from .core.paths import join_path
from .core.types import AssetRequest, BuildResult
from .resolver import AssetResolver

logger = logging.getLogger(__name__)


class AssetPipeline:
    """Main interface for building and serving cached asset bundles.

    The pipeline only holds configuration. Each call creates its own
    resolver, so no state is shared between requests except the files on
    disk.

    Example:
        >>> config = PipelineConfig(Path("public/js"), fallback_directories=[Path("vendor")])
        >>> pipeline = AssetPipeline(config)
        >>> result = pipeline.process(["jquery.js", "app.js"], options=["min"])
        >>> result.location
        'public/js/cache/min.jquery+app.js'
    """

    def __init__(self, config: PipelineConfig):
        # Setters act on this copy, never on the caller's config
        self.config = dataclasses.replace(
            config,
            fallback_directories=list(config.fallback_directories),
            default_options=list(config.default_options),
        )

    @property
    def cache_path(self) -> Path:
        """Artifact directory: the cache directory inside the asset directory."""
        return Path(join_path([self.config.asset_directory, self.config.cache_directory]))

    def set_asset_directory(self, directory: Path, fallbacks: Sequence[Path] | None = None) -> None:
        """Replace the asset directory and its fallback directories.

        The cache location moves with the asset directory.
        """
        self.config.asset_directory = Path(directory)
        self.config.fallback_directories = [Path(p) for p in fallbacks or []]

    def set_cache_directory(self, directory: str) -> None:
        self.config.cache_directory = directory

    def process(self, asset_names: Sequence[str], options: Sequence[str] | None = None) -> BuildResult:
        """Serve the artifact for a request, rebuilding it when stale.

        Args:
            asset_names: Asset names in request order
            options: Option tokens for the cache key; defaults to the
                configured default options

        Returns:
            BuildResult with the artifact location and content

        Raises:
            MissingAssetError: If any asset cannot be found
            ValueError: If no asset names are given
            OSError: If reading or writing fails
        """
        request = AssetRequest(
            asset_names=tuple(asset_names),
            options=tuple(self.config.default_options if options is None else options),
        )
        return self.process_request(request)

    def process_request(self, request: AssetRequest) -> BuildResult:
        """Serve the artifact for an already built AssetRequest."""
        cache_key = compute_key(request.options, request.asset_names)

        resolver = AssetResolver(self.config.asset_directory, self.config.fallback_directories)
        resolved = resolver.resolve(request.asset_names)

        store = CacheStore(self.cache_path)

        if store.is_valid(resolved, cache_key):
            return BuildResult(
                location=store.location(cache_key),
                cache_key=cache_key,
                content=store.read_cached(cache_key),
                from_cache=True,
            )

        logger.debug("Building %s from %d assets", cache_key, len(resolved))
        content, location = store.build(resolved, cache_key)
        return BuildResult(location=location, cache_key=cache_key, content=content, from_cache=False)

    def artifact_path(self, asset_names: Sequence[str], options: Sequence[str] | None = None) -> str:
        """Serve a request and return only the artifact location."""
        return self.process(asset_names, options).location
