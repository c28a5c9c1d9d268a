"""Core utilities for asset resolution and caching.

This package contains the data types, error taxonomy, path helpers,
cache key generation and configuration validation used by the resolver,
the cache store and the pipeline.
"""

from .cache_key import compute_key
from .errors import AssetPipelineError, ConfigurationError, MissingAssetError
from .paths import join_path, strip_extension, strip_extensions
from .types import AssetRequest, BuildResult, CachedArtifact, ResolvedAsset
from .validator import validate_config, validate_config_with_error_details

__all__ = [
    "AssetPipelineError",
    "AssetRequest",
    "BuildResult",
    "CachedArtifact",
    "ConfigurationError",
    "MissingAssetError",
    "ResolvedAsset",
    "compute_key",
    "join_path",
    "strip_extension",
    "strip_extensions",
    "validate_config",
    "validate_config_with_error_details",
]
