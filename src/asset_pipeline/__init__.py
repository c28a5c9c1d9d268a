"""Asset Pipeline - cached asset concatenation.

This package resolves ordered lists of asset names against a primary
directory and fallback directories, and serves a concatenated artifact
that is rebuilt only when one of its inputs changes.
"""

# Core library interface
from .cache_store import CacheStore
from .config import PipelineConfig, load_config
from .pipeline import AssetPipeline
from .resolver import AssetResolver

# Core utilities
from .core import AssetRequest, BuildResult, CachedArtifact, ResolvedAsset
from .core import AssetPipelineError, ConfigurationError, MissingAssetError
from .core import compute_key, join_path, strip_extensions

# CLI interface
from .cli import main

__version__ = "0.1.0"

__all__ = [
    # Primary library interface
    "AssetPipeline",
    "AssetResolver",
    "CacheStore",
    "PipelineConfig",
    "load_config",
    # Core utilities
    "AssetRequest",
    "BuildResult",
    "CachedArtifact",
    "ResolvedAsset",
    "compute_key",
    "join_path",
    "strip_extensions",
    # Errors
    "AssetPipelineError",
    "ConfigurationError",
    "MissingAssetError",
    # CLI
    "main",
]
