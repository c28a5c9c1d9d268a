"""Exceptions raised by the asset pipeline.

Filesystem failures are not wrapped: ``OSError`` raised while resolving,
reading or writing reaches the caller unchanged.
"""

from collections.abc import Sequence
from pathlib import Path


class AssetPipelineError(Exception):
    """Base class for asset pipeline errors."""


class MissingAssetError(AssetPipelineError, LookupError):
    """A requested asset exists neither in the asset directory nor in any fallback.

    Attributes:
        asset: The logical asset name that could not be found
        searched: Directories that were searched, in order
    """

    def __init__(self, asset: str, searched: Sequence[Path] = ()):
        self.asset = asset
        self.searched = tuple(searched)
        locations = ", ".join(str(path) for path in self.searched) or "no directories"
        super().__init__(f"Asset not found: '{asset}' (searched {locations})")


class ConfigurationError(AssetPipelineError, ValueError):
    """A pipeline configuration file is malformed or violates the schema."""
