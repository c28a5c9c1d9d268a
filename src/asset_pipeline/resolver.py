"""Asset resolution.

This module maps requested asset names to concrete files. A name is first
looked up as a relative path inside the asset directory; when that fails,
the fallback directories are searched recursively for a file with the same
leaf name.
"""

import logging
import os
from collections.abc import Sequence
from pathlib import Path

from .core.errors import MissingAssetError
from .core.paths import join_path
from .core.types import ResolvedAsset

logger = logging.getLogger(__name__)


def _raise_walk_error(error: OSError) -> None:
    raise error


class AssetResolver:
    """Resolves the asset names of one request.

    A fresh resolver is created for every request; it keeps the resolved
    assets of its last call in ``resolved``.

    Example:
        >>> resolver = AssetResolver(Path("public/js"), [Path("vendor")])
        >>> assets = resolver.resolve(["jquery.js", "app.js"])
        >>> [a.path for a in assets]
        [PosixPath('vendor/jquery/jquery.js'), PosixPath('public/js/app.js')]
    """

    def __init__(self, asset_directory: Path, fallback_directories: Sequence[Path] = ()):
        """Initialize the resolver.

        Args:
            asset_directory: Primary directory names are relative to
            fallback_directories: Directories searched recursively, in order
        """
        self.asset_directory = Path(asset_directory)
        self.fallback_directories = [Path(p) for p in fallback_directories]
        self.resolved: list[ResolvedAsset] = []

    def resolve(self, asset_names: Sequence[str]) -> list[ResolvedAsset]:
        """Resolve every requested name, in request order.

        Args:
            asset_names: Logical asset names (duplicates allowed)

        Returns:
            One ResolvedAsset per name, in the same order

        Raises:
            MissingAssetError: If any name cannot be found; nothing is returned
            OSError: If a file cannot be stat'ed or a fallback directory walked
        """
        resolved: list[ResolvedAsset] = []

        for name in asset_names:
            primary_path = Path(join_path([self.asset_directory, name]))

            if primary_path.is_file():
                resolved.append(self._bind(name, primary_path, from_fallback=False))
                continue

            fallback_path = self.find_in_fallbacks(name)
            if fallback_path is None:
                logger.warning("Asset '%s' not found in %s or fallbacks", name, self.asset_directory)
                raise MissingAssetError(name, [self.asset_directory, *self.fallback_directories])

            logger.debug("Asset '%s' resolved from fallback %s", name, fallback_path)
            resolved.append(self._bind(name, fallback_path, from_fallback=True))

        self.resolved = resolved
        return resolved

    def find_in_fallbacks(self, name: str) -> Path | None:
        """Search the fallback directories for a file named ``name``.

        Directories are searched in the configured order and each tree is
        walked depth first: a directory's files are checked before its
        sub-directories, both in name order. The first match wins.

        Args:
            name: Leaf file name to look for

        Returns:
            Path of the first match, or None if no fallback contains it

        Raises:
            OSError: If a fallback directory cannot be read
        """
        for fallback_directory in self.fallback_directories:
            match = self._search_tree(fallback_directory, name)
            if match is not None:
                return match
        return None

    @staticmethod
    def _search_tree(root: Path, name: str) -> Path | None:
        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
            # Sorting in place fixes the descent order for os.walk
            dirnames.sort()
            if name in filenames:
                return Path(dirpath) / name
        return None

    @staticmethod
    def _bind(name: str, path: Path, from_fallback: bool) -> ResolvedAsset:
        return ResolvedAsset(
            name=name,
            path=path,
            mtime_ns=path.stat().st_mtime_ns,
            from_fallback=from_fallback,
        )
