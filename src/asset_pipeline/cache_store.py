"""Artifact storage for concatenated assets.

The cache store owns the artifact file that belongs to a cache key: it
decides whether the artifact is still fresh, reads it back, and builds it
from resolved assets.
"""

import logging
import os
import stat
import tempfile
from collections.abc import Sequence
from pathlib import Path

from .core.paths import join_path
from .core.types import CachedArtifact, ResolvedAsset

logger = logging.getLogger(__name__)


class CacheStore:
    """Reads and writes artifacts inside one cache directory.

    The directory must already exist; it is never created here.
    """

    def __init__(self, cache_path: Path):
        self.cache_path = Path(cache_path)

    def location(self, cache_key: str) -> str:
        """Return the artifact location for a key as a string."""
        return join_path([self.cache_path, cache_key])

    def artifact(self, cache_key: str) -> CachedArtifact:
        """Describe the artifact stored under ``cache_key``.

        Raises:
            OSError: If the artifact exists but cannot be stat'ed
        """
        path = Path(self.location(cache_key))
        try:
            stat_info = path.stat()
        except FileNotFoundError:
            return CachedArtifact(key=cache_key, path=path)

        if not path.is_file():
            return CachedArtifact(key=cache_key, path=path)

        return CachedArtifact(key=cache_key, path=path, mtime_ns=stat_info.st_mtime_ns)

    def is_valid(self, resolved_assets: Sequence[ResolvedAsset], cache_key: str) -> bool:
        """Check whether the artifact exists and no input is newer than it.

        An input with the same timestamp as the artifact does not make it
        stale.

        Args:
            resolved_assets: Inputs of the request
            cache_key: Key of the artifact to check

        Returns:
            True if the cached artifact can be served
        """
        artifact = self.artifact(cache_key)
        if not artifact.exists:
            logger.debug("Cache miss for %s: no artifact", cache_key)
            return False

        artifact_mtime = artifact.mtime_ns
        for asset in resolved_assets:
            if asset.mtime_ns > artifact_mtime:
                logger.debug("Cache miss for %s: %s is newer", cache_key, asset.path)
                return False

        logger.debug("Cache hit for %s", cache_key)
        return True

    def read_cached(self, cache_key: str) -> bytes:
        """Return the artifact's content.

        Freshness is not re-checked; call ``is_valid`` first.
        """
        return Path(self.location(cache_key)).read_bytes()

    def build(self, resolved_assets: Sequence[ResolvedAsset], cache_key: str) -> tuple[bytes, str]:
        """Concatenate the inputs and store the result under ``cache_key``.

        Every input is read before anything is written, so a failed read
        leaves the previous artifact (if any) untouched.

        Args:
            resolved_assets: Inputs in request order
            cache_key: Key to store the artifact under

        Returns:
            Tuple of (content, location)

        Raises:
            OSError: If an input cannot be read or the artifact cannot be written
        """
        content = b"".join(asset.read_bytes() for asset in resolved_assets)
        location = self.write(cache_key, content)
        return content, location

    def write(self, cache_key: str, content: bytes) -> str:
        """Replace the artifact for ``cache_key`` with ``content``.

        The content is written to a temporary file in the cache directory
        and renamed over the artifact, so readers see either the old or the
        new artifact, never a partial one. A rebuilt artifact keeps the
        permissions of the one it replaces; a new one gets the umask default.

        Returns:
            The artifact location

        Raises:
            OSError: If the cache directory is missing or not writable
        """
        location = self.location(cache_key)
        target = Path(location)
        mode = self._artifact_mode(target)

        # Same directory as the target so the rename stays on one filesystem
        fd, temp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
            # mkstemp always creates 0600 files
            os.chmod(temp_name, mode)
            os.replace(temp_name, location)
        except BaseException:
            # Never leave the temporary file behind, even on interruption
            Path(temp_name).unlink(missing_ok=True)
            raise

        logger.info("Wrote artifact %s (%d bytes)", location, len(content))
        return location

    @staticmethod
    def _artifact_mode(target: Path) -> int:
        try:
            return stat.S_IMODE(target.stat().st_mode)
        except FileNotFoundError:
            pass

        # os.umask can only be read by setting it
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask
