"""Type definitions for asset requests, resolved files and cached artifacts."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class AssetRequest:
    """Ordered asset names plus the option tokens baked into the cache key.

    Duplicates are allowed and order is significant for both fields.
    """

    asset_names: tuple[str, ...]
    options: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any sequence but store tuples so requests stay hashable
        object.__setattr__(self, "asset_names", tuple(self.asset_names))
        object.__setattr__(self, "options", tuple(self.options))


@dataclass(frozen=True)
class ResolvedAsset:
    """A requested asset bound to a concrete file."""

    name: str  # Logical name as requested
    path: Path  # Located file
    mtime_ns: int  # Modification time captured at resolution
    from_fallback: bool = False  # True if found in a fallback directory

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()


@dataclass
class CachedArtifact:
    """The concatenated output stored under one cache key.

    Attributes:
        key: Cache key, also the artifact's file name
        path: Location of the artifact file
        mtime_ns: Modification time, or None when the artifact is absent
    """

    key: str
    path: Path
    mtime_ns: int | None = None

    @property
    def exists(self) -> bool:
        return self.mtime_ns is not None

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()


@dataclass(frozen=True)
class BuildResult:
    """Outcome of processing one request."""

    location: str  # Artifact location for the caller to reference
    cache_key: str
    content: bytes
    from_cache: bool  # False when the artifact was (re)built
