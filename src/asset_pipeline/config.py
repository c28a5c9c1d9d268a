"""Pipeline configuration.

Configuration can be built directly or loaded from a JSON file that is
validated against ``schemas/config.schema.json``.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .core.errors import ConfigurationError
from .core.validator import validate_config_with_error_details

logger = logging.getLogger(__name__)

DEFAULT_CACHE_DIRECTORY = "cache"


@dataclass
class PipelineConfig:
    """Directories and default options for an asset pipeline.

    Attributes:
        asset_directory: Primary directory requested names are relative to
        cache_directory: Artifact directory, relative to the asset directory
        fallback_directories: Directories searched recursively, in order
        default_options: Option tokens used when a request passes none
    """

    asset_directory: Path
    cache_directory: str = DEFAULT_CACHE_DIRECTORY
    fallback_directories: list[Path] = field(default_factory=list)
    default_options: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.asset_directory = Path(self.asset_directory)
        self.fallback_directories = [Path(p) for p in self.fallback_directories]
        self.default_options = list(self.default_options)

    @classmethod
    def from_dict(cls, data: dict[str, Any], base_dir: Path | None = None) -> "PipelineConfig":
        """Build a configuration from validated data.

        Relative directories are resolved against ``base_dir`` when given.
        The cache directory is kept as written since it is relative to the
        asset directory.
        """

        def _anchor(value: str) -> Path:
            path = Path(value)
            if base_dir is not None and not path.is_absolute():
                return base_dir / path
            return path

        return cls(
            asset_directory=_anchor(data["asset_directory"]),
            cache_directory=data.get("cache_directory", DEFAULT_CACHE_DIRECTORY),
            fallback_directories=[_anchor(p) for p in data.get("fallback_directories", [])],
            default_options=list(data.get("default_options", [])),
        )


def load_config(path: Path) -> PipelineConfig:
    """Load and validate a JSON configuration file.

    Args:
        path: Path to the configuration file

    Returns:
        PipelineConfig with directories anchored at the file's directory

    Raises:
        ConfigurationError: If the file is not valid JSON or violates the schema
        OSError: If the file cannot be read
    """
    logger.debug("Loading pipeline configuration from %s", path)

    with path.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration in {path} must be a JSON object")

    is_valid, error_msg = validate_config_with_error_details(data)
    if not is_valid:
        raise ConfigurationError(f"Invalid configuration in {path}: {error_msg}")

    return PipelineConfig.from_dict(data, base_dir=path.resolve().parent)
