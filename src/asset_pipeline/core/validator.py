"""JSON Schema validation for pipeline configuration files.

This module loads the packaged JSON Schema and checks configuration data
before a pipeline is built from it. Every violation is collected, so a
configuration with several mistakes is reported in one pass.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator, ValidationError
from jsonschema.exceptions import best_match

# src/asset_pipeline/core/validator.py -> src/asset_pipeline/schemas/
SCHEMA_PATH = Path(__file__).parent.parent / "schemas" / "config.schema.json"


def load_schema() -> dict[str, Any]:
    """Load the JSON schema from disk.

    Raises:
        FileNotFoundError: If schema file doesn't exist
        json.JSONDecodeError: If schema is invalid JSON
    """
    if not SCHEMA_PATH.exists():
        raise FileNotFoundError(f"Schema file not found: {SCHEMA_PATH}")

    with SCHEMA_PATH.open("r", encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


@lru_cache(maxsize=1)
def _config_validator() -> Draft202012Validator:
    schema = load_schema()
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def config_errors(data: Any) -> list[ValidationError]:
    """Collect every schema violation in configuration data.

    Returns:
        Violations ordered by their location in the data (root first)
    """
    errors = _config_validator().iter_errors(data)
    return sorted(errors, key=lambda e: [str(p) for p in e.path])


def format_error(error: ValidationError) -> str:
    """Render one violation as ``Validation error at a -> b: message``."""
    error_path = " -> ".join(str(p) for p in error.path) if error.path else "root"
    message = f"Validation error at {error_path}: {error.message}"

    # Containers are already described by the message
    if not isinstance(error.instance, (dict, list)):
        message += f" (invalid value: {error.instance!r})"

    return message


def validate_config(data: Any) -> None:
    """Validate configuration data against the JSON Schema.

    Raises:
        ValidationError: The most relevant violation, if any
        FileNotFoundError: If schema file is missing
    """
    error = best_match(config_errors(data))
    if error is not None:
        raise error


def validate_config_with_error_details(data: Any) -> tuple[bool, str | None]:
    """Validate configuration data and describe every violation.

    Returns:
        Tuple of (is_valid, error_message). error_message lists one
        violation per line and is None if valid.
    """
    try:
        errors = config_errors(data)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        return False, f"Schema error: {e}"

    if not errors:
        return True, None

    return False, "\n".join(format_error(e) for e in errors)
