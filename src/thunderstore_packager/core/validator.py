"""JSON Schema validation for project and registry manifests.

This module loads the formal JSON Schemas shipped with the package and
validates manifests against them.
"""

import json
from functools import cache
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema import ValidationError
from jsonschema.exceptions import best_match

from .errors import ManifestDeserializeError, MissingManifestFieldError
from .types import RegistryManifest

# src/thunderstore_packager/core/validator.py -> src/thunderstore_packager/schemas/
SCHEMA_DIR = Path(__file__).parent.parent / "schemas"
PROJECT_SCHEMA_PATH = SCHEMA_DIR / "project.schema.json"
PACKAGE_MANIFEST_SCHEMA_PATH = SCHEMA_DIR / "package_manifest_v1.schema.json"


@cache
def load_schema(schema_path: Path) -> dict[str, Any]:
    """Load a JSON schema from disk.

    Args:
        schema_path: Path to the schema file

    Returns:
        Dictionary containing the JSON Schema.

    Raises:
        FileNotFoundError: If schema file doesn't exist
        json.JSONDecodeError: If schema is invalid JSON
    """
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema file not found: {schema_path}")

    with schema_path.open("r", encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


def format_error_path(error: ValidationError) -> str:
    """Render the location of a validation error as a dotted field path."""
    path = ""
    for part in error.absolute_path:
        path += f"[{part}]" if isinstance(part, int) else (f".{part}" if path else str(part))
    return path or "root"


def _missing_field(error: ValidationError) -> str | None:
    """Return the dotted name of the missing property for 'required' errors."""
    if error.validator != "required" or not isinstance(error.instance, dict):
        return None

    missing = next(key for key in error.validator_value if key not in error.instance)
    parent = format_error_path(error)
    return missing if parent == "root" else f"{parent}.{missing}"


def validate_project_data(data: dict[str, Any]) -> None:
    """Validate decoded project manifest data against the project schema.

    Args:
        data: The decoded thunderstore.toml contents

    Raises:
        MissingManifestFieldError: If a required field is absent
        ManifestDeserializeError: For any other schema mismatch
    """
    schema = load_schema(PROJECT_SCHEMA_PATH)
    validator = jsonschema.Draft202012Validator(schema)

    error = best_match(validator.iter_errors(data))
    if error is None:
        return

    missing = _missing_field(error)
    if missing is not None:
        raise MissingManifestFieldError(missing)

    raise ManifestDeserializeError(
        f"Failed to read project file. Validation error at {format_error_path(error)}: "
        f"{error.message}"
    )


def validate_package_manifest(manifest: RegistryManifest) -> None:
    """Validate a registry manifest against the JSON Schema.

    Args:
        manifest: The manifest dictionary to validate

    Raises:
        ValidationError: If the manifest doesn't conform to the schema
        FileNotFoundError: If schema file is missing
        json.JSONDecodeError: If schema is invalid
    """
    schema = load_schema(PACKAGE_MANIFEST_SCHEMA_PATH)
    jsonschema.validate(instance=manifest, schema=schema)


def validate_package_manifest_with_error_details(
    manifest: RegistryManifest,
) -> tuple[bool, str | None]:
    """Validate a registry manifest and return detailed error information.

    This is a convenience wrapper that catches validation errors and
    returns user-friendly error messages.

    Args:
        manifest: The manifest dictionary to validate

    Returns:
        Tuple of (is_valid, error_message). error_message is None if valid.
    """
    try:
        validate_package_manifest(manifest)
        return True, None
    except ValidationError as e:
        error_msg = f"Validation error at {format_error_path(e)}: {e.message}"

        # Add context if available
        if e.instance:
            error_msg += f"\nInvalid value: {e.instance}"

        return False, error_msg
    except (FileNotFoundError, json.JSONDecodeError) as e:
        return False, f"Schema error: {e}"
