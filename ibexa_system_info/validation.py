"""Structural validation of Composer files using JSON schemas.

Usage:
    from ibexa_system_info.validation import load_composer_file

    data = load_composer_file(Path("composer.lock"), "composer-lock")
"""

import json
from pathlib import Path
from typing import Any, Dict, Literal

import jsonschema

from .exceptions import ComposerFileValidationError
from .logging_config import logger

ComposerFileKind = Literal["composer-lock", "composer-json"]

# Path to schemas within the package directory
PACKAGE_DIR = Path(__file__).parent
SCHEMA_DIR = PACKAGE_DIR / "schemas"

SCHEMAS = {
    "composer-lock": SCHEMA_DIR / "composer-lock.schema.json",
    "composer-json": SCHEMA_DIR / "composer-json.schema.json",
}


def get_schema(kind: ComposerFileKind) -> Dict[str, Any]:
    """Load the JSON schema for a Composer file kind."""
    with open(SCHEMAS[kind], encoding="utf-8") as f:
        return json.load(f)


def validate_composer_data(data: Any, kind: ComposerFileKind, path: str) -> None:
    """
    Validate parsed Composer data against its schema.

    Args:
        data: Parsed JSON content
        kind: Which Composer file the data came from
        path: File path, used in error messages

    Raises:
        ComposerFileValidationError: If the data does not match the schema
    """
    try:
        jsonschema.validate(instance=data, schema=get_schema(kind))
    except jsonschema.ValidationError as e:
        error_path = ".".join(str(p) for p in e.absolute_path) if e.absolute_path else None
        logger.debug(f"{path} failed {kind} validation at {error_path or '<root>'}: {e.message}")
        reason = f"{e.message} (at {error_path})" if error_path else e.message
        raise ComposerFileValidationError(path, reason) from e


def load_composer_file(path: Path, kind: ComposerFileKind) -> Dict[str, Any]:
    """
    Read, parse and validate a Composer JSON file.

    The caller is responsible for checking that the file exists.

    Args:
        path: Path to composer.lock or composer.json
        kind: Which Composer file this is

    Returns:
        Parsed file content

    Raises:
        ComposerFileValidationError: If the file is not valid JSON or fails validation
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ComposerFileValidationError(str(path), f"invalid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise ComposerFileValidationError(str(path), f"not UTF-8 text: {e}") from e

    validate_composer_data(data, kind, str(path))
    return data
