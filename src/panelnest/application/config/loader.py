"""Job file loading with structured errors.

Reads a JSON job file, parses it and validates it against
NestingConfiguration. Every failure surfaces as a ConfigError whose
``error_type`` says which stage failed and whose ``details`` carry
field-level information suitable for display.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from panelnest.application.config.schema import NestingConfiguration

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when a job file cannot be loaded or validated.

    Attributes:
        message: Human-readable summary.
        error_type: One of file_not_found, permission_denied,
            file_read_error, json_parse or validation.
        path: Job file path, when loading from disk.
        details: Per-problem dictionaries (JSON path, message, value for
            validation errors; line and column for parse errors).
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Render a pydantic error location as a JSON path.

    Examples:
        >>> _format_json_path(("panels", 0, "width"))
        'panels[0].width'
        >>> _format_json_path(("sheet_search",))
        'sheet_search'
    """
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        elif path:
            path += f".{segment}"
        else:
            path = str(segment)
    return path or "(root)"


def _validation_details(error: PydanticValidationError) -> list[dict[str, Any]]:
    return [
        {
            "path": _format_json_path(err["loc"]),
            "message": err["msg"],
            "value": err.get("input"),
            "error_type": err["type"],
        }
        for err in error.errors()
    ]


def _validation_message(details: list[dict[str, Any]]) -> str:
    lines = ["Job configuration is invalid:"]
    for detail in details:
        value = detail.get("value")
        # Whole-object inputs are noise in a one-line message
        if value is None or isinstance(value, (dict, list)):
            lines.append(f"  - {detail['path']}: {detail['message']}")
        else:
            lines.append(f"  - {detail['path']}: {detail['message']} (got: {value!r})")
    return "\n".join(lines)


def _validate(data: Any, path: Path | None = None) -> NestingConfiguration:
    try:
        config = NestingConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = _validation_details(e)
        logger.debug("Validation failed with %d problems", len(details))
        raise ConfigError(
            message=_validation_message(details),
            error_type="validation",
            path=path,
            details=details,
        ) from e
    logger.debug(
        "Loaded job with %d panel specs and %d sheet specs",
        len(config.panels),
        len(config.sheets),
    )
    return config


def load_config(path: Path | str) -> NestingConfiguration:
    """Load and validate a job file.

    Args:
        path: Path to the JSON job file.

    Returns:
        The validated configuration.

    Raises:
        ConfigError: If the file is missing, unreadable, not JSON, or
            does not match the schema.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(
            message=f"Job file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigError(
            message=f"Permission denied reading job file: {path}",
            error_type="permission_denied",
            path=path,
        ) from e
    except OSError as e:
        raise ConfigError(
            message=f"Error reading job file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        ) from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=(
                f"Invalid JSON in job file: {path} "
                f"(line {e.lineno}, column {e.colno}): {e.msg}"
            ),
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from e

    return _validate(data, path)


def load_config_from_dict(data: dict[str, Any]) -> NestingConfiguration:
    """Validate a job already parsed into a dictionary.

    Raises:
        ConfigError: If the data fails validation.
    """
    return _validate(data)
