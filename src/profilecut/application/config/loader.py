"""Job file loading.

Reads JSON job files and validates them against JobConfiguration. File
system, JSON syntax and schema problems all surface as ConfigError, with the
offending JSON path or line/column attached so the CLI and the API can point
at the exact field.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from profilecut.application.config.schema import JobConfiguration


class ConfigError(Exception):
    """A job file could not be read or does not match the schema.

    Attributes:
        message: Summary suitable for display.
        error_type: One of file_not_found, permission_denied,
            file_read_error, json_parse, validation.
        path: The job file, when loading from disk.
        details: Per-problem entries. JSON syntax errors carry line, column
            and message; schema errors carry path, message, value and
            error_type.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Render a pydantic error location as a dotted JSON path.

    Examples:
        >>> _format_json_path(("material", "id"))
        'material.id'
        >>> _format_json_path(("plan", "cuts", 0, "length"))
        'plan.cuts[0].length'
    """
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        else:
            path += f".{segment}" if path else str(segment)
    return path


def _schema_error(error: PydanticValidationError, path: Path | None) -> ConfigError:
    details = [
        {
            "path": _format_json_path(item["loc"]),
            "message": item["msg"],
            "value": item.get("input"),
            "error_type": item["type"],
        }
        for item in error.errors()
    ]
    summary = ["Job configuration validation failed:"]
    summary.extend(
        f"  - {d['path']}: {d['message']}"
        + (f" (got: {d['value']!r})" if d["value"] is not None else "")
        for d in details
    )
    return ConfigError("\n".join(summary), "validation", path, details)


def _validate(data: Any, path: Path | None = None) -> JobConfiguration:
    if not isinstance(data, dict):
        where = f": {path}" if path else ""
        raise ConfigError(f"Job file must contain a JSON object{where}", "validation", path)
    try:
        return JobConfiguration.model_validate(data)
    except PydanticValidationError as e:
        raise _schema_error(e, path) from None


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise ConfigError(f"Job file not found: {path}", "file_not_found", path)

    try:
        text = path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            f"Permission denied reading job file: {path}", "permission_denied", path
        ) from None
    except OSError as e:
        raise ConfigError(
            f"Error reading job file {path}: {e}", "file_read_error", path
        ) from None

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Invalid JSON in job file {path} at line {e.lineno}, column {e.colno}: {e.msg}",
            "json_parse",
            path,
            [{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from None


def load_config(path: Path) -> JobConfiguration:
    """Load and validate a job file.

    Args:
        path: Path to the JSON job file.

    Returns:
        The validated JobConfiguration.

    Raises:
        ConfigError: If the file is missing or unreadable, is not valid
            JSON, or does not match the schema.
    """
    return _validate(_read_json(path), path)


def load_config_from_dict(data: dict[str, Any]) -> JobConfiguration:
    """Validate an already-parsed job, e.g. the body of an API request.

    Raises:
        ConfigError: If the data does not match the schema.
    """
    return _validate(data)
