"""Settings and snapshot file loading with comprehensive error handling.

This module loads the JSON settings and canvas snapshot documents used by
the CLI and the web API. It handles file system errors, JSON parsing
errors, and Pydantic validation errors with clear, actionable messages.
"""

import json
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from sheetlayout.application.config.schema import CanvasSnapshot, LayoutSettings

ModelT = TypeVar("ModelT", bound=BaseModel)


class ConfigError(Exception):
    """Exception raised for settings or snapshot errors.

    Attributes:
        message: The primary error message
        error_type: Category of error (file_not_found, permission_denied,
            file_read_error, json_parse, validation)
        path: Path to the file (if applicable)
        details: Additional error details (line/column for JSON, validation errors, etc.)
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
    """Format a Pydantic location tuple as a JSON path string.

    Examples:
        >>> _format_json_path(("canvases", 0, "frame", "max_x"))
        'canvases[0].frame.max_x'
    """
    parts: list[str] = []
    for segment in loc:
        if isinstance(segment, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{segment}]"
            else:
                parts.append(f"[{segment}]")
        else:
            parts.append(str(segment))
    return ".".join(parts)


def _extract_validation_errors(
    error: PydanticValidationError,
) -> list[dict[str, Any]]:
    details: list[dict[str, Any]] = []
    for err in error.errors():
        details.append(
            {
                "path": _format_json_path(err["loc"]),
                "message": err["msg"],
                "value": err.get("input"),
                "error_type": err["type"],
            }
        )
    return details


def _format_validation_error_message(label: str, details: list[dict[str, Any]]) -> str:
    lines = [f"{label} validation failed:"]
    for detail in details:
        path = detail["path"] or "<root>"
        value = detail.get("value")
        if value is not None and not isinstance(value, (dict, list)):
            lines.append(f"  - {path}: {detail['message']} (got: {value!r})")
        else:
            lines.append(f"  - {path}: {detail['message']}")
    return "\n".join(lines)


def _read_json(path: Path, label: str) -> Any:
    if not path.exists():
        raise ConfigError(
            message=f"{label} file not found: {path}",
            error_type="file_not_found",
            path=path,
        )

    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            message=f"Permission denied reading {label.lower()} file: {path}",
            error_type="permission_denied",
            path=path,
        )
    except OSError as e:
        raise ConfigError(
            message=f"Error reading {label.lower()} file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        )

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=f"Invalid JSON in {label.lower()} file: {path} (line {e.lineno}, column {e.colno}): {e.msg}",
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        )


def _validate(model: type[ModelT], data: Any, label: str, path: Path | None = None) -> ModelT:
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        raise ConfigError(
            message=_format_validation_error_message(label, details),
            error_type="validation",
            path=path,
            details=details,
        )


def load_settings(path: Path) -> LayoutSettings:
    """Load and validate layout settings from a JSON file.

    Raises:
        ConfigError: If the file cannot be loaded or validated. The
            error_type attribute names the failure category.

    Example:
        >>> try:
        ...     settings = load_settings(Path("layout.json"))
        ... except ConfigError as e:
        ...     print(f"Error: {e}")
    """
    data = _read_json(path, "Settings")
    return _validate(LayoutSettings, data, "Settings", path)


def load_settings_from_dict(data: dict[str, Any]) -> LayoutSettings:
    """Load and validate layout settings from a dictionary."""
    return _validate(LayoutSettings, data, "Settings")


def load_snapshot(path: Path) -> CanvasSnapshot:
    """Load and validate a canvas snapshot from a JSON file.

    Raises:
        ConfigError: If the file cannot be loaded or validated.
    """
    data = _read_json(path, "Snapshot")
    return _validate(CanvasSnapshot, data, "Snapshot", path)


def load_snapshot_from_dict(data: dict[str, Any]) -> CanvasSnapshot:
    """Load and validate a canvas snapshot from a dictionary.

    Used by the web API, where each request body carries its snapshot.
    """
    return _validate(CanvasSnapshot, data, "Snapshot")
