"""Settings and snapshot configuration for sheet layout.

This package provides the Pydantic models for layout settings and canvas
snapshots, a loader with comprehensive error handling, and adapters to
domain objects.

Public API:
    - LayoutSettings: Root settings model
    - CanvasSnapshot: Serialized host document
    - load_settings / load_settings_from_dict: Load settings
    - load_snapshot / load_snapshot_from_dict: Load a snapshot
    - ConfigError: Exception for configuration errors
    - validate_snapshot: Advisory checks on a loaded snapshot

Example:
    >>> from pathlib import Path
    >>> from sheetlayout.application.config import load_snapshot, ConfigError
    >>>
    >>> try:
    ...     snapshot = load_snapshot(Path("sheet.json"))
    ...     print(f"{len(snapshot.canvases)} canvases")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from sheetlayout.application.config.schema import (
    DEFAULT_SPACING_PRESETS,
    SUPPORTED_VERSIONS,
    CanvasConfig,
    CanvasSnapshot,
    CommitConfig,
    ContentConfig,
    FailPointConfig,
    FootprintConfig,
    LayoutSettings,
    OccupiedConfig,
    RectConfig,
    SearchConfig,
)
from sheetlayout.application.config.loader import (
    ConfigError,
    load_settings,
    load_settings_from_dict,
    load_snapshot,
    load_snapshot_from_dict,
)
from sheetlayout.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_snapshot,
)

__all__ = [
    "CanvasConfig",
    "CanvasSnapshot",
    "CommitConfig",
    "ConfigError",
    "ContentConfig",
    "DEFAULT_SPACING_PRESETS",
    "FailPointConfig",
    "FootprintConfig",
    "LayoutSettings",
    "OccupiedConfig",
    "RectConfig",
    "SUPPORTED_VERSIONS",
    "SearchConfig",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "load_settings",
    "load_settings_from_dict",
    "load_snapshot",
    "load_snapshot_from_dict",
    "validate_snapshot",
]
