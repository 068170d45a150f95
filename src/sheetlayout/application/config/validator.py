"""Validation structures and layout advisory checks for snapshots.

A snapshot that passes schema validation can still describe a document
the layout core will handle in a degraded way: canvases without a frame,
content with no usable extent, occupied regions outside the frame. These
checks report such cases as warnings before any layout is attempted.
"""

from dataclasses import dataclass, field
from typing import Any

from sheetlayout.application.config.adapter import (
    config_to_extent,
    config_to_footprint_limits,
    config_to_rect,
)
from sheetlayout.application.config.schema import CanvasSnapshot, LayoutSettings
from sheetlayout.domain.services import SizeEstimator
from sheetlayout.domain.services.canvas_area import INCHES_PER_UNIT, AreaResolverConfig
from sheetlayout.domain.value_objects import ContentKind


@dataclass
class ValidationError:
    """A blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g., "fail_points[0].content")
        message: Human-readable description of the error
        value: The invalid value that caused the error
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings."""

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """CLI exit code: 0 clean, 1 errors, 2 warnings only."""
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(self, path: str, message: str, value: Any = None) -> "ValidationResult":
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        self.warnings.append(ValidationWarning(path=path, message=message, suggestion=suggestion))
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


def check_canvas_advisories(
    snapshot: CanvasSnapshot, settings: LayoutSettings
) -> ValidationResult:
    """Warn about canvases whose printable area will come from a fallback."""
    result = ValidationResult()
    min_usable = AreaResolverConfig().min_usable
    margin = settings.edge_margin_inches / INCHES_PER_UNIT

    for i, canvas in enumerate(snapshot.canvases):
        path = f"canvases[{i}]"
        if canvas.frame is None and canvas.guide is None:
            source = "existing content" if canvas.occupied else "the default page"
            result.add_warning(
                path=path,
                message=f"Canvas '{canvas.id}' has no frame or guide grid; area comes from {source}",
                suggestion="Add a frame rectangle for predictable layouts",
            )

        if canvas.frame is not None:
            frame = config_to_rect(canvas.frame)
            usable_w = frame.width - 2 * margin
            usable_h = frame.height - 2 * margin
            if usable_w <= min_usable or usable_h <= min_usable:
                result.add_warning(
                    path=f"{path}.frame",
                    message=(
                        f"Frame of '{canvas.id}' is {usable_w:.3f} x {usable_h:.3f} after a "
                        f'{settings.edge_margin_inches}" margin, below the {min_usable} minimum'
                    ),
                    suggestion="Reduce edge_margin_inches or enlarge the frame",
                )
            for j, region in enumerate(canvas.occupied):
                if not frame.contains(config_to_rect(region.rect)):
                    result.add_warning(
                        path=f"{path}.occupied[{j}]",
                        message=f"Occupied region '{region.owner}' extends outside the frame",
                    )
    return result


def check_content_advisories(
    snapshot: CanvasSnapshot, settings: LayoutSettings
) -> ValidationResult:
    """Warn about content that will be rejected, defaulted or clamped."""
    result = ValidationResult()
    estimator = SizeEstimator(config_to_footprint_limits(settings.footprint))
    limits = estimator.limits

    for i, content in enumerate(snapshot.contents):
        path = f"contents[{i}]"
        if content.kind == ContentKind.UNSUPPORTED:
            result.add_warning(path=f"{path}.kind", message=f"'{content.id}' cannot be placed on a canvas")
            continue

        extent = config_to_extent(content)
        if estimator.is_degenerate(extent):
            result.add_warning(
                path=path,
                message=f"'{content.id}' has no usable extent and will be rejected as empty",
                suggestion="Provide a crop or outline size",
            )
            continue

        if content.scale <= 0:
            result.add_warning(
                path=f"{path}.scale",
                message=f"Scale {content.scale} of '{content.id}' is not positive; 1 will be used",
            )

        footprint = estimator.estimate_extent(extent)
        if footprint.width >= limits.max_width or footprint.height >= limits.max_height:
            result.add_warning(
                path=path,
                message=f"'{content.id}' is larger than the footprint limit and will be clamped",
            )
    return result


def check_fail_points(snapshot: CanvasSnapshot) -> ValidationResult:
    """Fail points must reference known content."""
    result = ValidationResult()
    known = {c.id for c in snapshot.contents}
    for i, point in enumerate(snapshot.fail_points):
        if point.content is not None and point.content not in known:
            result.add_error(
                path=f"fail_points[{i}].content",
                message="Fail point references unknown content",
                value=point.content,
            )
    return result


def validate_snapshot(
    snapshot: CanvasSnapshot, settings: LayoutSettings | None = None
) -> ValidationResult:
    """Run every advisory check against a schema-valid snapshot.

    Args:
        snapshot: A validated CanvasSnapshot.
        settings: Layout settings; defaults are used when omitted.

    Returns:
        ValidationResult with errors and warnings from all checks.
    """
    settings = settings or LayoutSettings()
    result = ValidationResult()
    result.merge(check_canvas_advisories(snapshot, settings))
    result.merge(check_content_advisories(snapshot, settings))
    result.merge(check_fail_points(snapshot))
    return result
