"""Pydantic request schemas for the REST API."""

from pydantic import Field

from sheetlayout.domain.value_objects import OverflowPolicy, SearchPreset, StartCorner
from sheetlayout.web.schemas.common import RectSchema, SnapshotRequestBase


class CanvasAreaRequest(SnapshotRequestBase):
    """Request for resolving a canvas's printable area."""

    margin_inches: float | None = Field(default=None, ge=0, description="Edge margin in inches")


class ZonesRequest(SnapshotRequestBase):
    """Request for a canvas's zone grid and zone occupancy."""

    rows: int = Field(default=3, ge=1, le=12, description="Zone grid rows")
    cols: int = Field(default=3, ge=1, le=12, description="Zone grid columns")
    margin_inches: float | None = Field(default=None, ge=0, description="Edge margin in inches")


class LayoutOptions(SnapshotRequestBase):
    """Layout options shared by planning and placement."""

    items: list[str] = Field(..., min_length=1, description="Content ids in placement order")
    strategy: str | None = Field(default=None, description="Layout strategy")
    columns: int | None = Field(default=None, ge=1, description="Fixed column count")
    spacing: str | None = Field(default=None, description="Spacing preset name")
    margin: float | None = Field(default=None, ge=0, description="Inter-cell margin")
    start_corner: StartCorner | None = Field(default=None, description="Corner to fill from")
    overflow_policy: OverflowPolicy | None = Field(default=None, description="Overflow policy")
    margin_inches: float | None = Field(default=None, ge=0, description="Edge margin in inches")


class PlanRequest(LayoutOptions):
    """Request for computing a layout plan without placing."""


class PlacementRequest(LayoutOptions):
    """Request for placing items with a layout, or one item in a zone."""

    zone: str | None = Field(default=None, description="Place the single item at this zone")
    validate_only: bool = Field(default=False, description="Preview a zone placement only")


class FindSpaceRequest(SnapshotRequestBase):
    """Request for empty-space search."""

    width: float = Field(..., gt=0, description="Required width")
    height: float = Field(..., gt=0, description="Required height")
    preset: SearchPreset = Field(default=SearchPreset.ANY, description="Search region preset")
    region: RectSchema | None = Field(default=None, description="Explicit search region")
    max_candidates: int | None = Field(default=None, ge=1, le=200)


class CheckOverlapRequest(SnapshotRequestBase):
    """Request for an overlap check of a proposed rectangle."""

    rect: RectSchema = Field(..., description="Proposed rectangle")
    buffer: float | None = Field(default=None, ge=0, description="Clearance around the rectangle")
