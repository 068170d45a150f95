"""Pydantic configuration schema models for sheet layout.

Two documents are described here:

- ``LayoutSettings``: tunable constants of the layout core (margins,
  footprint limits, search step and buffers, commit retry offsets).
- ``CanvasSnapshot``: a serialized host document (canvases with their
  frame, guide grid and occupied regions, plus the content items that can
  be placed). The in-memory host is built from it.

Both use Pydantic v2 and forbid unknown keys.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from sheetlayout.domain.value_objects import (
    ContentKind,
    OverflowPolicy,
    RegionKind,
    StartCorner,
)

# Supported schema versions for settings and snapshot files
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})

DEFAULT_SPACING_PRESETS: dict[str, float] = {
    "compact": 0.05,
    "normal": 0.08,
    "spacious": 0.125,
}


class RectConfig(BaseModel):
    """Axis-aligned rectangle in canvas units."""

    model_config = ConfigDict(extra="forbid")

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @model_validator(mode="after")
    def validate_extent(self) -> "RectConfig":
        if self.max_x <= self.min_x or self.max_y <= self.min_y:
            raise ValueError("max_x/max_y must be greater than min_x/min_y")
        return self


class FootprintConfig(BaseModel):
    """Clamping limits for estimated footprints.

    Attributes:
        max_width: Largest footprint width (12").
        max_height: Largest footprint height (10").
        default_width: Width used for unusable extents (4").
        default_height: Height used for unusable extents (3").
        min_valid: Extents below this count as unusable.
    """

    model_config = ConfigDict(extra="forbid")

    max_width: float = Field(default=1.0, gt=0)
    max_height: float = Field(default=10.0 / 12.0, gt=0)
    default_width: float = Field(default=4.0 / 12.0, gt=0)
    default_height: float = Field(default=3.0 / 12.0, gt=0)
    min_valid: float = Field(default=0.01, ge=0)

    @model_validator(mode="after")
    def validate_limits(self) -> "FootprintConfig":
        if self.max_width < self.default_width or self.max_height < self.default_height:
            raise ValueError("max footprint must not be smaller than the default footprint")
        return self


class SearchConfig(BaseModel):
    """Empty-space search parameters."""

    model_config = ConfigDict(extra="forbid")

    step: float = Field(default=0.1, gt=0, description="Grid step for placements")
    annotation_step: float = Field(default=0.08, gt=0, description="Finer step for annotations")
    max_candidates: int = Field(default=20, ge=1)
    edge_inset: float = Field(default=0.1, ge=0, description="Inset of the 'any' search region")
    placement_buffer: float = Field(default=0.05, ge=0)
    annotation_buffer: float = Field(default=0.02, ge=0)
    overlap_buffer: float = Field(default=0.02, ge=0, description="Default check_overlap buffer")


class CommitConfig(BaseModel):
    """Placement commit retry parameters."""

    model_config = ConfigDict(extra="forbid")

    retry_offset: float = Field(default=0.1, gt=0, description="Offset of the second candidate point")
    position_tolerance: float = Field(default=0.001, ge=0)


class LayoutSettings(BaseModel):
    """Root settings model for the layout core.

    Attributes:
        version: Schema version.
        edge_margin_inches: Margin kept inside the canvas frame, in inches.
        margin_between: Gap between layout cells, in canvas units.
        spacing_presets: Named alternatives for ``margin_between``.
        strategy: Default layout strategy.
        start_corner: Default corner for cell assignment.
        overflow_policy: Default overflow policy.
        footprint: Footprint clamping limits.
        search: Empty-space search parameters.
        commit: Commit retry parameters.
    """

    model_config = ConfigDict(extra="forbid")

    version: str = "1.0"
    edge_margin_inches: float = Field(default=1.0, ge=0)
    margin_between: float = Field(default=0.08, ge=0)
    spacing_presets: dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_SPACING_PRESETS)
    )
    strategy: str = "auto"
    start_corner: StartCorner = StartCorner.TOP_LEFT
    overflow_policy: OverflowPolicy = OverflowPolicy.PLACE_ALL
    footprint: FootprintConfig = Field(default_factory=FootprintConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    commit: CommitConfig = Field(default_factory=CommitConfig)

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        if v not in SUPPORTED_VERSIONS:
            raise ValueError(
                f"Unsupported schema version: {v}. Supported: {sorted(SUPPORTED_VERSIONS)}"
            )
        return v

    @field_validator("spacing_presets")
    @classmethod
    def validate_presets(cls, v: dict[str, float]) -> dict[str, float]:
        for name, value in v.items():
            if value < 0:
                raise ValueError(f"spacing preset '{name}' must be non-negative")
        return v

    def margin_for(self, spacing: str | None) -> float:
        """Inter-cell margin for a spacing preset name.

        Unknown or missing names use ``margin_between``.
        """
        if spacing is None:
            return self.margin_between
        return self.spacing_presets.get(spacing.lower(), self.margin_between)


class OccupiedConfig(BaseModel):
    """Something already placed or annotated on a canvas.

    A missing ``buffer`` takes the settings default for its kind.
    """

    model_config = ConfigDict(extra="forbid")

    owner: str = Field(min_length=1)
    rect: RectConfig
    kind: RegionKind = RegionKind.PLACEMENT
    buffer: float | None = Field(default=None, ge=0)


class CanvasConfig(BaseModel):
    """One canvas (sheet) of a snapshot."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(min_length=1)
    frame: RectConfig | None = None
    guide: RectConfig | None = None
    occupied: list[OccupiedConfig] = Field(default_factory=list)


class ContentConfig(BaseModel):
    """A content item that can be placed on a canvas.

    Attributes:
        id: Host content id.
        crop: Crop box (width, height) at native scale.
        scale: Display scale factor.
        outline: Outline (width, height) already in canvas units.
        kind: Content category.
        placed: Whether the item already sits on a canvas.
        drift: Offset the host applies to committed centers, for hosts
            that snap placements away from the requested point.
        pinned: Whether the host refuses to move the item once placed.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(min_length=1)
    crop: tuple[float, float] | None = None
    scale: float = 1.0
    outline: tuple[float, float] | None = None
    kind: ContentKind = ContentKind.DETAIL
    placed: bool = False
    drift: tuple[float, float] | None = None
    pinned: bool = False


class FailPointConfig(BaseModel):
    """A point at which the host refuses commits.

    With ``content`` unset the point fails for every item.
    """

    model_config = ConfigDict(extra="forbid")

    x: float
    y: float
    content: str | None = None
    tolerance: float = Field(default=1e-6, ge=0)


class CanvasSnapshot(BaseModel):
    """Root snapshot model describing a host document."""

    model_config = ConfigDict(extra="forbid")

    version: str = "1.0"
    canvases: list[CanvasConfig] = Field(min_length=1)
    contents: list[ContentConfig] = Field(default_factory=list)
    fail_points: list[FailPointConfig] = Field(default_factory=list)

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        if v not in SUPPORTED_VERSIONS:
            raise ValueError(
                f"Unsupported schema version: {v}. Supported: {sorted(SUPPORTED_VERSIONS)}"
            )
        return v

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "CanvasSnapshot":
        for label, ids in (
            ("canvas", [c.id for c in self.canvases]),
            ("content", [c.id for c in self.contents]),
        ):
            seen: set[str] = set()
            for item_id in ids:
                if item_id in seen:
                    raise ValueError(f"duplicate {label} id: {item_id}")
                seen.add(item_id)
        return self

    def canvas(self, canvas_id: str) -> CanvasConfig | None:
        for canvas in self.canvases:
            if canvas.id == canvas_id:
                return canvas
        return None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
