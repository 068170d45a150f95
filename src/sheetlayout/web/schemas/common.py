"""Common Pydantic schemas shared across requests and responses."""

from typing import Any

from pydantic import BaseModel, Field, model_validator


class RectSchema(BaseModel):
    """Axis-aligned rectangle in canvas units."""

    min_x: float = Field(..., description="Left edge")
    min_y: float = Field(..., description="Bottom edge")
    max_x: float = Field(..., description="Right edge")
    max_y: float = Field(..., description="Top edge")

    @model_validator(mode="after")
    def validate_extent(self) -> "RectSchema":
        if self.max_x <= self.min_x or self.max_y <= self.min_y:
            raise ValueError("max_x/max_y must be greater than min_x/min_y")
        return self


class PointSchema(BaseModel):
    """2D point in canvas units."""

    x: float
    y: float


class SizeSchema(BaseModel):
    """Width and height in canvas units."""

    width: float
    height: float


class SnapshotRequestBase(BaseModel):
    """Fields shared by every request: the document and optional settings."""

    snapshot: dict[str, Any] = Field(..., description="Canvas snapshot JSON")
    settings: dict[str, Any] | None = Field(
        default=None, description="Layout settings JSON (defaults when omitted)"
    )
    canvas_id: str | None = Field(
        default=None, description="Canvas id (default: first canvas in the snapshot)"
    )
