"""Unit tests for printable-area resolution.

These tests verify the priority chain: frame, guide grid, existing
content, then the default page, along with margin handling and the
guarantee that resolution always yields a usable rectangle.
"""

import pytest

from sheetlayout.domain.services import AreaResolverConfig, CanvasAreaResolver
from sheetlayout.domain.value_objects import (
    BoundsSource,
    CanvasBounds,
    OccupiedRegion,
    Rect,
)


@pytest.fixture
def resolver() -> CanvasAreaResolver:
    return CanvasAreaResolver()


class TestFrameBounds:
    """Frame-based resolution."""

    def test_frame_shrunk_by_margin(self, resolver: CanvasAreaResolver) -> None:
        """A 3.0 x 2.0 frame with a 1 inch margin leaves 2.833 x 1.833."""
        bounds = CanvasBounds("A101", frame=Rect(0.0, 0.0, 3.0, 2.0))
        area = resolver.resolve(bounds, margin_inches=1.0)

        assert area.source == BoundsSource.FRAME
        assert area.width == pytest.approx(3.0 - 2 / 12)
        assert area.height == pytest.approx(2.0 - 2 / 12)
        assert area.min_x == pytest.approx(1 / 12)
        assert area.applied_margin == 1.0

    def test_zero_margin_uses_frame_as_is(self, resolver: CanvasAreaResolver) -> None:
        frame = Rect(1.0, 1.0, 4.0, 3.0)
        area = resolver.resolve(CanvasBounds("c", frame=frame), margin_inches=0.0)
        assert area.bounds == frame

    def test_negative_margin_treated_as_zero(self, resolver: CanvasAreaResolver) -> None:
        frame = Rect(0.0, 0.0, 3.0, 2.0)
        area = resolver.resolve(CanvasBounds("c", frame=frame), margin_inches=-5.0)
        assert area.bounds == frame
        assert area.applied_margin == 0.0

    def test_frame_wins_over_guide(self, resolver: CanvasAreaResolver) -> None:
        bounds = CanvasBounds(
            "c", frame=Rect(0.0, 0.0, 3.0, 2.0), guide=Rect(0.0, 0.0, 1.0, 1.0)
        )
        assert resolver.resolve(bounds).source == BoundsSource.FRAME


class TestGuideBounds:
    """Guide-grid resolution."""

    def test_guide_used_without_frame(self, resolver: CanvasAreaResolver) -> None:
        bounds = CanvasBounds("A102", guide=Rect(0.0, 0.0, 2.0, 1.5))
        area = resolver.resolve(bounds)

        assert area.source == BoundsSource.GUIDE
        assert area.bounds.min_x == pytest.approx(0.04)
        assert area.bounds.max_y == pytest.approx(1.46)

    def test_undersized_frame_falls_through_to_guide(self, resolver: CanvasAreaResolver) -> None:
        bounds = CanvasBounds(
            "c", frame=Rect(0.0, 0.0, 0.6, 0.6), guide=Rect(0.0, 0.0, 2.0, 1.5)
        )
        assert resolver.resolve(bounds).source == BoundsSource.GUIDE


class TestContentBounds:
    """Resolution from content already on the canvas."""

    def test_undersized_frame_reoffered_when_content_exists(
        self, resolver: CanvasAreaResolver
    ) -> None:
        bounds = CanvasBounds("c", frame=Rect(0.0, 0.0, 0.6, 0.6))
        occupied = [OccupiedRegion(Rect(0.1, 0.1, 0.3, 0.3), "V1")]
        area = resolver.resolve(bounds, occupied)

        assert area.source == BoundsSource.FRAME_CONTENT
        assert area.bounds.min_x == pytest.approx(1 / 12)
        assert area.bounds.max_x == pytest.approx(0.6 - 1 / 12)

    def test_collapsed_frame_reoffered_with_clamped_margin(
        self, resolver: CanvasAreaResolver
    ) -> None:
        bounds = CanvasBounds("c", frame=Rect(0.0, 0.0, 0.1, 0.1))
        occupied = [OccupiedRegion(Rect(0.0, 0.0, 0.05, 0.05), "V1")]
        area = resolver.resolve(bounds, occupied)

        assert area.source == BoundsSource.FRAME_CONTENT
        assert area.bounds.min_x == pytest.approx(0.025)
        assert area.bounds.max_x == pytest.approx(0.075)

    def test_inferred_from_content_union(self, resolver: CanvasAreaResolver) -> None:
        occupied = [
            OccupiedRegion(Rect(1.0, 1.0, 1.5, 1.2), "V1"),
            OccupiedRegion(Rect(1.6, 1.3, 2.0, 1.5), "V2"),
        ]
        area = resolver.resolve(CanvasBounds("c"), occupied)

        # Union is 1.0 x 0.5, expanded by 20% of each dimension per side
        assert area.source == BoundsSource.INFERRED
        assert area.bounds.min_x == pytest.approx(0.8)
        assert area.bounds.min_y == pytest.approx(0.9)
        assert area.bounds.max_x == pytest.approx(2.2)
        assert area.bounds.max_y == pytest.approx(1.6)

    def test_small_inferred_area_falls_back_to_default(
        self, resolver: CanvasAreaResolver
    ) -> None:
        occupied = [OccupiedRegion(Rect(1.0, 1.0, 1.1, 1.1), "V1")]
        area = resolver.resolve(CanvasBounds("c"), occupied)
        assert area.source == BoundsSource.DEFAULT


class TestDefaultBounds:
    """Default page fallback."""

    def test_empty_canvas_uses_default_page(self, resolver: CanvasAreaResolver) -> None:
        area = resolver.resolve(CanvasBounds("A103"), margin_inches=1.0)

        assert area.source == BoundsSource.DEFAULT
        assert area.bounds.min_x == pytest.approx(1 / 12)
        assert area.bounds.max_x == pytest.approx(3.0 - 1 / 12)
        assert area.bounds.max_y == pytest.approx(2.0 - 1 / 12)

    def test_excessive_margin_ignored_on_default_page(
        self, resolver: CanvasAreaResolver
    ) -> None:
        area = resolver.resolve(CanvasBounds("c"), margin_inches=20.0)
        assert area.source == BoundsSource.DEFAULT
        assert area.bounds == AreaResolverConfig().default_page
        assert area.applied_margin == 0.0

    def test_custom_default_page(self) -> None:
        resolver = CanvasAreaResolver(AreaResolverConfig(default_page=Rect(0.0, 0.0, 2.0, 1.5)))
        area = resolver.resolve(CanvasBounds("c"), margin_inches=0.0)
        assert area.bounds == Rect(0.0, 0.0, 2.0, 1.5)


class TestResolverProperties:
    """Properties that hold for every input."""

    @pytest.mark.parametrize(
        "bounds",
        [
            CanvasBounds("a", frame=Rect(0.0, 0.0, 3.0, 2.0)),
            CanvasBounds("b", guide=Rect(0.0, 0.0, 2.0, 1.5)),
            CanvasBounds("c", frame=Rect(0.0, 0.0, 0.2, 0.2)),
            CanvasBounds("d"),
        ],
    )
    def test_always_returns_positive_area(
        self, resolver: CanvasAreaResolver, bounds: CanvasBounds
    ) -> None:
        area = resolver.resolve(bounds)
        assert area.width > 0
        assert area.height > 0

    def test_repeated_resolution_is_identical(self, resolver: CanvasAreaResolver) -> None:
        bounds = CanvasBounds("c", frame=Rect(0.0, 0.0, 3.0, 2.0))
        occupied = [OccupiedRegion(Rect(0.5, 0.5, 1.0, 1.0), "V1")]
        assert resolver.resolve(bounds, occupied) == resolver.resolve(bounds, occupied)

    def test_invalid_config_rejected(self) -> None:
        with pytest.raises(ValueError):
            AreaResolverConfig(guide_margin=-0.1)


class TestSheetRect:
    """Tests for sheet_rect."""

    def test_frame_preferred(self, resolver: CanvasAreaResolver) -> None:
        bounds = CanvasBounds("c", frame=Rect(0.0, 0.0, 3.0, 2.0), guide=Rect(0.1, 0.1, 2.0, 1.5))
        assert resolver.sheet_rect(bounds) == Rect(0.0, 0.0, 3.0, 2.0)

    def test_guide_without_frame(self, resolver: CanvasAreaResolver) -> None:
        bounds = CanvasBounds("c", guide=Rect(0.1, 0.1, 2.0, 1.5))
        assert resolver.sheet_rect(bounds) == Rect(0.1, 0.1, 2.0, 1.5)

    def test_default_page_when_nothing_reported(self) -> None:
        page = Rect(0.0, 0.0, 1.5, 1.0)
        resolver = CanvasAreaResolver(AreaResolverConfig(default_page=page))
        assert resolver.sheet_rect(CanvasBounds("c")) == page
