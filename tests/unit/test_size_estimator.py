"""Unit tests for SizeEstimator footprint estimation."""

import math

import pytest

from sheetlayout.domain.entities import ContentItem
from sheetlayout.domain.services import FootprintLimits, SizeEstimator
from sheetlayout.domain.value_objects import ContentExtent, Footprint


@pytest.fixture
def estimator() -> SizeEstimator:
    return SizeEstimator()


class TestFootprintLimits:
    """Tests for FootprintLimits."""

    def test_defaults(self) -> None:
        limits = FootprintLimits()
        assert limits.max_width == pytest.approx(1.0)
        assert limits.max_height == pytest.approx(10 / 12)
        assert limits.default == Footprint(4 / 12, 3 / 12)

    def test_max_below_default_rejected(self) -> None:
        with pytest.raises(ValueError):
            FootprintLimits(max_width=0.1)

    def test_non_positive_default_rejected(self) -> None:
        with pytest.raises(ValueError):
            FootprintLimits(default_width=0.0)


class TestEstimate:
    """Tests for SizeEstimator.estimate."""

    def test_crop_divided_by_scale(self, estimator: SizeEstimator) -> None:
        fp = estimator.estimate((24.0, 18.0), scale=48.0)
        assert fp.width == pytest.approx(0.5)
        assert fp.height == pytest.approx(0.375)

    def test_non_positive_scale_counts_as_one(self, estimator: SizeEstimator) -> None:
        assert estimator.estimate((0.5, 0.4), scale=0.0) == Footprint(0.5, 0.4)
        assert estimator.estimate((0.5, 0.4), scale=-2.0) == Footprint(0.5, 0.4)

    def test_outline_used_without_scaling(self, estimator: SizeEstimator) -> None:
        assert estimator.estimate(None, scale=48.0, outline=(0.4, 0.3)) == Footprint(0.4, 0.3)

    def test_crop_wins_over_outline(self, estimator: SizeEstimator) -> None:
        fp = estimator.estimate((0.6, 0.2), outline=(0.4, 0.3))
        assert fp == Footprint(0.6, 0.2)

    def test_missing_extent_uses_default(self, estimator: SizeEstimator) -> None:
        assert estimator.estimate(None) == estimator.limits.default

    def test_oversized_extent_is_clamped(self, estimator: SizeEstimator) -> None:
        fp = estimator.estimate((5.0, 5.0))
        assert fp.width == pytest.approx(1.0)
        assert fp.height == pytest.approx(10 / 12)

    def test_clamps_each_axis_independently(self, estimator: SizeEstimator) -> None:
        fp = estimator.estimate((5.0, 0.3))
        assert fp.width == pytest.approx(1.0)
        assert fp.height == pytest.approx(0.3)

    def test_tiny_extent_uses_default(self, estimator: SizeEstimator) -> None:
        assert estimator.estimate((0.001, 0.5)) == estimator.limits.default

    def test_non_finite_extent_uses_default(self, estimator: SizeEstimator) -> None:
        assert estimator.estimate((math.nan, 0.5)) == estimator.limits.default
        assert estimator.estimate((math.inf, 0.5)) == estimator.limits.default

    def test_result_always_within_limits(self, estimator: SizeEstimator) -> None:
        limits = estimator.limits
        for extent in [(0.2, 0.2), (100.0, 0.02), (0.0, 0.0), (-1.0, 2.0), (3.0, 3.0)]:
            fp = estimator.estimate(extent)
            assert 0 < fp.width <= limits.max_width
            assert 0 < fp.height <= limits.max_height

    def test_custom_limits(self) -> None:
        estimator = SizeEstimator(
            FootprintLimits(max_width=0.5, max_height=0.5, default_width=0.1, default_height=0.1)
        )
        assert estimator.estimate((2.0, 0.2)) == Footprint(0.5, 0.2)


class TestEstimateExtentAndItem:
    """Tests for the ContentExtent and ContentItem helpers."""

    def test_estimate_extent(self, estimator: SizeEstimator) -> None:
        extent = ContentExtent(crop=(1.0, 0.8), scale=2.0)
        assert estimator.estimate_extent(extent) == Footprint(0.5, 0.4)

    def test_estimate_item_records_footprint(self, estimator: SizeEstimator) -> None:
        item = ContentItem("d1", extent=ContentExtent(outline=(0.4, 0.3)))
        fp = estimator.estimate_item(item)
        assert item.footprint == fp == Footprint(0.4, 0.3)


class TestIsDegenerate:
    """Tests for empty-content detection."""

    def test_no_extent_is_degenerate(self, estimator: SizeEstimator) -> None:
        assert estimator.is_degenerate(ContentExtent())

    def test_zero_crop_is_degenerate(self, estimator: SizeEstimator) -> None:
        assert estimator.is_degenerate(ContentExtent(crop=(0.0, 0.0)))

    def test_usable_outline_is_not_degenerate(self, estimator: SizeEstimator) -> None:
        assert not estimator.is_degenerate(ContentExtent(crop=(0.0, 0.0), outline=(0.3, 0.2)))

    def test_usable_crop_is_not_degenerate(self, estimator: SizeEstimator) -> None:
        assert not estimator.is_degenerate(ContentExtent(crop=(12.0, 6.0), scale=48.0))
