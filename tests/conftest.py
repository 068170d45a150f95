"""Pytest configuration and shared fixtures for sheet layout tests."""

from __future__ import annotations

import copy
from typing import Any, Callable

import pytest

from sheetlayout.application.config import (
    LayoutSettings,
    load_snapshot_from_dict,
)
from sheetlayout.application.factory import ServiceFactory, reset_factory
from sheetlayout.application.services import SheetLayoutService
from sheetlayout.infrastructure.memory_host import InMemoryHost


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: end-to-end tests through the CLI or the REST API"
    )
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Snapshot data
# =============================================================================

# A101: 36" x 24" sheet with a titleblock frame, one view and one note.
# A102: no frame, only a guide grid.
# A103: nothing at all, resolves to the default page.
SNAPSHOT_DATA: dict[str, Any] = {
    "version": "1.0",
    "canvases": [
        {
            "id": "A101",
            "frame": {"min_x": 0.0, "min_y": 0.0, "max_x": 3.0, "max_y": 2.0},
            "occupied": [
                {
                    "owner": "V1",
                    "rect": {"min_x": 0.2, "min_y": 1.2, "max_x": 0.8, "max_y": 1.7},
                },
                {
                    "owner": "N1",
                    "kind": "annotation",
                    "rect": {"min_x": 2.4, "min_y": 0.2, "max_x": 2.8, "max_y": 0.4},
                },
            ],
        },
        {
            "id": "A102",
            "guide": {"min_x": 0.0, "min_y": 0.0, "max_x": 2.0, "max_y": 1.5},
        },
        {"id": "A103"},
    ],
    "contents": [
        {"id": "d1", "crop": [0.5, 0.4]},
        {"id": "d2", "crop": [24.0, 18.0], "scale": 48.0},
        {"id": "d3", "outline": [0.4, 0.3]},
        {"id": "placed1", "outline": [0.3, 0.3], "placed": True},
        {"id": "sched", "kind": "unsupported", "outline": [0.3, 0.3]},
        {"id": "empty"},
        {"id": "drifty", "outline": [0.3, 0.2], "drift": [0.05, 0.0]},
        {"id": "pinned", "outline": [0.3, 0.2], "drift": [0.05, 0.0], "pinned": True},
    ],
}


@pytest.fixture
def snapshot_data() -> dict[str, Any]:
    """A fresh, mutable copy of the shared snapshot dictionary."""
    return copy.deepcopy(SNAPSHOT_DATA)


@pytest.fixture
def make_host() -> Callable[..., InMemoryHost]:
    """Build an InMemoryHost from snapshot data, optionally with fail points."""

    def _make(
        data: dict[str, Any] | None = None,
        fail_points: list[dict[str, Any]] | None = None,
        settings: LayoutSettings | None = None,
    ) -> InMemoryHost:
        data = copy.deepcopy(data if data is not None else SNAPSHOT_DATA)
        if fail_points is not None:
            data["fail_points"] = fail_points
        return InMemoryHost.from_snapshot(load_snapshot_from_dict(data), settings)

    return _make


@pytest.fixture
def host(make_host: Callable[..., InMemoryHost]) -> InMemoryHost:
    return make_host()


@pytest.fixture
def service(host: InMemoryHost) -> SheetLayoutService:
    """SheetLayoutService over the shared snapshot with default settings."""
    return ServiceFactory().create_sheet_layout_service(host)


@pytest.fixture(autouse=True)
def _reset_default_factory():
    yield
    reset_factory()
