"""Service factory for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from sheetlayout.application.config import LayoutSettings

if TYPE_CHECKING:
    from sheetlayout.application.config import CanvasSnapshot
    from sheetlayout.application.services import SheetLayoutService
    from sheetlayout.contracts import HostDocumentProtocol
    from sheetlayout.domain.services import (
        CanvasAreaResolver,
        EmptySpaceFinder,
        LayoutEngine,
        OverlapDetector,
        SizeEstimator,
        ZoneGrid,
    )
    from sheetlayout.infrastructure.formatters import JsonFormatter
    from sheetlayout.infrastructure.memory_host import InMemoryHost


@dataclass
class ServiceFactory:
    """Factory for creating service instances.

    Domain services are stateless and cached per factory. Hosts and the
    services bound to them are created per request, since each request
    carries its own snapshot.

    Example:
        ```python
        factory = ServiceFactory(settings=load_settings(Path("layout.json")))
        host = factory.create_memory_host(snapshot)
        service = factory.create_sheet_layout_service(host)
        ```
    """

    settings: LayoutSettings = field(default_factory=LayoutSettings)

    _detector: "OverlapDetector | None" = field(default=None, init=False, repr=False)
    _estimator: "SizeEstimator | None" = field(default=None, init=False, repr=False)
    _resolver: "CanvasAreaResolver | None" = field(default=None, init=False, repr=False)
    _zone_grid: "ZoneGrid | None" = field(default=None, init=False, repr=False)
    _finder: "EmptySpaceFinder | None" = field(default=None, init=False, repr=False)
    _engine: "LayoutEngine | None" = field(default=None, init=False, repr=False)

    def get_overlap_detector(self) -> "OverlapDetector":
        """Get or create overlap detector instance."""
        if self._detector is None:
            from sheetlayout.domain.services import OverlapDetector

            self._detector = OverlapDetector()
        return self._detector

    def get_size_estimator(self) -> "SizeEstimator":
        """Get or create size estimator configured from the footprint settings."""
        if self._estimator is None:
            from sheetlayout.application.config.adapter import config_to_footprint_limits
            from sheetlayout.domain.services import SizeEstimator

            self._estimator = SizeEstimator(config_to_footprint_limits(self.settings.footprint))
        return self._estimator

    def get_area_resolver(self) -> "CanvasAreaResolver":
        """Get or create canvas area resolver instance."""
        if self._resolver is None:
            from sheetlayout.domain.services import CanvasAreaResolver

            self._resolver = CanvasAreaResolver()
        return self._resolver

    def get_zone_grid(self) -> "ZoneGrid":
        """Get or create zone grid instance."""
        if self._zone_grid is None:
            from sheetlayout.domain.services import ZoneGrid

            self._zone_grid = ZoneGrid(self.get_overlap_detector())
        return self._zone_grid

    def get_empty_space_finder(self) -> "EmptySpaceFinder":
        """Get or create empty space finder instance."""
        if self._finder is None:
            from sheetlayout.domain.services import EmptySpaceFinder

            search = self.settings.search
            self._finder = EmptySpaceFinder(
                self.get_overlap_detector(), search.step, search.max_candidates
            )
        return self._finder

    def get_layout_engine(self) -> "LayoutEngine":
        """Get or create layout engine instance."""
        if self._engine is None:
            from sheetlayout.domain.services import LayoutEngine

            self._engine = LayoutEngine(self.get_zone_grid())
        return self._engine

    def get_json_formatter(self) -> "JsonFormatter":
        """Create JSON formatter instance."""
        from sheetlayout.infrastructure.formatters import JsonFormatter

        return JsonFormatter()

    def create_memory_host(self, snapshot: "CanvasSnapshot") -> "InMemoryHost":
        """Create a snapshot-backed host for one request."""
        from sheetlayout.infrastructure.memory_host import InMemoryHost

        return InMemoryHost.from_snapshot(snapshot, self.settings)

    def create_sheet_layout_service(self, host: "HostDocumentProtocol") -> "SheetLayoutService":
        """Create a layout service bound to ``host``.

        Args:
            host: Host document the service queries and commits to.

        Returns:
            SheetLayoutService sharing this factory's domain services.
        """
        from sheetlayout.application.services import PlacementCommitter, SheetLayoutService

        estimator = self.get_size_estimator()
        committer = PlacementCommitter(
            host,
            estimator,
            retry_offset=self.settings.commit.retry_offset,
            position_tolerance=self.settings.commit.position_tolerance,
        )
        return SheetLayoutService(
            host,
            settings=self.settings,
            detector=self.get_overlap_detector(),
            estimator=estimator,
            resolver=self.get_area_resolver(),
            zone_grid=self.get_zone_grid(),
            finder=self.get_empty_space_finder(),
            engine=self.get_layout_engine(),
            committer=committer,
        )


# Default factory instance
_default_factory: ServiceFactory | None = None


def get_factory() -> ServiceFactory:
    """Get the default service factory."""
    global _default_factory
    if _default_factory is None:
        _default_factory = ServiceFactory()
    return _default_factory


def reset_factory() -> None:
    """Reset the factory to default (for testing cleanup)."""
    global _default_factory
    _default_factory = None
