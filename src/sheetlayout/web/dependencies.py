"""FastAPI dependency injection for sheet layout services.

Every request carries its own snapshot, so each one gets a fresh
in-memory host. The factory only contributes default settings and the
stateless domain services.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from sheetlayout.application.config import (
    CanvasSnapshot,
    load_settings_from_dict,
    load_snapshot_from_dict,
)
from sheetlayout.application.factory import ServiceFactory, get_factory
from sheetlayout.application.services import SheetLayoutService
from sheetlayout.infrastructure import JsonFormatter
from sheetlayout.web.schemas.common import SnapshotRequestBase


@lru_cache(maxsize=1)
def get_service_factory() -> ServiceFactory:
    """Get cached ServiceFactory instance."""
    return get_factory()


def get_json_formatter(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> JsonFormatter:
    """Dependency for JsonFormatter."""
    return factory.get_json_formatter()


@dataclass
class RequestSession:
    """A layout service bound to one request's snapshot."""

    service: SheetLayoutService
    snapshot: CanvasSnapshot
    canvas_id: str


def open_session(request: SnapshotRequestBase, factory: ServiceFactory) -> RequestSession:
    """Load a request's snapshot and settings into a layout service.

    Raises:
        ConfigError: If the snapshot or settings fail validation.
    """
    snapshot = load_snapshot_from_dict(request.snapshot)
    if request.settings is not None:
        factory = ServiceFactory(settings=load_settings_from_dict(request.settings))
    host = factory.create_memory_host(snapshot)
    canvas_id = request.canvas_id or snapshot.canvases[0].id
    return RequestSession(
        service=factory.create_sheet_layout_service(host),
        snapshot=snapshot,
        canvas_id=canvas_id,
    )


# Type aliases for cleaner endpoint signatures
ServiceFactoryDep = Annotated[ServiceFactory, Depends(get_service_factory)]
JsonFormatterDep = Annotated[JsonFormatter, Depends(get_json_formatter)]
