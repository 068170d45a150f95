"""REST API for sheet layout."""

from sheetlayout.web.app import app, create_app

__all__ = ["app", "create_app"]
