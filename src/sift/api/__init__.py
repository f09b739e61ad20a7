"""FastAPI integration for the sift filter engine."""

from sift.api.dependencies import configure_error_handlers, filter_dependency

__all__ = ["filter_dependency", "configure_error_handlers"]
