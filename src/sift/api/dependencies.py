# src/sift/api/dependencies.py
"""FastAPI dependency that parses request query parameters into a FilterModel."""

from typing import Callable, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from sift.core.config import SiftConfig
from sift.core.errors import FilterError
from sift.core.logging import color_palette, log
from sift.core.query.builder import FilterBuilder
from sift.core.query.fields import FilterShape
from sift.core.query.model import FilterModel


def filter_dependency(
    shape: FilterShape, config: Optional[SiftConfig] = None
) -> Callable[[Request], FilterModel]:
    """
    Create a dependency for `Depends(...)` that yields the request's FilterModel.

    Repeated query keys are preserved. Any FilterError becomes a 400 response
    whose detail is the error's `to_dict()`.

    Example:
        user_filters = filter_dependency(UserShape)

        @app.get("/users")
        def list_users(filters: FilterModel = Depends(user_filters)): ...
    """
    builder = FilterBuilder(shape, config)

    def get_filters(request: Request) -> FilterModel:
        try:
            return builder.parse(request.query_params.multi_items())
        except FilterError as e:
            log.debug(f"Rejected filters for {shape.name}: {color_palette['error'](e.message)}")
            raise HTTPException(status_code=400, detail=e.to_dict())

    return get_filters


def configure_error_handlers(app: FastAPI) -> None:
    """Render FilterError raised inside route handlers as a JSON 400 response."""

    @app.exception_handler(FilterError)
    async def filter_exception_handler(request: Request, exc: FilterError):
        return JSONResponse(
            status_code=400,
            content={"error": True, "detail": exc.to_dict(), "status_code": 400},
        )

    log.success("Configured filter error handlers")


__all__ = ["filter_dependency", "configure_error_handlers"]
