"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from meal_planner.api.dishes import router as dishes_router
from meal_planner.api.meals import router as meals_router
from meal_planner.app_logging import configure_logging
from meal_planner.containers import AppContainer
from meal_planner.domain.errors import (
    ConflictError,
    InsufficientServingsError,
    InvalidInputError,
    MealPlannerError,
    NotFoundError,
)

_ERROR_STATUS: tuple[tuple[type[MealPlannerError], int], ...] = (
    (NotFoundError, 404),
    (InvalidInputError, 422),
    (ConflictError, 409),
    (InsufficientServingsError, 409),
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Meal Planner")
    app.state.container = container

    app.include_router(dishes_router)
    app.include_router(meals_router)

    @app.exception_handler(MealPlannerError)
    async def meal_planner_error(
        request: Request, exc: MealPlannerError
    ) -> JSONResponse:
        status_code = _status_for(exc)
        logger.info(
            "Rejected request",
            extra={"path": request.url.path, "error": exc.code},
        )
        return JSONResponse(
            status_code=status_code,
            content={"error": exc.code, "detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _status_for(exc: MealPlannerError) -> int:
    """Map a domain error to its HTTP status code."""
    for error_type, status_code in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return 400
