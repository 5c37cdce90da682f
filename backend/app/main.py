"""FastAPI application."""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from backend.app.api.routes.activities import router as activities_router
from backend.app.api.routes.checklists import router as checklists_router
from backend.app.api.routes.days import router as days_router
from backend.app.api.routes.health import router as health_router
from backend.app.api.routes.metrics import router as metrics_router
from backend.app.api.routes.trips import router as trips_router
from backend.app.itinerary.errors import (
    AuthorizationError,
    ItineraryError,
    MissingCoordinatesError,
    NoNextStopError,
    NotFoundError,
    RouteLookupError,
    StructuralInvariantViolation,
)

app = FastAPI(title="Trip Itinerary Planner API", version="0.1.0")

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(trips_router)
app.include_router(days_router)
app.include_router(activities_router)
app.include_router(checklists_router)

_STATUS_BY_ERROR: list[tuple[type[ItineraryError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (StructuralInvariantViolation, status.HTTP_409_CONFLICT),
    (MissingCoordinatesError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (NoNextStopError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (RouteLookupError, status.HTTP_502_BAD_GATEWAY),
]


def status_for(exc: ItineraryError) -> int:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


@app.exception_handler(ItineraryError)
async def itinerary_error_handler(request: Request, exc: ItineraryError) -> JSONResponse:
    return JSONResponse(status_code=status_for(exc), content={"detail": str(exc)})


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Trip Itinerary Planner API", "version": "0.1.0"}
