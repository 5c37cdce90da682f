"""Route models - directions results and alternative-route picker payloads."""

from pydantic import BaseModel, Field


class RouteOption(BaseModel):
    """A single route between two stops."""

    distance_km: float = Field(..., ge=0)
    duration_minutes: int = Field(..., ge=0)
    distance_text: str = ""
    duration_text: str = ""
    summary: str = ""


class RouteResult(BaseModel):
    """Primary route plus any alternatives returned by the directions service."""

    distance_km: float = Field(..., ge=0)
    duration_minutes: int = Field(..., ge=0)
    distance_text: str = ""
    duration_text: str = ""
    summary: str = ""
    alternatives: list[RouteOption] = Field(default_factory=list)

    def primary(self) -> RouteOption:
        """Return the primary route as a RouteOption."""
        return RouteOption(
            distance_km=self.distance_km,
            duration_minutes=self.duration_minutes,
            distance_text=self.distance_text,
            duration_text=self.duration_text,
            summary=self.summary,
        )


class RouteAlternatives(BaseModel):
    """Currently selected route for an edge plus the alternatives on offer."""

    activity_id: str
    current: RouteOption
    alternatives: list[RouteOption]


class RouteSelection(BaseModel):
    """User choice among previously fetched alternatives."""

    distance_km: float = Field(..., ge=0)
    duration_minutes: int = Field(..., ge=0)
