"""Common types and enums shared across all models."""

from enum import Enum

from pydantic import BaseModel, Field


class Coordinates(BaseModel):
    """Geographic coordinates (WGS84)."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class RoutingMode(str, Enum):
    """Travel modes accepted by the directions service."""

    driving = "driving"
    walking = "walking"
    bicycling = "bicycling"
    transit = "transit"


class TransportCategory(str, Enum):
    """Trip-planner level travel choice for the leg to the next stop."""

    walking = "walking"
    ride_hail = "ride_hail"
    taxi = "taxi"
    self_driving = "self_driving"
    bus = "bus"
    train = "train"
    flight = "flight"
    bicycling = "bicycling"


class TimeSource(str, Enum):
    """Provenance of a stored travel time.

    unset -> auto -> pinned. ``pinned`` values are never overwritten by
    automatic recomputation.
    """

    unset = "unset"
    auto = "auto"
    pinned = "pinned"
