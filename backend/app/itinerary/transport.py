"""Transport category to routing mode mapping."""

from backend.app.models.common import RoutingMode, TransportCategory

# Flights have no directions-service equivalent; transit is the closest
# approximation and is a known limitation.
_MODE_BY_CATEGORY: dict[str, RoutingMode] = {
    TransportCategory.walking.value: RoutingMode.walking,
    TransportCategory.ride_hail.value: RoutingMode.driving,
    TransportCategory.taxi.value: RoutingMode.driving,
    TransportCategory.self_driving.value: RoutingMode.driving,
    TransportCategory.bus.value: RoutingMode.transit,
    TransportCategory.train.value: RoutingMode.transit,
    TransportCategory.flight.value: RoutingMode.transit,
    TransportCategory.bicycling.value: RoutingMode.bicycling,
}

_ALIASES: dict[str, str] = {
    "grab": TransportCategory.ride_hail.value,
    "ride-hail": TransportCategory.ride_hail.value,
    "self-driving": TransportCategory.self_driving.value,
    "driving": TransportCategory.self_driving.value,
}


def routing_mode_for(transport_category: str | TransportCategory | None) -> RoutingMode:
    """Map a transport category to a routing mode.

    Case-insensitive. Unknown or missing categories map to driving.
    """
    if transport_category is None:
        return RoutingMode.driving

    if isinstance(transport_category, TransportCategory):
        key = transport_category.value
    else:
        key = transport_category.strip().lower()
    key = _ALIASES.get(key, key)

    return _MODE_BY_CATEGORY.get(key, RoutingMode.driving)
