"""Great-circle helpers on a spherical Earth."""

import math

from backend.app.models.common import Coordinate

EARTH_RADIUS_KM = 6371.0


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance between two coordinates in kilometers.

    Symmetric and exactly zero for identical points.
    """
    lat1, lng1 = math.radians(a.lat), math.radians(a.lng)
    lat2, lng2 = math.radians(b.lat), math.radians(b.lng)

    dlat = lat2 - lat1
    dlng = lng2 - lng1

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(h))


def midpoint(a: Coordinate, b: Coordinate) -> Coordinate:
    """Geographic midpoint of the great-circle arc between two coordinates."""
    lat1, lng1 = math.radians(a.lat), math.radians(a.lng)
    lat2 = math.radians(b.lat)
    dlng = math.radians(b.lng - a.lng)

    bx = math.cos(lat2) * math.cos(dlng)
    by = math.cos(lat2) * math.sin(dlng)
    lat = math.atan2(math.sin(lat1) + math.sin(lat2), math.sqrt((math.cos(lat1) + bx) ** 2 + by**2))
    lng = lng1 + math.atan2(by, math.cos(lat1) + bx)

    # Normalise to [-180, 180]
    lng_deg = (math.degrees(lng) + 540) % 360 - 180
    return Coordinate(lat=math.degrees(lat), lng=lng_deg)


def detour_km(start: Coordinate, end: Coordinate, via: Coordinate) -> float:
    """Extra distance travelled when passing through `via` on the way from start to end."""
    extra = distance_km(start, via) + distance_km(via, end) - distance_km(start, end)
    return max(0.0, extra)
