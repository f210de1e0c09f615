"""Great-circle distance between two report locations, in metres."""

import logging
import math

logger = logging.getLogger("civic_api.clustering.geo_distance")

# Earth radius in metres
EARTH_RADIUS_M = 6_371_000


def haversine_m(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Distance in metres between two (lat, lng) points."""
    a = math.radians(lat2 - lat1)
    b = math.radians(lng2 - lng1)
    x = math.sin(a / 2) ** 2 + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(b / 2) ** 2
    # rounding can push x just outside [0, 1] for near-antipodal points
    x = min(1.0, max(0.0, x))
    c = 2 * math.atan2(math.sqrt(x), math.sqrt(1 - x))
    return EARTH_RADIUS_M * c


def _as_pair(coords) -> tuple[float, float] | None:
    if not coords:
        return None
    try:
        lon, lat = coords
        lon, lat = float(lon), float(lat)
    except (TypeError, ValueError):
        logger.debug("malformed coordinates %r", coords)
        return None
    if not (math.isfinite(lon) and math.isfinite(lat)):
        logger.debug("non-finite coordinates %r", coords)
        return None
    return lon, lat


def distance(coords_a, coords_b) -> float:
    """
    Metres between two (lon, lat) pairs.
    Returns +inf when either pair is missing or malformed, or when any component is exactly 0
    (0 is how unset coordinates arrive from clients, so it counts as unknown).
    """
    a = _as_pair(coords_a)
    b = _as_pair(coords_b)
    if a is None or b is None:
        return math.inf
    lon1, lat1 = a
    lon2, lat2 = b
    if not (lon1 and lat1 and lon2 and lat2):
        return math.inf
    return haversine_m(lat1, lon1, lat2, lon2)
