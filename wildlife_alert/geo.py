"""Geodesic helpers shared by the trajectory predictor and the router."""

from __future__ import annotations

import math

from wildlife_alert.config import EARTH_RADIUS_KM, KM_PER_DEGREE
from wildlife_alert.models import Location


def great_circle_distance_km(a: Location, b: Location) -> float:
    """Haversine distance in kilometres between two coordinates."""
    lat1, lon1 = math.radians(a.latitude), math.radians(a.longitude)
    lat2, lon2 = math.radians(b.latitude), math.radians(b.longitude)
    dlat = lat2 - lat1
    dlon = lon2 - lon1

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def project_point(
    origin: Location,
    bearing_degrees: float,
    distance_km: float,
    address: str | None = None,
) -> Location:
    """Move *distance_km* from *origin* along *bearing_degrees* (0 = N, 90 = E).

    Uses a flat 1° ≈ 111 km conversion on both axes, so longitude offsets are
    overstated away from the equator. Good enough for the few kilometres an
    animal covers in 90 minutes; not a geodesic solver.
    """
    rad = math.radians(bearing_degrees)
    offset_deg = distance_km / KM_PER_DEGREE
    return Location(
        latitude=origin.latitude + offset_deg * math.cos(rad),
        longitude=origin.longitude + offset_deg * math.sin(rad),
        address=address,
    )
