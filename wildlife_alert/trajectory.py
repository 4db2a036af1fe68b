"""Short-horizon trajectory prediction from a heading and a walking speed."""

from __future__ import annotations

from wildlife_alert.config import (
    COMPASS_BEARINGS,
    DEFAULT_ANIMAL_SPEED_KMH,
    DEFAULT_BEARING,
    TRAJECTORY_HORIZONS_MIN,
)
from wildlife_alert.geo import project_point
from wildlife_alert.models import Location


def bearing_for(direction: str) -> float:
    return COMPASS_BEARINGS.get(direction.strip().upper(), DEFAULT_BEARING)


def predict_trajectory(
    location: Location,
    direction: str,
    speed_kmh: float = DEFAULT_ANIMAL_SPEED_KMH,
) -> list[Location]:
    """Current position followed by the projected positions at 30, 60 and 90 minutes."""
    bearing = bearing_for(direction)
    trajectory = [location]
    for minutes in TRAJECTORY_HORIZONS_MIN:
        distance_km = speed_kmh * minutes / 60
        trajectory.append(
            project_point(
                location,
                bearing,
                distance_km,
                address=f"Predicted position ({minutes} min)",
            )
        )
    return trajectory
