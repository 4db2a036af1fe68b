"""Response routing from the nearest ranger station to an alert.

The router always answers with a Route. When a live directions provider is
configured and returns a usable result, the route follows roads; otherwise a
straight-line estimate (inflated for road curvature) is returned and flagged
as degraded.

Which provider is used is decided once, at construction time:

    router = Router(stations, provider=build_provider(settings))
    route = await router.compute_route(alert.location)
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable

import httpx

from wildlife_alert.config import FALLBACK_SPEED_KMH, ROAD_CURVATURE_FACTOR
from wildlife_alert.errors import NoStationsAvailable, ProviderUnavailable
from wildlife_alert.geo import great_circle_distance_km
from wildlife_alert.models import DirectionsResult, Location, Route, Station
from wildlife_alert.response_time import Clock, utc_now
from wildlife_alert.settings import Settings

log = logging.getLogger(__name__)


# -- directions providers -------------------------------------------------

class DirectionsProvider(ABC):
    @abstractmethod
    async def directions(
        self,
        origin: Location,
        destination: Location,
        departure_time: datetime,
    ) -> DirectionsResult:
        """Driving directions from *origin* to *destination*.

        Raises ProviderUnavailable when the provider cannot be reached at all.
        """


class NullProvider(DirectionsProvider):
    """No directions service configured; every request falls back."""

    async def directions(self, origin, destination, departure_time) -> DirectionsResult:
        raise ProviderUnavailable("no directions provider configured")


class LiveProvider(DirectionsProvider):
    """Google Directions JSON API, driving mode with live traffic."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://maps.googleapis.com/maps/api/directions/json",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._transport = transport

    async def directions(self, origin, destination, departure_time) -> DirectionsResult:
        params = {
            "origin": f"{origin.latitude},{origin.longitude}",
            "destination": f"{destination.latitude},{destination.longitude}",
            "mode": "driving",
            "departure_time": str(int(departure_time.timestamp())),
            "traffic_model": "best_guess",
            "key": self._api_key,
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                r = await client.get(self._base_url, params=params)
                r.raise_for_status()
                data = r.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            log.warning("Directions request failed: %s", exc)
            raise ProviderUnavailable(str(exc)) from exc

        return _parse_directions(data)


def _parse_directions(data: dict) -> DirectionsResult:
    status = data.get("status", "UNKNOWN_ERROR")
    if status != "OK":
        return DirectionsResult(status=status)

    try:
        leg = data["routes"][0]["legs"][0]
        distance = leg["distance"]["value"]
        duration = (leg.get("duration_in_traffic") or leg["duration"])["value"]
        points = [leg["start_location"]] + [step["end_location"] for step in leg.get("steps", [])]
        path = [Location(latitude=p["lat"], longitude=p["lng"]) for p in points]
    except (KeyError, IndexError, TypeError) as exc:
        raise ProviderUnavailable(f"malformed directions response: {exc!r}") from exc

    return DirectionsResult(
        status=status,
        distance_meters=float(distance),
        duration_seconds=float(duration),
        path=path,
    )


def build_provider(settings: Settings) -> DirectionsProvider:
    if settings.directions_api_key:
        log.info("Using live directions provider at %s", settings.directions_base_url)
        return LiveProvider(
            api_key=settings.directions_api_key,
            base_url=settings.directions_base_url,
            timeout=settings.directions_timeout,
        )
    log.info("No directions API key configured — routes will be straight-line estimates")
    return NullProvider()


# -- station selection & fallback -----------------------------------------

def nearest_station(location: Location, stations: Iterable[Station]) -> Station:
    """Closest station by great-circle distance; the first one wins a tie."""
    candidates = list(stations)
    if not candidates:
        raise NoStationsAvailable()
    return min(candidates, key=lambda s: great_circle_distance_km(s.location, location))


def fallback_route(station: Station, destination: Location) -> Route:
    distance_km = great_circle_distance_km(station.location, destination) * ROAD_CURVATURE_FACTOR
    return Route(
        origin_station_id=station.id,
        destination_location=destination,
        distance_km=distance_km,
        duration_minutes=math.ceil(distance_km / FALLBACK_SPEED_KMH * 60),
        path=[station.location, destination],
        degraded=True,
    )


# -- router ---------------------------------------------------------------

class Router:
    def __init__(
        self,
        stations: Iterable[Station],
        provider: DirectionsProvider | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self.stations = list(stations)
        self.provider = provider if provider is not None else NullProvider()
        self._clock = clock

    async def compute_route(
        self,
        alert_location: Location,
        candidate_stations: Iterable[Station] | None = None,
    ) -> Route:
        """Route from the nearest candidate station to *alert_location*.

        Raises NoStationsAvailable only when there is nothing to route from.
        """
        stations = self.stations if candidate_stations is None else list(candidate_stations)
        station = nearest_station(alert_location, stations)

        try:
            result = await self.provider.directions(station.location, alert_location, self._clock())
        except ProviderUnavailable as exc:
            log.info("Directions unavailable (%s) — straight-line route from %s", exc, station.id)
            return fallback_route(station, alert_location)

        if not result.ok or result.distance_meters is None or result.duration_seconds is None:
            log.warning("Directions returned %s — straight-line route from %s", result.status, station.id)
            return fallback_route(station, alert_location)

        return Route(
            origin_station_id=station.id,
            destination_location=alert_location,
            distance_km=round(result.distance_meters / 1000, 1),
            duration_minutes=math.ceil(result.duration_seconds / 60),
            path=result.path or [station.location, alert_location],
        )
