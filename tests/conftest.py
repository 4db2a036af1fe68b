"""Shared fixtures: a pinned clock, two stations and a manager wired to them."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from wildlife_alert.lifecycle import AlertManager
from wildlife_alert.models import DetectionEvent, Location, Station
from wildlife_alert.notifications import NotificationLog
from wildlife_alert.routing import NullProvider, Router

DETECTED_AT = datetime(2026, 3, 1, 21, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


def make_detection(**overrides) -> DetectionEvent:
    defaults = dict(
        id="a1",
        species="ELEPHANT",
        timestamp=DETECTED_AT,
        location=Location(latitude=-3.436096, longitude=37.780275, address="Near Mtakuja Village"),
        distance_to_settlement_meters=350,
        confidence_percent=92,
    )
    defaults.update(overrides)
    return DetectionEvent(**defaults)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(DETECTED_AT)


@pytest.fixture
def stations() -> list[Station]:
    return [
        Station(id="s1", name="Response Team Alpha",
                location=Location(latitude=-3.39642, longitude=37.676531), type="HQ"),
        Station(id="s2", name="Response Team Bravo",
                location=Location(latitude=-3.39764, longitude=37.676841)),
    ]


@pytest.fixture
def manager(stations, clock) -> AlertManager:
    router = Router(stations, provider=NullProvider(), clock=clock)
    return AlertManager(router, clock=clock, notifications=NotificationLog())
