"""Data models for the wildlife alert engine.

All input/output contracts are defined here using Pydantic for validation
and easy JSON serialization. Detection events arrive from the ingestion
side; alerts, routes and notifications are what the dashboard renders.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wildlife_alert.response_time import as_utc


# ── Enums ────────────────────────────────────────────────────────────────────

class Species(str, Enum):
    ELEPHANT = "ELEPHANT"
    LION = "LION"
    GIRAFFE = "GIRAFFE"
    RHINO = "RHINO"
    BUFFALO = "BUFFALO"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def _missing_(cls, value):
        # Case-insensitive; anything unrecognised is tagged UNKNOWN
        if isinstance(value, str):
            upper = value.strip().upper()
            for member in cls:
                if member.value == upper:
                    return member
            return cls.UNKNOWN
        return None


class RiskLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        return _RISK_ORDER.index(self.value)

    def __lt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank >= other.rank


_RISK_ORDER = ["LOW", "MEDIUM", "HIGH", "CRITICAL"]


class TimeOfDay(str, Enum):
    DAY = "day"
    NIGHT = "night"


class AlertStatus(str, Enum):
    PENDING = "PENDING"
    DISPATCHED = "DISPATCHED"
    RESOLVED = "RESOLVED"


class StationType(str, Enum):
    HQ = "HQ"
    GATE = "GATE"
    STATION = "STATION"


class RecipientGroup(str, Enum):
    KWS = "KWS"
    KRCS = "KRCS"
    COMMUNITY = "COMMUNITY"


class NotificationKind(str, Enum):
    ALERT = "ALERT"
    DISPATCH = "DISPATCH"
    RESOLVED = "RESOLVED"


# ── Geography & reference data ───────────────────────────────────────────────

class Location(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    address: str | None = None
    region: str | None = None


class Station(BaseModel):
    """A ranger response station. Read-only reference data."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    location: Location
    type: StationType = StationType.STATION


# ── Detections & alerts ──────────────────────────────────────────────────────

class DetectionEvent(BaseModel):
    """A single camera detection, immutable once created."""
    model_config = ConfigDict(frozen=True)

    id: str
    species: Species = Species.UNKNOWN
    timestamp: datetime
    location: Location
    distance_to_settlement_meters: float
    confidence_percent: float
    camera_id: str | None = None

    @field_validator("species", mode="before")
    @classmethod
    def _coerce_species(cls, value):
        if isinstance(value, str):
            return Species(value)
        return value

    @field_validator("timestamp")
    @classmethod
    def _timestamp_utc_default(cls, value: datetime) -> datetime:
        return as_utc(value)


class Alert(DetectionEvent):
    """A detection enriched for response. Only the lifecycle manager changes it."""

    risk_level: RiskLevel
    predicted_trajectory: tuple[Location, ...] = Field(min_length=1)
    direction: str
    eta_minutes: int
    status: AlertStatus = AlertStatus.PENDING
    dispatched_at: datetime | None = None
    resolved_at: datetime | None = None
    response_time_seconds: int | None = None

    @field_validator("dispatched_at", "resolved_at")
    @classmethod
    def _transition_time_utc_default(cls, value: datetime | None) -> datetime | None:
        return None if value is None else as_utc(value)


class RiskAssessment(BaseModel):
    """Numeric risk score with the per-factor breakdown that produced it."""
    score: int
    level: RiskLevel
    breakdown: dict[str, int] = Field(default_factory=dict)


# ── Routing ──────────────────────────────────────────────────────────────────

class DirectionsResult(BaseModel):
    """What a directions provider hands back for one origin/destination pair."""
    status: str
    distance_meters: float | None = None
    duration_seconds: float | None = None
    path: list[Location] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == "OK"


class Route(BaseModel):
    origin_station_id: str
    destination_location: Location
    distance_km: float
    duration_minutes: int
    path: list[Location]
    degraded: bool = False


# ── Analytics & notifications ────────────────────────────────────────────────

class AlertStats(BaseModel):
    total: int = 0
    pending: int = 0
    dispatched: int = 0
    resolved: int = 0
    avg_response_seconds: float | None = None
    sla_compliance_rate: float | None = None
    species_counts: dict[str, int] = Field(default_factory=dict)


class Notification(BaseModel):
    id: str
    alert_id: str
    kind: NotificationKind
    title: str
    message: str
    safety_message: str
    timestamp: datetime
    species: Species
    location: Location
    sent_to: list[RecipientGroup] = Field(default_factory=list)
    read: bool = False


# ── Request / scenario envelopes ─────────────────────────────────────────────

class AlertRequest(BaseModel):
    """One detection handed over by ingestion, plus its observed heading."""
    detection: DetectionEvent
    direction: str = "N"
    speed_kmh: float | None = Field(default=None, gt=0)


class Scenario(BaseModel):
    """Top-level CLI payload: stations, detections and operator actions to replay."""
    stations: list[Station] | None = None
    alerts: list[AlertRequest]
    dispatch: list[str] = Field(default_factory=list)
    resolve: list[str] = Field(default_factory=list)


class ScenarioReport(BaseModel):
    alerts: list[Alert]
    routes: dict[str, Route] = Field(default_factory=dict)
    stats: AlertStats
    notifications: list[Notification] = Field(default_factory=list)
    rejected: list[str] = Field(default_factory=list)
