"""Alert lifecycle: enrichment at creation and one-way status transitions.

    PENDING ──dispatch──▶ DISPATCHED ──resolve──▶ RESOLVED
       └────────────────resolve (false positive)──────▲

Alerts are frozen models; every transition swaps in an updated copy, so a
rejected transition leaves the stored alert exactly as it was.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from datetime import timedelta
from typing import Iterable

from wildlife_alert.config import DEFAULT_ANIMAL_SPEED_KMH, ETA_METERS_PER_MINUTE
from wildlife_alert.errors import AlertNotFound, DuplicateAlert, InvalidTransition
from wildlife_alert.models import (
    Alert,
    AlertStats,
    AlertStatus,
    DetectionEvent,
    NotificationKind,
    Route,
)
from wildlife_alert.notifications import NotificationLog
from wildlife_alert.response_time import Clock, as_utc, meets_sla, response_time_seconds, utc_now
from wildlife_alert.risk_scoring import classify_risk, time_of_day
from wildlife_alert.routing import Router
from wildlife_alert.trajectory import predict_trajectory

log = logging.getLogger(__name__)

TRANSITIONS: dict[AlertStatus, frozenset[AlertStatus]] = {
    AlertStatus.PENDING: frozenset({AlertStatus.DISPATCHED, AlertStatus.RESOLVED}),
    AlertStatus.DISPATCHED: frozenset({AlertStatus.RESOLVED}),
    AlertStatus.RESOLVED: frozenset(),
}


def build_alert(
    detection: DetectionEvent,
    direction: str,
    speed_kmh: float = DEFAULT_ANIMAL_SPEED_KMH,
) -> Alert:
    """Enrich a detection with risk level, trajectory and a rough ETA."""
    risk = classify_risk(
        detection.species,
        detection.distance_to_settlement_meters,
        detection.confidence_percent,
        time_of_day(detection.timestamp),
    )
    return Alert(
        **detection.model_dump(),
        risk_level=risk,
        predicted_trajectory=predict_trajectory(detection.location, direction, speed_kmh),
        direction=direction,
        eta_minutes=math.ceil(detection.distance_to_settlement_meters / ETA_METERS_PER_MINUTE),
    )


class AlertManager:
    """Owns the alert collection and is the only thing that changes it."""

    def __init__(
        self,
        router: Router,
        clock: Clock = utc_now,
        notifications: NotificationLog | None = None,
        default_speed_kmh: float = DEFAULT_ANIMAL_SPEED_KMH,
    ) -> None:
        self.router = router
        self.notifications = notifications
        self.default_speed_kmh = default_speed_kmh
        self._clock = clock
        self._alerts: dict[str, Alert] = {}

    # -- creation ---------------------------------------------------------

    def create_alert(
        self,
        detection: DetectionEvent,
        direction: str,
        speed_kmh: float | None = None,
    ) -> Alert:
        if detection.id in self._alerts:
            raise DuplicateAlert(detection.id)

        if speed_kmh is None:
            speed_kmh = self.default_speed_kmh
        alert = build_alert(detection, direction, speed_kmh)
        self._alerts[alert.id] = alert
        log.info(
            "Alert %s created: %s %s (%.0fm from settlement)",
            alert.id, alert.risk_level.value, alert.species.value,
            alert.distance_to_settlement_meters,
        )
        self._notify(alert, NotificationKind.ALERT)
        return alert

    # -- transitions ------------------------------------------------------

    def dispatch(self, alert_id: str) -> Alert:
        alert = self.get(alert_id)
        self._check(alert, AlertStatus.DISPATCHED)

        now = self._now()
        updated = alert.model_copy(update={
            "status": AlertStatus.DISPATCHED,
            "dispatched_at": now,
            "response_time_seconds": response_time_seconds(alert.timestamp, now),
        })
        self._alerts[alert_id] = updated
        log.info("Alert %s dispatched after %ss", alert_id, updated.response_time_seconds)
        self._notify(updated, NotificationKind.DISPATCH)
        return updated

    def resolve(self, alert_id: str) -> Alert:
        alert = self.get(alert_id)
        self._check(alert, AlertStatus.RESOLVED)

        updated = alert.model_copy(update={
            "status": AlertStatus.RESOLVED,
            "resolved_at": self._now(),
        })
        self._alerts[alert_id] = updated
        if alert.status == AlertStatus.PENDING:
            log.info("Alert %s closed without dispatch", alert_id)
        else:
            log.info("Alert %s resolved", alert_id)
        self._notify(updated, NotificationKind.RESOLVED)
        return updated

    def _check(self, alert: Alert, target: AlertStatus) -> None:
        if target not in TRANSITIONS[alert.status]:
            log.warning("Rejected %s → %s for alert %s", alert.status.value, target.value, alert.id)
            raise InvalidTransition(alert.id, alert.status.value, target.value)

    def _now(self):
        return as_utc(self._clock())

    def _notify(self, alert: Alert, kind: NotificationKind) -> None:
        if self.notifications is not None:
            self.notifications.notify(alert, kind)

    # -- queries ----------------------------------------------------------

    def get(self, alert_id: str) -> Alert:
        try:
            return self._alerts[alert_id]
        except KeyError:
            raise AlertNotFound(alert_id) from None

    @property
    def alerts(self) -> list[Alert]:
        return list(self._alerts.values())

    def active_alerts(self) -> list[Alert]:
        return [a for a in self._alerts.values() if a.status != AlertStatus.RESOLVED]

    def recent_alerts(self, hours: float = 24) -> list[Alert]:
        cutoff = self._now() - timedelta(hours=hours)
        return [a for a in self._alerts.values() if a.timestamp > cutoff]

    def stats(self) -> AlertStats:
        return summarize(self._alerts.values())

    async def route_for(self, alert_id: str) -> Route:
        """Route to the alert's current location. The result is not stored on the alert."""
        alert = self.get(alert_id)
        return await self.router.compute_route(alert.location)


def summarize(alerts: Iterable[Alert]) -> AlertStats:
    alerts = list(alerts)
    statuses = Counter(a.status for a in alerts)
    times = [a.response_time_seconds for a in alerts if a.response_time_seconds is not None]

    avg = None
    rate = None
    if times:
        avg = round(sum(times) / len(times), 1)
        rate = round(sum(1 for t in times if meets_sla(t)) / len(times), 3)

    return AlertStats(
        total=len(alerts),
        pending=statuses[AlertStatus.PENDING],
        dispatched=statuses[AlertStatus.DISPATCHED],
        resolved=statuses[AlertStatus.RESOLVED],
        avg_response_seconds=avg,
        sla_compliance_rate=rate,
        species_counts=dict(Counter(a.species.value for a in alerts)),
    )
