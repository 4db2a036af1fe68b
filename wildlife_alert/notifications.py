"""Community and ranger notifications for alert lifecycle events.

Maps risk levels to recipient groups, picks a species-specific safety
message, and keeps an in-memory, newest-first log the dashboard reads from.
"""

from __future__ import annotations

from wildlife_alert.config import DEFAULT_SAFETY_MESSAGE, RECIPIENT_MAP, SAFETY_MESSAGES
from wildlife_alert.models import Alert, Notification, NotificationKind, RecipientGroup


def safety_message(species: str) -> str:
    return SAFETY_MESSAGES.get(species, DEFAULT_SAFETY_MESSAGE)


def recipients_for(alert: Alert) -> list[RecipientGroup]:
    keys = RECIPIENT_MAP.get(alert.risk_level.value, ["KWS"])
    return [RecipientGroup(k) for k in keys]


_TITLES: dict[NotificationKind, str] = {
    NotificationKind.ALERT: "{species} Detected",
    NotificationKind.DISPATCH: "Response Team Dispatched: {species}",
    NotificationKind.RESOLVED: "{species} Alert Resolved",
}


def _describe(alert: Alert, kind: NotificationKind) -> str:
    where = alert.location.address or "unknown location"
    coords = f"({alert.location.latitude:.4f}, {alert.location.longitude:.4f})"
    name = alert.species.value.lower()

    if kind == NotificationKind.DISPATCH:
        return f"Rangers are on the way to the {name} reported at {where} {coords}."
    if kind == NotificationKind.RESOLVED:
        return f"The {name} alert at {where} {coords} has been closed."
    return (
        f"A {name} has been detected at {where} {coords}. "
        f"Distance: {alert.distance_to_settlement_meters:.0f}m from nearest settlement."
    )


def build_notification(alert: Alert, kind: NotificationKind = NotificationKind.ALERT) -> Notification:
    """Build the notification for one lifecycle event on *alert*."""
    if kind == NotificationKind.DISPATCH and alert.dispatched_at is not None:
        timestamp = alert.dispatched_at
    elif kind == NotificationKind.RESOLVED and alert.resolved_at is not None:
        timestamp = alert.resolved_at
    else:
        timestamp = alert.timestamp

    return Notification(
        id=f"notif-{alert.id}-{kind.value.lower()}",
        alert_id=alert.id,
        kind=kind,
        title=_TITLES[kind].format(species=alert.species.value),
        message=_describe(alert, kind),
        safety_message=safety_message(alert.species.value),
        timestamp=timestamp,
        species=alert.species,
        location=alert.location,
        sent_to=recipients_for(alert),
    )


class NotificationLog:
    """Newest-first list of notifications with read tracking."""

    def __init__(self) -> None:
        self._items: list[Notification] = []

    def add(self, notification: Notification) -> Notification:
        self._items.insert(0, notification)
        return notification

    def notify(self, alert: Alert, kind: NotificationKind) -> Notification:
        return self.add(build_notification(alert, kind))

    @property
    def items(self) -> list[Notification]:
        return list(self._items)

    def mark_read(self, notification_id: str) -> bool:
        for n in self._items:
            if n.id == notification_id:
                n.read = True
                return True
        return False

    def mark_all_read(self) -> None:
        for n in self._items:
            n.read = True

    def unread_count(self) -> int:
        return sum(1 for n in self._items if not n.read)

    def clear(self, notification_id: str) -> None:
        self._items = [n for n in self._items if n.id != notification_id]

    def clear_all(self) -> None:
        self._items = []
