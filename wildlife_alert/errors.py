"""Exceptions raised by the alert engine."""

from __future__ import annotations


class AlertEngineError(Exception):
    pass


class AlertNotFound(AlertEngineError):
    def __init__(self, alert_id: str):
        super().__init__(f"No alert with id '{alert_id}'")
        self.alert_id = alert_id


class DuplicateAlert(AlertEngineError):
    def __init__(self, alert_id: str):
        super().__init__(f"Alert '{alert_id}' already exists")
        self.alert_id = alert_id


class InvalidTransition(AlertEngineError):
    """A status change the transition table does not allow. State is left untouched."""

    def __init__(self, alert_id: str, current: str, requested: str):
        super().__init__(f"Alert '{alert_id}' cannot move from {current} to {requested}")
        self.alert_id = alert_id
        self.current = current
        self.requested = requested


class NoStationsAvailable(AlertEngineError):
    def __init__(self) -> None:
        super().__init__("No response stations to route from")


class ProviderUnavailable(AlertEngineError):
    """Directions provider could not answer. Handled inside the router."""
