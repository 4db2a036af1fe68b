"""Tests for notification building and the notification log."""

from __future__ import annotations

from conftest import make_detection
from wildlife_alert.config import DEFAULT_SAFETY_MESSAGE, SAFETY_MESSAGES
from wildlife_alert.lifecycle import build_alert
from wildlife_alert.models import NotificationKind, RecipientGroup
from wildlife_alert.notifications import NotificationLog, build_notification


class TestBuildNotification:
    def test_alert_notification_content(self):
        alert = build_alert(make_detection(), "NE")
        n = build_notification(alert)

        assert n.id == "notif-a1-alert"
        assert n.title == "ELEPHANT Detected"
        assert "Near Mtakuja Village" in n.message
        assert "350m from nearest settlement" in n.message
        assert "Elephants can be unpredictable" in n.safety_message
        assert n.timestamp == alert.timestamp
        assert n.read is False

    def test_critical_alert_reaches_everyone(self):
        alert = build_alert(make_detection(species="LION", distance_to_settlement_meters=50), "N")
        n = build_notification(alert)
        assert n.sent_to == [RecipientGroup.KWS, RecipientGroup.KRCS, RecipientGroup.COMMUNITY]

    def test_low_alert_goes_to_rangers_only(self):
        alert = build_alert(
            make_detection(species="UNKNOWN", distance_to_settlement_meters=5000, confidence_percent=50,
                           timestamp=make_detection().timestamp.replace(hour=12)),
            "N",
        )
        assert build_notification(alert).sent_to == [RecipientGroup.KWS]

    def test_unknown_species_gets_generic_safety_message(self):
        alert = build_alert(make_detection(species="UNKNOWN"), "N")
        assert build_notification(alert).safety_message == DEFAULT_SAFETY_MESSAGE

    def test_giraffe_gets_the_lion_warning(self):
        alert = build_alert(make_detection(species="GIRAFFE"), "N")
        assert build_notification(alert).safety_message == SAFETY_MESSAGES["LION"]

    def test_dispatch_title(self):
        alert = build_alert(make_detection(), "N")
        n = build_notification(alert, NotificationKind.DISPATCH)
        assert n.title == "Response Team Dispatched: ELEPHANT"
        assert n.id == "notif-a1-dispatch"


class TestNotificationLog:
    def _filled_log(self) -> NotificationLog:
        log = NotificationLog()
        log.notify(build_alert(make_detection(id="a1"), "N"), NotificationKind.ALERT)
        log.notify(build_alert(make_detection(id="a2"), "N"), NotificationKind.ALERT)
        return log

    def test_newest_first(self):
        log = self._filled_log()
        assert [n.alert_id for n in log.items] == ["a2", "a1"]

    def test_mark_read(self):
        log = self._filled_log()
        assert log.unread_count() == 2
        assert log.mark_read("notif-a1-alert") is True
        assert log.unread_count() == 1
        assert log.mark_read("nope") is False

    def test_mark_all_read(self):
        log = self._filled_log()
        log.mark_all_read()
        assert log.unread_count() == 0

    def test_clear(self):
        log = self._filled_log()
        log.clear("notif-a2-alert")
        assert [n.alert_id for n in log.items] == ["a1"]
        log.clear_all()
        assert log.items == []
