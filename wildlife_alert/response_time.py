"""Response-time arithmetic. All durations are whole seconds."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Callable

from wildlife_alert.config import SLA_SECONDS

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Read a timestamp with no offset as UTC. Aware values keep their own offset."""
    if value.tzinfo is None or value.utcoffset() is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def response_time_seconds(detected_at: datetime, dispatched_at: datetime) -> int:
    """Seconds from detection to dispatch, floored.

    A dispatch recorded before its detection yields a negative value; that is
    a data error on the caller's side and is returned as-is.
    """
    return math.floor((dispatched_at - detected_at).total_seconds())


def meets_sla(seconds: int) -> bool:
    return seconds < SLA_SECONDS
