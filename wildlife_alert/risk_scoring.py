"""Risk classification for wildlife detections.

Computes an additive risk score per detection based on:
- Species base weight (configurable)
- Distance to the nearest settlement (closer → higher)
- Detector confidence
- Time of day (night detections are harder to respond to)

The total is then bucketed into LOW / MEDIUM / HIGH / CRITICAL.
"""

from __future__ import annotations

from datetime import datetime

from wildlife_alert.config import (
    CONFIDENCE_BANDS,
    DAY_END_HOUR,
    DAY_START_HOUR,
    DEFAULT_SPECIES_WEIGHT,
    DISTANCE_BANDS,
    FAR_DISTANCE_SCORE,
    NIGHT_BONUS,
    RISK_THRESHOLDS,
    SPECIES_BASE_WEIGHTS,
)
from wildlife_alert.models import RiskAssessment, RiskLevel, Species, TimeOfDay


def _species_weight(species: Species | str) -> int:
    key = species.value if isinstance(species, Species) else str(species).strip().upper()
    return SPECIES_BASE_WEIGHTS.get(key, DEFAULT_SPECIES_WEIGHT)


def _distance_score(distance_meters: float) -> int:
    for upper_bound, score in DISTANCE_BANDS:
        if distance_meters < upper_bound:
            return score
    return FAR_DISTANCE_SCORE


def _confidence_score(confidence_percent: float) -> int:
    for lower_bound, score in CONFIDENCE_BANDS:
        if confidence_percent >= lower_bound:
            return score
    return 0


def _level_for_score(score: int) -> RiskLevel:
    for threshold, level in RISK_THRESHOLDS:
        if score >= threshold:
            return RiskLevel(level)
    return RiskLevel.LOW


def time_of_day(timestamp: datetime) -> TimeOfDay:
    """Day between DAY_START_HOUR and DAY_END_HOUR in the timestamp's own clock."""
    if DAY_START_HOUR <= timestamp.hour < DAY_END_HOUR:
        return TimeOfDay.DAY
    return TimeOfDay.NIGHT


def risk_score(
    species: Species | str,
    distance_meters: float,
    confidence_percent: float,
    tod: TimeOfDay | str = TimeOfDay.DAY,
) -> RiskAssessment:
    breakdown: dict[str, int] = {
        "species": _species_weight(species),
        "distance": _distance_score(distance_meters),
        "confidence": _confidence_score(confidence_percent),
        "time_of_day": NIGHT_BONUS if TimeOfDay(tod) == TimeOfDay.NIGHT else 0,
    }
    total = sum(breakdown.values())
    return RiskAssessment(score=total, level=_level_for_score(total), breakdown=breakdown)


def classify_risk(
    species: Species | str,
    distance_meters: float,
    confidence_percent: float,
    tod: TimeOfDay | str = TimeOfDay.DAY,
) -> RiskLevel:
    """Return the ordinal risk level for one detection."""
    return risk_score(species, distance_meters, confidence_percent, tod).level
