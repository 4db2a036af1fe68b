"""Configuration constants for the wildlife alert engine.

All weights, thresholds, and defaults live here so they're easy to tweak
without touching logic code. Environment-driven runtime settings (API keys,
log level) live in ``wildlife_alert.settings``.
"""

# ── Species base-risk weights (higher = more dangerous) ─────────────────────
SPECIES_BASE_WEIGHTS: dict[str, int] = {
    "LION": 40,
    "ELEPHANT": 35,
    "RHINO": 30,
    "BUFFALO": 25,
}
DEFAULT_SPECIES_WEIGHT = 10

# ── Distance to settlement (metres) → score, checked top to bottom ──────────
DISTANCE_BANDS: list[tuple[float, int]] = [
    (100.0, 40),
    (300.0, 30),
    (500.0, 20),
    (1000.0, 10),
]
FAR_DISTANCE_SCORE = 5

# ── Detection confidence (percent) → score, lower edge inclusive ────────────
CONFIDENCE_BANDS: list[tuple[float, int]] = [
    (90.0, 15),
    (80.0, 10),
    (70.0, 5),
]

NIGHT_BONUS = 10

# Local hours counted as daytime: [start, end)
DAY_START_HOUR = 6
DAY_END_HOUR = 18

# Risk thresholds (score → level)
RISK_THRESHOLDS: list[tuple[int, str]] = [
    (80, "CRITICAL"),
    (60, "HIGH"),
    (40, "MEDIUM"),
    (0, "LOW"),
]

# ── Trajectory prediction ───────────────────────────────────────────────────
COMPASS_BEARINGS: dict[str, float] = {
    "N": 0.0,
    "NE": 45.0,
    "E": 90.0,
    "SE": 135.0,
    "S": 180.0,
    "SW": 225.0,
    "W": 270.0,
    "NW": 315.0,
}
DEFAULT_BEARING = 0.0
DEFAULT_ANIMAL_SPEED_KMH = 12.0     # typical elephant walking pace
TRAJECTORY_HORIZONS_MIN: list[int] = [30, 60, 90]
KM_PER_DEGREE = 111.0

# ── Geometry ────────────────────────────────────────────────────────────────
EARTH_RADIUS_KM = 6371.0

# ── Routing fallback ────────────────────────────────────────────────────────
ROAD_CURVATURE_FACTOR = 1.3         # straight line → road distance
FALLBACK_SPEED_KMH = 40.0

# Rough ETA shown on an alert before any route is requested
ETA_METERS_PER_MINUTE = 200.0

# ── Response-time SLA ───────────────────────────────────────────────────────
SLA_SECONDS = 30

# ── Notifications ───────────────────────────────────────────────────────────
RECIPIENT_MAP: dict[str, list[str]] = {
    "CRITICAL": ["KWS", "KRCS", "COMMUNITY"],
    "HIGH": ["KWS", "COMMUNITY"],
    "MEDIUM": ["KWS", "COMMUNITY"],
    "LOW": ["KWS"],
}

SAFETY_MESSAGES: dict[str, str] = {
    "ELEPHANT": "Stay indoors and keep a safe distance. Elephants can be unpredictable. "
                "Do not approach or provoke.",
    "LION": "DANGER: Remain indoors immediately. Lions are predators. Keep children and pets "
            "inside. Do not go outside until rangers arrive.",
    "RHINO": "Keep away from the area. Rhinos have poor eyesight but will charge if threatened. "
             "Stay in secure buildings.",
    "BUFFALO": "Buffalo can be aggressive. Stay indoors and avoid the area. "
               "Do not attempt to scare them away.",
}
# Giraffe shares the lion warning
SAFETY_MESSAGES["GIRAFFE"] = SAFETY_MESSAGES["LION"]
DEFAULT_SAFETY_MESSAGE = "Wildlife detected nearby. Please stay alert and follow ranger instructions."

# ── Reference data: ranger response stations ────────────────────────────────
DEFAULT_STATIONS: list[dict] = [
    {
        "id": "s1",
        "name": "Response Team Alpha",
        "location": {"latitude": -3.39642, "longitude": 37.676531},
        "type": "HQ",
    },
    {
        "id": "s2",
        "name": "Response Team Bravo",
        "location": {"latitude": -3.39764, "longitude": 37.676841},
        "type": "STATION",
    },
]
