"""Main CLI entry point for the wildlife alert engine.

Loads a scenario JSON file (stations, detections, operator actions), replays
it through the engine (create → dispatch → resolve → route) and prints a
formatted text report.

    python -m wildlife_alert.main --input wildlife_alert/examples/sample_scenario.json

Pass ``--now 2026-03-01T18:05:00+03:00`` to pin the clock so dispatch times and
SLA results are reproducible.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError

from wildlife_alert.config import DEFAULT_STATIONS
from wildlife_alert.errors import AlertEngineError
from wildlife_alert.lifecycle import AlertManager
from wildlife_alert.models import Scenario, ScenarioReport, Station
from wildlife_alert.notifications import NotificationLog
from wildlife_alert.response_time import Clock, as_utc, meets_sla, utc_now
from wildlife_alert.routing import DirectionsProvider, Router, build_provider
from wildlife_alert.settings import Settings, settings

log = logging.getLogger(__name__)


def load_stations(cfg: Settings) -> list[Station]:
    """Stations from the configured JSON file, or the built-in defaults."""
    if cfg.stations_file:
        with open(cfg.stations_file) as f:
            raw = json.load(f)
    else:
        raw = DEFAULT_STATIONS
    return [Station.model_validate(s) for s in raw]


def build_manager(
    stations: list[Station],
    provider: DirectionsProvider | None = None,
    clock: Clock = utc_now,
    cfg: Settings = settings,
) -> AlertManager:
    router = Router(stations, provider=provider or build_provider(cfg), clock=clock)
    return AlertManager(
        router,
        clock=clock,
        notifications=NotificationLog(),
        default_speed_kmh=cfg.default_speed_kmh,
    )


# ── Pipeline ─────────────────────────────────────────────────────────────────

async def run_scenario(
    scenario: Scenario,
    provider: DirectionsProvider | None = None,
    clock: Clock = utc_now,
    cfg: Settings = settings,
) -> ScenarioReport:
    """Replay a scenario and return structured output."""
    stations = scenario.stations if scenario.stations is not None else load_stations(cfg)
    manager = build_manager(stations, provider=provider, clock=clock, cfg=cfg)

    for req in scenario.alerts:
        manager.create_alert(req.detection, req.direction, req.speed_kmh)

    rejected: list[str] = []
    for alert_id in scenario.dispatch:
        try:
            manager.dispatch(alert_id)
        except AlertEngineError as exc:
            rejected.append(str(exc))
    for alert_id in scenario.resolve:
        try:
            manager.resolve(alert_id)
        except AlertEngineError as exc:
            rejected.append(str(exc))

    if rejected:
        log.warning("%d scenario actions rejected", len(rejected))

    routes = {}
    if stations:
        for alert in manager.active_alerts():
            routes[alert.id] = await manager.route_for(alert.id)

    return ScenarioReport(
        alerts=manager.alerts,
        routes=routes,
        stats=manager.stats(),
        notifications=manager.notifications.items,
        rejected=rejected,
    )


# ── Text report formatter ────────────────────────────────────────────────────

SEPARATOR = "=" * 72


def format_report(report: ScenarioReport) -> str:
    lines: list[str] = []

    lines.append(SEPARATOR)
    lines.append("  WILDLIFE INTRUSION ALERTS — RESPONSE REPORT")
    lines.append(SEPARATOR)
    lines.append("")

    stats = report.stats
    lines.append(">> SUMMARY")
    lines.append("-" * 40)
    lines.append(
        f"  {stats.total} alerts: {stats.pending} pending, "
        f"{stats.dispatched} dispatched, {stats.resolved} resolved"
    )
    if stats.avg_response_seconds is not None:
        lines.append(
            f"  Avg response: {stats.avg_response_seconds}s "
            f"(SLA met {stats.sla_compliance_rate:.0%})"
        )
    if stats.species_counts:
        counts = ", ".join(f"{k}={v}" for k, v in sorted(stats.species_counts.items()))
        lines.append(f"  Species: {counts}")
    lines.append("")

    lines.append(">> ALERTS")
    lines.append("-" * 40)
    if report.alerts:
        ordered = sorted(report.alerts, key=lambda a: a.risk_level, reverse=True)
        for a in ordered:
            where = a.location.address or f"({a.location.latitude:.4f}, {a.location.longitude:.4f})"
            lines.append(f"  [{a.risk_level.value}] {a.id}  {a.species.value}  {a.status.value}")
            lines.append(f"        Location: {where}")
            lines.append(
                f"        {a.distance_to_settlement_meters:.0f}m from settlement, moving {a.direction}, "
                f"ETA {a.eta_minutes} min"
            )
            if a.response_time_seconds is not None:
                verdict = "within SLA" if meets_sla(a.response_time_seconds) else "SLA exceeded"
                lines.append(f"        Response time: {a.response_time_seconds}s ({verdict})")
            lines.append("")
    else:
        lines.append("  No alerts.")
        lines.append("")

    lines.append(">> ROUTES")
    lines.append("-" * 40)
    if report.routes:
        for alert_id, r in report.routes.items():
            kind = "straight-line estimate" if r.degraded else "road route"
            lines.append(
                f"  {alert_id} ← {r.origin_station_id}: {r.distance_km:.1f} km, "
                f"{r.duration_minutes} min ({kind})"
            )
    else:
        lines.append("  No active alerts to route.")
    lines.append("")

    if report.rejected:
        lines.append(">> REJECTED ACTIONS")
        lines.append("-" * 40)
        for msg in report.rejected:
            lines.append(f"  • {msg}")
        lines.append("")

    lines.append(">> NOTIFICATIONS")
    lines.append("-" * 40)
    if report.notifications:
        for n in report.notifications:
            groups = ", ".join(g.value for g in n.sent_to)
            lines.append(f"  [{n.kind.value}] {n.title} → {groups}")
    else:
        lines.append("  None.")
    lines.append("")
    lines.append(SEPARATOR)

    return "\n".join(lines)


# ── CLI ──────────────────────────────────────────────────────────────────────

def _fixed_clock(value: str) -> Clock:
    pinned = as_utc(datetime.fromisoformat(value))
    return lambda: pinned


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Wildlife Intrusion Alert Engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--input", "-i",
        required=True,
        help="Path to scenario JSON file (stations, alerts, dispatch, resolve)",
    )
    parser.add_argument(
        "--now",
        help="Pin the clock to this ISO-8601 timestamp (default: current time)",
    )
    parser.add_argument(
        "--json-output",
        action="store_true",
        help="Print raw JSON output instead of formatted report",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help=f"Logging level (default: {settings.log_level})",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s  %(name)-28s  %(message)s",
    )

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: input file not found: {input_path}", file=sys.stderr)
        sys.exit(1)

    try:
        with open(input_path) as f:
            scenario = Scenario.model_validate(json.load(f))
        clock = _fixed_clock(args.now) if args.now else utc_now
    except (ValueError, ValidationError) as exc:
        print(f"Error: invalid input: {exc}", file=sys.stderr)
        sys.exit(1)

    try:
        report = asyncio.run(run_scenario(scenario, clock=clock))
    except AlertEngineError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.json_output:
        print(report.model_dump_json(indent=2))
    else:
        print(format_report(report))


if __name__ == "__main__":
    main()
