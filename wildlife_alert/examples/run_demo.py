"""Quick demo script — replays sample_scenario.json with a pinned clock.

Usage (from the project root):
    python -m wildlife_alert.examples.run_demo
"""

from __future__ import annotations

import asyncio
import json
import sys
from datetime import datetime
from pathlib import Path

from wildlife_alert.main import format_report, run_scenario
from wildlife_alert.models import Scenario

DEMO_NOW = datetime.fromisoformat("2026-03-01T18:05:00+03:00")


def main() -> None:
    sample_path = Path(__file__).resolve().parent / "sample_scenario.json"
    if not sample_path.exists():
        print(f"Sample scenario not found at {sample_path}", file=sys.stderr)
        sys.exit(1)

    with open(sample_path) as f:
        raw = json.load(f)

    scenario = Scenario.model_validate(raw)
    report = asyncio.run(run_scenario(scenario, clock=lambda: DEMO_NOW))
    print(format_report(report))


if __name__ == "__main__":
    main()
