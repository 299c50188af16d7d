#!/usr/bin/env python3
"""Litigation Escrow — Scenario Simulation.

Replays litigation timelines stored as JSON under scenarios/ against fresh
campaigns and prints where each case ended up:

    simple-win-no-appeal      Funded, won at trial, court award deposited
    loss-appeal-to-supreme    Lost, appealed up to the US Supreme Court
    win-remand-retrial        Won, reversed on appeal, won again at retrial
    decade-long-litigation    Years of appeals ending in a settlement

Usage:
    # Run every bundled scenario:
    uv run python simulation.py

    # Run a specific scenario by name:
    uv run python simulation.py --scenario loss-appeal-to-supreme

    # Replay scenarios from another directory, with JSON logs:
    uv run python simulation.py --dir path/to/scenarios --json-logs
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from litigation_escrow.config import get_settings
from litigation_escrow.domain.exceptions import CampaignError
from litigation_escrow.logging_config import get_logger, setup_logging
from litigation_escrow.services.scenario_runner import (
    ScenarioAssertionError,
    ScenarioResult,
    ScenarioRunner,
    load_scenarios,
)

logger = get_logger("simulation")


# ---------------------------------------------------------------------------
# Pretty-printing helpers
# ---------------------------------------------------------------------------
def section(title: str) -> None:
    print(f"\n{'=' * 70}")
    print(f"  {title}")
    print("=" * 70)


def print_result(result: ScenarioResult) -> None:
    snapshot = result.snapshot
    print(f"  Status:           {snapshot.status.value}")
    print(f"  Outcome:          {snapshot.outcome.value if snapshot.outcome else '-'}")
    print(f"  Total raised:     {snapshot.total_raised}")
    print(f"  DAO fees:         {snapshot.dao_fee_amount}")
    print(f"  Court deposits:   {snapshot.court_fees_deposited}")
    print(f"  Available funds:  {snapshot.available_funds}")
    print(f"  Payments:         {len(snapshot.invoice_payments)}")
    if snapshot.appeal_rounds:
        print("  Appeal rounds:")
        for appeal in snapshot.appeal_rounds:
            funding = "fundraising" if appeal.fundraising_needed else "prefunded"
            print(
                f"    #{appeal.round_number} {appeal.court_level.value:<14} "
                f"{appeal.path.value:<8} after {appeal.previous_outcome.value:<10} "
                f"{funding} (raised {appeal.total_raised})"
            )


# ===========================================================================
# Main
# ===========================================================================
def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Litigation Escrow Scenario Simulation")
    parser.add_argument(
        "--scenario",
        default=None,
        help="Run a specific scenario by name. Default: run all.",
    )
    parser.add_argument(
        "--dir",
        type=Path,
        default=settings.scenario_dir,
        help="Directory holding scenario JSON files.",
    )
    parser.add_argument(
        "--log-level",
        default=settings.app_log_level,
        help="Log level for campaign events (DEBUG, INFO, WARNING).",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        default=settings.use_json_logs,
        help="Emit JSON logs instead of colored console output.",
    )
    args = parser.parse_args(argv)

    setup_logging(log_level=args.log_level, json_logs=args.json_logs)

    scenarios = load_scenarios(args.dir)
    if args.scenario is not None:
        scenarios = [(p, s) for p, s in scenarios if s.name == args.scenario]
        if not scenarios:
            print(f"Unknown scenario '{args.scenario}' in {args.dir}")
            return 2

    runner = ScenarioRunner(settings)
    failures = 0
    for path, scenario in scenarios:
        section(f"{scenario.name}  ({path.name})")
        if scenario.description:
            print(f"  {scenario.description}")
        try:
            result = runner.run(scenario)
        except (CampaignError, ScenarioAssertionError) as exc:
            failures += 1
            print(f"  FAILED: {exc}")
            continue
        print_result(result)

    section(f"{len(scenarios) - failures}/{len(scenarios)} scenarios completed")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
