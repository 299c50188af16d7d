"""Application services — use case orchestration."""

from litigation_escrow.services.scenario_runner import (
    ScenarioAssertionError,
    ScenarioResult,
    ScenarioRunner,
    load_scenarios,
)

__all__ = ["ScenarioAssertionError", "ScenarioResult", "ScenarioRunner", "load_scenarios"]
