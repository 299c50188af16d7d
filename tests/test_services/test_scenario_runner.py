"""Tests for the ScenarioRunner replaying litigation timelines.

The bundled scenarios double as end-to-end tests of the campaign: each one is
replayed and its final ledger compared with hand-computed figures.
"""

from __future__ import annotations

import pytest
import structlog

from litigation_escrow.config import Settings
from litigation_escrow.domain.clock import ManualClock
from litigation_escrow.domain.enums import CampaignStatus, CourtLevel, LitigationPath
from litigation_escrow.domain.exceptions import InsufficientFundsError
from litigation_escrow.schemas.scenario import Scenario
from litigation_escrow.services.scenario_runner import (
    ScenarioAssertionError,
    ScenarioRunner,
    identity,
    load_scenarios,
)


@pytest.fixture
def runner() -> ScenarioRunner:
    return ScenarioRunner(Settings(_env_file=None))


@pytest.fixture
def scenarios(scenario_dir):
    return {scenario.name: scenario for _, scenario in load_scenarios(scenario_dir)}


@pytest.mark.scenario
class TestBundledScenarios:
    def test_all_scenarios_loaded(self, scenarios) -> None:
        assert set(scenarios) == {
            "simple-win-no-appeal",
            "loss-appeal-to-supreme",
            "win-remand-retrial",
            "decade-long-litigation",
        }

    def test_simple_win(self, runner, scenarios) -> None:
        campaign = runner.run(scenarios["simple-win-no-appeal"]).campaign

        assert campaign.status is CampaignStatus.WON
        assert campaign.total_raised == 150_000
        assert campaign.dao_fee_amount == 15_000
        assert campaign.court_fees_deposited == 200_000
        assert campaign.judgment_amount == 200_000
        assert campaign.available_funds == 335_000
        assert campaign.appeal_rounds == ()

    def test_loss_appeal_to_supreme(self, runner, scenarios) -> None:
        campaign = runner.run(scenarios["loss-appeal-to-supreme"]).campaign

        assert campaign.status is CampaignStatus.WON
        assert campaign.current_round == 4
        assert [r.court_level for r in campaign.appeal_rounds] == [
            CourtLevel.APPELLATE,
            CourtLevel.STATE_SUPREME,
            CourtLevel.US_SUPREME,
        ]
        assert [r.fundraising_needed for r in campaign.appeal_rounds] == [False, True, True]
        assert campaign.total_raised == 1_270_000
        assert campaign.dao_fee_amount == 50_000 + 32_000 + 45_000
        assert campaign.total_payments == 600_000
        assert campaign.available_funds == 543_000

    def test_win_remand_retrial(self, runner, scenarios) -> None:
        campaign = runner.run(scenarios["win-remand-retrial"]).campaign

        assert campaign.status is CampaignStatus.WON
        retrial = campaign.appeal_rounds[-1]
        assert retrial.court_level is CourtLevel.DISTRICT
        assert retrial.path is LitigationPath.RETRIAL
        assert retrial.total_raised == 160_000
        assert campaign.available_funds == 524_000

    def test_decade_long_litigation(self, runner, scenarios) -> None:
        campaign = runner.run(scenarios["decade-long-litigation"]).campaign

        assert campaign.status is CampaignStatus.SETTLED
        assert campaign.current_round == 5
        assert campaign.appeal_rounds[-1].path is LitigationPath.REMAND
        assert campaign.total_raised == 1_600_000
        assert campaign.dao_fee_amount == 160_000
        assert campaign.available_funds == 490_000

    def test_ledger_never_negative_on_happy_paths(self, runner, scenarios) -> None:
        for scenario in scenarios.values():
            assert runner.run(scenario).campaign.available_funds >= 0


class TestRunnerBehaviour:
    def test_build_campaign_uses_first_funding_timestamp(self, runner, scenarios) -> None:
        campaign = runner.build_campaign(scenarios["simple-win-no-appeal"], ManualClock())
        assert campaign.config.deadline_unix == 1_100
        assert campaign.config.refund_window_start_unix == 1_300
        assert campaign.config.attorney == identity("attorney")
        assert campaign.config.min_raise_lamports == 100_000

    def test_failed_initial_round_and_refund_claims(self, runner) -> None:
        scenario = Scenario.model_validate(
            {
                "name": "underfunded",
                "initial_funding": 50,
                "min_raise": 100,
                "events": [
                    {"type": "initial_funding", "timestamp": 1000, "amount": 30},
                    {"type": "initial_funding", "timestamp": 1010, "amount": 20, "funder": "b"},
                    {"type": "evaluate", "timestamp": 1100, "expected_status": "failed_refunding"},
                    {"type": "claim_refund", "timestamp": 1200, "expected_amount": 30},
                    {"type": "claim_refund", "timestamp": 1201, "funder": "b"},
                ],
                "expected_final_status": "failed_refunding",
            }
        )
        result = runner.run(scenario)
        assert result.refunds == {"funder_a": 30, "b": 20}
        assert result.snapshot.available_funds == 0

    def test_multisig_refund(self, runner) -> None:
        scenario = Scenario.model_validate(
            {
                "name": "refunded",
                "initial_funding": 100,
                "min_raise": 100,
                "events": [
                    {"type": "initial_funding", "timestamp": 1000, "amount": 100},
                    {"type": "evaluate", "timestamp": 1100},
                    {"type": "approve_refund", "timestamp": 1300},
                ],
                "expected_final_status": "refunding",
            }
        )
        campaign = runner.run(scenario).campaign
        assert campaign.approvals == (identity("attorney"), identity("platform"))

    def test_status_mismatch_raises(self, runner) -> None:
        scenario = Scenario.model_validate(
            {
                "name": "wrong-expectation",
                "initial_funding": 100,
                "min_raise": 100,
                "events": [
                    {"type": "initial_funding", "timestamp": 1000, "amount": 100},
                    {"type": "evaluate", "timestamp": 1100, "expected_status": "failed_refunding"},
                ],
            }
        )
        with pytest.raises(ScenarioAssertionError, match="expected status failed_refunding"):
            runner.run(scenario)

    def test_refund_amount_mismatch_raises(self, runner) -> None:
        scenario = Scenario.model_validate(
            {
                "name": "wrong-refund",
                "initial_funding": 10,
                "min_raise": 100,
                "events": [
                    {"type": "initial_funding", "timestamp": 1000, "amount": 10},
                    {"type": "evaluate", "timestamp": 1100},
                    {"type": "claim_refund", "timestamp": 1200, "expected_amount": 11},
                ],
            }
        )
        with pytest.raises(ScenarioAssertionError, match="refund of 11"):
            runner.run(scenario)

    def test_campaign_errors_propagate(self, runner) -> None:
        scenario = Scenario.model_validate(
            {
                "name": "overspend",
                "initial_funding": 100,
                "min_raise": 100,
                "events": [
                    {"type": "initial_funding", "timestamp": 1000, "amount": 100},
                    {"type": "evaluate", "timestamp": 1100},
                    {"type": "pay_invoice", "timestamp": 1200, "invoice_id": "I", "amount": 91},
                ],
            }
        )
        with pytest.raises(InsufficientFundsError):
            runner.run(scenario)

    def test_campaign_context_is_released_after_run(self, runner, scenarios) -> None:
        runner.run(scenarios["simple-win-no-appeal"])
        assert "campaign_id" not in structlog.contextvars.get_contextvars()
