"""Scenario Runner — replays a litigation timeline against a campaign.

This is the application layer that coordinates between:
    - Scenario documents (validated pydantic models)
    - A ManualClock (the timeline's logical time)
    - The Campaign aggregate (every rule lives there)

The runner owns no business rules. It maps role names to identities, moves
the clock to each event's timestamp and forwards the event to the matching
campaign operation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from litigation_escrow.config import Settings, get_settings
from litigation_escrow.domain.campaign import Campaign
from litigation_escrow.domain.clock import ManualClock
from litigation_escrow.domain.exceptions import CampaignError
from litigation_escrow.domain.models import CampaignConfig
from litigation_escrow.logging_config import campaign_context, get_logger
from litigation_escrow.schemas.campaign import CampaignSnapshot
from litigation_escrow.schemas.scenario import (
    ApproveAppealEvent,
    ApproveRefundEvent,
    ClaimRefundEvent,
    ContributeToAppealEvent,
    DepositCourtAwardEvent,
    DepositCourtFeesEvent,
    EvaluateAppealEvent,
    EvaluateEvent,
    InitialFundingEvent,
    PayInvoiceEvent,
    PayJudgmentEvent,
    RecordOutcomeEvent,
    Scenario,
)

if TYPE_CHECKING:
    from pathlib import Path

    from litigation_escrow.domain.enums import CampaignStatus

logger = get_logger(__name__)

SIGNER_ROLES = ("attorney", "platform", "client")


class ScenarioAssertionError(Exception):
    """Raised when a scenario's expected status does not match the campaign."""

    def __init__(self, scenario: str, expected: str, actual: str, timestamp: int | None) -> None:
        where = f" at t={timestamp}" if timestamp is not None else ""
        super().__init__(
            f"Scenario '{scenario}'{where}: expected status {expected}, got {actual}"
        )
        self.scenario = scenario
        self.expected = expected
        self.actual = actual
        self.timestamp = timestamp


@dataclass
class ScenarioResult:
    """Outcome of replaying one scenario."""

    scenario: Scenario
    campaign: Campaign
    refunds: dict[str, int] = field(default_factory=dict)

    @property
    def snapshot(self) -> CampaignSnapshot:
        return CampaignSnapshot.from_campaign(self.campaign)


def identity(label: str) -> str:
    """Deterministic wallet identity for a role or funder label."""
    return f"wallet:{label}"


class ScenarioRunner:
    """Replays scenario documents against fresh campaigns."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._handlers = {
            "initial_funding": self._on_initial_funding,
            "evaluate": self._on_evaluate,
            "record_outcome": self._on_record_outcome,
            "deposit_court_award": self._on_deposit_court_award,
            "deposit_court_fees": self._on_deposit_court_fees,
            "pay_judgment": self._on_pay_judgment,
            "approve_appeal": self._on_approve_appeal,
            "contribute_to_appeal": self._on_contribute_to_appeal,
            "evaluate_appeal": self._on_evaluate_appeal,
            "pay_invoice": self._on_pay_invoice,
            "approve_refund": self._on_approve_refund,
            "claim_refund": self._on_claim_refund,
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build_campaign(self, scenario: Scenario, clock: ManualClock) -> Campaign:
        """Create the campaign a scenario runs against.

        The deadline is derived from the first initial_funding event so the
        timeline can be written in absolute timestamps.
        """
        first_funding = next(
            (e for e in scenario.events if isinstance(e, InitialFundingEvent)), None
        )
        if first_funding is not None:
            deadline = first_funding.timestamp + self._settings.scenario_deadline_offset
        else:
            deadline = self._settings.scenario_default_deadline

        config = CampaignConfig(
            id=f"scenario-{scenario.name}",
            min_raise_lamports=scenario.min_raise,
            deadline_unix=deadline,
            refund_window_start_unix=deadline + self._settings.scenario_refund_window_offset,
            signers=tuple(identity(role) for role in SIGNER_ROLES),
            dao_treasury=identity("dao_treasury"),
        )
        return Campaign(config, clock)

    def run(self, scenario: Scenario) -> ScenarioResult:
        """Replay every event in order.

        Raises:
            CampaignError: If the campaign rejects an event.
            ScenarioAssertionError: If an expected status does not match.
        """
        clock = ManualClock(0)
        result = ScenarioResult(scenario=scenario, campaign=self.build_campaign(scenario, clock))
        with campaign_context(result.campaign.campaign_id, scenario=scenario.name):
            self._replay(result, clock)
        return result

    def run_file(self, path: Path) -> ScenarioResult:
        return self.run(Scenario.from_file(path))

    def _replay(self, result: ScenarioResult, clock: ManualClock) -> None:
        scenario = result.scenario
        logger.info("scenario.started", events=len(scenario.events))

        for event in scenario.events:
            clock.set(event.timestamp)
            try:
                self._handlers[event.type](result, event)
            except CampaignError as exc:
                logger.error(
                    "scenario.event_failed",
                    event_type=event.type,
                    timestamp=event.timestamp,
                    code=exc.code,
                    error=exc.message,
                    comment=event.comment,
                )
                raise

        campaign = result.campaign
        if scenario.expected_final_status is not None:
            self._expect(scenario, scenario.expected_final_status, campaign, timestamp=None)

        logger.info(
            "scenario.completed",
            status=campaign.status.value,
            rounds=len(campaign.appeal_rounds),
            available_funds=campaign.available_funds,
        )

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_initial_funding(self, result: ScenarioResult, event: InitialFundingEvent) -> None:
        result.campaign.contribute(identity(event.funder), event.amount)

    def _on_evaluate(self, result: ScenarioResult, event: EvaluateEvent) -> None:
        result.campaign.evaluate()
        if event.expected_status is not None:
            self._expect(result.scenario, event.expected_status, result.campaign, event.timestamp)

    def _on_record_outcome(self, result: ScenarioResult, event: RecordOutcomeEvent) -> None:
        result.campaign.record_outcome(event.outcome, event.judgment_amount)

    def _on_deposit_court_award(
        self, result: ScenarioResult, event: DepositCourtAwardEvent
    ) -> None:
        result.campaign.deposit_court_award(identity(event.depositor), event.amount)

    def _on_deposit_court_fees(
        self, result: ScenarioResult, event: DepositCourtFeesEvent
    ) -> None:
        result.campaign.deposit_court_fees(identity(event.depositor), event.amount)

    def _on_pay_judgment(self, result: ScenarioResult, event: PayJudgmentEvent) -> None:
        result.campaign.pay_judgment(event.amount)

    def _on_approve_appeal(self, result: ScenarioResult, event: ApproveAppealEvent) -> None:
        for role in event.approvers:
            result.campaign.approve_appeal(
                identity(role),
                event.estimated_cost,
                event.deadline,
                event.court_level,
                event.path,
            )

    def _on_contribute_to_appeal(
        self, result: ScenarioResult, event: ContributeToAppealEvent
    ) -> None:
        result.campaign.contribute_to_appeal(identity(event.funder), event.amount)

    def _on_evaluate_appeal(self, result: ScenarioResult, event: EvaluateAppealEvent) -> None:
        result.campaign.evaluate_appeal()
        if event.expected_status is not None:
            self._expect(result.scenario, event.expected_status, result.campaign, event.timestamp)

    def _on_pay_invoice(self, result: ScenarioResult, event: PayInvoiceEvent) -> None:
        for role in event.approvers:
            result.campaign.approve_invoice_payment(
                identity(role), event.invoice_id, event.amount, identity(event.recipient)
            )

    def _on_approve_refund(self, result: ScenarioResult, event: ApproveRefundEvent) -> None:
        for role in event.approvers:
            result.campaign.approve_refund(identity(role))

    def _on_claim_refund(self, result: ScenarioResult, event: ClaimRefundEvent) -> None:
        amount = result.campaign.claim_refund(identity(event.funder))
        result.refunds[event.funder] = amount
        if event.expected_amount is not None and amount != event.expected_amount:
            raise ScenarioAssertionError(
                result.scenario.name,
                expected=f"refund of {event.expected_amount}",
                actual=f"refund of {amount}",
                timestamp=event.timestamp,
            )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _expect(
        scenario: Scenario,
        expected: CampaignStatus,
        campaign: Campaign,
        timestamp: int | None,
    ) -> None:
        if campaign.status != expected:
            raise ScenarioAssertionError(
                scenario.name,
                expected=expected.value,
                actual=campaign.status.value,
                timestamp=timestamp,
            )


def load_scenarios(directory: Path) -> list[tuple[Path, Scenario]]:
    """Load every ``*.json`` scenario in a directory, sorted by file name."""
    return [(path, Scenario.from_file(path)) for path in sorted(directory.glob("*.json"))]
