"""Pydantic schemas for litigation scenario documents.

A scenario is a JSON timeline of external events (deposits, court outcomes,
signer approvals) replayed against one campaign by the ScenarioRunner.
Signers are referenced by role name; funders by any label.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from litigation_escrow.domain.enums import (
    CampaignOutcome,
    CampaignStatus,
    CourtLevel,
    LitigationPath,
)

SignerRole = Literal["attorney", "platform", "client"]

# ---------------------------------------------------------------------------
# Event Schemas
# ---------------------------------------------------------------------------


class _ScenarioEventBase(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    timestamp: int = Field(..., ge=0, description="Logical time the event happens at")
    comment: str | None = None


class InitialFundingEvent(_ScenarioEventBase):
    type: Literal["initial_funding"]
    amount: int
    funder: str = "funder_a"


class EvaluateEvent(_ScenarioEventBase):
    type: Literal["evaluate"]
    expected_status: CampaignStatus | None = None


class RecordOutcomeEvent(_ScenarioEventBase):
    type: Literal["record_outcome"]
    outcome: CampaignOutcome
    judgment_amount: int | None = None


class DepositCourtAwardEvent(_ScenarioEventBase):
    type: Literal["deposit_court_award"]
    amount: int
    depositor: SignerRole = "attorney"


class DepositCourtFeesEvent(_ScenarioEventBase):
    type: Literal["deposit_court_fees"]
    amount: int
    depositor: SignerRole = "attorney"


class PayJudgmentEvent(_ScenarioEventBase):
    type: Literal["pay_judgment"]
    amount: int


class ApproveAppealEvent(_ScenarioEventBase):
    type: Literal["approve_appeal"]
    approvers: list[SignerRole] = Field(default_factory=lambda: ["attorney"], min_length=1)
    estimated_cost: int
    deadline: int
    court_level: CourtLevel = CourtLevel.APPELLATE
    path: LitigationPath = LitigationPath.APPEAL


class ContributeToAppealEvent(_ScenarioEventBase):
    type: Literal["contribute_to_appeal"]
    amount: int
    funder: str = "funder_a"


class EvaluateAppealEvent(_ScenarioEventBase):
    type: Literal["evaluate_appeal"]
    expected_status: CampaignStatus | None = None


class PayInvoiceEvent(_ScenarioEventBase):
    type: Literal["pay_invoice"]
    invoice_id: str
    amount: int
    recipient: SignerRole = "attorney"
    approvers: list[SignerRole] = Field(
        default_factory=lambda: ["attorney", "platform"], min_length=1
    )


class ApproveRefundEvent(_ScenarioEventBase):
    type: Literal["approve_refund"]
    approvers: list[SignerRole] = Field(
        default_factory=lambda: ["attorney", "platform"], min_length=1
    )


class ClaimRefundEvent(_ScenarioEventBase):
    type: Literal["claim_refund"]
    funder: str = "funder_a"
    expected_amount: int | None = None


ScenarioEvent = Annotated[
    InitialFundingEvent
    | EvaluateEvent
    | RecordOutcomeEvent
    | DepositCourtAwardEvent
    | DepositCourtFeesEvent
    | PayJudgmentEvent
    | ApproveAppealEvent
    | ContributeToAppealEvent
    | EvaluateAppealEvent
    | PayInvoiceEvent
    | ApproveRefundEvent
    | ClaimRefundEvent,
    Field(discriminator="type"),
]

# ---------------------------------------------------------------------------
# Scenario Document
# ---------------------------------------------------------------------------


class Scenario(BaseModel):
    """A named litigation timeline."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., min_length=1)
    description: str = ""
    initial_funding: int = Field(..., ge=0, description="Total planned initial raise")
    min_raise: int = Field(..., gt=0, description="Minimum raise for the initial round")
    events: list[ScenarioEvent] = Field(..., min_length=1)
    expected_final_status: CampaignStatus | None = None
    notes: str | None = None

    @classmethod
    def from_file(cls, path: Path) -> Scenario:
        """Load and validate a scenario JSON file."""
        return cls.model_validate_json(path.read_text(encoding="utf-8"))
