"""Pydantic read models for campaign reporting.

Reporting collaborators (dashboards, portals) read these snapshots instead of
the aggregate itself. They are separate from the domain value objects so the
domain stays free of pydantic.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from litigation_escrow.domain.enums import (
    CampaignOutcome,
    CampaignStatus,
    CourtLevel,
    EventType,
    LitigationPath,
    RefundReason,
)

if TYPE_CHECKING:
    from litigation_escrow.domain.campaign import Campaign


class InvoicePaymentView(BaseModel):
    """An executed invoice or judgment payment."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    invoice_id: str
    amount: int
    recipient: str
    approvers: list[str]


class AppealRoundView(BaseModel):
    """One appeal round as seen by reporting."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    round_number: int
    min_raise_lamports: int
    deadline_unix: int
    total_raised: int
    previous_outcome: CampaignOutcome
    court_level: CourtLevel
    path: LitigationPath
    fundraising_needed: bool


class CampaignEventView(BaseModel):
    """Audit trail entry."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    event_type: EventType
    actor: str
    at: int
    old_status: CampaignStatus | None
    new_status: CampaignStatus
    metadata: dict = Field(default_factory=dict)


class CampaignSnapshot(BaseModel):
    """Point-in-time view of a campaign's aggregate state."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    campaign_id: str
    status: CampaignStatus
    outcome: CampaignOutcome | None
    total_raised: int
    available_funds: int
    dao_fee_amount: int
    court_fees_deposited: int
    judgment_amount: int
    contributor_count: int
    current_round: int
    refund_reason: RefundReason | None
    refund_opened_at: int | None
    approvals: list[str]
    appeal_approvals: list[str]
    invoice_payments: list[InvoicePaymentView]
    appeal_rounds: list[AppealRoundView]
    allowed_events: list[str] = Field(
        description="State machine events that can fire from the current status"
    )

    @classmethod
    def from_campaign(cls, campaign: Campaign) -> CampaignSnapshot:
        """Build a snapshot while holding the campaign's lock."""
        with campaign.lock:
            return cls.model_validate(campaign, from_attributes=True)


def audit_trail(campaign: Campaign) -> list[CampaignEventView]:
    """Return the campaign's audit events as read models."""
    return [CampaignEventView.model_validate(event) for event in campaign.events]
