"""Domain enumerations for litigation escrow campaigns.

These enums define the canonical states and labels used throughout the system.
They are framework-agnostic (no pydantic, no structlog imports).
"""

import enum


class CampaignStatus(enum.StrEnum):
    """Lifecycle states of a campaign.

    State transitions are enforced by the CampaignStateMachine guard.
    See domain/state_machine.py for the transition table.
    """

    ACTIVE = "active"
    LOCKED = "locked"
    FAILED_REFUNDING = "failed_refunding"
    REFUNDING = "refunding"
    SETTLED = "settled"
    WON = "won"
    LOST = "lost"
    APPEAL_ACTIVE = "appeal_active"


class CampaignOutcome(enum.StrEnum):
    """Court outcome recorded against a locked campaign."""

    SETTLEMENT = "settlement"
    WIN = "win"
    LOSS = "loss"


class RefundReason(enum.StrEnum):
    """Why refunds were opened for a campaign."""

    AUTO_FAILED = "auto_failed"
    MULTISIG = "multisig"


class CourtLevel(enum.StrEnum):
    DISTRICT = "district"
    APPELLATE = "appellate"
    STATE_SUPREME = "state_supreme"
    US_SUPREME = "us_supreme"


class LitigationPath(enum.StrEnum):
    APPEAL = "appeal"
    RETRIAL = "retrial"
    REMAND = "remand"


class EventType(enum.StrEnum):
    """Types of audit events recorded on a campaign.

    Every successful state-changing operation appends exactly one event.
    This is the append-only trail handed to reporting collaborators.
    """

    # Funding events
    CAMPAIGN_CREATED = "CAMPAIGN_CREATED"
    CONTRIBUTION_RECEIVED = "CONTRIBUTION_RECEIVED"
    CAMPAIGN_LOCKED = "CAMPAIGN_LOCKED"
    CAMPAIGN_FAILED = "CAMPAIGN_FAILED"

    # Refund events
    REFUND_APPROVED = "REFUND_APPROVED"
    REFUND_OPENED = "REFUND_OPENED"
    REFUND_CLAIMED = "REFUND_CLAIMED"

    # Court money events
    COURT_FEES_DEPOSITED = "COURT_FEES_DEPOSITED"
    COURT_AWARD_DEPOSITED = "COURT_AWARD_DEPOSITED"
    JUDGMENT_PAID = "JUDGMENT_PAID"

    # Invoice events
    INVOICE_APPROVED = "INVOICE_APPROVED"
    INVOICE_PAID = "INVOICE_PAID"

    # Litigation events
    OUTCOME_RECORDED = "OUTCOME_RECORDED"
    APPEAL_APPROVED = "APPEAL_APPROVED"
    APPEAL_OPENED = "APPEAL_OPENED"
    APPEAL_CONTRIBUTION_RECEIVED = "APPEAL_CONTRIBUTION_RECEIVED"
    APPEAL_ROUND_LOCKED = "APPEAL_ROUND_LOCKED"
    APPEAL_ROUND_FAILED = "APPEAL_ROUND_FAILED"
