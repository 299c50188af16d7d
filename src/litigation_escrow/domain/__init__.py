"""Domain layer — pure business logic with zero framework dependencies."""

from litigation_escrow.domain.campaign import Campaign, compute_dao_fee
from litigation_escrow.domain.clock import Clock, ManualClock, SystemClock
from litigation_escrow.domain.enums import (
    CampaignOutcome,
    CampaignStatus,
    CourtLevel,
    EventType,
    LitigationPath,
    RefundReason,
)
from litigation_escrow.domain.exceptions import (
    CampaignError,
    DuplicateApprovalError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidCampaignStateError,
    InvalidConfigurationError,
    InvalidParameterError,
    InvalidStateTransitionError,
    ParameterMismatchError,
    RefundNotAvailableError,
    TimingViolationError,
    UnauthorizedSignerError,
)
from litigation_escrow.domain.models import (
    SYSTEM_RECIPIENT_COURT,
    AppealRound,
    CampaignConfig,
    CampaignEvent,
    InvoicePayment,
)
from litigation_escrow.domain.state_machine import (
    CampaignStateMachine,
    validate_transition,
)

__all__ = [
    "Campaign",
    "compute_dao_fee",
    "Clock",
    "ManualClock",
    "SystemClock",
    "CampaignOutcome",
    "CampaignStatus",
    "CourtLevel",
    "EventType",
    "LitigationPath",
    "RefundReason",
    "CampaignError",
    "DuplicateApprovalError",
    "InsufficientFundsError",
    "InvalidAmountError",
    "InvalidCampaignStateError",
    "InvalidConfigurationError",
    "InvalidParameterError",
    "InvalidStateTransitionError",
    "ParameterMismatchError",
    "RefundNotAvailableError",
    "TimingViolationError",
    "UnauthorizedSignerError",
    "SYSTEM_RECIPIENT_COURT",
    "AppealRound",
    "CampaignConfig",
    "CampaignEvent",
    "InvoicePayment",
    "CampaignStateMachine",
    "validate_transition",
]
