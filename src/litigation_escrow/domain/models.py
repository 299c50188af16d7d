"""Value objects held by the campaign aggregate.

All of these are frozen: the campaign replaces records instead of mutating
them, so anything handed to a caller is a snapshot that cannot corrupt the
ledger.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from litigation_escrow.domain.enums import (
    CampaignOutcome,
    CampaignStatus,
    CourtLevel,
    EventType,
    LitigationPath,
)
from litigation_escrow.domain.exceptions import InvalidConfigurationError

REQUIRED_SIGNERS = 3

# Recipient recorded on judgment payments made directly to the court.
SYSTEM_RECIPIENT_COURT = "SYSTEM:COURT"


@dataclass(frozen=True)
class CampaignConfig:
    """Immutable campaign configuration.

    Attributes:
        id: External campaign identifier.
        min_raise_lamports: Minimum raise for the initial funding round.
        deadline_unix: End of the initial funding round.
        refund_window_start_unix: Earliest time signers may vote a refund.
        signers: Exactly three signer identities. The first is the attorney.
        dao_treasury: Wallet receiving the platform fee.
    """

    id: str
    min_raise_lamports: int
    deadline_unix: int
    refund_window_start_unix: int
    signers: tuple[str, ...]
    dao_treasury: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "signers", tuple(self.signers))

    @property
    def attorney(self) -> str:
        return self.signers[0]

    def validate(self) -> None:
        """Raise InvalidConfigurationError if the config cannot back a campaign."""
        if len(self.signers) != REQUIRED_SIGNERS:
            raise InvalidConfigurationError("Exactly 3 multisig signers are required")
        if len(set(self.signers)) != REQUIRED_SIGNERS:
            raise InvalidConfigurationError("Multisig signers must be distinct")
        if self.min_raise_lamports <= 0:
            raise InvalidConfigurationError("min_raise_lamports must be > 0")
        if self.deadline_unix <= 0 or self.refund_window_start_unix <= 0:
            raise InvalidConfigurationError("Invalid time configuration")


@dataclass(frozen=True)
class InvoicePayment:
    """An executed payment out of campaign funds."""

    invoice_id: str
    amount: int
    recipient: str
    approvers: tuple[str, ...] = ()


@dataclass(frozen=True)
class AppealRound:
    """A funding/litigation cycle opened after a win or loss."""

    round_number: int
    min_raise_lamports: int
    deadline_unix: int
    total_raised: int
    previous_outcome: CampaignOutcome
    court_level: CourtLevel
    path: LitigationPath
    fundraising_needed: bool


@dataclass(frozen=True)
class CampaignEvent:
    """One entry of the append-only audit trail."""

    event_type: EventType
    actor: str
    at: int
    old_status: CampaignStatus | None
    new_status: CampaignStatus
    metadata: dict[str, Any] = field(default_factory=dict)
