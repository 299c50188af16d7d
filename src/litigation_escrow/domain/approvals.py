"""Pending multisig approvals.

Invoices and appeals share one pattern: the first signer locks the terms,
later signers must agree on them exactly, and the item executes once enough
distinct signers have approved. A PendingApproval is immutable; approving
returns the next state so the campaign can commit it only after every other
check has passed.

States:
    COLLECTING -> READY   (approver count reaches the threshold)
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, fields, replace
from typing import Generic, TypeVar


@dataclass(frozen=True)
class InvoiceTerms:
    amount: int
    recipient: str


@dataclass(frozen=True)
class AppealTerms:
    estimated_cost: int
    deadline: int


T = TypeVar("T", InvoiceTerms, AppealTerms)


class ApprovalState(enum.StrEnum):
    COLLECTING = "collecting"
    READY = "ready"


@dataclass(frozen=True)
class PendingApproval(Generic[T]):
    """Locked terms plus the ordered set of signers who agreed to them."""

    terms: T
    threshold: int
    approvers: tuple[str, ...] = ()

    @property
    def state(self) -> ApprovalState:
        if len(self.approvers) >= self.threshold:
            return ApprovalState.READY
        return ApprovalState.COLLECTING

    @property
    def is_ready(self) -> bool:
        return self.state is ApprovalState.READY

    def has_approved(self, signer: str) -> bool:
        return signer in self.approvers

    def mismatched_fields(self, terms: T) -> list[str]:
        """Return the names of the locked fields that ``terms`` disagrees with."""
        return [
            f.name
            for f in fields(self.terms)
            if getattr(self.terms, f.name) != getattr(terms, f.name)
        ]

    def approve(self, signer: str) -> PendingApproval[T]:
        """Return the next state with ``signer`` added."""
        if self.has_approved(signer):
            raise ValueError(f"{signer} has already approved")
        return replace(self, approvers=(*self.approvers, signer))
