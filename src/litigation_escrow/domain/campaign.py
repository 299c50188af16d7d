"""Campaign — escrow aggregate for one legal case.

Owns every contribution, approval and payout for a case across its initial
funding round and any appeal rounds. The aggregate is a synchronous state
machine: it never reads time on its own, never schedules work and never
performs I/O. Callers drive it with operations and read it through
accessors that return snapshots.

Each operation validates all of its preconditions before touching state, so
a failure leaves the campaign exactly as it was. Operations on one campaign
are serialized by a per-campaign re-entrant lock.

Available funds are always derived from the ledger:

    total_raised - dao_fee_amount - total_refunded
        + court_fees_deposited - total_payments
"""

from __future__ import annotations

import enum
import functools
import threading
from dataclasses import replace
from typing import TYPE_CHECKING, Any, ParamSpec, TypeVar

from statemachine.exceptions import TransitionNotAllowed

from litigation_escrow.domain.approvals import AppealTerms, InvoiceTerms, PendingApproval
from litigation_escrow.domain.enums import (
    CampaignOutcome,
    CampaignStatus,
    CourtLevel,
    EventType,
    LitigationPath,
    RefundReason,
)
from litigation_escrow.domain.exceptions import (
    DuplicateApprovalError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidCampaignStateError,
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
from litigation_escrow.domain.state_machine import CampaignStateMachine
from litigation_escrow.logging_config import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from litigation_escrow.domain.clock import Clock

logger = get_logger(__name__)

REFUND_APPROVAL_THRESHOLD = 2
INVOICE_APPROVAL_THRESHOLD = 2
APPEAL_THRESHOLD_AFTER_WIN = 1
APPEAL_THRESHOLD_AFTER_LOSS = 2

# Platform fee in basis points of each successfully funded round (10%)
DAO_FEE_BPS = 1_000
BPS_DENOMINATOR = 10_000

_OUTCOME_EVENTS = {
    CampaignOutcome.SETTLEMENT: "settlement_recorded",
    CampaignOutcome.WIN: "win_recorded",
    CampaignOutcome.LOSS: "loss_recorded",
}

# Audit default: the event did not move the status
_UNCHANGED: Any = object()

P = ParamSpec("P")
R = TypeVar("R")
E = TypeVar("E", bound=enum.Enum)


def compute_dao_fee(raised: int) -> int:
    """10% of a round's raise, truncated to whole lamports."""
    return raised * DAO_FEE_BPS // BPS_DENOMINATOR


def _serialized(method: Callable[P, R]) -> Callable[P, R]:
    """Run a campaign method while holding that campaign's lock."""

    @functools.wraps(method)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        with args[0]._lock:  # type: ignore[attr-defined]
            return method(*args, **kwargs)

    return wrapper


def _require_amount(amount: int, label: str) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmountError(f"{label} must be an integer number of lamports", amount)
    if amount <= 0:
        raise InvalidAmountError(f"{label} must be > 0", amount)


def _coerce(enum_cls: type[E], value: E | str, field: str) -> E:
    try:
        return enum_cls(value)
    except ValueError as err:
        raise InvalidParameterError(field, value) from err


class Campaign:
    """Escrow state machine and ledger for one litigation campaign."""

    def __init__(self, config: CampaignConfig, clock: Clock) -> None:
        config.validate()
        self._config = config
        self._clock = clock
        self._lock = threading.RLock()
        self._machine = CampaignStateMachine()

        self._contributions: dict[str, int] = {}
        self._refunded: set[str] = set()
        self._approvals: list[str] = []
        self._refund_reason: RefundReason | None = None
        self._refund_opened_at: int | None = None

        self._dao_fee_amount = 0
        self._court_fees_deposited = 0
        self._invoice_payments: list[InvoicePayment] = []
        self._pending_invoices: dict[str, PendingApproval[InvoiceTerms]] = {}

        self._outcome: CampaignOutcome | None = None
        self._judgment_amount = 0
        self._appeal_rounds: list[AppealRound] = []
        self._current_round = 1
        self._pending_appeal: PendingApproval[AppealTerms] | None = None

        self._events: list[CampaignEvent] = []
        self._record(
            EventType.CAMPAIGN_CREATED,
            actor="SYSTEM",
            old_status=None,
            min_raise=config.min_raise_lamports,
            deadline=config.deadline_unix,
        )
        logger.info(
            "campaign.created",
            campaign_id=config.id,
            min_raise=config.min_raise_lamports,
            deadline=config.deadline_unix,
        )

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> CampaignConfig:
        return self._config

    @property
    def lock(self) -> threading.RLock:
        """Re-entrant lock serializing operations on this campaign."""
        return self._lock

    @property
    def campaign_id(self) -> str:
        return self._config.id

    @property
    def status(self) -> CampaignStatus:
        return CampaignStatus(self._machine.status)

    @property
    def allowed_events(self) -> list[str]:
        """State machine events that can fire from the current status."""
        return self._machine.get_allowed_events()

    @property
    def total_raised(self) -> int:
        """Every contribution ever made, initial and appeal rounds alike."""
        with self._lock:
            return sum(self._contributions.values())

    @property
    def contributor_count(self) -> int:
        return len(self._contributions)

    def contribution_of(self, funder: str) -> int:
        return self._contributions.get(funder, 0)

    @property
    def approvals(self) -> tuple[str, ...]:
        """Signers who approved refunding in the current locked period, in approval order."""
        return tuple(self._approvals)

    @property
    def refund_reason(self) -> RefundReason | None:
        return self._refund_reason

    @property
    def refund_opened_at(self) -> int | None:
        return self._refund_opened_at

    @property
    def dao_fee_amount(self) -> int:
        return self._dao_fee_amount

    @property
    def court_fees_deposited(self) -> int:
        return self._court_fees_deposited

    @property
    def invoice_payments(self) -> tuple[InvoicePayment, ...]:
        return tuple(self._invoice_payments)

    def invoice_approvals(self, invoice_id: str) -> tuple[str, ...]:
        """Signers who have approved a still-pending invoice."""
        pending = self._pending_invoices.get(invoice_id)
        return pending.approvers if pending else ()

    @property
    def total_refunded(self) -> int:
        return sum(self._contributions[funder] for funder in self._refunded)

    @property
    def total_payments(self) -> int:
        return sum(payment.amount for payment in self._invoice_payments)

    @property
    def available_funds(self) -> int:
        with self._lock:
            return (
                self.total_raised
                - self._dao_fee_amount
                - self.total_refunded
                + self._court_fees_deposited
                - self.total_payments
            )

    @property
    def outcome(self) -> CampaignOutcome | None:
        return self._outcome

    @property
    def judgment_amount(self) -> int:
        return self._judgment_amount

    @property
    def current_round(self) -> int:
        return self._current_round

    @property
    def appeal_rounds(self) -> tuple[AppealRound, ...]:
        return tuple(self._appeal_rounds)

    @property
    def appeal_approvals(self) -> tuple[str, ...]:
        """Signers who approved the pending appeal, in approval order."""
        return self._pending_appeal.approvers if self._pending_appeal else ()

    @property
    def pending_appeal_terms(self) -> AppealTerms | None:
        return self._pending_appeal.terms if self._pending_appeal else None

    @property
    def events(self) -> tuple[CampaignEvent, ...]:
        """Append-only audit trail."""
        return tuple(self._events)

    def can_refund(self, funder: str) -> bool:
        if self.status not in (CampaignStatus.FAILED_REFUNDING, CampaignStatus.REFUNDING):
            return False
        return funder in self._contributions and funder not in self._refunded

    # ------------------------------------------------------------------
    # Initial funding round
    # ------------------------------------------------------------------

    @_serialized
    def contribute(self, funder: str, amount: int) -> None:
        """Add to a funder's cumulative contribution while the round is open."""
        self._require_status(
            "Campaign is not accepting contributions", CampaignStatus.ACTIVE
        )
        now = self._clock.now()
        if now >= self._config.deadline_unix:
            raise TimingViolationError("Campaign deadline has passed", now)
        _require_amount(amount, "Contribution")

        self._contributions[funder] = self._contributions.get(funder, 0) + amount
        self._record(EventType.CONTRIBUTION_RECEIVED, actor=funder, amount=amount)
        logger.debug(
            "campaign.contribution", campaign_id=self.campaign_id, funder=funder, amount=amount
        )

    @_serialized
    def evaluate(self) -> None:
        """Close the initial round once its deadline has passed.

        No-op unless the campaign is active and the deadline has passed.
        """
        if self.status is not CampaignStatus.ACTIVE:
            return
        if self._clock.now() < self._config.deadline_unix:
            return

        raised = self.total_raised
        if raised < self._config.min_raise_lamports:
            self._transition("deadline_missed")
            self._open_refund(RefundReason.AUTO_FAILED)
            self._record(
                EventType.CAMPAIGN_FAILED,
                actor="SYSTEM",
                old_status=CampaignStatus.ACTIVE,
                raised=raised,
                min_raise=self._config.min_raise_lamports,
            )
            logger.info(
                "campaign.failed", campaign_id=self.campaign_id, raised=raised
            )
            return

        fee = compute_dao_fee(raised)
        self._transition("deadline_met")
        self._dao_fee_amount += fee
        self._record(
            EventType.CAMPAIGN_LOCKED,
            actor="SYSTEM",
            old_status=CampaignStatus.ACTIVE,
            raised=raised,
            dao_fee=fee,
            dao_treasury=self._config.dao_treasury,
        )
        logger.info("campaign.locked", campaign_id=self.campaign_id, raised=raised, dao_fee=fee)

    # ------------------------------------------------------------------
    # Refunds
    # ------------------------------------------------------------------

    @_serialized
    def approve_refund(self, signer: str) -> None:
        """Vote to refund a locked campaign. Two distinct signers open refunds."""
        self._require_status(
            "Campaign must be locked to approve refunds", CampaignStatus.LOCKED
        )
        self._require_signer(signer)
        now = self._clock.now()
        if now < self._config.refund_window_start_unix:
            raise TimingViolationError("Refund window has not started", now)
        if self.total_raised < self._config.min_raise_lamports:
            raise InvalidCampaignStateError("Minimum raise not met", self.status)

        if signer in self._approvals:
            raise DuplicateApprovalError("Approver has already approved this refund", signer)

        self._approvals.append(signer)
        self._record(EventType.REFUND_APPROVED, actor=signer, approvals=len(self._approvals))
        logger.info(
            "campaign.refund_approved",
            campaign_id=self.campaign_id,
            signer=signer,
            approvals=len(self._approvals),
        )

        if len(self._approvals) >= REFUND_APPROVAL_THRESHOLD:
            self._transition("refund_approved")
            self._open_refund(RefundReason.MULTISIG)
            self._record(
                EventType.REFUND_OPENED,
                actor="SYSTEM",
                old_status=CampaignStatus.LOCKED,
                approvers=list(self._approvals),
            )

    @_serialized
    def claim_refund(self, funder: str) -> int:
        """Mark a funder's whole contribution refunded and return the amount."""
        if not self.can_refund(funder):
            raise RefundNotAvailableError(funder)

        amount = self._contributions[funder]
        self._refunded.add(funder)
        self._record(EventType.REFUND_CLAIMED, actor=funder, amount=amount)
        logger.info(
            "campaign.refund_claimed", campaign_id=self.campaign_id, funder=funder, amount=amount
        )
        return amount

    # ------------------------------------------------------------------
    # Court deposits
    # ------------------------------------------------------------------

    @_serialized
    def deposit_court_fees(self, depositor: str, amount: int) -> None:
        """Attorney returns court fees into a locked campaign."""
        self._require_attorney(depositor, "Only attorney can deposit court fees")
        self._require_status(
            "Campaign must be locked to deposit court fees", CampaignStatus.LOCKED
        )
        _require_amount(amount, "Court fee deposit")

        self._court_fees_deposited += amount
        self._record(EventType.COURT_FEES_DEPOSITED, actor=depositor, amount=amount)
        logger.info("campaign.court_fees_deposited", campaign_id=self.campaign_id, amount=amount)

    @_serialized
    def deposit_court_award(self, depositor: str, amount: int) -> None:
        """Attorney deposits a court award after a win."""
        self._require_attorney(depositor, "Only attorney can deposit court awards")
        self._require_status(
            "Campaign must be won to deposit court awards", CampaignStatus.WON
        )
        _require_amount(amount, "Court award deposit")

        self._court_fees_deposited += amount
        self._record(EventType.COURT_AWARD_DEPOSITED, actor=depositor, amount=amount)
        logger.info("campaign.court_award_deposited", campaign_id=self.campaign_id, amount=amount)

    # ------------------------------------------------------------------
    # Invoices
    # ------------------------------------------------------------------

    @_serialized
    def approve_invoice_payment(
        self,
        approver: str,
        invoice_id: str,
        amount: int,
        recipient: str,
    ) -> InvoicePayment | None:
        """Approve paying an invoice from campaign funds (2-of-3 multisig).

        The first approval locks the amount and recipient. The second distinct
        approval executes the payment after re-checking available funds; if
        funds have dropped in the meantime the payment is rejected and the
        pending approval is kept for a retry.

        Returns:
            The executed payment, or None while approvals are still collecting.
        """
        self._require_status(
            "Campaign must be locked to approve invoice payments", CampaignStatus.LOCKED
        )
        self._require_signer(approver)
        _require_amount(amount, "Invoice amount")
        if any(p.invoice_id == invoice_id for p in self._invoice_payments):
            raise DuplicateApprovalError(f"Invoice {invoice_id} has already been paid", approver)

        terms = InvoiceTerms(amount=amount, recipient=recipient)
        pending = self._pending_invoices.get(invoice_id)
        if pending is None:
            available = self.available_funds
            if available < amount:
                raise InsufficientFundsError(required=amount, available=available)
            pending = PendingApproval(terms=terms, threshold=INVOICE_APPROVAL_THRESHOLD)
        else:
            if pending.has_approved(approver):
                raise DuplicateApprovalError(
                    "Approver has already approved this invoice", approver
                )
            mismatched = pending.mismatched_fields(terms)
            if mismatched:
                raise ParameterMismatchError(
                    "Invoice amount and recipient must match existing approvals",
                    field=mismatched[0],
                )

        pending = pending.approve(approver)
        if not pending.is_ready:
            self._pending_invoices[invoice_id] = pending
            self._record(
                EventType.INVOICE_APPROVED,
                actor=approver,
                invoice_id=invoice_id,
                amount=amount,
                recipient=recipient,
            )
            logger.info(
                "campaign.invoice_approved",
                campaign_id=self.campaign_id,
                invoice_id=invoice_id,
                approvals=len(pending.approvers),
            )
            return None

        # Other invoices may have completed since the first approval.
        available = self.available_funds
        if available < amount:
            raise InsufficientFundsError(required=amount, available=available)

        payment = InvoicePayment(
            invoice_id=invoice_id,
            amount=amount,
            recipient=recipient,
            approvers=pending.approvers,
        )
        self._invoice_payments.append(payment)
        del self._pending_invoices[invoice_id]
        self._record(
            EventType.INVOICE_PAID,
            actor=approver,
            invoice_id=invoice_id,
            amount=amount,
            recipient=recipient,
            approvers=list(payment.approvers),
        )
        logger.info(
            "campaign.invoice_paid",
            campaign_id=self.campaign_id,
            invoice_id=invoice_id,
            amount=amount,
            recipient=recipient,
        )
        return payment

    # ------------------------------------------------------------------
    # Outcomes and judgments
    # ------------------------------------------------------------------

    @_serialized
    def record_outcome(
        self,
        outcome: CampaignOutcome | str,
        judgment_amount: int | None = None,
    ) -> None:
        """Record the court outcome of a locked campaign.

        The judgment amount is kept only when it is a positive number; zero or
        omission clears it.
        """
        self._require_status(
            "Campaign must be locked to record an outcome", CampaignStatus.LOCKED
        )
        outcome = _coerce(CampaignOutcome, outcome, "outcome")

        old_status = self.status
        self._transition(_OUTCOME_EVENTS[outcome])
        self._outcome = outcome
        # Refund votes belong to the locked period that just ended.
        discarded_approvals = list(self._approvals)
        self._approvals.clear()
        self._judgment_amount = (
            judgment_amount
            if isinstance(judgment_amount, int)
            and not isinstance(judgment_amount, bool)
            and judgment_amount > 0
            else 0
        )
        self._record(
            EventType.OUTCOME_RECORDED,
            actor="SYSTEM",
            old_status=old_status,
            outcome=outcome.value,
            judgment_amount=self._judgment_amount,
            discarded_refund_approvals=discarded_approvals,
        )
        logger.info(
            "campaign.outcome_recorded",
            campaign_id=self.campaign_id,
            outcome=outcome.value,
            judgment_amount=self._judgment_amount,
            round=self._current_round,
        )

    @_serialized
    def pay_judgment(self, amount: int) -> InvoicePayment:
        """Pay a court judgment directly from campaign funds after a loss."""
        self._require_status(
            "Campaign must be lost to pay a judgment", CampaignStatus.LOST
        )
        _require_amount(amount, "Judgment payment")
        available = self.available_funds
        if amount > available:
            raise InsufficientFundsError(required=amount, available=available)

        payment = InvoicePayment(
            invoice_id=f"JUDGMENT-{self._current_round}-{len(self._invoice_payments) + 1}",
            amount=amount,
            recipient=SYSTEM_RECIPIENT_COURT,
        )
        self._invoice_payments.append(payment)
        self._record(
            EventType.JUDGMENT_PAID,
            actor="SYSTEM",
            invoice_id=payment.invoice_id,
            amount=amount,
        )
        logger.info("campaign.judgment_paid", campaign_id=self.campaign_id, amount=amount)
        return payment

    # ------------------------------------------------------------------
    # Appeals
    # ------------------------------------------------------------------

    @_serialized
    def approve_appeal(
        self,
        signer: str,
        estimated_cost: int,
        deadline: int,
        court_level: CourtLevel | str,
        path: LitigationPath | str,
    ) -> AppealRound | None:
        """Approve taking the case to another round.

        One signer suffices after a win, two are needed after a loss. When the
        threshold is reached a new round opens: if available funds already
        cover the estimated cost, fundraising is skipped and the campaign goes
        straight back to locked; otherwise the round raises the estimated cost.

        Returns:
            The opened round, or None while approvals are still collecting.
        """
        self._require_status(
            "Campaign must be won or lost to approve an appeal",
            CampaignStatus.WON,
            CampaignStatus.LOST,
        )
        self._require_signer(signer)
        pending = self._pending_appeal
        if pending is not None and pending.has_approved(signer):
            raise DuplicateApprovalError("Approver has already approved this appeal", signer)
        _require_amount(estimated_cost, "Appeal estimated cost")
        now = self._clock.now()
        if deadline <= now:
            raise TimingViolationError("Appeal deadline must be in the future", now)
        court_level = _coerce(CourtLevel, court_level, "court_level")
        path = _coerce(LitigationPath, path, "path")

        terms = AppealTerms(estimated_cost=estimated_cost, deadline=deadline)
        if pending is None:
            threshold = (
                APPEAL_THRESHOLD_AFTER_WIN
                if self.status is CampaignStatus.WON
                else APPEAL_THRESHOLD_AFTER_LOSS
            )
            pending = PendingApproval(terms=terms, threshold=threshold)
        elif pending.terms.estimated_cost != estimated_cost:
            raise ParameterMismatchError(
                "Appeal estimated cost does not match first approval", field="estimated_cost"
            )
        elif pending.terms.deadline != deadline:
            raise ParameterMismatchError(
                "Appeal deadline does not match first approval", field="deadline"
            )

        pending = pending.approve(signer)
        if not pending.is_ready:
            self._pending_appeal = pending
            self._record(
                EventType.APPEAL_APPROVED,
                actor=signer,
                estimated_cost=estimated_cost,
                deadline=deadline,
            )
            logger.info(
                "campaign.appeal_approved",
                campaign_id=self.campaign_id,
                signer=signer,
                approvals=len(pending.approvers),
                required=pending.threshold,
            )
            return None

        return self._open_appeal_round(pending, court_level, path)

    @_serialized
    def contribute_to_appeal(self, funder: str, amount: int) -> None:
        """Fund the current appeal round before its deadline."""
        self._require_status(
            "Appeal round is not accepting contributions", CampaignStatus.APPEAL_ACTIVE
        )
        current = self._appeal_rounds[-1]
        now = self._clock.now()
        if now >= current.deadline_unix:
            raise TimingViolationError("Appeal round deadline has passed", now)
        _require_amount(amount, "Appeal contribution")

        self._contributions[funder] = self._contributions.get(funder, 0) + amount
        self._replace_current_round(total_raised=current.total_raised + amount)
        self._record(
            EventType.APPEAL_CONTRIBUTION_RECEIVED,
            actor=funder,
            amount=amount,
            round=current.round_number,
        )
        logger.debug(
            "campaign.appeal_contribution",
            campaign_id=self.campaign_id,
            funder=funder,
            amount=amount,
            round=current.round_number,
        )

    @_serialized
    def evaluate_appeal(self) -> None:
        """Close the current appeal round once its deadline has passed.

        No-op unless an appeal round is active and its deadline has passed.
        """
        if self.status is not CampaignStatus.APPEAL_ACTIVE:
            return
        current = self._appeal_rounds[-1]
        if self._clock.now() < current.deadline_unix:
            return

        if current.total_raised < current.min_raise_lamports:
            self._transition("appeal_round_failed")
            self._open_refund(RefundReason.AUTO_FAILED)
            self._record(
                EventType.APPEAL_ROUND_FAILED,
                actor="SYSTEM",
                old_status=CampaignStatus.APPEAL_ACTIVE,
                round=current.round_number,
                raised=current.total_raised,
                target=current.min_raise_lamports,
            )
            logger.info(
                "campaign.appeal_round_failed",
                campaign_id=self.campaign_id,
                round=current.round_number,
                raised=current.total_raised,
            )
            return

        fee = compute_dao_fee(current.total_raised)
        self._transition("appeal_round_funded")
        self._dao_fee_amount += fee
        self._record(
            EventType.APPEAL_ROUND_LOCKED,
            actor="SYSTEM",
            old_status=CampaignStatus.APPEAL_ACTIVE,
            round=current.round_number,
            raised=current.total_raised,
            dao_fee=fee,
        )
        logger.info(
            "campaign.appeal_round_locked",
            campaign_id=self.campaign_id,
            round=current.round_number,
            raised=current.total_raised,
            dao_fee=fee,
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _open_appeal_round(
        self,
        pending: PendingApproval[AppealTerms],
        court_level: CourtLevel,
        path: LitigationPath,
    ) -> AppealRound:
        estimated_cost = pending.terms.estimated_cost
        available = self.available_funds
        fundraising_needed = available < estimated_cost
        old_status = self.status

        self._transition("appeal_opened" if fundraising_needed else "appeal_prefunded")
        self._current_round += 1
        appeal_round = AppealRound(
            round_number=self._current_round,
            min_raise_lamports=estimated_cost if fundraising_needed else 0,
            deadline_unix=pending.terms.deadline,
            total_raised=0,
            previous_outcome=self._outcome,
            court_level=court_level,
            path=path,
            fundraising_needed=fundraising_needed,
        )
        self._appeal_rounds.append(appeal_round)
        self._pending_appeal = None
        self._record(
            EventType.APPEAL_OPENED,
            actor=pending.approvers[-1],
            old_status=old_status,
            round=appeal_round.round_number,
            estimated_cost=estimated_cost,
            available_funds=available,
            fundraising_needed=fundraising_needed,
            court_level=court_level.value,
            path=path.value,
            approvers=list(pending.approvers),
        )
        logger.info(
            "campaign.appeal_opened",
            campaign_id=self.campaign_id,
            round=appeal_round.round_number,
            court_level=court_level.value,
            path=path.value,
            fundraising_needed=fundraising_needed,
        )
        return appeal_round

    def _replace_current_round(self, **changes: Any) -> None:
        self._appeal_rounds[-1] = replace(self._appeal_rounds[-1], **changes)

    def _open_refund(self, reason: RefundReason) -> None:
        self._refund_reason = reason
        self._refund_opened_at = self._clock.now()
        logger.info(
            "campaign.refund_opened",
            campaign_id=self.campaign_id,
            reason=reason.value,
            opened_at=self._refund_opened_at,
        )

    def _require_status(self, message: str, *allowed: CampaignStatus) -> None:
        if self.status not in allowed:
            raise InvalidCampaignStateError(message, self.status)

    def _require_signer(self, identity: str) -> None:
        if identity not in self._config.signers:
            raise UnauthorizedSignerError("Approver is not a multisig signer", identity)

    def _require_attorney(self, identity: str, message: str) -> None:
        if identity != self._config.attorney:
            raise UnauthorizedSignerError(message, identity)

    def _transition(self, event_name: str) -> None:
        """Fire a state machine event.

        Raises InvalidStateTransitionError if the transition is illegal.
        """
        event_method = getattr(self._machine, event_name, None)
        if event_method is None:
            raise InvalidStateTransitionError(self.status, event_name)
        try:
            event_method()
        except TransitionNotAllowed as err:
            raise InvalidStateTransitionError(self.status, event_name) from err

    def _record(
        self,
        event_type: EventType,
        actor: str,
        old_status: CampaignStatus | None = _UNCHANGED,
        **metadata: Any,
    ) -> None:
        new_status = self.status
        if old_status is _UNCHANGED:
            old_status = new_status
        self._events.append(
            CampaignEvent(
                event_type=event_type,
                actor=actor,
                at=self._clock.now(),
                old_status=old_status,
                new_status=new_status,
                metadata=metadata,
            )
        )
