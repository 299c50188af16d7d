"""Campaign State Machine Guard.

Uses python-statemachine to enforce legal status transitions at the domain level.
The Campaign aggregate checks its own preconditions first; this guard is the
second line, so no code path can move a campaign along an edge that is not in
the table below (e.g., active -> won raises TransitionNotAllowed).

Transition table:
    active          -> locked            (deadline_met)
    active          -> failed_refunding  (deadline_missed)
    locked          -> refunding         (refund_approved)
    locked          -> settled           (settlement_recorded)
    locked          -> won               (win_recorded)
    locked          -> lost              (loss_recorded)
    won | lost      -> appeal_active     (appeal_opened)
    won | lost      -> locked            (appeal_prefunded)
    appeal_active   -> locked            (appeal_round_funded)
    appeal_active   -> failed_refunding  (appeal_round_failed)

failed_refunding and refunding are final for status purposes; refund claims
still drain the ledger while a campaign sits in them.
"""

from __future__ import annotations

from statemachine import State, StateMachine


class CampaignStateMachine(StateMachine):
    """State machine that guards the campaign lifecycle.

    Usage:
        sm = CampaignStateMachine(current_status="locked")
        sm.win_recorded()  # transitions to won
        sm.status          # "won"
    """

    # --- States ---
    active = State("Active", initial=True)
    locked = State("Locked")
    failed_refunding = State("Failed, refunding", final=True)
    refunding = State("Refunding", final=True)
    settled = State("Settled", final=True)
    won = State("Won")
    lost = State("Lost")
    appeal_active = State("Appeal active")

    # --- Events / Transitions ---

    # Initial funding round
    deadline_met = active.to(locked)
    deadline_missed = active.to(failed_refunding)

    # Multisig refund
    refund_approved = locked.to(refunding)

    # Court outcomes
    settlement_recorded = locked.to(settled)
    win_recorded = locked.to(won)
    loss_recorded = locked.to(lost)

    # Appeals
    appeal_opened = won.to(appeal_active) | lost.to(appeal_active)
    appeal_prefunded = won.to(locked) | lost.to(locked)
    appeal_round_funded = appeal_active.to(locked)
    appeal_round_failed = appeal_active.to(failed_refunding)

    def __init__(self, current_status: str = "active") -> None:
        """Initialize the state machine at a given status.

        Args:
            current_status: The current CampaignStatus value (e.g., "locked").
        """
        valid_values = {s.value for s in self.states}
        if current_status not in valid_values:
            valid = ", ".join(sorted(valid_values))
            raise ValueError(
                f"Unknown status '{current_status}'. Valid states: {valid}"
            )
        super().__init__(start_value=current_status)

    @property
    def status(self) -> str:
        """Return the current state value as a string (matches CampaignStatus)."""
        return str(self.current_state.value)

    def get_allowed_events(self) -> list[str]:
        """Return the event ids that can fire from the current state."""
        return [event.id for event in self.allowed_events]


def validate_transition(current_status: str, event_name: str) -> str:
    """Validate a status transition and return the new status.

    Creates a temporary state machine, fires the named event, and returns the
    resulting status string.

    Raises:
        TransitionNotAllowed: If the transition is illegal.
        ValueError: If the status or event name is invalid.
    """
    sm = CampaignStateMachine(current_status=current_status)

    known_events = {event.id for event in sm.events}
    event_method = getattr(sm, event_name, None)
    if event_name not in known_events or not callable(event_method):
        raise ValueError(
            f"Unknown event '{event_name}'. "
            f"Allowed events from {current_status}: {sm.get_allowed_events()}"
        )

    event_method()
    return sm.status
