"""Domain exceptions for litigation escrow campaigns.

These exceptions are framework-agnostic and represent business rule violations.
Every failure is synchronous and leaves the campaign untouched; callers decide
whether to retry with corrected input.
"""


class CampaignError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, code: str = "CAMPAIGN_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


# --- Construction Errors ---


class InvalidConfigurationError(CampaignError):
    """Raised when a campaign is constructed from an invalid config."""

    def __init__(self, message: str) -> None:
        super().__init__(message=message, code="INVALID_CONFIGURATION")


# --- State Errors ---


class InvalidCampaignStateError(CampaignError):
    """Raised when an operation is not valid for the current status.

    Example: contribute() on a locked campaign.
    """

    def __init__(self, message: str, status: str) -> None:
        super().__init__(message=message, code="INVALID_CAMPAIGN_STATE")
        self.status = status


class InvalidStateTransitionError(CampaignError):
    """Raised when the state machine guard rejects a transition."""

    def __init__(self, current_state: str, event_name: str) -> None:
        super().__init__(
            message=f"Invalid state transition: {current_state} -> {event_name}",
            code="INVALID_STATE_TRANSITION",
        )
        self.current_state = current_state
        self.event_name = event_name


class TimingViolationError(CampaignError):
    """Raised when an operation happens before or after its allowed window."""

    def __init__(self, message: str, now: int | None = None) -> None:
        super().__init__(message=message, code="TIMING_VIOLATION")
        self.now = now


# --- Authorization Errors ---


class UnauthorizedSignerError(CampaignError):
    """Raised when the caller is not a multisig signer or not the attorney."""

    def __init__(self, message: str, identity: str) -> None:
        super().__init__(message=message, code="UNAUTHORIZED_SIGNER")
        self.identity = identity


class DuplicateApprovalError(CampaignError):
    """Raised when a signer approves the same pending item twice."""

    def __init__(self, message: str, signer: str) -> None:
        super().__init__(message=message, code="DUPLICATE_APPROVAL")
        self.signer = signer


class ParameterMismatchError(CampaignError):
    """Raised when a later approval disagrees with the parameters locked by the first."""

    def __init__(self, message: str, field: str) -> None:
        super().__init__(message=message, code="PARAMETER_MISMATCH")
        self.field = field


class InvalidParameterError(CampaignError):
    """Raised when an outcome, court level or litigation path is not recognised."""

    def __init__(self, field: str, value: object) -> None:
        super().__init__(
            message=f"Invalid {field}: {value!r}",
            code="INVALID_PARAMETER",
        )
        self.field = field
        self.value = value


# --- Money Errors ---


class InvalidAmountError(CampaignError):
    """Raised when an amount is not a positive integer number of lamports."""

    def __init__(self, message: str, amount: object = None) -> None:
        super().__init__(message=message, code="INVALID_AMOUNT")
        self.amount = amount


class InsufficientFundsError(CampaignError):
    """Raised when available funds cannot cover a payment."""

    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            message=f"Insufficient funds: required {required}, available {available}",
            code="INSUFFICIENT_FUNDS",
        )
        self.required = required
        self.available = available


class RefundNotAvailableError(CampaignError):
    """Raised when a funder has nothing to claim or already claimed."""

    def __init__(self, funder: str) -> None:
        super().__init__(
            message="Refund not available for this funder",
            code="REFUND_NOT_AVAILABLE",
        )
        self.funder = funder
