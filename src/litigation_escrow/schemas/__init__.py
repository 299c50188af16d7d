"""Pydantic read models and scenario documents."""

from litigation_escrow.schemas.campaign import (
    AppealRoundView,
    CampaignEventView,
    CampaignSnapshot,
    InvoicePaymentView,
    audit_trail,
)
from litigation_escrow.schemas.scenario import Scenario, ScenarioEvent

__all__ = [
    "AppealRoundView",
    "CampaignEventView",
    "CampaignSnapshot",
    "InvoicePaymentView",
    "audit_trail",
    "Scenario",
    "ScenarioEvent",
]
