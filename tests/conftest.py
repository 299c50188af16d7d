"""Shared test fixtures for the litigation escrow test suite.

Provides:
    - Deterministic signer / funder identities
    - A ManualClock the tests move by hand
    - Factories for campaigns in the common lifecycle states
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from litigation_escrow.domain.campaign import Campaign
from litigation_escrow.domain.clock import ManualClock
from litigation_escrow.domain.models import CampaignConfig

from tests.participants import (
    AFTER_DEADLINE,
    ATTORNEY,
    CLIENT,
    DAO_TREASURY,
    DEADLINE,
    FUNDER_A,
    PLATFORM,
    REFUND_WINDOW,
    START,
)

SCENARIO_DIR = Path(__file__).resolve().parent.parent / "scenarios"

# ---------------------------------------------------------------------------
# Domain Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(START)


@pytest.fixture
def config() -> CampaignConfig:
    """Return a valid campaign config: min raise 100, deadline 1100."""
    return CampaignConfig(
        id="case-001",
        min_raise_lamports=100,
        deadline_unix=DEADLINE,
        refund_window_start_unix=REFUND_WINDOW,
        signers=(ATTORNEY, PLATFORM, CLIENT),
        dao_treasury=DAO_TREASURY,
    )


@pytest.fixture
def campaign(config: CampaignConfig, clock: ManualClock) -> Campaign:
    return Campaign(config, clock)


@pytest.fixture
def locked_campaign(
    campaign: Campaign, clock: ManualClock
) -> Callable[[int], Campaign]:
    """Factory: fund the campaign with ``raised`` from FUNDER_A and lock it."""

    def _make(raised: int = 200) -> Campaign:
        campaign.contribute(FUNDER_A, raised)
        clock.set(AFTER_DEADLINE)
        campaign.evaluate()
        return campaign

    return _make


@pytest.fixture
def scenario_dir() -> Path:
    return SCENARIO_DIR
