"""Tests for campaign construction, the initial funding round and refunds."""

from __future__ import annotations

from dataclasses import replace

import pytest

from litigation_escrow.domain.campaign import Campaign, compute_dao_fee
from litigation_escrow.domain.enums import CampaignStatus, EventType, RefundReason
from litigation_escrow.domain.exceptions import (
    DuplicateApprovalError,
    InvalidAmountError,
    InvalidCampaignStateError,
    InvalidConfigurationError,
    RefundNotAvailableError,
    TimingViolationError,
    UnauthorizedSignerError,
)
from tests.participants import (
    AFTER_DEADLINE,
    ATTORNEY,
    CLIENT,
    DEADLINE,
    FUNDER_A,
    FUNDER_B,
    OUTSIDER,
    PLATFORM,
    REFUND_WINDOW,
)


class TestConfiguration:
    def test_requires_three_signers(self, config, clock) -> None:
        with pytest.raises(InvalidConfigurationError, match="Exactly 3 multisig signers"):
            Campaign(replace(config, signers=(ATTORNEY, PLATFORM)), clock)

    def test_requires_distinct_signers(self, config, clock) -> None:
        with pytest.raises(InvalidConfigurationError, match="distinct"):
            Campaign(replace(config, signers=(ATTORNEY, ATTORNEY, CLIENT)), clock)

    def test_requires_positive_min_raise(self, config, clock) -> None:
        with pytest.raises(InvalidConfigurationError, match="min_raise_lamports"):
            Campaign(replace(config, min_raise_lamports=0), clock)

    @pytest.mark.parametrize(
        "field", ["deadline_unix", "refund_window_start_unix"]
    )
    def test_requires_positive_times(self, config, clock, field) -> None:
        with pytest.raises(InvalidConfigurationError, match="Invalid time configuration"):
            Campaign(replace(config, **{field: 0}), clock)

    def test_signers_stored_as_tuple(self, config) -> None:
        cfg = replace(config, signers=[ATTORNEY, PLATFORM, CLIENT])
        assert cfg.signers == (ATTORNEY, PLATFORM, CLIENT)
        assert cfg.attorney == ATTORNEY

    def test_new_campaign_state(self, campaign) -> None:
        assert campaign.status is CampaignStatus.ACTIVE
        assert campaign.current_round == 1
        assert campaign.total_raised == 0
        assert campaign.outcome is None
        assert campaign.refund_reason is None
        assert campaign.events[0].event_type is EventType.CAMPAIGN_CREATED


class TestContribute:
    def test_contributions_accumulate(self, campaign) -> None:
        campaign.contribute(FUNDER_A, 40)
        campaign.contribute(FUNDER_A, 10)
        campaign.contribute(FUNDER_B, 50)
        assert campaign.total_raised == 100
        assert campaign.contribution_of(FUNDER_A) == 50
        assert campaign.contributor_count == 2

    @pytest.mark.parametrize("amount", [0, -5])
    def test_rejects_non_positive_amount(self, campaign, amount) -> None:
        with pytest.raises(InvalidAmountError, match="must be > 0"):
            campaign.contribute(FUNDER_A, amount)
        assert campaign.total_raised == 0

    def test_rejects_non_integer_amount(self, campaign) -> None:
        with pytest.raises(InvalidAmountError):
            campaign.contribute(FUNDER_A, 10.5)

    def test_rejects_after_deadline(self, campaign, clock) -> None:
        clock.set(DEADLINE)
        with pytest.raises(TimingViolationError, match="deadline has passed"):
            campaign.contribute(FUNDER_A, 10)

    def test_rejects_when_not_active(self, locked_campaign) -> None:
        campaign = locked_campaign(120)
        with pytest.raises(InvalidCampaignStateError, match="not accepting contributions"):
            campaign.contribute(FUNDER_B, 10)

    def test_total_equals_sum_of_accepted_contributions(self, campaign) -> None:
        accepted = 0
        for amount in (5, 0, 17, -3, 40, 1):
            try:
                campaign.contribute(FUNDER_A, amount)
            except InvalidAmountError:
                continue
            accepted += amount
        assert campaign.total_raised == accepted == 63


class TestEvaluate:
    def test_noop_before_deadline(self, campaign) -> None:
        campaign.contribute(FUNDER_A, 500)
        campaign.evaluate()
        assert campaign.status is CampaignStatus.ACTIVE

    def test_auto_refund_when_minimum_not_met(self, campaign, clock) -> None:
        campaign.contribute(FUNDER_A, 40)
        campaign.contribute(FUNDER_B, 50)

        clock.set(AFTER_DEADLINE)
        campaign.evaluate()

        assert campaign.status is CampaignStatus.FAILED_REFUNDING
        assert campaign.refund_reason is RefundReason.AUTO_FAILED
        assert campaign.refund_opened_at == AFTER_DEADLINE
        assert campaign.dao_fee_amount == 0

        assert campaign.claim_refund(FUNDER_A) == 40
        assert campaign.claim_refund(FUNDER_B) == 50
        with pytest.raises(RefundNotAvailableError, match="Refund not available"):
            campaign.claim_refund(FUNDER_A)

    def test_locks_with_dao_fee(self, campaign, clock) -> None:
        campaign.contribute(FUNDER_A, 60)
        campaign.contribute(FUNDER_B, 60)

        clock.set(AFTER_DEADLINE)
        campaign.evaluate()

        assert campaign.status is CampaignStatus.LOCKED
        assert campaign.dao_fee_amount == 12
        assert campaign.available_funds == 108

    def test_locks_exactly_at_deadline(self, campaign, clock) -> None:
        campaign.contribute(FUNDER_A, 100)
        clock.set(DEADLINE)
        campaign.evaluate()
        assert campaign.status is CampaignStatus.LOCKED

    def test_fee_is_truncated(self, locked_campaign) -> None:
        campaign = locked_campaign(159)
        assert campaign.dao_fee_amount == 15
        assert compute_dao_fee(159) == 15
        assert compute_dao_fee(9) == 0

    def test_idempotent(self, locked_campaign) -> None:
        campaign = locked_campaign(120)
        campaign.evaluate()
        campaign.evaluate()
        assert campaign.dao_fee_amount == 12
        assert campaign.status is CampaignStatus.LOCKED


class TestMultisigRefund:
    def test_requires_two_of_three(self, locked_campaign, clock) -> None:
        campaign = locked_campaign(120)
        clock.set(REFUND_WINDOW + 50)

        campaign.approve_refund(ATTORNEY)
        assert campaign.status is CampaignStatus.LOCKED
        assert campaign.approvals == (ATTORNEY,)

        campaign.approve_refund(PLATFORM)
        assert campaign.status is CampaignStatus.REFUNDING
        assert campaign.refund_reason is RefundReason.MULTISIG
        assert campaign.refund_opened_at == REFUND_WINDOW + 50

        assert campaign.claim_refund(FUNDER_A) == 120

    def test_rejects_non_signer(self, locked_campaign, clock) -> None:
        campaign = locked_campaign(120)
        clock.set(REFUND_WINDOW)
        with pytest.raises(UnauthorizedSignerError, match="not a multisig signer"):
            campaign.approve_refund(OUTSIDER)

    def test_rejects_before_window(self, locked_campaign) -> None:
        campaign = locked_campaign(120)
        with pytest.raises(TimingViolationError, match="Refund window has not started"):
            campaign.approve_refund(ATTORNEY)
        assert campaign.approvals == ()

    def test_rejects_duplicate_signer(self, locked_campaign, clock) -> None:
        campaign = locked_campaign(120)
        clock.set(REFUND_WINDOW)
        campaign.approve_refund(CLIENT)
        with pytest.raises(DuplicateApprovalError):
            campaign.approve_refund(CLIENT)
        assert campaign.status is CampaignStatus.LOCKED

    def test_requires_locked(self, campaign, clock) -> None:
        clock.set(REFUND_WINDOW)
        with pytest.raises(InvalidCampaignStateError, match="must be locked"):
            campaign.approve_refund(ATTORNEY)

    def test_votes_do_not_carry_into_next_locked_period(self, locked_campaign, clock) -> None:
        campaign = locked_campaign(120)
        clock.set(REFUND_WINDOW)
        campaign.approve_refund(ATTORNEY)

        campaign.record_outcome("win")
        assert campaign.approvals == ()
        assert campaign.events[-1].metadata["discarded_refund_approvals"] == [ATTORNEY]

        campaign.approve_appeal(CLIENT, 50, REFUND_WINDOW + 1_000, "appellate", "appeal")
        assert campaign.status is CampaignStatus.LOCKED

        campaign.approve_refund(PLATFORM)
        assert campaign.status is CampaignStatus.LOCKED
        assert campaign.approvals == (PLATFORM,)

        campaign.approve_refund(ATTORNEY)
        assert campaign.status is CampaignStatus.REFUNDING
        opened = campaign.events[-1]
        assert opened.event_type is EventType.REFUND_OPENED
        assert opened.metadata["approvers"] == [PLATFORM, ATTORNEY]


class TestClaimRefund:
    def test_not_available_while_active(self, campaign) -> None:
        campaign.contribute(FUNDER_A, 10)
        assert not campaign.can_refund(FUNDER_A)
        with pytest.raises(RefundNotAvailableError):
            campaign.claim_refund(FUNDER_A)

    def test_not_available_for_non_contributor(self, campaign, clock) -> None:
        campaign.contribute(FUNDER_A, 10)
        clock.set(AFTER_DEADLINE)
        campaign.evaluate()
        with pytest.raises(RefundNotAvailableError):
            campaign.claim_refund(FUNDER_B)

    def test_claims_reduce_available_funds(self, campaign, clock) -> None:
        campaign.contribute(FUNDER_A, 30)
        campaign.contribute(FUNDER_B, 20)
        clock.set(AFTER_DEADLINE)
        campaign.evaluate()

        assert campaign.available_funds == 50
        campaign.claim_refund(FUNDER_A)
        assert campaign.total_refunded == 30
        assert campaign.available_funds == 20
        campaign.claim_refund(FUNDER_B)
        assert campaign.available_funds == 0
        assert [e.event_type for e in campaign.events].count(EventType.REFUND_CLAIMED) == 2

    def test_full_refund_after_lock_leaves_fee_deficit(self, campaign, clock) -> None:
        # Claims return whole contributions even though the fee already left.
        campaign.contribute(FUNDER_A, 60)
        campaign.contribute(FUNDER_B, 60)
        clock.set(AFTER_DEADLINE)
        campaign.evaluate()
        assert campaign.dao_fee_amount == 12

        clock.set(REFUND_WINDOW)
        campaign.approve_refund(ATTORNEY)
        campaign.approve_refund(PLATFORM)

        assert campaign.claim_refund(FUNDER_A) == 60
        assert campaign.claim_refund(FUNDER_B) == 60
        assert campaign.total_refunded == 120
        assert campaign.available_funds == -12
