from __future__ import annotations

import logging

from hivelytics.schemas.analytics import AccountProfile, AnalyticsResult, DistributionSlice, RewardTotals
from hivelytics.schemas.chain import AnalyticsInput
from hivelytics.services.analytics.assets import to_display_unit, vesting_ratio
from hivelytics.services.analytics.delegation import build_delegation_report
from hivelytics.services.analytics.pending import forecast_pending
from hivelytics.services.analytics.rates import estimate_rates
from hivelytics.services.analytics.reciprocity import build_ledger, rank_counterparties
from hivelytics.services.analytics.rewards import aggregate_rewards, list_reward_events

LOGGER = logging.getLogger(__name__)


def build_analytics_result(data: AnalyticsInput) -> AnalyticsResult:
    account = data.account
    head_block = data.resolved_head_block
    ratio = vesting_ratio(data.global_state)
    current_stake = to_display_unit(account.stake_shares, ratio)

    rewards = aggregate_rewards(
        data.reward_operations,
        head_block=head_block,
        ratio=ratio,
        current_stake=current_stake,
    )
    pending = forecast_pending(
        data.vote_operations,
        account=account.name,
        head_block=head_block,
    )
    ledger = build_ledger(data.vote_operations, account=account.name)
    reciprocity = rank_counterparties(ledger)
    delegation = build_delegation_report(
        data.delegations,
        ledger=ledger,
        votes=data.vote_operations,
        account=account,
        ratio=ratio,
    )
    rates = estimate_rates(
        totals=rewards.totals,
        current_stake=current_stake,
        account=account,
        now=data.now,
    )

    LOGGER.debug(
        'analytics account=%s head_block=%s rewards=%s votes=%s pending_claims=%s counterparties=%s',
        account.name,
        head_block,
        len(data.reward_operations),
        len(data.vote_operations),
        pending.claims_count,
        len(reciprocity.counterparties),
    )

    return AnalyticsResult(
        account=account.name,
        head_block=head_block,
        vesting_ratio=ratio,
        current_stake=current_stake,
        rewards=rewards,
        pending=pending,
        reciprocity=reciprocity,
        delegation=delegation,
        rates=rates,
        distribution=build_distribution(rewards.totals),
        reward_events=list_reward_events(data.reward_operations, ratio=ratio),
        profile=AccountProfile(
            post_count=account.post_count,
            follower_count=account.follower_count,
            following_count=account.following_count,
        ),
    )


def build_distribution(totals: RewardTotals) -> tuple[DistributionSlice, ...]:
    return (
        DistributionSlice(name='Author Rewards', value=totals.author_hp),
        DistributionSlice(name='Curation Rewards', value=totals.curation_hp),
        DistributionSlice(name='Liquid HBD', value=totals.liquid_hbd),
    )
