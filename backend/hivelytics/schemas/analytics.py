from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from hivelytics.schemas.common import OperationKind


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class DailyBucket(_Frozen):
    day_index: int
    author_value: float
    curator_value: float


class StakePoint(_Frozen):
    day_index: int
    author_value: float
    curator_value: float
    total_value: float
    stake: float


class RewardTotals(_Frozen):
    author_hp: float
    curation_hp: float
    witness_hp: float
    liquid_hbd: float
    liquid_hive: float
    total_hp: float


class RewardEvent(_Frozen):
    kind: OperationKind
    block: int
    transaction_id: str
    value: float


class RewardSummary(_Frozen):
    totals: RewardTotals
    daily: tuple[DailyBucket, ...]
    stake_trajectory: tuple[StakePoint, ...]


class PipelineBucket(_Frozen):
    days_until_payout: int
    estimated_value: float


class PendingClaim(_Frozen):
    author: str
    permlink: str
    block: int
    transaction_id: str
    weight_percent: float
    estimated_value: float
    days_until_payout: int
    hours_until_payout: int


class PendingForecast(_Frozen):
    pending_value: float
    claims_count: int
    average_claim_value: float
    pipeline: tuple[PipelineBucket, ...]
    claims: tuple[PendingClaim, ...]


class CounterpartyLedgerEntry(_Frozen):
    name: str
    given: float
    received: float
    volume: float
    balance: float


class ReciprocityReport(_Frozen):
    counterparties: tuple[CounterpartyLedgerEntry, ...]
    mean_balance: float
    mutual_count: int = 0


class DelegationReturn(_Frozen):
    delegatee: str
    stake_value: float
    returned_value: float
    mutual_vote_count: int
    score: float


class DelegationReport(_Frozen):
    returns: tuple[DelegationReturn, ...]
    total_delegated_out: float
    total_delegated_in: float


class DerivedRates(_Frozen):
    curation_apr: float
    author_apr: float
    mana_percent: float
    est_daily_author: float
    est_daily_curation: float
    reputation: int


class AccountProfile(_Frozen):
    post_count: int = 0
    follower_count: int = 0
    following_count: int = 0


class DistributionSlice(_Frozen):
    name: str
    value: float


class AnalyticsResult(_Frozen):
    account: str
    head_block: int
    vesting_ratio: float
    current_stake: float
    rewards: RewardSummary
    pending: PendingForecast
    reciprocity: ReciprocityReport
    delegation: DelegationReport
    rates: DerivedRates
    distribution: tuple[DistributionSlice, ...]
    reward_events: tuple[RewardEvent, ...]
    profile: AccountProfile
