from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from hivelytics.schemas.analytics import DailyBucket, RewardEvent, RewardSummary, RewardTotals, StakePoint
from hivelytics.schemas.chain import RewardOperation
from hivelytics.schemas.common import RewardClass
from hivelytics.services.analytics.assets import normalize_asset, to_display_unit
from hivelytics.services.analytics.blocks import HISTORY_DAYS, day_index


@dataclass(slots=True)
class _RewardAccumulator:
    active_hp: float = 0.0
    passive_hp: float = 0.0
    witness_hp: float = 0.0
    liquid_hbd: float = 0.0
    liquid_hive: float = 0.0
    author_by_day: list[float] = field(default_factory=lambda: [0.0] * HISTORY_DAYS)
    curator_by_day: list[float] = field(default_factory=lambda: [0.0] * HISTORY_DAYS)


def reward_value(operation: RewardOperation, ratio: float) -> tuple[RewardClass, float]:
    """Classify a reward operation and return its value in display units (HP)."""
    kind = operation.kind
    if kind == 'curation_reward':
        return RewardClass.passive, to_display_unit(operation.payload.reward, ratio)
    if kind == 'witness_reward':
        return RewardClass.active, to_display_unit(operation.payload.shares, ratio)
    if kind in {'author_reward', 'benefactor_reward'}:
        return RewardClass.active, to_display_unit(operation.payload.vesting_payout, ratio)
    return RewardClass.active, 0.0


def aggregate_rewards(
    operations: Iterable[RewardOperation],
    *,
    head_block: int,
    ratio: float,
    current_stake: float,
) -> RewardSummary:
    acc = _RewardAccumulator()

    for operation in operations:
        reward_class, value = reward_value(operation, ratio)
        if reward_class is RewardClass.passive:
            acc.passive_hp += value
        else:
            acc.active_hp += value
        if operation.kind == 'witness_reward':
            acc.witness_hp += value
        elif operation.kind in {'author_reward', 'benefactor_reward'}:
            acc.liquid_hbd += normalize_asset(operation.payload.hbd_payout)
            acc.liquid_hive += normalize_asset(operation.payload.hive_payout)

        idx = day_index(head_block, operation.block)
        if not 0 <= idx < HISTORY_DAYS:
            continue
        if reward_class is RewardClass.passive:
            acc.curator_by_day[idx] += value
        else:
            acc.author_by_day[idx] += value

    totals = RewardTotals(
        author_hp=acc.active_hp,
        curation_hp=acc.passive_hp,
        witness_hp=acc.witness_hp,
        liquid_hbd=acc.liquid_hbd,
        liquid_hive=acc.liquid_hive,
        total_hp=acc.active_hp + acc.passive_hp,
    )
    days = range(HISTORY_DAYS - 1, -1, -1)
    daily = tuple(
        DailyBucket(
            day_index=idx,
            author_value=acc.author_by_day[idx],
            curator_value=acc.curator_by_day[idx],
        )
        for idx in days
    )
    return RewardSummary(
        totals=totals,
        daily=daily,
        stake_trajectory=build_stake_trajectory(daily, current_stake=current_stake, reward_total=totals.total_hp),
    )


def build_stake_trajectory(
    daily: Iterable[DailyBucket],
    *,
    current_stake: float,
    reward_total: float,
) -> tuple[StakePoint, ...]:
    """Rebuild the stake curve assuming only reward inflow changed the balance.

    `daily` must be ordered oldest first; each point carries the running stake at
    the end of that day.
    """
    running = current_stake - reward_total
    points: list[StakePoint] = []
    for bucket in daily:
        day_total = bucket.author_value + bucket.curator_value
        running += day_total
        points.append(
            StakePoint(
                day_index=bucket.day_index,
                author_value=bucket.author_value,
                curator_value=bucket.curator_value,
                total_value=day_total,
                stake=running,
            )
        )
    return tuple(points)


def list_reward_events(operations: Iterable[RewardOperation], *, ratio: float) -> tuple[RewardEvent, ...]:
    """Every reward operation with its HP value, newest first."""
    events = [
        RewardEvent(
            kind=operation.kind,
            block=operation.block,
            transaction_id=operation.transaction_id,
            value=reward_value(operation, ratio)[1],
        )
        for operation in operations
    ]
    events.sort(key=lambda event: event.block, reverse=True)
    return tuple(events)
