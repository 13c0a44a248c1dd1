from __future__ import annotations

import math

from hivelytics.schemas.analytics import DerivedRates, RewardTotals
from hivelytics.schemas.chain import AccountState
from hivelytics.services.analytics.blocks import HISTORY_DAYS
from hivelytics.utils.numbers import clamp, finite, parse_int_prefix, to_number

DAYS_PER_YEAR = 365
MANA_REGEN_SECONDS = 432_000
BASE_REPUTATION = 25


def annualized_rate(period_total: float, current_stake: float, *, period_days: int = HISTORY_DAYS) -> float:
    """Percent yield of `period_total` on the current stake, scaled to a year."""
    rate = (period_total / max(1.0, current_stake)) * (DAYS_PER_YEAR / period_days) * 100
    return max(0.0, finite(rate))


def mana_percent(voting_power_raw: float, last_update: float, now: float) -> float:
    last_percent = to_number(voting_power_raw) / 100
    elapsed = max(0.0, to_number(now) - to_number(last_update))
    regenerated = elapsed * 100 / MANA_REGEN_SECONDS
    return clamp(finite(last_percent + regenerated), 0.0, 100.0)


def reputation_score(raw: str | int | float | None) -> int:
    if isinstance(raw, bool):
        return BASE_REPUTATION
    if isinstance(raw, (int, float)):
        reputation = int(raw) if math.isfinite(raw) else None
    else:
        reputation = parse_int_prefix(str(raw)) if raw is not None else None
    if not reputation:
        return BASE_REPUTATION
    sign = -1 if reputation < 0 else 1
    score = max(math.log10(abs(reputation)) - 9, 0) * sign * 9 + BASE_REPUTATION
    return math.floor(score)


def estimate_rates(
    *,
    totals: RewardTotals,
    current_stake: float,
    account: AccountState,
    now: float | None,
) -> DerivedRates:
    resolved_now = account.voting_power_last_update if now is None else now
    return DerivedRates(
        curation_apr=annualized_rate(totals.curation_hp, current_stake),
        author_apr=annualized_rate(totals.author_hp, current_stake),
        mana_percent=mana_percent(account.voting_power_raw, account.voting_power_last_update, resolved_now),
        est_daily_author=totals.author_hp / HISTORY_DAYS,
        est_daily_curation=totals.curation_hp / HISTORY_DAYS,
        reputation=reputation_score(account.reputation_raw),
    )
