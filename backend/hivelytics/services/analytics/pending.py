from __future__ import annotations

from typing import Iterable

from hivelytics.schemas.analytics import PendingClaim, PendingForecast, PipelineBucket
from hivelytics.schemas.chain import VoteOperation
from hivelytics.services.analytics.assets import normalize_asset
from hivelytics.services.analytics.blocks import BLOCKS_PER_DAY, BLOCKS_PER_HOUR, PAYOUT_WINDOW_BLOCKS, PAYOUT_WINDOW_DAYS
from hivelytics.utils.numbers import clamp, finite, safe_div, to_number

# Curators split half of a post's reward pool. This is an estimate: the real split
# depends on reward curve parameters that the vote records do not carry.
CURATOR_SHARE = 0.5
PIPELINE_SLOTS = PAYOUT_WINDOW_DAYS + 1


def content_key(vote: VoteOperation) -> str:
    return f'{vote.payload.author}/{vote.payload.permlink}'


def estimate_vote_value(vote: VoteOperation) -> float:
    """Estimated reward share a single vote earns from the post's pending payout."""
    payload = vote.payload
    pending_total = normalize_asset(payload.pending_payout)
    share_ratio = abs(to_number(payload.rshares)) / max(abs(to_number(payload.total_vote_weight)), 1.0)
    return finite(pending_total * CURATOR_SHARE * share_ratio)


def blocks_until_payout(vote: VoteOperation, head_block: int) -> int:
    return max(0, (vote.block + PAYOUT_WINDOW_BLOCKS) - head_block)


def days_until_payout(vote: VoteOperation, head_block: int) -> int:
    days = blocks_until_payout(vote, head_block) // BLOCKS_PER_DAY
    return int(clamp(days, 0, PAYOUT_WINDOW_DAYS))


def latest_pending_votes(
    votes: Iterable[VoteOperation],
    *,
    account: str,
    head_block: int,
) -> list[VoteOperation]:
    """The account's own votes still inside the payout window, one per content item.

    Re-votes on the same post collapse to the most recent record.
    """
    latest: dict[str, VoteOperation] = {}
    for vote in votes:
        if vote.payload.voter != account:
            continue
        if head_block - vote.block >= PAYOUT_WINDOW_BLOCKS:
            continue
        key = content_key(vote)
        current = latest.get(key)
        if current is None or vote.block >= current.block:
            latest[key] = vote
    return list(latest.values())


def forecast_pending(
    votes: Iterable[VoteOperation],
    *,
    account: str,
    head_block: int,
) -> PendingForecast:
    retained = latest_pending_votes(votes, account=account, head_block=head_block)

    pipeline = [0.0] * PIPELINE_SLOTS
    claims: list[PendingClaim] = []
    pending_value = 0.0
    for vote in retained:
        estimate = estimate_vote_value(vote)
        pending_value += estimate
        days = days_until_payout(vote, head_block)
        pipeline[days] += estimate
        claims.append(
            PendingClaim(
                author=vote.payload.author,
                permlink=vote.payload.permlink,
                block=vote.block,
                transaction_id=vote.transaction_id,
                weight_percent=abs(to_number(vote.payload.weight)) / 100,
                estimated_value=estimate,
                days_until_payout=days,
                hours_until_payout=(blocks_until_payout(vote, head_block) % BLOCKS_PER_DAY) // BLOCKS_PER_HOUR,
            )
        )

    claims.sort(key=lambda claim: claim.block, reverse=True)
    return PendingForecast(
        pending_value=pending_value,
        claims_count=len(retained),
        average_claim_value=safe_div(pending_value, len(retained)),
        pipeline=tuple(
            PipelineBucket(days_until_payout=idx, estimated_value=value)
            for idx, value in enumerate(pipeline)
        ),
        claims=tuple(claims),
    )
