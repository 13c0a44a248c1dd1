from __future__ import annotations

import logging
import math
from typing import Any

from hivelytics.schemas.chain import (
    AccountState,
    AssetAmount,
    AuthorRewardOperation,
    AuthorRewardPayload,
    BenefactorRewardOperation,
    BenefactorRewardPayload,
    CurationRewardOperation,
    CurationRewardPayload,
    DelegationRecord,
    GlobalChainState,
    MonetaryValue,
    Operation,
    VoteOperation,
    VotePayload,
    WitnessRewardOperation,
    WitnessRewardPayload,
)
from hivelytics.schemas.common import OperationKind
from hivelytics.services.analytics.assets import normalize_asset
from hivelytics.utils.numbers import parse_float_prefix, parse_int_prefix, to_number

LOGGER = logging.getLogger(__name__)

HAF_OPERATION_KINDS: dict[str, OperationKind] = {
    'effective_comment_vote_operation': OperationKind.vote,
    'author_reward_operation': OperationKind.author_reward,
    'curation_reward_operation': OperationKind.curation_reward,
    'comment_benefactor_reward_operation': OperationKind.benefactor_reward,
    'producer_reward_operation': OperationKind.witness_reward,
    'witness_reward_operation': OperationKind.witness_reward,
}

# Numeric ids accepted by the HAF `operation-types` filter.
VOTE_OPERATION_IDS = (72,)
REWARD_OPERATION_IDS = (51, 52, 63, 64)

# Raw mana is tracked in micro-VESTS.
MANA_PER_VEST = 1_000_000
FULL_VOTING_POWER = 10_000


def parse_asset(raw: Any) -> MonetaryValue:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        return raw
    if isinstance(raw, (int, float)):
        return float(raw)
    if isinstance(raw, dict):
        precision = raw.get('precision')
        return AssetAmount(
            amount=raw.get('amount') if isinstance(raw.get('amount'), (str, int, float)) else None,
            precision=precision if isinstance(precision, int) and not isinstance(precision, bool) else None,
            nai=str(raw['nai']) if raw.get('nai') is not None else None,
            symbol=str(raw['symbol']) if raw.get('symbol') is not None else None,
        )
    return None


def parse_operation(row: Any) -> Operation | None:
    if not isinstance(row, dict):
        return None
    op = row.get('op')
    if not isinstance(op, dict):
        return None
    kind = HAF_OPERATION_KINDS.get(str(op.get('type', '')))
    value = op.get('value')
    if kind is None or not isinstance(value, dict):
        return None

    block = _safe_int(row.get('block'))
    trx_id = str(row.get('trx_id') or '')

    if kind is OperationKind.vote:
        return VoteOperation(
            block=block,
            transaction_id=trx_id,
            payload=VotePayload(
                voter=_name(value.get('voter')),
                author=_name(value.get('author')),
                permlink=_name(value.get('permlink')),
                weight=_safe_int(value.get('weight')),
                rshares=_safe_int(value.get('rshares')),
                total_vote_weight=_safe_int(value.get('total_vote_weight')),
                pending_payout=parse_asset(value.get('pending_payout')),
            ),
        )
    if kind is OperationKind.author_reward:
        return AuthorRewardOperation(
            block=block,
            transaction_id=trx_id,
            payload=AuthorRewardPayload(**_author_reward_fields(value)),
        )
    if kind is OperationKind.benefactor_reward:
        return BenefactorRewardOperation(
            block=block,
            transaction_id=trx_id,
            payload=BenefactorRewardPayload(
                benefactor=_name(value.get('benefactor')),
                **_author_reward_fields(value),
            ),
        )
    if kind is OperationKind.curation_reward:
        return CurationRewardOperation(
            block=block,
            transaction_id=trx_id,
            payload=CurationRewardPayload(
                curator=_name(value.get('curator')),
                author=_name(value.get('author') or value.get('comment_author')),
                permlink=_name(value.get('permlink') or value.get('comment_permlink')),
                reward=parse_asset(value.get('reward')),
            ),
        )
    return WitnessRewardOperation(
        block=block,
        transaction_id=trx_id,
        payload=WitnessRewardPayload(
            witness=_name(value.get('witness') or value.get('producer')),
            shares=parse_asset(value.get('shares', value.get('vesting_shares'))),
        ),
    )


def parse_operations(rows: list[Any]) -> list[Operation]:
    operations: list[Operation] = []
    skipped = 0
    for row in rows:
        parsed = parse_operation(row)
        if parsed is None:
            skipped += 1
            continue
        operations.append(parsed)
    if skipped:
        LOGGER.debug('Skipped %s unusable HAF operation rows', skipped)
    return operations


def parse_global_state(payload: Any) -> GlobalChainState:
    if not isinstance(payload, dict):
        return GlobalChainState()
    return GlobalChainState(
        head_block=_safe_int(payload.get('head_block_number')),
        total_vesting_fund=parse_asset(payload.get('total_vesting_fund_hive')),
        total_vesting_shares=parse_asset(payload.get('total_vesting_shares')),
    )


def parse_account(row: dict[str, Any], follow_count: Any = None) -> AccountState:
    follows = follow_count if isinstance(follow_count, dict) else {}
    manabar = row.get('voting_manabar') if isinstance(row.get('voting_manabar'), dict) else {}
    own = parse_asset(row.get('vesting_shares'))
    received = parse_asset(row.get('received_vesting_shares'))
    delegated = parse_asset(row.get('delegated_vesting_shares'))
    reputation = row.get('reputation')

    return AccountState(
        name=_name(row.get('name')),
        stake_shares=own,
        received_stake_shares=received,
        delegated_stake_shares=delegated,
        reputation_raw=reputation if isinstance(reputation, (str, int)) and not isinstance(reputation, bool) else None,
        voting_power_raw=_voting_power_bps(row, manabar, own=own, received=received, delegated=delegated),
        voting_power_last_update=to_number(manabar.get('last_update_time')),
        post_count=_safe_int(row.get('post_count')),
        follower_count=_safe_int(follows.get('follower_count')),
        following_count=_safe_int(follows.get('following_count')),
    )


def parse_delegations(rows: Any) -> list[DelegationRecord]:
    if not isinstance(rows, list):
        return []
    delegations: list[DelegationRecord] = []
    for row in rows:
        if not isinstance(row, dict) or not row.get('delegatee'):
            continue
        delegations.append(
            DelegationRecord(
                delegatee=_name(row.get('delegatee')),
                stake_shares=parse_asset(row.get('vesting_shares')),
            )
        )
    return delegations


def _voting_power_bps(
    row: dict[str, Any],
    manabar: dict[str, Any],
    *,
    own: MonetaryValue,
    received: MonetaryValue,
    delegated: MonetaryValue,
) -> float:
    effective_vests = normalize_asset(own) + normalize_asset(received) - normalize_asset(delegated)
    current_mana = to_number(manabar.get('current_mana'))
    if effective_vests > 0 and current_mana > 0:
        bps = current_mana / (effective_vests * MANA_PER_VEST) * FULL_VOTING_POWER
        return max(0.0, min(float(FULL_VOTING_POWER), bps))
    return max(0.0, min(float(FULL_VOTING_POWER), to_number(row.get('voting_power'))))


def _author_reward_fields(value: dict[str, Any]) -> dict[str, Any]:
    return {
        'author': _name(value.get('author')),
        'permlink': _name(value.get('permlink')),
        'hbd_payout': parse_asset(value.get('hbd_payout')),
        'hive_payout': parse_asset(value.get('hive_payout')),
        'vesting_payout': parse_asset(value.get('vesting_payout')),
    }


def _name(value: Any) -> str:
    if value is None:
        return ''
    return str(value)


def _safe_int(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        parsed = parse_int_prefix(value)
        if parsed is not None:
            return parsed
        return int(parse_float_prefix(value))
    return 0
