from __future__ import annotations

from typing import Annotated, Iterable, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from hivelytics.schemas.common import OperationKind


class AssetAmount(BaseModel):
    """Structured asset as returned by the HAF history API (`amount / 10**precision`)."""

    model_config = ConfigDict(frozen=True)

    amount: str | int | float | None = None
    precision: int | None = None
    nai: str | None = None
    symbol: str | None = None


# "<amount> <symbol>", a structured asset, an already normalized number, or nothing.
MonetaryValue = Union[AssetAmount, str, float, None]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class VotePayload(_Frozen):
    voter: str = ''
    author: str = ''
    permlink: str = ''
    weight: int = 0
    rshares: int = 0
    total_vote_weight: int = 0
    pending_payout: MonetaryValue = None


class AuthorRewardPayload(_Frozen):
    author: str = ''
    permlink: str = ''
    hbd_payout: MonetaryValue = None
    hive_payout: MonetaryValue = None
    vesting_payout: MonetaryValue = None


class BenefactorRewardPayload(AuthorRewardPayload):
    benefactor: str = ''


class CurationRewardPayload(_Frozen):
    curator: str = ''
    author: str = ''
    permlink: str = ''
    reward: MonetaryValue = None


class WitnessRewardPayload(_Frozen):
    witness: str = ''
    shares: MonetaryValue = None


class VoteOperation(_Frozen):
    kind: Literal['vote'] = 'vote'
    block: int = 0
    transaction_id: str = ''
    payload: VotePayload


class AuthorRewardOperation(_Frozen):
    kind: Literal['author_reward'] = 'author_reward'
    block: int = 0
    transaction_id: str = ''
    payload: AuthorRewardPayload


class BenefactorRewardOperation(_Frozen):
    kind: Literal['benefactor_reward'] = 'benefactor_reward'
    block: int = 0
    transaction_id: str = ''
    payload: BenefactorRewardPayload


class CurationRewardOperation(_Frozen):
    kind: Literal['curation_reward'] = 'curation_reward'
    block: int = 0
    transaction_id: str = ''
    payload: CurationRewardPayload


class WitnessRewardOperation(_Frozen):
    kind: Literal['witness_reward'] = 'witness_reward'
    block: int = 0
    transaction_id: str = ''
    payload: WitnessRewardPayload


RewardOperation = Union[
    AuthorRewardOperation,
    BenefactorRewardOperation,
    CurationRewardOperation,
    WitnessRewardOperation,
]

Operation = Annotated[
    Union[
        VoteOperation,
        AuthorRewardOperation,
        BenefactorRewardOperation,
        CurationRewardOperation,
        WitnessRewardOperation,
    ],
    Field(discriminator='kind'),
]


class GlobalChainState(_Frozen):
    head_block: int = 0
    total_vesting_fund: MonetaryValue = None
    total_vesting_shares: MonetaryValue = None


class AccountState(_Frozen):
    name: str
    stake_shares: MonetaryValue = None
    received_stake_shares: MonetaryValue = None
    delegated_stake_shares: MonetaryValue = None
    reputation_raw: str | int | None = None
    # Basis points, 10_000 == 100%.
    voting_power_raw: float = 0.0
    # Unix seconds.
    voting_power_last_update: float = 0.0
    post_count: int = 0
    follower_count: int = 0
    following_count: int = 0


class DelegationRecord(_Frozen):
    delegatee: str
    stake_shares: MonetaryValue = None


class AnalyticsInput(_Frozen):
    account: AccountState
    global_state: GlobalChainState
    head_block: int | None = None
    vote_operations: tuple[VoteOperation, ...] = ()
    author_reward_operations: tuple[AuthorRewardOperation, ...] = ()
    benefactor_reward_operations: tuple[BenefactorRewardOperation, ...] = ()
    curation_reward_operations: tuple[CurationRewardOperation, ...] = ()
    witness_reward_operations: tuple[WitnessRewardOperation, ...] = ()
    delegations: tuple[DelegationRecord, ...] = ()
    # Unix seconds used for mana regeneration; None means "as of the last manabar update".
    now: float | None = None

    @property
    def resolved_head_block(self) -> int:
        if self.head_block is not None:
            return self.head_block
        return self.global_state.head_block

    @property
    def reward_operations(self) -> tuple[RewardOperation, ...]:
        return (
            *self.author_reward_operations,
            *self.benefactor_reward_operations,
            *self.curation_reward_operations,
            *self.witness_reward_operations,
        )

    @classmethod
    def from_operations(
        cls,
        *,
        account: AccountState,
        global_state: GlobalChainState,
        operations: Iterable[Operation],
        delegations: Iterable[DelegationRecord] = (),
        head_block: int | None = None,
        now: float | None = None,
    ) -> 'AnalyticsInput':
        grouped: dict[str, list[Operation]] = {kind.value: [] for kind in OperationKind}
        for operation in operations:
            grouped[operation.kind].append(operation)
        return cls(
            account=account,
            global_state=global_state,
            head_block=head_block,
            vote_operations=tuple(grouped['vote']),
            author_reward_operations=tuple(grouped['author_reward']),
            benefactor_reward_operations=tuple(grouped['benefactor_reward']),
            curation_reward_operations=tuple(grouped['curation_reward']),
            witness_reward_operations=tuple(grouped['witness_reward']),
            delegations=tuple(delegations),
            now=now,
        )
