from __future__ import annotations

from collections import Counter
from typing import Iterable

from hivelytics.schemas.analytics import CounterpartyLedgerEntry, DelegationReport, DelegationReturn
from hivelytics.schemas.chain import AccountState, DelegationRecord, VoteOperation
from hivelytics.services.analytics.assets import to_display_unit
from hivelytics.utils.numbers import safe_div

# Returned value per 10k HP delegated.
SCORE_STAKE_FACTOR = 0.0001


def correlate_delegations(
    delegations: Iterable[DelegationRecord],
    *,
    ledger: Iterable[CounterpartyLedgerEntry],
    votes: Iterable[VoteOperation],
    account: str,
    ratio: float,
) -> tuple[DelegationReturn, ...]:
    received_by_name = {entry.name: entry.received for entry in ledger}
    votes_from = Counter(vote.payload.voter for vote in votes if vote.payload.author == account)

    returns: list[DelegationReturn] = []
    for delegation in delegations:
        stake_value = to_display_unit(delegation.stake_shares, ratio)
        returned_value = received_by_name.get(delegation.delegatee, 0.0)
        returns.append(
            DelegationReturn(
                delegatee=delegation.delegatee,
                stake_value=stake_value,
                returned_value=returned_value,
                mutual_vote_count=votes_from.get(delegation.delegatee, 0),
                score=safe_div(returned_value, stake_value * SCORE_STAKE_FACTOR),
            )
        )
    return tuple(returns)


def build_delegation_report(
    delegations: Iterable[DelegationRecord],
    *,
    ledger: Iterable[CounterpartyLedgerEntry],
    votes: Iterable[VoteOperation],
    account: AccountState,
    ratio: float,
) -> DelegationReport:
    returns = correlate_delegations(
        delegations,
        ledger=ledger,
        votes=votes,
        account=account.name,
        ratio=ratio,
    )
    return DelegationReport(
        returns=returns,
        total_delegated_out=sum(item.stake_value for item in returns),
        total_delegated_in=to_display_unit(account.received_stake_shares, ratio),
    )
