from __future__ import annotations

from hivelytics.schemas.chain import AccountState, DelegationRecord, VoteOperation, VotePayload
from hivelytics.services.analytics.delegation import build_delegation_report, correlate_delegations
from hivelytics.services.analytics.reciprocity import build_ledger


def _vote(voter: str, author: str, pending: str = '4.000 HBD', permlink: str = 'p') -> VoteOperation:
    return VoteOperation(
        block=1,
        payload=VotePayload(
            voter=voter,
            author=author,
            permlink=permlink,
            rshares=1,
            total_vote_weight=1,
            pending_payout=pending,
        ),
    )


VOTES = [
    _vote('bob', 'alice'),
    _vote('bob', 'alice', permlink='q'),
    _vote('alice', 'bob', '10.000 HBD'),
    _vote('carol', 'dave'),
]


def test_correlate_reads_ledger_and_counts_mutual_votes() -> None:
    ledger = build_ledger(VOTES, account='alice')
    returns = correlate_delegations(
        [
            DelegationRecord(delegatee='bob', stake_shares='20000.000000 VESTS'),
            DelegationRecord(delegatee='erin', stake_shares='2000.000000 VESTS'),
        ],
        ledger=ledger,
        votes=VOTES,
        account='alice',
        ratio=0.5,
    )

    assert [item.delegatee for item in returns] == ['bob', 'erin']
    bob, erin = returns
    assert bob.stake_value == 10_000.0
    assert bob.returned_value == 4.0
    assert bob.mutual_vote_count == 2
    assert abs(bob.score - 4.0) < 1e-9
    assert erin.stake_value == 1_000.0
    assert erin.returned_value == 0.0
    assert erin.mutual_vote_count == 0
    assert erin.score == 0.0


def test_zero_stake_delegation_scores_zero() -> None:
    returns = correlate_delegations(
        [DelegationRecord(delegatee='bob', stake_shares=None)],
        ledger=build_ledger(VOTES, account='alice'),
        votes=VOTES,
        account='alice',
        ratio=0.5,
    )
    assert returns[0].stake_value == 0.0
    assert returns[0].returned_value == 4.0
    assert returns[0].score == 0.0


def test_report_totals() -> None:
    account = AccountState(name='alice', stake_shares='100.000000 VESTS', received_stake_shares='300.000000 VESTS')
    report = build_delegation_report(
        [
            DelegationRecord(delegatee='bob', stake_shares='20.000000 VESTS'),
            DelegationRecord(delegatee='erin', stake_shares={'amount': '40000000', 'precision': 6}),
        ],
        ledger=build_ledger(VOTES, account='alice'),
        votes=VOTES,
        account=account,
        ratio=0.5,
    )
    assert report.total_delegated_out == 30.0
    assert report.total_delegated_in == 150.0
    assert len(report.returns) == 2


def test_no_delegations() -> None:
    account = AccountState(name='alice')
    report = build_delegation_report([], ledger=(), votes=(), account=account, ratio=0.5)
    assert report.returns == ()
    assert report.total_delegated_out == 0.0
    assert report.total_delegated_in == 0.0
