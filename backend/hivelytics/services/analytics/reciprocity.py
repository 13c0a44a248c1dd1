from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from hivelytics.schemas.analytics import CounterpartyLedgerEntry, ReciprocityReport
from hivelytics.schemas.chain import VoteOperation
from hivelytics.services.analytics.pending import estimate_vote_value
from hivelytics.utils.numbers import safe_div

TOP_COUNTERPARTIES = 50
MIN_VOLUME = 0.01


@dataclass(slots=True)
class _Tally:
    given: float = 0.0
    received: float = 0.0


def balance_index(given: float, received: float) -> float:
    """Symmetric 0-100 score: 100 means value flows equally both ways."""
    return safe_div(min(given, received), max(given, received)) * 100


def build_ledger(votes: Iterable[VoteOperation], *, account: str) -> tuple[CounterpartyLedgerEntry, ...]:
    """Tally vote value given to and received from every counterparty.

    Entries keep first-seen order. Self-votes never create an entry.
    """
    tallies: dict[str, _Tally] = {}
    for vote in votes:
        outgoing = vote.payload.voter == account
        counterparty = vote.payload.author if outgoing else vote.payload.voter
        if counterparty == account:
            continue
        tally = tallies.setdefault(counterparty, _Tally())
        value = estimate_vote_value(vote)
        if outgoing:
            tally.given += value
        else:
            tally.received += value

    return tuple(
        CounterpartyLedgerEntry(
            name=name,
            given=tally.given,
            received=tally.received,
            volume=tally.given + tally.received,
            balance=balance_index(tally.given, tally.received),
        )
        for name, tally in tallies.items()
    )


def rank_counterparties(
    ledger: Iterable[CounterpartyLedgerEntry],
    *,
    limit: int = TOP_COUNTERPARTIES,
    min_volume: float = MIN_VOLUME,
) -> ReciprocityReport:
    active = [entry for entry in ledger if entry.volume > min_volume]
    active.sort(key=lambda entry: entry.volume, reverse=True)
    ranked = tuple(active[:limit])
    mean_balance = safe_div(sum(entry.balance for entry in ranked), len(ranked))
    mutual_count = sum(1 for entry in ranked if entry.given > 0 and entry.received > 0)
    return ReciprocityReport(counterparties=ranked, mean_balance=mean_balance, mutual_count=mutual_count)


def score_reciprocity(votes: Iterable[VoteOperation], *, account: str) -> ReciprocityReport:
    return rank_counterparties(build_ledger(votes, account=account))
