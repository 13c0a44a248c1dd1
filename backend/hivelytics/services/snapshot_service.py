from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from typing import Any

import httpx

from hivelytics.core.config import Settings
from hivelytics.schemas.analytics import AnalyticsResult
from hivelytics.schemas.chain import AnalyticsInput
from hivelytics.services.analytics.blocks import history_start_block
from hivelytics.services.analytics.service import build_analytics_result
from hivelytics.services.haf_parser import (
    REWARD_OPERATION_IDS,
    VOTE_OPERATION_IDS,
    parse_account,
    parse_delegations,
    parse_global_state,
    parse_operations,
)
from hivelytics.services.hive_client import HiveClient
from hivelytics.utils.timezone import unix_now

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class RawSnapshot:
    account: dict[str, Any]
    follow_count: dict[str, Any]
    global_properties: dict[str, Any]
    delegations: list[dict[str, Any]]
    votes: list[dict[str, Any]]
    rewards: list[dict[str, Any]]


class SnapshotService:
    def __init__(self, settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._settings = settings
        self._transport = transport

    async def fetch_raw(self, account: str) -> RawSnapshot:
        async with HiveClient(self._settings, transport=self._transport) as client:
            account_row, follow_count, global_properties, delegations = await asyncio.gather(
                client.get_account(account),
                client.get_follow_count(account),
                client.get_global_properties(),
                client.get_vesting_delegations(account),
            )
            head_block = parse_global_state(global_properties).head_block
            from_block = history_start_block(head_block, self._settings.history_days)
            votes, rewards = await asyncio.gather(
                client.get_operations(
                    account,
                    from_block=from_block,
                    operation_types=VOTE_OPERATION_IDS,
                    max_pages=self._settings.haf_vote_max_pages,
                ),
                client.get_operations(
                    account,
                    from_block=from_block,
                    operation_types=REWARD_OPERATION_IDS,
                    max_pages=self._settings.haf_reward_max_pages,
                ),
            )
        return RawSnapshot(
            account=account_row,
            follow_count=follow_count,
            global_properties=global_properties,
            delegations=delegations,
            votes=votes,
            rewards=rewards,
        )

    async def fetch_input(self, account: str, *, now: float | None = None) -> AnalyticsInput:
        raw = await self.fetch_raw(account)
        global_state = parse_global_state(raw.global_properties)
        operations = parse_operations(raw.votes) + parse_operations(raw.rewards)
        LOGGER.info(
            'Fetched snapshot for %s: head_block=%s votes=%s rewards=%s delegations=%s',
            account,
            global_state.head_block,
            len(raw.votes),
            len(raw.rewards),
            len(raw.delegations),
        )
        return AnalyticsInput.from_operations(
            account=parse_account(raw.account, raw.follow_count),
            global_state=global_state,
            operations=operations,
            delegations=parse_delegations(raw.delegations),
            now=unix_now() if now is None else now,
        )

    async def analyze(self, account: str, *, now: float | None = None) -> AnalyticsResult:
        data = await self.fetch_input(account, now=now)
        return build_analytics_result(data)
