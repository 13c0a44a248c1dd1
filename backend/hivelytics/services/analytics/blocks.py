from __future__ import annotations

BLOCK_INTERVAL_SECONDS = 3
BLOCKS_PER_HOUR = 1200
BLOCKS_PER_DAY = 28800
PAYOUT_WINDOW_DAYS = 7
PAYOUT_WINDOW_BLOCKS = BLOCKS_PER_DAY * PAYOUT_WINDOW_DAYS
HISTORY_DAYS = 30


def day_index(head_block: int, block: int) -> int:
    # Floor division keeps blocks ahead of head negative so callers can drop them.
    return (head_block - block) // BLOCKS_PER_DAY


def history_start_block(head_block: int, days: int = HISTORY_DAYS) -> int:
    return max(0, head_block - BLOCKS_PER_DAY * days)
