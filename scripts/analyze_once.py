from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
BACKEND_ROOT = ROOT / 'backend'
sys.path.insert(0, str(BACKEND_ROOT))

from hivelytics.api.deps import get_snapshot_service
from hivelytics.core.logging import configure_logging
from hivelytics.services.hive_client import HiveClientError
from hivelytics.utils.accounts import is_valid_account_name, normalize_account_name


async def main(account: str) -> int:
    service = get_snapshot_service()
    try:
        result = await service.analyze(account)
    except HiveClientError as exc:
        print(f'Failed to load Hive data: {exc}', file=sys.stderr)
        return 1
    print(result.model_dump_json(indent=2))
    return 0


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Compute reward and reciprocity analytics for one account.')
    parser.add_argument('account', help='Hive account name, with or without a leading @.')
    parser.add_argument('--log-level', default=None, help='Override LOG_LEVEL for this run.')
    return parser.parse_args()


if __name__ == '__main__':
    args = parse_args()
    configure_logging(args.log_level)
    name = normalize_account_name(args.account)
    if not is_valid_account_name(name):
        raise SystemExit(f'Invalid account name: {args.account}')
    raise SystemExit(asyncio.run(main(name)))
