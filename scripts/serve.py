from __future__ import annotations

import argparse
from pathlib import Path
import sys

import uvicorn

ROOT = Path(__file__).resolve().parents[1]
BACKEND_DIR = ROOT / 'backend'
sys.path.insert(0, str(BACKEND_DIR))


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Run the analytics API.')
    parser.add_argument('--host', default='127.0.0.1')
    parser.add_argument('--port', type=int, default=8000)
    parser.add_argument('--reload', action='store_true', help='Restart on code changes.')
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    uvicorn.run(
        'hivelytics.main:app',
        host=args.host,
        port=args.port,
        reload=args.reload,
        app_dir=str(BACKEND_DIR),
    )
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
