from __future__ import annotations

import re

ACCOUNT_NAME_RE = re.compile(r'^[a-z][a-z0-9\-.]{2,15}$')


def normalize_account_name(name: str | None) -> str:
    if not name:
        return ''
    return name.strip().lower().removeprefix('@')


def is_valid_account_name(name: str) -> bool:
    return bool(ACCOUNT_NAME_RE.match(name))
