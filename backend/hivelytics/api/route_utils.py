from __future__ import annotations

from fastapi import HTTPException

from hivelytics.utils.accounts import is_valid_account_name, normalize_account_name


def resolve_account_param(account: str | None) -> str:
    name = normalize_account_name(account)
    if not name:
        raise HTTPException(status_code=400, detail='account is required')
    if not is_valid_account_name(name):
        raise HTTPException(status_code=400, detail=f'Invalid account name: {account}')
    return name
