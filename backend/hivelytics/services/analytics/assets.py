from __future__ import annotations

from collections.abc import Mapping
import math
from typing import Any

from hivelytics.schemas.chain import AssetAmount, GlobalChainState
from hivelytics.utils.numbers import clamp, finite, parse_float_prefix, parse_int_prefix, safe_div, to_number

DEFAULT_PRECISION = 3
MAX_PRECISION = 18


def normalize_asset(value: Any) -> float:
    """Convert any asset representation to a float in its native denomination.

    Accepts "<amount> <symbol>" strings, structured assets (model or mapping with
    `amount` and `precision`) and plain numbers. Anything unusable becomes 0.0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return to_number(value)
    if isinstance(value, str):
        token = value.strip().split(' ')[0]
        return parse_float_prefix(token)
    if isinstance(value, AssetAmount):
        return _structured_value(value.amount, value.precision)
    if isinstance(value, Mapping):
        return _structured_value(value.get('amount'), value.get('precision'))
    return 0.0


def _structured_value(amount: Any, precision: Any) -> float:
    units = _integer_amount(amount)
    if units is None:
        return 0.0
    digits = _precision(precision)
    try:
        return finite(units / (10 ** digits))
    except ArithmeticError:
        return 0.0


def _integer_amount(amount: Any) -> int | None:
    if amount is None or isinstance(amount, bool):
        return None
    if isinstance(amount, int):
        return amount
    if isinstance(amount, float):
        if not math.isfinite(amount):
            return None
        return int(amount)
    if isinstance(amount, str):
        return parse_int_prefix(amount)
    return None


def _precision(precision: Any) -> int:
    if precision is None or isinstance(precision, bool):
        return DEFAULT_PRECISION
    try:
        digits = int(precision)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_PRECISION
    return int(clamp(digits, 0, MAX_PRECISION))


def vesting_ratio(global_state: GlobalChainState) -> float:
    fund = normalize_asset(global_state.total_vesting_fund)
    shares = normalize_asset(global_state.total_vesting_shares)
    return safe_div(fund, shares)


def to_display_unit(stake_shares: Any, ratio: float) -> float:
    return finite(normalize_asset(stake_shares) * ratio)
