from __future__ import annotations

import math
import re

FLOAT_PREFIX_RE = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')
INT_PREFIX_RE = re.compile(r'^[+-]?\d+')


def finite(value: float) -> float:
    if not math.isfinite(value):
        return 0.0
    return value


def safe_div(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return 0.0
    return finite(numerator / denominator)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def parse_float_prefix(text: str | None) -> float:
    if not text:
        return 0.0
    match = FLOAT_PREFIX_RE.match(text.strip())
    if match is None:
        return 0.0
    try:
        return finite(float(match.group(0)))
    except (OverflowError, ValueError):
        return 0.0


def parse_int_prefix(text: str | None) -> int | None:
    if not text:
        return None
    match = INT_PREFIX_RE.match(text.strip())
    if match is None:
        return None
    try:
        return int(match.group(0))
    except ValueError:
        return None


def to_number(value: object) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        try:
            return finite(float(value))
        except OverflowError:
            return 0.0
    if isinstance(value, str):
        return parse_float_prefix(value)
    return 0.0
