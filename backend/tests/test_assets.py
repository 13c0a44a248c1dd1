from __future__ import annotations

import math

from hivelytics.schemas.chain import AssetAmount, GlobalChainState
from hivelytics.services.analytics.assets import normalize_asset, to_display_unit, vesting_ratio


def test_normalize_string_asset_reads_leading_amount() -> None:
    assert normalize_asset('10.000 HIVE') == 10.0
    assert normalize_asset('0.125 HBD') == 0.125
    assert normalize_asset('1234.567890 VESTS') == 1234.56789


def test_normalize_structured_asset_applies_precision() -> None:
    assert normalize_asset(AssetAmount(amount='1000', precision=3, nai='@@000000013')) == 1.0
    assert normalize_asset({'amount': '25000000', 'precision': 6, 'nai': '@@000000037'}) == 25.0
    assert normalize_asset({'amount': 2500}) == 2.5


def test_normalize_missing_or_malformed_values_degrade_to_zero() -> None:
    assert normalize_asset(None) == 0.0
    assert normalize_asset('') == 0.0
    assert normalize_asset('abc HIVE') == 0.0
    assert normalize_asset(' HIVE') == 0.0
    assert normalize_asset({'amount': 'xyz', 'precision': 3}) == 0.0
    assert normalize_asset(AssetAmount()) == 0.0
    assert normalize_asset({'precision': 3}) == 0.0
    assert normalize_asset(object()) == 0.0


def test_normalize_rejects_non_finite_numbers() -> None:
    assert normalize_asset('1e999 HIVE') == 0.0
    assert normalize_asset(float('nan')) == 0.0
    assert normalize_asset(float('inf')) == 0.0


def test_normalize_zero_amounts_and_idempotence() -> None:
    for value in ('0.000 HBD', {'amount': '0', 'precision': 3}, 0, 0.0):
        assert normalize_asset(value) == 0.0

    for value in ('10.500 HIVE', {'amount': '1234', 'precision': 2}, 7.25, None, 'junk'):
        once = normalize_asset(value)
        assert normalize_asset(once) == once


def test_vesting_ratio_and_display_conversion() -> None:
    state = GlobalChainState(
        head_block=1,
        total_vesting_fund='500.000 HIVE',
        total_vesting_shares='1000.000000 VESTS',
    )
    ratio = vesting_ratio(state)
    assert ratio == 0.5
    assert to_display_unit('10.000000 VESTS', ratio) == 5.0
    assert to_display_unit(4.0, ratio) == 2.0


def test_vesting_ratio_zero_shares_is_zero() -> None:
    state = GlobalChainState(total_vesting_fund='500.000 HIVE', total_vesting_shares='0.000000 VESTS')
    ratio = vesting_ratio(state)
    assert ratio == 0.0
    assert math.isfinite(ratio)
    assert vesting_ratio(GlobalChainState()) == 0.0
    assert to_display_unit('10.000000 VESTS', ratio) == 0.0


def test_structured_precision_is_bounded() -> None:
    assert normalize_asset({'amount': '1000', 'precision': -3}) == 1000.0
    assert normalize_asset({'amount': '1000', 'precision': 10**9}) == 1000 / 10**18
    assert normalize_asset({'amount': '1000', 'precision': '999999999'}) == 1000 / 10**18
    assert normalize_asset({'amount': '1000', 'precision': 0}) == 1000.0
