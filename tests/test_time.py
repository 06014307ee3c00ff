# tests/test_time.py

import random
from datetime import date

import pytest

from calchrono.core import time as t
from calchrono.core.errors import InvalidFieldValueError


def test_known_epoch_days():
    assert t.ymd_to_epoch_day(1970, 1, 1) == 0
    assert t.ymd_to_epoch_day(2000, 1, 1) == 10957
    assert t.ymd_to_epoch_day(0, 1, 1) == -t.DAYS_0000_TO_1970
    assert t.epoch_day_to_ymd(-1) == (1969, 12, 31)
    assert t.to_jdn(0) == 2440588
    assert t.from_jdn(2451545) == 10957


def test_matches_datetime_ordinals():
    random.seed(42)
    lo = t.to_epoch_day(date(1, 1, 1))
    hi = t.to_epoch_day(date(9999, 12, 31))
    for _ in range(10000):
        e = random.randint(lo, hi)
        d = t.from_epoch_day(e)
        assert t.epoch_day_to_ymd(e) == (d.year, d.month, d.day)
        assert t.ymd_to_epoch_day(d.year, d.month, d.day) == e


@pytest.mark.parametrize("year", [0, -1, -4, -100, -400, -401, -2000, -999_999])
def test_roundtrip_around_negative_years(year):
    start = t.ymd_to_epoch_day(year, 1, 1)
    end = t.ymd_to_epoch_day(year + 1, 1, 1)
    assert end - start == t.length_of_year(year)
    prev = None
    for e in range(start - 3, end + 3):
        ymd = t.epoch_day_to_ymd(e)
        assert t.ymd_to_epoch_day(*ymd) == e
        if prev is not None:
            y, m, d = prev
            if d == t.length_of_month(y, m):
                assert ymd[2] == 1
            else:
                assert ymd == (y, m, d + 1)
        prev = ymd


def test_leap_years():
    assert t.is_leap_year(2000)
    assert t.is_leap_year(0)
    assert t.is_leap_year(-4)
    assert t.is_leap_year(-400)
    assert not t.is_leap_year(1900)
    assert not t.is_leap_year(-100)
    assert t.length_of_month(2024, 2) == 29
    assert t.length_of_month(2023, 2) == 28


def test_epoch_day_range_is_checked():
    assert t.epoch_day_to_ymd(t.MAX_EPOCH_DAY) == (t.MAX_YEAR, 12, 31)
    assert t.epoch_day_to_ymd(t.MIN_EPOCH_DAY) == (t.MIN_YEAR, 1, 1)
    with pytest.raises(InvalidFieldValueError):
        t.epoch_day_to_ymd(t.MAX_EPOCH_DAY + 1)
    with pytest.raises(InvalidFieldValueError):
        t.check_epoch_day(t.MIN_EPOCH_DAY - 1)


def test_day_of_week_and_iso_weeks():
    assert t.day_of_week(0) == 4             # 1970-01-01 was a Thursday
    assert t.iso_week(2021, 1, 1) == (2020, 53)
    assert t.iso_week(2024, 12, 30) == (2025, 1)
    assert t.iso_week(2024, 6, 15) == (2024, 24)
    assert t.weeks_in_week_based_year(2020) == 53
    assert t.weeks_in_week_based_year(2024) == 52


def test_format_ymd():
    assert t.format_ymd(2024, 3, 5) == "2024-03-05"
    assert t.format_ymd(10000, 1, 1) == "+10000-01-01"
    assert t.format_ymd(-1, 1, 1) == "-0001-01-01"
