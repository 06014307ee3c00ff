from unittest import mock

import pytest

import calchrono
from calchrono import ChronoUnit, DateResolver, InvalidDateError, RangeOverflowError, UnsupportedFieldError
from calchrono.engines import arithmetic as ar


def iso(y, m, d):
    return calchrono.date(y, m, d)


def test_resolvers_on_month_addition():
    d = iso(2024, 1, 31)
    assert ar.plus_months(d, 1) == iso(2024, 2, 29)
    assert ar.plus_months(d, 1, DateResolver.PREVIOUS_VALID) == iso(2024, 2, 29)
    assert ar.plus_months(d, 1, DateResolver.NEXT_VALID) == iso(2024, 3, 1)
    assert ar.plus_months(d, 1, DateResolver.PART_LENIENT) == iso(2024, 3, 2)
    with pytest.raises(InvalidDateError):
        ar.plus_months(d, 1, DateResolver.STRICT)
    assert ar.plus_months(d, 2, DateResolver.STRICT) == iso(2024, 3, 31)


def test_resolvers_on_year_addition():
    d = iso(2024, 2, 29)
    assert ar.plus_years(d, 1) == iso(2025, 2, 28)
    assert ar.plus_years(d, 1, DateResolver.NEXT_VALID) == iso(2025, 3, 1)
    assert ar.plus_years(d, 4, DateResolver.STRICT) == iso(2028, 2, 29)
    with pytest.raises(InvalidDateError):
        ar.plus_years(d, 1, DateResolver.STRICT)


def test_resolve_date():
    c = calchrono.chronology_for("Hijrah")
    assert c.resolve_date(1429, 2, 30) == c.date(1429, 2, 29)
    assert c.resolve_date(1429, 2, 30, DateResolver.NEXT_VALID) == c.date(1429, 3, 1)
    with pytest.raises(InvalidDateError):
        c.resolve_date(1429, 2, 30, DateResolver.STRICT)


def test_negative_month_counts_use_floor_division():
    assert iso(1, 1, 15).minus_months(1) == iso(0, 12, 15)
    assert iso(0, 3, 31).minus_months(13) == iso(-1, 2, 28)
    assert iso(-1, 12, 1).plus_months(2) == iso(0, 2, 1)


def test_plus_and_minus_are_inverse_for_days():
    d = iso(2024, 5, 17)
    for n in (-1000, -1, 0, 1, 365, 100000):
        assert d.plus_days(n).minus_days(n) == d
        assert d.plus(n, ChronoUnit.DAYS) == d.minus(-n, ChronoUnit.DAYS)


def test_zero_amount_returns_same_date():
    d = iso(2024, 5, 17)
    for unit in (ChronoUnit.DAYS, ChronoUnit.WEEKS, ChronoUnit.MONTHS, ChronoUnit.YEARS):
        assert d.plus(0, unit) is d


def test_overflow():
    with pytest.raises(RangeOverflowError):
        iso(2024, 1, 1).minus(ar.LONG_MIN, ChronoUnit.DAYS)
    with pytest.raises(RangeOverflowError):
        iso(2024, 1, 1).plus(ar.LONG_MAX + 1, ChronoUnit.DAYS)
    with pytest.raises(RangeOverflowError):
        calchrono.date(9999, 1, 1, chronology="Hijrah").plus_years(1)
    with pytest.raises(RangeOverflowError):
        calchrono.date(-9998, 1, 1, chronology="Hijrah").minus_days(1)
    assert issubclass(RangeOverflowError, ValueError)


def test_minus_long_min_is_split():
    # LONG_MIN cannot be negated in 64 bits; it is applied as LONG_MAX then 1
    d = iso(2024, 1, 1)
    with mock.patch.object(ar, "plus", side_effect=lambda d, amount, unit: d) as plus:
        assert ar.minus(d, ar.LONG_MIN, ChronoUnit.DAYS) is d
    assert [c.args[1] for c in plus.call_args_list] == [ar.LONG_MAX, 1]


def test_eras_unit():
    d = iso(2024, 3, 1)
    assert d.plus(-1, ChronoUnit.ERAS) == iso(-2023, 3, 1)
    with pytest.raises(UnsupportedFieldError):
        d.plus(1, ChronoUnit.FOREVER)


def test_period_until_truncates_toward_zero():
    a = iso(2024, 1, 31)
    assert a.period_until(iso(2024, 2, 29), ChronoUnit.MONTHS) == 0
    assert a.period_until(iso(2024, 3, 31), ChronoUnit.MONTHS) == 2
    assert iso(2024, 3, 31).period_until(a, ChronoUnit.MONTHS) == -2
    assert iso(2024, 3, 30).period_until(a, ChronoUnit.MONTHS) == -1
    assert iso(2020, 2, 29).period_until(iso(2024, 2, 28), ChronoUnit.YEARS) == 3
    assert iso(2020, 2, 29).period_until(iso(2024, 2, 29), ChronoUnit.YEARS) == 4
    assert a.period_until(iso(2024, 2, 13), ChronoUnit.WEEKS) == 1
    assert iso(2024, 2, 13).period_until(a, ChronoUnit.WEEKS) == -1
    assert a.period_until(iso(2024, 2, 13), ChronoUnit.DAYS) == 13
    assert iso(2000, 1, 1).period_until(iso(2123, 6, 1), ChronoUnit.CENTURIES) == 1
    assert iso(2000, 1, 1).period_until(iso(2123, 6, 1), ChronoUnit.DECADES) == 12
    assert iso(2000, 1, 1).period_until(iso(2123, 6, 1), ChronoUnit.QUARTER_YEARS) == 493


def test_period_until_converts_end_to_start_chronology():
    h = calchrono.chronology_for("Hijrah")
    start = h.date(1445, 1, 1)
    end_iso = calchrono.convert(h.date(1446, 1, 1), "ISO")
    assert start.period_until(end_iso, ChronoUnit.YEARS) == 1
    assert start.period_until(end_iso, ChronoUnit.MONTHS) == 12
    assert start.period_until(end_iso, ChronoUnit.DAYS) == 355


def test_period_until_with_thirteen_months():
    c = calchrono.chronology_for("Coptic")
    assert c.date(1740, 1, 1).period_until(c.date(1742, 13, 1), ChronoUnit.YEARS) == 2
    assert c.date(1740, 1, 1).period_until(c.date(1742, 13, 1), ChronoUnit.MONTHS) == 38


def test_ordering_within_one_chronology_only():
    a, b = iso(2024, 1, 1), iso(2024, 1, 2)
    assert a < b and b >= a
    h = calchrono.convert(b, "Hijrah")
    assert a.is_before(h)
    assert h.is_after(a)
    with pytest.raises(TypeError):
        a < h
