import random

import pytest

import calchrono
from calchrono import ChronoField, CopticEra, InvalidDateError, InvalidFieldValueError

COPTIC = "Coptic"


def coptic(y, m, d):
    return calchrono.date(y, m, d, chronology=COPTIC)


def test_unix_epoch_day():
    d = calchrono.date_from_epoch_day(0, chronology=COPTIC)
    assert (d.year, d.month, d.day) == (1686, 4, 23)
    assert coptic(1686, 4, 23).epoch_day == 0
    assert str(d) == "Coptic AM 1686-04-23"


def test_coptic_epoch():
    first = coptic(1, 1, 1)
    assert first.epoch_day == -615558
    assert first.era is CopticEra.AM
    last_before = first.minus_days(1)
    assert (last_before.year, last_before.month, last_before.day) == (0, 13, 5)
    assert last_before.era is CopticEra.BEFORE_AM


def test_leap_years_and_epagomenal_month():
    c = calchrono.chronology_for(COPTIC)
    assert c.is_leap_year(3)
    assert c.is_leap_year(1739)
    assert not c.is_leap_year(1740)
    assert c.is_leap_year(-1)
    assert c.length_of_month(1739, 13) == 6
    assert c.length_of_month(1740, 13) == 5
    assert c.length_of_month(1740, 1) == 30
    assert c.length_of_year(1739) == 366
    assert coptic(1739, 13, 6).plus_days(1) == coptic(1740, 1, 1)
    with pytest.raises(InvalidDateError):
        coptic(1740, 13, 6)
    with pytest.raises(InvalidFieldValueError):
        coptic(1740, 14, 1)


def test_ranges():
    assert calchrono.field_range(COPTIC, ChronoField.MONTH_OF_YEAR).as_tuple() == (1, 13, 13)
    assert calchrono.field_range(COPTIC, ChronoField.DAY_OF_MONTH).as_tuple() == (1, 5, 30)
    assert calchrono.field_range(COPTIC, ChronoField.ALIGNED_WEEK_OF_MONTH).as_tuple() == (1, 1, 5)
    assert coptic(1740, 13, 1).range(ChronoField.DAY_OF_MONTH).as_tuple() == (1, 5, 5)
    assert coptic(1740, 13, 1).range(ChronoField.ALIGNED_WEEK_OF_MONTH).as_tuple() == (1, 1, 1)


def test_thirteen_month_arithmetic():
    assert coptic(1740, 12, 30).plus_months(1) == coptic(1740, 13, 5)
    assert coptic(1739, 12, 30).plus_months(1) == coptic(1739, 13, 6)
    assert coptic(1740, 13, 5).plus_months(1) == coptic(1741, 1, 5)
    assert coptic(1740, 1, 1).minus_months(1) == coptic(1739, 13, 1)
    assert coptic(1740, 1, 1).get(ChronoField.PROLEPTIC_MONTH) == 1740 * 13
    assert coptic(1740, 1, 1).period_until(coptic(1741, 1, 1), calchrono.ChronoUnit.MONTHS) == 13


def test_roundtrip_over_random_days():
    random.seed(42)
    c = calchrono.chronology_for(COPTIC)
    prev = None
    for e in sorted(random.randint(-1_000_000, 1_000_000) for _ in range(5000)):
        d = c.date_epoch_day(e)
        assert 1 <= d.day <= c.length_of_month(d.year, d.month)
        assert c.date(d.year, d.month, d.day).epoch_day == e
        assert c.date_year_day(d.year, d.day_of_year) == d
        if prev is not None:
            assert prev.is_before(d) or prev.is_equal(d)
        prev = d
