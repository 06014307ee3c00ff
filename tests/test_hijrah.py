# tests/test_hijrah.py

import random

import pytest

import calchrono
from calchrono import ChronoField, HijrahEra, InvalidDateError, InvalidFieldValueError
from calchrono.engines import hijrah_tables as ht


@pytest.fixture
def hijrah():
    # plain tabular calendar, independent of any deviation config in the environment
    return calchrono.get_chronology("Hijrah", load_deviations=False)


def test_known_new_years(hijrah):
    d = hijrah.date(1429, 1, 1)
    assert d.epoch_day == 13888
    assert calchrono.convert(d, "ISO") == calchrono.date(2008, 1, 10)

    d = hijrah.date(1445, 1, 1)
    assert d.epoch_day == 19557
    assert calchrono.convert(d, "ISO") == calchrono.date(2023, 7, 19)

    first = hijrah.date(1, 1, 1)
    assert first.epoch_day == ht.HIJRAH_EPOCH_DAY
    assert calchrono.convert(first, "ISO") == calchrono.date(622, 7, 19)


def test_tabular_leap_years(hijrah):
    leap_in_cycle = [y for y in range(1, 31) if hijrah.is_leap_year(y)]
    assert leap_in_cycle == [2, 5, 7, 10, 13, 16, 18, 21, 24, 26, 29]
    assert hijrah.is_leap_year(1445)
    assert not hijrah.is_leap_year(1429)
    assert hijrah.length_of_year(1445) == 355
    assert hijrah.length_of_year(1429) == 354
    assert hijrah.length_of_month(1445, 12) == 30
    assert hijrah.length_of_month(1429, 12) == 29
    assert [hijrah.length_of_month(1429, m) for m in range(1, 13)] == list(ht.MONTH_LENGTHS)


def test_cycle_is_10631_days(hijrah):
    for cycle in range(0, 5):
        start = hijrah.date(cycle * 30 + 1, 1, 1).epoch_day
        end = hijrah.date(cycle * 30 + 31, 1, 1).epoch_day
        assert end - start == ht.CYCLE_DAYS


def test_inverse_over_several_cycles_including_before_epoch(hijrah):
    start = ht.HIJRAH_EPOCH_DAY - 3 * ht.CYCLE_DAYS - 17
    end = ht.HIJRAH_EPOCH_DAY + 3 * ht.CYCLE_DAYS + 17
    prev = None
    for e in range(start, end):
        d = hijrah.date_epoch_day(e)
        assert hijrah.date(d.year, d.month, d.day).epoch_day == e
        if prev is not None:
            if prev.day == hijrah.length_of_month(prev.year, prev.month):
                assert d.day == 1
                if prev.month == 12:
                    assert (d.year, d.month) == (prev.year + 1, 1)
                else:
                    assert (d.year, d.month) == (prev.year, prev.month + 1)
            else:
                assert (d.year, d.month, d.day) == (prev.year, prev.month, prev.day + 1)
        prev = d


def test_before_ah_mirrors_ah_structure(hijrah):
    last = hijrah.date_epoch_day(ht.HIJRAH_EPOCH_DAY - 1)
    assert (last.year, last.month, last.day) == (0, 12, 29)
    assert last.era is HijrahEra.BEFORE_AH
    assert last.year_of_era == 1
    for n in (1, 2, 29, 30, 31):
        assert hijrah.length_of_year(1 - n) == hijrah.length_of_year(n)
        assert hijrah.is_leap_year(1 - n) == hijrah.is_leap_year(n)
    assert hijrah.date_of_era(HijrahEra.BEFORE_AH, 2, 1, 1).epoch_day == ht.HIJRAH_EPOCH_DAY - 354 - 355


def test_random_roundtrip(hijrah):
    random.seed(42)
    lo, hi = hijrah.epoch_day_bounds()
    for _ in range(5000):
        e = random.randint(lo, hi)
        d = hijrah.date_epoch_day(e)
        assert hijrah.date(d.year, d.month, d.day).epoch_day == e
        assert d.day_of_year == d.epoch_day - hijrah.date(d.year, 1, 1).epoch_day + 1


def test_year_range(hijrah):
    assert hijrah.range(ChronoField.YEAR).as_tuple() == (-9998, 9999, 9999)
    assert hijrah.range(ChronoField.YEAR_OF_ERA).as_tuple() == (1, 9999, 9999)
    assert hijrah.date(9999, 12, 1).year == 9999
    with pytest.raises(InvalidFieldValueError):
        hijrah.date(10000, 1, 1)
    with pytest.raises(InvalidFieldValueError):
        hijrah.date(-9999, 1, 1)


def test_day_ranges(hijrah):
    assert hijrah.range(ChronoField.DAY_OF_MONTH).as_tuple() == (1, 29, 30)
    assert hijrah.range(ChronoField.DAY_OF_YEAR).as_tuple() == (1, 354, 355)
    assert hijrah.date(1429, 2, 1).range(ChronoField.DAY_OF_MONTH).as_tuple() == (1, 29, 29)
    with pytest.raises(InvalidDateError):
        hijrah.date(1429, 2, 30)


def test_month_end_resolution(hijrah):
    assert hijrah.date(1445, 1, 30).plus_months(1) == hijrah.date(1445, 2, 29)
    assert hijrah.date(1445, 12, 30).plus_years(1) == hijrah.date(1446, 12, 29)
    assert hijrah.date(1445, 12, 30).plus_months(12) == hijrah.date(1446, 12, 29)


def test_registry_chronology_is_hijrah():
    c = calchrono.chronology_for("islamic-civil")
    assert c is calchrono.chronology_for("Hijrah")
    assert c.info()["calendar_type"] == "islamic-civil"
    assert calchrono.date(1445, 1, 1, chronology=c).era is HijrahEra.AH
