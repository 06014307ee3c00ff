"""
calchrono.engines.arithmetic
----------------------------
Chronology-agnostic date arithmetic.

Year and month arithmetic works on the linear month count
(proleptic_year * months_per_year + month - 1), then resolves a day-of-month
that does not exist in the target month with a DateResolver policy. The
default policy clamps to the last valid day, so 31 + one month lands on the
30th in every chronology. Day and week arithmetic is a pure epoch-day delta
and never produces an invalid date.

The functions need only this capability from a chronology:
date(), date_epoch_day(), length_of_month(), months_per_year and range().
"""

from __future__ import annotations

from enum import Enum

from ..core.date import ChronoDate
from ..core.errors import InvalidDateError, RangeOverflowError, UnsupportedFieldError
from ..core.fields import ChronoField, ChronoUnit
from .interfaces import DateArithmeticProtocol

LONG_MIN = -(2 ** 63)
LONG_MAX = 2 ** 63 - 1


class DateResolver(Enum):
    """What to do when a computed day-of-month does not exist."""
    STRICT = "strict"                  # raise InvalidDateError
    PREVIOUS_VALID = "previous_valid"  # last day of the month
    NEXT_VALID = "next_valid"          # first day of the following month
    PART_LENIENT = "part_lenient"      # excess days roll into the following month


def check_amount(amount: int) -> int:
    if not LONG_MIN <= amount <= LONG_MAX:
        raise RangeOverflowError(f"Amount out of 64-bit range: {amount}")
    return amount


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _check_year(chrono: DateArithmeticProtocol, year: int) -> int:
    if not chrono.range(ChronoField.YEAR).is_valid_value(year):
        raise RangeOverflowError(f"Year {year} is outside the supported range of {chrono.id.name}")
    return year


def resolve(chrono: DateArithmeticProtocol, year: int, month: int, day: int,
            resolver: DateResolver = DateResolver.PREVIOUS_VALID) -> ChronoDate:
    """Build year/month/day, applying resolver if day is past the end of the month."""
    length = chrono.length_of_month(year, month)
    if day <= length:
        return chrono.date(year, month, day)
    if resolver is DateResolver.STRICT:
        raise InvalidDateError(
            f"Invalid date: day {day} of month {month} in {chrono.id.name} year {year} (month has {length} days)"
        )
    if resolver is DateResolver.PREVIOUS_VALID:
        return chrono.date(year, month, length)
    first = chrono.date(year, month, 1)
    if resolver is DateResolver.NEXT_VALID:
        return plus_months(first, 1)
    return plus_days(first, day - 1)


# ------------------------------------------------------------
# Addition
# ------------------------------------------------------------

def plus_days(d: ChronoDate, days: int) -> ChronoDate:
    check_amount(days)
    if days == 0:
        return d
    chrono = d.chronology
    epoch_day = d.epoch_day + days
    if not chrono.range(ChronoField.EPOCH_DAY).is_valid_value(epoch_day):
        raise RangeOverflowError(f"Epoch day {epoch_day} is outside the supported range of {chrono.id.name}")
    return chrono.date_epoch_day(epoch_day)


def plus_weeks(d: ChronoDate, weeks: int) -> ChronoDate:
    check_amount(weeks)
    return plus_days(d, weeks * 7) if weeks else d


def plus_months(d: ChronoDate, months: int,
                resolver: DateResolver = DateResolver.PREVIOUS_VALID) -> ChronoDate:
    check_amount(months)
    if months == 0:
        return d
    chrono = d.chronology
    per_year = chrono.months_per_year
    linear = d.year * per_year + (d.month - 1) + months
    year, month0 = divmod(linear, per_year)
    _check_year(chrono, year)
    return resolve(chrono, year, month0 + 1, d.day, resolver)


def plus_years(d: ChronoDate, years: int,
               resolver: DateResolver = DateResolver.PREVIOUS_VALID) -> ChronoDate:
    check_amount(years)
    if years == 0:
        return d
    chrono = d.chronology
    year = _check_year(chrono, d.year + years)
    return resolve(chrono, year, d.month, d.day, resolver)


def plus(d: ChronoDate, amount: int, unit: ChronoUnit) -> ChronoDate:
    check_amount(amount)
    if unit is ChronoUnit.DAYS:
        return plus_days(d, amount)
    if unit is ChronoUnit.WEEKS:
        return plus_weeks(d, amount)
    if unit in (ChronoUnit.MONTHS, ChronoUnit.QUARTER_YEARS, ChronoUnit.HALF_YEARS):
        return plus_months(d, amount * unit.months)
    if unit in (ChronoUnit.YEARS, ChronoUnit.DECADES, ChronoUnit.CENTURIES, ChronoUnit.MILLENNIA):
        return plus_years(d, amount * (unit.months // 12))
    if unit is ChronoUnit.ERAS:
        era = d.get(ChronoField.ERA)
        return d.with_field(ChronoField.ERA, era + amount)
    raise UnsupportedFieldError(f"Unsupported unit: {unit}")


def minus(d: ChronoDate, amount: int, unit: ChronoUnit) -> ChronoDate:
    """Addition of the negated amount; -LONG_MIN is not a 64-bit value, so it is split."""
    check_amount(amount)
    if amount == LONG_MIN:
        return plus(plus(d, LONG_MAX, unit), 1, unit)
    return plus(d, -amount, unit)


# ------------------------------------------------------------
# Differences
# ------------------------------------------------------------

def proleptic_month(d: ChronoDate) -> int:
    return d.year * d.chronology.months_per_year + d.month - 1


def months_until(start: ChronoDate, end: ChronoDate) -> int:
    """Whole months; a partial month (end day before start day) does not count."""
    packed1 = proleptic_month(start) * 32 + start.day
    packed2 = proleptic_month(end) * 32 + end.day
    return _trunc_div(packed2 - packed1, 32)


def period_until(start: ChronoDate, end: ChronoDate, unit: ChronoUnit) -> int:
    chrono = start.chronology
    if end.chronology != chrono:
        end = chrono.date_epoch_day(end.epoch_day)
    if unit is ChronoUnit.DAYS:
        return end.epoch_day - start.epoch_day
    if unit is ChronoUnit.WEEKS:
        return _trunc_div(end.epoch_day - start.epoch_day, 7)
    if unit is ChronoUnit.ERAS:
        return end.get(ChronoField.ERA) - start.get(ChronoField.ERA)
    if unit.months is not None:
        months = months_until(start, end)
        if unit in (ChronoUnit.MONTHS, ChronoUnit.QUARTER_YEARS, ChronoUnit.HALF_YEARS):
            return _trunc_div(months, unit.months)
        return _trunc_div(months, chrono.months_per_year * (unit.months // 12))
    raise UnsupportedFieldError(f"Unsupported unit: {unit}")
