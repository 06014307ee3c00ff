"""
calchrono.core.time
-------------------
Epoch-day timeline converter: proleptic Gregorian (ISO-8601) year/month/day
to and from the day count where day 0 is 1970-01-01.

All division is floor division; negative zero-day counts are first moved into
a non-negative 400-year cycle so the March-based estimate stays exact.
"""

from __future__ import annotations
from datetime import date
from typing import Tuple

from .errors import InvalidFieldValueError

MIN_YEAR = -999_999_999
MAX_YEAR = 999_999_999

DAYS_PER_CYCLE = 146_097          # days in a 400-year Gregorian cycle
DAYS_0000_TO_1970 = 719_528       # 0000-01-01 .. 1970-01-01
JDN_UNIX_EPOCH = 2_440_588        # Julian Day Number of 1970-01-01
_ORDINAL_UNIX_EPOCH = 719_163     # date(1970, 1, 1).toordinal()


def is_leap_year(year: int) -> bool:
    """Proleptic Gregorian leap rule, valid for negative years."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def length_of_month(year: int, month: int) -> int:
    if month == 2:
        return 29 if is_leap_year(year) else 28
    if month in (4, 6, 9, 11):
        return 30
    return 31


def length_of_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def ymd_to_epoch_day(year: int, month: int, day: int) -> int:
    """
    Epoch day of a proleptic Gregorian date.
    Does not validate; callers check month/day against the year first.
    """
    y = year
    total = 365 * y
    if y >= 0:
        total += (y + 3) // 4 - (y + 99) // 100 + (y + 399) // 400
    else:
        total -= y // -4 - y // -100 + y // -400
    total += (367 * month - 362) // 12
    total += day - 1
    if month > 2:
        total -= 1
        if not is_leap_year(year):
            total -= 1
    return total - DAYS_0000_TO_1970


MIN_EPOCH_DAY = ymd_to_epoch_day(MIN_YEAR, 1, 1)
MAX_EPOCH_DAY = ymd_to_epoch_day(MAX_YEAR, 12, 31)


def check_epoch_day(epoch_day: int) -> int:
    if not MIN_EPOCH_DAY <= epoch_day <= MAX_EPOCH_DAY:
        raise InvalidFieldValueError(
            f"Invalid value for EpochDay (valid values {MIN_EPOCH_DAY} - {MAX_EPOCH_DAY}): {epoch_day}"
        )
    return epoch_day


def epoch_day_to_ymd(epoch_day: int) -> Tuple[int, int, int]:
    """Inverse of ymd_to_epoch_day over MIN_YEAR..MAX_YEAR."""
    check_epoch_day(epoch_day)
    zero_day = epoch_day + DAYS_0000_TO_1970
    # March-based year: the leap day is the last day of the year
    zero_day -= 60
    adjust = 0
    if zero_day < 0:
        adjust_cycles = (zero_day + 1) // DAYS_PER_CYCLE - 1
        adjust = adjust_cycles * 400
        zero_day += -adjust_cycles * DAYS_PER_CYCLE
    year_est = (400 * zero_day + 591) // DAYS_PER_CYCLE
    doy_est = zero_day - (365 * year_est + year_est // 4 - year_est // 100 + year_est // 400)
    if doy_est < 0:
        year_est -= 1
        doy_est = zero_day - (365 * year_est + year_est // 4 - year_est // 100 + year_est // 400)
    year_est += adjust
    march_doy0 = doy_est

    march_month0 = (march_doy0 * 5 + 2) // 153
    month = (march_month0 + 2) % 12 + 1
    dom = march_doy0 - (march_month0 * 306 + 5) // 10 + 1
    year_est += march_month0 // 10
    return year_est, month, dom


def day_of_year(year: int, month: int, day: int) -> int:
    return ymd_to_epoch_day(year, month, day) - ymd_to_epoch_day(year, 1, 1) + 1


def day_of_week(epoch_day: int) -> int:
    """ISO day of week, 1 = Monday .. 7 = Sunday (epoch day 0 was a Thursday)."""
    return (epoch_day + 3) % 7 + 1


# ------------------------------------------------------------
# ISO week-based year
# ------------------------------------------------------------

def weeks_in_week_based_year(year: int) -> int:
    jan1 = day_of_week(ymd_to_epoch_day(year, 1, 1))
    if jan1 == 4 or (jan1 == 3 and is_leap_year(year)):
        return 53
    return 52


def iso_week(year: int, month: int, day: int) -> Tuple[int, int]:
    """(week-based year, week of week-based year) of a proleptic Gregorian date."""
    doy = day_of_year(year, month, day)
    dow = day_of_week(ymd_to_epoch_day(year, month, day))
    week = (doy - dow + 10) // 7
    if week < 1:
        return year - 1, weeks_in_week_based_year(year - 1)
    if week > weeks_in_week_based_year(year):
        return year + 1, 1
    return year, week


# ------------------------------------------------------------
# Interop with datetime.date and Julian Day Numbers
# ------------------------------------------------------------

def to_epoch_day(d: date) -> int:
    return d.toordinal() - _ORDINAL_UNIX_EPOCH


def from_epoch_day(epoch_day: int) -> date:
    """Only years 1..9999 are representable by datetime.date."""
    return date.fromordinal(epoch_day + _ORDINAL_UNIX_EPOCH)


def to_jdn(epoch_day: int) -> int:
    return epoch_day + JDN_UNIX_EPOCH


def from_jdn(jdn: int) -> int:
    return jdn - JDN_UNIX_EPOCH


def format_ymd(year: int, month: int, day: int) -> str:
    """ISO-8601 text; years beyond four digits carry an explicit sign."""
    if year > 9999:
        ys = f"+{year}"
    elif year < 0:
        ys = f"-{-year:04d}"
    else:
        ys = f"{year:04d}"
    return f"{ys}-{month:02d}-{day:02d}"
