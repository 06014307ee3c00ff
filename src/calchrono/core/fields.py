"""
calchrono.core.fields
---------------------
Field and unit vocabulary shared by every chronology and by the time-of-day
and offset value types.
"""

from __future__ import annotations
from enum import Enum
from typing import Optional

from .time import MAX_YEAR, MIN_YEAR, MAX_EPOCH_DAY, MIN_EPOCH_DAY
from .types import ValueRange

NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_MINUTE = 60 * NANOS_PER_SECOND
NANOS_PER_HOUR = 60 * NANOS_PER_MINUTE
NANOS_PER_DAY = 24 * NANOS_PER_HOUR
SECONDS_PER_DAY = 86_400


class ChronoUnit(Enum):
    # (name, nanos for time units, months for month-based units)
    NANOS = ("Nanos", 1, None)
    MICROS = ("Micros", 1_000, None)
    MILLIS = ("Millis", 1_000_000, None)
    SECONDS = ("Seconds", NANOS_PER_SECOND, None)
    MINUTES = ("Minutes", NANOS_PER_MINUTE, None)
    HOURS = ("Hours", NANOS_PER_HOUR, None)
    HALF_DAYS = ("HalfDays", 12 * NANOS_PER_HOUR, None)
    DAYS = ("Days", None, None)
    WEEKS = ("Weeks", None, None)
    MONTHS = ("Months", None, 1)
    QUARTER_YEARS = ("QuarterYears", None, 3)
    HALF_YEARS = ("HalfYears", None, 6)
    YEARS = ("Years", None, 12)
    DECADES = ("Decades", None, 120)
    CENTURIES = ("Centuries", None, 1_200)
    MILLENNIA = ("Millennia", None, 12_000)
    ERAS = ("Eras", None, None)
    FOREVER = ("Forever", None, None)

    def __init__(self, display: str, nanos: Optional[int], months: Optional[int]) -> None:
        self.display = display
        self.nanos = nanos
        self.months = months

    @property
    def is_time_based(self) -> bool:
        return self.nanos is not None

    @property
    def is_date_based(self) -> bool:
        return self.nanos is None and self is not ChronoUnit.FOREVER

    def __str__(self) -> str:
        return self.display



class ChronoField(Enum):
    # (display name, base unit, base range, kind)
    NANO_OF_SECOND = ("NanoOfSecond", ChronoUnit.NANOS, ValueRange.of(0, NANOS_PER_SECOND - 1), "time")
    NANO_OF_DAY = ("NanoOfDay", ChronoUnit.NANOS, ValueRange.of(0, NANOS_PER_DAY - 1), "time")
    MICRO_OF_SECOND = ("MicroOfSecond", ChronoUnit.MICROS, ValueRange.of(0, 999_999), "time")
    MICRO_OF_DAY = ("MicroOfDay", ChronoUnit.MICROS, ValueRange.of(0, NANOS_PER_DAY // 1_000 - 1), "time")
    MILLI_OF_SECOND = ("MilliOfSecond", ChronoUnit.MILLIS, ValueRange.of(0, 999), "time")
    MILLI_OF_DAY = ("MilliOfDay", ChronoUnit.MILLIS, ValueRange.of(0, SECONDS_PER_DAY * 1_000 - 1), "time")
    SECOND_OF_MINUTE = ("SecondOfMinute", ChronoUnit.SECONDS, ValueRange.of(0, 59), "time")
    SECOND_OF_DAY = ("SecondOfDay", ChronoUnit.SECONDS, ValueRange.of(0, SECONDS_PER_DAY - 1), "time")
    MINUTE_OF_HOUR = ("MinuteOfHour", ChronoUnit.MINUTES, ValueRange.of(0, 59), "time")
    MINUTE_OF_DAY = ("MinuteOfDay", ChronoUnit.MINUTES, ValueRange.of(0, 24 * 60 - 1), "time")
    HOUR_OF_AMPM = ("HourOfAmPm", ChronoUnit.HOURS, ValueRange.of(0, 11), "time")
    CLOCK_HOUR_OF_AMPM = ("ClockHourOfAmPm", ChronoUnit.HOURS, ValueRange.of(1, 12), "time")
    HOUR_OF_DAY = ("HourOfDay", ChronoUnit.HOURS, ValueRange.of(0, 23), "time")
    CLOCK_HOUR_OF_DAY = ("ClockHourOfDay", ChronoUnit.HOURS, ValueRange.of(1, 24), "time")
    AMPM_OF_DAY = ("AmPmOfDay", ChronoUnit.HALF_DAYS, ValueRange.of(0, 1), "time")
    DAY_OF_WEEK = ("DayOfWeek", ChronoUnit.DAYS, ValueRange.of(1, 7), "date")
    ALIGNED_DAY_OF_WEEK_IN_MONTH = ("AlignedDayOfWeekInMonth", ChronoUnit.DAYS, ValueRange.of(1, 7), "date")
    ALIGNED_DAY_OF_WEEK_IN_YEAR = ("AlignedDayOfWeekInYear", ChronoUnit.DAYS, ValueRange.of(1, 7), "date")
    DAY_OF_MONTH = ("DayOfMonth", ChronoUnit.DAYS, ValueRange.of(1, 28, 31), "date")
    DAY_OF_YEAR = ("DayOfYear", ChronoUnit.DAYS, ValueRange.of(1, 365, 366), "date")
    EPOCH_DAY = ("EpochDay", ChronoUnit.DAYS, ValueRange.of(MIN_EPOCH_DAY, MAX_EPOCH_DAY), "date")
    ALIGNED_WEEK_OF_MONTH = ("AlignedWeekOfMonth", ChronoUnit.WEEKS, ValueRange.of(1, 4, 5), "date")
    ALIGNED_WEEK_OF_YEAR = ("AlignedWeekOfYear", ChronoUnit.WEEKS, ValueRange.of(1, 53), "date")
    MONTH_OF_YEAR = ("MonthOfYear", ChronoUnit.MONTHS, ValueRange.of(1, 12), "date")
    PROLEPTIC_MONTH = ("ProlepticMonth", ChronoUnit.MONTHS, ValueRange.of(MIN_YEAR * 12, MAX_YEAR * 12 + 11), "date")
    YEAR_OF_ERA = ("YearOfEra", ChronoUnit.YEARS, ValueRange.of(1, MAX_YEAR, MAX_YEAR + 1), "date")
    YEAR = ("Year", ChronoUnit.YEARS, ValueRange.of(MIN_YEAR, MAX_YEAR), "date")
    ERA = ("Era", ChronoUnit.ERAS, ValueRange.of(0, 1), "date")
    # ISO week-based fields; only the ISO chronology defines them
    WEEK_OF_WEEK_BASED_YEAR = ("WeekOfWeekBasedYear", ChronoUnit.WEEKS, ValueRange.of(1, 52, 53), "date")
    WEEK_BASED_YEAR = ("WeekBasedYear", ChronoUnit.YEARS, ValueRange.of(MIN_YEAR, MAX_YEAR), "date")
    INSTANT_SECONDS = ("InstantSeconds", ChronoUnit.SECONDS,
                       ValueRange.of(MIN_EPOCH_DAY * SECONDS_PER_DAY, (MAX_EPOCH_DAY + 1) * SECONDS_PER_DAY - 1),
                       "instant")
    OFFSET_SECONDS = ("OffsetSeconds", ChronoUnit.SECONDS, ValueRange.of(-18 * 3600, 18 * 3600), "instant")

    def __init__(self, display: str, base_unit: ChronoUnit, rng: ValueRange, kind: str) -> None:
        self.display = display
        self.base_unit = base_unit
        self.base_range = rng
        self.kind = kind

    @property
    def is_date_based(self) -> bool:
        return self.kind == "date"

    @property
    def is_time_based(self) -> bool:
        return self.kind == "time"

    def range(self) -> ValueRange:
        return self.base_range

    def check_valid_value(self, value: int) -> int:
        return self.base_range.check_valid_value(value, self)

    def __str__(self) -> str:
        return self.display


ISO_ONLY_FIELDS = frozenset({ChronoField.WEEK_OF_WEEK_BASED_YEAR, ChronoField.WEEK_BASED_YEAR})
