"""
calchrono.core.date
-------------------
ChronoDate: the one date value type shared by every chronology.

A ChronoDate is built by its chronology (never directly), so the stored
fields always agree with the canonical epoch day. Field access, field
writes and arithmetic are delegated to the chronology, which in turn uses
the shared resolution rules in calchrono.engines.arithmetic.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date as _pydate
from typing import TYPE_CHECKING, Any, Dict, Optional, Union

from .errors import DateTimeError
from .fields import ChronoField, ChronoUnit
from .time import from_epoch_day
from .types import DayOfWeek, ValueRange

if TYPE_CHECKING:
    from .clock import LocalTime
    from .composite import ChronoDateTime


@dataclass(frozen=True, eq=False)
class ChronoDate:
    chronology: Any
    year: int          # proleptic year
    month: int
    day: int
    day_of_year: int
    epoch_day: int

    # ---------------------------------------------------------
    # Identity and ordering
    # ---------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChronoDate):
            return NotImplemented
        return self.epoch_day == other.epoch_day and self.chronology == other.chronology

    def __hash__(self) -> int:
        return hash((self.chronology.id.name, self.epoch_day))

    def _check_comparable(self, other: "ChronoDate") -> None:
        if not isinstance(other, ChronoDate) or self.chronology != other.chronology:
            raise TypeError(
                "Dates of different chronologies are not ordered; "
                "use is_before/is_after/is_equal to compare on the timeline"
            )

    def __lt__(self, other: "ChronoDate") -> bool:
        self._check_comparable(other)
        return self.epoch_day < other.epoch_day

    def __le__(self, other: "ChronoDate") -> bool:
        self._check_comparable(other)
        return self.epoch_day <= other.epoch_day

    def __gt__(self, other: "ChronoDate") -> bool:
        self._check_comparable(other)
        return self.epoch_day > other.epoch_day

    def __ge__(self, other: "ChronoDate") -> bool:
        self._check_comparable(other)
        return self.epoch_day >= other.epoch_day

    def is_before(self, other: "ChronoDate") -> bool:
        return self.epoch_day < other.epoch_day

    def is_after(self, other: "ChronoDate") -> bool:
        return self.epoch_day > other.epoch_day

    def is_equal(self, other: "ChronoDate") -> bool:
        """Same day on the timeline, regardless of chronology."""
        return self.epoch_day == other.epoch_day

    # ---------------------------------------------------------
    # Derived fields
    # ---------------------------------------------------------

    @property
    def proleptic_year(self) -> int:
        return self.year

    @property
    def era(self):
        return self.chronology.era_of(1 if self.year >= 1 else 0)

    @property
    def year_of_era(self) -> int:
        return self.year if self.year >= 1 else 1 - self.year

    @property
    def day_of_week(self) -> DayOfWeek:
        return DayOfWeek(self.get(ChronoField.DAY_OF_WEEK))

    def is_leap_year(self) -> bool:
        return self.chronology.is_leap_year(self.year)

    def length_of_month(self) -> int:
        return self.chronology.length_of_month(self.year, self.month)

    def length_of_year(self) -> int:
        return self.chronology.length_of_year(self.year)

    def to_epoch_day(self) -> int:
        return self.epoch_day

    def to_date(self) -> _pydate:
        """The same day as a datetime.date (ISO years 1..9999 only)."""
        return from_epoch_day(self.epoch_day)

    # ---------------------------------------------------------
    # Field access
    # ---------------------------------------------------------

    def is_supported(self, field: Union[ChronoField, ChronoUnit]) -> bool:
        return self.chronology.is_supported(field)

    def get(self, field: ChronoField) -> int:
        return self.chronology.get_field(self, field)

    def range(self, field: ChronoField) -> ValueRange:
        return self.chronology.date_range(self, field)

    def with_field(self, field: ChronoField, value: int) -> "ChronoDate":
        return self.chronology.with_field(self, field, value)

    def with_year(self, year: int) -> "ChronoDate":
        return self.with_field(ChronoField.YEAR, year)

    def with_month(self, month: int) -> "ChronoDate":
        return self.with_field(ChronoField.MONTH_OF_YEAR, month)

    def with_day_of_month(self, day: int) -> "ChronoDate":
        return self.with_field(ChronoField.DAY_OF_MONTH, day)

    def with_day_of_year(self, day_of_year: int) -> "ChronoDate":
        return self.with_field(ChronoField.DAY_OF_YEAR, day_of_year)

    def with_era(self, era: int) -> "ChronoDate":
        return self.with_field(ChronoField.ERA, int(era))

    # ---------------------------------------------------------
    # Arithmetic
    # ---------------------------------------------------------

    def plus(self, amount: int, unit: ChronoUnit) -> "ChronoDate":
        return self.chronology.plus(self, amount, unit)

    def minus(self, amount: int, unit: ChronoUnit) -> "ChronoDate":
        return self.chronology.minus(self, amount, unit)

    def plus_years(self, years: int) -> "ChronoDate":
        return self.plus(years, ChronoUnit.YEARS)

    def plus_months(self, months: int) -> "ChronoDate":
        return self.plus(months, ChronoUnit.MONTHS)

    def plus_weeks(self, weeks: int) -> "ChronoDate":
        return self.plus(weeks, ChronoUnit.WEEKS)

    def plus_days(self, days: int) -> "ChronoDate":
        return self.plus(days, ChronoUnit.DAYS)

    def minus_years(self, years: int) -> "ChronoDate":
        return self.minus(years, ChronoUnit.YEARS)

    def minus_months(self, months: int) -> "ChronoDate":
        return self.minus(months, ChronoUnit.MONTHS)

    def minus_weeks(self, weeks: int) -> "ChronoDate":
        return self.minus(weeks, ChronoUnit.WEEKS)

    def minus_days(self, days: int) -> "ChronoDate":
        return self.minus(days, ChronoUnit.DAYS)

    def period_until(self, end: "ChronoDate", unit: ChronoUnit) -> int:
        """Whole units from this date to end; end is converted to this chronology."""
        return self.chronology.period_until(self, end, unit)

    # ---------------------------------------------------------
    # Composition
    # ---------------------------------------------------------

    def at_time(self, time: "LocalTime") -> "ChronoDateTime":
        from .composite import ChronoDateTime
        return ChronoDateTime(self, time)

    def explain(self) -> Dict[str, Any]:
        return self.chronology.explain(self)

    def __str__(self) -> str:
        return self.chronology.format_date(self)

    def __repr__(self) -> str:
        return f"ChronoDate({self.chronology.id.name}, {self.year}, {self.month}, {self.day})"


@dataclass(frozen=True)
class DateResult:
    """Outcome of a non-raising date construction (see Chronology.attempt_date)."""
    value: Optional[ChronoDate] = None
    error: Optional[DateTimeError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> ChronoDate:
        if self.error is not None:
            raise self.error
        return self.value
