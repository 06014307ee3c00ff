from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .errors import InvalidDateError, UnsupportedFieldError
from .fields import ChronoField
from .time import is_leap_year
from .types import Month


@dataclass(frozen=True, order=True)
class MonthDay:
    """An ISO month-day such as --12-03, with no year."""
    month: int
    day: int

    def __post_init__(self) -> None:
        m = Month.of(self.month)
        ChronoField.DAY_OF_MONTH.check_valid_value(self.day)
        if self.day > m.max_length:
            raise InvalidDateError(f"Illegal value for DayOfMonth field, value {self.day} is not valid for month {m.name}")

    @classmethod
    def of(cls, month: int, day: int) -> "MonthDay":
        return cls(int(month), day)

    @classmethod
    def from_date(cls, d: Any) -> "MonthDay":
        """From an ISO ChronoDate or a datetime.date."""
        return cls(d.month, d.day)

    @property
    def month_enum(self) -> Month:
        return Month(self.month)

    def get(self, field: ChronoField) -> int:
        if field is ChronoField.MONTH_OF_YEAR:
            return self.month
        if field is ChronoField.DAY_OF_MONTH:
            return self.day
        raise UnsupportedFieldError(f"Unsupported field: {field}")

    def is_valid_year(self, year: int) -> bool:
        return not (self.day == 29 and self.month == 2 and not is_leap_year(year))

    def with_month(self, month: int) -> "MonthDay":
        """Clamps the day to the new month's maximum length."""
        return MonthDay(month, min(self.day, Month.of(month).max_length))

    def with_day_of_month(self, day: int) -> "MonthDay":
        return MonthDay(self.month, day)

    def at_year(self, year: int, chronology: Optional[Any] = None):
        """The ISO date in year; February 29 becomes February 28 in common years."""
        if chronology is None:
            from ..api import chronology_for
            chronology = chronology_for("ISO")
        day = self.day if self.is_valid_year(year) else 28
        return chronology.date(year, self.month, day)

    def __str__(self) -> str:
        return f"--{self.month:02d}-{self.day:02d}"
