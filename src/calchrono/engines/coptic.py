"""
calchrono.engines.coptic
------------------------
The Coptic (Alexandrian) calendar: twelve months of 30 days followed by an
epagomenal month of 5 days, 6 in leap years. Year y is a leap year iff
y mod 4 == 3. 1 Thout 1 AM is Julian 284-08-29, epoch day -615558.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..core.fields import ChronoField
from ..core.types import ChronologyId, CopticEra, ValueRange
from .base import BaseChronology

EPOCH_DAY_DIFFERENCE = 615_558   # days from 1 Thout 1 AM to 1970-01-01
DAYS_PER_4_YEARS = 1_461


@dataclass(frozen=True)
class CopticParams:
    min_year: int = -999_999
    max_year: int = 999_999

    def __post_init__(self) -> None:
        if self.min_year > self.max_year:
            raise ValueError("min_year must be <= max_year")


def _year_start(year: int) -> int:
    """Days from 1 Thout 1 AM to 1 Thout of the given proleptic year."""
    return (year - 1) * 365 + year // 4


class CopticChronology(BaseChronology):
    era_type = CopticEra
    months_per_year = 13

    def __init__(self, chrono_id: ChronologyId, params: CopticParams = CopticParams()) -> None:
        super().__init__(chrono_id, min_year=params.min_year, max_year=params.max_year)
        self.params = params

    def is_leap_year(self, year: int) -> bool:
        return year % 4 == 3

    def length_of_month(self, year: int, month: int) -> int:
        if month == 13:
            return 6 if self.is_leap_year(year) else 5
        return 30

    def length_of_year(self, year: int) -> int:
        return 366 if self.is_leap_year(year) else 365

    def epoch_day_of(self, year: int, month: int, day: int) -> int:
        return _year_start(year) + (month - 1) * 30 + day - 1 - EPOCH_DAY_DIFFERENCE

    def fields_of(self, epoch_day: int) -> Tuple[int, int, int]:
        days = epoch_day + EPOCH_DAY_DIFFERENCE
        year = (4 * days + 1463) // DAYS_PER_4_YEARS
        doy0 = days - _year_start(year)
        return year, doy0 // 30 + 1, doy0 % 30 + 1

    def base_range(self, field: ChronoField) -> ValueRange:
        if field is ChronoField.DAY_OF_MONTH:
            return ValueRange.of(1, 5, 30)
        if field is ChronoField.ALIGNED_WEEK_OF_MONTH:
            return ValueRange.of(1, 1, 5)
        return super().base_range(field)
