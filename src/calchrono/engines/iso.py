"""
calchrono.engines.iso
---------------------
Proleptic Gregorian chronologies.

GregorianChronology carries ISO month structure for any calendar whose
proleptic year is the ISO year plus a fixed offset. IsoChronology is the
offset-0 case and also defines the ISO week-based-year fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple, Union

from ..core import time as iso
from ..core.date import ChronoDate
from ..core.fields import ISO_ONLY_FIELDS, ChronoField, ChronoUnit
from ..core.types import ChronologyId, IsoEra, ValueRange
from . import arithmetic
from .base import BaseChronology


@dataclass(frozen=True)
class IsoParams:
    min_year: int = iso.MIN_YEAR
    max_year: int = iso.MAX_YEAR

    def __post_init__(self) -> None:
        if not (iso.MIN_YEAR <= self.min_year <= self.max_year <= iso.MAX_YEAR):
            raise ValueError(f"ISO year bounds must satisfy {iso.MIN_YEAR} <= min_year <= max_year <= {iso.MAX_YEAR}")


class GregorianChronology(BaseChronology):
    """ISO months and leap rule on years shifted by year_offset (proleptic = ISO + offset)."""

    def __init__(self, chrono_id: ChronologyId, *, year_offset: int = 0,
                 min_iso_year: int = iso.MIN_YEAR, max_iso_year: int = iso.MAX_YEAR) -> None:
        super().__init__(chrono_id, min_year=min_iso_year + year_offset, max_year=max_iso_year + year_offset)
        self.year_offset = year_offset

    def _key(self) -> Tuple[Any, ...]:
        return super()._key() + (self.year_offset,)

    def iso_year(self, year: int) -> int:
        return year - self.year_offset

    def is_leap_year(self, year: int) -> bool:
        return iso.is_leap_year(year - self.year_offset)

    def length_of_month(self, year: int, month: int) -> int:
        return iso.length_of_month(year - self.year_offset, month)

    def length_of_year(self, year: int) -> int:
        return iso.length_of_year(year - self.year_offset)

    def epoch_day_of(self, year: int, month: int, day: int) -> int:
        return iso.ymd_to_epoch_day(year - self.year_offset, month, day)

    def fields_of(self, epoch_day: int) -> Tuple[int, int, int]:
        y, m, d = iso.epoch_day_to_ymd(epoch_day)
        return y + self.year_offset, m, d


class IsoChronology(GregorianChronology):
    era_type = IsoEra

    def __init__(self, chrono_id: ChronologyId, params: IsoParams = IsoParams()) -> None:
        super().__init__(chrono_id, year_offset=0, min_iso_year=params.min_year, max_iso_year=params.max_year)
        self.params = params

    def is_supported(self, field: Union[ChronoField, ChronoUnit]) -> bool:
        if field in ISO_ONLY_FIELDS:
            return True
        return super().is_supported(field)

    def format_date(self, d: ChronoDate) -> str:
        return iso.format_ymd(d.year, d.month, d.day)

    # ---------------------------------------------------------
    # Week-based year
    # ---------------------------------------------------------

    def date_range(self, d: ChronoDate, field: ChronoField) -> ValueRange:
        if field is ChronoField.WEEK_OF_WEEK_BASED_YEAR:
            wby, _ = iso.iso_week(d.year, d.month, d.day)
            return ValueRange.of(1, iso.weeks_in_week_based_year(wby))
        return super().date_range(d, field)

    def get_field(self, d: ChronoDate, field: ChronoField) -> int:
        if field is ChronoField.WEEK_OF_WEEK_BASED_YEAR:
            return iso.iso_week(d.year, d.month, d.day)[1]
        if field is ChronoField.WEEK_BASED_YEAR:
            return iso.iso_week(d.year, d.month, d.day)[0]
        return super().get_field(d, field)

    def with_field(self, d: ChronoDate, field: ChronoField, value: int) -> ChronoDate:
        if field is ChronoField.WEEK_OF_WEEK_BASED_YEAR:
            self.date_range(d, field).check_valid_value(value, field)
            return arithmetic.plus_weeks(d, value - self.get_field(d, field))
        if field is ChronoField.WEEK_BASED_YEAR:
            self._check(field, value)
            _, week = iso.iso_week(d.year, d.month, d.day)
            week = min(week, iso.weeks_in_week_based_year(value))
            jan4 = iso.ymd_to_epoch_day(value, 1, 4)
            week1_monday = jan4 - (iso.day_of_week(jan4) - 1)
            dow = iso.day_of_week(d.epoch_day)
            return self.date_epoch_day(week1_monday + (week - 1) * 7 + (dow - 1))
        return super().with_field(d, field, value)
