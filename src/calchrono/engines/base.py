"""
calchrono.engines.base
----------------------
Shared machinery for every chronology: validation, construction of
ChronoDate values, field get/with, instance ranges and arithmetic.

Subclasses supply only the calendar structure (is_leap_year, length_of_month,
length_of_year, epoch_day_of, fields_of) plus min_year/max_year and era_type.
"""

from __future__ import annotations

from datetime import date as _pydate
from enum import IntEnum
from typing import Any, Dict, List, Optional, Tuple, Type, Union

from ..core.date import ChronoDate, DateResult
from ..core.errors import DateTimeError, InvalidDateError, InvalidFieldValueError, UnsupportedFieldError
from ..core.fields import ISO_ONLY_FIELDS, ChronoField, ChronoUnit
from ..core.time import day_of_week, epoch_day_to_ymd, format_ymd, to_epoch_day, to_jdn
from ..core.types import ChronologyId, IsoEra, ValueRange
from . import arithmetic
from .arithmetic import DateResolver


class BaseChronology:
    era_type: Type[IntEnum] = IsoEra
    months_per_year: int = 12

    def __init__(self, chrono_id: ChronologyId, *, min_year: int, max_year: int) -> None:
        self.id = chrono_id
        self.min_year = min_year
        self.max_year = max_year
        self._epoch_bounds: Optional[Tuple[int, int]] = None

    # ---------------------------------------------------------
    # Calendar structure (subclasses)
    # ---------------------------------------------------------

    def is_leap_year(self, year: int) -> bool:
        raise NotImplementedError

    def length_of_month(self, year: int, month: int) -> int:
        raise NotImplementedError

    def length_of_year(self, year: int) -> int:
        raise NotImplementedError

    def epoch_day_of(self, year: int, month: int, day: int) -> int:
        raise NotImplementedError

    def fields_of(self, epoch_day: int) -> Tuple[int, int, int]:
        raise NotImplementedError

    # ---------------------------------------------------------
    # Identity
    # ---------------------------------------------------------

    def _key(self) -> Tuple[Any, ...]:
        return (type(self), self.id, self.min_year, self.max_year)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseChronology):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.id.name})"

    def __str__(self) -> str:
        return self.id.name

    def info(self) -> Dict[str, Any]:
        lo, hi = self.epoch_day_bounds()
        return {
            "id": self.id.name,
            "calendar_type": self.id.calendar_type,
            "kind": self.id.kind,
            "months_per_year": self.months_per_year,
            "year_range": (self.min_year, self.max_year),
            "epoch_day_range": (lo, hi),
            "eras": [e.name for e in self.era_type],
        }

    # ---------------------------------------------------------
    # Ranges
    # ---------------------------------------------------------

    def epoch_day_bounds(self) -> Tuple[int, int]:
        if self._epoch_bounds is None:
            last_month = self.months_per_year
            self._epoch_bounds = (
                self.epoch_day_of(self.min_year, 1, 1),
                self.epoch_day_of(self.max_year, last_month, self.length_of_month(self.max_year, last_month)),
            )
        return self._epoch_bounds

    def is_supported(self, field: Union[ChronoField, ChronoUnit]) -> bool:
        if isinstance(field, ChronoUnit):
            return field.is_date_based
        return field.is_date_based and field not in ISO_ONLY_FIELDS

    def base_range(self, field: ChronoField) -> ValueRange:
        if field is ChronoField.YEAR:
            return ValueRange.of(self.min_year, self.max_year)
        if field is ChronoField.YEAR_OF_ERA:
            before = 1 - self.min_year
            return ValueRange.of(1, min(before, self.max_year), max(before, self.max_year))
        if field is ChronoField.MONTH_OF_YEAR:
            return ValueRange.of(1, self.months_per_year)
        if field is ChronoField.PROLEPTIC_MONTH:
            n = self.months_per_year
            return ValueRange.of(self.min_year * n, self.max_year * n + n - 1)
        if field is ChronoField.EPOCH_DAY:
            return ValueRange.of(*self.epoch_day_bounds())
        return field.base_range

    def range(self, field: ChronoField) -> ValueRange:
        """Chronology-wide (min, smallest max, max) of a date field."""
        if not self.is_supported(field):
            raise UnsupportedFieldError(f"Unsupported field: {field}")
        return self.base_range(field)

    def date_range(self, d: ChronoDate, field: ChronoField) -> ValueRange:
        """Range of field for the year/month of d."""
        if not self.is_supported(field):
            raise UnsupportedFieldError(f"Unsupported field: {field}")
        if field is ChronoField.DAY_OF_MONTH:
            return ValueRange.of(1, self.length_of_month(d.year, d.month))
        if field is ChronoField.DAY_OF_YEAR:
            return ValueRange.of(1, self.length_of_year(d.year))
        if field is ChronoField.ALIGNED_WEEK_OF_MONTH:
            return ValueRange.of(1, (self.length_of_month(d.year, d.month) - 1) // 7 + 1)
        if field is ChronoField.ALIGNED_WEEK_OF_YEAR:
            return ValueRange.of(1, (self.length_of_year(d.year) - 1) // 7 + 1)
        if field is ChronoField.YEAR_OF_ERA:
            return ValueRange.of(1, self.max_year if d.year >= 1 else 1 - self.min_year)
        return self.range(field)

    def _check(self, field: ChronoField, value: int) -> int:
        return self.range(field).check_valid_value(value, field)

    # ---------------------------------------------------------
    # Eras
    # ---------------------------------------------------------

    def eras(self) -> List[IntEnum]:
        return list(self.era_type)

    def era_of(self, value: int) -> IntEnum:
        try:
            return self.era_type(value)
        except ValueError:
            raise InvalidFieldValueError(f"Invalid era for {self.id.name}: {value}") from None

    def proleptic_year(self, era: Union[IntEnum, int], year_of_era: int) -> int:
        if isinstance(era, IntEnum) and not isinstance(era, self.era_type):
            raise TypeError(f"Era must be {self.era_type.__name__}, got {type(era).__name__}")
        era = self.era_of(int(era))
        if year_of_era < 1:
            raise InvalidFieldValueError(f"Invalid value for YearOfEra: {year_of_era}")
        year = year_of_era if era == 1 else 1 - year_of_era
        self._check(ChronoField.YEAR, year)
        return year

    # ---------------------------------------------------------
    # Construction
    # ---------------------------------------------------------

    def _build(self, year: int, month: int, day: int, epoch_day: int) -> ChronoDate:
        doy = epoch_day - self.epoch_day_of(year, 1, 1) + 1
        return ChronoDate(self, year, month, day, doy, epoch_day)

    def date(self, year: int, month: int, day: int) -> ChronoDate:
        """Date from proleptic year, month and day-of-month."""
        self._check(ChronoField.YEAR, year)
        self._check(ChronoField.MONTH_OF_YEAR, month)
        self._check(ChronoField.DAY_OF_MONTH, day)
        length = self.length_of_month(year, month)
        if day > length:
            raise InvalidDateError(
                f"Invalid date {self.id.name} {year}-{month:02d}-{day:02d}: month {month} has {length} days"
            )
        return self._build(year, month, day, self.epoch_day_of(year, month, day))

    def date_of_era(self, era: Union[IntEnum, int], year_of_era: int, month: int, day: int) -> ChronoDate:
        return self.date(self.proleptic_year(era, year_of_era), month, day)

    def date_year_day(self, year: int, day_of_year: int) -> ChronoDate:
        self._check(ChronoField.YEAR, year)
        self._check(ChronoField.DAY_OF_YEAR, day_of_year)
        length = self.length_of_year(year)
        if day_of_year > length:
            raise InvalidDateError(
                f"Invalid date {self.id.name} year {year} day-of-year {day_of_year}: year has {length} days"
            )
        return self.date_epoch_day(self.epoch_day_of(year, 1, 1) + day_of_year - 1)

    def date_epoch_day(self, epoch_day: int) -> ChronoDate:
        self._check(ChronoField.EPOCH_DAY, epoch_day)
        year, month, day = self.fields_of(epoch_day)
        return self._build(year, month, day, epoch_day)

    def date_from(self, temporal: Union[ChronoDate, _pydate, Any]) -> ChronoDate:
        """The same day in this chronology (ChronoDate, date-time or datetime.date)."""
        if isinstance(temporal, ChronoDate):
            return self.date_epoch_day(temporal.epoch_day)
        if isinstance(temporal, _pydate):
            return self.date_epoch_day(to_epoch_day(temporal))
        to_local_date = getattr(temporal, "to_local_date", None)
        if to_local_date is not None:
            return self.date_epoch_day(to_local_date().epoch_day)
        raise TypeError(f"Cannot obtain a date from {type(temporal).__name__}")

    def is_valid_date(self, year: int, month: int, day: int) -> bool:
        return self.attempt_date(year, month, day).ok

    def attempt_date(self, year: int, month: int, day: int) -> DateResult:
        """Like date(), but reports failure as a value instead of raising."""
        try:
            return DateResult(value=self.date(year, month, day))
        except DateTimeError as exc:
            return DateResult(error=exc)

    def resolve_date(self, year: int, month: int, day: int,
                     resolver: DateResolver = DateResolver.PREVIOUS_VALID) -> ChronoDate:
        self._check(ChronoField.YEAR, year)
        self._check(ChronoField.MONTH_OF_YEAR, month)
        self._check(ChronoField.DAY_OF_MONTH, day)
        return arithmetic.resolve(self, year, month, day, resolver)

    # ---------------------------------------------------------
    # Field access
    # ---------------------------------------------------------

    def get_field(self, d: ChronoDate, field: ChronoField) -> int:
        if not self.is_supported(field):
            raise UnsupportedFieldError(f"Unsupported field: {field}")
        if field is ChronoField.DAY_OF_WEEK:
            return day_of_week(d.epoch_day)
        if field is ChronoField.ALIGNED_DAY_OF_WEEK_IN_MONTH:
            return (d.day - 1) % 7 + 1
        if field is ChronoField.ALIGNED_DAY_OF_WEEK_IN_YEAR:
            return (d.day_of_year - 1) % 7 + 1
        if field is ChronoField.DAY_OF_MONTH:
            return d.day
        if field is ChronoField.DAY_OF_YEAR:
            return d.day_of_year
        if field is ChronoField.EPOCH_DAY:
            return d.epoch_day
        if field is ChronoField.ALIGNED_WEEK_OF_MONTH:
            return (d.day - 1) // 7 + 1
        if field is ChronoField.ALIGNED_WEEK_OF_YEAR:
            return (d.day_of_year - 1) // 7 + 1
        if field is ChronoField.MONTH_OF_YEAR:
            return d.month
        if field is ChronoField.PROLEPTIC_MONTH:
            return arithmetic.proleptic_month(d)
        if field is ChronoField.YEAR_OF_ERA:
            return d.year_of_era
        if field is ChronoField.YEAR:
            return d.year
        if field is ChronoField.ERA:
            return 1 if d.year >= 1 else 0
        raise UnsupportedFieldError(f"Unsupported field: {field}")

    def with_field(self, d: ChronoDate, field: ChronoField, value: int) -> ChronoDate:
        """
        Day-of-month and day-of-year writes are strict; year, month and era
        writes resolve to the previous valid day; week fields move by days.
        """
        self._check(field, value)
        if field in (ChronoField.DAY_OF_WEEK,
                     ChronoField.ALIGNED_DAY_OF_WEEK_IN_MONTH,
                     ChronoField.ALIGNED_DAY_OF_WEEK_IN_YEAR):
            return arithmetic.plus_days(d, value - self.get_field(d, field))
        if field in (ChronoField.ALIGNED_WEEK_OF_MONTH, ChronoField.ALIGNED_WEEK_OF_YEAR):
            return arithmetic.plus_weeks(d, value - self.get_field(d, field))
        if field is ChronoField.DAY_OF_MONTH:
            return self.date(d.year, d.month, value)
        if field is ChronoField.DAY_OF_YEAR:
            return self.date_year_day(d.year, value)
        if field is ChronoField.EPOCH_DAY:
            return self.date_epoch_day(value)
        if field is ChronoField.MONTH_OF_YEAR:
            return arithmetic.resolve(self, d.year, value, d.day)
        if field is ChronoField.PROLEPTIC_MONTH:
            return arithmetic.plus_months(d, value - arithmetic.proleptic_month(d))
        if field is ChronoField.YEAR_OF_ERA:
            year = value if d.year >= 1 else 1 - value
            self._check(ChronoField.YEAR, year)
            return arithmetic.resolve(self, year, d.month, d.day)
        if field is ChronoField.YEAR:
            return arithmetic.resolve(self, value, d.month, d.day)
        if field is ChronoField.ERA:
            if self.get_field(d, field) == value:
                return d
            return arithmetic.resolve(self, 1 - d.year, d.month, d.day)
        raise UnsupportedFieldError(f"Unsupported field: {field}")

    # ---------------------------------------------------------
    # Arithmetic
    # ---------------------------------------------------------

    def plus(self, d: ChronoDate, amount: int, unit: ChronoUnit) -> ChronoDate:
        return arithmetic.plus(d, amount, unit)

    def minus(self, d: ChronoDate, amount: int, unit: ChronoUnit) -> ChronoDate:
        return arithmetic.minus(d, amount, unit)

    def period_until(self, start: ChronoDate, end: ChronoDate, unit: ChronoUnit) -> int:
        return arithmetic.period_until(start, end, unit)

    # ---------------------------------------------------------
    # Text and diagnostics
    # ---------------------------------------------------------

    def format_date(self, d: ChronoDate) -> str:
        return f"{self.id.name} {d.era.name} {d.year_of_era}-{d.month:02d}-{d.day:02d}"

    def explain(self, d: ChronoDate) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "chronology": self.id.name,
            "calendar_type": self.id.calendar_type,
            "text": str(d),
        }
        for field in ChronoField:
            if self.is_supported(field):
                out[field.name.lower()] = self.get_field(d, field)
        out["era_name"] = d.era.name
        out["day_of_week_name"] = d.day_of_week.name
        out["leap_year"] = self.is_leap_year(d.year)
        out["length_of_month"] = self.length_of_month(d.year, d.month)
        out["length_of_year"] = self.length_of_year(d.year)
        out["iso"] = format_ymd(*epoch_day_to_ymd(d.epoch_day))
        out["jdn"] = to_jdn(d.epoch_day)
        return out
