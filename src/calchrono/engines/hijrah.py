"""
calchrono.engines.hijrah
------------------------
The tabular Hijrah (Islamic civil) chronology over HijrahTables.

AH years 1..9999 read the (possibly patched) tables. Years of the
BEFORE_AH era mirror the default structure of the AH year with the same
year-of-era: proleptic year p <= 0 is year-of-era n = 1 - p and has the
month and year lengths of unpatched AH year n.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ..core.fields import ChronoField
from ..core.types import ChronologyId, HijrahEra, ValueRange
from .base import BaseChronology
from .hijrah_tables import (
    HIJRAH_EPOCH_DAY,
    MAX_YEAR_OF_ERA,
    NUM_DAYS,
    HijrahTables,
    default_month_lengths,
    default_year_length,
    default_year_start,
    is_tabular_leap_year,
    locate_before_epoch,
    month_of_day,
)


@dataclass(frozen=True)
class HijrahParams:
    """Where deviation data comes from; see engines.deviation.load_hijrah_tables."""
    deviation_path: Optional[str] = None
    load_deviations: bool = True
    strict: bool = False
    allow_overlap: bool = False


class HijrahChronology(BaseChronology):
    era_type = HijrahEra

    def __init__(self, chrono_id: ChronologyId, tables: Optional[HijrahTables] = None) -> None:
        super().__init__(chrono_id, min_year=1 - MAX_YEAR_OF_ERA, max_year=MAX_YEAR_OF_ERA)
        self.tables = tables if tables is not None else HijrahTables.default()

    def _key(self) -> Tuple[Any, ...]:
        return super()._key() + (self.tables,)

    def info(self) -> Dict[str, Any]:
        out = super().info()
        out["deviations"] = [str(p) for p in self.tables.patches]
        return out

    # ---------------------------------------------------------
    # Calendar structure
    # ---------------------------------------------------------

    def is_leap_year(self, year: int) -> bool:
        """Tabular leap rule; deviations change month lengths, not this flag."""
        return is_tabular_leap_year(year if year >= 1 else 1 - year)

    def length_of_month(self, year: int, month: int) -> int:
        if year >= 1:
            return self.tables.month_lengths_of(year)[month - 1]
        return default_month_lengths(1 - year)[month - 1]

    def length_of_year(self, year: int) -> int:
        if year >= 1:
            return self.tables.year_length(year)
        return default_year_length(1 - year)

    def epoch_day_of(self, year: int, month: int, day: int) -> int:
        if year >= 1:
            start = self.tables.year_start(year)
            return HIJRAH_EPOCH_DAY + start + self.tables.month_days_of(year)[month - 1] + day - 1
        year_of_era = 1 - year
        start = -default_year_start(year_of_era + 1)
        return HIJRAH_EPOCH_DAY + start + NUM_DAYS[month - 1] + day - 1

    def fields_of(self, epoch_day: int) -> Tuple[int, int, int]:
        days = epoch_day - HIJRAH_EPOCH_DAY
        if days >= 0:
            year, doy0 = self.tables.locate(days)
            month_days = self.tables.month_days_of(year)
        else:
            year_of_era, doy0 = locate_before_epoch(days)
            year = 1 - year_of_era
            month_days = NUM_DAYS
        month0 = month_of_day(month_days, doy0)
        return year, month0 + 1, doy0 - month_days[month0] + 1

    def base_range(self, field: ChronoField) -> ValueRange:
        if field is ChronoField.DAY_OF_MONTH:
            return ValueRange.of(1, *self.tables.day_of_month_range)
        if field is ChronoField.DAY_OF_YEAR:
            return ValueRange.of(1, *self.tables.day_of_year_range)
        return super().base_range(field)
