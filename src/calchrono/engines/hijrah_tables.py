"""
calchrono.engines.hijrah_tables
-------------------------------
Table model of the tabular Hijrah calendar.

Default structure: 30-year cycles of 10631 days, years 2, 5, 7, 10, 13, 16,
18, 21, 24, 26 and 29 of each cycle are leap years of 355 days, the rest
have 354. Months alternate 30/29 days; the twelfth month has 30 days in a
leap year.

Deviation patches move the boundary between two months by a few days to
follow observed moon sightings. A patch is a step function applied to the
cumulative tables: every boundary after the start month moves by -offset,
every boundary after the end month moves back by +offset, so dates outside
[start month, end month] keep their epoch day.

HijrahTableBuilder is the single place where tables change. Each patch is
validated and staged on copies, then committed at once; build() freezes the
result into an immutable HijrahTables.
"""

from __future__ import annotations

import logging
from bisect import bisect_left, bisect_right
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ..core.errors import DeviationConfigError

log = logging.getLogger(__name__)

HIJRAH_EPOCH_DAY = -492_148      # 1 Muharram 1 AH = 622-07-19 (ISO), as an epoch day
CYCLE_DAYS = 10_631
YEARS_PER_CYCLE = 30
MONTHS_PER_YEAR = 12
MIN_YEAR_OF_ERA = 1
MAX_YEAR_OF_ERA = 9_999
MAX_ADJUSTED_CYCLE = 334         # cycles 0..333 cover AH 1..10020

MIN_MONTH_LENGTH = 28
MAX_MONTH_LENGTH = 31

# Cumulative days at the start of each month (identical for leap years).
NUM_DAYS: Tuple[int, ...] = (0, 30, 59, 89, 118, 148, 177, 207, 236, 266, 295, 325)
MONTH_LENGTHS: Tuple[int, ...] = (30, 29, 30, 29, 30, 29, 30, 29, 30, 29, 30, 29)
LEAP_MONTH_LENGTHS: Tuple[int, ...] = (30, 29, 30, 29, 30, 29, 30, 29, 30, 29, 30, 30)

# Days from the start of a cycle to the start of each year in it.
CYCLE_YEAR_START: Tuple[int, ...] = (
    0, 354, 709, 1063, 1417, 1772, 2126, 2481, 2835, 3189,
    3544, 3898, 4252, 4607, 4961, 5315, 5670, 6024, 6379, 6733,
    7087, 7442, 7796, 8150, 8505, 8859, 9214, 9568, 9922, 10277,
)
_CYCLE_YEAR_BOUNDS = CYCLE_YEAR_START + (CYCLE_DAYS,)


def is_tabular_leap_year(year: int) -> bool:
    return (14 + 11 * abs(year)) % 30 < 11


def default_year_start(year: int) -> int:
    """Days from 1 Muharram 1 AH to 1 Muharram of AH year (year >= 1), unpatched."""
    cycle, yic = divmod(year - 1, YEARS_PER_CYCLE)
    return cycle * CYCLE_DAYS + CYCLE_YEAR_START[yic]


def default_year_length(year: int) -> int:
    return 355 if is_tabular_leap_year(year) else 354


def default_month_lengths(year: int) -> Tuple[int, ...]:
    return LEAP_MONTH_LENGTHS if is_tabular_leap_year(year) else MONTH_LENGTHS


def month_of_day(month_days: Sequence[int], day_of_year0: int) -> int:
    """0-based month containing the 0-based day-of-year."""
    return bisect_right(month_days, day_of_year0) - 1


# ------------------------------------------------------------
# Deviation patch
# ------------------------------------------------------------

@dataclass(frozen=True)
class DeviationPatch:
    """
    Shift of offset days applied between start and end (AH years, 0-based
    months), written in config files as "sy/sm-ey/em:offset".
    """
    start_year: int
    start_month: int
    end_year: int
    end_month: int
    offset: int
    line: int = field(default=0, compare=False)

    def __post_init__(self) -> None:
        def fail(msg: str) -> None:
            raise DeviationConfigError(f"{msg} in deviation '{self}'", line=self.line, token=str(self))

        if not (MIN_YEAR_OF_ERA <= self.start_year <= MAX_YEAR_OF_ERA):
            fail(f"Start year must be in {MIN_YEAR_OF_ERA}..{MAX_YEAR_OF_ERA}")
        if not (MIN_YEAR_OF_ERA <= self.end_year <= MAX_YEAR_OF_ERA):
            fail(f"End year must be in {MIN_YEAR_OF_ERA}..{MAX_YEAR_OF_ERA}")
        if not (0 <= self.start_month < MONTHS_PER_YEAR):
            fail("Start month must be in 0..11")
        if not (0 <= self.end_month < MONTHS_PER_YEAR):
            fail("End month must be in 0..11")
        if self.end_year < self.start_year:
            fail("End year precedes start year")
        if self.end_year == self.start_year and self.end_month < self.start_month:
            fail("End month precedes start month")

    @property
    def first_month_index(self) -> int:
        return self.start_year * MONTHS_PER_YEAR + self.start_month

    @property
    def last_month_index(self) -> int:
        return self.end_year * MONTHS_PER_YEAR + self.end_month

    def overlaps(self, other: "DeviationPatch") -> bool:
        return (self.first_month_index <= other.last_month_index
                and other.first_month_index <= self.last_month_index)

    def __str__(self) -> str:
        return f"{self.start_year}/{self.start_month}-{self.end_year}/{self.end_month}:{self.offset}"


# ------------------------------------------------------------
# Frozen tables
# ------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class HijrahTables:
    """
    Immutable Hijrah tables. Only patched years/cycles are stored; every
    other row is the default. Equality is identity: two chronologies agree
    only if they share the same tables object.
    """
    month_days: Mapping[int, Tuple[int, ...]]
    month_lengths: Mapping[int, Tuple[int, ...]]
    cycle_years: Mapping[int, Tuple[int, ...]]
    cycle_starts: Tuple[int, ...]
    day_of_month_range: Tuple[int, int]    # (smallest maximum, maximum)
    day_of_year_range: Tuple[int, int]
    patches: Tuple[DeviationPatch, ...] = ()

    @classmethod
    def default(cls) -> "HijrahTables":
        return HijrahTableBuilder().build()

    @property
    def is_patched(self) -> bool:
        return bool(self.patches)

    def month_days_of(self, year: int) -> Tuple[int, ...]:
        return self.month_days.get(year, NUM_DAYS)

    def month_lengths_of(self, year: int) -> Tuple[int, ...]:
        row = self.month_lengths.get(year)
        return row if row is not None else default_month_lengths(year)

    def cycle_years_of(self, cycle: int) -> Tuple[int, ...]:
        return self.cycle_years.get(cycle, CYCLE_YEAR_START)

    def cycle_start(self, cycle: int) -> int:
        if 0 <= cycle < len(self.cycle_starts):
            return self.cycle_starts[cycle]
        return cycle * CYCLE_DAYS

    def year_start(self, year: int) -> int:
        """Days from 1 Muharram 1 AH to 1 Muharram of AH year (year >= 1)."""
        cycle, yic = divmod(year - 1, YEARS_PER_CYCLE)
        return self.cycle_start(cycle) + self.cycle_years_of(cycle)[yic]

    def year_length(self, year: int) -> int:
        return self.year_start(year + 1) - self.year_start(year)

    def locate(self, days: int) -> Tuple[int, int]:
        """(AH year, 0-based day-of-year) of a non-negative offset from the Hijrah epoch."""
        cycle = bisect_right(self.cycle_starts, days) - 1
        if cycle == len(self.cycle_starts) - 1:
            cycle = max(cycle, days // CYCLE_DAYS)
        day_of_cycle = days - self.cycle_start(cycle)
        years = self.cycle_years_of(cycle)
        yic = bisect_right(years, day_of_cycle) - 1
        return cycle * YEARS_PER_CYCLE + yic + 1, day_of_cycle - years[yic]


def locate_before_epoch(days: int) -> Tuple[int, int]:
    """
    (year of the BEFORE_AH era, 0-based day-of-year) of a negative offset.
    BEFORE_AH year n has the default structure of AH year n, laid out
    backwards from the epoch.
    """
    pos = -days
    cycle = (pos - 1) // CYCLE_DAYS
    rem = pos - cycle * CYCLE_DAYS
    k = bisect_left(_CYCLE_YEAR_BOUNDS, rem, 1) - 1
    year_of_era = cycle * YEARS_PER_CYCLE + k + 1
    return year_of_era, _CYCLE_YEAR_BOUNDS[k + 1] - rem


# ------------------------------------------------------------
# Builder
# ------------------------------------------------------------

class HijrahTableBuilder:
    """
    Accumulates deviation patches. Overlapping patches are rejected unless
    allow_overlap is set, in which case they compose additively in the order
    added.
    """

    def __init__(self, *, allow_overlap: bool = False) -> None:
        self.allow_overlap = allow_overlap
        self._month_days: Dict[int, Tuple[int, ...]] = {}
        self._month_lengths: Dict[int, Tuple[int, ...]] = {}
        self._cycle_years: Dict[int, Tuple[int, ...]] = {}
        self._cycle_starts: Tuple[int, ...] = tuple(c * CYCLE_DAYS for c in range(MAX_ADJUSTED_CYCLE))
        self._dom = [29, 30]
        self._doy = [354, 355]
        self._patches: List[DeviationPatch] = []
        self._built = False

    @property
    def patches(self) -> Tuple[DeviationPatch, ...]:
        return tuple(self._patches)

    def _days_row(self, year: int) -> List[int]:
        return list(self._month_days.get(year, NUM_DAYS))

    def _lengths_row(self, year: int) -> List[int]:
        row = self._month_lengths.get(year)
        return list(row if row is not None else default_month_lengths(year))

    def _cycle_row(self, cycle: int) -> List[int]:
        return list(self._cycle_years.get(cycle, CYCLE_YEAR_START))

    def add(self, patch: DeviationPatch) -> "HijrahTableBuilder":
        """Validate, stage and commit one patch. Raises DeviationConfigError without side effects."""
        if self._built:
            raise RuntimeError("Hijrah tables already built; create a new builder")
        if not self.allow_overlap:
            for other in self._patches:
                if patch.overlaps(other):
                    raise DeviationConfigError(
                        f"Deviation '{patch}' overlaps '{other}'", line=patch.line, token=str(patch)
                    )

        sy, sm, ey, em, off = patch.start_year, patch.start_month, patch.end_year, patch.end_month, patch.offset

        days_rows: Dict[int, List[int]] = {}
        length_rows: Dict[int, List[int]] = {}
        cycle_rows: Dict[int, List[int]] = {}
        cycle_starts: Optional[List[int]] = None

        # start year: boundaries after the start month move earlier
        days = self._days_row(sy)
        lengths = self._lengths_row(sy)
        for i in range(sm + 1, MONTHS_PER_YEAR):
            days[i] -= off
        lengths[sm] -= off
        days_rows[sy] = days
        length_rows[sy] = lengths

        if sy != ey:
            s_cycle, s_yic = divmod(sy - 1, YEARS_PER_CYCLE)
            e_cycle, e_yic = divmod(ey - 1, YEARS_PER_CYCLE)

            row = self._cycle_row(s_cycle)
            for j in range(s_yic + 1, YEARS_PER_CYCLE):
                row[j] -= off
            cycle_rows[s_cycle] = row

            if s_cycle != e_cycle:
                cycle_starts = list(self._cycle_starts)
                for j in range(s_cycle + 1, MAX_ADJUSTED_CYCLE):
                    cycle_starts[j] -= off
                for j in range(e_cycle + 1, MAX_ADJUSTED_CYCLE):
                    cycle_starts[j] += off

            row = cycle_rows[e_cycle] if e_cycle in cycle_rows else self._cycle_row(e_cycle)
            for j in range(e_yic + 1, YEARS_PER_CYCLE):
                row[j] += off
            cycle_rows[e_cycle] = row

        # end year: boundaries after the end month move back
        days = days_rows[ey] if ey in days_rows else self._days_row(ey)
        lengths = length_rows[ey] if ey in length_rows else self._lengths_row(ey)
        for i in range(em + 1, MONTHS_PER_YEAR):
            days[i] += off
        lengths[em] += off
        days_rows[ey] = days
        length_rows[ey] = lengths

        for year, row in length_rows.items():
            for month0, n in enumerate(row):
                if not (MIN_MONTH_LENGTH <= n <= MAX_MONTH_LENGTH):
                    raise DeviationConfigError(
                        f"Deviation '{patch}' makes month {month0 + 1} of AH {year} {n} days long "
                        f"(allowed {MIN_MONTH_LENGTH}..{MAX_MONTH_LENGTH})",
                        line=patch.line, token=str(patch),
                    )

        # commit
        for year, row in days_rows.items():
            self._month_days[year] = tuple(row)
        for year, row in length_rows.items():
            self._month_lengths[year] = tuple(row)
        for cycle, row in cycle_rows.items():
            self._cycle_years[cycle] = tuple(row)
        if cycle_starts is not None:
            self._cycle_starts = tuple(cycle_starts)
        self._patches.append(patch)

        for year, month0 in ((sy, sm), (ey, em)):
            n = self._month_lengths[year][month0]
            self._dom[0] = min(self._dom[0], n)
            self._dom[1] = max(self._dom[1], n)
            year_days = self._month_days[year][-1] + self._month_lengths[year][-1]
            self._doy[0] = min(self._doy[0], year_days)
            self._doy[1] = max(self._doy[1], year_days)

        log.debug("Applied Hijrah deviation %s", patch)
        return self

    def add_all(self, patches: Sequence[DeviationPatch]) -> "HijrahTableBuilder":
        for p in patches:
            self.add(p)
        return self

    def build(self) -> HijrahTables:
        self._built = True
        return HijrahTables(
            month_days=MappingProxyType(dict(self._month_days)),
            month_lengths=MappingProxyType(dict(self._month_lengths)),
            cycle_years=MappingProxyType(dict(self._cycle_years)),
            cycle_starts=self._cycle_starts,
            day_of_month_range=(self._dom[0], self._dom[1]),
            day_of_year_range=(self._doy[0], self._doy[1]),
            patches=tuple(self._patches),
        )
