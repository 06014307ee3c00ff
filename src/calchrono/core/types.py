from __future__ import annotations
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Literal, Optional

from .errors import InvalidFieldValueError

ChronologyKind = Literal["iso", "year_offset", "coptic", "hijrah"]


@dataclass(frozen=True)
class ChronologyId:
    kind: ChronologyKind
    name: str             # e.g. "ThaiBuddhist"
    calendar_type: str    # CLDR calendar type, e.g. "buddhist"


@dataclass(frozen=True)
class ValueRange:
    """
    Valid values of a field: minimum .. maximum, where the maximum of a
    particular instance may be as low as smallest_maximum (e.g. day-of-month
    is 1..28/31 in ISO, 1..29/30 in Hijrah).
    """
    minimum: int
    smallest_maximum: int
    maximum: int
    largest_minimum: Optional[int] = None

    def __post_init__(self) -> None:
        if self.largest_minimum is None:
            object.__setattr__(self, "largest_minimum", self.minimum)
        if self.minimum > self.largest_minimum:
            raise ValueError("minimum must be <= largest_minimum")
        if self.smallest_maximum > self.maximum:
            raise ValueError("smallest_maximum must be <= maximum")
        if self.largest_minimum > self.maximum:
            raise ValueError("largest_minimum must be <= maximum")

    @classmethod
    def of(cls, minimum: int, *maxima: int) -> "ValueRange":
        if len(maxima) == 1:
            return cls(minimum, maxima[0], maxima[0])
        if len(maxima) == 2:
            return cls(minimum, maxima[0], maxima[1])
        raise TypeError("ValueRange.of takes one or two maxima")

    @property
    def is_fixed(self) -> bool:
        return self.minimum == self.largest_minimum and self.smallest_maximum == self.maximum

    def is_valid_value(self, value: int) -> bool:
        return self.minimum <= value <= self.maximum

    def check_valid_value(self, value: int, field: object = None) -> int:
        if not self.is_valid_value(value):
            what = f"Invalid value for {field}" if field is not None else "Invalid value"
            raise InvalidFieldValueError(f"{what} (valid values {self}): {value}")
        return value

    def as_tuple(self):
        return (self.minimum, self.smallest_maximum, self.maximum)

    def __str__(self) -> str:
        lo = f"{self.minimum}" if self.minimum == self.largest_minimum else f"{self.minimum}/{self.largest_minimum}"
        hi = f"{self.maximum}" if self.smallest_maximum == self.maximum else f"{self.smallest_maximum}/{self.maximum}"
        return f"{lo} - {hi}"


class DayOfWeek(IntEnum):
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7

    @classmethod
    def of(cls, value: int) -> "DayOfWeek":
        if not 1 <= value <= 7:
            raise InvalidFieldValueError(f"Invalid value for DayOfWeek: {value}")
        return cls(value)

    def plus(self, days: int) -> "DayOfWeek":
        return DayOfWeek((self.value - 1 + days) % 7 + 1)


class Month(IntEnum):
    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12

    @classmethod
    def of(cls, value: int) -> "Month":
        if not 1 <= value <= 12:
            raise InvalidFieldValueError(f"Invalid value for MonthOfYear: {value}")
        return cls(value)

    def plus(self, months: int) -> "Month":
        return Month((self.value - 1 + months) % 12 + 1)

    def length(self, leap_year: bool) -> int:
        if self is Month.FEBRUARY:
            return 29 if leap_year else 28
        if self in (Month.APRIL, Month.JUNE, Month.SEPTEMBER, Month.NOVEMBER):
            return 30
        return 31

    @property
    def min_length(self) -> int:
        return self.length(False)

    @property
    def max_length(self) -> int:
        return self.length(True)


# ------------------------------------------------------------
# Eras: value 1 is the current era (proleptic year >= 1),
# value 0 the one before it (proleptic year = 1 - year_of_era).
# ------------------------------------------------------------

class IsoEra(IntEnum):
    BCE = 0
    CE = 1


class BuddhistEra(IntEnum):
    BEFORE_BE = 0
    BE = 1


class MinguoEra(IntEnum):
    BEFORE_ROC = 0
    ROC = 1


class CopticEra(IntEnum):
    BEFORE_AM = 0
    AM = 1


class HijrahEra(IntEnum):
    BEFORE_AH = 0
    AH = 1


@dataclass(frozen=True)
class ChronologySpec:
    """Top-level, pure-data description of a chronology."""
    kind: ChronologyKind
    id: ChronologyId
    params: object   # IsoParams | YearOffsetParams | CopticParams | HijrahParams

    @staticmethod
    def like(name: str) -> "ChronologySpec":
        from ..engines.specs import ALL_SPECS
        if name not in ALL_SPECS:
            raise KeyError(f"Unknown base spec '{name}'. Available: {sorted(ALL_SPECS)}")
        return ALL_SPECS[name]

    def tweak(self, **kwargs) -> "ChronologySpec":
        """Return a copy with params fields replaced (e.g. deviation_path=...)."""
        return replace(self, params=replace(self.params, **kwargs))
