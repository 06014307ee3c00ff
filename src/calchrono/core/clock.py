"""
calchrono.core.clock
--------------------
Time-of-day and fixed UTC offset values used by the composite date-times.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import time as _pytime, timedelta, timezone, tzinfo
from typing import ClassVar, Optional, Union

from .errors import DateTimeError, InvalidFieldValueError, UnsupportedFieldError
from .fields import (
    NANOS_PER_DAY,
    NANOS_PER_HOUR,
    NANOS_PER_MINUTE,
    NANOS_PER_SECOND,
    ChronoField,
    ChronoUnit,
)
from .types import ValueRange


@dataclass(frozen=True, order=True)
class LocalTime:
    hour: int = 0
    minute: int = 0
    second: int = 0
    nano: int = 0

    MIDNIGHT: ClassVar["LocalTime"]
    NOON: ClassVar["LocalTime"]
    MIN: ClassVar["LocalTime"]
    MAX: ClassVar["LocalTime"]

    def __post_init__(self) -> None:
        ChronoField.HOUR_OF_DAY.check_valid_value(self.hour)
        ChronoField.MINUTE_OF_HOUR.check_valid_value(self.minute)
        ChronoField.SECOND_OF_MINUTE.check_valid_value(self.second)
        ChronoField.NANO_OF_SECOND.check_valid_value(self.nano)

    @classmethod
    def of(cls, hour: int, minute: int = 0, second: int = 0, nano: int = 0) -> "LocalTime":
        return cls(hour, minute, second, nano)

    @classmethod
    def of_second_of_day(cls, second_of_day: int, nano: int = 0) -> "LocalTime":
        ChronoField.SECOND_OF_DAY.check_valid_value(second_of_day)
        h, rem = divmod(second_of_day, 3600)
        m, s = divmod(rem, 60)
        return cls(h, m, s, nano)

    @classmethod
    def of_nano_of_day(cls, nano_of_day: int) -> "LocalTime":
        ChronoField.NANO_OF_DAY.check_valid_value(nano_of_day)
        sod, nano = divmod(nano_of_day, NANOS_PER_SECOND)
        return cls.of_second_of_day(sod, nano)

    @classmethod
    def from_time(cls, t: _pytime) -> "LocalTime":
        return cls(t.hour, t.minute, t.second, t.microsecond * 1_000)

    def to_time(self) -> _pytime:
        """datetime.time, truncated to microseconds."""
        return _pytime(self.hour, self.minute, self.second, self.nano // 1_000)

    def to_second_of_day(self) -> int:
        return self.hour * 3600 + self.minute * 60 + self.second

    def to_nano_of_day(self) -> int:
        return self.to_second_of_day() * NANOS_PER_SECOND + self.nano

    # ---------------------------------------------------------
    # Fields
    # ---------------------------------------------------------

    def is_supported(self, field: Union[ChronoField, ChronoUnit]) -> bool:
        return field.is_time_based

    def range(self, field: ChronoField) -> ValueRange:
        if not field.is_time_based:
            raise UnsupportedFieldError(f"Unsupported field: {field}")
        return field.range()

    def get(self, field: ChronoField) -> int:
        nod = self.to_nano_of_day()
        h = self.hour
        if field is ChronoField.NANO_OF_SECOND:
            return self.nano
        if field is ChronoField.NANO_OF_DAY:
            return nod
        if field is ChronoField.MICRO_OF_SECOND:
            return self.nano // 1_000
        if field is ChronoField.MICRO_OF_DAY:
            return nod // 1_000
        if field is ChronoField.MILLI_OF_SECOND:
            return self.nano // 1_000_000
        if field is ChronoField.MILLI_OF_DAY:
            return nod // 1_000_000
        if field is ChronoField.SECOND_OF_MINUTE:
            return self.second
        if field is ChronoField.SECOND_OF_DAY:
            return self.to_second_of_day()
        if field is ChronoField.MINUTE_OF_HOUR:
            return self.minute
        if field is ChronoField.MINUTE_OF_DAY:
            return h * 60 + self.minute
        if field is ChronoField.HOUR_OF_AMPM:
            return h % 12
        if field is ChronoField.CLOCK_HOUR_OF_AMPM:
            return h % 12 or 12
        if field is ChronoField.HOUR_OF_DAY:
            return h
        if field is ChronoField.CLOCK_HOUR_OF_DAY:
            return h or 24
        if field is ChronoField.AMPM_OF_DAY:
            return h // 12
        raise UnsupportedFieldError(f"Unsupported field: {field}")

    def with_field(self, field: ChronoField, value: int) -> "LocalTime":
        if not field.is_time_based:
            raise UnsupportedFieldError(f"Unsupported field: {field}")
        field.check_valid_value(value)
        if field is ChronoField.NANO_OF_SECOND:
            return LocalTime(self.hour, self.minute, self.second, value)
        if field is ChronoField.NANO_OF_DAY:
            return LocalTime.of_nano_of_day(value)
        if field is ChronoField.MICRO_OF_SECOND:
            return LocalTime(self.hour, self.minute, self.second, value * 1_000)
        if field is ChronoField.MICRO_OF_DAY:
            return LocalTime.of_nano_of_day(value * 1_000)
        if field is ChronoField.MILLI_OF_SECOND:
            return LocalTime(self.hour, self.minute, self.second, value * 1_000_000)
        if field is ChronoField.MILLI_OF_DAY:
            return LocalTime.of_nano_of_day(value * 1_000_000)
        if field is ChronoField.SECOND_OF_MINUTE:
            return LocalTime(self.hour, self.minute, value, self.nano)
        if field is ChronoField.SECOND_OF_DAY:
            return self.plus_seconds(value - self.to_second_of_day())
        if field is ChronoField.MINUTE_OF_HOUR:
            return LocalTime(self.hour, value, self.second, self.nano)
        if field is ChronoField.MINUTE_OF_DAY:
            return self.plus_minutes(value - (self.hour * 60 + self.minute))
        if field is ChronoField.HOUR_OF_AMPM:
            return self.plus_hours(value - self.hour % 12)
        if field is ChronoField.CLOCK_HOUR_OF_AMPM:
            return self.plus_hours((0 if value == 12 else value) - self.hour % 12)
        if field is ChronoField.HOUR_OF_DAY:
            return LocalTime(value, self.minute, self.second, self.nano)
        if field is ChronoField.CLOCK_HOUR_OF_DAY:
            return LocalTime(0 if value == 24 else value, self.minute, self.second, self.nano)
        return self.plus_hours((value - self.hour // 12) * 12)   # AMPM_OF_DAY

    # ---------------------------------------------------------
    # Arithmetic (wraps around midnight)
    # ---------------------------------------------------------

    def plus_nanos(self, nanos: int) -> "LocalTime":
        if nanos == 0:
            return self
        return LocalTime.of_nano_of_day((self.to_nano_of_day() + nanos) % NANOS_PER_DAY)

    def plus_seconds(self, seconds: int) -> "LocalTime":
        return self.plus_nanos(seconds * NANOS_PER_SECOND)

    def plus_minutes(self, minutes: int) -> "LocalTime":
        return self.plus_nanos(minutes * NANOS_PER_MINUTE)

    def plus_hours(self, hours: int) -> "LocalTime":
        return self.plus_nanos(hours * NANOS_PER_HOUR)

    def plus(self, amount: int, unit: ChronoUnit) -> "LocalTime":
        if not unit.is_time_based:
            raise UnsupportedFieldError(f"Unsupported unit: {unit}")
        return self.plus_nanos(amount * unit.nanos)

    def minus(self, amount: int, unit: ChronoUnit) -> "LocalTime":
        return self.plus(-amount, unit)

    def __str__(self) -> str:
        out = f"{self.hour:02d}:{self.minute:02d}"
        if self.second or self.nano:
            out += f":{self.second:02d}"
            if self.nano:
                if self.nano % 1_000_000 == 0:
                    out += f".{self.nano // 1_000_000:03d}"
                elif self.nano % 1_000 == 0:
                    out += f".{self.nano // 1_000:06d}"
                else:
                    out += f".{self.nano:09d}"
        return out


LocalTime.MIDNIGHT = LocalTime(0, 0)
LocalTime.MIN = LocalTime.MIDNIGHT
LocalTime.NOON = LocalTime(12, 0)
LocalTime.MAX = LocalTime(23, 59, 59, NANOS_PER_SECOND - 1)


_OFFSET_RE = re.compile(r"^([+-])(\d{2})(?::?(\d{2}))?(?::?(\d{2}))?$")
MAX_OFFSET_SECONDS = 18 * 3600


@dataclass(frozen=True, order=True)
class ZoneOffset:
    """Fixed offset from UTC, -18:00 .. +18:00."""
    total_seconds: int

    UTC: ClassVar["ZoneOffset"]

    def __post_init__(self) -> None:
        if abs(self.total_seconds) > MAX_OFFSET_SECONDS:
            raise InvalidFieldValueError(
                f"Zone offset not in valid range: -18:00 to +18:00 ({self.total_seconds}s)"
            )

    @classmethod
    def of_hours_minutes_seconds(cls, hours: int, minutes: int = 0, seconds: int = 0) -> "ZoneOffset":
        signs = {(v > 0) - (v < 0) for v in (hours, minutes, seconds) if v}
        if len(signs) > 1:
            raise InvalidFieldValueError("Zone offset hours, minutes and seconds must have the same sign")
        if abs(hours) > 18 or abs(minutes) > 59 or abs(seconds) > 59:
            raise InvalidFieldValueError(f"Zone offset out of range: {hours}:{minutes}:{seconds}")
        return cls(hours * 3600 + minutes * 60 + seconds)

    @classmethod
    def of(cls, offset_id: str) -> "ZoneOffset":
        """Parse 'Z', '+h', '+hh', '+hh:mm', '+hhmm', '+hh:mm:ss'."""
        if offset_id == "Z":
            return cls.UTC
        text = offset_id
        if len(text) == 2 and text[0] in "+-":
            text = f"{text[0]}0{text[1]}"
        m = _OFFSET_RE.match(text)
        if m is None:
            raise DateTimeError(f"Invalid ID for ZoneOffset: {offset_id!r}")
        sign = -1 if m.group(1) == "-" else 1
        h, mi, s = (int(g) if g else 0 for g in m.group(2, 3, 4))
        return cls.of_hours_minutes_seconds(sign * h, sign * mi, sign * s)

    @classmethod
    def from_tzinfo(cls, tz: tzinfo, at: Optional[object] = None) -> "ZoneOffset":
        delta = tz.utcoffset(at)
        if delta is None:
            raise DateTimeError(f"{tz!r} has no UTC offset")
        return cls(int(delta.total_seconds()))

    def to_tzinfo(self) -> timezone:
        return timezone(timedelta(seconds=self.total_seconds))

    @property
    def id(self) -> str:
        if self.total_seconds == 0:
            return "Z"
        sign = "-" if self.total_seconds < 0 else "+"
        h, rem = divmod(abs(self.total_seconds), 3600)
        m, s = divmod(rem, 60)
        out = f"{sign}{h:02d}:{m:02d}"
        return out + f":{s:02d}" if s else out

    def __str__(self) -> str:
        return self.id


ZoneOffset.UTC = ZoneOffset(0)

