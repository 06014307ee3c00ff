"""
calchrono.core.composite
------------------------
Date-time compositions over any chronology:

    ChronoDateTime        = ChronoDate x LocalTime
    ChronoOffsetDateTime  = ChronoDateTime x ZoneOffset
    ChronoZonedDateTime   = ChronoDateTime x tzinfo (offset from the zone)

Routing: time fields and time units go to the LocalTime part and carry
whole days into the date with plus_days; date fields and date units go to
the ChronoDate part and leave the time untouched.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Any, Union

from .clock import LocalTime, ZoneOffset
from .date import ChronoDate
from .errors import UnsupportedFieldError
from .fields import NANOS_PER_DAY, NANOS_PER_SECOND, SECONDS_PER_DAY, ChronoField, ChronoUnit
from .time import to_epoch_day
from .types import ValueRange


_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


@dataclass(frozen=True)
class ChronoDateTime:
    date: ChronoDate
    time: LocalTime

    @property
    def chronology(self) -> Any:
        return self.date.chronology

    def to_local_date(self) -> ChronoDate:
        return self.date

    def to_local_time(self) -> LocalTime:
        return self.time

    def with_date(self, d: ChronoDate) -> "ChronoDateTime":
        return replace(self, date=d)

    def with_time(self, t: LocalTime) -> "ChronoDateTime":
        return replace(self, time=t)

    # ---------------------------------------------------------
    # Fields
    # ---------------------------------------------------------

    def is_supported(self, field: Union[ChronoField, ChronoUnit]) -> bool:
        return field.is_time_based or self.date.is_supported(field)

    def get(self, field: ChronoField) -> int:
        if field.is_time_based:
            return self.time.get(field)
        if field.is_date_based:
            return self.date.get(field)
        raise UnsupportedFieldError(f"Unsupported field: {field}")

    def range(self, field: ChronoField) -> ValueRange:
        if field.is_time_based:
            return self.time.range(field)
        if field.is_date_based:
            return self.date.range(field)
        raise UnsupportedFieldError(f"Unsupported field: {field}")

    def with_field(self, field: ChronoField, value: int) -> "ChronoDateTime":
        if field.is_time_based:
            return replace(self, time=self.time.with_field(field, value))
        if field.is_date_based:
            return replace(self, date=self.date.with_field(field, value))
        raise UnsupportedFieldError(f"Unsupported field: {field}")

    # ---------------------------------------------------------
    # Arithmetic
    # ---------------------------------------------------------

    def _plus_nanos_with_overflow(self, nanos: int) -> "ChronoDateTime":
        if nanos == 0:
            return self
        days, nano_of_day = divmod(self.time.to_nano_of_day() + nanos, NANOS_PER_DAY)
        return ChronoDateTime(self.date.plus_days(days), LocalTime.of_nano_of_day(nano_of_day))

    def plus(self, amount: int, unit: ChronoUnit) -> "ChronoDateTime":
        if unit.is_time_based:
            return self._plus_nanos_with_overflow(amount * unit.nanos)
        return replace(self, date=self.date.plus(amount, unit))

    def minus(self, amount: int, unit: ChronoUnit) -> "ChronoDateTime":
        if unit.is_time_based:
            return self._plus_nanos_with_overflow(-amount * unit.nanos)
        return replace(self, date=self.date.minus(amount, unit))

    def plus_hours(self, hours: int) -> "ChronoDateTime":
        return self.plus(hours, ChronoUnit.HOURS)

    def plus_minutes(self, minutes: int) -> "ChronoDateTime":
        return self.plus(minutes, ChronoUnit.MINUTES)

    def plus_seconds(self, seconds: int) -> "ChronoDateTime":
        return self.plus(seconds, ChronoUnit.SECONDS)

    def plus_nanos(self, nanos: int) -> "ChronoDateTime":
        return self.plus(nanos, ChronoUnit.NANOS)

    def plus_days(self, days: int) -> "ChronoDateTime":
        return self.plus(days, ChronoUnit.DAYS)

    def plus_months(self, months: int) -> "ChronoDateTime":
        return self.plus(months, ChronoUnit.MONTHS)

    def plus_years(self, years: int) -> "ChronoDateTime":
        return self.plus(years, ChronoUnit.YEARS)

    def period_until(self, end: "ChronoDateTime", unit: ChronoUnit) -> int:
        """Whole units to end; a partial day does not count toward date units."""
        if unit.is_time_based:
            nanos = ((end.date.epoch_day - self.date.epoch_day) * NANOS_PER_DAY
                     + end.time.to_nano_of_day() - self.time.to_nano_of_day())
            return _trunc_div(nanos, unit.nanos)
        end_date = self.chronology.date_from(end.date)
        if end_date.epoch_day > self.date.epoch_day and end.time < self.time:
            end_date = end_date.minus_days(1)
        elif end_date.epoch_day < self.date.epoch_day and end.time > self.time:
            end_date = end_date.plus_days(1)
        return self.date.period_until(end_date, unit)

    # ---------------------------------------------------------
    # Timeline
    # ---------------------------------------------------------

    def _timeline_key(self):
        return (self.date.epoch_day, self.time.to_nano_of_day())

    def is_before(self, other: "ChronoDateTime") -> bool:
        return self._timeline_key() < other._timeline_key()

    def is_after(self, other: "ChronoDateTime") -> bool:
        return self._timeline_key() > other._timeline_key()

    def is_equal(self, other: "ChronoDateTime") -> bool:
        return self._timeline_key() == other._timeline_key()

    def to_epoch_second(self, offset: ZoneOffset) -> int:
        return self.date.epoch_day * SECONDS_PER_DAY + self.time.to_second_of_day() - offset.total_seconds

    def to_datetime(self) -> datetime:
        """Naive datetime.datetime (ISO years 1..9999, microsecond precision)."""
        return datetime.combine(self.date.to_date(), self.time.to_time())

    def at_offset(self, offset: ZoneOffset) -> "ChronoOffsetDateTime":
        return ChronoOffsetDateTime(self, offset)

    def at_zone(self, zone: tzinfo) -> "ChronoZonedDateTime":
        return ChronoZonedDateTime.of_local(self, zone)

    def __str__(self) -> str:
        return f"{self.date}T{self.time}"


def _from_epoch_second(chronology: Any, epoch_second: int, nano: int, offset: ZoneOffset) -> ChronoDateTime:
    local = epoch_second + offset.total_seconds
    days, second_of_day = divmod(local, SECONDS_PER_DAY)
    return ChronoDateTime(chronology.date_epoch_day(days), LocalTime.of_second_of_day(second_of_day, nano))


@dataclass(frozen=True)
class ChronoOffsetDateTime:
    date_time: ChronoDateTime
    offset: ZoneOffset

    @classmethod
    def of_epoch_second(cls, chronology: Any, epoch_second: int, offset: ZoneOffset,
                        nano: int = 0) -> "ChronoOffsetDateTime":
        return cls(_from_epoch_second(chronology, epoch_second, nano, offset), offset)

    @property
    def chronology(self) -> Any:
        return self.date_time.chronology

    def to_local_date(self) -> ChronoDate:
        return self.date_time.date

    def to_local_time(self) -> LocalTime:
        return self.date_time.time

    def to_epoch_second(self) -> int:
        return self.date_time.to_epoch_second(self.offset)

    def get(self, field: ChronoField) -> int:
        if field is ChronoField.OFFSET_SECONDS:
            return self.offset.total_seconds
        if field is ChronoField.INSTANT_SECONDS:
            return self.to_epoch_second()
        return self.date_time.get(field)

    def with_field(self, field: ChronoField, value: int) -> "ChronoOffsetDateTime":
        if field is ChronoField.OFFSET_SECONDS:
            field.check_valid_value(value)
            return replace(self, offset=ZoneOffset(value))
        if field is ChronoField.INSTANT_SECONDS:
            field.check_valid_value(value)
            return ChronoOffsetDateTime.of_epoch_second(self.chronology, value, self.offset, self.date_time.time.nano)
        return replace(self, date_time=self.date_time.with_field(field, value))

    def plus(self, amount: int, unit: ChronoUnit) -> "ChronoOffsetDateTime":
        return replace(self, date_time=self.date_time.plus(amount, unit))

    def minus(self, amount: int, unit: ChronoUnit) -> "ChronoOffsetDateTime":
        return replace(self, date_time=self.date_time.minus(amount, unit))

    def with_offset_same_local(self, offset: ZoneOffset) -> "ChronoOffsetDateTime":
        return replace(self, offset=offset)

    def with_offset_same_instant(self, offset: ZoneOffset) -> "ChronoOffsetDateTime":
        if offset == self.offset:
            return self
        shifted = self.date_time.plus_seconds(offset.total_seconds - self.offset.total_seconds)
        return ChronoOffsetDateTime(shifted, offset)

    def _instant_key(self):
        return (self.to_epoch_second(), self.date_time.time.nano)

    def is_before(self, other: "ChronoOffsetDateTime") -> bool:
        return self._instant_key() < other._instant_key()

    def is_after(self, other: "ChronoOffsetDateTime") -> bool:
        return self._instant_key() > other._instant_key()

    def is_equal(self, other: "ChronoOffsetDateTime") -> bool:
        """Same instant, regardless of offset and chronology."""
        return self._instant_key() == other._instant_key()

    def to_datetime(self) -> datetime:
        return self.date_time.to_datetime().replace(tzinfo=self.offset.to_tzinfo())

    def __str__(self) -> str:
        return f"{self.date_time}{self.offset}"


@dataclass(frozen=True)
class ChronoZonedDateTime:
    """
    Date-time in a region zone. The zone (any tzinfo, e.g. zoneinfo.ZoneInfo)
    decides the offset; gaps and overlaps follow the tzinfo's fold=0 rule.
    Limited to the years datetime supports.
    """
    date_time: ChronoDateTime
    offset: ZoneOffset
    zone: tzinfo

    @classmethod
    def of_local(cls, date_time: ChronoDateTime, zone: tzinfo) -> "ChronoZonedDateTime":
        naive = date_time.to_datetime()
        offset = ZoneOffset.from_tzinfo(zone, naive.replace(tzinfo=zone))
        return cls(date_time, offset, zone)

    @classmethod
    def of_epoch_second(cls, chronology: Any, epoch_second: int, zone: tzinfo,
                        nano: int = 0) -> "ChronoZonedDateTime":
        aware = (_UNIX_EPOCH + timedelta(seconds=epoch_second)).astimezone(zone)
        offset = ZoneOffset(int(aware.utcoffset().total_seconds()))
        return cls(_from_epoch_second(chronology, epoch_second, nano, offset), offset, zone)

    @property
    def chronology(self) -> Any:
        return self.date_time.chronology

    def to_local_date(self) -> ChronoDate:
        return self.date_time.date

    def to_local_time(self) -> LocalTime:
        return self.date_time.time

    def to_offset_date_time(self) -> ChronoOffsetDateTime:
        return ChronoOffsetDateTime(self.date_time, self.offset)

    def to_epoch_second(self) -> int:
        return self.date_time.to_epoch_second(self.offset)

    def get(self, field: ChronoField) -> int:
        return self.to_offset_date_time().get(field)

    def with_field(self, field: ChronoField, value: int) -> "ChronoZonedDateTime":
        if field is ChronoField.INSTANT_SECONDS:
            field.check_valid_value(value)
            return ChronoZonedDateTime.of_epoch_second(self.chronology, value, self.zone, self.date_time.time.nano)
        if field is ChronoField.OFFSET_SECONDS:
            raise UnsupportedFieldError("The offset of a zoned date-time is decided by its zone")
        return ChronoZonedDateTime.of_local(self.date_time.with_field(field, value), self.zone)

    def plus(self, amount: int, unit: ChronoUnit) -> "ChronoZonedDateTime":
        """Date units move the local date-time; time units move the instant."""
        if unit.is_time_based:
            total = self.to_epoch_second() * NANOS_PER_SECOND + self.date_time.time.nano + amount * unit.nanos
            seconds, nano = divmod(total, NANOS_PER_SECOND)
            return ChronoZonedDateTime.of_epoch_second(self.chronology, seconds, self.zone, nano)
        return ChronoZonedDateTime.of_local(self.date_time.plus(amount, unit), self.zone)

    def minus(self, amount: int, unit: ChronoUnit) -> "ChronoZonedDateTime":
        return self.plus(-amount, unit)

    def to_datetime(self) -> datetime:
        return self.date_time.to_datetime().replace(tzinfo=self.zone)

    def __str__(self) -> str:
        return f"{self.to_offset_date_time()}[{self.zone}]"


def date_time_from(chronology: Any, value: datetime) -> Union[ChronoDateTime, ChronoOffsetDateTime]:
    """Convert a datetime.datetime; aware values keep their fixed offset."""
    d = chronology.date_epoch_day(to_epoch_day(value.date()))
    dt = ChronoDateTime(d, LocalTime.from_time(value.time()))
    if value.tzinfo is None or value.utcoffset() is None:
        return dt
    return ChronoOffsetDateTime(dt, ZoneOffset(int(value.utcoffset().total_seconds())))
