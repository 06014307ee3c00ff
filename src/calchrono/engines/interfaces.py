"""
calchrono.engines.interfaces
----------------------------
Boundaries between the calendar structure of a chronology (how years, months
and days map onto the epoch-day line) and the shared machinery built on top
of it (validation, field access, arithmetic).

Standard reference frame:
all conversions go through the epoch day, day 0 = 1970-01-01 (ISO).
"""

from __future__ import annotations

from typing import Protocol

from ..core.fields import ChronoField
from ..core.types import ChronologyId, ValueRange


class DateArithmeticProtocol(Protocol):
    """
    What the generic arithmetic in calchrono.engines.arithmetic needs.
    """
    id: ChronologyId

    @property
    def months_per_year(self) -> int:
        ...

    def date(self, year: int, month: int, day: int): ...
    def date_epoch_day(self, epoch_day: int): ...
    def length_of_month(self, year: int, month: int) -> int: ...
    def range(self, field: ChronoField) -> ValueRange: ...
