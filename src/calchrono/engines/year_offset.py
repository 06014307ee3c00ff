"""
calchrono.engines.year_offset
-----------------------------
Calendars that are ISO with renumbered years: Thai Buddhist (ISO + 543)
and Minguo / Republic of China (ISO - 1911).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Literal, Type

from ..core.types import BuddhistEra, ChronologyId, MinguoEra
from .iso import GregorianChronology

BUDDHIST_YEAR_OFFSET = 543
MINGUO_YEAR_OFFSET = -1911

ERA_TYPES: Dict[str, Type[IntEnum]] = {
    "buddhist": BuddhistEra,
    "minguo": MinguoEra,
}


@dataclass(frozen=True)
class YearOffsetParams:
    """proleptic year = ISO year + year_offset."""
    year_offset: int
    eras: Literal["buddhist", "minguo"]

    def __post_init__(self) -> None:
        if self.eras not in ERA_TYPES:
            raise ValueError(f"eras must be one of {sorted(ERA_TYPES)}")


class YearOffsetChronology(GregorianChronology):

    def __init__(self, chrono_id: ChronologyId, params: YearOffsetParams) -> None:
        super().__init__(chrono_id, year_offset=params.year_offset)
        self.params = params
        self.era_type = ERA_TYPES[params.eras]
