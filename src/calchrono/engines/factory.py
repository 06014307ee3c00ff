"""
calchrono.engines.factory
-------------------------
Transforms pure data specifications into live chronology objects.
"""

from __future__ import annotations

from typing import Callable, Dict

from ..core.types import ChronologySpec
from .base import BaseChronology
from .coptic import CopticChronology, CopticParams
from .deviation import load_hijrah_tables
from .hijrah import HijrahChronology, HijrahParams
from .hijrah_tables import HijrahTables
from .iso import IsoChronology, IsoParams
from .year_offset import YearOffsetChronology, YearOffsetParams


def _build_iso(spec: ChronologySpec) -> BaseChronology:
    return IsoChronology(spec.id, spec.params)


def _build_year_offset(spec: ChronologySpec) -> BaseChronology:
    return YearOffsetChronology(spec.id, spec.params)


def _build_coptic(spec: ChronologySpec) -> BaseChronology:
    return CopticChronology(spec.id, spec.params)


def _build_hijrah(spec: ChronologySpec) -> BaseChronology:
    p: HijrahParams = spec.params
    if p.load_deviations:
        tables = load_hijrah_tables(p.deviation_path, strict=p.strict, allow_overlap=p.allow_overlap)
    else:
        tables = HijrahTables.default()
    return HijrahChronology(spec.id, tables)


_BUILDERS: Dict[str, Callable[[ChronologySpec], BaseChronology]] = {
    "iso": _build_iso,
    "year_offset": _build_year_offset,
    "coptic": _build_coptic,
    "hijrah": _build_hijrah,
}

_PARAMS = {
    "iso": IsoParams,
    "year_offset": YearOffsetParams,
    "coptic": CopticParams,
    "hijrah": HijrahParams,
}


def make_chronology(spec: ChronologySpec) -> BaseChronology:
    """The universal entry point."""
    builder = _BUILDERS.get(spec.kind)
    if builder is None:
        raise TypeError(f"Unknown chronology kind: {spec.kind!r}")
    if not isinstance(spec.params, _PARAMS[spec.kind]):
        raise TypeError(f"Unknown {spec.kind} params type: {type(spec.params)}")
    return builder(spec)
