from __future__ import annotations

from datetime import date as _pydate
from typing import Any, Dict, List, Optional, Union

from .core.date import ChronoDate
from .core.engine import Chronology, ChronologyRegistry
from .core.fields import ChronoField
from .core.time import epoch_day_to_ymd, format_ymd, to_epoch_day
from .core.types import ChronologySpec, ValueRange
from .engines.factory import make_chronology as _make_chronology

_registry: Optional[ChronologyRegistry] = None

ChronoRef = Union[str, Chronology]


def set_registry(reg: ChronologyRegistry) -> None:
    global _registry
    _registry = reg


def _reg() -> ChronologyRegistry:
    if _registry is None:
        raise RuntimeError("Chronology registry not initialized")
    return _registry


def _chrono(ref: ChronoRef) -> Chronology:
    return _reg().get(ref) if isinstance(ref, str) else ref


def list_chronologies() -> List[str]:
    return _reg().list()


def calendar_types() -> Dict[str, str]:
    return _reg().calendar_types()


def chronology_for(name: str) -> Chronology:
    """By id ("ThaiBuddhist") or calendar type ("buddhist"), case-insensitive."""
    return _reg().get(name)


def find_chronology(name: str) -> Optional[Chronology]:
    return _reg().find(name)


def chronology_info(name: str) -> Dict[str, Any]:
    return _reg().get(name).info()


def get_chronology(name: str, **params: Any) -> Chronology:
    """Build a fresh chronology from a standard spec, optionally with params overrides."""
    from .engines.specs import ALL_SPECS
    spec = ALL_SPECS.get(name)
    if spec is None:
        raise KeyError(f"Unknown chronology spec '{name}'. Available: {sorted(ALL_SPECS)}")
    if params:
        spec = spec.tweak(**params)
    return _make_chronology(spec)


def make_chronology(spec: ChronologySpec) -> Chronology:
    return _make_chronology(spec)


def register_chronology(name: str, chrono: Chronology, *, overwrite: bool = False) -> None:
    _reg().register(name, chrono, overwrite=overwrite)


def load_hijrah(path: Optional[str] = None, *, strict: bool = False, allow_overlap: bool = False) -> Chronology:
    """A Hijrah chronology with deviations read from path (or the usual discovery order)."""
    return get_chronology("Hijrah", deviation_path=path, strict=strict, allow_overlap=allow_overlap)


# ============================================================
# Dates
# ============================================================

def date(year: int, month: int, day: int, *, chronology: ChronoRef = "ISO") -> ChronoDate:
    return _chrono(chronology).date(year, month, day)


def date_from_epoch_day(epoch_day: int, *, chronology: ChronoRef = "ISO") -> ChronoDate:
    return _chrono(chronology).date_epoch_day(epoch_day)


def date_from(value: Union[ChronoDate, _pydate], *, chronology: ChronoRef = "ISO") -> ChronoDate:
    return _chrono(chronology).date_from(value)


def convert(d: ChronoDate, chronology: ChronoRef) -> ChronoDate:
    """The same day in another chronology."""
    return _chrono(chronology).date_epoch_day(d.epoch_day)


def field_range(chronology: ChronoRef, field: Union[ChronoField, str]) -> ValueRange:
    if isinstance(field, str):
        try:
            field = ChronoField[field.upper()]
        except KeyError:
            raise KeyError(f"Unknown field '{field}'. Available: {[f.name for f in ChronoField]}") from None
    return _chrono(chronology).range(field)


def explain(d: ChronoDate) -> Dict[str, Any]:
    return d.chronology.explain(d)


# ============================================================
# Month / year helpers (diagnostics)
# ============================================================

def month_bounds(year: int, month: int, *, chronology: ChronoRef = "ISO", as_date: bool = True) -> Dict[str, Any]:
    c = _chrono(chronology)
    first = c.date(year, month, 1)
    last = c.date(year, month, c.length_of_month(year, month))
    out: Dict[str, Any] = {
        "Y": year,
        "M": month,
        "length": last.day,
        "first_epoch_day": first.epoch_day,
        "last_epoch_day": last.epoch_day,
    }
    if as_date:
        out["first_iso"] = format_ymd(*epoch_day_to_ymd(first.epoch_day))
        out["last_iso"] = format_ymd(*epoch_day_to_ymd(last.epoch_day))
    return out


def days_in_month(year: int, month: int, *, chronology: ChronoRef = "ISO") -> List[Dict[str, Any]]:
    c = _chrono(chronology)
    rows = []
    for day in range(1, c.length_of_month(year, month) + 1):
        d = c.date(year, month, day)
        rows.append({
            "date": d,
            "day": day,
            "epoch_day": d.epoch_day,
            "iso": epoch_day_to_ymd(d.epoch_day),
            "day_of_week": d.day_of_week,
        })
    return rows


def new_year_day(year: int, *, chronology: ChronoRef = "ISO") -> Dict[str, Any]:
    c = _chrono(chronology)
    first = c.date(year, 1, 1)
    return {
        "Y": year,
        "epoch_day": first.epoch_day,
        "iso": format_ymd(*epoch_day_to_ymd(first.epoch_day)),
        "day_of_week": first.day_of_week.name,
        "length_of_year": c.length_of_year(year),
        "leap": c.is_leap_year(year),
    }


def today(*, chronology: ChronoRef = "ISO") -> ChronoDate:
    return _chrono(chronology).date_epoch_day(to_epoch_day(_pydate.today()))
