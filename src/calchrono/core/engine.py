from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from .errors import ChronologyNotFoundError
from .fields import ChronoField
from .types import ChronologyId, ValueRange


class Chronology(Protocol):
    id: ChronologyId

    def info(self) -> Dict[str, Any]: ...
    def date(self, year: int, month: int, day: int) -> Any: ...
    def date_year_day(self, year: int, day_of_year: int) -> Any: ...
    def date_epoch_day(self, epoch_day: int) -> Any: ...
    def is_leap_year(self, year: int) -> bool: ...
    def proleptic_year(self, era: int, year_of_era: int) -> int: ...
    def era_of(self, value: int) -> Any: ...
    def range(self, field: ChronoField) -> ValueRange: ...


@dataclass
class ChronologyRegistry:
    """
    Chronologies by id ("ThaiBuddhist") and by calendar type ("buddhist").
    Lookup is case-insensitive; listing keeps the registered spelling.
    """
    _chronologies: Dict[str, Chronology]
    _aliases: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for name, chrono in list(self._chronologies.items()):
            self._index(name, chrono)

    def _index(self, name: str, chrono: Chronology) -> None:
        self._aliases[name.lower()] = name
        calendar_type = getattr(getattr(chrono, "id", None), "calendar_type", None)
        if calendar_type:
            self._aliases.setdefault(calendar_type.lower(), name)

    def find(self, name: str) -> Optional[Chronology]:
        key = self._aliases.get(name.lower())
        return self._chronologies.get(key) if key is not None else None

    def get(self, name: str) -> Chronology:
        chrono = self.find(name)
        if chrono is None:
            raise ChronologyNotFoundError(f"Unknown chronology '{name}'. Available: {self.list()}")
        return chrono

    def list(self) -> List[str]:
        return sorted(self._chronologies.keys())

    def calendar_types(self) -> Dict[str, str]:
        return {
            name: c.id.calendar_type
            for name, c in sorted(self._chronologies.items())
            if getattr(c, "id", None) is not None
        }

    def register(self, name: str, chrono: Chronology, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name.lower() in self._aliases):
            raise KeyError(f"Chronology '{name}' already exists. Use overwrite=True to replace.")
        previous = self._aliases.get(name.lower())
        if previous is not None and previous != name and previous in self._chronologies:
            # same name in another spelling: the new entry takes over the old one
            del self._chronologies[previous]
            for alias, target in self._aliases.items():
                if target == previous:
                    self._aliases[alias] = name
        self._chronologies[name] = chrono
        self._index(name, chrono)
        if overwrite:
            calendar_type = getattr(getattr(chrono, "id", None), "calendar_type", None)
            if calendar_type:
                self._aliases[calendar_type.lower()] = name
