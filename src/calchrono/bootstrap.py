from __future__ import annotations
from calchrono.core.engine import ChronologyRegistry
from calchrono.engines.specs import ALL_SPECS
from calchrono.engines.factory import make_chronology


def build_registry() -> ChronologyRegistry:
    chronologies = {}
    for name, spec in ALL_SPECS.items():
        chronologies[name] = make_chronology(spec)
    return ChronologyRegistry(chronologies)
