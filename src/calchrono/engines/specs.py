from __future__ import annotations

from typing import Dict

from ..core.types import ChronologyId, ChronologySpec
from .coptic import CopticParams
from .hijrah import HijrahParams
from .iso import IsoParams
from .year_offset import BUDDHIST_YEAR_OFFSET, MINGUO_YEAR_OFFSET, YearOffsetParams


# ============================================================
# STANDARD CHRONOLOGIES
# ============================================================

ISO_ID = ChronologyId(kind="iso", name="ISO", calendar_type="iso8601")
BUDDHIST_ID = ChronologyId(kind="year_offset", name="ThaiBuddhist", calendar_type="buddhist")
MINGUO_ID = ChronologyId(kind="year_offset", name="Minguo", calendar_type="roc")
COPTIC_ID = ChronologyId(kind="coptic", name="Coptic", calendar_type="coptic")
HIJRAH_ID = ChronologyId(kind="hijrah", name="Hijrah", calendar_type="islamic-civil")

ISO_SPEC = ChronologySpec(kind="iso", id=ISO_ID, params=IsoParams())

BUDDHIST_SPEC = ChronologySpec(
    kind="year_offset",
    id=BUDDHIST_ID,
    params=YearOffsetParams(year_offset=BUDDHIST_YEAR_OFFSET, eras="buddhist"),
)

MINGUO_SPEC = ChronologySpec(
    kind="year_offset",
    id=MINGUO_ID,
    params=YearOffsetParams(year_offset=MINGUO_YEAR_OFFSET, eras="minguo"),
)

COPTIC_SPEC = ChronologySpec(kind="coptic", id=COPTIC_ID, params=CopticParams())

# Reads deviation data from the environment / packaged config when built.
HIJRAH_SPEC = ChronologySpec(kind="hijrah", id=HIJRAH_ID, params=HijrahParams())

# Plain tabular calendar, never patched.
HIJRAH_TABULAR_SPEC = HIJRAH_SPEC.tweak(load_deviations=False)


ALL_SPECS: Dict[str, ChronologySpec] = {
    "ISO": ISO_SPEC,
    "ThaiBuddhist": BUDDHIST_SPEC,
    "Minguo": MINGUO_SPEC,
    "Coptic": COPTIC_SPEC,
    "Hijrah": HIJRAH_SPEC,
}
