"""
calchrono.engines.deviation
---------------------------
Hijrah deviation config: parsing, discovery and loading into HijrahTables.

Format (one or more entries per line, separated by ';'):

    StartYear/StartMonth-EndYear/EndMonth:Offset

Months are 0-based, years are AH years, offset is a signed day count.
Blank entries are ignored and lines starting with '#' are comments.

Discovery order: explicit path, $CALCHRONO_HIJRAH_DEVIATION_FILE (file name
or path), $CALCHRONO_HIJRAH_DEVIATION_DIR joined with the file name, then
the packaged calchrono/data/hijrah_deviation.cfg.

Loading never fails: any problem is logged and the default tables are
returned.
"""

from __future__ import annotations

import logging
import os
from importlib import resources
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

from ..core.errors import DeviationConfigError
from .hijrah_tables import DeviationPatch, HijrahTableBuilder, HijrahTables

log = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "hijrah_deviation.cfg"
ENV_CONFIG_FILE = "CALCHRONO_HIJRAH_DEVIATION_FILE"
ENV_CONFIG_DIR = "CALCHRONO_HIJRAH_DEVIATION_DIR"

PathLike = Union[str, "os.PathLike[str]"]


def _parse_int(text: str, what: str, line: int, token: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        raise DeviationConfigError(f"{what} is not properly set at line {line}.", line=line, token=token) from None


def parse_entry(token: str, line: int = 0) -> DeviationPatch:
    """Parse one 'sy/sm-ey/em:offset' entry."""
    token = token.strip()
    range_text, sep, offset_text = token.partition(":")
    if not sep:
        raise DeviationConfigError(f"Offset has incorrect format at line {line}.", line=line, token=token)
    offset = _parse_int(offset_text, "Offset", line, token)

    start_text, sep, end_text = range_text.partition("-")
    if not sep:
        raise DeviationConfigError(
            f"Start and end year/month has incorrect format at line {line}.", line=line, token=token
        )

    start_year_text, sep, start_month_text = start_text.partition("/")
    if not sep:
        raise DeviationConfigError(f"Start year/month has incorrect format at line {line}.", line=line, token=token)
    start_year = _parse_int(start_year_text, "Start year", line, token)
    start_month = _parse_int(start_month_text, "Start month", line, token)

    end_year_text, sep, end_month_text = end_text.partition("/")
    if not sep:
        raise DeviationConfigError(f"End year/month has incorrect format at line {line}.", line=line, token=token)
    end_year = _parse_int(end_year_text, "End year", line, token)
    end_month = _parse_int(end_month_text, "End month", line, token)

    return DeviationPatch(start_year, start_month, end_year, end_month, offset, line=line)


def parse_line(text: str, line: int = 0) -> List[DeviationPatch]:
    """All entries of one line; the first malformed entry raises."""
    text = text.strip()
    if not text or text.startswith("#"):
        return []
    return [parse_entry(tok, line) for tok in text.split(";") if tok.strip()]


def parse_deviation_config(
    text: str, *, strict: bool = False
) -> Tuple[List[DeviationPatch], List[DeviationConfigError]]:
    """
    Parse a whole config. In lenient mode a bad entry is reported and
    skipped; entries before and after it are kept. In strict mode the
    first error is raised.
    """
    patches: List[DeviationPatch] = []
    errors: List[DeviationConfigError] = []
    for num, raw in enumerate(text.splitlines(), start=1):
        stripped = raw.strip()
        if not stripped or stripped.startswith("#"):
            continue
        for tok in stripped.split(";"):
            if not tok.strip():
                continue
            try:
                patches.append(parse_entry(tok, num))
            except DeviationConfigError as exc:
                if strict:
                    raise
                errors.append(exc)
    return patches, errors


# ------------------------------------------------------------
# Discovery
# ------------------------------------------------------------

def locate_deviation_config(path: Optional[PathLike] = None) -> Optional[Any]:
    """
    Return a readable path (or importlib.resources Traversable) for the
    deviation config, or None when there is none.
    """
    if path is not None:
        return Path(path)

    file_name = os.environ.get(ENV_CONFIG_FILE) or DEFAULT_CONFIG_FILENAME
    directory = os.environ.get(ENV_CONFIG_DIR)
    if directory:
        candidate = Path(directory) / file_name
        return candidate if candidate.is_file() else None

    candidate = Path(file_name)
    if file_name != DEFAULT_CONFIG_FILENAME and candidate.is_file():
        return candidate

    resource = resources.files("calchrono") / "data" / file_name
    return resource if resource.is_file() else None


# ------------------------------------------------------------
# Loading
# ------------------------------------------------------------

def build_tables(
    patches: List[DeviationPatch], *, strict: bool = False, allow_overlap: bool = False
) -> HijrahTables:
    builder = HijrahTableBuilder(allow_overlap=allow_overlap)
    for patch in patches:
        try:
            builder.add(patch)
        except DeviationConfigError as exc:
            if strict:
                raise
            log.warning("Skipping Hijrah deviation %s: %s", patch, exc)
    return builder.build()


def load_hijrah_tables(
    path: Optional[PathLike] = None, *, strict: bool = False, allow_overlap: bool = False
) -> HijrahTables:
    """Locate, parse and apply the deviation config; defaults on any failure."""
    source = locate_deviation_config(path)
    if source is None:
        log.debug("No Hijrah deviation config found; using default tables")
        return HijrahTables.default()
    try:
        text = source.read_text(encoding="utf-8")
        patches, errors = parse_deviation_config(text, strict=strict)
        for exc in errors:
            log.warning("Skipping Hijrah deviation entry %r: %s", exc.token, exc)
        tables = build_tables(patches, strict=strict, allow_overlap=allow_overlap)
    except (DeviationConfigError, OSError, UnicodeDecodeError) as exc:
        log.warning("Could not load Hijrah deviation config %s (%s); using default tables", source, exc)
        return HijrahTables.default()
    log.info("Loaded %d Hijrah deviation(s) from %s", len(tables.patches), source)
    return tables
