"""calchrono public API.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401,E402

from .api import (  # noqa: E402
    list_chronologies,
    calendar_types,
    chronology_for,
    find_chronology,
    chronology_info,
    get_chronology,
    make_chronology,
    register_chronology,
    load_hijrah,
    date,
    date_from_epoch_day,
    date_from,
    convert,
    field_range,
    explain,
    month_bounds,
    days_in_month,
    new_year_day,
    today,
)
from .core.clock import LocalTime, ZoneOffset  # noqa: E402
from .core.composite import ChronoDateTime, ChronoOffsetDateTime, ChronoZonedDateTime  # noqa: E402
from .core.date import ChronoDate, DateResult  # noqa: E402
from .core.errors import (  # noqa: E402
    CalchronoError,
    ChronologyNotFoundError,
    DateTimeError,
    DeviationConfigError,
    InvalidDateError,
    InvalidFieldValueError,
    RangeOverflowError,
    UnsupportedFieldError,
)
from .core.fields import ChronoField, ChronoUnit  # noqa: E402
from .core.monthday import MonthDay  # noqa: E402
from .core.types import (  # noqa: E402
    BuddhistEra,
    ChronologySpec,
    CopticEra,
    DayOfWeek,
    HijrahEra,
    IsoEra,
    MinguoEra,
    Month,
    ValueRange,
)
from .engines.arithmetic import DateResolver  # noqa: E402

__all__ = [
    "list_chronologies",
    "calendar_types",
    "chronology_for",
    "find_chronology",
    "chronology_info",
    "get_chronology",
    "make_chronology",
    "register_chronology",
    "load_hijrah",
    "date",
    "date_from_epoch_day",
    "date_from",
    "convert",
    "field_range",
    "explain",
    "month_bounds",
    "days_in_month",
    "new_year_day",
    "today",
    "LocalTime",
    "ZoneOffset",
    "ChronoDateTime",
    "ChronoOffsetDateTime",
    "ChronoZonedDateTime",
    "ChronoDate",
    "DateResult",
    "CalchronoError",
    "ChronologyNotFoundError",
    "DateTimeError",
    "DeviationConfigError",
    "InvalidDateError",
    "InvalidFieldValueError",
    "RangeOverflowError",
    "UnsupportedFieldError",
    "ChronoField",
    "ChronoUnit",
    "MonthDay",
    "BuddhistEra",
    "ChronologySpec",
    "CopticEra",
    "DayOfWeek",
    "HijrahEra",
    "IsoEra",
    "MinguoEra",
    "Month",
    "ValueRange",
    "DateResolver",
]
