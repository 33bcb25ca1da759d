"""lukashian public API.

Year, Day and Instant of the Lukashian calendar, over calendar data that is
loaded (or generated) once per calendar key and shared by the process.
"""

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    calendar_data,
    clear,
    clear_all,
    default_key,
    get_registry,
    list_calendars,
    register_provider,
    set_default_key,
    set_registry,
)
from .core.errors import (
    AlgorithmicInvariantError,
    CrossCalendarError,
    LukashianArithmeticError,
    LukashianError,
    OutOfRangeError,
    ProviderError,
    UnknownCalendarError,
    UnsupportedError,
)
from .core.keys import BEEPS_PER_DAY, EARTH, EARTH_HTTP, MARS, MARS_HTTP, TEST
from .year import Year
from .day import Day
from .instant import Instant
from .formatter import DayFormat, format_day, format_instant, format_time, format_year

__all__ = [
    "Year",
    "Day",
    "Instant",
    "DayFormat",
    "format_year",
    "format_day",
    "format_time",
    "format_instant",
    "calendar_data",
    "clear",
    "clear_all",
    "default_key",
    "get_registry",
    "list_calendars",
    "register_provider",
    "set_default_key",
    "set_registry",
    "BEEPS_PER_DAY",
    "EARTH",
    "EARTH_HTTP",
    "MARS",
    "MARS_HTTP",
    "TEST",
    "LukashianError",
    "OutOfRangeError",
    "UnsupportedError",
    "CrossCalendarError",
    "LukashianArithmeticError",
    "ProviderError",
    "AlgorithmicInvariantError",
    "UnknownCalendarError",
]
