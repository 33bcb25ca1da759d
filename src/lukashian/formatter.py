"""Display helpers for years, days and instants.

Not as rich as datetime formatting; the defaults render a day as
'<year>-<day number>' and a time of day as four-digit beeps.
"""
from __future__ import annotations

import math
from enum import Enum
from fractions import Fraction
from typing import TYPE_CHECKING, Callable, Optional

from .core.keys import BEEPS_PER_DAY

if TYPE_CHECKING:
    from .day import Day
    from .instant import Instant
    from .year import Year


class DayFormat(Enum):
    EPOCH = "epoch"  # '15592'
    YEAR_FIRST = "year-first"  # '5919-43'
    DAY_FIRST = "day-first"  # '43-5919'
    DAY_ONLY = "day-only"  # '43'


def format_year(year: "Year") -> str:
    return str(year.number)


def format_day(day: "Day", fmt: DayFormat = DayFormat.YEAR_FIRST, sep: str = "-") -> str:
    """The separator is ignored by EPOCH and DAY_ONLY."""
    if fmt is DayFormat.EPOCH:
        return str(day.epoch_day)
    if fmt is DayFormat.YEAR_FIRST:
        return f"{format_year(day.get_year())}{sep}{day.day_number}"
    if fmt is DayFormat.DAY_FIRST:
        return f"{day.day_number}{sep}{format_year(day.get_year())}"
    if fmt is DayFormat.DAY_ONLY:
        return str(day.day_number)
    raise ValueError(f"Unknown day format {fmt!r}")


def beeps_formatter(proportion: Fraction) -> str:
    return "%04d" % math.floor(proportion * BEEPS_PER_DAY)


def format_time(proportion: Fraction, formatter: Optional[Callable[[Fraction], str]] = None) -> str:
    return (formatter or beeps_formatter)(proportion)


def format_instant(
    instant: "Instant",
    fmt: DayFormat = DayFormat.YEAR_FIRST,
    sep: str = "-",
    formatter: Optional[Callable[[Fraction], str]] = None,
) -> str:
    return f"{format_day(instant.day, fmt, sep)} {format_time(instant.proportion_of_day, formatter)}"
