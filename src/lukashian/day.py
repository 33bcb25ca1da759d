"""
lukashian.day
-------------
A day of a Lukashian calendar, identified by its epoch day (1-based count
of days since the calendar epoch, irrespective of years).

A day belongs to the year in which it starts. Since years and days rarely
end together, the last day of a year usually ends in the next year.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from fractions import Fraction
from typing import TYPE_CHECKING, Optional, Union

from . import api
from . import instant as _instant
from . import year as _year
from .core.checked import add_exact, negate_exact, subtract_exact
from .core.errors import CrossCalendarError, OutOfRangeError
from .core.keys import BEEPS_PER_DAY, key_name

if TYPE_CHECKING:
    from .instant import Instant, TimeOfDay
    from .year import Year


@dataclass(frozen=True, eq=False)
class Day:
    epoch_day: int
    key: Optional[int] = None
    _end_ms: int = field(init=False, repr=False)
    _prev_end_ms: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.epoch_day < 1:
            raise OutOfRangeError(f"{self.epoch_day} is not a valid epoch day, the minimum is 1")
        key = api.resolve_key(self.key)
        data = api.calendar_data(key)
        object.__setattr__(self, "key", key)
        object.__setattr__(self, "_end_ms", data.ms_for_epoch_day(self.epoch_day))
        object.__setattr__(self, "_prev_end_ms", 0 if self.epoch_day == 1 else data.ms_for_epoch_day(self.epoch_day - 1))

    # ------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------

    @classmethod
    def of_epoch(cls, epoch_day: int, *, key: Optional[int] = None) -> "Day":
        return cls(epoch_day, key)

    @classmethod
    def of(cls, year: Union["Year", int], day_number: int, *, key: Optional[int] = None) -> "Day":
        """
        The day with the given number inside the given year.

        Raises OutOfRangeError when the year has no such day.
        """
        if not isinstance(year, _year.Year):
            year = _year.Year(year, key)
        elif key is not None and key != year.key:
            raise CrossCalendarError(f"{year!r} is of calendar {key_name(year.key)}, not {key_name(key)}")
        if day_number < 1:
            raise OutOfRangeError(f"{day_number} is not a valid day, the minimum is 1")
        if day_number > year.number_of_days:
            raise OutOfRangeError(f"{day_number} is not a valid day in year {year.number}")
        return cls(_first_epoch_day_of(year) + day_number - 1, year.key)

    @classmethod
    def now(cls, *, key: Optional[int] = None) -> "Day":
        data = api.calendar_data(key)
        return cls(data.epoch_day_for_ms(data.current_calendar_ms()), data.key)

    # ------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------

    def minus_years(self, years: int) -> "Day":
        """Same day number in an earlier year; fails when that year is too short."""
        return Day.of(self.get_year().minus_years(years), self.day_number)

    def plus_years(self, years: int) -> "Day":
        return Day.of(self.get_year().plus_years(years), self.day_number)

    def minus_days(self, days: int) -> "Day":
        if days < 0:
            return self.plus_days(negate_exact(days))
        return Day(subtract_exact(self.epoch_day, days), self.key)

    def plus_days(self, days: int) -> "Day":
        if days < 0:
            return self.minus_days(negate_exact(days))
        return Day(add_exact(self.epoch_day, days), self.key)

    def previous(self) -> "Day":
        return self.minus_days(1)

    def next(self) -> "Day":
        return self.plus_days(1)

    def difference_with(self, other: "Day") -> int:
        self._check_calendar(other)
        return subtract_exact(self.epoch_day, other.epoch_day)

    # ------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------

    def at_time(self, time: "TimeOfDay") -> "Instant":
        """Instant at the given beeps (int) or proportion of this day."""
        return _instant.Instant.of_day(self, time)

    def first_instant(self) -> "Instant":
        return _instant.Instant.of(self.ms_at_start, key=self.key)

    def last_instant(self) -> "Instant":
        return _instant.Instant.of(self._end_ms, key=self.key)

    # ------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------

    def contains(self, instant: "Instant") -> bool:
        self._check_calendar(instant)
        return self.ms_at_start <= instant.epoch_ms <= self._end_ms

    def is_in(self, year: "Year") -> bool:
        return year.contains(self)

    def is_before(self, other: "Day") -> bool:
        return self < other

    def is_after(self, other: "Day") -> bool:
        return self > other

    # ------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------

    @property
    def ms_at_end(self) -> int:
        return self._end_ms

    @property
    def ms_at_start(self) -> int:
        return self._prev_end_ms + 1

    @property
    def ms_previous_day(self) -> int:
        return self._prev_end_ms

    @property
    def length_ms(self) -> int:
        return self._end_ms - self._prev_end_ms

    @property
    def length_of_beep_ms(self) -> Fraction:
        return Fraction(self.length_ms, BEEPS_PER_DAY)

    def get_year(self) -> "Year":
        """The year in which this day starts."""
        data = api.calendar_data(self.key)
        return _year.Year(data.year_for_ms(self.ms_at_start), self.key)

    def get_end_year(self) -> "Year":
        """The year in which this day ends."""
        data = api.calendar_data(self.key)
        return _year.Year(data.year_for_ms(self._end_ms), self.key)

    @property
    def day_number(self) -> int:
        """Position of this day inside its year, starting at 1."""
        return self.epoch_day - _first_epoch_day_of(self.get_year()) + 1

    # ------------------------------------------------------------
    # Identity & order
    # ------------------------------------------------------------

    def _check_calendar(self, other) -> None:
        if other.key != self.key:
            raise CrossCalendarError(
                f"{self!r} is of calendar {key_name(self.key)}, {other!r} of calendar {key_name(other.key)}"
            )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Day):
            return NotImplemented
        return self.key == other.key and self.epoch_day == other.epoch_day

    def __hash__(self) -> int:
        return hash((self.key, self.epoch_day))

    def __lt__(self, other: "Day") -> bool:
        self._check_calendar(other)
        return self.epoch_day < other.epoch_day

    def __le__(self, other: "Day") -> bool:
        self._check_calendar(other)
        return self.epoch_day <= other.epoch_day

    def __gt__(self, other: "Day") -> bool:
        self._check_calendar(other)
        return self.epoch_day > other.epoch_day

    def __ge__(self, other: "Day") -> bool:
        self._check_calendar(other)
        return self.epoch_day >= other.epoch_day

    def __str__(self) -> str:
        from .formatter import format_day
        return format_day(self)

    def __repr__(self) -> str:
        return f"[Day: {self}]"


def _first_epoch_day_of(year: "Year") -> int:
    # The day running at the year's first millisecond belongs to the previous
    # year unless it starts exactly there.
    data = api.calendar_data(year.key)
    start_ms = year.ms_at_start
    running = data.epoch_day_for_ms(start_ms)
    if data.day_start_ms(running) < start_ms:
        return running + 1
    return running
