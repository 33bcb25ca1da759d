"""
lukashian.year
--------------
A year of a Lukashian calendar: the time between two consecutive year ends
of its calendar data. Years are numbered from 1 and their lengths vary.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Union

from . import api
from . import day as _day
from . import instant as _instant
from .core.checked import negate_exact, subtract_exact, add_exact
from .core.errors import CrossCalendarError, OutOfRangeError
from .core.keys import key_name

if TYPE_CHECKING:
    from .day import Day
    from .instant import Instant


@dataclass(frozen=True, eq=False)
class Year:
    number: int
    key: Optional[int] = None
    _end_ms: int = field(init=False, repr=False)
    _prev_end_ms: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.number < 1:
            raise OutOfRangeError(f"{self.number} is not a valid year, the minimum is 1")
        key = api.resolve_key(self.key)
        data = api.calendar_data(key)
        object.__setattr__(self, "key", key)
        object.__setattr__(self, "_end_ms", data.ms_for_year(self.number))
        object.__setattr__(self, "_prev_end_ms", 0 if self.number == 1 else data.ms_for_year(self.number - 1))

    # ------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------

    @classmethod
    def of(cls, number: int, *, key: Optional[int] = None) -> "Year":
        return cls(number, key)

    @classmethod
    def now(cls, *, key: Optional[int] = None) -> "Year":
        data = api.calendar_data(key)
        return cls(data.year_for_ms(data.current_calendar_ms()), data.key)

    # ------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------

    def minus_years(self, years: int) -> "Year":
        if years < 0:
            return self.plus_years(negate_exact(years))
        return Year(subtract_exact(self.number, years), self.key)

    def plus_years(self, years: int) -> "Year":
        if years < 0:
            return self.minus_years(negate_exact(years))
        return Year(add_exact(self.number, years), self.key)

    def previous(self) -> "Year":
        return self.minus_years(1)

    def next(self) -> "Year":
        return self.plus_years(1)

    def difference_with(self, other: "Year") -> int:
        """Directional difference of the year numbers."""
        self._check_calendar(other)
        return subtract_exact(self.number, other.number)

    # ------------------------------------------------------------
    # Composition
    # ------------------------------------------------------------

    def at_day(self, day_number: int) -> "Day":
        return _day.Day.of(self, day_number)

    def first_day(self) -> "Day":
        return _day.Day.of(self, 1)

    def last_day(self) -> "Day":
        """The day in which this year ends; it may end in the next year."""
        data = api.calendar_data(self.key)
        return _day.Day(data.epoch_day_for_ms(self._end_ms), self.key)

    def first_instant(self) -> "Instant":
        return _instant.Instant.of(self.ms_at_start, key=self.key)

    def last_instant(self) -> "Instant":
        return _instant.Instant.of(self._end_ms, key=self.key)

    # ------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------

    def contains(self, value: Union["Day", "Instant"]) -> bool:
        """
        A day belongs to the year it starts in. An instant belongs to the year
        whose milliseconds include it, even when its day started in the year before.
        """
        self._check_calendar(value)
        if isinstance(value, _day.Day):
            return value.get_year() == self
        return self.ms_at_start <= value.epoch_ms <= self._end_ms

    def is_before(self, other: "Year") -> bool:
        return self < other

    def is_after(self, other: "Year") -> bool:
        return self > other

    # ------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------

    @property
    def year_number(self) -> int:
        return self.number

    @property
    def ms_at_end(self) -> int:
        """Milliseconds from the calendar epoch up to the final point of this year."""
        return self._end_ms

    @property
    def ms_at_start(self) -> int:
        """The first millisecond of this year (1 for the first year)."""
        return self._prev_end_ms + 1

    @property
    def ms_previous_year(self) -> int:
        return self._prev_end_ms

    @property
    def length_ms(self) -> int:
        return self._end_ms - self._prev_end_ms

    @property
    def number_of_days(self) -> int:
        return self.last_day().day_number

    # ------------------------------------------------------------
    # Identity & order
    # ------------------------------------------------------------

    def _check_calendar(self, other) -> None:
        if other.key != self.key:
            raise CrossCalendarError(
                f"{self!r} is of calendar {key_name(self.key)}, {other!r} of calendar {key_name(other.key)}"
            )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Year):
            return NotImplemented
        return self.key == other.key and self.number == other.number

    def __hash__(self) -> int:
        return hash((self.key, self.number))

    def __lt__(self, other: "Year") -> bool:
        self._check_calendar(other)
        return self.number < other.number

    def __le__(self, other: "Year") -> bool:
        self._check_calendar(other)
        return self.number <= other.number

    def __gt__(self, other: "Year") -> bool:
        self._check_calendar(other)
        return self.number > other.number

    def __ge__(self, other: "Year") -> bool:
        self._check_calendar(other)
        return self.number >= other.number

    def __str__(self) -> str:
        from .formatter import format_year
        return format_year(self)

    def __repr__(self) -> str:
        return f"[Year: {self}]"
