"""
lukashian.instant
-----------------
A unique millisecond on the timeline of a Lukashian calendar.

An instant is stored as a day plus the exact proportion of that day that has
fully elapsed, so that a time of day given as a proportion (or in beeps)
reads back unchanged. The millisecond is derived from the two:

  Proportion -> millisecond. With L the day length and q = L * p, the chosen
  millisecond within the day is q + 1 when q is whole (the millisecond that
  starts at that boundary) and ceil(q) otherwise.

  Millisecond -> proportion. p = (m - day start) / L. The millisecond itself
  has not elapsed yet, so a day's first millisecond reads 0 and its last
  (L - 1) / L.

Equality, hashing and ordering use the resolved millisecond, so two instants
whose proportions fall inside the same millisecond compare equal.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from fractions import Fraction
from typing import TYPE_CHECKING, Optional, Union

from . import api
from . import day as _day
from . import year as _year
from .core.checked import add_exact, multiply_exact, subtract_exact
from .core.errors import CrossCalendarError, OutOfRangeError, UnsupportedError
from .core.keys import BEEPS_PER_DAY, key_name

if TYPE_CHECKING:
    from .day import Day
    from .year import Year

# int = beeps, anything else = proportion of the day
TimeOfDay = Union[int, Fraction, Decimal, str]
ProportionLike = Union[int, Fraction, Decimal, str]

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _proportion(value: ProportionLike) -> Fraction:
    if isinstance(value, float):
        raise TypeError("Proportions must be exact; pass a Fraction, Decimal or str instead of a float")
    return Fraction(value)


def _beeps_to_proportion(beeps: int) -> Fraction:
    if beeps < 0 or beeps >= BEEPS_PER_DAY:
        raise OutOfRangeError(f"Beeps must be between 0 (inclusive) and {BEEPS_PER_DAY - 1} (inclusive), got {beeps}")
    return Fraction(beeps, BEEPS_PER_DAY)


def _ms_for(day: "Day", p: Fraction) -> int:
    q = day.length_ms * p
    ms_in_day = q.numerator + 1 if q.denominator == 1 else math.ceil(q)
    return day.ms_at_start - 1 + ms_in_day


@dataclass(frozen=True, eq=False)
class Instant:
    day: "Day"
    proportion_of_day: Fraction
    _epoch_ms: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        p = _proportion(self.proportion_of_day)
        if p < 0 or p >= 1:
            raise OutOfRangeError(f"Proportion of day must be between 0 (inclusive) and 1 (exclusive), got {p}")
        object.__setattr__(self, "proportion_of_day", p)
        object.__setattr__(self, "_epoch_ms", _ms_for(self.day, p))

    # ------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------

    @classmethod
    def of(cls, epoch_ms: int, *, key: Optional[int] = None) -> "Instant":
        """The instant of the given millisecond since the calendar epoch (first millisecond is 1)."""
        if epoch_ms < 1:
            raise OutOfRangeError(f"{epoch_ms} is not a valid value, the minimum is 1")
        data = api.calendar_data(key)
        day = _day.Day(data.epoch_day_for_ms(epoch_ms), data.key)
        return cls(day, Fraction(epoch_ms - day.ms_at_start, day.length_ms))

    @classmethod
    def of_day(cls, day: "Day", time: TimeOfDay) -> "Instant":
        """The instant at which the given beeps (int) or proportion of the day have elapsed."""
        if isinstance(time, int) and not isinstance(time, bool):
            return cls(day, _beeps_to_proportion(time))
        return cls(day, _proportion(time))

    @classmethod
    def of_year_day(cls, year: Union["Year", int], day_number: int, time: TimeOfDay, *, key: Optional[int] = None) -> "Instant":
        return cls.of_day(_day.Day.of(year, day_number, key=key), time)

    @classmethod
    def from_unix_ms(cls, unix_ms: int, *, key: Optional[int] = None) -> "Instant":
        """Instant of a unix clock reading; fails before the calendar epoch."""
        data = api.calendar_data(key)
        return cls.of(data.calendar_ms_for_unix_ms(unix_ms), key=data.key)

    @classmethod
    def from_datetime(cls, dt: datetime, *, key: Optional[int] = None) -> "Instant":
        if dt.tzinfo is None:
            raise ValueError("datetime must be timezone-aware")
        delta = dt - _UNIX_EPOCH
        unix_ms = (delta.days * 86_400 + delta.seconds) * 1000 + delta.microseconds // 1000
        return cls.from_unix_ms(unix_ms, key=key)

    @classmethod
    def now(cls, *, key: Optional[int] = None) -> "Instant":
        data = api.calendar_data(key)
        return cls.of(data.current_calendar_ms(), key=data.key)

    # ------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------

    def minus_years(self, years: int) -> "Instant":
        return Instant(self.day.minus_years(years), self.proportion_of_day)

    def plus_years(self, years: int) -> "Instant":
        return Instant(self.day.plus_years(years), self.proportion_of_day)

    def minus_days(self, days: int) -> "Instant":
        return Instant(self.day.minus_days(days), self.proportion_of_day)

    def plus_days(self, days: int) -> "Instant":
        return Instant(self.day.plus_days(days), self.proportion_of_day)

    def at_previous_day(self) -> "Instant":
        return self.minus_days(1)

    def at_next_day(self) -> "Instant":
        return self.plus_days(1)

    def minus_ms(self, ms: int) -> "Instant":
        return Instant.of(subtract_exact(self._epoch_ms, ms), key=self.key)

    def plus_ms(self, ms: int) -> "Instant":
        return Instant.of(add_exact(self._epoch_ms, ms), key=self.key)

    def minus_seconds(self, seconds: int) -> "Instant":
        return self.minus_ms(multiply_exact(seconds, 1000))

    def plus_seconds(self, seconds: int) -> "Instant":
        return self.plus_ms(multiply_exact(seconds, 1000))

    def plus_proportion(self, proportion: ProportionLike) -> "Instant":
        """
        Move by a proportion of a day, 1 being a whole day. Whole days are carried
        into the day and the remainder taken of the resulting day, so the result
        is not linear in milliseconds when days of different lengths are crossed.
        """
        total = self.proportion_of_day + _proportion(proportion)
        carry = math.floor(total)
        return Instant(self.day.plus_days(carry), total - carry)

    def minus_proportion(self, proportion: ProportionLike) -> "Instant":
        return self.plus_proportion(-_proportion(proportion))

    def plus_beeps(self, beeps: int) -> "Instant":
        return self.plus_proportion(Fraction(beeps, BEEPS_PER_DAY))

    def minus_beeps(self, beeps: int) -> "Instant":
        return self.plus_proportion(Fraction(-beeps, BEEPS_PER_DAY))

    def difference_with(self, other: "Instant") -> int:
        """Directional difference in milliseconds."""
        self._check_calendar(other)
        return subtract_exact(self._epoch_ms, other._epoch_ms)

    def difference_in_beeps_with(self, other: "Instant") -> int:
        """
        Directional difference in beeps: whole days count 10 000 beeps each,
        the difference of the proportions is truncated toward zero.
        """
        self._check_calendar(other)
        beeps = int((self.proportion_of_day - other.proportion_of_day) * BEEPS_PER_DAY)
        days = self.day.difference_with(other.day)
        return add_exact(beeps, multiply_exact(days, BEEPS_PER_DAY))

    # ------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------

    def to_unix_ms(self) -> int:
        return api.calendar_data(self.key).unix_ms_for_calendar_ms(self._epoch_ms)

    def to_datetime(self) -> datetime:
        """UTC datetime, for instants between 0001-01-01 and 9999-12-31."""
        unix_ms = self.to_unix_ms()
        try:
            return _UNIX_EPOCH + timedelta(milliseconds=unix_ms)
        except OverflowError as e:
            raise UnsupportedError(f"Unix ms {unix_ms} is outside the datetime range") from e

    def to_calendar(self, key: int) -> "Instant":
        """The same moment in another calendar, through the unix clock."""
        return Instant.from_unix_ms(self.to_unix_ms(), key=key)

    # ------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------

    def is_in(self, value: Union["Day", "Year"]) -> bool:
        return value.contains(self)

    def is_before(self, other: "Instant") -> bool:
        return self < other

    def is_after(self, other: "Instant") -> bool:
        return self > other

    # ------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------

    @property
    def key(self) -> int:
        return self.day.key

    @property
    def epoch_ms(self) -> int:
        """Number of the millisecond this instant represents, counted from 1 at the epoch."""
        return self._epoch_ms

    @property
    def beeps(self) -> int:
        """Whole beeps elapsed, 0 to 9999. Truncated, never rounded."""
        return math.floor(self.proportion_of_day * BEEPS_PER_DAY)

    def get_day(self) -> "Day":
        return self.day

    def get_year(self) -> "Year":
        """The year containing this millisecond, which may differ from the day's year."""
        data = api.calendar_data(self.key)
        return _year.Year(data.year_for_ms(self._epoch_ms), self.key)

    # ------------------------------------------------------------
    # Identity & order
    # ------------------------------------------------------------

    def _check_calendar(self, other) -> None:
        if other.key != self.key:
            raise CrossCalendarError(
                f"{self!r} is of calendar {key_name(self.key)}, {other!r} of calendar {key_name(other.key)}"
            )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self.key == other.key and self._epoch_ms == other._epoch_ms

    def __hash__(self) -> int:
        return hash((self.key, self._epoch_ms))

    def __lt__(self, other: "Instant") -> bool:
        self._check_calendar(other)
        return self._epoch_ms < other._epoch_ms

    def __le__(self, other: "Instant") -> bool:
        self._check_calendar(other)
        return self._epoch_ms <= other._epoch_ms

    def __gt__(self, other: "Instant") -> bool:
        self._check_calendar(other)
        return self._epoch_ms > other._epoch_ms

    def __ge__(self, other: "Instant") -> bool:
        self._check_calendar(other)
        return self._epoch_ms >= other._epoch_ms

    def __str__(self) -> str:
        from .formatter import format_instant
        return format_instant(self)

    def __repr__(self) -> str:
        return f"[Instant: {self}]"
