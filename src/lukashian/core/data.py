"""
lukashian.core.data
-------------------
Immutable calendar data for one calendar key, with lookups between epoch
milliseconds, epoch days and year numbers, and the bridge to the unix clock.

All lookups use binary search on the monotone end arrays. An exact hit at
index i yields i + 1; otherwise the 1-based insertion point. Both name the
year or day whose end is the first one at or after the millisecond, i.e. the
one containing it.
"""
from __future__ import annotations

import logging
import numbers
import time
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .checked import INT64_MAX, INT64_MIN, add_exact, subtract_exact
from .errors import LukashianError, OutOfRangeError, ProviderError, UnsupportedError
from .keys import key_name
from .provider import DataProvider, MsArray
from ..reference.leap_seconds import leap_seconds_at, unix_ms_with_leap_second

logger = logging.getLogger(__name__)


def system_time_ms() -> int:
    """Current system clock in unix milliseconds."""
    return time.time_ns() // 1_000_000


def _is_integral(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, (bool, np.bool_))


def _as_ms_array(values: MsArray, what: str) -> np.ndarray:
    if isinstance(values, np.ndarray):
        whole = values.dtype.kind in "iu" or values.size == 0
    else:
        whole = all(_is_integral(v) for v in np.asarray(values, dtype=object).ravel())
    if not whole:
        raise ProviderError(f"{what} must be whole milliseconds")
    try:
        arr = np.array(values, dtype=np.int64)
    except (OverflowError, TypeError, ValueError) as e:
        raise ProviderError(f"{what} are not 64-bit integers") from e
    if arr.ndim != 1 or arr.size == 0:
        raise ProviderError(f"{what} must be a non-empty one-dimensional sequence")
    if arr[0] < 1:
        raise ProviderError(f"{what} must be positive, first value is {int(arr[0])}")
    if arr.size > 1 and not bool(np.all(np.diff(arr) > 0)):
        i = int(np.flatnonzero(np.diff(arr) <= 0)[0])
        raise ProviderError(f"{what} must be strictly increasing, index {i + 1} is not")
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class CalendarData:
    key: int
    unix_epoch_offset_ms: int
    year_ends_ms: np.ndarray = field(repr=False)
    day_ends_ms: np.ndarray = field(repr=False)
    leap_seconds_unix_ms: np.ndarray = field(default_factory=unix_ms_with_leap_second, repr=False)

    @classmethod
    def from_provider(cls, provider: DataProvider, *, key: int) -> "CalendarData":
        """
        Load the three artifacts from the provider, once each.

        Anything the provider raises surfaces as ProviderError; calendar errors
        (e.g. an algorithmic invariant inside a generator) propagate unchanged.
        """
        t0 = time.perf_counter()
        try:
            offset = provider.load_unix_epoch_offset_ms()
            if not _is_integral(offset):
                raise ProviderError(f"Unix epoch offset {offset!r} is not a whole number of milliseconds")
            offset = int(offset)
            year_ends = _as_ms_array(provider.load_year_ends_ms(), "Year ends")
            day_ends = _as_ms_array(provider.load_day_ends_ms(year_ends), "Day ends")
        except LukashianError:
            raise
        except Exception as e:
            raise ProviderError(f"Provider {type(provider).__name__} failed for calendar {key_name(key)}: {e}") from e

        if offset < INT64_MIN or offset > INT64_MAX:
            raise ProviderError(f"Unix epoch offset {offset} is not a 64-bit integer")

        data = cls(key=key, unix_epoch_offset_ms=offset, year_ends_ms=year_ends, day_ends_ms=day_ends)
        logger.info(
            "Built calendar %s: %d years, %d days in %.2fs",
            key_name(key), data.number_of_years, data.number_of_days, time.perf_counter() - t0,
        )
        return data

    # ------------------------------------------------------------
    # Sizes
    # ------------------------------------------------------------

    @property
    def number_of_years(self) -> int:
        return int(self.year_ends_ms.size)

    @property
    def number_of_days(self) -> int:
        return int(self.day_ends_ms.size)

    @property
    def last_year_end_ms(self) -> int:
        return int(self.year_ends_ms[-1])

    @property
    def last_day_end_ms(self) -> int:
        return int(self.day_ends_ms[-1])

    # ------------------------------------------------------------
    # Index -> milliseconds
    # ------------------------------------------------------------

    def ms_for_year(self, year: int) -> int:
        """Milliseconds from the calendar epoch up to the final point of the year."""
        if year < 1:
            raise OutOfRangeError(f"{year} is not a valid year, the minimum is 1")
        if year > self.number_of_years:
            raise UnsupportedError(f"Year {year} isn't supported yet by calendar {key_name(self.key)}")
        return int(self.year_ends_ms[year - 1])

    def ms_for_epoch_day(self, epoch_day: int) -> int:
        """Milliseconds from the calendar epoch up to the final point of the epoch day."""
        if epoch_day < 1:
            raise OutOfRangeError(f"{epoch_day} is not a valid epoch day, the minimum is 1")
        if epoch_day > self.number_of_days:
            raise UnsupportedError(f"Epoch day {epoch_day} isn't supported yet by calendar {key_name(self.key)}")
        return int(self.day_ends_ms[epoch_day - 1])

    def year_start_ms(self, year: int) -> int:
        return 1 if year == 1 else self.ms_for_year(year - 1) + 1

    def day_start_ms(self, epoch_day: int) -> int:
        return 1 if epoch_day == 1 else self.ms_for_epoch_day(epoch_day - 1) + 1

    # ------------------------------------------------------------
    # Milliseconds -> index
    # ------------------------------------------------------------

    def _search(self, ends: np.ndarray, epoch_ms: int) -> int:
        if epoch_ms < 1:
            raise OutOfRangeError(f"{epoch_ms} is not a valid epoch millisecond, the minimum is 1")
        if epoch_ms > int(ends[-1]):
            raise UnsupportedError(
                f"Epoch millisecond {epoch_ms} isn't supported yet by calendar {key_name(self.key)}"
            )
        return int(np.searchsorted(ends, epoch_ms, side="left")) + 1

    def year_for_ms(self, epoch_ms: int) -> int:
        """The year containing the given epoch millisecond."""
        return self._search(self.year_ends_ms, epoch_ms)

    def epoch_day_for_ms(self, epoch_ms: int) -> int:
        """The epoch day containing the given epoch millisecond."""
        return self._search(self.day_ends_ms, epoch_ms)

    # ------------------------------------------------------------
    # Wall-clock bridge
    # ------------------------------------------------------------

    def unix_ms_for_calendar_ms(self, epoch_ms: int) -> int:
        # The calendar timeline is uniform; unix time repeats a second at each leap second
        unix_ms = subtract_exact(epoch_ms, self.unix_epoch_offset_ms)
        return unix_ms - 1000 * leap_seconds_at(self.leap_seconds_unix_ms, unix_ms)

    def calendar_ms_for_unix_ms(self, unix_ms: int) -> int:
        if unix_ms < INT64_MIN or unix_ms > INT64_MAX:
            raise OutOfRangeError(f"{unix_ms} is not a 64-bit unix millisecond")
        n = leap_seconds_at(self.leap_seconds_unix_ms, unix_ms)
        return add_exact(add_exact(unix_ms, 1000 * n), self.unix_epoch_offset_ms)

    def current_calendar_ms(self, now_unix_ms: Optional[int] = None) -> int:
        return self.calendar_ms_for_unix_ms(system_time_ms() if now_unix_ms is None else now_unix_ms)
