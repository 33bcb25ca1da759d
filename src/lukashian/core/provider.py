"""
lukashian.core.provider
-----------------------
The capability a calendar instance is built from.

A provider yields three artifacts, each loaded at most once per calendar key
(the registry memoizes the resulting CalendarData):

  unix epoch offset   calendar_ms = unix_ms + offset + 1000 * leap_seconds
  year ends           year_ends[y-1] = milliseconds from the calendar epoch up to
                      and including the last millisecond of year y
  day ends            day_ends[d-1]  = the same for epoch day d

Both sequences are strictly increasing. Every year is at least 3 days long and
every day at least 3 ms long; shorter units are not supported.
"""

from __future__ import annotations

from typing import Protocol, Sequence, Union

import numpy as np

MsArray = Union[np.ndarray, Sequence[int]]


class DataProvider(Protocol):
    def load_unix_epoch_offset_ms(self) -> int:
        """
        Signed offset between the unix epoch and the calendar epoch, positive when
        the unix epoch lies after the calendar epoch. Measured before any leap second.
        """
        ...

    def load_year_ends_ms(self) -> MsArray:
        """Monotone increasing year ends, at least one element."""
        ...

    def load_day_ends_ms(self, year_ends_ms: np.ndarray) -> MsArray:
        """Monotone increasing day ends; the final element reaches the last year end."""
        ...
