"""Static UTC leap-second table.

Source: https://github.com/eggert/tz/blob/master/leap-seconds.list
(NTP timestamps, i.e. seconds since 1900-01-01).
"""
from __future__ import annotations

import numpy as np

NTP_TO_UNIX_SECONDS = 2_208_988_800

SECONDS_SINCE_1900 = (
    2287785600,
    2303683200,
    2335219200,
    2366755200,
    2398291200,
    2429913600,
    2461449600,
    2492985600,
    2524521600,
    2571782400,
    2603318400,
    2634854400,
    2698012800,
    2776982400,
    2840140800,
    2871676800,
    2918937600,
    2950473600,
    2982009600,
    3029443200,
    3076704000,
    3124137600,
    3345062400,
    3439756800,
    3550089600,
    3644697600,
    3692217600,
)


def unix_ms_with_leap_second() -> np.ndarray:
    """POSIX milliseconds at which a leap second was inserted, ascending."""
    s = np.array(SECONDS_SINCE_1900, dtype=np.int64)
    out = (s - NTP_TO_UNIX_SECONDS) * 1000
    out.setflags(write=False)
    return out


def leap_seconds_at(table: np.ndarray, unix_ms: int) -> int:
    """Number of leap seconds whose timestamp is at or before unix_ms."""
    return int(np.searchsorted(table, unix_ms, side="right"))
