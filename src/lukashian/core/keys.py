"""Calendar keys and clock constants."""
from __future__ import annotations

from typing import Dict

EARTH = 1
EARTH_HTTP = 2
MARS = 3
MARS_HTTP = 4
TEST = 99

BEEPS_PER_DAY = 10_000

KEY_NAMES: Dict[int, str] = {
    EARTH: "EARTH",
    EARTH_HTTP: "EARTH_HTTP",
    MARS: "MARS",
    MARS_HTTP: "MARS_HTTP",
    TEST: "TEST",
}


def parse_key(value: str | int) -> int:
    """Accept an integer key or one of the reserved names (case-insensitive)."""
    if isinstance(value, int):
        return value
    s = value.strip()
    try:
        return int(s)
    except ValueError:
        pass
    for k, name in KEY_NAMES.items():
        if name == s.upper():
            return k
    raise ValueError(f"Unknown calendar key '{value}'. Known names: {sorted(KEY_NAMES.values())}")


def key_name(key: int) -> str:
    return KEY_NAMES.get(key, str(key))
