# tests/conftest.py

import pytest

import lukashian
from lukashian.core.keys import TEST
from lukashian.core.registry import CalendarRegistry

YEAR_ENDS = [1000, 2000, 3000, 4000, 4499, 4800, 5000, 40000]
DAY_ENDS = [300, 600, 900, 1200, 1500, 1800, 2100, 2400, 2700, 3000, 3300, 3600, 3900, 4200, 4500, 4799, 4900, 39000]

# Calendar millisecond 1001 is the first millisecond of 1970 (unix 0)
TEST_UNIX_EPOCH_OFFSET_MS = 1001


class TestCalendarProvider:
    """Small hand-made calendar whose days and years rarely end together."""

    __test__ = False

    def __init__(self, offset=TEST_UNIX_EPOCH_OFFSET_MS):
        self.offset = offset
        self.calls = {"offset": 0, "years": 0, "days": 0}

    def load_unix_epoch_offset_ms(self):
        self.calls["offset"] += 1
        return self.offset

    def load_year_ends_ms(self):
        self.calls["years"] += 1
        return list(YEAR_ENDS)

    def load_day_ends_ms(self, year_ends_ms):
        self.calls["days"] += 1
        return list(DAY_ENDS)


@pytest.fixture
def test_provider():
    return TestCalendarProvider()


@pytest.fixture
def registry(test_provider):
    """
    A fresh process registry with only the TEST calendar, made the default.
    The standard registry is restored afterwards.
    """
    previous = lukashian.get_registry()
    reg = CalendarRegistry()
    reg.register(TEST, test_provider)
    reg.set_default_key(TEST)
    lukashian.set_registry(reg)
    try:
        yield reg
    finally:
        lukashian.set_registry(previous)
