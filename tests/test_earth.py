# tests/test_earth.py

from datetime import datetime, timezone
from decimal import Decimal

import numpy as np
import pytest

import lukashian
from lukashian import Day, Instant, Year
from lukashian.core.data import CalendarData
from lukashian.core.keys import EARTH
from lukashian.core.registry import CalendarRegistry
from lukashian.providers import StandardEarthProvider
from lukashian.reference import solstice

DAY_MS = 86_400_000
TROPICAL_YEAR_MS = 365.2422 * DAY_MS

# Southern solstice 1970-12-22T06:35:43Z ends Lukashian year 5870
SOLSTICE_1970_UNIX_MS = 30_695_743_000


@pytest.fixture(scope="module")
def year_ends():
    return StandardEarthProvider().load_year_ends_ms()


def test_year_ends(year_ends):
    assert year_ends.size == StandardEarthProvider.number_of_years
    assert bool(np.all(np.diff(year_ends) > 0))
    lengths = np.diff(np.concatenate(([0], year_ends)))
    assert np.all(np.abs(lengths - TROPICAL_YEAR_MS) < 0.03 * DAY_MS)


def test_unix_epoch_offset_matches_1970_solstice(year_ends):
    unix_ms = int(year_ends[5870 - 1]) - StandardEarthProvider.UNIX_EPOCH_OFFSET_MS
    assert unix_ms == pytest.approx(SOLSTICE_1970_UNIX_MS, abs=2000)


def test_gregorian_offset():
    # The December 2000 solstice (2000-12-21 13:37 UTC) ends year 5900
    jde = float(solstice.southern_solstice_jde(5900))
    assert jde == pytest.approx(2451900.068, abs=0.01)


def test_solstice_ms_multiplies_hours_then_seconds_then_ms():
    years = np.arange(0, 7001)
    jde = solstice.southern_solstice_jde(years)
    ms = solstice.southern_solstice_jde_ms(years)
    assert np.array_equal(ms, np.trunc(((jde * 24) * 3600) * 1000).astype(np.int64))
    # One step through 86_400_000 rounds differently in some years
    assert int(ms[383]) != int(np.trunc(jde[383] * DAY_MS))
    assert int(ms[383]) == int(np.trunc(((jde[383] * 24) * 3600) * 1000))


@pytest.fixture(scope="module")
def earth():
    """The full standard Earth calendar, generated once for this module."""
    previous = lukashian.get_registry()
    reg = CalendarRegistry()
    reg.register(EARTH, StandardEarthProvider())
    lukashian.set_registry(reg)
    try:
        yield reg.data(EARTH)
    finally:
        lukashian.set_registry(previous)


def test_days_cover_all_years(earth: CalendarData):
    assert earth.last_day_end_ms >= earth.last_year_end_ms
    assert int(earth.day_ends_ms[-2]) < earth.last_year_end_ms
    assert earth.number_of_days == pytest.approx(7000 * 365.2422, abs=10)


def test_true_solar_day_lengths(earth: CalendarData):
    lengths = np.diff(earth.day_ends_ms)
    # True solar days differ from the mean by less than half a minute
    assert np.all(np.abs(lengths - DAY_MS) < 60_000)
    assert float(lengths.mean()) == pytest.approx(DAY_MS, abs=200)


def test_length_of_beep(earth):
    assert int(Day.of(5925, 136).length_of_beep_ms) == 8639


def test_year_of_a_gregorian_date(earth):
    i = Instant.from_datetime(datetime(2000, 6, 1, tzinfo=timezone.utc))
    assert i.get_year() == Year.of(5900)
    last = Year.of(5870).last_instant()
    assert last.to_unix_ms() == pytest.approx(SOLSTICE_1970_UNIX_MS, abs=2000)
    assert last.to_datetime().date() == datetime(1970, 12, 22).date()


def test_unix_round_trip_after_leap_seconds(earth):
    for unix_ms in (0, 1_000_000_000_000, 1_700_000_000_000, 1_760_000_000_123):
        assert Instant.from_unix_ms(unix_ms).to_unix_ms() == unix_ms


def test_every_day_of_a_year(earth):
    y = Year.of(5925)
    assert y.number_of_days in (365, 366)
    for n in range(1, y.number_of_days + 1):
        d = Day.of(y, n)
        assert d.get_year() == y
        assert d.first_instant().is_in(d)
        assert d.previous().last_instant().plus_ms(1) == d.first_instant()


def test_minus_proportion(earth):
    i = Instant.of_day(Day.of_epoch(4), 5000)
    nines = "0." + "9" * 66
    assert i.minus_proportion(Decimal("0." + "4" + "9" * 65)) == Instant.of_day(Day.of_epoch(4), 0)
    assert i.minus_proportion(Decimal("0.9999")) == Instant.of_day(Day.of_epoch(3), 5001)
    assert i.minus_proportion(Decimal(nines)) == Instant.of_day(Day.of_epoch(3), 5000)


@pytest.mark.parametrize(
    "beeps, day, expected",
    [
        (25001, 1, 9999),
        (25000, 2, 0),
        (24999, 2, 1),
        (20000, 2, 5000),
        (10000, 3, 5000),
        (5001, 3, 9999),
        (5000, 4, 0),
        (4999, 4, 1),
        (1000, 4, 4000),
        (1, 4, 4999),
        (0, 4, 5000),
    ],
)
def test_minus_beeps(earth, beeps, day, expected):
    i = Instant.of_day(Day.of_epoch(4), 5000)
    assert i.minus_beeps(beeps) == Instant.of_day(Day.of_epoch(day), expected)


@pytest.mark.parametrize(
    "beeps, day, expected",
    [
        (25001, 7, 1),
        (25000, 7, 0),
        (24999, 6, 9999),
        (20000, 6, 5000),
        (10000, 5, 5000),
        (5001, 5, 1),
        (5000, 5, 0),
        (4999, 4, 9999),
        (1000, 4, 6000),
        (1, 4, 5001),
        (0, 4, 5000),
    ],
)
def test_plus_beeps(earth, beeps, day, expected):
    i = Instant.of_day(Day.of_epoch(4), 5000)
    assert i.plus_beeps(beeps) == Instant.of_day(Day.of_epoch(day), expected)


def test_plus_proportion(earth):
    i = Instant.of_day(Day.of_epoch(4), 5000)
    assert i.plus_proportion(Decimal("0.9999")) == Instant.of_day(Day.of_epoch(5), 4999)


@pytest.mark.parametrize(
    "day, beeps, expected",
    [
        (5, 9999, -24999),
        (5, 5001, -20001),
        (5, 5000, -20000),
        (5, 4999, -19999),
        (5, 0, -15000),
        (4, 9999, -14999),
        (4, 5000, -10000),
        (4, 0, -5000),
        (3, 9999, -4999),
        (3, 5001, -1),
        (3, 5000, 0),
        (2, 0, 15000),
    ],
)
def test_difference_in_beeps(earth, day, beeps, expected):
    i = Instant.of_day(Day.of_epoch(3), 5000)
    assert i.difference_in_beeps_with(Instant.of_day(Day.of_epoch(day), beeps)) == expected
