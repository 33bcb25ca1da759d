# tests/test_instant.py

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from fractions import Fraction

import pytest

from lukashian import (
    CrossCalendarError,
    Day,
    Instant,
    OutOfRangeError,
    UnsupportedError,
    Year,
)
from lukashian.core.keys import TEST
from conftest import DAY_ENDS, TestCalendarProvider


def test_of_millisecond(registry):
    i = Instant.of(2)
    assert i.key == TEST
    assert i.epoch_ms == 2
    # One of the 300 ms of the first day has fully elapsed
    assert i.proportion_of_day == Fraction(1, 300)
    assert i.beeps == 33
    assert i.get_day() == Day.of_epoch(1)


def test_first_and_last_millisecond_of_a_day(registry):
    assert Instant.of(1).proportion_of_day == 0
    assert Instant.of(300).proportion_of_day == Fraction(299, 300)
    assert Instant.of(301).proportion_of_day == 0
    assert Instant.of(300).beeps == 9966


def test_every_millisecond_reads_back(registry):
    for m in list(range(1, 5001)) + [5001, 20000, 38999, 39000]:
        assert Instant.of(m).epoch_ms == m


def test_millisecond_bounds(registry):
    with pytest.raises(OutOfRangeError):
        Instant.of(0)
    with pytest.raises(OutOfRangeError):
        Instant.of(-10)
    with pytest.raises(UnsupportedError):
        Instant.of(DAY_ENDS[-1] + 1)


def test_at_beeps(registry):
    i = Day.of_epoch(1).at_time(5000)
    assert i.epoch_ms == 151
    assert i.beeps == 5000

    # A beep of day 17 is shorter than a millisecond
    j = Day.of_epoch(17).at_time(9999)
    assert j.epoch_ms == 4900
    assert j.beeps == 9999


def test_beeps_read_back_on_every_day(registry):
    for e in range(1, len(DAY_ENDS) + 1):
        d = Day.of_epoch(e)
        for b in (0, 1, 33, 4999, 5000, 9998, 9999):
            i = Instant.of_day(d, b)
            assert i.beeps == b
            assert i.get_day() == d
            assert d.contains(i)


def test_proportion_resolution(registry):
    d = Day.of_epoch(1)
    # On a millisecond boundary the millisecond starting there is chosen
    assert Instant.of_day(d, Fraction(0)).epoch_ms == 1
    assert Instant.of_day(d, Fraction(1, 3)).epoch_ms == 101
    # Inside a millisecond the one containing it is chosen
    assert Instant.of_day(d, Fraction(1, 1000)).epoch_ms == 1
    assert Instant.of_day(d, Fraction(1, 299)).epoch_ms == 2
    assert Instant.of_day(d, "0.5").epoch_ms == 151
    assert Instant.of_day(d, Decimal("0.25")).epoch_ms == 76


def test_proportion_validation(registry):
    d = Day.of_epoch(1)
    with pytest.raises(OutOfRangeError):
        Instant(d, Fraction(1))
    with pytest.raises(OutOfRangeError):
        Instant(d, Fraction(-1, 10))
    with pytest.raises(OutOfRangeError):
        Instant.of_day(d, 10000)
    with pytest.raises(OutOfRangeError):
        Instant.of_day(d, -1)
    with pytest.raises(TypeError):
        Instant.of_day(d, 0.5)


def test_equality_uses_the_millisecond(registry):
    a = Instant.of_day(Day.of_epoch(1), Fraction(1, 1000))
    b = Instant.of(1)
    assert a.proportion_of_day != b.proportion_of_day
    assert a == b
    assert hash(a) == hash(b)


def test_of_year_day(registry):
    i = Instant.of_year_day(2, 1, 5000)
    assert i.get_day() == Day.of_epoch(5)
    assert i.epoch_ms == 1351
    assert Instant.of_year_day(Year.of(6), 2, 0).epoch_ms == 4800


def test_plus_and_minus_beeps(registry):
    i = Instant.of_day(Day.of_epoch(4), 5000)
    assert i.plus_beeps(25000) == Instant.of_day(Day.of_epoch(7), 0)
    assert i.minus_beeps(25001) == Instant.of_day(Day.of_epoch(1), 9999)
    assert i.plus_beeps(-25001) == Instant.of_day(Day.of_epoch(1), 9999)
    assert i.plus_beeps(25000).minus_beeps(25000) == i


def test_beeps_across_days_of_different_length(registry):
    i = Instant.of(4799)
    there = i.plus_beeps(10000)
    assert there.get_day() == Day.of_epoch(17)
    assert there.epoch_ms == 4900
    assert there.minus_beeps(10000).epoch_ms == 4799


def test_plus_and_minus_proportion(registry):
    i = Instant.of_day(Day.of_epoch(1), 5000)
    assert i.plus_proportion("1/2") == Day.of_epoch(2).first_instant()
    assert i.plus_proportion(Fraction(3, 2)).get_day() == Day.of_epoch(3)
    j = Instant.of_day(Day.of_epoch(2), 2500)
    assert j.minus_proportion("3/4") == i


def test_difference_in_beeps(registry):
    a = Instant.of_day(Day.of_epoch(3), 5000)
    b = Instant.of_day(Day.of_epoch(5), 9999)
    assert a.difference_in_beeps_with(b) == -24999
    assert b.difference_in_beeps_with(a) == 24999
    assert a.difference_in_beeps_with(a) == 0


def test_plus_and_minus_ms_and_seconds(registry):
    i = Instant.of(151)
    assert i.plus_ms(150) == Day.of_epoch(2).first_instant()
    assert i.minus_ms(150) == Instant.of(1)
    assert i.plus_seconds(1).epoch_ms == 1151
    assert i.plus_seconds(1).minus_seconds(1) == i
    with pytest.raises(OutOfRangeError):
        i.minus_seconds(1)
    assert Instant.of(500).difference_with(Instant.of(200)) == 300
    assert Instant.of(200).difference_with(Instant.of(500)) == -300


def test_plus_and_minus_days_and_years(registry):
    i = Instant.of_day(Day.of_epoch(1), 5000)
    assert i.plus_days(2).epoch_ms == 751
    assert i.at_next_day() == Instant.of_day(Day.of_epoch(2), 5000)
    assert i.at_next_day().at_previous_day() == i
    assert i.plus_days(2).minus_days(2) == i

    j = Instant.of_day(Day.of_epoch(5), 5000)
    assert j.plus_years(1).epoch_ms == 2251
    assert j.plus_years(1).minus_years(1) == j


def test_year_of_an_instant_can_differ_from_its_day(registry):
    i = Instant.of(1200)
    assert i.get_day() == Day.of_epoch(4)
    assert i.get_day().get_year() == Year.of(1)
    assert i.get_year() == Year.of(2)
    assert i.is_in(Day.of_epoch(4))
    assert i.is_in(Year.of(2))
    assert not i.is_in(Year.of(1))


def test_order_is_the_order_of_milliseconds(registry):
    previous = Instant.of(1)
    for m in range(2, 3000, 7):
        current = Instant.of(m)
        assert previous < current
        assert current > previous
        assert previous.is_before(current)
        assert current.is_after(previous)
        previous = current


def test_unix_clock(registry):
    assert Instant.of(1001).to_unix_ms() == 0
    assert Instant.of(1001).to_datetime() == datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert Instant.from_unix_ms(0) == Instant.of(1001)
    assert Instant.from_unix_ms(-1000) == Instant.of(1)
    with pytest.raises(OutOfRangeError):
        Instant.from_unix_ms(-1001)

    for m in (1, 2, 151, 1000, 1001, 4799, 39000):
        i = Instant.of(m)
        assert Instant.from_unix_ms(i.to_unix_ms()) == i


def test_from_datetime(registry):
    dt = datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc)
    assert Instant.from_datetime(dt) == Instant.of(2001)
    cet = timezone(timedelta(hours=1))
    assert Instant.from_datetime(datetime(1970, 1, 1, 1, 0, 0, tzinfo=cet)) == Instant.of(1001)
    with pytest.raises(ValueError):
        Instant.from_datetime(datetime(1970, 1, 1))


def test_now(registry, monkeypatch):
    monkeypatch.setattr("lukashian.core.data.system_time_ms", lambda: 0)
    assert Instant.now() == Instant.of(1001)


def test_str_and_repr(registry):
    assert str(Instant.of(151)) == "1-1 5000"
    assert str(Instant.of(1)) == "1-1 0000"
    assert repr(Instant.of(4800)) == "[Instant: 6-2 0000]"


def test_to_calendar(registry):
    registry.register(100, TestCalendarProvider(offset=2001))
    i = Instant.of(1500)
    j = i.to_calendar(100)
    assert j.key == 100
    assert j.epoch_ms == 2500
    assert j.to_calendar(TEST) == i


def test_cross_calendar(registry):
    registry.register(100, TestCalendarProvider())
    a = Instant.of(1500)
    b = Instant.of(1500, key=100)
    assert a != b
    with pytest.raises(CrossCalendarError):
        a < b
    with pytest.raises(CrossCalendarError):
        a.difference_with(b)
    with pytest.raises(CrossCalendarError):
        a.difference_in_beeps_with(b)
    with pytest.raises(CrossCalendarError):
        b.is_in(Day.of_epoch(5))


def test_to_datetime_outside_datetime_range(registry):
    registry.register(100, TestCalendarProvider(offset=4000 * 31_556_952_000))
    i = Instant.of(151, key=100)
    with pytest.raises(UnsupportedError, match="outside the datetime range"):
        i.to_datetime()
    assert i.to_unix_ms() == 151 - 4000 * 31_556_952_000
