# tests/test_formatter.py

from fractions import Fraction

import pytest

from lukashian import Day, DayFormat, Instant, Year, format_day, format_instant, format_time, format_year


def test_format_year(registry):
    assert format_year(Year.of(7)) == "7"


@pytest.mark.parametrize(
    "fmt, sep, expected",
    [
        (DayFormat.EPOCH, "-", "17"),
        (DayFormat.YEAR_FIRST, "-", "6-2"),
        (DayFormat.YEAR_FIRST, "/", "6/2"),
        (DayFormat.DAY_FIRST, "-", "2-6"),
        (DayFormat.DAY_FIRST, ".", "2.6"),
        (DayFormat.DAY_ONLY, "/", "2"),
    ],
)
def test_format_day(registry, fmt, sep, expected):
    assert format_day(Day.of_epoch(17), fmt, sep) == expected


def test_format_time_pads_and_truncates():
    assert format_time(Fraction(0)) == "0000"
    assert format_time(Fraction(1, 300)) == "0033"
    assert format_time(Fraction(9999, 10000)) == "9999"
    # Never rounds up into the next day
    assert format_time(Fraction(99999, 100000)) == "9999"


def test_format_time_with_custom_formatter():
    assert format_time(Fraction(1, 4), lambda p: f"{float(p):.2f}") == "0.25"


def test_format_instant(registry):
    i = Instant.of_day(Day.of_epoch(5), 123)
    assert format_instant(i) == "2-1 0123"
    assert format_instant(i, DayFormat.EPOCH) == "5 0123"
    assert format_instant(i, DayFormat.DAY_FIRST, "/") == "1/2 0123"
    assert format_instant(i, formatter=lambda p: str(p)) == "2-1 123/10000"


def test_sep_keyword(registry):
    assert format_day(Day.of_epoch(17), sep=".") == "6.2"
    assert format_instant(Instant.of_day(Day.of_epoch(5), 123), DayFormat.DAY_FIRST, sep=":") == "1:2 0123"
