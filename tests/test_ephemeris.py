# tests/test_ephemeris.py

import sys

import numpy as np
import pytest

from lukashian.ephemeris.de422 import (
    AU_KM,
    DE422_FIRST_JD,
    DE422_LAST_JD,
    DE422Sun,
    solve_solstice_near,
    wrap180,
)
from lukashian.reference import astro_args as aa


class _FakeEphemeris:
    """Earth at the barycentre, the Sun on the -x axis of the J2000 equator."""

    def compute(self, name, jd):
        if name == "sun":
            return [-AU_KM, 0.0, 0.0, 0.0, 0.0, 0.0]
        return [0.0] * 6


class _LinearSun:
    def __init__(self, jd_solstice=100.0):
        self.jd_solstice = jd_solstice

    def lon_deg(self, jd):
        return (270.0 + (jd - self.jd_solstice) * 0.9856) % 360.0


def test_wrap180():
    assert wrap180(350.0) == pytest.approx(-10.0)
    assert wrap180(10.0) == pytest.approx(10.0)


def test_frame_at_j2000():
    m = aa.matrix_eq_j2000_to_ecl_date(0.0)
    eps = np.radians(aa.mean_obliquity_deg(0.0))
    assert m @ np.array([1.0, 0.0, 0.0]) == pytest.approx(np.array([1.0, 0.0, 0.0]))
    assert m @ np.array([0.0, 1.0, 0.0]) == pytest.approx(np.array([0.0, np.cos(eps), -np.sin(eps)]))


def test_apparent_longitude():
    sun = DE422Sun(eph=_FakeEphemeris())
    # Aberration and nutation move it by less than 0.01 degrees
    assert sun.lon_deg(aa.J2000_TT) == pytest.approx(180.0, abs=0.02)
    with pytest.raises(ValueError):
        sun.lon_deg(0.0)


def test_solve_solstice():
    assert solve_solstice_near(_LinearSun(), 101.3) == pytest.approx(100.0, abs=1e-8)
    with pytest.raises(ValueError):
        solve_solstice_near(_LinearSun(), 200.0)


def test_load_needs_the_extra(monkeypatch):
    monkeypatch.setitem(sys.modules, "de422", None)
    with pytest.raises(RuntimeError, match="lukashian\\[ephemeris\\]") as e:
        DE422Sun.load()
    # The extra brings in the de422 data package too
    assert str(e.value).rstrip().endswith("pip install \"lukashian[ephemeris]\"")


@pytest.mark.parametrize("jd", [2451900.05, DE422_FIRST_JD + 10.3, DE422_LAST_JD - 10.7])
def test_solve_solstice_terminates_at_real_dates(jd):
    # Float steps here are coarser than 1e-10 day
    t = solve_solstice_near(_LinearSun(jd), jd - 0.4)
    assert t == pytest.approx(jd, abs=1e-7)
