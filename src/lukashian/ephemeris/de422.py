#ephemeris/de422.py
from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from ..reference import astro_args as aa
from ..reference.earth_eot import nutation_deg

DE422_FIRST_JD = 625648.5
DE422_LAST_JD = 2816816.5

AU_KM = 149_597_870.7
ABERRATION_ARCSEC = 20.4898

# Ecliptic longitude of the Sun at the December solstice
SOLSTICE_LON_DEG = 270.0


def wrap180(deg: float) -> float:
    return (deg + 180.0) % 360.0 - 180.0


@dataclass
class DE422Sun:
    """
    Geocentric apparent longitude of the Sun on the ecliptic of date, from DE422.

    Requires optional deps:
      pip install "lukashian[ephemeris]"
    """
    eph: object
    emrat: float = 81.30056907419062

    @classmethod
    def load(cls) -> "DE422Sun":
        try:
            import de422  # type: ignore
            from jplephem import Ephemeris  # type: ignore
        except ImportError as e:
            raise RuntimeError(
                "DE422 ephemeris not available. Install extras:\n"
                "  pip install \"lukashian[ephemeris]\""
            ) from e
        return cls(eph=Ephemeris(de422))

    def lon_deg(self, jd_tt: float) -> float:
        """
        Sun's apparent longitude (degrees, [0, 360)) at TT Julian day jd_tt:
        geometric longitude of date, less aberration, plus nutation.
        """
        if not (DE422_FIRST_JD < jd_tt < DE422_LAST_JD):
            raise ValueError(f"JD {jd_tt} is outside DE422 [{DE422_FIRST_JD}, {DE422_LAST_JD}]")

        r_emb = np.asarray(self.eph.compute("earthmoon", jd_tt)[:3])
        r_em = np.asarray(self.eph.compute("moon", jd_tt)[:3])  # geocentric moon
        r_sun = np.asarray(self.eph.compute("sun", jd_tt)[:3])  # barycentric sun

        r_earth = r_emb - r_em / (self.emrat + 1.0)
        T = aa.T_centuries(jd_tt - aa.J2000_TT)
        v = aa.matrix_eq_j2000_to_ecl_date(T) @ (r_sun - r_earth)

        lon = math.degrees(math.atan2(v[1], v[0]))
        d_psi, _ = nutation_deg(T, lon)
        aberration = aa.arcsec_to_deg(ABERRATION_ARCSEC) * AU_KM / float(np.linalg.norm(v))
        return (lon - aberration + float(d_psi)) % 360.0


def solve_solstice_near(sun: DE422Sun, jd_guess: float, halfwidth_days: float = 2.0) -> float:
    """
    TT Julian day at which the Sun's longitude is 270 degrees, bisected
    inside jd_guess +/- halfwidth_days to about a millisecond.
    """
    def f(t: float) -> float:
        return wrap180(sun.lon_deg(t) - SOLSTICE_LON_DEG)

    a, b = jd_guess - halfwidth_days, jd_guess + halfwidth_days
    fa, fb = f(a), f(b)
    if fa * fb > 0:
        raise ValueError(f"No solstice within {halfwidth_days} days of JD {jd_guess}")

    for _ in range(140):
        m = 0.5 * (a + b)
        fm = f(m)
        if fa * fm <= 0:
            b = m
        else:
            a, fa = m, fm
        if (b - a) < 1e-8:
            break
    return 0.5 * (a + b)
