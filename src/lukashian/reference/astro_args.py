from __future__ import annotations

import numpy as np


# ------------------------------------------------------------
# Units & helpers
# ------------------------------------------------------------

DAY_MS = 86_400_000
NS_PER_MS = 1_000_000

def wrap_deg(x_deg):
    """Wrap degrees to [0,360). Works on floats and numpy arrays."""
    y = np.fmod(x_deg, 360.0)
    return np.where(y < 0, y + 360.0, y)

def arcsec_to_deg(arcsec):
    return arcsec / 3600.0

def sin_deg(x_deg):
    return np.sin(np.radians(x_deg))

def cos_deg(x_deg):
    return np.cos(np.radians(x_deg))

# ------------------------------------------------------------
# Time variables (TT)
# ------------------------------------------------------------

J2000_TT = 2451545.0  # JD(TT) at J2000.0
MJD_OFFSET = 2400000.5  # JD = MJD + 2400000.5
UNIX_EPOCH_MJD = 40587


def jde_to_ms(jde: float) -> int:
    """
    Julian Ephemeris Date to milliseconds since JDE 0, truncated. Multiplied
    through hours, seconds and milliseconds in turn, which fixes the float
    rounding of the published year ends.
    """
    return int(jde * 24 * 3600 * 1000)


def days_since_j2000(jde_ms):
    """Days since J2000.0 for JDE milliseconds (scalar or array)."""
    return np.asarray(jde_ms, dtype=np.float64) / DAY_MS - J2000_TT


def T_centuries(days):
    """Julian centuries from J2000.0 in TT."""
    return days / 36525.0


# ------------------------------------------------------------
# Frames (used to read JPL ephemerides on the ecliptic of date)
# ------------------------------------------------------------

def mean_obliquity_deg(T):
    """IAU 2006 mean obliquity of the ecliptic (degrees) for Julian centuries T."""
    eps_arcsec = (
        84381.406
        - 46.836769 * T
        - 0.0001831 * T**2
        + 0.00200340 * T**3
        - 0.000000576 * T**4
        - 0.0000000434 * T**5
    )
    return arcsec_to_deg(eps_arcsec)


def _r_x(a):
    c, s = np.cos(a), np.sin(a)
    return np.array([[1.0, 0.0, 0.0], [0.0, c, s], [0.0, -s, c]])


def _r_y(a):
    c, s = np.cos(a), np.sin(a)
    return np.array([[c, 0.0, -s], [0.0, 1.0, 0.0], [s, 0.0, c]])


def _r_z(a):
    c, s = np.cos(a), np.sin(a)
    return np.array([[c, s, 0.0], [-s, c, 0.0], [0.0, 0.0, 1.0]])


def matrix_eq_j2000_to_ecl_date(T: float) -> np.ndarray:
    """
    3x3 rotation from the equatorial J2000 frame (ICRF) to the mean ecliptic
    of date: IAU 1976 precession, then the obliquity of date.
    """
    zeta = np.radians(arcsec_to_deg(2306.2181 * T + 0.30188 * T**2 + 0.017998 * T**3))
    z = np.radians(arcsec_to_deg(2306.2181 * T + 1.09468 * T**2 + 0.018203 * T**3))
    theta = np.radians(arcsec_to_deg(2004.3109 * T - 0.42665 * T**2 - 0.041833 * T**3))

    precession = _r_z(-z) @ _r_y(theta) @ _r_z(-zeta)
    return _r_x(np.radians(mean_obliquity_deg(T))) @ precession
