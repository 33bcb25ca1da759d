# reference/solstice.py

from __future__ import annotations

import numpy as np

from . import astro_args as aa

# Meeus, Astronomical Algorithms (2nd ed.), Table 27.C: periodic terms for the
# equinoxes and solstices. A in 1e-5 days, B in degrees, C in degrees per century.
A = np.array([485, 203, 199, 182, 156, 136, 77, 74, 70, 58, 52, 50, 45, 44, 29, 18, 17, 16, 14, 12, 12, 12, 9, 8], dtype=np.float64)
B = np.array([
    324.96, 337.23, 342.08, 27.85, 73.14, 171.52, 222.54, 296.72, 243.58, 119.81, 297.17, 21.02,
    247.54, 325.15, 60.93, 155.12, 288.79, 198.04, 199.76, 95.39, 287.11, 320.81, 227.73, 15.45,
])
C = np.array([
    1934.136, 32964.467, 20.186, 445267.112, 45036.886, 22518.443, 65928.934, 3034.906, 9037.513,
    33718.147, 150.678, 2281.226, 29929.562, 31555.956, 4443.417, 67555.328, 4562.452, 62894.029,
    31436.921, 14577.848, 31931.756, 34777.259, 1222.114, 16859.074,
])

# Lukashian years run about 3900 ahead of Gregorian years:
#
#   GY:  -2000  -1000     0   1000   2000   3000
#   LY:   1900   2900  3900   4900   5900   6900
GREGORIAN_OFFSET = 3900


def mean_southern_solstice_jde(lukashian_year):
    """
    (27.1) JDE0 of the mean December solstice for the given Lukashian year(s).

    Table 27.A covers Gregorian years before +1000, Table 27.B the years after.
    """
    year = np.asarray(lukashian_year, dtype=np.float64)

    y_a = (year - GREGORIAN_OFFSET) / 1000
    jde_a = (
        1721414.39987
        + 365242.88257 * y_a
        - 0.00769 * y_a * y_a
        - 0.00933 * y_a * y_a * y_a
        - 0.00006 * y_a * y_a * y_a * y_a
    )

    y_b = (year - (GREGORIAN_OFFSET + 2000)) / 1000
    jde_b = (
        2451900.05952
        + 365242.74049 * y_b
        - 0.06223 * y_b * y_b
        - 0.00823 * y_b * y_b * y_b
        + 0.00032 * y_b * y_b * y_b * y_b
    )

    return np.where(year < GREGORIAN_OFFSET + 1000, jde_a, jde_b)


def southern_solstice_jde(lukashian_year):
    """
    (27.2) Apparent December solstice JDE: the mean instant corrected by the
    24 periodic terms, scaled by the variation of the Sun's longitude speed.
    """
    jde0 = mean_southern_solstice_jde(lukashian_year)
    T = aa.T_centuries(jde0 - aa.J2000_TT)
    W = T * 35999.373 - 2.47
    dL = 0.0334 * aa.cos_deg(W) + 0.0007 * aa.cos_deg(2 * W) + 1

    S = np.zeros_like(jde0)
    for a, b, c in zip(A, B, C):
        S = S + a * aa.cos_deg(b + c * T)

    return jde0 + (0.00001 * S) / dL


def southern_solstice_jde_ms(lukashian_year) -> np.ndarray:
    """Solstice instants as JDE milliseconds, truncated toward zero (as aa.jde_to_ms)."""
    jde = southern_solstice_jde(lukashian_year)
    return np.trunc(jde * 24 * 3600 * 1000).astype(np.int64)
