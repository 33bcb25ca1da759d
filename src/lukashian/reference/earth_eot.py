# reference/earth_eot.py

from __future__ import annotations

import numpy as np

from . import astro_args as aa
from ..core.errors import AlgorithmicInvariantError

EOT_LIMIT_MINUTES = 20.0


def nutation_deg(TC, L0):
    """
    (22) Low-accuracy nutation in longitude and obliquity (degrees), from the
    Sun's mean longitude L0 and Julian centuries TC.
    """
    omega = 125.04452 - 1934.136261 * TC + 0.0020708 * TC**2 + TC**3 / 450000
    L_moon = 218.3165 + 481267.8813 * TC

    d_psi = aa.arcsec_to_deg(
        -17.20 * aa.sin_deg(omega)
        - 1.32 * aa.sin_deg(2 * L0)
        - 0.23 * aa.sin_deg(2 * L_moon)
        + 0.21 * aa.sin_deg(2 * omega)
    )
    d_eps = aa.arcsec_to_deg(
        9.20 * aa.cos_deg(omega)
        + 0.57 * aa.cos_deg(2 * L0)
        + 0.10 * aa.cos_deg(2 * L_moon)
        - 0.09 * aa.cos_deg(2 * omega)
    )
    return d_psi, d_eps


def equation_of_time_deg(jde_ms) -> np.ndarray:
    """
    (28.1) Equation of Time in degrees for JDE milliseconds (array input).

    Chain (Meeus chapter numbers in brackets):
      L0     Sun's mean longitude                      (28.2)
      Omega  longitude of the Moon's ascending node    (22)
      L'     Moon's mean longitude                     (22)
      dPsi, dEps  nutation in longitude and obliquity  (22)
      eps0   mean obliquity, Laskar polynomial         (22.3)
      M, C   Sun's mean anomaly, equation of centre    (25.3, 25)
      gamma  apparent longitude                        (25)
      alpha  apparent right ascension                  (25.6)
    """
    days = aa.days_since_j2000(jde_ms)
    TC = aa.T_centuries(days)  # Julian centuries
    TM = TC / 10  # Julian millennia
    U = TM / 10  # units of 10 000 Julian years

    L0 = aa.wrap_deg(
        280.4664567
        + 360007.6982779 * TM
        + 0.03032028 * TM**2
        + TM**3 / 49931
        - TM**4 / 15300
        - TM**5 / 2000000
    )

    omega = 125.04452 - 1934.136261 * TC + 0.0020708 * TC**2 + TC**3 / 450000
    d_psi, d_eps = nutation_deg(TC, L0)

    # 23 deg 26' 21.448"
    eps0 = aa.arcsec_to_deg(
        84381.448
        - 4680.93 * U
        - 1.55 * U**2
        + 1999.25 * U**3
        - 51.38 * U**4
        - 249.67 * U**5
        - 39.05 * U**6
        + 7.12 * U**7
        + 27.87 * U**8
        + 5.79 * U**9
        + 2.45 * U**10
    )
    eps = eps0 + d_eps

    M = 357.52911 + 35999.05029 * TC - 0.0001537 * TC**2
    C = (
        (1.914602 - 0.004817 * TC - 0.000014 * TC**2) * aa.sin_deg(M)
        + (0.019993 - 0.000101 * TC) * aa.sin_deg(2 * M)
        + 0.000289 * aa.sin_deg(3 * M)
    )

    true_longitude = L0 + C
    gamma = true_longitude - 0.00569 - 0.00478 * aa.sin_deg(omega)

    # The 25.8 obliquity correction is already part of eps via d_eps
    alpha = aa.wrap_deg(np.degrees(np.arctan2(aa.cos_deg(eps) * aa.sin_deg(gamma), aa.cos_deg(gamma))))

    return L0 - 0.0057183 - alpha + d_psi * aa.cos_deg(eps)


def equation_of_time_ms(jde_ms) -> np.ndarray:
    """
    Equation of Time in milliseconds, normalised into +/- 20 minutes and
    truncated toward zero. Positive when apparent solar time runs ahead of mean.
    """
    eot_min = equation_of_time_deg(jde_ms) * 1440 / 360
    eot_min = np.where(
        eot_min > EOT_LIMIT_MINUTES,
        eot_min - 1440,
        np.where(eot_min < -EOT_LIMIT_MINUTES, eot_min + 1440, eot_min),
    )

    bad = np.flatnonzero(np.abs(eot_min) > EOT_LIMIT_MINUTES)
    if bad.size:
        i = int(bad[0])
        raise AlgorithmicInvariantError(
            f"Equation of Time is {float(eot_min[i])} minutes at JDE ms {int(np.ravel(jde_ms)[i])}"
        )

    return np.trunc(eot_min * 60 * 1000).astype(np.int64)
