"""
Mars solar time after Allison & McEwen (2000) as adopted by the Mars24 sunclock.

Equation numbers follow the Mars24 algorithm page (B-1 .. C-1). Input time is
JDE (TT) in milliseconds, so the UTC to TT steps (A-1 .. A-5) do not apply.
"""
from __future__ import annotations

import numpy as np

from . import astro_args as aa
from ..core.errors import AlgorithmicInvariantError

# Mean solar day on Mars in Earth days
MEAN_SOL_DAYS = 1.02749125
MEAN_SOL_MS = 88_775_244  # MEAN_SOL_DAYS * 86 400 000

# B-3 perturbers: amplitude (deg), period (Julian years), phase (deg)
PBS_ALPHA = np.array([0.0071, 0.0057, 0.0039, 0.0037, 0.0021, 0.0020, 0.0018])
PBS_TAU = np.array([2.2353, 2.7543, 1.1177, 15.7866, 2.1354, 2.4694, 32.8493])
PBS_PHI = np.array([49.409, 168.173, 191.837, 21.736, 15.704, 95.528, 49.095])

# Mars EoT stays within about -51 .. +40 Mars-minutes
EOT_LIMIT_DEG = 15.0


def equation_of_centre_deg(dt):
    """B-1 .. B-4: returns (M, alpha_FMS, v - M) in degrees for days since J2000 (TT)."""
    dt = np.asarray(dt, dtype=np.float64)
    M = 19.3871 + 0.52402073 * dt
    alpha_fms = 270.3871 + 0.524038496 * dt

    pbs = np.zeros_like(dt)
    for a, tau, phi in zip(PBS_ALPHA, PBS_TAU, PBS_PHI):
        pbs = pbs + a * aa.cos_deg(0.985626 * dt / tau + phi)

    v_minus_m = (
        (10.691 + 3.0e-7 * dt) * aa.sin_deg(M)
        + 0.623 * aa.sin_deg(2 * M)
        + 0.050 * aa.sin_deg(3 * M)
        + 0.005 * aa.sin_deg(4 * M)
        + 0.0005 * aa.sin_deg(5 * M)
        + pbs
    )
    return M, alpha_fms, v_minus_m


def solar_longitude_deg(jde_ms):
    """B-5: aerocentric solar longitude Ls, wrapped to [0, 360)."""
    _, alpha_fms, v_minus_m = equation_of_centre_deg(aa.days_since_j2000(jde_ms))
    return aa.wrap_deg(alpha_fms + v_minus_m)


def equation_of_time_deg(jde_ms):
    """C-1: Equation of Time in degrees of Mars rotation."""
    _, alpha_fms, v_minus_m = equation_of_centre_deg(aa.days_since_j2000(jde_ms))
    Ls = alpha_fms + v_minus_m
    return (
        2.861 * aa.sin_deg(2 * Ls)
        - 0.071 * aa.sin_deg(4 * Ls)
        + 0.002 * aa.sin_deg(6 * Ls)
        - v_minus_m
    )


def equation_of_time_ms(jde_ms) -> np.ndarray:
    """
    Equation of Time in Earth milliseconds, truncated toward zero.

    One degree is 1/360 of a mean sol, so the Mars-hours of Mars24 (deg / 15)
    are scaled by the mean sol length rather than by an Earth hour.
    """
    eot_deg = equation_of_time_deg(jde_ms)
    bad = np.flatnonzero(np.abs(eot_deg) > EOT_LIMIT_DEG)
    if bad.size:
        i = int(bad[0])
        raise AlgorithmicInvariantError(
            f"Mars Equation of Time is {float(eot_deg[i])} degrees at JDE ms {int(np.asarray(jde_ms)[i])}"
        )
    return np.trunc(eot_deg / 360 * MEAN_SOL_MS).astype(np.int64)
