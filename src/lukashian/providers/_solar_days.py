"""
Shared true-solar-day generator for the standard providers.

Mean solar days are laid out from the calendar epoch with a linearly
growing length; each mean day end is shifted by the Equation of Time to the
matching true (apparent) solar day end. The first computed end only fixes
the EoT offset at the epoch, which is subtracted from every later end, so
that day 1 starts exactly at the calendar epoch.
"""
from __future__ import annotations

import logging
from typing import Callable

import numpy as np

from ..reference.astro_args import NS_PER_MS

logger = logging.getLogger(__name__)

CHUNK_DAYS = 1 << 18


def true_solar_day_ends(
    jde_ms_at_epoch: int,
    final_epoch_ms: int,
    *,
    day_length_ns: float,
    daily_increase_ns: float,
    eot_ms: Callable[[np.ndarray], np.ndarray],
    chunk: int = CHUNK_DAYS,
) -> np.ndarray:
    """
    Epoch-millisecond ends of true solar days, up to and including the first
    one at or after final_epoch_ms.

    The mean day end is accumulated in nanoseconds as a float, one day at a
    time and in order (np.cumsum), and truncated to JDE milliseconds before
    the EoT (in ms, positive when apparent time runs ahead) is subtracted.
    """
    parts = []
    eot_offset_ms = None
    next_mean_ns = float(jde_ms_at_epoch) * NS_PER_MS
    k0 = 0

    while True:
        k = np.arange(k0, k0 + chunk, dtype=np.float64)
        lengths = day_length_ns + daily_increase_ns * k
        acc = np.cumsum(np.concatenate(([next_mean_ns], lengths)))
        mean_ns, next_mean_ns = acc[:-1], float(acc[-1])

        mean_ms = np.trunc(mean_ns / NS_PER_MS).astype(np.int64)
        true_ms = mean_ms - eot_ms(mean_ms)

        if eot_offset_ms is None:
            eot_offset_ms = int(true_ms[0]) - jde_ms_at_epoch
            logger.debug("EoT offset at epoch: %d ms", eot_offset_ms)
            true_ms = true_ms[1:]
        ends = (true_ms - jde_ms_at_epoch) - eot_offset_ms

        done = np.flatnonzero(ends >= final_epoch_ms)
        if done.size:
            parts.append(ends[: int(done[0]) + 1])
            break
        parts.append(ends)
        k0 += chunk

    out = np.concatenate(parts)
    logger.debug("Generated %d true solar days, last end %d", out.size, int(out[-1]))
    return out
