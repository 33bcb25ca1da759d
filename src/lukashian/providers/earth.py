"""
Standard Earth calendar: tropical years from southern solstice to southern
solstice and true (apparent) solar days, measured in Terrestrial Time.

Year numbers run about 3900 ahead of Gregorian years. The calendar epoch is
the southern solstice that ends Lukashian year 0, and the turn of every day
happens at the rotation angle the Earth had at that instant.
"""
from __future__ import annotations

import logging

import numpy as np

from ..reference import earth_eot, solstice
from ._solar_days import true_solar_day_ends

logger = logging.getLogger(__name__)


class StandardEarthProvider:
    number_of_years = 7000

    # Derived once with an offset of 0 and no leap seconds, by pinning the last
    # instant of year 5870 to the southern solstice 1970-12-22T06:35:43Z. This
    # also absorbs the difference between TAI and TT.
    UNIX_EPOCH_OFFSET_MS = 185_208_761_225_352

    # Mean solar day: 86 400.002 s around Lukashian year 5900 (Gregorian 2000),
    # lengthening by 1.7 ms per century.
    CENTURIAL_INCREASE_NS = 1_700_000
    DAILY_INCREASE_NS = CENTURIAL_INCREASE_NS / (100 * 365.25)
    MEAN_SOLAR_DAY_AT_5900_NS = 86_400_002_000_000
    MEAN_SOLAR_DAY_AT_EPOCH_NS = MEAN_SOLAR_DAY_AT_5900_NS - CENTURIAL_INCREASE_NS * 59

    def load_unix_epoch_offset_ms(self) -> int:
        return self.UNIX_EPOCH_OFFSET_MS

    def jde_ms_at_end_of_years(self) -> np.ndarray:
        """Solstice JDE milliseconds for years 0 .. number_of_years."""
        return solstice.southern_solstice_jde_ms(np.arange(0, self.number_of_years + 1))

    def load_year_ends_ms(self) -> np.ndarray:
        jde_ms = self.jde_ms_at_end_of_years()
        return jde_ms[1:] - jde_ms[0]

    def load_day_ends_ms(self, year_ends_ms: np.ndarray) -> np.ndarray:
        jde_ms_at_epoch = int(solstice.southern_solstice_jde_ms(0))
        logger.info("Generating Earth days up to epoch ms %d", int(year_ends_ms[-1]))
        return true_solar_day_ends(
            jde_ms_at_epoch,
            int(year_ends_ms[-1]),
            day_length_ns=float(self.MEAN_SOLAR_DAY_AT_EPOCH_NS),
            daily_increase_ns=self.DAILY_INCREASE_NS,
            eot_ms=earth_eot.equation_of_time_ms,
        )
