"""
Standard Mars calendar: tropical Mars years from southern solstice to
southern solstice and true solar Mars days (sols).

Solstices come from the table of Allison & McEwen (2000), which lists every
Martian southern solstice between Gregorian 1874 and 2127. The epoch is the
solstice of MJD 32302.219 (Gregorian 1947), early enough for all of human
history on Mars; Mars Pathfinder landed (1997-07-04 16:56:55 UTC) in year 27.
"""
from __future__ import annotations

import logging
from fractions import Fraction

import numpy as np

from ..reference import astro_args as aa
from ..reference import mars24
from ._solar_days import true_solar_day_ends

logger = logging.getLogger(__name__)

# Modified Julian Dates (TT) of Martian southern solstices, Gregorian 1874/75 .. 2126/27
MARTIAN_SOUTHERN_SOLSTICE_MJDS = (
    6197.109, 6884.078, 7571.060, 8258.049, 8944.979, 9631.969, 10318.974, 11005.929,
    11692.879, 12379.887, 13066.853, 13753.824, 14440.832, 15127.803, 15814.749, 16501.737,
    17188.701, 17875.653, 18562.688, 19249.687, 19936.629, 20623.597, 21310.583, 21997.519,
    22684.513, 23371.515, 24058.485, 24745.458, 25432.453, 26119.388, 26806.362, 27493.375,
    28180.343, 28867.287, 29554.288, 30241.272, 30928.229, 31615.237, 32302.219, 32989.166,
    33676.143, 34363.122, 35050.060, 35737.080, 36424.091, 37111.039, 37797.994, 38484.989,
    39171.928, 39858.909, 40545.917, 41232.895, 41919.863, 42606.860, 43293.810, 43980.768,
    44667.783, 45354.763, 46041.703, 46728.688, 47415.685, 48102.632, 48789.632, 49476.625,
    50163.575, 50850.540, 51537.531, 52224.466, 52911.471, 53598.497, 54285.458, 54972.406,
    55659.403, 56346.353, 57033.314, 57720.323, 58407.306, 59094.272, 59781.261, 60468.226,
    61155.167, 61842.176, 62529.169, 63216.112, 63903.083, 64590.096, 65277.045, 65964.037,
    66651.040, 67337.998, 68024.952, 68711.945, 69398.886, 70085.868, 70772.900, 71459.872,
    72146.812, 72833.799, 73520.764, 74207.710, 74894.717, 75581.712, 76268.684, 76955.667,
    77642.650, 78329.583, 79016.582, 79703.585, 80390.535, 81077.491, 81764.505, 82451.461,
    83138.435, 83825.440, 84512.406, 85199.352, 85886.342, 86573.299, 87260.264, 87947.300,
    88634.290, 89321.231, 90008.206, 90695.188, 91382.126, 92069.125, 92756.128, 93443.101,
    94130.072, 94817.062, 95503.994, 96190.974, 96877.984, 97564.947, 98251.894,
)


class StandardMarsProvider:
    EPOCH_SOLSTICE_INDEX = 38

    @property
    def number_of_years(self) -> int:
        return len(MARTIAN_SOUTHERN_SOLSTICE_MJDS) - (self.EPOCH_SOLSTICE_INDEX + 1)

    def jde_ms_at_end_of_year(self, year: int) -> int:
        mjd = MARTIAN_SOUTHERN_SOLSTICE_MJDS[self.EPOCH_SOLSTICE_INDEX + year]
        return aa.jde_to_ms(mjd + aa.MJD_OFFSET)

    def load_unix_epoch_offset_ms(self) -> int:
        """
        Milliseconds from the epoch solstice to the unix epoch, plus one for the
        first calendar millisecond. Computed from the decimal MJD so that float
        rounding cannot move it: 715 805 078 401 for the standard epoch.
        """
        mjd = Fraction(str(MARTIAN_SOUTHERN_SOLSTICE_MJDS[self.EPOCH_SOLSTICE_INDEX]))
        ms = (aa.UNIX_EPOCH_MJD - mjd) * aa.DAY_MS
        if ms.denominator != 1:
            raise ValueError(f"Solstice MJD {float(mjd)} is not on a whole millisecond")
        return int(ms) + 1

    def load_year_ends_ms(self) -> np.ndarray:
        start = self.jde_ms_at_end_of_year(0)
        return np.array(
            [self.jde_ms_at_end_of_year(y) - start for y in range(1, self.number_of_years + 1)],
            dtype=np.int64,
        )

    def load_day_ends_ms(self, year_ends_ms: np.ndarray) -> np.ndarray:
        logger.info("Generating Mars sols up to epoch ms %d", int(year_ends_ms[-1]))
        return true_solar_day_ends(
            self.jde_ms_at_end_of_year(0),
            int(year_ends_ms[-1]),
            day_length_ns=float(mars24.MEAN_SOL_MS * aa.NS_PER_MS),
            daily_increase_ns=0.0,
            eot_ms=mars24.equation_of_time_ms,
        )
