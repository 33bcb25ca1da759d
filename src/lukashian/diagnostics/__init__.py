"""Diagnostics package.

- day_lengths: plots true solar day lengths over a range of years (matplotlib)
- validate_solstices: compares the Earth year ends with DE422 solstices (jplephem)
"""

__all__ = ["day_lengths", "validate_solstices"]
