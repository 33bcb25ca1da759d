"""JPL ephemeris access (optional extra)."""
