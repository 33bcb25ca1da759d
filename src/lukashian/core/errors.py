class LukashianError(Exception):
    """Base error."""

class OutOfRangeError(LukashianError, ValueError):
    """Raised for values below 1, day numbers beyond a year, proportions outside [0, 1)."""

class UnsupportedError(LukashianError):
    """Raised when a year, day or millisecond lies beyond the loaded calendar data."""

class CrossCalendarError(LukashianError, ValueError):
    """Raised when two values of different calendars meet in one operation."""

class LukashianArithmeticError(LukashianError, ArithmeticError):
    """Raised when a checked 64-bit addition, subtraction or negation overflows."""

class ProviderError(LukashianError):
    """Raised when a data provider fails to deliver its data."""

class AlgorithmicInvariantError(LukashianError):
    """Raised when a generator produces a value its formulae cannot produce (e.g. EoT beyond 20 min)."""

class UnknownCalendarError(LukashianError, KeyError):
    """Raised when a calendar key is not registered."""
