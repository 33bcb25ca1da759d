"""64-bit checked integer arithmetic.

Python integers never overflow, so the calendar's millisecond, day and year
arithmetic is bounded explicitly to the signed 64-bit range.
"""
from __future__ import annotations

from .errors import LukashianArithmeticError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def _check(v: int, op: str) -> int:
    if v < INT64_MIN or v > INT64_MAX:
        raise LukashianArithmeticError(f"long overflow in {op}")
    return v


def add_exact(a: int, b: int) -> int:
    return _check(a + b, "add")


def subtract_exact(a: int, b: int) -> int:
    return _check(a - b, "subtract")


def multiply_exact(a: int, b: int) -> int:
    return _check(a * b, "multiply")


def negate_exact(a: int) -> int:
    return _check(-a, "negate")
