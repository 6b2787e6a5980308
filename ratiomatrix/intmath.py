"""Integer helpers used to normalise and combine :class:`~ratiomatrix.Rational` values."""
from __future__ import annotations

import numbers

from .errors import DivideByZero


def _ensure_int(value: numbers.Integral, *, name: str) -> int:
    if isinstance(value, numbers.Integral):
        return int(value)
    raise TypeError(f"{name} must be an integer, got {type(value)!r}")


def mod(a: int, b: int) -> int:
    """Return ``a`` modulo ``b`` with the sign of ``b``.

    The result lies in ``[0, b)`` for positive ``b`` and in ``(b, 0]`` for
    negative ``b``.
    """
    a = _ensure_int(a, name="a")
    b = _ensure_int(b, name="b")
    if b == 0:
        raise DivideByZero("modulo by zero")
    return ((a % b) + b) % b


def gcd(a: int, b: int) -> int:
    """Greatest common divisor of ``a`` and ``b``, always non-negative.

    ``gcd(0, 0)`` is ``0``.
    """
    a = _ensure_int(a, name="a")
    b = _ensure_int(b, name="b")
    while b != 0:
        a, b = b, mod(a, b)
    return abs(a)


def lcm(a: int, b: int) -> int:
    """Least common multiple of ``a`` and ``b``, always non-negative."""
    divisor = gcd(a, b)
    if divisor == 0:
        raise DivideByZero("lcm is undefined when both arguments are zero")
    return abs(int(a) * int(b)) // divisor


__all__ = ["gcd", "lcm", "mod"]
