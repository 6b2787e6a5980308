"""Exact rational numbers with NumPy interoperability.

Arithmetic never simplifies on its own: sums and differences are taken over
the least common multiple of the denominators, products and quotients keep
the raw numerator/denominator products. Call :meth:`Rational.simplified` when
a canonical form is wanted.
"""
from __future__ import annotations

import numbers
import operator
import re
from fractions import Fraction
from typing import Any, Iterable, Tuple, Union

import numpy as np

from .errors import DivideByZero, InvalidDimension, ParseError
from .intmath import gcd, lcm

NumberLike = Union["Rational", Fraction, numbers.Integral]

_FLOAT_PRESENTATIONS = frozenset("eEfFgGn%")
_INTEGER = re.compile(r"[+-]?[0-9]+", re.ASCII)


def _ensure_int(value: Any, *, name: str) -> int:
    """Convert *value* to ``int`` when it represents an integer."""
    if isinstance(value, numbers.Integral):
        return int(value)
    raise TypeError(f"{name} must be an integer, got {type(value)!r}")


class Rational:
    """Immutable numerator/denominator pair.

    Two rationals compare equal when they denote the same value
    (``Rational(6, 3) == Rational(2)``) even though their stored parts differ.
    """

    __slots__ = ("_numerator", "_denominator")
    __array_priority__ = 1000.0  # Prefer Rational semantics in NumPy expressions.

    ZERO: "Rational"
    ONE: "Rational"
    TWO: "Rational"
    THREE: "Rational"
    HALF: "Rational"

    def __init__(self, numerator: numbers.Integral = 0, denominator: numbers.Integral = 1) -> None:
        num = _ensure_int(numerator, name="numerator")
        den = _ensure_int(denominator, name="denominator")
        if den == 0:
            raise DivideByZero("denominator must be non-zero")
        self._numerator = num
        self._denominator = den

    # ------------------------------------------------------------------
    # Constructors
    @classmethod
    def parse(cls, text: str) -> "Rational":
        """Parse ``"<int>"`` or ``"<int>/<int>"``; whitespace around parts is ignored."""
        parts = [part.strip() for part in text.split("/")]
        if len(parts) > 2:
            raise ParseError(f"too many '/' in ratio {text!r}")
        for part in parts:
            if not _INTEGER.fullmatch(part):
                raise ParseError(f"invalid ratio {text!r}")
        denominator = int(parts[1]) if len(parts) == 2 else 1
        return cls(int(parts[0]), denominator)

    @classmethod
    def coerce(cls, value: NumberLike) -> "Rational":
        """Coerce an exact numeric value into :class:`Rational`."""
        if isinstance(value, Rational):
            return value
        if isinstance(value, Fraction):
            return cls(value.numerator, value.denominator)
        if isinstance(value, np.generic):
            return cls.coerce(value.item())
        if isinstance(value, numbers.Integral):
            return cls(int(value), 1)
        raise TypeError(f"Cannot convert {type(value)!r} to Rational")

    # ------------------------------------------------------------------
    # Properties and helpers
    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    def as_fraction(self) -> Fraction:
        """Return a :class:`Fraction` with the same value."""
        return Fraction(self._numerator, self._denominator)

    def simplified(self) -> "Rational":
        """Return the lowest-terms form, with the sign carried by the numerator."""
        divisor = gcd(self._numerator, self._denominator)
        num = self._numerator // divisor
        den = self._denominator // divisor
        if den < 0:
            num, den = -num, -den
        return Rational(num, den)

    def reciprocal(self) -> "Rational":
        if self._numerator == 0:
            raise DivideByZero("zero has no reciprocal")
        return Rational(self._denominator, self._numerator)

    # ------------------------------------------------------------------
    # Numeric protocol
    def __float__(self) -> float:
        return self._numerator / self._denominator

    def __int__(self) -> int:
        return int(self.as_fraction())

    def __bool__(self) -> bool:
        return self._numerator != 0

    # ------------------------------------------------------------------
    # Representation
    def __repr__(self) -> str:
        return f"Rational({self._numerator}, {self._denominator})"

    def __str__(self) -> str:
        if self._numerator == 0:
            return "0"
        if self._denominator == 1:
            return str(self._numerator)
        return f"{self._numerator}/{self._denominator}"

    def __format__(self, format_spec: str) -> str:
        if format_spec in ("", "r", "R"):
            return str(self)
        if format_spec[-1] in _FLOAT_PRESENTATIONS:
            return format(float(self), format_spec)
        return format(str(self), format_spec)

    # ------------------------------------------------------------------
    # Internal helpers
    def _coerce_scalar(self, value: Any) -> "Rational":
        return Rational.coerce(value)

    def _signed_parts(self) -> Tuple[int, int]:
        if self._denominator < 0:
            return -self._numerator, -self._denominator
        return self._numerator, self._denominator

    def _binary_operation(self, other: Any, op):
        if isinstance(other, np.ndarray):
            vectorised = np.vectorize(
                lambda x: op(self, self._coerce_scalar(x)),
                otypes=[object],
            )
            return vectorised(other)
        try:
            other_rat = self._coerce_scalar(other)
        except TypeError:
            return NotImplemented
        return op(self, other_rat)

    def _reflected_operation(self, other: Any, op):
        if isinstance(other, np.ndarray):
            vectorised = np.vectorize(
                lambda x: op(self._coerce_scalar(x), self),
                otypes=[object],
            )
            return vectorised(other)
        try:
            other_rat = self._coerce_scalar(other)
        except TypeError:
            return NotImplemented
        return op(other_rat, self)

    def _coerce_power(self, value: Any) -> int:
        if isinstance(value, Rational):
            if value.simplified().denominator != 1:
                raise ValueError("Exponent must be an integer")
            return value.simplified().numerator
        if isinstance(value, np.generic):
            return self._coerce_power(value.item())
        if isinstance(value, numbers.Integral):
            return int(value)
        raise TypeError("Unsupported exponent type")

    # ------------------------------------------------------------------
    # Arithmetic operators
    def __add__(self, other: Any) -> Any:
        if isinstance(other, numbers.Integral):
            return Rational(self._numerator + int(other) * self._denominator, self._denominator)
        return self._binary_operation(other, _add)

    def __radd__(self, other: Any) -> Any:
        return self.__add__(other)

    def __sub__(self, other: Any) -> Any:
        if isinstance(other, numbers.Integral):
            return Rational(self._numerator - int(other) * self._denominator, self._denominator)
        return self._binary_operation(other, _sub)

    def __rsub__(self, other: Any) -> Any:
        if isinstance(other, numbers.Integral):
            return Rational(int(other) * self._denominator - self._numerator, self._denominator)
        return self._reflected_operation(other, _sub)

    def __mul__(self, other: Any) -> Any:
        if isinstance(other, numbers.Integral):
            return Rational(self._numerator * int(other), self._denominator)
        return self._binary_operation(other, _mul)

    def __rmul__(self, other: Any) -> Any:
        return self.__mul__(other)

    def __truediv__(self, other: Any) -> Any:
        if isinstance(other, numbers.Integral):
            if other == 0:
                raise DivideByZero("division by zero")
            return Rational(self._numerator, self._denominator * int(other))
        return self._binary_operation(other, _truediv)

    def __rtruediv__(self, other: Any) -> Any:
        return self._reflected_operation(other, _truediv)

    def __pow__(self, exponent: Any) -> Any:
        if isinstance(exponent, np.ndarray):
            vectorised = np.vectorize(lambda x: self.__pow__(x), otypes=[object])
            return vectorised(exponent)
        power = self._coerce_power(exponent)
        if power >= 0:
            return Rational(self._numerator ** power, self._denominator ** power)
        base = self.reciprocal()
        positive = -power
        return Rational(base._numerator ** positive, base._denominator ** positive)

    def __neg__(self) -> "Rational":
        return Rational(-self._numerator, self._denominator)

    def __pos__(self) -> "Rational":
        return self

    def __abs__(self) -> "Rational":
        return Rational(abs(self._numerator), abs(self._denominator))

    # ------------------------------------------------------------------
    # Comparisons
    def _compare(self, other: Any, op) -> bool:
        try:
            other_rat = self._coerce_scalar(other)
        except TypeError:
            return NotImplemented
        num_a, den_a = self._signed_parts()
        num_b, den_b = other_rat._signed_parts()
        return op(num_a * den_b, num_b * den_a)

    def __eq__(self, other: Any) -> bool:
        return self._compare(other, operator.eq)

    def __lt__(self, other: Any) -> bool:
        return self._compare(other, operator.lt)

    def __le__(self, other: Any) -> bool:
        return self._compare(other, operator.le)

    def __gt__(self, other: Any) -> bool:
        return self._compare(other, operator.gt)

    def __ge__(self, other: Any) -> bool:
        return self._compare(other, operator.ge)

    def __hash__(self) -> int:
        # Fraction hashes agree with int hashes, so Rational(4, 2) and 2 collide.
        return hash(self.as_fraction())

    # ------------------------------------------------------------------
    # NumPy interoperability
    _UFUNC_DISPATCH = {
        np.add: operator.add,
        np.subtract: operator.sub,
        np.multiply: operator.mul,
        np.divide: operator.truediv,
        np.true_divide: operator.truediv,
        np.negative: operator.neg,
        np.positive: operator.pos,
        np.absolute: abs,
        np.power: operator.pow,
    }

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        if method != "__call__":
            return NotImplemented
        if kwargs.get("out") is not None:
            raise NotImplementedError("`out` argument is not supported for Rational ufuncs")
        op = self._UFUNC_DISPATCH.get(ufunc)
        if op is None:
            return NotImplemented

        coerced = []
        has_array = False
        for value in inputs:
            if isinstance(value, Rational):
                coerced.append(value)
            elif isinstance(value, np.ndarray):
                vectorised = np.vectorize(self._coerce_scalar, otypes=[object])
                coerced.append(vectorised(value))
                has_array = True
            else:
                coerced.append(self._coerce_scalar(value))
        if has_array:
            vectorised = np.vectorize(lambda *args: op(*args), otypes=[object])
            return vectorised(*coerced)
        return op(*coerced)


def _add(a: Rational, b: Rational) -> Rational:
    common = lcm(a.denominator, b.denominator)
    return Rational(
        a.numerator * (common // a.denominator) + b.numerator * (common // b.denominator),
        common,
    )


def _sub(a: Rational, b: Rational) -> Rational:
    common = lcm(a.denominator, b.denominator)
    return Rational(
        a.numerator * (common // a.denominator) - b.numerator * (common // b.denominator),
        common,
    )


def _mul(a: Rational, b: Rational) -> Rational:
    return Rational(a.numerator * b.numerator, a.denominator * b.denominator)


def _truediv(a: Rational, b: Rational) -> Rational:
    return _mul(a, b.reciprocal())


Rational.ZERO = Rational(0)
Rational.ONE = Rational(1)
Rational.TWO = Rational(2)
Rational.THREE = Rational(3)
Rational.HALF = Rational(1, 2)


def as_rational_array(values: Iterable[NumberLike], *, copy: bool = True) -> np.ndarray:
    """Return a ``numpy.ndarray`` of :class:`Rational` values.

    ``values`` can be any iterable of exact numeric entries or an existing
    NumPy array, whose shape is preserved. When ``copy`` is ``False`` and
    ``values`` is already an object array holding only :class:`Rational`
    entries, that array is returned as is.
    """
    if isinstance(values, np.ndarray):
        if not copy and values.dtype == object and all(isinstance(item, Rational) for item in values.flat):
            return values
        coerced = np.empty(values.shape, dtype=object)
        for index, item in np.ndenumerate(values):
            coerced[index] = Rational.coerce(item)
        return coerced

    items = [Rational.coerce(item) for item in values]
    array = np.empty(len(items), dtype=object)
    for index, item in enumerate(items):
        array[index] = item
    return array


def zeros(shape: Union[int, Tuple[int, ...]]) -> np.ndarray:
    """Return an object array of the given shape filled with zero rationals."""
    shape = (shape,) if isinstance(shape, numbers.Integral) else tuple(shape)
    if any(size < 0 for size in shape):
        raise InvalidDimension(f"shape must be non-negative, got {shape}")
    array = np.empty(shape, dtype=object)
    for index in np.ndindex(*shape):
        array[index] = Rational.ZERO
    return array


def zeros_like(values: Any) -> np.ndarray:
    """Return a zero-filled array that matches the shape of ``values``."""
    return zeros(np.shape(values))


__all__ = ["Rational", "as_rational_array", "zeros", "zeros_like"]
