"""Exception types raised by :mod:`ratiomatrix`.

Each error also derives from the closest builtin exception, so callers that
already guard against ``ValueError`` or ``ZeroDivisionError`` keep working.
"""


class RatioMatrixError(Exception):
    """Base class for all errors raised by this package."""


class InvalidDimension(RatioMatrixError, ValueError):
    """A negative row/column count or an array of the wrong rank was given."""


class SizeMismatch(RatioMatrixError, ValueError):
    """The number of supplied cells does not equal ``rows * columns``."""


class DivideByZero(RatioMatrixError, ZeroDivisionError):
    """A zero denominator, zero divisor or reciprocal of zero was requested."""


class ParseError(RatioMatrixError, ValueError):
    """Ratio, matrix or job text could not be parsed."""


class IndexOutOfRange(RatioMatrixError, IndexError):
    """A row, column, step or element index is outside the valid bounds."""


__all__ = [
    "RatioMatrixError",
    "InvalidDimension",
    "SizeMismatch",
    "DivideByZero",
    "ParseError",
    "IndexOutOfRange",
]
