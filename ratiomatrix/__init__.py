"""Exact rational matrices with logged elementary row operations."""

from .errors import (
    DivideByZero,
    IndexOutOfRange,
    InvalidDimension,
    ParseError,
    RatioMatrixError,
    SizeMismatch,
)
from .intmath import gcd, lcm, mod
from .matrix import Matrix
from .rational import Rational, as_rational_array, zeros, zeros_like
from .transformation import AddMultiple, ScaleRow, Swap, Transformation, describe
from .transformation_log import Step, TransformationLog
from .vector import Vector

__all__ = [
    "Rational",
    "as_rational_array",
    "zeros",
    "zeros_like",
    "Matrix",
    "Vector",
    "Swap",
    "AddMultiple",
    "ScaleRow",
    "Transformation",
    "describe",
    "Step",
    "TransformationLog",
    "gcd",
    "lcm",
    "mod",
    "RatioMatrixError",
    "InvalidDimension",
    "SizeMismatch",
    "DivideByZero",
    "ParseError",
    "IndexOutOfRange",
]
