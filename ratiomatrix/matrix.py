"""Immutable matrices of :class:`Rational` values with elementary row operations.

Every operation that looks like it changes a matrix copies the cell store,
mutates the copy through one of the private ``_..._in_place`` routines and
wraps it in a new :class:`Matrix`; the receiver is never altered.
"""
from __future__ import annotations

import logging
import operator
import re
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from .errors import IndexOutOfRange, InvalidDimension, SizeMismatch
from .rational import NumberLike, Rational, as_rational_array, zeros
from .transformation import AddMultiple, ScaleRow, Swap, Transformation
from .transformation_log import TransformationLog
from .vector import Vector

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


class Matrix:
    """Row-major ``rows x columns`` grid of rationals.

    Build instances with :meth:`of`, :meth:`from_rows`, :meth:`identity`,
    :meth:`parse` or :meth:`from_array` rather than the constructor, which
    takes ownership of an already validated object array.
    """

    __slots__ = ("_rows", "_columns", "_cells")

    def __init__(self, rows: int, columns: int, cells: np.ndarray) -> None:
        self._rows = rows
        self._columns = columns
        self._cells = cells

    # ------------------------------------------------------------------
    # Constructors
    @classmethod
    def of(cls, rows: int, columns: int, *cells: NumberLike) -> "Matrix":
        """Build a matrix from ``rows * columns`` cells given in row-major order."""
        if rows < 0 or columns < 0:
            raise InvalidDimension(f"Invalid matrix size {rows} x {columns}")
        if len(cells) != rows * columns:
            raise SizeMismatch(
                f"Got {len(cells)} cells, expected rows * columns ({rows * columns})"
            )
        return cls(rows, columns, as_rational_array(cells).reshape(rows, columns))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[NumberLike]]) -> "Matrix":
        rows = [list(row) for row in rows]
        columns = len(rows[0]) if rows else 0
        for index, row in enumerate(rows):
            if len(row) != columns:
                raise SizeMismatch(f"Row {index} has {len(row)} cells, expected {columns}")
        return cls.of(len(rows), columns, *(cell for row in rows for cell in row))

    @classmethod
    def identity(cls, dimensions: int) -> "Matrix":
        if dimensions < 0:
            raise InvalidDimension(f"Invalid dimensions {dimensions!r}")
        store = zeros((dimensions, dimensions))
        for i in range(0, dimensions * dimensions, dimensions + 1):
            store.flat[i] = Rational.ONE
        return cls(dimensions, dimensions, store)

    @classmethod
    def parse(cls, rows: int, columns: int, text: str) -> "Matrix":
        """Parse whitespace separated ratios (``<int>`` or ``<int>/<int>``) in row-major order."""
        tokens = [token for token in _WHITESPACE.split(text) if token]
        return cls.of(rows, columns, *(Rational.parse(token) for token in tokens))

    @classmethod
    def from_array(cls, array: Iterable) -> "Matrix":
        """Build a matrix from a two-dimensional array of exact values."""
        array = np.asarray(array, dtype=object)
        if array.ndim != 2:
            raise InvalidDimension(f"Expected a 2-D array, got {array.ndim} dimension(s)")
        rows, columns = array.shape
        return cls(rows, columns, as_rational_array(array))

    # ------------------------------------------------------------------
    # Accessors
    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def shape(self) -> Tuple[int, int]:
        return self._rows, self._columns

    @property
    def cells(self) -> Tuple[Rational, ...]:
        """Cells in row-major order."""
        return tuple(self._cells.flat)

    def to_array(self) -> np.ndarray:
        """Return a copy of the cells as a 2-D object array."""
        return self._cells.copy()

    def get(self, row: int, column: int) -> Rational:
        row = self._check_row(row)
        column = operator.index(column)
        if not 0 <= column < self._columns:
            raise IndexOutOfRange(f"column {column} outside matrix with {self._columns} columns")
        return self._cells[row, column]

    def __getitem__(self, key: Tuple[int, int]) -> Rational:
        row, column = key
        return self.get(row, column)

    def row(self, row: int) -> Vector:
        row = self._check_row(row)
        return Vector(tuple(self._cells[row]))

    def column(self, column: int) -> Vector:
        column = operator.index(column)
        if not 0 <= column < self._columns:
            raise IndexOutOfRange(f"column {column} outside matrix with {self._columns} columns")
        return Vector(tuple(self._cells[:, column]))

    def leading_coefficient_column(self, row: int) -> int:
        """Column of the first non-zero cell in *row*, or ``-1`` for a zero row."""
        row = self._check_row(row)
        for column in range(self._columns):
            if self._cells[row, column] != Rational.ZERO:
                return column
        return -1

    # ------------------------------------------------------------------
    # Row operations
    def copy(self) -> "Matrix":
        return Matrix(self._rows, self._columns, self._cells.copy())

    def swap(self, row_a: int, row_b: int) -> "Matrix":
        m = self.copy()
        m._swap_in_place(self._check_row(row_a), self._check_row(row_b))
        return m

    def swap_pairs(self, *pairs: Tuple[int, int]) -> "Matrix":
        """Swap each ``(row_a, row_b)`` pair in turn, left to right."""
        m = self.copy()
        for row_a, row_b in pairs:
            m._swap_in_place(self._check_row(row_a), self._check_row(row_b))
        return m

    def scale_row(self, row: int, scalar: NumberLike) -> "Matrix":
        m = self.copy()
        m._scale_row_in_place(self._check_row(row), Rational.coerce(scalar))
        return m

    def add_row(self, dest_row: int, src_row: int, scalar: NumberLike) -> "Matrix":
        """Add ``src_row * scalar`` to ``dest_row``; the two rows may be the same."""
        m = self.copy()
        m._add_row_in_place(
            self._check_row(dest_row), self._check_row(src_row), Rational.coerce(scalar)
        )
        return m

    def times(self, scalar: NumberLike) -> "Matrix":
        m = self.copy()
        m._times_in_place(Rational.coerce(scalar))
        return m

    def div(self, scalar: NumberLike) -> "Matrix":
        return self.times(Rational.coerce(scalar).reciprocal())

    def simplified(self) -> "Matrix":
        """Return an equal matrix with every cell in lowest terms."""
        m = self.copy()
        for row in range(m._rows):
            m._simplify_row_in_place(row)
        return m

    def simplify_row(self, row: int) -> "Matrix":
        m = self.copy()
        m._simplify_row_in_place(self._check_row(row))
        return m

    def sorted(self, log: Optional[TransformationLog] = None) -> "Matrix":
        """Return the rows ordered by leading coefficient column, zero rows first.

        The sort is stable. Each swap it performs is appended to *log*
        together with the matrix as it stood right after that swap.
        """
        m = self.copy()
        m._sort_rows_in_place(log)
        return m

    def apply(
        self, transformation: Transformation, log: Optional[TransformationLog] = None
    ) -> "Matrix":
        """Perform the operation *transformation* describes, optionally logging it."""
        if isinstance(transformation, Swap):
            result = self.swap(transformation.row_a, transformation.row_b)
        elif isinstance(transformation, AddMultiple):
            result = self.add_row(
                transformation.dest_row, transformation.src_row, transformation.scale
            )
        elif isinstance(transformation, ScaleRow):
            result = self.scale_row(transformation.row, transformation.scale)
        else:
            raise TypeError(f"Unknown transformation {type(transformation)!r}")
        if log is not None:
            log.append(transformation, result)
        return result

    def __mul__(self, scalar: NumberLike) -> "Matrix":
        try:
            scalar = Rational.coerce(scalar)
        except TypeError:
            return NotImplemented
        return self.times(scalar)

    def __rmul__(self, scalar: NumberLike) -> "Matrix":
        return self.__mul__(scalar)

    def __truediv__(self, scalar: NumberLike) -> "Matrix":
        try:
            scalar = Rational.coerce(scalar)
        except TypeError:
            return NotImplemented
        return self.div(scalar)

    # ------------------------------------------------------------------
    # Comparison and representation
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and all(
            a == b for a, b in zip(self._cells.flat, other._cells.flat)
        )

    def __hash__(self) -> int:
        return hash((self._rows, self._columns, self.cells))

    def __repr__(self) -> str:
        return f"Matrix(rows={self._rows}, columns={self._columns})"

    def __str__(self) -> str:
        texts = [[str(cell) for cell in row] for row in self._cells]
        width = max((len(text) for row in texts for text in row), default=0) + 1
        return "".join("".join(text.rjust(width) for text in row) + "\n" for row in texts)

    # ------------------------------------------------------------------
    # Private in-place routines, only ever called on a fresh copy
    def _check_row(self, row: int) -> int:
        row = operator.index(row)
        if not 0 <= row < self._rows:
            raise IndexOutOfRange(f"row {row} outside matrix with {self._rows} rows")
        return row

    def _swap_in_place(self, row_a: int, row_b: int) -> None:
        self._cells[[row_a, row_b]] = self._cells[[row_b, row_a]]

    def _scale_row_in_place(self, row: int, scalar: Rational) -> None:
        for column in range(self._columns):
            self._cells[row, column] = self._cells[row, column] * scalar

    def _add_row_in_place(self, dest_row: int, src_row: int, scalar: Rational) -> None:
        source = self._cells[src_row].copy()
        for column in range(self._columns):
            self._cells[dest_row, column] = self._cells[dest_row, column] + source[column] * scalar

    def _times_in_place(self, scalar: Rational) -> None:
        for index, cell in np.ndenumerate(self._cells):
            self._cells[index] = cell * scalar

    def _simplify_row_in_place(self, row: int) -> None:
        for column in range(self._columns):
            self._cells[row, column] = self._cells[row, column].simplified()

    def _sort_rows_in_place(self, log: Optional[TransformationLog]) -> None:
        passes = 0
        made_swap = True
        while made_swap:
            made_swap = False
            passes += 1
            for row in range(self._rows - 1):
                leading_a = self.leading_coefficient_column(row)
                leading_b = self.leading_coefficient_column(row + 1)
                if leading_b < leading_a:
                    self._swap_in_place(row, row + 1)
                    made_swap = True
                    logger.debug("Swapped rows %d and %d (pass %d)", row, row + 1, passes)
                    if log is not None:
                        log.append(Swap(row, row + 1), self.copy())
        logger.debug("Row sort converged after %d pass(es)", passes)


__all__ = ["Matrix"]
