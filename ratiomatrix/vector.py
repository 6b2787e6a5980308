"""Immutable one-dimensional sequence of :class:`Rational` values."""
from __future__ import annotations

import operator
from typing import Callable, Iterator, Tuple

from .errors import IndexOutOfRange
from .rational import NumberLike, Rational


class Vector:
    """Fixed-length vector of rationals; ``map`` returns a new instance."""

    __slots__ = ("_elements",)

    def __init__(self, elements: Tuple[Rational, ...]) -> None:
        self._elements = tuple(Rational.coerce(element) for element in elements)

    @classmethod
    def of(cls, *values: NumberLike) -> "Vector":
        return cls(values)

    @property
    def size(self) -> int:
        return len(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __getitem__(self, index: int) -> Rational:
        index = operator.index(index)
        if not 0 <= index < len(self._elements):
            raise IndexOutOfRange(f"index {index} outside vector of size {len(self._elements)}")
        return self._elements[index]

    def __iter__(self) -> Iterator[Rational]:
        return iter(self._elements)

    def map(self, func: Callable[[Rational], NumberLike]) -> "Vector":
        return Vector(tuple(func(element) for element in self._elements))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vector):
            return NotImplemented
        return len(self) == len(other) and all(a == b for a, b in zip(self, other))

    def __hash__(self) -> int:
        return hash(self._elements)

    def __repr__(self) -> str:
        return f"Vector.of({', '.join(repr(element) for element in self._elements)})"

    def __str__(self) -> str:
        return " ".join(str(element) for element in self._elements)


__all__ = ["Vector"]
