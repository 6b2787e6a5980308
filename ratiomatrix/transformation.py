"""Descriptors for the elementary row operations.

A descriptor only records what was done to a matrix so it can be rendered
in a :class:`~ratiomatrix.TransformationLog`; applying one is the job of
:meth:`Matrix.apply <ratiomatrix.Matrix.apply>`. Row numbers are stored
0-based and rendered 1-based.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .rational import Rational


@dataclass(frozen=True)
class Swap:
    row_a: int
    row_b: int

    def __str__(self) -> str:
        return describe(self)


@dataclass(frozen=True)
class AddMultiple:
    """``dest_row += src_row * scale``."""

    dest_row: int
    src_row: int
    scale: Rational

    def __str__(self) -> str:
        return describe(self)


@dataclass(frozen=True)
class ScaleRow:
    row: int
    scale: Rational

    def __str__(self) -> str:
        return describe(self)


Transformation = Union[Swap, AddMultiple, ScaleRow]


def describe(transformation: Transformation) -> str:
    """Human-readable, 1-based description of *transformation*."""
    if isinstance(transformation, Swap):
        return f"Swapping row {transformation.row_a + 1} with {transformation.row_b + 1}"
    if isinstance(transformation, AddMultiple):
        return (
            f"Adding row {transformation.dest_row + 1} by "
            f"{transformation.scale} x row {transformation.src_row + 1}"
        )
    if isinstance(transformation, ScaleRow):
        return f"Scaling row {transformation.row + 1} by {transformation.scale}"
    raise TypeError(f"Unknown transformation {type(transformation)!r}")


__all__ = ["Swap", "AddMultiple", "ScaleRow", "Transformation", "describe"]
