"""Ordered record of row operations and the matrices they produced."""
from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, List

from .errors import IndexOutOfRange
from .transformation import Transformation, describe

if TYPE_CHECKING:  # pragma: no cover - import only needed for annotations
    from .matrix import Matrix


@dataclass(frozen=True)
class Step:
    transformation: Transformation
    result: "Matrix"


class TransformationLog:
    """Log of transformations anchored to an initial matrix.

    The first transformation and its result live at index 0. The log trusts
    its writer: ``append`` does not check that ``result`` really follows from
    applying ``transformation`` to the previous snapshot. Use :meth:`replay`
    to recompute the snapshots when that needs checking.
    """

    def __init__(self, initial: "Matrix") -> None:
        self._initial = initial
        self._steps: List[Step] = []

    @property
    def initial(self) -> "Matrix":
        return self._initial

    @property
    def step_count(self) -> int:
        return len(self._steps)

    @property
    def latest(self) -> "Matrix":
        """Most recent snapshot, or the initial matrix for an empty log."""
        if not self._steps:
            return self._initial
        return self._steps[-1].result

    def append(self, transformation: Transformation, result: "Matrix") -> "TransformationLog":
        self._steps.append(Step(transformation, result))
        return self

    def step_at(self, index: int) -> Step:
        index = operator.index(index)
        if not 0 <= index < len(self._steps):
            raise IndexOutOfRange(f"step {index} outside log of {len(self._steps)} steps")
        return self._steps[index]

    def replay(self) -> List["Matrix"]:
        """Re-apply every recorded transformation, starting from ``initial``."""
        matrices = []
        current = self._initial
        for step in self._steps:
            current = current.apply(step.transformation)
            matrices.append(current)
        return matrices

    def __len__(self) -> int:
        return len(self._steps)

    def __getitem__(self, index: int) -> Step:
        return self.step_at(index)

    def __iter__(self) -> Iterator[Step]:
        return iter(tuple(self._steps))

    def __str__(self) -> str:
        parts = ["Initial matrix:\n", str(self._initial), "\n"]
        for number, step in enumerate(self._steps, start=1):
            parts.append(f"Step {number}:\n")
            parts.append(describe(step.transformation) + "\n")
            parts.append(str(step.result) + "\n")
        return "".join(parts)


__all__ = ["Step", "TransformationLog"]
