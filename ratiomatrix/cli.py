#!/usr/bin/env python3
"""Apply the row operations listed in a TOML job file and print the log."""

import argparse
import logging
import sys
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .errors import ParseError, RatioMatrixError
from .matrix import Matrix
from .rational import Rational
from .transformation import AddMultiple, ScaleRow, Swap, Transformation
from .transformation_log import TransformationLog

logger = logging.getLogger(__name__)

SORT = "sort"

Operation = Union[Transformation, str]


@dataclass
class Job:
    matrix: Matrix
    operations: List[Operation] = field(default_factory=list)
    simplify: bool = False


def _require(table: Dict[str, Any], key: str, where: str) -> Any:
    if key not in table:
        raise ParseError(f"{where}: missing key {key!r}")
    return table[key]


def _row_index(value: Any, where: str) -> int:
    # Job files number rows from 1, as the log does.
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ParseError(f"{where}: row numbers must be integers >= 1, got {value!r}")
    return value - 1


def _scalar(value: Any, where: str) -> Rational:
    if isinstance(value, bool):
        raise ParseError(f"{where}: scale must be an integer or ratio string, got {value!r}")
    if isinstance(value, int):
        return Rational(value)
    if isinstance(value, str):
        return Rational.parse(value)
    raise ParseError(f"{where}: scale must be an integer or ratio string, got {value!r}")


def parse_operation(table: Dict[str, Any], where: str) -> Operation:
    if not isinstance(table, dict):
        raise ParseError(f"{where}: expected a table, got {table!r}")
    op = _require(table, "op", where)
    if op == SORT:
        return SORT
    if op == "swap":
        rows = _require(table, "rows", where)
        if not isinstance(rows, list) or len(rows) != 2:
            raise ParseError(f"{where}: 'rows' must list exactly two row numbers")
        return Swap(_row_index(rows[0], where), _row_index(rows[1], where))
    if op == "scale":
        return ScaleRow(
            _row_index(_require(table, "row", where), where),
            _scalar(_require(table, "by", where), where),
        )
    if op == "add":
        return AddMultiple(
            _row_index(_require(table, "dest", where), where),
            _row_index(_require(table, "src", where), where),
            _scalar(_require(table, "by", where), where),
        )
    raise ParseError(f"{where}: unknown operation {op!r}")


def parse_job(params: Dict[str, Any]) -> Job:
    rows = _require(params, "rows", "job")
    columns = _require(params, "columns", "job")
    cells = _require(params, "cells", "job")
    for name, value in (("rows", rows), ("columns", columns)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ParseError(f"job: '{name}' must be an integer, got {value!r}")
    if not isinstance(cells, str):
        raise ParseError(f"job: 'cells' must be a string, got {cells!r}")
    matrix = Matrix.parse(rows, columns, cells)

    steps = params.get("steps", [])
    if not isinstance(steps, list):
        raise ParseError(f"job: 'steps' must be an array of tables, got {steps!r}")
    simplify = params.get("simplify", False)
    if not isinstance(simplify, bool):
        raise ParseError(f"job: 'simplify' must be true or false, got {simplify!r}")

    operations = [
        parse_operation(table, f"step {number}") for number, table in enumerate(steps, start=1)
    ]
    return Job(matrix=matrix, operations=operations, simplify=simplify)


def load_job(path: Path) -> Job:
    with path.open("rb") as pf:
        try:
            params = tomllib.load(pf)
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            raise ParseError(f"{path}: {exc}") from exc
    return parse_job(params)


def run_job(job: Job) -> TransformationLog:
    log = TransformationLog(job.matrix)
    current = job.matrix
    for operation in job.operations:
        if operation == SORT:
            current = current.sorted(log)
            continue
        current = current.apply(operation)
        if job.simplify:
            current = current.simplified()
        log.append(operation, current)
    logger.info("Recorded %d step(s)", log.step_count)
    return log


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Apply the row operations listed in a TOML job file and print the log.",
    )
    parser.add_argument("jobfile", help="Path to the TOML job file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every row swap")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        log = run_job(load_job(Path(args.jobfile).expanduser()))
    except (RatioMatrixError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(log, end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())
