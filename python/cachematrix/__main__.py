"""Command-line demo: invert a matrix twice and show the second call hits the cache.

Usage
-----
    python -m cachematrix '[[1, 3], [2, 1]]' --repeat 2 -v
    python -m cachematrix '[1, 2, 3, 1]' --column-major 2
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Sequence

import numpy as np

from ._internal import observability as _observability
from ._internal.coercion import matrix as _column_major
from ._internal.errors import InversionFailure
from ._internal.handle import CacheMatrix
from ._internal.solve import cache_solve

# matrix(c(1, 2, 3, 1), 2, 2)
DEFAULT_MATRIX = "[1, 2, 3, 1]"
DEFAULT_NROW = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cachematrix",
        description="Invert a matrix through an inverse-caching handle.",
    )
    parser.add_argument(
        "matrix",
        nargs="?",
        default=None,
        help="matrix as JSON: nested rows, or a flat list with --column-major",
    )
    parser.add_argument(
        "--column-major",
        type=int,
        metavar="NROW",
        default=None,
        help="treat MATRIX as a flat list filled column by column into NROW rows",
    )
    parser.add_argument("--repeat", type=int, default=2, help="number of cache_solve calls (default: 2)")
    parser.add_argument("--tol", type=float, default=None, help="reciprocal condition number floor")
    parser.add_argument("-v", "--verbose", action="store_true", help="log cache activity to stderr")
    return parser


def _load_matrix(args: argparse.Namespace) -> np.ndarray:
    if args.matrix is None:
        return _column_major(json.loads(DEFAULT_MATRIX), DEFAULT_NROW)
    data = json.loads(args.matrix)
    if args.column_major is not None:
        return _column_major(data, args.column_major)
    return np.asarray(data)


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.repeat < 1:
        parser.error("--repeat must be at least 1")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
    )

    observer = _observability.CacheObservability()
    try:
        handle = CacheMatrix(_load_matrix(args), observer=observer)
    except (json.JSONDecodeError, TypeError, ValueError) as exc:
        parser.error(f"invalid matrix: {exc}")
    print(handle.get())

    options = {} if args.tol is None else {"tol": args.tol}
    for _ in range(args.repeat):
        try:
            inverse = cache_solve(handle, **options)
        except InversionFailure as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1
        print(inverse)

    counts = observer.counts()
    print(f"hits={counts['hit']} misses={counts['miss']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
