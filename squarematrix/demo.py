#!/usr/bin/env python3
"""
Demonstration driver for SquareMatrix.

Walks through allocation, fills, arithmetic and the callable update, printing
each matrix in its tabular form.

Usage:
    python -m squarematrix.demo --seed 42
"""

import logging
import sys
from typing import List, Optional

from . import backend
from .core import SquareMatrix
from .observability import configure_logging, get_profiler

logger = logging.getLogger(__name__)


def run_demo(out=None, profiler=None):
    """Runs every demo step, writing the rendered matrices to `out`."""
    out = out if out is not None else sys.stdout
    profiler = profiler if profiler is not None else get_profiler()

    def emit(text=""):
        out.write(text + "\n")

    emit("--- Test 1: Allocation and randomize (n=5) ---")
    with profiler.profile("randomize", size=5):
        A = SquareMatrix(5).randomize()
    emit(str(A))

    emit("--- Test 2: Offset diagonal (n=5, k=1) ---")
    with profiler.profile("fill_diagonal_offset", size=5):
        A.fill_diagonal_offset(1, [1, 1, 1, 1, 1])
    emit(str(A))

    emit("--- Test 3: Checkerboard (n=4) ---")
    with profiler.profile("checkerboard", size=4):
        B = SquareMatrix(4).checkerboard()
    emit(str(B))

    emit("--- Test 4: Arithmetic operators ---")
    C = SquareMatrix(3).randomize()
    D = SquareMatrix(3).randomize()
    out.write("C:\n" + str(C) + "D:\n" + str(D))

    with profiler.profile("add", size=3):
        E = C + D
    emit("C + D:\n" + str(E))

    with profiler.profile("multiply", size=3):
        F = C * D
    emit("C * D:\n" + str(F))

    emit("--- Test 5: Callable update (5.99) ---")
    C(5.99)  # adds 5
    emit("C + 5:\n" + str(C))

    return A, B, C, D, E, F


def main(argv: Optional[List[str]] = None) -> int:
    import argparse

    parser = argparse.ArgumentParser(
        description="Demonstrate SquareMatrix fills, arithmetic and rendering"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random generator (default: OS entropy)"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console logging level"
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Also write detailed logs to this file"
    )
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Print timing for each demo step"
    )

    args = parser.parse_args(argv)

    configure_logging(level=args.log_level, log_file=args.log_file)
    backend.seed(args.seed)
    logger.info(f"Running demo with seed {args.seed!r}")

    # Each run reports only its own timings
    profiler = get_profiler()
    profiler.reset()
    if args.profile:
        profiler.enable()
    else:
        profiler.disable()

    try:
        run_demo(sys.stdout, profiler)
        if args.profile:
            profiler.print_summary(sys.stdout)
    finally:
        profiler.disable()

    return 0


if __name__ == "__main__":
    sys.exit(main())
