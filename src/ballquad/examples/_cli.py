"""Command-line driver for the example catalogue."""

import argparse
import logging
import sys
import time
from typing import List, Optional

import mpmath

from ballquad.enclosure import format_enclosure
from ballquad.examples._catalogue import CATALOGUE
from ballquad.integration import IntegrationOptions

logger = logging.getLogger(__name__)

USAGE = """\
Compute integrals using ballquad.integrate.
Usage: python -m ballquad.examples -i n [-prec p] [-tol eps] [-twice] [...]

-i n       - compute integral n (0 <= n <= {last}), or "-i all"
-prec p    - precision in bits (default p = 64)
-goal p    - approximate relative accuracy goal (default p)
-tol eps   - approximate absolute error goal (default 2^-p)
-twice     - run twice (to see overhead of computing nodes)
-heap      - use heap for subinterval queue
-verbose   - show information
-verbose2  - show more information
-deg n     - use quadrature degree up to n
-eval n    - limit number of function evaluations to n
-depth n   - limit subinterval depth to n
"""


def usage() -> str:
    lines = [USAGE.format(last=len(CATALOGUE) - 1), "Implemented integrals:"]
    for index, example in enumerate(CATALOGUE):
        lines.append(f"I{index} = {example.description}")
    return "\n".join(lines) + "\n"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m ballquad.examples",
        description="Compute integrals using ballquad.integrate.",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument("-i", dest="integral")
    parser.add_argument("-prec", type=int, default=64)
    parser.add_argument("-goal", type=int)
    parser.add_argument("-tol")
    parser.add_argument("-twice", action="store_true")
    parser.add_argument("-heap", action="store_true")
    parser.add_argument("-verbose", action="store_true")
    parser.add_argument("-verbose2", action="store_true")
    parser.add_argument("-deg", type=int)
    parser.add_argument("-eval", type=int)
    parser.add_argument("-depth", type=int)
    return parser


def select(integral: Optional[str]) -> Optional[List[int]]:
    """Indices chosen by ``-i``, or None for a missing or invalid choice."""
    if integral is None:
        return None
    if integral == "all":
        return list(range(len(CATALOGUE)))
    try:
        index = int(integral)
    except ValueError:
        return None
    if not 0 <= index < len(CATALOGUE):
        return None
    return [index]


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args, _ = parser.parse_known_args(argv)

    indices = select(args.integral)
    if indices is None:
        sys.stdout.write(usage())
        return 1

    prec = args.prec
    goal = prec if args.goal is None else args.goal
    if goal < 0:
        print("expected goal >= 0")
        return 1
    if args.tol is None:
        tol = mpmath.ldexp(1, -prec)
    else:
        tol = mpmath.mpf(args.tol)

    verbose = 2 if args.verbose2 else (1 if args.verbose else 0)
    options = IntegrationOptions(
        deg_limit=args.deg,
        eval_limit=args.eval,
        depth_limit=args.depth,
        use_heap=args.heap,
        verbose=verbose,
    )

    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s - %(module)s - %(levelname)s - %(message)s",
    )
    logger.debug(
        "prec=%d goal=%d tol=%s options=%s", prec, goal, tol, options
    )

    # cap only; fewer digits are printed when the radius allows fewer
    digits = int(3.333 * prec)
    for index in indices:
        example = CATALOGUE[index]
        print(f"I{index} = {example.description} ...")
        value = None
        for _ in range(2 if args.twice else 1):
            start = time.perf_counter()
            value = example(goal, tol, options, prec)
            elapsed = time.perf_counter() - start
            print(f"time: {elapsed:.3f} s")
        print(f"I{index} = {format_enclosure(value, digits)}")
        print()

    return 0
