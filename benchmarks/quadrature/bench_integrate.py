"""Benchmarks for rigorous adaptive integration.

This module compares refinement orders (stack vs. heap) on the example
catalogue and measures the one-time cost of certifying Gauss-Legendre nodes.

Usage: python benchmarks/quadrature/bench_integrate.py [--prec 64]
"""

from __future__ import annotations

import argparse
import time
from typing import Any, Callable

import torch

from ballquad.examples import CATALOGUE
from ballquad.integration import IntegrationOptions
from ballquad.quadrature import certified_gauss_legendre

# catalogue entries that finish in well under a second at 64 bits
QUICK = [0, 1, 3, 6, 12, 14, 17, 18]


def benchmark(
    func: Callable,
    *args: Any,
    warmup: int = 1,
    iterations: int = 5,
    setup: Callable[[], None] | None = None,
    **kwargs: Any,
) -> dict[str, float]:
    """Run a simple benchmark on a function.

    Parameters
    ----------
    func : callable
        Function to benchmark.
    *args : Any
        Positional arguments to pass to func.
    warmup : int, optional
        Number of warmup iterations. Default is 1.
    iterations : int, optional
        Number of timed iterations. Default is 5.
    setup : callable, optional
        Called before every timed iteration, outside the timed region.
    **kwargs : Any
        Keyword arguments to pass to func.

    Returns
    -------
    dict
        Dictionary with timing statistics:
        - 'mean': Mean time in seconds
        - 'std': Standard deviation in seconds
        - 'min': Minimum time in seconds
        - 'max': Maximum time in seconds
    """
    for _ in range(warmup):
        func(*args, **kwargs)

    times = []
    for _ in range(iterations):
        if setup is not None:
            setup()
        start = time.perf_counter()
        func(*args, **kwargs)
        times.append(time.perf_counter() - start)

    t = torch.tensor(times, dtype=torch.float64)
    return {
        "mean": t.mean().item(),
        "std": t.std().item() if len(times) > 1 else 0.0,
        "min": t.min().item(),
        "max": t.max().item(),
    }


def format_time(seconds: float) -> str:
    """Format time in appropriate units."""
    if seconds < 1e-3:
        return f"{seconds * 1e6:.3f}us"
    elif seconds < 1:
        return f"{seconds * 1e3:.3f}ms"
    else:
        return f"{seconds:.3f}s"


def bench_ordering(prec: int) -> None:
    """Stack vs. heap refinement on the quick catalogue entries."""
    tol = 2.0**-prec
    print(f"\nRefinement order (prec={prec})")
    print("-" * 40)
    for index in QUICK:
        example = CATALOGUE[index]
        row = [f"  I{index:<3}"]
        for use_heap in (False, True):
            options = IntegrationOptions(use_heap=use_heap)
            stats = benchmark(example, prec, tol, options, prec)
            label = "heap" if use_heap else "stack"
            row.append(f"{label}: {format_time(stats['mean']):>12}")
        print("  ".join(row))


def bench_node_cache(prec: int) -> None:
    """Cold (certifying nodes) vs. warm (cached nodes) integration."""
    tol = 2.0**-prec
    example = CATALOGUE[1]
    cold = benchmark(
        example,
        prec,
        tol,
        None,
        prec,
        setup=certified_gauss_legendre.cache_clear,
    )
    warm = benchmark(example, prec, tol, None, prec)
    print(f"\nNode certification overhead, I1 (prec={prec})")
    print("-" * 40)
    print(f"  cold: {format_time(cold['mean'])} +/- {format_time(cold['std'])}")
    print(f"  warm: {format_time(warm['mean'])} +/- {format_time(warm['std'])}")


def bench_degrees(prec: int) -> None:
    """Certification time of a single rule by degree."""
    print(f"\nCertified Gauss-Legendre nodes (prec={prec})")
    print("-" * 40)
    for n in (8, 32, 128):
        stats = benchmark(
            certified_gauss_legendre,
            n,
            prec,
            warmup=0,
            iterations=3,
            setup=certified_gauss_legendre.cache_clear,
        )
        print(f"  n={n:<4} {format_time(stats['mean'])}")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--prec", type=int, default=64)
    args = parser.parse_args()

    bench_ordering(args.prec)
    bench_node_cache(args.prec)
    bench_degrees(args.prec)


if __name__ == "__main__":
    main()
