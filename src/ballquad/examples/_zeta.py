"""Riemann zeta function on enclosures by Euler-Maclaurin summation.

For ``N`` terms and ``M`` correction terms,

    zeta(s) = sum_{k<N} k^-s + N^(1-s)/(s-1) + N^-s/2
              + sum_{j=1}^{M} B_2j/(2j)! (s)_(2j-1) N^(-s-2j+1) + R

with ``(s)_m`` the rising factorial and

    |R| <= |B_2M|/(2M)! |(s)_2M| N^(1-sigma-2M) / (sigma + 2M - 1)

where ``sigma`` is a lower bound for ``Re s``. The bound needs
``sigma + 2M - 1 > 0``.
"""

import functools
import math
from typing import Tuple

import mpmath

from ballquad.enclosure import (
    add_error,
    contains_zero,
    indeterminate,
    is_finite,
    lower,
    to_complex,
)


@functools.lru_cache(maxsize=None)
def _bernoulli_ratios(m: int) -> Tuple[Tuple[int, int], ...]:
    """Exact ``B_2j / (2j)!`` for j = 1..m as (numerator, denominator)."""
    ratios = []
    for j in range(1, m + 1):
        p, q = mpmath.bernfrac(2 * j)
        ratios.append((int(p), int(q) * math.factorial(2 * j)))
    return tuple(ratios)


def zeta(s):
    """
    Enclose ``zeta(s)`` over a complex region.

    Returns the indeterminate enclosure if the region contains the pole at
    ``s = 1`` or extends too far into the left half plane.
    """
    ctx = s.ctx
    s = to_complex(ctx, s)
    if not is_finite(s):
        return indeterminate(ctx)

    s1 = s - 1
    if contains_zero(s1.real) and contains_zero(s1.imag):
        return indeterminate(ctx)

    n = m = ctx.prec // 6 + 8
    sigma = lower(s.real)
    if sigma + 2 * m - 1 <= 0:
        return indeterminate(ctx)

    total = to_complex(ctx, 1)
    for k in range(2, n):
        total = total + ctx.exp(-s * ctx.ln(ctx.mpf(k)))

    log_n = ctx.ln(ctx.mpf(n))
    n_s = ctx.exp(-s * log_n)
    total = total + n * n_s / s1 + n_s / 2

    ratios = _bernoulli_ratios(m)
    rising = s
    power = n_s / n
    n2 = ctx.mpf(n * n)
    for j, (p, q) in enumerate(ratios, start=1):
        total = total + ctx.mpf(p) / q * rising * power
        if j < m:
            rising = rising * (s + 2 * j - 1) * (s + 2 * j)
            power = power / n2

    # rising is (s)_(2M-1) here
    rising = rising * (s + 2 * m - 1)
    p, q = ratios[-1]
    sigma = ctx.mpf(sigma)
    bound = (
        abs(ctx.mpf(p) / q)
        * abs(rising)
        * ctx.exp((1 - sigma - 2 * m) * log_n)
        / (sigma + 2 * m - 1)
    )
    return add_error(total, bound)
