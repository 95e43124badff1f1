"""Principal branch of the Lambert W function on enclosures."""

import math

import mpmath

from ballquad.enclosure import (
    complex_midpoint,
    indeterminate,
    is_finite,
    is_real,
    lower,
    magnitude_upper,
    radius,
    strictly_contains,
    to_complex,
    union,
    upper,
)
from ballquad.integrand._holomorphic import on_branch_cut


def _box(ctx, r):
    side = ctx.mpf([-r, r])
    return ctx.mpc(side, side)


def _refine_center(ctx, c, prec):
    # Newton on w exp(w) = c, started from the principal branch at 53 bits
    w = to_complex(ctx, mpmath.lambertw(c))
    cz = to_complex(ctx, c)
    steps = max(1, math.ceil(math.log2(max(prec, 53) / 40.0)) + 1)
    for _ in range(steps):
        ew = ctx.exp(w)
        w = w - (w * ew - cz) / ((1 + w) * ew)
        if not is_finite(w):
            return None
        w = to_complex(ctx, complex_midpoint(w))
    return w


def lambertw_principal(z, max_attempts: int = 8):
    """
    Enclose ``W_0`` over a region that avoids the branch cut.

    The enclosure is certified with the Krawczyk operator for
    ``f(w) = w exp(w) - z``: a box ``X`` around the refined center ``m`` with
    ``K(X) = m - y f(m) + (1 - y f'(X)) (X - m)`` strictly inside ``X``
    contains, for every ``z`` in the region, exactly one root, and that root
    is ``W_0(z)`` because the region does not meet the cut.

    Parameters
    ----------
    z : ivmpc
        Region, assumed not to meet ``(-inf, -1/e]``.
    max_attempts : int
        Number of box inflations before giving up.

    Returns
    -------
    ivmpc
        Enclosure of ``W_0(z)``, or the indeterminate enclosure if the
        Krawczyk test fails (e.g. near the branch point).
    """
    ctx = z.ctx
    prec = ctx.prec
    if not is_finite(z):
        return indeterminate(ctx)

    m = _refine_center(ctx, complex_midpoint(z), prec)
    if m is None:
        return indeterminate(ctx)

    em = ctx.exp(m)
    y = to_complex(ctx, complex_midpoint(1 / ((1 + m) * em)))
    fm = m * em - z
    if not (is_finite(y) and is_finite(fm)):
        return indeterminate(ctx)

    r = mpmath.fadd(
        2 * radius(fm) * magnitude_upper(y),
        mpmath.ldexp(1 + magnitude_upper(m), 8 - prec),
        prec=53,
        rounding="u",
    )
    for _ in range(max_attempts):
        X = m + _box(ctx, r)
        fpX = (1 + X) * ctx.exp(X)
        K = m - y * fm + (1 - y * fpX) * (X - m)
        if strictly_contains(X, K):
            return K
        r = 4 * r

    return indeterminate(ctx)


def holomorphic_lambertw(z, holomorphic: bool):
    """
    Principal Lambert W with detection of the branch cut.

    Non-analytic locus: the ray ``(-inf, -1/e]`` of the real axis, tested as
    ``z + 1/e`` meeting the non-positive real axis. Regions meeting the ray
    are indeterminate for both orders because one enclosure cannot follow the
    function across the cut.
    """
    ctx = z.ctx
    z = to_complex(ctx, z)
    if not is_finite(z):
        return indeterminate(ctx)
    if on_branch_cut(z + 1 / ctx.mpf(ctx.e)):
        return indeterminate(ctx)
    if is_real(z) and radius(z) > 0:
        # W_0 is increasing on (-1/e, inf)
        lo = lambertw_principal(to_complex(ctx, lower(z.real)))
        hi = lambertw_principal(to_complex(ctx, upper(z.real)))
        return union(lo, hi)
    return lambertw_principal(z)
