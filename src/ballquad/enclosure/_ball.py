"""Enclosure helpers on top of mpmath interval arithmetic.

An enclosure is an ``mpmath`` interval: ``ivmpf`` on the real line or
``ivmpc`` (a rectangular box) in the complex plane. All helpers read interval
endpoints exactly; decisions made on ``mpmath.mpf`` values never round an
endpoint across zero or an integer.
"""

import functools
from typing import Any, Union

import mpmath
from mpmath import libmp
from mpmath.ctx_iv import MPIntervalContext

Number = Union[int, float, complex, str, Any]


@functools.lru_cache(maxsize=None)
def interval_context(prec: int) -> MPIntervalContext:
    """
    Return the interval context for a working precision.

    Contexts are cached per precision and must not be mutated by callers, so
    nested or interleaved integrations at different precisions never share
    arithmetic state.

    Parameters
    ----------
    prec : int
        Working precision in bits.

    Returns
    -------
    MPIntervalContext
        Interval context whose ``prec`` is fixed to ``prec``.

    Raises
    ------
    ValueError
        If ``prec`` < 2.
    """
    if prec < 2:
        raise ValueError(f"prec must be at least 2, got {prec}")

    ctx = MPIntervalContext()
    ctx.prec = prec
    return ctx


def is_complex(x: Any) -> bool:
    """True for complex interval boxes."""
    return hasattr(x, "_mpci_") and not hasattr(x, "_mpi_")


def to_real(ctx: MPIntervalContext, x: Number):
    """Convert a number, string, ``[lo, hi]`` pair or interval to ``ivmpf``."""
    if isinstance(x, ctx.mpf):
        return x
    if hasattr(x, "_mpi_"):
        return ctx.make_mpf(x._mpi_)
    return ctx.convert(x)


def to_complex(ctx: MPIntervalContext, x: Number):
    """
    Convert ``x`` to a complex enclosure in ``ctx``.

    Accepts Python and ``mpmath`` numbers, decimal strings, ``[lo, hi]``
    pairs and intervals from any interval context.
    """
    if isinstance(x, ctx.mpc):
        return x
    if is_complex(x):
        return ctx.mpc(to_real(ctx, x.real), to_real(ctx, x.imag))
    if isinstance(x, (str, list, tuple)) or hasattr(x, "_mpi_"):
        return ctx.mpc(to_real(ctx, x), 0)
    if isinstance(x, complex) or hasattr(x, "_mpc_"):
        return ctx.mpc(to_real(ctx, x.real), to_real(ctx, x.imag))
    return ctx.mpc(to_real(ctx, x), 0)


def lower(x) -> mpmath.mpf:
    """Exact lower endpoint of a real interval."""
    return mpmath.mp.make_mpf(x._mpi_[0])


def upper(x) -> mpmath.mpf:
    """Exact upper endpoint of a real interval."""
    return mpmath.mp.make_mpf(x._mpi_[1])


def midpoint(x) -> mpmath.mpf:
    """Exact midpoint of a finite real interval."""
    return mpmath.ldexp(mpmath.fadd(lower(x), upper(x), exact=True), -1)


def complex_midpoint(z) -> mpmath.mpc:
    """Exact center of a finite complex box."""
    return mpmath.mpc(midpoint(z.real), midpoint(z.imag))


def _half_width(x) -> mpmath.mpf:
    lo, hi = lower(x), upper(x)
    if mpmath.isinf(lo) or mpmath.isinf(hi):
        return mpmath.inf
    if mpmath.isnan(lo) or mpmath.isnan(hi):
        return mpmath.inf
    return mpmath.ldexp(mpmath.fsub(hi, lo, prec=53, rounding="u"), -1)


def radius(z) -> mpmath.mpf:
    """
    Upper bound for the radius of an enclosure.

    For a complex box this is the sum of the real and imaginary half-widths,
    which bounds the radius of the disk centered at the box midpoint.
    """
    if is_complex(z):
        return mpmath.fadd(
            _half_width(z.real), _half_width(z.imag), prec=53, rounding="u"
        )
    return _half_width(z)


def magnitude_lower(z) -> mpmath.mpf:
    """Lower bound for ``|z|`` over the enclosure."""
    parts = [z.real, z.imag] if is_complex(z) else [z]
    best = mpmath.mpf(0)
    for part in parts:
        lo, hi = lower(part), upper(part)
        if lo > 0:
            best = max(best, lo)
        elif hi < 0:
            best = max(best, -hi)
    return best


def magnitude_upper(z) -> mpmath.mpf:
    """Upper bound for ``|z|`` over the enclosure."""
    parts = [z.real, z.imag] if is_complex(z) else [z]
    total = mpmath.mpf(0)
    for part in parts:
        m = max(abs(lower(part)), abs(upper(part)))
        total = mpmath.fadd(total, m, prec=53, rounding="u")
    return total


def is_finite(z) -> bool:
    """True if every endpoint of the enclosure is a finite number."""
    if z is None:
        return False
    parts = [z.real, z.imag] if is_complex(z) else [z]
    for part in parts:
        for v in (lower(part), upper(part)):
            if mpmath.isinf(v) or mpmath.isnan(v):
                return False
    return True


def indeterminate(ctx: MPIntervalContext):
    """The enclosure of the whole complex plane."""
    whole = ctx.mpf([-mpmath.inf, mpmath.inf])
    return ctx.mpc(whole, whole)


def contains_zero(x) -> bool:
    return lower(x) <= 0 <= upper(x)


def contains_nonpositive(x) -> bool:
    return lower(x) <= 0


def is_nonnegative(x) -> bool:
    return lower(x) >= 0


def is_negative(x) -> bool:
    return upper(x) < 0


def is_positive(x) -> bool:
    return lower(x) > 0


def is_real(z) -> bool:
    """True if the imaginary part of the enclosure is exactly zero."""
    if not is_complex(z):
        return True
    return lower(z.imag) == 0 and upper(z.imag) == 0


def contains_int(x) -> bool:
    """True if the real interval contains an integer."""
    lo, hi = x._mpi_
    if not is_finite(x):
        return True
    return mpmath.mp.make_mpf(libmp.mpf_ceil(lo)) <= mpmath.mp.make_mpf(hi)


def floor(x):
    """Exact enclosure of ``floor`` over a finite real interval."""
    lo, hi = x._mpi_
    return x.ctx.make_mpf((libmp.mpf_floor(lo), libmp.mpf_floor(hi)))


def union(x, y):
    """Smallest box containing both enclosures."""
    ctx = x.ctx
    x = to_complex(ctx, x)
    y = to_complex(ctx, y)
    re = ctx.make_mpf(
        (
            min(lower(x.real), lower(y.real))._mpf_,
            max(upper(x.real), upper(y.real))._mpf_,
        )
    )
    im = ctx.make_mpf(
        (
            min(lower(x.imag), lower(y.imag))._mpf_,
            max(upper(x.imag), upper(y.imag))._mpf_,
        )
    )
    return ctx.mpc(re, im)


def error_interval(ctx: MPIntervalContext, bound):
    """The interval ``[-bound, bound]``; ``bound`` may be a number or interval."""
    if not isinstance(bound, mpmath.mpf):
        bound = upper(abs(to_real(ctx, bound)))
    bound = abs(bound)
    return ctx.mpf([-bound, bound])


def add_error(z, bound, imaginary: bool = True):
    """
    Widen an enclosure by ``bound``.

    Parameters
    ----------
    z : ivmpc
        Enclosure to widen.
    bound : number or interval
        Non-negative error bound. Intervals contribute their upper endpoint.
    imaginary : bool
        Also widen the imaginary part (for a bound on ``|error|``). Use
        ``False`` when the error is known to be real.
    """
    ctx = z.ctx
    z = to_complex(ctx, z)
    err = error_interval(ctx, bound)
    if imaginary:
        return ctx.mpc(z.real + err, z.imag + err)
    return ctx.mpc(z.real + err, z.imag)


def ipow(z, n: int):
    """``z**n`` for a non-negative integer ``n`` by binary powering."""
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")

    result = z.ctx.mpf(1)
    base = z
    while n:
        if n & 1:
            result = result * base
        n >>= 1
        if n:
            base = base * base
    return result


def accurate_digits(x) -> int:
    """Number of significant decimal digits of the midpoint the radius allows.

    Returns 0 for an exact enclosure; at least 1 otherwise.
    """
    mid = midpoint(x)
    rad = radius(x)
    if rad == 0:
        return 0
    if mid == 0 or abs(mid) <= rad:
        return 1
    return int(mpmath.floor(mpmath.log10(abs(mid) / rad))) + 1


def format_enclosure(z, digits: int = 15) -> str:
    """
    Format an enclosure as ``mid +/- rad`` (with ``j`` for the imaginary part).

    The midpoint is printed with at most ``digits`` significant digits and
    never with more than the radius certifies.
    """
    def _part(x) -> str:
        if not is_finite(x):
            return "[+/- inf]"
        mid = midpoint(x)
        rad = radius(x)
        shown = accurate_digits(x)
        shown = digits if shown == 0 else min(digits, shown)
        return (
            f"[{mpmath.nstr(mid, shown)} +/- "
            f"{mpmath.nstr(rad, 3)}]"
        )

    if not is_complex(z):
        return _part(z)
    if is_real(z):
        return _part(z.real)
    return f"{_part(z.real)} + {_part(z.imag)}j"


def strictly_contains(outer, inner) -> bool:
    """True if ``inner`` lies in the interior of ``outer`` (real or complex)."""
    if is_complex(outer) or is_complex(inner):
        ctx = outer.ctx
        outer = to_complex(ctx, outer)
        inner = to_complex(ctx, inner)
        return strictly_contains(outer.real, inner.real) and strictly_contains(
            outer.imag, inner.imag
        )
    if not (is_finite(outer) and is_finite(inner)):
        return False
    return lower(outer) < lower(inner) and upper(inner) < upper(outer)
