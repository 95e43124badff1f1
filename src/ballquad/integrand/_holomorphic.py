"""Holomorphic extensions of piecewise functions.

Each helper takes an enclosure ``z`` and a ``holomorphic`` flag (true for
analyticity probes). With the flag set, the helper returns the indeterminate
enclosure whenever ``z`` meets the function's non-analytic locus; otherwise it
returns a conservative enclosure of the function's values on ``z``.

Non-analytic loci:

- ``holomorphic_abs``: the imaginary axis (real part containing 0).
- ``holomorphic_floor``: vertical lines through the integers (real part
  containing an integer).
- ``holomorphic_sqrt``, ``holomorphic_log``: the non-positive real axis
  (imaginary part containing 0 while the real part contains a non-positive
  number).
"""

from ballquad.enclosure import (
    contains_int,
    contains_nonpositive,
    contains_zero,
    error_interval,
    floor,
    indeterminate,
    is_finite,
    is_negative,
    is_nonnegative,
    is_real,
    magnitude_upper,
    to_complex,
    union,
)


def on_branch_cut(z) -> bool:
    """True if ``z`` meets the non-positive real axis."""
    return contains_zero(z.imag) and contains_nonpositive(z.real)


def holomorphic_abs(z, holomorphic: bool):
    """Absolute value on R, extended holomorphically to the half planes."""
    ctx = z.ctx
    z = to_complex(ctx, z)
    if not is_finite(z) or (holomorphic and contains_zero(z.real)):
        return indeterminate(ctx)
    if is_nonnegative(z.real):
        return z
    if is_negative(z.real):
        return -z
    return union(z, -z)


def holomorphic_floor(z, holomorphic: bool):
    """Floor on R, extended to a piecewise constant function on strips."""
    ctx = z.ctx
    z = to_complex(ctx, z)
    if not is_finite(z) or (holomorphic and contains_int(z.real)):
        return indeterminate(ctx)
    return ctx.mpc(floor(z.real), z.imag)


def _disk_sqrt(z):
    # principal square roots of any point of z lie in the right half disk
    ctx = z.ctx
    r = ctx.sqrt(ctx.mpf(magnitude_upper(z)))
    re = ctx.mpf([0, 1]) * r
    return ctx.mpc(re, error_interval(ctx, r))


def holomorphic_sqrt(z, holomorphic: bool):
    """Principal square root with detection of the branch cut."""
    ctx = z.ctx
    z = to_complex(ctx, z)
    if not is_finite(z) or (holomorphic and on_branch_cut(z)):
        return indeterminate(ctx)
    if is_real(z):
        if is_nonnegative(z.real):
            return ctx.mpc(ctx.sqrt(z.real), 0)
        if is_negative(z.real):
            return ctx.mpc(0, ctx.sqrt(-z.real))
    if on_branch_cut(z):
        return _disk_sqrt(z)
    return ctx.exp(ctx.ln(z) / 2)


def holomorphic_log(z, holomorphic: bool):
    """Principal logarithm with detection of the branch cut."""
    ctx = z.ctx
    z = to_complex(ctx, z)
    if not is_finite(z) or (holomorphic and on_branch_cut(z)):
        return indeterminate(ctx)
    if contains_zero(z.real) and contains_zero(z.imag):
        return indeterminate(ctx)
    if is_real(z) and is_nonnegative(z.real):
        return ctx.mpc(ctx.ln(z.real), 0)
    if on_branch_cut(z):
        return ctx.mpc(ctx.ln(abs(z)), error_interval(ctx, ctx.mpf(ctx.pi)))
    return ctx.ln(z)
