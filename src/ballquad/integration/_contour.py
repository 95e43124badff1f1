"""Paths, closed contours and post-processing of enclosures.

Edges of a path share one error budget: they are seeded into a single
adaptive run, so the tolerance is spread over the whole path rather than
split evenly between edges of very different difficulty.
"""

import warnings
from typing import Any, Optional, Sequence, Tuple

import mpmath

from ballquad.enclosure import (
    add_error,
    contains_zero,
    interval_context,
    is_finite,
    lower,
    to_complex,
    upper,
)
from ballquad.integrand import Integrand
from ballquad.integration._integrate import integrate_segments
from ballquad.integration._options import IntegrationOptions
from ballquad.integration._result import IntegrationResult
from ballquad.integration._segment import make_segment
from ballquad.quadrature import ResourceExhaustedWarning


def integrate_path_info(
    f: Integrand,
    param: Any,
    vertices: Sequence[Any],
    goal: int,
    tol: Any,
    options: Optional[IntegrationOptions] = None,
    prec: int = 64,
    closed: bool = False,
) -> Tuple[Any, IntegrationResult]:
    """
    Like integrate_path, but also returns the convergence report.
    """
    if len(vertices) < 2:
        raise ValueError(
            f"a path needs at least 2 vertices, got {len(vertices)}"
        )

    ctx = interval_context(prec)
    points = [to_complex(ctx, v) for v in vertices]
    if closed:
        points.append(points[0])
    segments = [make_segment(ctx, a, b) for a, b in zip(points, points[1:])]

    result = integrate_segments(
        f, param, segments, goal, tol, options=options, prec=prec
    )
    return result.value, result


def integrate_path(
    f: Integrand,
    param: Any,
    vertices: Sequence[Any],
    goal: int,
    tol: Any,
    options: Optional[IntegrationOptions] = None,
    prec: int = 64,
    closed: bool = False,
) -> Any:
    """
    Enclose the integral of f along a polygonal path.

    Parameters
    ----------
    f : Integrand
        Integrand.
    param : any
        Opaque integrand parameter.
    vertices : sequence
        Path vertices in order. Consecutive vertices must differ.
    goal, tol, options, prec
        As for :func:`integrate`; the tolerance covers the whole path.
    closed : bool
        Add the edge from the last vertex back to the first.

    Returns
    -------
    ivmpc
        Enclosure of the sum of the edge integrals.

    Warns
    -----
    ResourceExhaustedWarning
        If a limit stopped refinement before the tolerance was met.
    """
    value, result = integrate_path_info(
        f, param, vertices, goal, tol, options, prec, closed
    )
    if not result.converged:
        warnings.warn(
            f"Path integration stopped before reaching the tolerance "
            f"({result.message})",
            ResourceExhaustedWarning,
            stacklevel=2,
        )
    return value


def contour_integral(
    f: Integrand,
    param: Any,
    vertices: Sequence[Any],
    goal: int,
    tol: Any,
    options: Optional[IntegrationOptions] = None,
    prec: int = 64,
) -> Any:
    """Enclose the integral of f around the closed polygon ``vertices``."""
    return integrate_path(
        f, param, vertices, goal, tol, options, prec, closed=True
    )


def divide_by_2pi_i(value):
    """
    Divide an enclosure by ``2 pi i``.

    Turns a contour integral into a residue sum, a Laurent coefficient or,
    for a logarithmic derivative, a zero count.
    """
    ctx = value.ctx
    value = to_complex(ctx, value)
    # multiplying by -i swaps the parts exactly
    rotated = ctx.mpc(value.imag, -value.real)
    return rotated / (2 * ctx.pi)


def scale(value, factor):
    """Multiply an enclosure by an exact or enclosed factor."""
    ctx = value.ctx
    return to_complex(ctx, value) * to_complex(ctx, factor)


def add_tail_bound(value, bound, imaginary: bool = False):
    """
    Widen the enclosure of a truncated integral by a proven tail bound.

    Parameters
    ----------
    value : ivmpc
        Enclosure of the integral over the truncated domain.
    bound : number or interval
        Upper bound for the absolute value of the omitted part.
    imaginary : bool
        Also widen the imaginary part, for complex-valued tails.
    """
    return add_error(value, bound, imaginary=imaginary)


def winding_count(
    log_derivative: Integrand,
    param: Any,
    vertices: Sequence[Any],
    goal: int,
    tol: Any,
    options: Optional[IntegrationOptions] = None,
    prec: int = 64,
) -> Tuple[Optional[int], Any]:
    """
    Count zeros minus poles inside a closed polygon by the argument principle.

    Parameters
    ----------
    log_derivative : Integrand
        Integrand enclosing ``f'(z) / f(z)``.
    vertices : sequence
        Vertices of the closed, positively oriented contour.

    Returns
    -------
    count : int or None
        The unique integer in the enclosure, or None if the enclosure does
        not determine one.
    enclosure : ivmpc
        Enclosure of ``1/(2 pi i)`` times the contour integral.
    """
    value = contour_integral(
        log_derivative, param, vertices, goal, tol, options, prec
    )
    enclosure = divide_by_2pi_i(value)
    if not is_finite(enclosure) or not contains_zero(enclosure.imag):
        return None, enclosure

    lo = mpmath.ceil(lower(enclosure.real))
    hi = mpmath.floor(upper(enclosure.real))
    if lo != hi:
        return None, enclosure
    return int(lo), enclosure
