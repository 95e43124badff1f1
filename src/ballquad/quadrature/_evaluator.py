"""Rigorous per-segment evaluation.

A segment is first probed for analyticity on boxes enclosing Bernstein
ellipses around it. A bound ``M`` on ``|f|`` over an ellipse with parameter
``rho`` gives the Gauss-Legendre remainder bound (Trefethen, 2008)

    |I - G_n| <= 64/15 * M * |delta| * rho^(-2n) / (rho^2 - 1)

for the segment with half-length ``delta``. The degree is doubled until this
bound fits the segment's tolerance; only then are the nodes evaluated.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Tuple

import mpmath

from ballquad.enclosure import (
    add_error,
    interval_context,
    ipow,
    is_finite,
    magnitude_upper,
    radius,
    to_complex,
    union,
    upper,
)
from ballquad.integrand import Integrand, IntegrandRequest, Order, evaluate
from ballquad.quadrature._exceptions import IntegrationError
from ballquad.quadrature._rules import gauss_legendre

logger = logging.getLogger(__name__)

# Bernstein ellipse parameters tried by the analyticity probe
ELLIPSE_RHOS = ("1.25", "2", "4", "8")

# share of the tolerance given to each of the real and imaginary remainder
REMAINDER_SHARE = mpmath.mpf(3) / 8

CONVERGED = "converged"
TOLERANCE_NOT_MET = "tolerance"
INDETERMINATE = "indeterminate"


@dataclass(frozen=True)
class SegmentEstimate:
    """
    Outcome of evaluating one segment.

    Attributes
    ----------
    value : ivmpc or None
        Enclosure of the segment integral, None when no enclosure was formed.
    error : mpmath.mpf
        Radius of ``value`` (infinite when ``value`` is None).
    degree : int
        Quadrature degree used; 0 for a direct enclosure.
    num_eval : int
        Number of integrand evaluations consumed.
    status : str
        ``"converged"``, ``"tolerance"`` (the bound exceeds the tolerance at
        the degree limit) or ``"indeterminate"`` (analyticity could not be
        certified or a node evaluation failed).
    """

    value: Optional[Any]
    error: Any
    degree: int
    num_eval: int
    status: str

    @property
    def converged(self) -> bool:
        return self.status == CONVERGED


def direct_estimate(
    f: Integrand, param: Any, a: Any, b: Any, prec: int
) -> SegmentEstimate:
    """
    Enclose the integral as ``(b - a) * f(hull(a, b))``.

    Always sound; tight only when f varies little over the segment.
    """
    ctx = interval_context(prec)
    a = to_complex(ctx, a)
    b = to_complex(ctx, b)
    region = union(a, b)
    value = evaluate(f, IntegrandRequest(region, Order.VALUE, prec), param)
    value = (b - a) * value
    status = CONVERGED if is_finite(value) else INDETERMINATE
    return SegmentEstimate(value, radius(value), 0, 1, status)


def ellipse_region(a: Any, b: Any, rho: Any):
    """
    Box containing the Bernstein ellipse with parameter ``rho`` of a segment.

    The ellipse has foci ``a`` and ``b`` and semi-axes
    ``|delta| (rho + 1/rho) / 2`` and ``|delta| (rho - 1/rho) / 2``.
    """
    ctx = a.ctx
    rho = ctx.mpf(rho)
    semi_major = upper((rho + 1 / rho) / 2)
    semi_minor = upper((rho - 1 / rho) / 2)
    box = ctx.mpc(
        ctx.mpf([-semi_major, semi_major]),
        ctx.mpf([-semi_minor, semi_minor]),
    )
    delta = (b - a) / 2
    mid = (a + b) / 2
    return mid + delta * box


def remainder_bound(bound_f: Any, delta: Any, rho: Any, n: int):
    """Interval enclosure of the Gauss-Legendre remainder bound."""
    ctx = delta.ctx
    rho = ctx.mpf(rho)
    rho2 = rho * rho
    return (
        ctx.mpf(64)
        / 15
        * ctx.mpf(bound_f)
        * abs(delta)
        / (ipow(rho2, n) * (rho2 - 1))
    )


def candidate_degrees(deg_limit: int) -> Iterator[int]:
    """Degrees 2, 4, 8, ... below ``deg_limit``, then ``deg_limit`` itself."""
    degree = 2
    while degree < deg_limit:
        yield degree
        degree *= 2
    if deg_limit >= 1:
        yield deg_limit


def probe_analyticity(
    f: Integrand, param: Any, a: Any, b: Any, prec: int
) -> Tuple[List[Tuple[Any, Any]], int]:
    """
    Bound ``|f|`` on ellipses around the segment.

    Returns
    -------
    bounds : list of (rho, M)
        Ellipse parameters on which f was certified holomorphic, with an
        upper bound ``M`` for ``|f|`` there.
    num_eval : int
        Number of probes made.
    """
    bounds = []
    num_eval = 0
    for rho in ELLIPSE_RHOS:
        region = ellipse_region(a, b, rho)
        request = IntegrandRequest(region, Order.ANALYTICITY_PROBE, prec)
        value = evaluate(f, request, param)
        num_eval += 1
        if is_finite(value):
            bounds.append((rho, magnitude_upper(value)))
    return bounds, num_eval


def estimate_segment(
    f: Integrand,
    param: Any,
    a: Any,
    b: Any,
    tol: Any,
    deg_limit: int,
    prec: int,
    verbose: int = 0,
) -> SegmentEstimate:
    """
    Enclose the integral over one segment with Gauss-Legendre quadrature.

    Parameters
    ----------
    f : Integrand
        Integrand.
    param : any
        Opaque integrand parameter.
    a, b : ivmpc
        Segment endpoints.
    tol : mpmath.mpf
        Radius the segment enclosure should not exceed.
    deg_limit : int
        Largest quadrature degree to use.
    prec : int
        Working precision in bits.
    verbose : int
        Log the chosen degree and bound at INFO when >= 2.

    Returns
    -------
    SegmentEstimate
        Converged enclosure, or the reason it could not be formed.
    """
    ctx = interval_context(prec)
    a = to_complex(ctx, a)
    b = to_complex(ctx, b)
    delta = (b - a) / 2

    bounds, num_eval = probe_analyticity(f, param, a, b, prec)
    if not bounds:
        return SegmentEstimate(None, mpmath.inf, 0, num_eval, INDETERMINATE)

    target = REMAINDER_SHARE * tol
    chosen = None
    degree = 0
    for degree in candidate_degrees(deg_limit):
        for rho, bound_f in bounds:
            err = remainder_bound(bound_f, delta, rho, degree)
            if upper(err) <= target:
                chosen = (rho, err)
                break
        if chosen is not None:
            break

    if chosen is None:
        return SegmentEstimate(
            None, mpmath.inf, degree, num_eval, TOLERANCE_NOT_MET
        )

    rho, err = chosen
    try:
        value, n = gauss_legendre(degree).integrate(f, param, a, b, prec)
    except IntegrationError as exc:
        logger.debug("no certified rule of degree %d: %s", degree, exc)
        return SegmentEstimate(
            None, mpmath.inf, degree, num_eval, TOLERANCE_NOT_MET
        )
    num_eval += n
    if value is None:
        return SegmentEstimate(
            None, mpmath.inf, degree, num_eval, INDETERMINATE
        )

    value = add_error(value, err)
    error = radius(value)
    status = CONVERGED if error <= tol else TOLERANCE_NOT_MET
    if verbose >= 2:
        logger.info(
            "degree %d, rho %s, remainder %s, radius %s (%s)",
            degree,
            rho,
            mpmath.nstr(upper(err), 5),
            mpmath.nstr(error, 5),
            status,
        )
    return SegmentEstimate(value, error, degree, num_eval, status)
