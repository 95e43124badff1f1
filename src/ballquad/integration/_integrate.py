"""Rigorous adaptive integration along a straight segment."""

import warnings
from typing import Any, Optional, Sequence, Tuple

from ballquad.enclosure import interval_context
from ballquad.integrand import Integrand
from ballquad.integration._controller import AccuracyController
from ballquad.integration._options import IntegrationOptions
from ballquad.integration._queue import ordering_for
from ballquad.integration._result import IntegrationResult
from ballquad.integration._scheduler import Scheduler
from ballquad.integration._segment import Segment, make_segment
from ballquad.quadrature import ResourceExhaustedWarning


def integrate_segments(
    f: Integrand,
    param: Any,
    segments: Sequence[Segment],
    goal: int,
    tol: Any,
    options: Optional[IntegrationOptions] = None,
    prec: int = 64,
) -> IntegrationResult:
    """
    Integrate over a chain of segments sharing one error budget.

    Parameters
    ----------
    f : Integrand
        Integrand.
    param : any
        Opaque integrand parameter.
    segments : sequence of Segment
        Segments made by :func:`make_segment`; their integrals are summed.
    goal : int
        Relative accuracy goal in bits (0 for absolute tolerance only).
    tol : float or mpmath.mpf
        Absolute tolerance.
    options : IntegrationOptions, optional
        Resource limits and verbosity.
    prec : int
        Working precision in bits.

    Returns
    -------
    IntegrationResult
        Enclosure and convergence report.
    """
    if options is None:
        options = IntegrationOptions()
    controller = AccuracyController(goal, tol, options, prec)
    scheduler = Scheduler(f, param, controller, ordering_for(options), prec)
    return scheduler.run(segments)


def integrate_info(
    f: Integrand,
    param: Any,
    a: Any,
    b: Any,
    goal: int,
    tol: Any,
    options: Optional[IntegrationOptions] = None,
    prec: int = 64,
) -> Tuple[Any, IntegrationResult]:
    """
    Like integrate, but also returns the convergence report.

    Returns
    -------
    value : ivmpc
        Enclosure of the integral.
    result : IntegrationResult
        Report with ``converged``, ``status``, ``num_eval``,
        ``num_segments``, ``max_depth`` and ``tolerance``.
    """
    ctx = interval_context(prec)
    segment = make_segment(ctx, a, b)
    result = integrate_segments(
        f, param, [segment], goal, tol, options=options, prec=prec
    )
    return result.value, result


def integrate(
    f: Integrand,
    param: Any,
    a: Any,
    b: Any,
    goal: int,
    tol: Any,
    options: Optional[IntegrationOptions] = None,
    prec: int = 64,
) -> Any:
    """
    Compute a rigorous enclosure of the integral of f from a to b.

    The path is the straight line from ``a`` to ``b`` in the complex plane.
    The integrand is subdivided adaptively; on each piece it is enclosed
    either directly or by Gauss-Legendre quadrature with a proven remainder
    bound, so the result always contains the exact integral.

    Parameters
    ----------
    f : Integrand
        Callable ``f(z, param, order, prec)``; see
        :mod:`ballquad.integrand`.
    param : any
        Opaque value passed to every call of ``f``.
    a, b : number, str or enclosure
        Endpoints. ``b - a`` must not contain zero.
    goal : int
        Relative accuracy goal in bits. The target radius is
        ``max(tol, 2**-goal * |I|)``; ``goal=0`` uses ``tol`` alone.
    tol : float or mpmath.mpf
        Absolute tolerance.
    options : IntegrationOptions, optional
        Resource limits and verbosity.
    prec : int
        Working precision in bits.

    Returns
    -------
    ivmpc
        Enclosure of the integral.

    Raises
    ------
    ValueError
        If ``a == b`` or ``goal`` or ``tol`` is negative.
    IntegrandContractViolation
        If the integrand is asked for an order it does not support.

    Warns
    -----
    ResourceExhaustedWarning
        If a limit stopped refinement before the tolerance was met. The
        enclosure is still correct but wider than requested.

    Examples
    --------
    >>> f = as_integrand(lambda z: 4 / (1 + z * z))
    >>> integrate(f, None, 0, 1, 0, 1e-10)  # contains pi
    """
    value, result = integrate_info(
        f, param, a, b, goal, tol, options=options, prec=prec
    )

    if not result.converged:
        warnings.warn(
            f"Integration stopped before reaching the tolerance "
            f"({result.message})",
            ResourceExhaustedWarning,
            stacklevel=2,
        )

    return value
