"""Quadrature rule classes."""

import functools
from typing import Any, Optional, Tuple

from ballquad.enclosure import (
    contains_zero,
    interval_context,
    is_finite,
    to_complex,
)
from ballquad.integrand import Integrand, IntegrandRequest, Order, evaluate
from ballquad.quadrature._nodes import certified_gauss_legendre


class GaussLegendre:
    """
    Gauss-Legendre quadrature rule with certified nodes and weights.

    Exact for polynomials of degree <= 2n-1. The rule maps its nodes onto the
    straight line from ``a`` to ``b`` in the complex plane and evaluates the
    integrand at order 0 in each node.

    Parameters
    ----------
    n : int
        Number of quadrature points.

    Examples
    --------
    >>> rule = GaussLegendre(16)
    >>> value, num_eval = rule.integrate(f, None, 0, 1, prec=64)

    Attributes
    ----------
    n : int
        Number of points.
    """

    def __init__(self, n: int):
        if n < 1:
            raise ValueError(f"n must be at least 1, got {n}")
        self.n = n

    def nodes_and_weights(self, prec: int) -> Tuple[tuple, tuple]:
        """Non-negative half of the certified rule on [-1, 1]."""
        return certified_gauss_legendre(self.n, prec)

    def integrate(
        self,
        f: Integrand,
        param: Any,
        a: Any,
        b: Any,
        prec: int,
    ) -> Tuple[Optional[Any], int]:
        """
        Enclose the weighted node sum for the segment from a to b.

        The sum is not an enclosure of the integral on its own; the caller adds
        the remainder bound of the rule.

        Parameters
        ----------
        f : Integrand
            Integrand.
        param : any
            Opaque integrand parameter.
        a, b : number or enclosure
            Segment endpoints.
        prec : int
            Working precision in bits.

        Returns
        -------
        value : ivmpc or None
            Enclosure of the node sum, or None if a node evaluation was
            indeterminate.
        num_eval : int
            Number of integrand evaluations used.
        """
        ctx = interval_context(prec)
        a = to_complex(ctx, a)
        b = to_complex(ctx, b)
        delta = (b - a) / 2
        mid = (a + b) / 2

        nodes, weights = self.nodes_and_weights(prec)
        total = to_complex(ctx, 0)
        num_eval = 0
        for x, w in zip(nodes, weights):
            if contains_zero(x):
                points = [mid]
            else:
                points = [mid + delta * x, mid - delta * x]
            for z in points:
                request = IntegrandRequest(z, Order.VALUE, prec)
                value = evaluate(f, request, param)
                num_eval += 1
                if not is_finite(value):
                    return None, num_eval
                total = total + w * value

        return delta * total, num_eval


@functools.lru_cache(maxsize=None)
def gauss_legendre(n: int) -> GaussLegendre:
    """Shared rule instance for ``n`` points."""
    return GaussLegendre(n)
