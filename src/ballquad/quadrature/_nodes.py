"""Node and weight computation for Gauss-Legendre quadrature."""

import functools
import math
from typing import Optional, Tuple

import mpmath
import torch
from torch import Tensor

from ballquad.enclosure import (
    interval_context,
    midpoint,
    strictly_contains,
    to_real,
    upper,
)
from ballquad.quadrature._exceptions import IntegrationError


def gauss_legendre_nodes_weights(
    n: int,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> Tuple[Tensor, Tensor]:
    """
    Compute approximate Gauss-Legendre nodes and weights on [-1, 1].

    Uses the Golub-Welsch algorithm (eigenvalues of symmetric tridiagonal
    matrix). The result is a floating-point approximation; see
    :func:`certified_gauss_legendre` for enclosures.

    Parameters
    ----------
    n : int
        Number of quadrature points.
    dtype : torch.dtype
        Data type for output tensors.
    device : torch.device, optional
        Device for output tensors.

    Returns
    -------
    nodes : Tensor
        Quadrature nodes, shape (n,), sorted ascending.
    weights : Tensor
        Quadrature weights, shape (n,).

    Raises
    ------
    ValueError
        If n < 1.

    References
    ----------
    Golub, G. H., & Welsch, J. H. (1969). Calculation of Gauss quadrature rules.
    Mathematics of Computation, 23(106), 221-230.
    """
    if n < 1:
        raise ValueError(f"n must be at least 1, got {n}")

    if n == 1:
        return (
            torch.tensor([0.0], dtype=dtype, device=device),
            torch.tensor([2.0], dtype=dtype, device=device),
        )

    # Jacobi matrix for Legendre: diagonal = 0, off-diagonal[k] = k / sqrt(4k^2 - 1)
    k = torch.arange(1, n, dtype=dtype, device=device)
    off_diag = k / torch.sqrt(4 * k**2 - 1)

    T = torch.diag(off_diag, diagonal=1) + torch.diag(off_diag, diagonal=-1)

    eigenvalues, eigenvectors = torch.linalg.eigh(T)

    nodes = eigenvalues
    weights = 2 * eigenvectors[0, :] ** 2

    sorted_idx = torch.argsort(nodes)
    return nodes[sorted_idx], weights[sorted_idx]


def _legendre_torch(n: int, x: Tensor) -> Tuple[Tensor, Tensor]:
    """Return (P_n(x), P_n'(x)) by the three-term recurrence."""
    p0 = torch.ones_like(x)
    p1 = x
    for k in range(1, n):
        p0, p1 = p1, ((2 * k + 1) * x * p1 - k * p0) / (k + 1)
    dp = n * (x * p1 - p0) / (x * x - 1)
    return p1, dp


def polished_nonnegative_nodes(n: int, steps: int = 2) -> Tensor:
    """
    Float64 approximations of the non-negative Legendre roots.

    Golub-Welsch eigenvalues polished by vectorised Newton steps on P_n.
    For odd ``n`` the first entry is exactly zero.
    """
    nodes, _ = gauss_legendre_nodes_weights(n)
    x = nodes[n // 2 :].clone()
    if n % 2 == 1:
        x[0] = 0.0
    for _ in range(steps):
        p, dp = _legendre_torch(n, x)
        step = torch.where(x == 0, torch.zeros_like(x), p / dp)
        x = x - step
    return x


def _legendre(ctx, n: int, x):
    """Interval enclosures of (P_n(x), P_{n-1}(x))."""
    p0 = ctx.mpf(1)
    p1 = x
    for k in range(1, n):
        p0, p1 = p1, ((2 * k + 1) * x * p1 - k * p0) / (k + 1)
    return p1, p0


def _legendre_derivative(ctx, n: int, x):
    pn, pn1 = _legendre(ctx, n, x)
    return n * (x * pn - pn1) / (x * x - 1)


def _certify_root(ctx, n: int, x0: float, prec: int):
    """Refine an approximate root of P_n and enclose it by interval Newton."""
    x = ctx.mpf(x0)
    if x0 == 0.0:
        return x

    # each point Newton step doubles the number of correct bits
    steps = max(1, math.ceil(math.log2(prec / 48.0)) + 1)
    for _ in range(steps):
        pn, pn1 = _legendre(ctx, n, x)
        dp = n * (x * pn - pn1) / (x * x - 1)
        x = ctx.mpf(midpoint(x - pn / dp))

    xm = ctx.mpf(midpoint(x))
    pm, pm1 = _legendre(ctx, n, xm)
    dm = n * (xm * pm - pm1) / (xm * xm - 1)
    # the initial radius must cover the rounding noise in P_n(xm)
    r = ctx.mpf(mpmath.ldexp(1, 8 - prec)) * (1 + abs(xm))
    r = ctx.mpf(upper(r + 4 * abs(pm) / abs(dm)))
    for _ in range(6):
        X = xm + ctx.mpf([-1, 1]) * r
        N = xm - pm / _legendre_derivative(ctx, n, X)
        if strictly_contains(X, N):
            return N
        r = r * 16

    raise IntegrationError(
        f"could not certify Gauss-Legendre node near {x0!r} for n={n}"
    )


@functools.lru_cache(maxsize=256)
def certified_gauss_legendre(n: int, prec: int) -> Tuple[tuple, tuple]:
    """
    Certified Gauss-Legendre nodes and weights on [-1, 1].

    Only the non-negative half is returned; the rule is symmetric. Each node
    is an interval proven (by the interval Newton operator) to contain
    exactly one root of P_n, and each weight encloses
    ``2 / ((1 - x^2) P_n'(x)^2)`` over that interval.

    Parameters
    ----------
    n : int
        Number of quadrature points.
    prec : int
        Working precision of the returned intervals, in bits.

    Returns
    -------
    nodes : tuple of ivmpf
        Non-negative nodes, ascending. For odd ``n`` the first node is 0.
    weights : tuple of ivmpf
        Matching weights.

    Raises
    ------
    ValueError
        If n < 1.
    IntegrationError
        If a node cannot be certified.
    """
    if n < 1:
        raise ValueError(f"n must be at least 1, got {n}")

    # interval evaluation of the recurrence loses up to log2(1 + sqrt 2)
    # bits per step, once for P_n(xm) and once more over the Newton box
    wprec = prec + 3 * n + 2 * n.bit_length() + 16
    wctx = interval_context(wprec)
    ctx = interval_context(prec)

    nodes = []
    weights = []
    for x0 in polished_nonnegative_nodes(n).tolist():
        X = _certify_root(wctx, n, x0, wprec)
        dp = _legendre_derivative(wctx, n, X)
        w = 2 / ((1 - X * X) * dp * dp)
        nodes.append(to_real(ctx, X))
        weights.append(to_real(ctx, w))

    return tuple(nodes), tuple(weights)
