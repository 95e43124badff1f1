"""Catalogue of example integrals.

Every integrand follows the ``f(z, param, order, prec)`` contract. The
docstring of each one names where it fails to be holomorphic; entire
integrands have no such locus and poles are caught by interval division
returning an infinite enclosure.
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, List

import mpmath

from ballquad.enclosure import (
    contains_zero,
    interval_context,
    ipow,
    is_finite,
    is_positive,
    is_real,
)
from ballquad.examples._zeta import zeta
from ballquad.integrand import (
    Order,
    check_order,
    holomorphic_abs,
    holomorphic_floor,
    holomorphic_lambertw,
    holomorphic_log,
    holomorphic_sqrt,
)
from ballquad.integration import (
    IntegrationOptions,
    add_tail_bound,
    contour_integral,
    divide_by_2pi_i,
    integrate,
    scale,
)


def _sech(z):
    ctx = z.ctx
    return 2 / (ctx.exp(z) + ctx.exp(-z))


def f_sin(z, param, order, prec):
    """sin(z). Entire."""
    check_order(order)
    return z.ctx.sin(z)


def f_atanderiv(z, param, order, prec):
    """1/(1+z^2). Poles at +-i."""
    check_order(order)
    return 1 / (1 + z * z)


def f_circle(z, param, order, prec):
    """sqrt(1-z^2). Branch cuts on the real axis outside (-1, 1)."""
    check_order(order)
    res = holomorphic_sqrt(1 - z * z, order != Order.VALUE)
    # on [-1, 1] rounding may put 1 - z^2 slightly below zero
    if order == Order.VALUE and is_finite(res):
        res = z.ctx.mpc(res.real, 0)
    return res


def f_rump(z, param, order, prec):
    """sin(z + exp(z)). Entire."""
    check_order(order)
    ctx = z.ctx
    return ctx.sin(z + ctx.exp(z))


def f_floor(z, param, order, prec):
    """floor(z). Not holomorphic on vertical lines through the integers."""
    check_order(order)
    return holomorphic_floor(z, order != Order.VALUE)


def f_helfgott(z, param, order, prec):
    """
    |z^4 + 10z^3 + 19z^2 - 6z - 6| exp(z) for real z.

    Not holomorphic where the real part of the polynomial changes sign.
    """
    check_order(order)
    p = (((z + 10) * z + 19) * z - 6) * z - 6
    res = holomorphic_abs(p, order != Order.VALUE)
    if is_finite(res):
        res = res * z.ctx.exp(z)
    return res


def f_zeta(z, param, order, prec):
    """zeta(z). Pole at z = 1."""
    check_order(order)
    return zeta(z)


def f_essing(z, param, order, prec):
    """sin(1/z), assuming a real path. Essential singularity at 0."""
    check_order(order)
    ctx = z.ctx
    if order == Order.VALUE and is_real(z) and contains_zero(z.real):
        return ctx.mpc(ctx.mpf([-1, 1]), 0)
    return ctx.sin(1 / z)


def f_essing2(z, param, order, prec):
    """z sin(1/z), assuming a real path. Essential singularity at 0."""
    return f_essing(z, param, order, prec) * z


def f_factorial1000(z, param, order, prec):
    """exp(-z) z^1000. Entire."""
    check_order(order)
    return ipow(z, 1000) * z.ctx.exp(-z)


def f_gamma(z, param, order, prec):
    """gamma(z). Only evaluated in the right half plane, where it is
    holomorphic; regions touching Re(z) <= 0 are indeterminate."""
    check_order(order)
    if not is_positive(z.real):
        return None
    ctx = z.ctx
    if is_real(z):
        # the complex interval gamma does not accept boxes on the real axis
        return ctx.mpc(ctx.gamma(z.real), 0)
    return ctx.gamma(z)


def f_sin_plus_small(z, param, order, prec):
    """sin(z) + exp(-200-z^2). Entire."""
    check_order(order)
    ctx = z.ctx
    return ctx.sin(z) + ctx.exp(-200 - z * z)


def f_exp(z, param, order, prec):
    """exp(z). Entire."""
    check_order(order)
    return z.ctx.exp(z)


def f_gaussian(z, param, order, prec):
    """exp(-z^2). Entire."""
    check_order(order)
    return z.ctx.exp(-z * z)


def f_monster(z, param, order, prec):
    """
    (exp(z) - floor(exp(z))) sin(z + exp(z)).

    Not holomorphic where the real part of exp(z) is an integer.
    """
    check_order(order)
    ctx = z.ctx
    t = ctx.exp(z)
    res = holomorphic_floor(t, order != Order.VALUE)
    if is_finite(res):
        res = (t - res) * ctx.sin(t + z)
    return res


def f_wolfram(z, param, order, prec):
    """
    sech(10(z-0.2))^2 + sech(100(z-0.4))^4 + sech(1000(z-0.6))^6.

    Poles where a cosh vanishes, closest to the real axis near 0.6.
    """
    check_order(order)
    a = ipow(_sech(10 * z - 2), 2)
    b = ipow(_sech(100 * z - 40), 4)
    c = ipow(_sech(1000 * z - 600), 6)
    return a + b + c


def f_sech(z, param, order, prec):
    """sech(z). Poles at i pi (k + 1/2)."""
    check_order(order)
    return _sech(z)


def f_sech3(z, param, order, prec):
    """sech(z)^3. Poles at i pi (k + 1/2)."""
    check_order(order)
    return ipow(_sech(z), 3)


def f_log_div1p(z, param, order, prec):
    """-log(z)/(1+z). Branch cut on the non-positive real axis."""
    check_order(order)
    res = holomorphic_log(z, order != Order.VALUE)
    if is_finite(res):
        res = -res / (1 + z)
    return res


def f_log_div1p_transformed(z, param, order, prec):
    """z exp(-z)/(1+exp(-z)). Poles at i pi (2k + 1)."""
    check_order(order)
    t = z.ctx.exp(-z)
    return z * t / (1 + t)


def f_cot(z, param, order, prec):
    """cos(z)/sin(z), the logarithmic derivative of sin. Poles at k pi."""
    check_order(order)
    ctx = z.ctx
    return ctx.cos(z) / ctx.sin(z)


def f_lambertw(z, param, order, prec):
    """W_0(z). Branch cut on the real axis at or below -1/e."""
    check_order(order)
    return holomorphic_lambertw(z, order != Order.VALUE)


@dataclass(frozen=True)
class Example:
    """
    An entry of the catalogue.

    Attributes
    ----------
    description : str
        Formula of the integral.
    compute : callable
        ``compute(goal, tol, options, prec)`` returning an enclosure.
    """

    description: str
    compute: Callable[[int, Any, IntegrationOptions, int], Any]

    def __call__(self, goal, tol, options=None, prec=64):
        if options is None:
            options = IntegrationOptions()
        return self.compute(goal, tol, options, prec)


def _segment(f, a, b, factor=None):
    def compute(goal, tol, options, prec):
        value = integrate(f, None, a, b, goal, tol, options, prec)
        if factor is not None:
            value = scale(value, factor)
        return value

    return compute


def _atan_tail(goal, tol, options, prec):
    ctx = interval_context(prec)
    b = ctx.mpf(mpmath.ldexp(1, goal))
    value = integrate(f_atanderiv, None, 0, b, goal, tol, options, prec)
    # int_B^inf 1/(1+x^2) dx < 1/B
    value = add_tail_bound(value, 1 / b)
    return scale(value, 2)


def _zeta_contour(goal, tol, options, prec):
    vertices = [-1 - 1j, 2 - 1j, 2 + 1j, -1 + 1j]
    value = contour_integral(f_zeta, None, vertices, goal, tol, options, prec)
    return divide_by_2pi_i(value)


def _gaussian_tail(goal, tol, options, prec):
    ctx = interval_context(prec)
    b = math.ceil(math.sqrt(goal * 0.693147181) + 1.0)
    value = integrate(f_gaussian, None, 0, b, goal, tol, options, prec)
    # int_B^inf exp(-x^2) dx < exp(-B^2) for B >= 1
    return add_tail_bound(value, ctx.exp(-ctx.mpf(b * b)))


def _sech_tail(goal, tol, options, prec):
    ctx = interval_context(prec)
    b = math.ceil(goal * 0.693147181 + 1.0)
    value = integrate(f_sech, None, 0, b, goal, tol, options, prec)
    # sech(x) < 2 exp(-x)
    return add_tail_bound(value, 2 * ctx.exp(-ctx.mpf(b)))


def _sech3_tail(goal, tol, options, prec):
    ctx = interval_context(prec)
    b = math.ceil(goal * 0.693147181 / 3.0 + 2.0)
    value = integrate(f_sech3, None, 0, b, goal, tol, options, prec)
    # sech(x)^3 < 8 exp(-3x)
    return add_tail_bound(value, 8 * ctx.exp(-3 * ctx.mpf(b)) / 3)


def _log_div1p_tail(goal, tol, options, prec):
    ctx = interval_context(prec)
    n = max(1, goal + goal.bit_length())
    a = ctx.mpf(mpmath.ldexp(1, -n))
    value = integrate(f_log_div1p, None, a, 1, goal, tol, options, prec)
    # int_0^eps -log(x)/(1+x) dx < eps (1 - log(eps)) <= 2^-N (1 + N)
    return add_tail_bound(value, (n + 1) * a)


def _log_div1p_transformed_tail(goal, tol, options, prec):
    ctx = interval_context(prec)
    n = max(1, goal + goal.bit_length())
    value = integrate(
        f_log_div1p_transformed, None, 0, n, goal, tol, options, prec
    )
    # int_N^inf x exp(-x) dx = (N + 1) exp(-N)
    return add_tail_bound(value, (n + 1) * ctx.exp(-ctx.mpf(n)))


def _sin_zero_count(goal, tol, options, prec):
    vertices = [-4 - 1j, 4 - 1j, 4 + 1j, -4 + 1j]
    value = contour_integral(f_cot, None, vertices, goal, tol, options, prec)
    return divide_by_2pi_i(value)


CATALOGUE: List[Example] = [
    Example("int_0^100 sin(x) dx", _segment(f_sin, 0, 100)),
    Example("4 int_0^1 1/(1+x^2) dx", _segment(f_atanderiv, 0, 1, 4)),
    Example(
        "2 int_0^{inf} 1/(1+x^2) dx   (using domain truncation)",
        _atan_tail,
    ),
    Example("4 int_0^1 sqrt(1-x^2) dx", _segment(f_circle, 0, 1, 4)),
    Example("int_0^8 sin(x+exp(x)) dx", _segment(f_rump, 0, 8)),
    Example("int_1^101 floor(x) dx", _segment(f_floor, 1, 101)),
    Example(
        "int_0^1 |x^4+10x^3+19x^2-6x-6| exp(x) dx",
        _segment(f_helfgott, 0, 1),
    ),
    Example(
        "1/(2 pi i) int zeta(s) ds  (closed path around s = 1)",
        _zeta_contour,
    ),
    Example(
        "int_0^1 sin(1/x) dx  (slow convergence, use -heap and/or -tol)",
        _segment(f_essing, 0, 1),
    ),
    Example(
        "int_0^1 x sin(1/x) dx  (slow convergence, use -heap and/or -tol)",
        _segment(f_essing2, 0, 1),
    ),
    Example(
        "int_0^10000 x^1000 exp(-x) dx",
        _segment(f_factorial1000, 0, 10000),
    ),
    Example(
        "int_1^{1+1000i} gamma(x) dx", _segment(f_gamma, 1, 1 + 1000j)
    ),
    Example(
        "int_{-10}^{10} sin(x) + exp(-200-x^2) dx",
        _segment(f_sin_plus_small, -10, 10),
    ),
    Example(
        "int_{-1020}^{-1010} exp(x) dx  (use -tol 0 for relative error)",
        _segment(f_exp, -1020, -1010),
    ),
    Example(
        "int_0^{inf} exp(-x^2) dx   (using domain truncation)",
        _gaussian_tail,
    ),
    Example(
        "int_0^1 sech(10(x-0.2))^2 + sech(100(x-0.4))^4 "
        "+ sech(1000(x-0.6))^6 dx",
        _segment(f_wolfram, 0, 1),
    ),
    Example(
        "int_0^8 (exp(x)-floor(exp(x))) sin(x+exp(x)) dx  "
        "(use higher -eval)",
        _segment(f_monster, 0, 8),
    ),
    Example(
        "int_0^{inf} sech(x) dx   (using domain truncation)", _sech_tail
    ),
    Example(
        "int_0^{inf} sech^3(x) dx   (using domain truncation)", _sech3_tail
    ),
    Example(
        "int_0^1 -log(x)/(1+x) dx   (using domain truncation)",
        _log_div1p_tail,
    ),
    Example(
        "int_0^{inf} x exp(-x)/(1+exp(-x)) dx   (using domain truncation)",
        _log_div1p_transformed_tail,
    ),
    Example(
        "1/(2 pi i) int cot(z) dz  (zeros of sin in [-4,4]x[-1,1] "
        "by the argument principle)",
        _sin_zero_count,
    ),
    Example("int_0^{1000} W_0(x) dx", _segment(f_lambertw, 0, 1000)),
]
