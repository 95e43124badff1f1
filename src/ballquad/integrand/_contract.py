"""The integrand contract.

An integrand is any callable ``f(z, param, order, prec)`` where ``z`` is a
complex enclosure (a point or a wide region), ``param`` is an opaque value
passed through unchanged, ``order`` selects the kind of request and ``prec``
is the working precision in bits.

``order == 0`` asks for an enclosure of f over ``z``. ``order == 1`` asks for
an enclosure of f over ``z`` that also certifies f is holomorphic on ``z``;
the integrand returns ``None`` (or any non-finite enclosure) when it cannot
certify that, e.g. when ``z`` touches a branch cut. Any other order is a
contract violation and must raise :class:`IntegrandContractViolation`.
"""

import enum
import functools
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ballquad.enclosure import indeterminate, interval_context, to_complex
from ballquad.integrand._exceptions import IntegrandContractViolation

Integrand = Callable[[Any, Any, int, int], Optional[Any]]


class Order(enum.IntEnum):
    """Kinds of integrand request."""

    VALUE = 0
    ANALYTICITY_PROBE = 1


@dataclass(frozen=True)
class IntegrandRequest:
    """
    A single request to an integrand.

    Attributes
    ----------
    z : ivmpc
        Evaluation point or region.
    order : Order
        ``Order.VALUE`` for a plain enclosure, ``Order.ANALYTICITY_PROBE`` to
        also certify holomorphy on ``z``.
    prec : int
        Working precision in bits.
    """

    z: Any
    order: Order
    prec: int

    @property
    def holomorphic(self) -> bool:
        """True if the integrand must certify holomorphy."""
        return self.order != Order.VALUE

    @property
    def ctx(self):
        return interval_context(self.prec)


def check_order(order: int) -> None:
    """
    Enforce the order contract.

    Raises
    ------
    IntegrandContractViolation
        If ``order`` is neither 0 nor 1.
    """
    if order not in (Order.VALUE, Order.ANALYTICITY_PROBE):
        raise IntegrandContractViolation(
            f"integrand supports order 0 (value) and 1 (analyticity probe), "
            f"got order={order}"
        )


def evaluate(f: Integrand, request: IntegrandRequest, param: Any = None):
    """
    Evaluate an integrand for a request.

    The result is always a complex enclosure in the request's context;
    ``None`` becomes the indeterminate enclosure.
    """
    ctx = request.ctx
    value = f(request.z, param, int(request.order), request.prec)
    if value is None:
        return indeterminate(ctx)
    return to_complex(ctx, value)


def as_integrand(func: Callable[[Any], Any]) -> Integrand:
    """
    Wrap a meromorphic expression as an integrand.

    ``func`` receives the enclosure ``z`` and returns an enclosure of the
    expression. It must be built from arithmetic and entire functions
    (``exp``, ``sin``, ``cos``, integer powers) so that it is holomorphic
    wherever it evaluates to a finite enclosure; both orders then share the
    same code path. Poles are detected because dividing by an interval
    containing zero yields an infinite enclosure. Expressions with branch
    cuts need the helpers in :mod:`ballquad.integrand._holomorphic`.

    Examples
    --------
    >>> f = as_integrand(lambda z: 1 / (1 + z * z))
    >>> integrate(f, None, 0, 1, 0, 1e-10)
    """

    @functools.wraps(func)
    def integrand(z, param, order, prec):
        check_order(order)
        return func(z)

    return integrand
