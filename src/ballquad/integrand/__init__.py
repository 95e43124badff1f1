"""
Integrand contract and holomorphic extensions.

Contract:
    Integrand, IntegrandRequest, Order, check_order, evaluate, as_integrand

Holomorphic extensions of piecewise functions:
    holomorphic_abs, holomorphic_floor, holomorphic_sqrt, holomorphic_log,
    holomorphic_lambertw, lambertw_principal, on_branch_cut

Exceptions:
    IntegrandContractViolation
"""

from ballquad.integrand._contract import (
    Integrand,
    IntegrandRequest,
    Order,
    as_integrand,
    check_order,
    evaluate,
)
from ballquad.integrand._exceptions import IntegrandContractViolation
from ballquad.integrand._holomorphic import (
    holomorphic_abs,
    holomorphic_floor,
    holomorphic_log,
    holomorphic_sqrt,
    on_branch_cut,
)
from ballquad.integrand._lambertw import (
    holomorphic_lambertw,
    lambertw_principal,
)

__all__ = [
    # Contract
    "Integrand",
    "IntegrandRequest",
    "Order",
    "as_integrand",
    "check_order",
    "evaluate",
    # Holomorphic extensions
    "holomorphic_abs",
    "holomorphic_floor",
    "holomorphic_sqrt",
    "holomorphic_log",
    "holomorphic_lambertw",
    "lambertw_principal",
    "on_branch_cut",
    # Exceptions
    "IntegrandContractViolation",
]
