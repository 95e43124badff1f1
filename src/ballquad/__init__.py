"""ballquad: rigorous numerical integration with certified error bounds."""

from . import (
    enclosure,
    integrand,
    integration,
    quadrature,
)
from .integrand import IntegrandContractViolation, as_integrand
from .integration import (
    IntegrationOptions,
    IntegrationResult,
    integrate,
    integrate_info,
)

__all__ = [
    "enclosure",
    "integrand",
    "integration",
    "quadrature",
    "IntegrandContractViolation",
    "IntegrationOptions",
    "IntegrationResult",
    "as_integrand",
    "integrate",
    "integrate_info",
]

__version__ = "0.1.0"
