"""Exceptions for the integrand contract."""


class IntegrandContractViolation(Exception):
    """Raised when an integrand is asked for an order it cannot supply.

    This is a programming error in the caller, not a data-dependent failure;
    the integration engine never catches it.
    """

    pass
