"""Exceptions for quadrature integration."""


class QuadratureWarning(UserWarning):
    """Warning for quadrature issues (e.g., a resource limit hit)."""

    pass


class ResourceExhaustedWarning(QuadratureWarning):
    """Warning when an evaluation, depth or precision limit stops refinement.

    The returned enclosure is still correct but may be wider than the
    requested tolerance.
    """

    pass


class IntegrationError(Exception):
    """Error when a quadrature rule cannot be certified."""

    pass
