import warnings

import pytest

from ballquad.quadrature import (
    IntegrationError,
    QuadratureWarning,
    ResourceExhaustedWarning,
)


class TestExceptions:
    def test_hierarchy(self):
        assert issubclass(QuadratureWarning, UserWarning)
        assert issubclass(ResourceExhaustedWarning, QuadratureWarning)
        assert issubclass(IntegrationError, Exception)

    def test_resource_warning_is_catchable_as_quadrature_warning(self):
        with pytest.warns(QuadratureWarning):
            warnings.warn("limit", ResourceExhaustedWarning)
