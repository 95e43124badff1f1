import mpmath
import pytest

from ballquad.enclosure import (
    interval_context,
    lower,
    radius,
    to_complex,
    upper,
)
from ballquad.integrand import as_integrand, check_order
from ballquad.integration import (
    add_tail_bound,
    contour_integral,
    divide_by_2pi_i,
    integrate_path,
    integrate_path_info,
    scale,
    winding_count,
)

SQUARE = [-1 - 1j, 1 - 1j, 1 + 1j, -1 + 1j]


def cot(z, param, order, prec):
    check_order(order)
    ctx = z.ctx
    return ctx.cos(z) / ctx.sin(z)


class TestIntegratePath:
    def test_matches_straight_line(self, encloses):
        """z^2 is entire, so the path integral only depends on endpoints."""
        ctx = interval_context(64)
        f = as_integrand(lambda z: z * z)
        value = integrate_path(f, None, [0, 1, 1 + 1j], 0, 1e-15)
        assert encloses(value, ctx.mpc(-2, 2) / 3)

    def test_too_few_vertices(self):
        f = as_integrand(lambda z: z)
        with pytest.raises(ValueError, match="vertices"):
            integrate_path(f, None, [0], 0, 1e-10)

    def test_repeated_vertex(self):
        f = as_integrand(lambda z: z)
        with pytest.raises(ValueError):
            integrate_path(f, None, [0, 1, 1], 0, 1e-10)

    def test_shared_budget(self):
        f = as_integrand(lambda z: z.ctx.exp(z))
        value, result = integrate_path_info(f, None, [0, 1, 2, 3], 0, 1e-10)
        assert result.converged
        assert radius(value) <= 1e-10
        assert result.num_segments >= 3


class TestContourIntegral:
    def test_entire_integrand_vanishes(self, encloses):
        f = as_integrand(lambda z: z.ctx.exp(z))
        value = contour_integral(f, None, SQUARE, 0, 1e-10)
        assert encloses(value, 0)
        assert radius(value) <= 1e-10

    def test_residue_of_simple_pole(self, encloses):
        f = as_integrand(lambda z: 3 / z)
        value = contour_integral(f, None, SQUARE, 0, 1e-10)
        assert encloses(divide_by_2pi_i(value), 3)

    def test_laurent_coefficient(self, encloses):
        """The coefficient of 1/z in exp(z)/z^3 is 1/2."""
        f = as_integrand(lambda z: z.ctx.exp(z) / (z * z * z))
        value = contour_integral(f, None, SQUARE, 0, 1e-10)
        assert encloses(divide_by_2pi_i(value), 0.5)


class TestWindingCount:
    def test_zeros_of_sin(self):
        vertices = [-4 - 1j, 4 - 1j, 4 + 1j, -4 + 1j]
        count, enclosure = winding_count(cot, None, vertices, 0, 1e-3)
        assert count == 3
        assert upper(enclosure.real) - lower(enclosure.real) < 1

    def test_no_zeros(self):
        vertices = [1 - 1j, 2 - 1j, 2 + 1j, 1 + 1j]
        count, _ = winding_count(cot, None, vertices, 0, 1e-3)
        assert count == 0


class TestPostProcessing:
    def test_divide_by_2pi_i(self, ctx, encloses):
        value = to_complex(ctx, ctx.mpc(0, 2 * ctx.pi))
        assert encloses(divide_by_2pi_i(value), 1)

    def test_scale(self, ctx, encloses):
        value = to_complex(ctx, 1 + 2j)
        assert encloses(scale(value, 2), 2 + 4j)
        assert encloses(scale(value, 1j), -2 + 1j)

    def test_add_tail_bound_real(self, ctx):
        value = add_tail_bound(to_complex(ctx, 1), mpmath.mpf("0.5"))
        assert lower(value.real) == 0.5
        assert upper(value.real) == 1.5
        assert lower(value.imag) == upper(value.imag) == 0

    def test_add_tail_bound_complex(self, ctx):
        value = add_tail_bound(
            to_complex(ctx, 1), mpmath.mpf("0.5"), imaginary=True
        )
        assert lower(value.imag) == -0.5
        assert upper(value.imag) == 0.5
