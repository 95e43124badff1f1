import mpmath
import pytest

from ballquad.enclosure import (
    is_finite,
    lower,
    radius,
    to_complex,
    upper,
)
from ballquad.integrand import holomorphic_lambertw, lambertw_principal


class TestLambertwPrincipal:
    @pytest.mark.parametrize("x", [0, 1, 10, 1000])
    def test_real_points(self, ctx, x):
        res = lambertw_principal(to_complex(ctx, x))
        expected = mpmath.lambertw(x).real
        assert is_finite(res)
        assert radius(res) < 1e-15
        assert abs(lower(res.real) - expected) < 1e-14

    def test_complex_point(self, ctx):
        res = lambertw_principal(to_complex(ctx, 1 + 2j))
        expected = mpmath.lambertw(1 + 2j)
        assert radius(res) < 1e-15
        assert abs(lower(res.real) - expected.real) < 1e-14
        assert abs(lower(res.imag) - expected.imag) < 1e-14

    def test_small_region(self, ctx):
        z = ctx.mpc(ctx.mpf([0.99, 1.01]), ctx.mpf([-0.01, 0.01]))
        res = lambertw_principal(z)
        omega = mpmath.lambertw(1).real
        assert is_finite(res)
        assert lower(res.real) <= omega <= upper(res.real)


class TestHolomorphicLambertw:
    def test_probe_on_cut(self, ctx):
        assert not is_finite(holomorphic_lambertw(to_complex(ctx, -1), True))

    def test_region_touching_branch_point(self, ctx):
        z = to_complex(ctx, ctx.mpf([-0.4, -0.3]))
        assert not is_finite(holomorphic_lambertw(z, True))

    def test_real_interval_is_monotone_hull(self, ctx):
        z = to_complex(ctx, ctx.mpf([0, 1]))
        res = holomorphic_lambertw(z, False)
        omega = mpmath.lambertw(1).real
        assert is_finite(res)
        assert lower(res.real) <= 0
        assert upper(res.real) >= omega - 1e-15
        assert upper(res.real) - omega < 1e-12

    def test_upper_half_plane_probe(self, ctx):
        z = ctx.mpc(ctx.mpf([-1.755, -1.745]), ctx.mpf([0.545, 0.555]))
        res = holomorphic_lambertw(z, True)
        w = mpmath.lambertw(mpmath.mpc("-1.75", "0.55"))
        assert is_finite(res)
        assert lower(res.real) <= w.real <= upper(res.real)
        assert lower(res.imag) <= w.imag <= upper(res.imag)
