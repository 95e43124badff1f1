import mpmath
import pytest

from ballquad.enclosure import (
    interval_context,
    is_finite,
    radius,
    to_complex,
    upper,
)
from ballquad.examples import (
    CATALOGUE,
    Example,
    f_atanderiv,
    f_circle,
    f_cot,
    f_essing,
    f_essing2,
    f_exp,
    f_factorial1000,
    f_floor,
    f_gamma,
    f_gaussian,
    f_helfgott,
    f_lambertw,
    f_log_div1p,
    f_log_div1p_transformed,
    f_monster,
    f_rump,
    f_sech,
    f_sech3,
    f_sin,
    f_sin_plus_small,
    f_wolfram,
    f_zeta,
)
from ballquad.integrand import IntegrandContractViolation
from ballquad.integration import IntegrationOptions, integrate

INTEGRANDS = [
    f_sin,
    f_atanderiv,
    f_circle,
    f_rump,
    f_floor,
    f_helfgott,
    f_zeta,
    f_essing,
    f_essing2,
    f_factorial1000,
    f_gamma,
    f_sin_plus_small,
    f_exp,
    f_gaussian,
    f_monster,
    f_wolfram,
    f_sech,
    f_sech3,
    f_log_div1p,
    f_log_div1p_transformed,
    f_cot,
    f_lambertw,
]

with mpmath.workprec(200):
    PI = +mpmath.pi
    OMEGA = mpmath.lambertw(1).real
    LAMBERTW_0_1 = OMEGA + 1 / OMEGA - 2
    HALF_SQRT_PI = mpmath.sqrt(mpmath.pi) / 2


class TestCatalogue:
    def test_entries(self):
        assert len(CATALOGUE) == 23
        assert all(isinstance(example, Example) for example in CATALOGUE)
        assert CATALOGUE[1].description.startswith("4 int_0^1")

    @pytest.mark.parametrize(
        "f", INTEGRANDS, ids=[f.__name__ for f in INTEGRANDS]
    )
    def test_unsupported_order(self, ctx, f):
        with pytest.raises(IntegrandContractViolation):
            f(to_complex(ctx, "0.5"), None, 2, 64)

    @pytest.mark.parametrize(
        "f", INTEGRANDS, ids=[f.__name__ for f in INTEGRANDS]
    )
    def test_value_at_point(self, f):
        ctx = interval_context(64)
        z = to_complex(ctx, "1.25")
        value = f(z, None, 0, 64)
        assert value is not None


class TestIntegrands:
    def test_gamma_left_half_plane(self, ctx):
        assert f_gamma(to_complex(ctx, -0.5), None, 0, 64) is None

    def test_gamma_on_real_axis(self, ctx, encloses):
        assert encloses(f_gamma(to_complex(ctx, 2), None, 0, 64), 1)
        assert encloses(f_gamma(to_complex(ctx, 5), None, 0, 64), 24)

    def test_gamma_off_real_axis(self, ctx):
        value = f_gamma(to_complex(ctx, 2 + 1j), None, 0, 64)
        assert is_finite(value)
        assert upper(value.imag) > 0

    def test_essing_at_zero(self, ctx, encloses):
        z = to_complex(ctx, ctx.mpf([0, 0.1]))
        value = f_essing(z, None, 0, 64)
        assert encloses(value, 0)

    def test_floor_probe_on_integer(self, ctx):
        z = to_complex(ctx, ctx.mpf([0.5, 1.5]))
        assert not is_finite(f_floor(z, None, 1, 64))


class TestExamples:
    def test_pi(self, encloses):
        value = CATALOGUE[1](0, 1e-10)
        assert encloses(value, PI)
        assert radius(value) <= 4e-10

    def test_atan_tail(self, encloses):
        value = CATALOGUE[2](10, 1e-3)
        assert encloses(value, PI)

    def test_gaussian_tail(self, encloses):
        value = CATALOGUE[14](20, 1e-8)
        assert encloses(value, HALF_SQRT_PI)

    def test_zeta_residue(self, encloses):
        value = CATALOGUE[7](0, 1e-6)
        assert encloses(value, 1)
        assert radius(value) < 1e-5

    def test_sin_zero_count(self, encloses):
        value = CATALOGUE[21](0, 1e-4)
        assert encloses(value, 3)

    def test_options_are_forwarded(self):
        options = IntegrationOptions(eval_limit=1)
        with pytest.warns(UserWarning):
            CATALOGUE[0](0, 1e-10, options)

    def test_lambertw(self, encloses):
        value = integrate(f_lambertw, None, 0, 1, 0, 1e-6)
        assert encloses(value, LAMBERTW_0_1)
