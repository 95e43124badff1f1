import mpmath
import pytest

from ballquad.enclosure import is_finite, lower, radius, to_complex, upper
from ballquad.integrand import (
    holomorphic_abs,
    holomorphic_floor,
    holomorphic_log,
    holomorphic_sqrt,
    on_branch_cut,
)


def box(ctx, re, im):
    return ctx.mpc(ctx.mpf(re), ctx.mpf(im))


class TestOnBranchCut:
    def test_negative_axis(self, ctx):
        assert on_branch_cut(box(ctx, [-2, -1], [-0.1, 0.1]))
        assert on_branch_cut(box(ctx, [-1, 1], [0, 0]))

    def test_away_from_axis(self, ctx):
        assert not on_branch_cut(box(ctx, [-2, -1], [0.1, 0.2]))
        assert not on_branch_cut(box(ctx, [0.5, 1], [-0.1, 0.1]))


class TestHolomorphicAbs:
    def test_right_half_plane(self, ctx, encloses):
        z = to_complex(ctx, 2 + 1j)
        assert encloses(holomorphic_abs(z, True), 2 + 1j)

    def test_left_half_plane(self, ctx, encloses):
        z = to_complex(ctx, -2 + 1j)
        assert encloses(holomorphic_abs(z, True), 2 - 1j)

    def test_probe_across_imaginary_axis(self, ctx):
        z = box(ctx, [-1, 1], [0, 0])
        assert not is_finite(holomorphic_abs(z, True))

    def test_value_across_imaginary_axis(self, ctx):
        z = box(ctx, [-1, 2], [0, 0])
        res = holomorphic_abs(z, False)
        assert is_finite(res)
        assert lower(res.real) <= 0 and upper(res.real) >= 2


class TestHolomorphicFloor:
    def test_probe_between_integers(self, ctx):
        z = box(ctx, [0.25, 0.75], [-1, 1])
        res = holomorphic_floor(z, True)
        assert is_finite(res)
        assert lower(res.real) == 0 and upper(res.real) == 0

    @pytest.mark.parametrize("re", [[0.5, 1.5], [3, 3], [-0.5, 0.5]])
    def test_probe_containing_integer(self, ctx, re):
        assert not is_finite(holomorphic_floor(box(ctx, re, [0, 0]), True))

    def test_value_containing_integer(self, ctx):
        res = holomorphic_floor(box(ctx, [0.5, 2.5], [0, 0]), False)
        assert lower(res.real) == 0 and upper(res.real) == 2


class TestHolomorphicSqrt:
    def test_positive_real(self, ctx, encloses):
        res = holomorphic_sqrt(to_complex(ctx, 4), True)
        assert encloses(res, 2)
        assert radius(res) < 1e-18

    def test_negative_real_value(self, ctx, encloses):
        res = holomorphic_sqrt(to_complex(ctx, -4), False)
        assert encloses(res, 2j)

    def test_probe_on_cut(self, ctx):
        assert not is_finite(holomorphic_sqrt(to_complex(ctx, -4), True))

    def test_complex_point(self, ctx):
        res = holomorphic_sqrt(to_complex(ctx, 3 + 4j), True)
        assert radius(res) < 1e-15
        assert abs(mpmath.mpf(lower(res.real)) - 2) < 1e-15
        assert abs(mpmath.mpf(lower(res.imag)) - 1) < 1e-15

    def test_value_straddling_cut(self, ctx):
        z = box(ctx, [-2, -1], [-0.5, 0.5])
        res = holomorphic_sqrt(z, False)
        assert is_finite(res)
        # sqrt(-1.5 + 0.25i) and its conjugate both lie in the enclosure
        w = mpmath.sqrt(mpmath.mpc(-1.5, 0.25))
        for point in (w, mpmath.conj(w)):
            assert lower(res.real) <= point.real <= upper(res.real)
            assert lower(res.imag) <= point.imag <= upper(res.imag)


class TestHolomorphicLog:
    def test_positive_real(self, ctx, encloses):
        assert encloses(holomorphic_log(to_complex(ctx, 1), True), 0)

    def test_region_containing_zero(self, ctx):
        z = box(ctx, [-0.1, 0.1], [-0.1, 0.1])
        assert not is_finite(holomorphic_log(z, False))

    def test_probe_on_cut(self, ctx):
        assert not is_finite(holomorphic_log(to_complex(ctx, -1), True))

    def test_value_on_cut(self, ctx):
        res = holomorphic_log(to_complex(ctx, -1), False)
        assert is_finite(res)
        assert lower(res.imag) <= -mpmath.pi and upper(res.imag) >= mpmath.pi

    def test_upper_half_plane(self, ctx):
        res = holomorphic_log(to_complex(ctx, 1j), True)
        assert abs(mpmath.mpf(lower(res.imag)) - mpmath.pi / 2) < 1e-15
