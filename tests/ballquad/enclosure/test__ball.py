import mpmath
import pytest

from ballquad.enclosure import (
    accurate_digits,
    add_error,
    contains_int,
    contains_zero,
    error_interval,
    floor,
    format_enclosure,
    indeterminate,
    interval_context,
    ipow,
    is_complex,
    is_finite,
    is_real,
    lower,
    magnitude_lower,
    magnitude_upper,
    midpoint,
    radius,
    strictly_contains,
    to_complex,
    to_real,
    union,
    upper,
)


class TestIntervalContext:
    def test_cached_per_precision(self):
        assert interval_context(64) is interval_context(64)
        assert interval_context(64) is not interval_context(128)

    def test_precision_is_fixed(self):
        assert interval_context(100).prec == 100

    def test_invalid_precision(self):
        with pytest.raises(ValueError, match="prec"):
            interval_context(1)


class TestConversion:
    def test_real_number(self, ctx):
        z = to_complex(ctx, 3)
        assert is_complex(z)
        assert is_real(z)
        assert lower(z.real) == 3 and upper(z.real) == 3

    def test_python_complex(self, ctx):
        z = to_complex(ctx, 1.5 - 2j)
        assert midpoint(z.real) == 1.5
        assert midpoint(z.imag) == -2

    def test_decimal_string_is_enclosed(self, ctx):
        x = to_real(ctx, "0.1")
        assert 0 < radius(x) < mpmath.ldexp(1, -60)
        assert lower(x) < mpmath.mpf("0.11")
        assert upper(x) > mpmath.mpf("0.09")

    def test_interval_pair(self, ctx):
        z = to_complex(ctx, [1, 2])
        assert lower(z.real) == 1
        assert upper(z.real) == 2

    def test_foreign_context(self, ctx):
        other = interval_context(200)
        x = other.mpf(1) / 3
        z = to_complex(ctx, x)
        assert z.ctx is ctx
        assert lower(z.real) <= lower(x) and upper(x) <= upper(z.real)


class TestQueries:
    def test_radius_real(self, ctx):
        assert radius(ctx.mpf([1, 3])) == 1

    def test_radius_complex_adds_parts(self, ctx):
        z = ctx.mpc(ctx.mpf([0, 2]), ctx.mpf([0, 4]))
        assert radius(z) == 3

    def test_radius_of_point_is_zero(self, ctx):
        assert radius(to_complex(ctx, 2)) == 0

    def test_radius_of_indeterminate(self, ctx):
        assert radius(indeterminate(ctx)) == mpmath.inf

    def test_magnitude_bounds(self, ctx):
        z = ctx.mpc(ctx.mpf([3, 4]), ctx.mpf([-1, 2]))
        assert magnitude_lower(z) == 3
        assert magnitude_upper(z) >= mpmath.sqrt(4**2 + 2**2)

    def test_magnitude_lower_straddling_zero(self, ctx):
        assert magnitude_lower(ctx.mpf([-1, 1])) == 0

    def test_is_finite(self, ctx):
        assert is_finite(to_complex(ctx, 1))
        assert not is_finite(indeterminate(ctx))
        assert not is_finite(None)

    def test_contains_zero(self, ctx):
        assert contains_zero(ctx.mpf([-1, 1]))
        assert contains_zero(ctx.mpf([0, 1]))
        assert not contains_zero(ctx.mpf([1, 2]))

    def test_contains_int(self, ctx):
        assert contains_int(ctx.mpf([0.5, 1.5]))
        assert contains_int(ctx.mpf([2, 2]))
        assert not contains_int(ctx.mpf([0.25, 0.75]))
        assert not contains_int(ctx.mpf([-0.75, -0.25]))

    def test_strictly_contains(self, ctx):
        outer = ctx.mpf([0, 3])
        assert strictly_contains(outer, ctx.mpf([1, 2]))
        assert not strictly_contains(outer, ctx.mpf([0, 2]))
        assert not strictly_contains(outer, indeterminate(ctx).real)


class TestConstruction:
    def test_floor_is_exact(self, ctx):
        x = floor(ctx.mpf([-1.5, 2.5]))
        assert lower(x) == -2
        assert upper(x) == 2

    def test_union(self, ctx):
        z = union(to_complex(ctx, 1 + 1j), to_complex(ctx, -2 + 3j))
        assert lower(z.real) == -2 and upper(z.real) == 1
        assert lower(z.imag) == 1 and upper(z.imag) == 3

    def test_error_interval_rounds_up(self, ctx):
        e = error_interval(ctx, ctx.mpf(1) / 3)
        assert upper(e) >= mpmath.mpf(1) / 3
        assert lower(e) == -upper(e)

    def test_add_error_real_only(self, ctx):
        z = add_error(to_complex(ctx, 1 + 1j), 0.5, imaginary=False)
        assert lower(z.real) == 0.5 and upper(z.real) == 1.5
        assert radius(z.imag) == 0

    def test_add_error_both_parts(self, ctx):
        z = add_error(to_complex(ctx, 0), 0.25)
        assert radius(z) == 0.5

    def test_ipow(self, ctx):
        z = to_complex(ctx, 1j)
        assert midpoint(ipow(z, 2).real) == -1
        assert midpoint(ipow(ctx.mpf(3), 5)) == 243
        assert midpoint(ipow(ctx.mpf(3), 0)) == 1

    def test_ipow_negative_exponent(self, ctx):
        with pytest.raises(ValueError):
            ipow(ctx.mpf(2), -1)


class TestFormatEnclosure:
    def test_real(self, ctx):
        s = format_enclosure(to_complex(ctx, ctx.mpf([1, 3])), 5)
        assert s.startswith("[2.0 +/-")

    def test_complex(self, ctx):
        s = format_enclosure(to_complex(ctx, 1 + 2j), 5)
        assert s.endswith("j")
        assert "+/-" in s

    def test_indeterminate(self, ctx):
        assert "inf" in format_enclosure(indeterminate(ctx))

    def test_digits_follow_radius(self, ctx):
        x = ctx.mpf(["3.14159", "3.14160"])
        s = format_enclosure(to_complex(ctx, x), 50)
        mid = s[1 : s.index(" +/-")]
        assert mid.startswith("3.141")
        assert len(mid.replace(".", "")) <= 7

    def test_exact_uses_requested_digits(self, ctx):
        s = format_enclosure(to_complex(ctx, "0.5"), 5)
        assert s.startswith("[0.5 +/-")


class TestAccurateDigits:
    def test_exact(self, ctx):
        assert accurate_digits(ctx.mpf(2)) == 0

    def test_from_radius(self, ctx):
        assert accurate_digits(ctx.mpf([199, 201])) == 3
        assert accurate_digits(ctx.mpf(["4.999", "5.001"])) == 4

    def test_radius_exceeds_midpoint(self, ctx):
        assert accurate_digits(ctx.mpf([-1, 3])) == 1
