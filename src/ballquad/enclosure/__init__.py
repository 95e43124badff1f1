"""
Enclosure arithmetic.

Thin layer over ``mpmath`` interval contexts: precision-keyed contexts,
conversion, exact endpoint queries and the containment tests the integrand
contract needs.

Contexts:
    interval_context

Conversion:
    to_real, to_complex

Queries:
    lower, upper, midpoint, complex_midpoint, radius, magnitude_lower,
    magnitude_upper, is_finite, is_complex, is_real, contains_zero,
    contains_nonpositive, contains_int, is_nonnegative, is_negative,
    is_positive, strictly_contains

Construction:
    indeterminate, union, floor, error_interval, add_error, ipow

Formatting:
    accurate_digits, format_enclosure
"""

from ballquad.enclosure._ball import (
    accurate_digits,
    add_error,
    complex_midpoint,
    contains_int,
    contains_nonpositive,
    contains_zero,
    error_interval,
    floor,
    format_enclosure,
    indeterminate,
    interval_context,
    ipow,
    is_complex,
    is_finite,
    is_negative,
    is_nonnegative,
    is_positive,
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

__all__ = [
    "interval_context",
    "to_real",
    "to_complex",
    "lower",
    "upper",
    "midpoint",
    "complex_midpoint",
    "radius",
    "magnitude_lower",
    "magnitude_upper",
    "is_finite",
    "is_complex",
    "is_real",
    "contains_zero",
    "contains_nonpositive",
    "contains_int",
    "is_nonnegative",
    "is_negative",
    "is_positive",
    "strictly_contains",
    "indeterminate",
    "union",
    "floor",
    "error_interval",
    "add_error",
    "ipow",
    "accurate_digits",
    "format_enclosure",
]
