"""Test fixtures for ballquad tests."""

import mpmath
import pytest

from ballquad.enclosure import (
    interval_context,
    is_complex,
    is_finite,
    lower,
    to_real,
    upper,
)


def _encloses_real(outer, exact) -> bool:
    return lower(outer) <= lower(exact) and upper(exact) <= upper(outer)


def _encloses(value, exact) -> bool:
    """True if the enclosure ``value`` contains ``exact``.

    ``exact`` may be a Python or mpmath number, a decimal string or an
    interval; complex numbers are checked part by part.
    """
    if not is_finite(value):
        return False
    ctx = value.ctx
    if isinstance(exact, complex) or hasattr(exact, "_mpc_"):
        re, im = exact.real, exact.imag
    elif is_complex(exact):
        re, im = exact.real, exact.imag
    else:
        re, im = exact, 0
    if not is_complex(value):
        return im == 0 and _encloses_real(value, to_real(ctx, re))
    return _encloses_real(value.real, to_real(ctx, re)) and _encloses_real(
        value.imag, to_real(ctx, im)
    )


@pytest.fixture
def encloses():
    return _encloses


@pytest.fixture
def ctx():
    return interval_context(64)


@pytest.fixture(autouse=True)
def _restore_mp_precision():
    prec = mpmath.mp.prec
    yield
    mpmath.mp.prec = prec
