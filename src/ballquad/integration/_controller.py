"""Tolerance apportionment and resource accounting."""

import logging
from typing import Any, Optional

import mpmath

from ballquad.enclosure import magnitude_lower
from ballquad.integration._options import IntegrationOptions

logger = logging.getLogger(__name__)

CONVERGED = "converged"
EVAL_LIMIT = "eval_limit"
DEPTH_LIMIT = "depth_limit"
PRECISION = "precision"

# fraction of the tolerance kept back for rounding in the running sum
ROUNDING_RESERVE = mpmath.mpf(1) / 16


def _to_mpf(x: Any, name: str) -> mpmath.mpf:
    # goal and tol come from user input; upward rounding is not needed
    # because they only select how hard to work
    value = mpmath.mpf(x)
    if mpmath.isnan(value) or value < 0:
        raise ValueError(f"{name} must be non-negative, got {x!r}")
    return value


class AccuracyController:
    """
    Apportion the error budget of one integration over its segments.

    The effective tolerance is ``T = max(tol, 2**-goal * magnitude)``, where
    ``magnitude`` is the largest lower bound on the modulus of the sums
    observed so far (``goal == 0`` disables the relative part). One
    sixteenth of ``T`` is reserved for rounding. Each request for a local
    tolerance divides what is left of the budget evenly over the currently
    pending segments, so the radii of all segments accepted as converged
    never add up to more than ``15/16 T``.

    Parameters
    ----------
    goal : int
        Relative accuracy goal in bits.
    tol : float or mpmath.mpf
        Absolute tolerance.
    options : IntegrationOptions
        Resource limits.
    prec : int
        Working precision in bits; selects the default limits.

    Raises
    ------
    ValueError
        If ``goal`` or ``tol`` is negative.
    """

    def __init__(
        self, goal: int, tol: Any, options: IntegrationOptions, prec: int = 64
    ):
        if goal < 0:
            raise ValueError(f"goal must be non-negative, got {goal}")
        self.goal = int(goal)
        self.tol = _to_mpf(tol, "tol")
        self.options = options
        self.eval_limit = options.evaluation_limit(prec)
        self.depth_limit = options.subdivision_limit(prec)

        self.pending = 0
        self.num_eval = 0
        self.num_accepted = 0
        self.num_forced = 0
        self.max_depth = 0
        self.spent = mpmath.mpf(0)
        self.forced_error = mpmath.mpf(0)
        self.magnitude = mpmath.mpf(0)
        self.status: Optional[str] = None

    def tolerance(self) -> mpmath.mpf:
        """Effective absolute tolerance ``T``."""
        if self.goal == 0:
            return self.tol
        relative = mpmath.ldexp(self.magnitude, -self.goal)
        return max(self.tol, relative)

    def remaining(self) -> mpmath.mpf:
        usable = self.tolerance() * (1 - ROUNDING_RESERVE)
        return max(mpmath.mpf(0), usable - self.spent)

    def local_tolerance(self) -> mpmath.mpf:
        """Share of the remaining budget for the segment just popped."""
        return self.remaining() / max(1, self.pending)

    def observe(self, running_sum) -> None:
        """Record a magnitude bound for the relative part of ``T``."""
        if running_sum is None:
            return
        m = magnitude_lower(running_sum)
        if m > self.magnitude:
            self.magnitude = m

    def pushed(self, count: int = 1) -> None:
        self.pending += count

    def consumed(self, num_eval: int) -> None:
        self.num_eval += num_eval

    def evals_exhausted(self) -> bool:
        return self.num_eval >= self.eval_limit

    def depth_exceeded(self, depth: int) -> bool:
        return depth > self.depth_limit

    def accept(self, error: Any, depth: int) -> None:
        """Charge a converged segment against the budget."""
        self.pending -= 1
        self.num_accepted += 1
        self.max_depth = max(self.max_depth, depth)
        self.spent = mpmath.fadd(self.spent, error, prec=53, rounding="u")

    def force(self, error: Any, depth: int, reason: str) -> None:
        """
        Accept a segment because a limit stops its refinement.

        Its error is tallied separately and the integration is marked
        resource-exhausted with the first reason seen.
        """
        self.pending -= 1
        self.num_accepted += 1
        self.num_forced += 1
        self.max_depth = max(self.max_depth, depth)
        self.forced_error = mpmath.fadd(
            self.forced_error, error, prec=53, rounding="u"
        )
        if self.status is None:
            self.status = reason
            logger.debug("resource exhausted: %s", reason)

    @property
    def exhausted(self) -> bool:
        return self.status is not None
