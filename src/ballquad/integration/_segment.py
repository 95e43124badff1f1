"""Pending subintervals of an integration path."""

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from ballquad.enclosure import contains_zero, to_complex


@dataclass(frozen=True)
class Segment:
    """
    Straight segment from ``a`` to ``b`` awaiting evaluation.

    Attributes
    ----------
    a, b : ivmpc
        Endpoints.
    depth : int
        Number of splits that produced this segment.
    priority : mpmath.mpf
        Error bound of the best known enclosure, used by worst-first
        ordering.
    estimate : SegmentEstimate, optional
        Best enclosure of the segment computed so far.
    degree : int
        Gauss-Legendre degree last tried on this segment or, for a fresh
        half, on its parent; 0 if none was tried.
    """

    a: Any
    b: Any
    depth: int = 0
    priority: Any = None
    estimate: Any = None
    degree: int = 0

    def split(
        self, priority: Optional[Any] = None
    ) -> Tuple["Segment", "Segment"]:
        """Halves at the midpoint, one level deeper."""
        mid = (self.a + self.b) / 2
        depth = self.depth + 1
        return (
            Segment(self.a, mid, depth, priority, degree=self.degree),
            Segment(mid, self.b, depth, priority, degree=self.degree),
        )

    @property
    def separable(self) -> bool:
        """True if the midpoint can be separated from both endpoints."""
        mid = (self.a + self.b) / 2
        for step in (mid - self.a, self.b - mid):
            if contains_zero(step.real) and contains_zero(step.imag):
                return False
        return True


@dataclass(frozen=True)
class AcceptedSegment:
    """
    A segment whose enclosure has been folded into the running sum.

    Attributes
    ----------
    a, b : ivmpc
        Endpoints.
    depth : int
        Subdivision depth.
    value : ivmpc
        Enclosure of the integral over the segment.
    error : mpmath.mpf
        Radius of ``value``.
    degree : int
        Gauss-Legendre degree used; 0 for a direct enclosure.
    forced : bool
        True if accepted because a limit was reached.
    """

    a: Any
    b: Any
    depth: int
    value: Any
    error: Any
    degree: int
    forced: bool = False


def make_segment(ctx, a, b) -> Segment:
    """
    Segment from ``a`` to ``b`` at depth 0.

    Raises
    ------
    ValueError
        If the enclosure of ``b - a`` contains zero.
    """
    a = to_complex(ctx, a)
    b = to_complex(ctx, b)
    step = b - a
    if contains_zero(step.real) and contains_zero(step.imag):
        raise ValueError("segment endpoints must differ (b - a contains 0)")
    return Segment(a, b)
