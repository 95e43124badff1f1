"""Options for adaptive integration."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class IntegrationOptions:
    """
    Immutable resource limits and reporting settings for one integration.

    Parameters
    ----------
    deg_limit : int, optional
        Largest Gauss-Legendre degree used on a segment. ``None`` selects
        ``prec // 2 + 60``; 0 disables Gauss-Legendre so that only direct
        enclosures are used.
    eval_limit : int, optional
        Cap on integrand evaluations. ``None`` selects ``1000 * prec``.
        Segments still pending after the cap are accepted with the
        enclosures they already carry.
    depth_limit : int, optional
        Cap on subdivision depth. ``None`` selects ``2 * prec``.
    use_heap : bool
        Refine the segment with the largest error bound first instead of the
        most recently created one.
    verbose : int
        0 is silent, 1 logs a summary and 2 also logs each segment decision.

    Raises
    ------
    ValueError
        If a limit or ``verbose`` is negative.
    """

    deg_limit: Optional[int] = None
    eval_limit: Optional[int] = None
    depth_limit: Optional[int] = None
    use_heap: bool = False
    verbose: int = 0

    def __post_init__(self):
        for name in ("deg_limit", "eval_limit", "depth_limit"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")
        if self.verbose < 0:
            raise ValueError(f"verbose must be non-negative, got {self.verbose}")

    def degree_limit(self, prec: int) -> int:
        """Effective degree cap at working precision ``prec``."""
        if self.deg_limit is None:
            return prec // 2 + 60
        return self.deg_limit

    def evaluation_limit(self, prec: int) -> int:
        """Effective evaluation cap at working precision ``prec``."""
        if self.eval_limit is None:
            return 1000 * prec
        return self.eval_limit

    def subdivision_limit(self, prec: int) -> int:
        """Effective depth cap at working precision ``prec``."""
        if self.depth_limit is None:
            return 2 * prec
        return self.depth_limit
