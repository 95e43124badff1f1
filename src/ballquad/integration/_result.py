"""Integration result container."""

from dataclasses import dataclass
from typing import Any

from ballquad.enclosure import format_enclosure


@dataclass
class IntegrationResult:
    """
    Outcome of an adaptive integration.

    Attributes
    ----------
    value : ivmpc
        Enclosure of the integral. Always sound, even when not converged.
    converged : bool
        True if the radius of ``value`` is within ``tolerance``.
    status : str
        ``"converged"``, or the limit that stopped refinement:
        ``"eval_limit"``, ``"depth_limit"`` or ``"precision"``.
    num_eval : int
        Number of integrand evaluations.
    num_segments : int
        Number of segments accepted into the sum.
    max_depth : int
        Deepest subdivision level reached.
    tolerance : mpmath.mpf
        Effective absolute tolerance at the end of the integration.
    message : str
        Human-readable summary.
    """

    value: Any
    converged: bool
    status: str
    num_eval: int
    num_segments: int
    max_depth: int
    tolerance: Any
    message: str = ""

    def __str__(self) -> str:
        return f"{format_enclosure(self.value)} ({self.message})"
