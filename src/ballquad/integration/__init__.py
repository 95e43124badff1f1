"""
Rigorous adaptive integration.

Integration along a segment:
    integrate, integrate_info, integrate_segments

Paths and contours:
    integrate_path, integrate_path_info, contour_integral, winding_count,
    divide_by_2pi_i, scale, add_tail_bound

Configuration and results:
    IntegrationOptions, IntegrationResult

Engine components:
    Scheduler, AccuracyController, StackOrder, WorstFirstOrder,
    ordering_for, Segment, AcceptedSegment, make_segment
"""

from ballquad.integration._contour import (
    add_tail_bound,
    contour_integral,
    divide_by_2pi_i,
    integrate_path,
    integrate_path_info,
    scale,
    winding_count,
)
from ballquad.integration._controller import AccuracyController
from ballquad.integration._integrate import (
    integrate,
    integrate_info,
    integrate_segments,
)
from ballquad.integration._options import IntegrationOptions
from ballquad.integration._queue import (
    StackOrder,
    WorstFirstOrder,
    ordering_for,
)
from ballquad.integration._result import IntegrationResult
from ballquad.integration._scheduler import Scheduler
from ballquad.integration._segment import (
    AcceptedSegment,
    Segment,
    make_segment,
)

__all__ = [
    # Segment integration
    "integrate",
    "integrate_info",
    "integrate_segments",
    # Paths and contours
    "integrate_path",
    "integrate_path_info",
    "contour_integral",
    "winding_count",
    "divide_by_2pi_i",
    "scale",
    "add_tail_bound",
    # Configuration and results
    "IntegrationOptions",
    "IntegrationResult",
    # Engine components
    "Scheduler",
    "AccuracyController",
    "StackOrder",
    "WorstFirstOrder",
    "ordering_for",
    "Segment",
    "AcceptedSegment",
    "make_segment",
]
