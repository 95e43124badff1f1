"""
Certified Gauss-Legendre quadrature on a single segment.

Quadrature rule classes:
    GaussLegendre, gauss_legendre

Node/weight computation:
    gauss_legendre_nodes_weights, polished_nonnegative_nodes,
    certified_gauss_legendre

Segment evaluation:
    SegmentEstimate, direct_estimate, estimate_segment, ellipse_region,
    remainder_bound, candidate_degrees, probe_analyticity

Exceptions:
    QuadratureWarning, ResourceExhaustedWarning, IntegrationError
"""

from ballquad.quadrature._evaluator import (
    SegmentEstimate,
    candidate_degrees,
    direct_estimate,
    ellipse_region,
    estimate_segment,
    probe_analyticity,
    remainder_bound,
)
from ballquad.quadrature._exceptions import (
    IntegrationError,
    QuadratureWarning,
    ResourceExhaustedWarning,
)
from ballquad.quadrature._nodes import (
    certified_gauss_legendre,
    gauss_legendre_nodes_weights,
    polished_nonnegative_nodes,
)
from ballquad.quadrature._rules import GaussLegendre, gauss_legendre

__all__ = [
    # Rule classes
    "GaussLegendre",
    "gauss_legendre",
    # Node/weight computation
    "gauss_legendre_nodes_weights",
    "polished_nonnegative_nodes",
    "certified_gauss_legendre",
    # Segment evaluation
    "SegmentEstimate",
    "direct_estimate",
    "estimate_segment",
    "ellipse_region",
    "remainder_bound",
    "candidate_degrees",
    "probe_analyticity",
    # Exceptions
    "QuadratureWarning",
    "ResourceExhaustedWarning",
    "IntegrationError",
]
