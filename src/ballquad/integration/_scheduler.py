"""Adaptive subdivision loop."""

import dataclasses
import logging
from typing import Any, Iterable, List

import mpmath

from ballquad.enclosure import (
    format_enclosure,
    interval_context,
    is_finite,
    magnitude_upper,
    radius,
    to_complex,
)
from ballquad.integrand import Integrand
from ballquad.integration._controller import (
    CONVERGED,
    DEPTH_LIMIT,
    EVAL_LIMIT,
    PRECISION,
    AccuracyController,
)
from ballquad.integration._result import IntegrationResult
from ballquad.integration._segment import AcceptedSegment, Segment
from ballquad.quadrature import (
    SegmentEstimate,
    direct_estimate,
    estimate_segment,
)

logger = logging.getLogger(__name__)

# bits of the direct enclosure kept by the loose quadrature of each seed
ROUGH_BITS = 8


class Scheduler:
    """
    Refine segments until each one is enclosed within its share of the budget.

    The scheduler pops segments from an ordering strategy and, for each,
    tries the best enclosure it already carries, then Gauss-Legendre
    quadrature, and otherwise splits it at the midpoint. Both halves get
    their direct enclosures when they are created. It has no policy of its own: local tolerances
    and limits come from the controller, and the order of refinement from
    the ordering strategy.

    Parameters
    ----------
    f : Integrand
        Integrand.
    param : any
        Opaque integrand parameter.
    controller : AccuracyController
        Budget apportionment and resource accounting.
    ordering : StackOrder or WorstFirstOrder
        Pending segment container.
    prec : int
        Working precision in bits.

    Attributes
    ----------
    accepted : list of AcceptedSegment
        Segments folded into the sum, in acceptance order.
    """

    def __init__(
        self,
        f: Integrand,
        param: Any,
        controller: AccuracyController,
        ordering,
        prec: int,
    ):
        self.f = f
        self.param = param
        self.controller = controller
        self.ordering = ordering
        self.prec = prec
        self.ctx = interval_context(prec)
        self.deg_limit = controller.options.degree_limit(prec)
        self.verbose = controller.options.verbose
        self.total = to_complex(self.ctx, 0)
        self.accepted: List[AcceptedSegment] = []

    def _prepare(self, segment: Segment) -> Segment:
        """Attach the direct enclosure to a fresh segment."""
        estimate = direct_estimate(
            self.f, self.param, segment.a, segment.b, self.prec
        )
        self.controller.consumed(estimate.num_eval)
        return dataclasses.replace(
            segment, estimate=estimate, priority=estimate.error
        )

    def _rough(self, segment: Segment) -> Segment:
        """
        Tighten a seed's enclosure by quadrature at a loose tolerance.

        Direct enclosures of long segments often contain zero even when the
        integral does not, which would leave the relative tolerance at zero.
        """
        estimate = segment.estimate
        tol = mpmath.inf
        if is_finite(estimate.value):
            tol = mpmath.ldexp(magnitude_upper(estimate.value), -ROUGH_BITS)
        rough = estimate_segment(
            self.f,
            self.param,
            segment.a,
            segment.b,
            tol,
            self.deg_limit,
            self.prec,
            self.verbose,
        )
        self.controller.consumed(rough.num_eval)
        segment = dataclasses.replace(segment, degree=rough.degree)
        if rough.value is not None and rough.error < estimate.error:
            segment = dataclasses.replace(
                segment, estimate=rough, priority=rough.error
            )
        return segment

    def _observe_outlook(self) -> None:
        """Observe the running sum plus the enclosures still pending."""
        outlook = self.total
        for segment in self.ordering:
            if segment.estimate is None:
                return
            outlook = outlook + segment.estimate.value
        self.controller.observe(outlook)

    def _fold(
        self, segment: Segment, value, error, degree: int, forced: bool
    ) -> None:
        self.total = self.total + value
        self.accepted.append(
            AcceptedSegment(
                segment.a,
                segment.b,
                segment.depth,
                value,
                error,
                degree,
                forced,
            )
        )
        if self.verbose >= 2:
            logger.info(
                "%s segment at depth %d, degree %d: %s",
                "forced" if forced else "accepted",
                segment.depth,
                degree,
                format_enclosure(value, 10),
            )

    def _accept(self, segment: Segment, estimate: SegmentEstimate) -> None:
        self.controller.accept(estimate.error, segment.depth)
        self._fold(
            segment, estimate.value, estimate.error, estimate.degree, False
        )
        self.controller.observe(self.total)

    def _force(self, segment: Segment, estimate: SegmentEstimate, reason):
        self.controller.force(estimate.error, segment.depth, reason)
        self._fold(
            segment, estimate.value, estimate.error, estimate.degree, True
        )

    def seed(self, segments: Iterable[Segment]) -> None:
        """
        Queue the initial segments with their enclosures.

        The sum of the seed enclosures gives the first magnitude estimate
        for the relative tolerance. When a relative goal is set, each seed
        is first tightened by a loose quadrature so that this estimate is
        not lost to an enclosure containing zero.
        """
        seeds = []
        for segment in segments:
            segment = self._prepare(segment)
            if self.controller.goal > 0 and self.deg_limit > 0:
                segment = self._rough(segment)
            seeds.append(segment)
        self.controller.pushed(len(seeds))
        self.ordering.extend(seeds)
        self._observe_outlook()

    def _split(self, segment: Segment) -> None:
        left, right = (self._prepare(half) for half in segment.split())
        if self.verbose >= 2:
            logger.info(
                "split segment at depth %d after degree %d",
                segment.depth,
                segment.degree,
            )
        self.controller.pushed(1)
        self.ordering.extend([left, right])
        if self.controller.goal > 0 and self.controller.magnitude == 0:
            self._observe_outlook()

    def step(self) -> None:
        """Process one pending segment."""
        controller = self.controller
        segment = self.ordering.pop()
        if segment.estimate is None:
            segment = self._prepare(segment)
        best = segment.estimate

        if controller.evals_exhausted():
            self._force(segment, best, EVAL_LIMIT)
            return

        share = controller.local_tolerance()
        if best.error <= share:
            self._accept(segment, best)
            return

        if self.deg_limit > 0:
            estimate = estimate_segment(
                self.f,
                self.param,
                segment.a,
                segment.b,
                share,
                self.deg_limit,
                self.prec,
                self.verbose,
            )
            controller.consumed(estimate.num_eval)
            segment = dataclasses.replace(segment, degree=estimate.degree)
            if estimate.converged:
                self._accept(segment, estimate)
                return
            if estimate.value is not None and estimate.error < best.error:
                best = estimate

        if controller.depth_exceeded(segment.depth + 1):
            self._force(segment, best, DEPTH_LIMIT)
        elif not segment.separable:
            self._force(segment, best, PRECISION)
        else:
            self._split(segment)

    def run(self, segments: Iterable[Segment]) -> IntegrationResult:
        """Integrate over the concatenation of ``segments``."""
        self.seed(segments)
        while len(self.ordering):
            self.step()
        return self.result()

    def result(self) -> IntegrationResult:
        controller = self.controller
        tolerance = controller.tolerance()
        rad = radius(self.total)
        if controller.exhausted:
            status = controller.status
        elif rad <= tolerance:
            status = CONVERGED
        else:
            # rounding in the running sum exceeded the reserved share
            status = PRECISION
        converged = status == CONVERGED

        message = (
            f"{status}: {len(self.accepted)} segments, "
            f"{controller.num_eval} evaluations, max depth "
            f"{controller.max_depth}, radius {mpmath.nstr(rad, 5)}, "
            f"tolerance {mpmath.nstr(tolerance, 5)}"
        )
        if self.verbose >= 1:
            logger.info(message)
        else:
            logger.debug(message)

        return IntegrationResult(
            value=self.total,
            converged=converged,
            status=status,
            num_eval=controller.num_eval,
            num_segments=len(self.accepted),
            max_depth=controller.max_depth,
            tolerance=tolerance,
            message=message,
        )
